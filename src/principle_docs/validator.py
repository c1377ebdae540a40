"""
Structural validation for parsed documents.

Validation never raises: every finding is returned as a Violation so that
the reporter can render all of them at once.

Example:
    >>> violations = validate(parse(text))
    >>> [v.rule_violated for v in violations]
    ['missing example']
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from principle_docs.config import ValidationConfig
from principle_docs.model import Document, Principle

MISSING_DEFINITION = "missing definition"
MISSING_EXAMPLE = "missing example"
DUPLICATE_ABBREVIATION = "duplicate abbreviation"
UNEXPECTED_ABBREVIATION = "unexpected abbreviation"
UNEXPECTED_PRINCIPLE_COUNT = "unexpected principle count"
MISSING_PRINCIPLE = "missing principle"
MISSING_REFERENCES = "missing references"

# Principle name used for findings about the document as a whole
DOCUMENT_SCOPE = "<document>"


@dataclass(frozen=True)
class Violation:
    """A structural inconsistency found in a Document."""

    principle_name: str
    rule_violated: str

    def to_dict(self) -> dict[str, str]:
        return {
            "principle_name": self.principle_name,
            "rule_violated": self.rule_violated,
        }


PrincipleRule = Callable[[Principle, set[str], ValidationConfig], str | None]
DocumentRule = Callable[[Document, ValidationConfig], list[Violation]]


def _check_definition(principle: Principle, seen: set[str], config: ValidationConfig) -> str | None:
    if not principle.definition.strip():
        return MISSING_DEFINITION
    return None


def _check_examples(principle: Principle, seen: set[str], config: ValidationConfig) -> str | None:
    if config.require_examples and not any(e.strip() for e in principle.examples):
        return MISSING_EXAMPLE
    return None


def _check_duplicate(principle: Principle, seen: set[str], config: ValidationConfig) -> str | None:
    # Only later occurrences are reported, so a repeated letter yields one finding.
    if principle.abbreviation in seen:
        return DUPLICATE_ABBREVIATION
    return None


def _check_expected_letter(
    principle: Principle, seen: set[str], config: ValidationConfig
) -> str | None:
    expected = config.expected_abbreviations
    if expected and principle.abbreviation not in expected:
        return UNEXPECTED_ABBREVIATION
    return None


def _check_count(document: Document, config: ValidationConfig) -> list[Violation]:
    expected = config.expected_principles
    if expected is not None and len(document.principles) != expected:
        return [Violation(DOCUMENT_SCOPE, UNEXPECTED_PRINCIPLE_COUNT)]
    return []


def _check_missing_letters(document: Document, config: ValidationConfig) -> list[Violation]:
    expected = config.expected_abbreviations
    if not expected:
        return []
    present = set(document.abbreviations)
    missing = dict.fromkeys(letter for letter in expected if letter not in present)
    return [Violation(letter, MISSING_PRINCIPLE) for letter in missing]


def _check_references(document: Document, config: ValidationConfig) -> list[Violation]:
    if config.require_references and not document.references:
        return [Violation(DOCUMENT_SCOPE, MISSING_REFERENCES)]
    return []


# Evaluation order determines output order
PRINCIPLE_RULES: list[PrincipleRule] = [
    _check_definition,
    _check_examples,
    _check_duplicate,
    _check_expected_letter,
]

DOCUMENT_RULES: list[DocumentRule] = [
    _check_count,
    _check_missing_letters,
    _check_references,
]


class Validator:
    """Enforce structural invariants on a Document.

    Manifesto:
        Findings are data. A document with five problems produces five
        violations in a stable order, and a compliant document produces
        none.

    Features:
        - Non-empty definition for every principle
        - At least one code sample per principle (configurable)
        - Unique abbreviations, each repeat reported once
        - Optional expected count, expected letters and references checks
    """

    def __init__(self, config: ValidationConfig | None = None):
        self.config = config or ValidationConfig()

    def validate(self, document: Document) -> list[Violation]:
        """Check a document against all rules.

        Args:
            document: Parsed document

        Returns:
            Violations in document order; empty when compliant
        """
        violations: list[Violation] = []
        seen: set[str] = set()

        for principle in document.principles:
            for rule in PRINCIPLE_RULES:
                outcome = rule(principle, seen, self.config)
                if outcome is not None:
                    violations.append(Violation(principle.name, outcome))
            seen.add(principle.abbreviation)

        for document_rule in DOCUMENT_RULES:
            violations.extend(document_rule(document, self.config))

        return violations


def validate(document: Document, config: ValidationConfig | None = None) -> list[Violation]:
    """Check a document against all rules. See Validator.validate."""
    return Validator(config).validate(document)


def summarize(violations: Sequence[Violation]) -> dict[str, Any]:
    """Count violations per rule, in first-seen order."""
    counts: dict[str, int] = {}
    for violation in violations:
        counts[violation.rule_violated] = counts.get(violation.rule_violated, 0) + 1
    return {"total": len(violations), "by_rule": counts}
