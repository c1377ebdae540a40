"""
Document checker.

Coordinates the check pipeline: read the source, parse it, validate the
model, and render the report.

Example:
    >>> checker = DocumentChecker()
    >>> result = checker.check_file(Path("SOLID.md"))
    >>> result.ok
    True
    >>> result.report
    'OK'
"""

from dataclasses import dataclass
from pathlib import Path

import structlog

from principle_docs.config import CheckerConfig
from principle_docs.model import Document, MarkdownParser, read_source
from principle_docs.reporter import report
from principle_docs.validator import Validator, Violation

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CheckResult:
    """Outcome of checking one document."""

    document: Document
    violations: tuple[Violation, ...]
    report: str

    @property
    def ok(self) -> bool:
        return not self.violations

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


class DocumentChecker:
    """Run parse, validate and report over a source document.

    Manifesto:
        One call checks one document. Malformed input is raised to the
        caller; violations are returned as data in the result.

    Architecture:
        ```
        DocumentChecker
              │
              ├──► MarkdownParser.parse(text) ──► Document
              │
              ├──► Validator.validate(document) ──► [Violation]
              │
              └──► report(violations) ──► "OK" | one line per violation
        ```

    Guardrails:
        - Do NOT catch MalformedInputError here
          ✅ The CLI maps it to exit code 2
    """

    def __init__(self, config: CheckerConfig | None = None):
        self.config = config or CheckerConfig()
        self.parser = MarkdownParser(self.config.parse)
        self.validator = Validator(self.config.validation)

    def check_text(self, text: str) -> CheckResult:
        """Check a document given as text."""
        document = self.parser.parse(text)
        logger.debug(
            "document_parsed",
            principles=len(document.principles),
            references=len(document.references),
            abbreviations=document.abbreviations,
        )
        return self._finish(document)

    def check_file(self, path: Path) -> CheckResult:
        """Read and check a document file.

        Raises:
            SourceReadError: If the file cannot be read
            MalformedInputError: If the file is not a principles document
        """
        path = Path(path)
        logger.debug("document_reading", path=str(path))
        document = self.parser.parse(read_source(path))
        logger.debug(
            "document_parsed",
            path=str(path),
            principles=len(document.principles),
            references=len(document.references),
            abbreviations=document.abbreviations,
        )
        return self._finish(document)

    def _finish(self, document: Document) -> CheckResult:
        violations = self.validator.validate(document)
        if violations:
            logger.info("document_validated", ok=False, violations=len(violations))
        else:
            logger.debug("document_validated", ok=True, violations=0)
        return CheckResult(
            document=document,
            violations=tuple(violations),
            report=report(violations),
        )
