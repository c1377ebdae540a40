"""
Document model and markdown parser.

Parses a design-principles write-up (numbered headings, a blockquoted
definition per principle, fenced code samples, a reference list) into an
immutable Document.

Example:
    >>> from principle_docs.model import parse
    >>> doc = parse(text)
    >>> [p.abbreviation for p in doc.principles]
    ['S', 'O', 'L', 'I', 'D']
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from principle_docs.config import ParseConfig
from principle_docs.errors import MalformedInputError, SourceReadError


@dataclass(frozen=True)
class Principle:
    """One named design rule with its definition and code samples.

    Attributes:
        name: Principle name with numbering and abbreviation markers removed
        abbreviation: Single uppercase letter identifying the principle
        definition: Text of the first blockquote in the section
        examples: Fenced code block contents, in document order
        languages: Info string of each code block ("" when absent)
        number: Heading number, if parsed from text
        line: 1-based line of the heading, if parsed from text
    """

    name: str
    abbreviation: str
    definition: str = ""
    examples: tuple[str, ...] = ()
    languages: tuple[str, ...] = ()
    number: int | None = None
    line: int | None = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Principle name must be non-empty")
        if len(self.abbreviation) != 1 or not self.abbreviation.isalpha():
            raise ValueError(
                f"Principle abbreviation must be a single letter, got {self.abbreviation!r}"
            )
        object.__setattr__(self, "abbreviation", self.abbreviation.upper())
        object.__setattr__(self, "examples", tuple(self.examples))

        languages = tuple(self.languages) or ("",) * len(self.examples)
        if len(languages) != len(self.examples):
            raise ValueError("languages must have one entry per example")
        object.__setattr__(self, "languages", languages)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "abbreviation": self.abbreviation,
            "definition": self.definition,
            "examples": list(self.examples),
            "languages": list(self.languages),
            "number": self.number,
            "line": self.line,
        }


@dataclass(frozen=True)
class Reference:
    """A labelled link from the document's reference list."""

    label: str
    url: str

    def to_dict(self) -> dict[str, str]:
        return {"label": self.label, "url": self.url}


@dataclass(frozen=True)
class Document:
    """Ordered principles plus the reference list.

    A Document always holds at least one principle. Duplicate abbreviations
    are allowed here so that the validator can report them.
    """

    principles: tuple[Principle, ...]
    references: tuple[Reference, ...] = ()
    title: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "principles", tuple(self.principles))
        object.__setattr__(self, "references", tuple(self.references))
        if not self.principles:
            raise MalformedInputError("Document contains no principles")

    @property
    def names(self) -> list[str]:
        return [p.name for p in self.principles]

    @property
    def abbreviations(self) -> str:
        """Abbreviations concatenated in document order, e.g. 'SOLID'."""
        return "".join(p.abbreviation for p in self.principles)

    def get(self, abbreviation: str) -> Principle | None:
        """Return the first principle with the given abbreviation."""
        wanted = abbreviation.upper()
        return next((p for p in self.principles if p.abbreviation == wanted), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "principles": [p.to_dict() for p in self.principles],
            "references": [r.to_dict() for r in self.references],
        }


# Markdown patterns
HEADING_RE = re.compile(r"^ {0,3}(#{1,6})[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$")
NUMBERED_RE = re.compile(r"^(\d+)[.)](?:\s+|$)(.*)$")
LETTER_MARKER_RE = re.compile(r"^([A-Za-z])(?:\s*:\s*|\s+[-–—]\s*|[-–—]\s+)(.+)$")
ACRONYM_RE = re.compile(r"\s*\(([A-Z]{2,})\)\s*$")
FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*([^`\s]*)")
BLOCKQUOTE_RE = re.compile(r"^ {0,3}>[ \t]?(.*)$")
LINK_RE = re.compile(r"\[([^\]]+)\]\(\s*<?([^)\s>]+)>?(?:\s+\"[^\"]*\")?\s*\)")


@dataclass
class _SectionBuilder:
    """Mutable accumulator for one principle section while scanning."""

    number: int
    name: str
    abbreviation: str
    line: int
    level: int
    definition_parts: list[str] = field(default_factory=list)
    definition_seen: bool = False
    in_definition: bool = False
    examples: list[str] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)

    def build(self) -> Principle:
        if not self.definition_seen:
            raise MalformedInputError(
                f"Principle '{self.name}' lacks a definition line",
                line=self.line,
            )
        return Principle(
            name=self.name,
            abbreviation=self.abbreviation,
            definition=" ".join(p for p in self.definition_parts if p),
            examples=tuple(self.examples),
            languages=tuple(self.languages),
            number=self.number,
            line=self.line,
        )


class MarkdownParser:
    """Parse a principles write-up into a Document.

    Manifesto:
        The document is the source of truth. Parsing is a pure function
        from text to an immutable model; anything structurally missing
        fails loudly with the line it was found on.

    Architecture:
        ```
        text.splitlines()
              │
              ▼
        line scanner ──► fence?      ──► collect code sample
              │          heading?    ──► close section / open principle / open references
              │          blockquote? ──► collect definition
              │          link?       ──► collect reference (references section only)
              ▼
        _SectionBuilder.build() ──► Principle
              │
              ▼
        Document(principles, references, title)
        ```

    Guardrails:
        - Headings and blockquotes inside code fences are code, not structure
        - The first numbered heading fixes the principle heading level;
          deeper numbered headings are subsections of the current principle
    """

    def __init__(self, config: ParseConfig | None = None):
        self.config = config or ParseConfig()

    def parse(self, text: str) -> Document:
        """Parse markdown text into a Document.

        Args:
            text: Full document text

        Returns:
            Document instance

        Raises:
            MalformedInputError: If the text is empty, has no numbered
                headings, a principle has no definition line, or a code
                fence is never closed
        """
        if not text or not text.strip():
            raise MalformedInputError("Input text is empty")

        principles: list[Principle] = []
        references: list[Reference] = []
        title: str | None = None

        current: _SectionBuilder | None = None
        principle_level: int | None = None
        references_level: int | None = None

        fence: str | None = None
        fence_line = 0
        fence_lang = ""
        fence_buffer: list[str] = []

        for lineno, line in enumerate(text.splitlines(), start=1):
            if fence is not None:
                if self._closes_fence(line, fence):
                    if current is not None:
                        current.examples.append("\n".join(fence_buffer))
                        current.languages.append(fence_lang)
                    fence = None
                    fence_buffer = []
                else:
                    fence_buffer.append(line)
                continue

            fence_match = FENCE_RE.match(line)
            if fence_match:
                fence = fence_match.group(1)
                fence_lang = fence_match.group(2)
                fence_line = lineno
                if current is not None:
                    current.in_definition = False
                continue

            heading_match = HEADING_RE.match(line)
            if heading_match:
                level = len(heading_match.group(1))
                heading_text = heading_match.group(2).strip()

                if self._is_principle_heading(heading_text, level, principle_level):
                    if current is not None:
                        principles.append(current.build())
                    principle_level = level
                    references_level = None
                    current = self._open_section(heading_text, level, lineno)
                    continue

                if self.config.is_reference_heading(heading_text):
                    if current is not None:
                        principles.append(current.build())
                        current = None
                    references_level = level
                    continue

                if current is not None and level <= current.level:
                    principles.append(current.build())
                    current = None
                if references_level is not None and level <= references_level:
                    references_level = None
                if level == 1 and title is None and not principles and current is None:
                    title = heading_text
                if current is not None:
                    current.in_definition = False
                continue

            if references_level is not None:
                for label, url in LINK_RE.findall(line):
                    references.append(Reference(label=label.strip(), url=url.strip()))
                continue

            if current is None:
                continue

            quote_match = BLOCKQUOTE_RE.match(line)
            if quote_match and (current.in_definition or not current.definition_seen):
                current.definition_seen = True
                current.in_definition = True
                current.definition_parts.append(quote_match.group(1).strip())
            elif current.in_definition and line.strip() and current.definition_parts[-1]:
                # Lazy continuation: an unmarked line continues the quoted paragraph
                current.definition_parts.append(line.strip())
            else:
                current.in_definition = False

        if fence is not None:
            raise MalformedInputError("Unterminated code fence", line=fence_line)

        if current is not None:
            principles.append(current.build())

        if not principles:
            raise MalformedInputError("No numbered principle headings found")

        return Document(
            principles=tuple(principles),
            references=tuple(references),
            title=title,
        )

    def _is_principle_heading(
        self, heading_text: str, level: int, principle_level: int | None
    ) -> bool:
        if not NUMBERED_RE.match(heading_text):
            return False
        if not self.config.min_heading_level <= level <= self.config.max_heading_level:
            return False
        return principle_level is None or level == principle_level

    def _open_section(self, heading_text: str, level: int, lineno: int) -> _SectionBuilder:
        number, abbreviation, name = self._split_heading(heading_text, lineno)
        return _SectionBuilder(
            number=number,
            name=name,
            abbreviation=abbreviation,
            line=lineno,
            level=level,
        )

    def _split_heading(self, heading_text: str, lineno: int) -> tuple[int, str, str]:
        """Split '1. S - Single Responsibility (SRP)' into number, letter, name."""
        match = NUMBERED_RE.match(heading_text)
        number = int(match.group(1))
        rest = match.group(2).strip().strip("*_`").strip()

        abbreviation = ""
        marker = LETTER_MARKER_RE.match(rest)
        if marker:
            abbreviation = marker.group(1)
            rest = marker.group(2).strip()

        acronym = ACRONYM_RE.search(rest)
        if acronym:
            abbreviation = abbreviation or acronym.group(1)[0]
            rest = rest[: acronym.start()]

        name = rest.strip().strip("*_`").strip()
        if not name:
            raise MalformedInputError("Principle heading has no name", line=lineno)

        if not abbreviation:
            abbreviation = next((ch for ch in name if ch.isalpha()), "")
        if not abbreviation:
            raise MalformedInputError(
                f"Cannot derive an abbreviation from heading '{heading_text}'",
                line=lineno,
            )

        return number, abbreviation.upper(), name

    def _closes_fence(self, line: str, fence: str) -> bool:
        stripped = line.strip()
        if not stripped or stripped[0] != fence[0]:
            return False
        return len(stripped) >= len(fence) and set(stripped) == {fence[0]}


def parse(text: str, config: ParseConfig | None = None) -> Document:
    """Parse markdown text into a Document.

    Args:
        text: Full document text
        config: Optional parse settings

    Returns:
        Document instance
    """
    return MarkdownParser(config).parse(text)


def read_source(path: Path) -> str:
    """Read a document as UTF-8 text.

    Raises:
        SourceReadError: If the file cannot be read or decoded
    """
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(str(path), cause=e) from e


def parse_file(path: Path, config: ParseConfig | None = None) -> Document:
    """Read a UTF-8 file and parse it.

    Raises:
        SourceReadError: If the file cannot be read or decoded
        MalformedInputError: If the content is not a principles document
    """
    return parse(read_source(path), config)
