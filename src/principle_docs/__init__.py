"""
Design-principles document checker.

Parses a markdown write-up of numbered design principles (such as SOLID)
into an immutable model, checks its structure, and reports the findings.

Example:
    >>> from principle_docs import parse, validate, report
    >>> report(validate(parse(text)))
    'OK'
"""

__version__ = "0.1.0"

from principle_docs.checker import CheckResult, DocumentChecker
from principle_docs.config import CheckerConfig, ParseConfig, ValidationConfig
from principle_docs.errors import (
    ConfigError,
    MalformedInputError,
    PrincipleDocsError,
    SourceReadError,
)
from principle_docs.model import (
    Document,
    MarkdownParser,
    Principle,
    Reference,
    parse,
    parse_file,
    read_source,
)
from principle_docs.reporter import render_markdown, report, report_json
from principle_docs.validator import Validator, Violation, validate

__all__ = [
    "CheckResult",
    "CheckerConfig",
    "ConfigError",
    "Document",
    "DocumentChecker",
    "MalformedInputError",
    "MarkdownParser",
    "ParseConfig",
    "Principle",
    "PrincipleDocsError",
    "Reference",
    "SourceReadError",
    "ValidationConfig",
    "Validator",
    "Violation",
    "parse",
    "parse_file",
    "read_source",
    "render_markdown",
    "report",
    "report_json",
    "validate",
    "__version__",
]
