"""
Structured error types for principle-docs.

Every failure the library raises is a PrincipleDocsError carrying a category
so the CLI can map it to an exit code and a log event. Validation findings
are NOT errors: they are returned as Violation data by the validator.

Architecture:
    ::

        PrincipleDocsError (category, message, cause)
              │
              ├── MalformedInputError   (PARSE)   line number when known
              ├── SourceReadError       (SOURCE)  wraps OSError / UnicodeDecodeError
              └── ConfigError           (CONFIG)  bad YAML or unknown keys

Usage:
    from principle_docs.errors import MalformedInputError

    try:
        document = parse(text)
    except MalformedInputError as e:
        print(f"line {e.line}: {e.message}")
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories used for classification and exit-code routing."""

    PARSE = "PARSE"
    SOURCE = "SOURCE"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"


class PrincipleDocsError(Exception):
    """
    Base exception for all principle-docs errors.

    Subclasses set `default_category`; callers may override it. When wrapping
    another exception pass it as `cause=` so it is chained as __cause__.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


class MalformedInputError(PrincipleDocsError):
    """
    Input text does not have the expected heading/definition structure.

    Raised by the parser and never recovered inside the library.
    """

    default_category = ErrorCategory.PARSE

    def __init__(self, message: str, *, line: int | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.line = line

    def __str__(self) -> str:
        if self.line is not None:
            return f"line {self.line}: {self.message}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.line is not None:
            result["line"] = self.line
        return result


class SourceReadError(PrincipleDocsError):
    """The source document could not be read or decoded."""

    default_category = ErrorCategory.SOURCE

    def __init__(self, path: str, message: str | None = None, **kwargs: Any):
        self.path = path
        super().__init__(message or f"Cannot read source document: {path}", **kwargs)


class ConfigError(PrincipleDocsError):
    """Configuration is invalid. Never recoverable, the file must be fixed."""

    default_category = ErrorCategory.CONFIG
