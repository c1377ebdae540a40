"""
Structured logging for principle-docs.

Every module logs through ``structlog.get_logger(__name__)``. Output goes to
stderr, never stdout: the ``check`` command prints exactly its report there.

Environment:
- PRINCIPLE_DOCS_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR (default: WARNING)
- PRINCIPLE_DOCS_LOG_FORMAT: json | console (default: console)

Usage:
    from principle_docs.logging import configure_logging
    configure_logging(level="DEBUG", format="json")
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Literal

import structlog
from structlog.types import Processor

LOG_LEVEL_ENV = "PRINCIPLE_DOCS_LOG_LEVEL"
LOG_FORMAT_ENV = "PRINCIPLE_DOCS_LOG_FORMAT"

DEFAULT_LEVEL = "WARNING"
DEFAULT_FORMAT = "console"

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
_VALID_FORMATS = ("json", "console")

_configured = False


@dataclass(frozen=True)
class LogSettings:
    """Resolved logging level and output format."""

    level: str = DEFAULT_LEVEL
    format: str = DEFAULT_FORMAT

    @classmethod
    def resolve(cls, level: str | None = None, format: str | None = None) -> "LogSettings":
        """Pick explicit values first, then the environment, then defaults.

        Unknown levels or formats fall back to the defaults.
        """
        level = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LEVEL).upper()
        format = (format or os.environ.get(LOG_FORMAT_ENV) or DEFAULT_FORMAT).lower()
        return cls(
            level=level if level in _VALID_LEVELS else DEFAULT_LEVEL,
            format=format if format in _VALID_FORMATS else DEFAULT_FORMAT,
        )

    @property
    def numeric_level(self) -> int:
        return logging.getLevelName(self.level)


def build_processors(log_format: str) -> list[Processor]:
    """Processor chain ending in a JSON or console renderer."""
    if log_format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None,
    format: Literal["json", "console"] | None = None,
    force: bool = False,
) -> LogSettings | None:
    """Configure structlog and the stdlib bridge.

    Only the first call takes effect unless ``force`` is set.

    Returns:
        The settings applied, or None when logging was already configured
    """
    global _configured

    if _configured and not force:
        return None

    settings = LogSettings.resolve(level, format)

    structlog.configure(
        processors=build_processors(settings.format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # structlog hands rendered lines to stdlib logging, which owns the stream
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=settings.numeric_level,
        force=True,
    )
    logging.getLogger("principle_docs").setLevel(settings.numeric_level)

    _configured = True
    return settings


def is_configured() -> bool:
    return _configured
