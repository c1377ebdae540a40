"""
Configuration for principle-docs.

Manages settings for parsing and validation. The defaults describe a
SOLID-style write-up; a YAML file can tighten the checks, e.g. require
exactly five principles spelling out "SOLID".
"""

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from principle_docs.errors import ConfigError


@dataclass(frozen=True)
class ParseConfig:
    """Settings that control how markdown text is read.

    Attributes:
        reference_headings: Heading texts (case-insensitive) that open the
            reference list
        min_heading_level: Shallowest heading level that may hold a principle
        max_heading_level: Deepest heading level that may hold a principle
    """

    reference_headings: tuple[str, ...] = (
        "References",
        "Further Reading",
        "Resources",
        "See Also",
    )
    min_heading_level: int = 1
    max_heading_level: int = 6

    def __post_init__(self):
        """Normalize lists from YAML into tuples and check types and heading bounds."""
        headings = self.reference_headings
        if isinstance(headings, str):
            headings = (headings,)
        elif isinstance(headings, (list, tuple)):
            headings = tuple(headings)
        else:
            raise ConfigError(
                f"reference_headings must be a list of strings, got {type(headings).__name__}"
            )
        if not all(isinstance(h, str) for h in headings):
            raise ConfigError(f"reference_headings entries must be strings, got {list(headings)!r}")
        object.__setattr__(self, "reference_headings", headings)

        for name in ("min_heading_level", "max_heading_level"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigError(f"{name} must be an integer, got {value!r}")

        if not 1 <= self.min_heading_level <= self.max_heading_level <= 6:
            raise ConfigError(
                "Heading levels must satisfy 1 <= min_heading_level <= max_heading_level <= 6, "
                f"got {self.min_heading_level}..{self.max_heading_level}"
            )

    def is_reference_heading(self, text: str) -> bool:
        """Check whether a heading text opens the reference list."""
        normalized = text.strip().rstrip(":").strip().lower()
        return any(normalized == h.lower() for h in self.reference_headings)


@dataclass(frozen=True)
class ValidationConfig:
    """Settings for the optional validation rules.

    Attributes:
        require_examples: Report principles with no code sample
        require_references: Report documents with an empty reference list
        expected_principles: Exact number of principles, if set
        expected_abbreviations: Letters the principles must spell, if set
    """

    require_examples: bool = True
    require_references: bool = False
    expected_principles: int | None = None
    expected_abbreviations: str | None = None

    def __post_init__(self):
        for name in ("require_examples", "require_references"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"{name} must be true or false, got {getattr(self, name)!r}")
        if self.expected_principles is not None and (
            not isinstance(self.expected_principles, int) or isinstance(self.expected_principles, bool)
        ):
            raise ConfigError(
                f"expected_principles must be an integer, got {self.expected_principles!r}"
            )
        if self.expected_principles is not None and self.expected_principles < 1:
            raise ConfigError(
                f"expected_principles must be positive, got {self.expected_principles}"
            )
        if self.expected_abbreviations is not None:
            if not isinstance(self.expected_abbreviations, str):
                raise ConfigError(
                    f"expected_abbreviations must be a string, got {self.expected_abbreviations!r}"
                )
            letters = self.expected_abbreviations.strip().upper()
            if not letters.isalpha():
                raise ConfigError(
                    f"expected_abbreviations must be letters, got {self.expected_abbreviations!r}"
                )
            object.__setattr__(self, "expected_abbreviations", letters)


@dataclass(frozen=True)
class CheckerConfig:
    """Top-level configuration combining parse and validation settings."""

    parse: ParseConfig = field(default_factory=ParseConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "CheckerConfig":
        """Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            CheckerConfig instance

        Raises:
            ConfigError: If the file is unreadable, not YAML, or has unknown keys
        """
        try:
            with open(yaml_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {yaml_path}", cause=e) from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {yaml_path}: {e}", cause=e) from e

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CheckerConfig":
        """Create config from dictionary.

        Args:
            data: Mapping with optional "parse" and "validation" sections

        Returns:
            CheckerConfig instance
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

        unknown = set(data) - {"parse", "validation"}
        if unknown:
            raise ConfigError(f"Unknown configuration sections: {', '.join(sorted(unknown))}")

        return cls(
            parse=_build_section(ParseConfig, data.get("parse") or {}, "parse"),
            validation=_build_section(ValidationConfig, data.get("validation") or {}, "validation"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary.

        Returns:
            Configuration as dictionary (YAML-friendly, lists not tuples)
        """
        parse = asdict(self.parse)
        parse["reference_headings"] = list(self.parse.reference_headings)
        return {
            "parse": parse,
            "validation": asdict(self.validation),
        }


def _build_section(section_cls, data: Any, name: str):
    if not isinstance(data, dict):
        raise ConfigError(f"Section '{name}' must be a mapping")

    known = {f.name for f in fields(section_cls)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"Unknown keys in '{name}': {', '.join(sorted(unknown))}")

    try:
        return section_cls(**data)
    except TypeError as e:
        raise ConfigError(f"Invalid '{name}' configuration: {e}", cause=e) from e


# Default configuration
DEFAULT_CONFIG = CheckerConfig()
