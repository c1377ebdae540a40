"""Tests for the check pipeline."""

import pytest

from principle_docs.checker import DocumentChecker
from principle_docs.config import CheckerConfig, ParseConfig, ValidationConfig
from principle_docs.errors import MalformedInputError, SourceReadError
from principle_docs.model import MarkdownParser, Reference
from principle_docs.validator import DUPLICATE_ABBREVIATION, Violation


class TestDocumentChecker:

    @pytest.fixture
    def checker(self):
        return DocumentChecker()

    def test_check_file_ok(self, checker, solid_path):
        result = checker.check_file(solid_path)

        assert result.ok
        assert result.exit_code == 0
        assert result.report == "OK"
        assert result.document.abbreviations == "SOLID"

    def test_check_text_with_violation(self, checker, duplicate_letter_text):
        result = checker.check_text(duplicate_letter_text)

        assert not result.ok
        assert result.exit_code == 1
        assert result.violations == (Violation("Separation of Concerns", DUPLICATE_ABBREVIATION),)
        assert result.report == "Separation of Concerns: duplicate abbreviation"

    def test_config_is_applied(self, solid_path):
        config = CheckerConfig(validation=ValidationConfig(expected_principles=6))
        result = DocumentChecker(config).check_file(solid_path)

        assert result.report == "<document>: unexpected principle count"

    def test_violations_are_immutable(self, checker, duplicate_letter_text):
        result = checker.check_text(duplicate_letter_text)

        assert isinstance(result.violations, tuple)
        with pytest.raises(AttributeError):
            result.violations.append(Violation("Extra", DUPLICATE_ABBREVIATION))

    def test_parse_config_applies_to_files(self, write_doc):
        path = write_doc(
            "## 1. Open/Closed (OCP)\n\n"
            "> Open for extension.\n\n"
            "```java\ninterface Shape {}\n```\n\n"
            "## Bibliography\n\n"
            "- [Meyer 1988](https://example.org/oosc)\n"
        )
        config = CheckerConfig(
            parse=ParseConfig(reference_headings=("Bibliography",)),
            validation=ValidationConfig(require_references=True),
        )

        result = DocumentChecker(config).check_file(path)

        assert result.ok
        assert [r.label for r in result.document.references] == ["Meyer 1988"]
        assert result.document == DocumentChecker(config).check_text(path.read_text()).document

    def test_check_file_uses_checker_parser(self, checker, write_doc):
        path = write_doc(
            "## 1. Open/Closed (OCP)\n\n"
            "> Open for extension.\n\n"
            "## Bibliography\n\n"
            "- [Meyer 1988](https://example.org/oosc)\n"
        )
        checker.parser = MarkdownParser(ParseConfig(reference_headings=("Bibliography",)))

        result = checker.check_file(path)

        assert result.document.references == (Reference("Meyer 1988", "https://example.org/oosc"),)

    def test_malformed_input_propagates(self, checker):
        with pytest.raises(MalformedInputError):
            checker.check_text("")

    def test_missing_file_propagates(self, checker, tmp_path):
        with pytest.raises(SourceReadError):
            checker.check_file(tmp_path / "nope.md")
