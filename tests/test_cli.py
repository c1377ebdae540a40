"""Tests for the principledocs CLI."""

import json

import pytest
from click.testing import CliRunner

from principle_docs import __version__
from principle_docs.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


# ── check command ────────────────────────────────────────────────────


class TestCheckCommand:

    def test_check_ok(self, runner, solid_path):
        result = runner.invoke(cli, ["check", str(solid_path)])

        assert result.exit_code == 0
        assert result.stdout.strip() == "OK"

    def test_check_violations_exit_1(self, runner, write_doc, duplicate_letter_text):
        path = write_doc(duplicate_letter_text)

        result = runner.invoke(cli, ["check", str(path)])

        assert result.exit_code == 1
        assert result.stdout.strip() == "Separation of Concerns: duplicate abbreviation"

    def test_check_json(self, runner, write_doc, empty_definition_text):
        path = write_doc(empty_definition_text)

        result = runner.invoke(cli, ["check", str(path), "--format", "json"])

        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        assert payload["count"] == 1
        assert payload["violations"][0] == {
            "principle_name": "Single Responsibility",
            "rule_violated": "missing definition",
        }

    def test_check_table(self, runner, solid_path):
        result = runner.invoke(cli, ["check", str(solid_path), "-f", "table"])

        assert result.exit_code == 0
        assert "OK" in result.stdout

    def test_check_malformed_exit_2(self, runner, write_doc):
        path = write_doc("# Title\n\nNo principles here.\n")

        result = runner.invoke(cli, ["check", str(path)])

        assert result.exit_code == 2
        assert "No numbered principle headings" in result.stderr

    def test_check_empty_file_exit_2(self, runner, write_doc):
        path = write_doc("")

        result = runner.invoke(cli, ["check", str(path)])

        assert result.exit_code == 2

    def test_check_missing_file_exit_2(self, runner, tmp_path):
        result = runner.invoke(cli, ["check", str(tmp_path / "missing.md")])

        assert result.exit_code == 2
        assert "Cannot read source document" in result.stderr

    def test_check_with_config(self, runner, solid_path, tmp_path):
        config = tmp_path / "rules.yaml"
        config.write_text("validation:\n  expected_abbreviations: SOLIDE\n")

        result = runner.invoke(cli, ["check", str(solid_path), "-c", str(config)])

        assert result.exit_code == 1
        assert result.stdout.strip() == "E: missing principle"

    def test_check_with_invalid_config_exit_2(self, runner, solid_path, tmp_path):
        config = tmp_path / "rules.yaml"
        config.write_text("validation:\n  bogus: true\n")

        result = runner.invoke(cli, ["check", str(solid_path), "-c", str(config)])

        assert result.exit_code == 2

    @pytest.mark.parametrize("config_text", [
        "validation:\n  expected_abbreviations: 5\n",
        "parse:\n  reference_headings: [1, 2]\n",
    ])
    def test_check_with_mistyped_config_exit_2(self, runner, solid_path, tmp_path, config_text):
        config = tmp_path / "rules.yaml"
        config.write_text(config_text)

        result = runner.invoke(cli, ["check", str(solid_path), "-c", str(config)])

        assert result.exit_code == 2
        assert "Error:" in result.stderr


# ── show / render commands ───────────────────────────────────────────


class TestShowCommand:

    def test_show_table(self, runner, solid_path):
        result = runner.invoke(cli, ["show", str(solid_path)])

        assert result.exit_code == 0
        assert "Liskov" in result.stdout
        assert "References:" in result.stdout

    def test_show_json(self, runner, solid_path):
        result = runner.invoke(cli, ["show", str(solid_path), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [p["abbreviation"] for p in data["principles"]] == list("SOLID")


class TestRenderCommand:

    def test_render_to_stdout(self, runner, solid_path):
        result = runner.invoke(cli, ["render", str(solid_path)])

        assert result.exit_code == 0
        assert result.stdout.startswith("# SOLID Principles")

    def test_render_to_file(self, runner, solid_path, tmp_path):
        output = tmp_path / "out" / "SUMMARY.md"

        result = runner.invoke(cli, ["render", str(solid_path), "-o", str(output)])

        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8").startswith("# SOLID Principles")


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output
