"""
CLI for principle-docs.

Checks a design-principles markdown document for structural consistency.

Usage:
    principledocs check SOLID.md
    principledocs check SOLID.md --format json
    principledocs check SOLID.md --config principles.yaml
    principledocs show SOLID.md
    principledocs render SOLID.md -o SUMMARY.md

Exit codes for `check`:
    0  no violations
    1  one or more violations
    2  input is malformed or unreadable, or the config is invalid
"""

import json
import sys
from pathlib import Path

import click
import structlog
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from principle_docs import __version__
from principle_docs.checker import CheckResult, DocumentChecker
from principle_docs.config import CheckerConfig
from principle_docs.errors import PrincipleDocsError
from principle_docs.logging import configure_logging
from principle_docs.reporter import render_markdown, report_json

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_ERROR = 2

console = Console()
err_console = Console(stderr=True)
logger = structlog.get_logger(__name__)


def _load_config(config_path: str | None) -> CheckerConfig:
    if config_path is None:
        return CheckerConfig()
    return CheckerConfig.from_yaml(Path(config_path))


def _fail(error: PrincipleDocsError) -> None:
    logger.error("check_failed", **error.to_dict())
    err_console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    sys.exit(EXIT_ERROR)


def _run_check(path: str, config_path: str | None) -> CheckResult:
    try:
        checker = DocumentChecker(_load_config(config_path))
        return checker.check_file(Path(path))
    except PrincipleDocsError as e:
        _fail(e)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (defaults to PRINCIPLE_DOCS_LOG_LEVEL or WARNING).",
)
def cli(log_level: str | None):
    """Design-principles document checker.

    Parses a markdown write-up of numbered principles and checks that every
    principle has a definition and code samples.
    """
    configure_logging(level=log_level.upper() if log_level else None, force=True)


@cli.command()
@click.argument("path", type=click.Path(dir_okay=False))
@click.option(
    "--config", "-c", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML file with parse/validation settings.",
)
@click.option(
    "--format", "-f", "output_format",
    type=click.Choice(["text", "json", "table"]),
    default="text",
    help="Report format.",
)
def check(path: str, config_path: str | None, output_format: str):
    """Validate a principles document and print the report.

    Examples:
        principledocs check SOLID.md
        principledocs check SOLID.md -f json
    """
    result = _run_check(path, config_path)

    if output_format == "json":
        click.echo(report_json(result.violations))
    elif output_format == "table":
        _print_violation_table(result)
    else:
        click.echo(result.report)

    sys.exit(result.exit_code)


@cli.command()
@click.argument("path", type=click.Path(dir_okay=False))
@click.option(
    "--config", "-c", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML file with parse/validation settings.",
)
@click.option(
    "--json", "as_json",
    is_flag=True,
    help="Output the parsed document as JSON.",
)
def show(path: str, config_path: str | None, as_json: bool):
    """Show how a document is parsed.

    Useful for checking heading format and seeing what gets extracted.
    """
    result = _run_check(path, config_path)
    document = result.document

    if as_json:
        click.echo(json.dumps(document.to_dict(), indent=2))
        return

    if document.title:
        console.print(f"\n[bold blue]{escape(document.title)}[/bold blue]\n")

    table = Table(title="Principles")
    table.add_column("#", justify="right")
    table.add_column("Letter", style="cyan", justify="center")
    table.add_column("Name")
    table.add_column("Definition")
    table.add_column("Examples", justify="right")

    for principle in document.principles:
        definition = principle.definition
        if len(definition) > 60:
            definition = definition[:57] + "..."
        table.add_row(
            str(principle.number) if principle.number is not None else "-",
            principle.abbreviation,
            escape(principle.name),
            escape(definition) or "[red]-[/red]",
            str(len(principle.examples)),
        )

    console.print(table)
    console.print(f"\n[bold]References:[/bold] {len(document.references)}")
    for reference in document.references:
        console.print(f"  - {escape(reference.label)} ({escape(reference.url)})")


@cli.command()
@click.argument("path", type=click.Path(dir_okay=False))
@click.option(
    "--config", "-c", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML file with parse/validation settings.",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the summary to this file instead of stdout.",
)
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Directory with a custom summary.md.j2 template.",
)
def render(path: str, config_path: str | None, output: str | None, template_dir: str | None):
    """Render a markdown summary of the document and its status."""
    result = _run_check(path, config_path)
    content = render_markdown(
        result.document,
        result.violations,
        template_dir=Path(template_dir) if template_dir else None,
    )

    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        err_console.print(f"Summary written to {escape(str(output_path))}")
    else:
        click.echo(content, nl=False)


def _print_violation_table(result: CheckResult) -> None:
    if result.ok:
        console.print("[bold green]OK[/bold green]")
        return

    table = Table(title=f"{len(result.violations)} violation(s)")
    table.add_column("Principle", style="cyan")
    table.add_column("Rule", style="red")
    for violation in result.violations:
        table.add_row(escape(violation.principle_name), violation.rule_violated)
    console.print(table)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
