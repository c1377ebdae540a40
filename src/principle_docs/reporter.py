"""
Report rendering for validation results.

`report` is the canonical plain-text rendering: "OK" for a clean document,
otherwise one "<principle>: <rule>" line per violation. JSON and a
Jinja2-rendered markdown summary are provided for tooling and docs.
"""

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from principle_docs.model import Document
from principle_docs.validator import Violation, summarize

OK = "OK"

TEMPLATE_DIR = Path(__file__).parent / "templates"
SUMMARY_TEMPLATE = "summary.md.j2"


def report(violations: Sequence[Violation]) -> str:
    """Render violations as a human-readable summary.

    Args:
        violations: Validator output

    Returns:
        "OK" when there are no violations, otherwise one line per violation
    """
    if not violations:
        return OK
    return "\n".join(f"{v.principle_name}: {v.rule_violated}" for v in violations)


def report_json(violations: Sequence[Violation]) -> str:
    """Render violations as a stable JSON document."""
    payload: dict[str, Any] = {
        "ok": not violations,
        "count": len(violations),
        "by_rule": summarize(violations)["by_rule"],
        "violations": [v.to_dict() for v in violations],
    }
    return json.dumps(payload, indent=2)


class MarkdownRenderer:
    """Render a document overview and its validation status as markdown.

    Architecture:
        ```
        Document + violations
              │
              ▼
        Jinja2 template (templates/summary.md.j2)
              │
              ▼
        Rendered Markdown
        ```
    """

    template_name: str = SUMMARY_TEMPLATE

    def __init__(self, template_dir: Path | None = None):
        self.template_dir = Path(template_dir) if template_dir else TEMPLATE_DIR

        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render(self, document: Document, violations: Sequence[Violation]) -> str:
        template = self.env.get_template(self.template_name)
        return template.render(
            title=document.title,
            principles=document.principles,
            references=document.references,
            violations=violations,
        )


def render_markdown(
    document: Document,
    violations: Sequence[Violation],
    template_dir: Path | None = None,
) -> str:
    """Render the markdown summary with the bundled (or a custom) template."""
    return MarkdownRenderer(template_dir).render(document, violations)
