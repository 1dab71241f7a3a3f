"""Builds the README prompt from a scan report and post-processes the reply."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..models import ScanReport
from .constants import CONTENTS_TITLE, PROMPT_TEMPLATE, README_SECTIONS


class PromptBuilder:
    """Renders the fixed README instructions around a JSON dump of the report."""

    def __init__(
        self,
        templates_dir: Path | None = None,
        *,
        sections: Sequence[str] = README_SECTIONS,
    ) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self.sections = tuple(sections)
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            keep_trailing_newline=False,
            undefined=StrictUndefined,
        )

    def build(self, report: ScanReport, *, machine_name: str | None = None) -> str:
        """Return the prompt text; the report JSON is embedded verbatim."""
        template = self._env.get_template(PROMPT_TEMPLATE)
        return template.render(
            contents_title=CONTENTS_TITLE,
            machine_name=machine_name or "module_machine_name",
            report_json=report.to_json(),
        )

    def contents_header(self) -> str:
        lines = [CONTENTS_TITLE, ""]
        lines.extend(f"- {section}" for section in self.sections)
        return "\n".join(lines)

    def finalize(self, body: str) -> str:
        """Prefix the model's reply with the contents list."""
        return f"{self.contents_header()}\n\n{body.lstrip()}".strip() + "\n"


__all__ = ["PromptBuilder"]
