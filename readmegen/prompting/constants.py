"""Section layout shared by the prompt template and the contents header."""

from __future__ import annotations

README_SECTIONS: tuple[str, ...] = (
    "Introduction",
    "Requirements",
    "Installation",
    "Recommended modules",
    "Configuration",
    "Maintainers",
)

CONTENTS_TITLE = "CONTENTS OF THIS FILE"

PROMPT_TEMPLATE = "readme_prompt.j2"


__all__ = ["CONTENTS_TITLE", "PROMPT_TEMPLATE", "README_SECTIONS"]
