"""Render the manifest and POM templates."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

TEMPLATE_DIR = Path(__file__).parent / "templates"

# Manifest lines are limited to 72 bytes; longer ones continue after a space
_MANIFEST_LINE_BYTES = 72


def manifest_line(name: str, value: Any) -> str:
    """Format one manifest header, wrapping at 72 bytes."""
    lines: list[str] = []
    current, size = "", 0
    for char in f"{name}: {value}":
        width = len(char.encode("utf-8"))
        if size + width > _MANIFEST_LINE_BYTES:
            lines.append(current)
            current, size = " ", 1
        current += char
        size += width
    lines.append(current)
    return "\n".join(lines)


def _environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.globals["manifest_line"] = manifest_line
    return env


def render(template_name: str, context: dict[str, Any]) -> str:
    """Render a template from specforge/templates."""
    template = _environment().get_template(template_name)
    return template.render(**context)
