"""Markdown summary of a devfile, rendered from a Jinja template."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader

from .spec import DevfileSpec

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
SUMMARY_TEMPLATE = "summary.md.jinja2"


def render_summary(spec: DevfileSpec, templates_dir: Optional[Path] = None) -> str:
    env = Environment(
        loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    template = env.get_template(SUMMARY_TEMPLATE)
    title = spec.metadata.name or spec.metadata.generate_name or "devfile"
    return template.render(devfile=spec, title=title)
