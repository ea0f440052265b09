"""Rendering of resolutions and comparisons (text, JSON, Markdown, env file).

Renderers only read the core data structures; they never resolve anything
themselves.
"""

from .compare_text import format_compare
from .effective import format_effective, unwritable_names, write_effective
from .json_report import format_compare_json, format_json, resolution_payload
from .markdown import format_markdown
from .text import format_text, format_variable_detail

FORMATS = ("text", "json", "markdown")


def render(resolution, fmt: str = "text", *, color: bool = False, truncate: int = 30, only_overridden: bool = False) -> str:
    """Render ``resolution`` in one of :data:`FORMATS`."""
    if fmt == "json":
        return format_json(resolution, only_overridden=only_overridden)
    if fmt == "markdown":
        return format_markdown(resolution, truncate=truncate, only_overridden=only_overridden)
    if fmt == "text":
        return format_text(resolution, color=color, only_overridden=only_overridden)
    raise ValueError(f"Unknown output format: {fmt}")


__all__ = [
    "FORMATS",
    "render",
    "format_compare",
    "format_effective",
    "unwritable_names",
    "write_effective",
    "format_compare_json",
    "format_json",
    "resolution_payload",
    "format_markdown",
    "format_text",
    "format_variable_detail",
]
