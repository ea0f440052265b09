"""Markdown report rendering through a bundled Jinja2 template."""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Optional

from jinja2 import Environment, StrictUndefined, Template

from envmerge.core.models import Resolution, Source
from envmerge.data import read_text

DEFAULT_TRUNCATE = 30


def truncate_value(value: str, width: int = DEFAULT_TRUNCATE) -> str:
    if len(value) > width:
        return value[: width - 3] + "..."
    return value


def md_cell(text: str) -> str:
    """Keep ``text`` inside one Markdown table cell."""
    text = text.replace("\r\n", "\n").replace("\r", "\n").replace("\n", "<br>")
    return text.replace("|", "\\|")


def md_code(text: str) -> str:
    """Wrap ``text`` in a code span that survives backticks, pipes and newlines."""
    if not text:
        return ""
    text = " ".join(text.splitlines())
    longest = max((len(run) for run in re.findall(r"`+", text)), default=0)
    fence = "`" * (longest + 1)
    if text.startswith("`") or text.endswith("`"):
        text = f" {text} "
    return (fence + text + fence).replace("|", "\\|")


def source_label(source: Optional[Source]) -> str:
    if source is None:
        return ""
    if source.service:
        return f"{source.layer.label} ({source.service})"
    return source.layer.label


@lru_cache(maxsize=8)
def _template(width: int) -> Template:
    # Control blocks sit on their own lines; trimming keeps them from
    # leaving blank rows inside tables.
    env = Environment(trim_blocks=True, lstrip_blocks=True, undefined=StrictUndefined)
    env.filters["truncate_value"] = lambda value: truncate_value(value, width)
    env.filters["source_label"] = source_label
    env.filters["md_cell"] = md_cell
    env.filters["md_code"] = md_code
    return env.from_string(read_text("templates", "report.md.j2"))


def format_markdown(
    resolution: Resolution,
    *,
    truncate: int = DEFAULT_TRUNCATE,
    only_overridden: bool = False,
) -> str:
    """Render a Markdown report; overridden variables are listed first."""
    variables = sorted(resolution.variables, key=lambda v: (not v.overridden, v.name))
    if only_overridden:
        variables = [v for v in variables if v.overridden]
    return _template(truncate).render(
        resolution=resolution,
        variables=variables,
        overridden_count=sum(1 for v in resolution.variables if v.overridden),
    )


__all__ = ["DEFAULT_TRUNCATE", "truncate_value", "md_cell", "md_code", "source_label", "format_markdown"]
