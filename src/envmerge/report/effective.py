"""Writer for the effective env file (``NAME=value`` per resolved variable)."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union

from envmerge.core.models import Resolution, Variable
from envmerge.core.utils import write_text

logger = logging.getLogger(__name__)


def _needs_quotes(value: str) -> bool:
    if not value:
        return False
    if value != value.strip() or any(ch.isspace() for ch in value) or "#" in value:
        return True
    return value[0] in ("'", '"') or value[-1] in ("'", '"')


def is_writable(var: Variable) -> bool:
    """True if ``var`` survives a write/parse round trip through one env line.

    The env format has no escapes, so multi-line values and names the parser
    would split or trim cannot be represented.
    """
    name = var.name
    if not name or name != name.strip() or "=" in name or name.startswith(("#", "export ")):
        return False
    return "\n" not in var.final_value and "\r" not in var.final_value


def unwritable_names(resolution: Resolution) -> List[str]:
    """Names left out of the effective file, in name order."""
    return [var.name for var in resolution.variables if not is_writable(var)]


def format_effective(resolution: Resolution) -> str:
    """Render final values as env file content that parses back to the same values.

    Values that would otherwise be trimmed or unquoted by the env parser are
    wrapped in one pair of double quotes. Variables that cannot be written
    on a single line are skipped with a warning.
    """
    lines = []
    for var in resolution.variables:
        if not is_writable(var):
            logger.warning("Skipping %s: value cannot be written as a single env line", var.name)
            continue
        value = var.final_value
        if _needs_quotes(value):
            value = f'"{value}"'
        lines.append(f"{var.name}={value}")
    return "\n".join(lines) + ("\n" if lines else "")


def write_effective(resolution: Resolution, path: Union[str, Path]) -> Path:
    """Atomically write the effective env file to ``path``."""
    target = Path(path)
    write_text(target, format_effective(resolution))
    return target


__all__ = ["is_writable", "unwritable_names", "format_effective", "write_effective"]
