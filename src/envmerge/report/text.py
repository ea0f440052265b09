"""Plain-text report rendering, optionally colored through rich."""
from __future__ import annotations

from io import StringIO
from typing import List

from rich.console import Console
from rich.style import Style
from rich.text import Text

from envmerge.core.models import Resolution, Variable

_S_HEADER = Style(color="cyan")
_S_WARN = Style(color="yellow")
_S_OK = Style(color="green")
_S_DIM = Style(color="bright_black")
_S_NAME = Style(bold=True)

_EMPTY = "(empty)"


def _value(value: str) -> Text:
    return Text(value) if value else Text(_EMPTY, style=_S_DIM)


def _format_variable(lines: List[Text], var: Variable, *, show_chain: bool) -> None:
    lines.append(Text(var.name, style=_S_NAME))
    lines.append(Text.assemble("  final: ", _value(var.final_value)))

    src = var.final_from
    if src is not None:
        if src.service:
            lines.append(Text(f"  from: {src.layer.label} (service: {src.service})"))
        else:
            lines.append(Text(f"  from: {src.location()}"))

    if show_chain and len(var.chain) > 1:
        lines.append(Text("  chain:", style=_S_DIM))
        last = len(var.chain) - 1
        for i in range(last, -1, -1):
            s = var.chain[i]
            marker = "→ " if i == last else "  "
            lines.append(Text(f"    {marker}{s.location()} = {s.value or _EMPTY}"))

    if var.conflicts and show_chain:
        lines.append(Text(f"  conflicts: {', '.join(var.conflicts)}"))
    lines.append(Text())


def _render(lines: List[Text], color: bool) -> str:
    while lines and not lines[-1].plain:
        lines.pop()
    text = Text("\n").join(lines)
    if not color:
        return text.plain + "\n"

    buffer = StringIO()
    console = Console(
        file=buffer,
        force_terminal=True,
        color_system="standard",
        soft_wrap=True,
        highlight=False,
    )
    console.print(text)
    return buffer.getvalue()


def format_text(
    resolution: Resolution,
    *,
    color: bool = False,
    only_overridden: bool = False,
) -> str:
    """Render a human-readable resolution report."""
    lines: List[Text] = [
        Text("Environment Resolution Report", style=_S_HEADER),
        Text("=============================", style=_S_HEADER),
        Text(),
        Text(f"Scanned path: {resolution.path}"),
        Text(f"Env files: {len(resolution.env_files)}"),
        Text(f"Compose files: {len(resolution.compose_files)}"),
        Text(f"Variables resolved: {len(resolution.variables)}"),
        Text(),
    ]

    if resolution.warnings:
        lines.append(Text("Warnings", style=_S_WARN))
        lines.extend(Text(f"  • {w}") for w in resolution.warnings)
        lines.append(Text())

    if resolution.undefined:
        lines.append(Text("Undefined Variables", style=_S_WARN))
        lines.extend(Text(f"  • {name}") for name in resolution.undefined)
        lines.append(Text())

    overridden = [v for v in resolution.variables if v.overridden]
    clean = [v for v in resolution.variables if not v.overridden]

    if overridden:
        lines.append(Text("Variables with Overrides", style=_S_WARN))
        lines.append(Text("------------------------"))
        for var in overridden:
            _format_variable(lines, var, show_chain=True)

    if clean and not only_overridden:
        lines.append(Text("Cleanly Resolved Variables", style=_S_OK))
        lines.append(Text("--------------------------"))
        for var in clean:
            _format_variable(lines, var, show_chain=False)

    return _render(lines, color)


def format_variable_detail(var: Variable) -> str:
    """Render the full history of one variable (used by ``explain``)."""
    lines: List[Text] = []
    _format_variable(lines, var, show_chain=True)
    if len(var.chain) == 1:
        lines.insert(-1, Text(f"  defined once in {var.chain[0].layer.label}"))
    return _render(lines, False)


__all__ = ["format_text", "format_variable_detail"]
