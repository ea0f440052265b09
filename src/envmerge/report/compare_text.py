"""Human-readable rendering of a CompareResult."""
from __future__ import annotations

from typing import List

from envmerge.core.models import CompareResult


def format_compare(first: str, second: str, result: CompareResult) -> str:
    lines: List[str] = [f"# Environment Comparison: {first} vs {second}", ""]

    if result.only_in_first:
        lines.append(f"## Only in {first} ({len(result.only_in_first)})")
        lines.extend(f"  - {name}" for name in result.only_in_first)
        lines.append("")

    if result.only_in_second:
        lines.append(f"## Only in {second} ({len(result.only_in_second)})")
        lines.extend(f"  - {name}" for name in result.only_in_second)
        lines.append("")

    if result.different:
        lines.append(f"## Different Values ({len(result.different)})")
        for diff in result.different:
            lines.append(f"  - {diff.name}:")
            lines.append(f"      {first}: {diff.first_value}")
            lines.append(f"      {second}: {diff.second_value}")
        lines.append("")

    lines.extend(
        [
            "## Summary",
            f"  - {len(result.only_in_first)} variable(s) only in {first}",
            f"  - {len(result.only_in_second)} variable(s) only in {second}",
            f"  - {len(result.different)} variable(s) with different values",
            f"  - {len(result.same)} variable(s) with same values",
        ]
    )
    return "\n".join(lines) + "\n"


__all__ = ["format_compare"]
