"""Comparison of two resolutions by final value."""
from __future__ import annotations

from envmerge.core.models import CompareResult, DiffVar, Resolution


def compare(first: Resolution, second: Resolution) -> CompareResult:
    """Compare final values of two resolutions.

    Neither input is modified. Every list in the result is sorted by name.
    """
    first_vars = first.final_values()
    second_vars = second.final_values()
    result = CompareResult()

    for name in sorted(first_vars.keys() | second_vars.keys()):
        if name not in second_vars:
            result.only_in_first.append(name)
        elif name not in first_vars:
            result.only_in_second.append(name)
        elif first_vars[name] == second_vars[name]:
            result.same.append(name)
        else:
            result.different.append(
                DiffVar(name=name, first_value=first_vars[name], second_value=second_vars[name])
            )
    return result


__all__ = ["compare"]
