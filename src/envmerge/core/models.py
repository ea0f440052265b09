"""Resolution data model.

``Source`` is one observation of a variable in one place. ``Variable``
aggregates every observation sharing a name and carries the computed final
value. ``Resolution`` is the result of scanning one directory and
``CompareResult`` the derived diff between two resolutions.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from envmerge.core.layers import Layer, precedence


@dataclass(frozen=True)
class Source:
    """Where a variable value came from."""

    layer: Layer
    file: str
    line: Optional[int] = None
    service: str = ""
    value: str = ""
    is_inline: bool = False
    is_reference: bool = False

    def location(self) -> str:
        """Return ``file:line`` when a line is known, else the file (or layer label)."""
        if not self.file:
            return self.layer.label
        if self.line:
            return f"{self.file}:{self.line}"
        return self.file

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"layer": self.layer.label}
        if self.file:
            data["file"] = self.file
        if self.line:
            data["line"] = self.line
        if self.service:
            data["service"] = self.service
        data["value"] = self.value
        return data


@dataclass
class Variable:
    """A resolved environment variable and its override history."""

    name: str
    chain: List[Source] = field(default_factory=list)
    final_value: str = ""
    final_from: Optional[Source] = None
    overridden: bool = False
    conflicts: List[str] = field(default_factory=list)

    def add(self, source: Source) -> None:
        self.chain.append(source)

    def finalize(self) -> None:
        """Order the chain by precedence and compute final value and conflicts.

        ``sorted`` is stable, so observations within one layer keep the
        order in which they were discovered.
        """
        self.chain = sorted(self.chain, key=lambda s: precedence(s.layer))
        if not self.chain:
            return

        self.final_from = self.chain[-1]
        self.final_value = self.final_from.value

        distinct: List[str] = []
        for src in self.chain:
            if src.value and src.value not in distinct:
                distinct.append(src.value)

        self.overridden = len(distinct) > 1
        self.conflicts = [v for v in distinct if v != self.final_value] if self.overridden else []

    def apply_override(self, source: Source) -> None:
        """Append a maximal-precedence observation and make it the winner.

        Used for the ambient environment, which outranks every file layer, so
        the chain stays ordered without re-sorting.
        """
        self.chain.append(source)
        self.final_from = source
        self.final_value = source.value
        self.overridden = True

    def has_definition(self) -> bool:
        """True when any observation assigns a value, even an empty one.

        Bare compose references (``- NAME``) are not assignments.
        """
        return any(src.value or not src.is_reference for src in self.chain)

    def is_undefined(self) -> bool:
        """Referenced but never assigned: empty final value and no assignment anywhere."""
        return self.final_value == "" and not self.has_definition()

    def used_by_service(self, service: str) -> bool:
        """True if the variable is unscoped or scoped to ``service``."""
        return any(src.service in ("", service) for src in self.chain)

    def to_dict(self, *, include_chain: Optional[bool] = None) -> Dict[str, Any]:
        show_chain = self.overridden if include_chain is None else include_chain
        data: Dict[str, Any] = {
            "name": self.name,
            "final_value": self.final_value,
            "final_from": self.final_from.to_dict() if self.final_from else None,
            "overridden": self.overridden,
            "conflicts": list(self.conflicts),
        }
        if show_chain:
            data["chain"] = [src.to_dict() for src in self.chain]
        return data


@dataclass
class Resolution:
    """The complete resolution result for one scanned directory."""

    path: str
    variables: List[Variable] = field(default_factory=list)
    by_name: Dict[str, Variable] = field(default_factory=dict)
    env_files: List[str] = field(default_factory=list)
    compose_files: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    undefined: List[str] = field(default_factory=list)

    def get(self, name: str) -> Optional[Variable]:
        return self.by_name.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.by_name

    def __len__(self) -> int:
        return len(self.variables)

    def overridden(self) -> List[Variable]:
        return [v for v in self.variables if v.overridden]

    def final_values(self) -> Dict[str, str]:
        """Map of variable name to final value, in name order."""
        return {v.name: v.final_value for v in self.variables}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "env_files": list(self.env_files),
            "compose_files": list(self.compose_files),
            "variables": [v.to_dict() for v in self.variables],
            "warnings": list(self.warnings),
            "undefined": list(self.undefined),
        }


@dataclass(frozen=True)
class DiffVar:
    """A variable whose final value differs between two resolutions."""

    name: str
    first_value: str
    second_value: str


@dataclass
class CompareResult:
    """Differences between two resolutions."""

    only_in_first: List[str] = field(default_factory=list)
    only_in_second: List[str] = field(default_factory=list)
    different: List[DiffVar] = field(default_factory=list)
    same: List[str] = field(default_factory=list)

    def is_identical(self) -> bool:
        return not (self.only_in_first or self.only_in_second or self.different)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "only_in_first": list(self.only_in_first),
            "only_in_second": list(self.only_in_second),
            "different": [
                {"name": d.name, "first_value": d.first_value, "second_value": d.second_value}
                for d in self.different
            ],
            "same": list(self.same),
        }


@dataclass(frozen=True)
class ResolveOptions:
    """Options accepted by :func:`envmerge.core.resolver.resolve`."""

    include_ambient_env: bool = False
    service_name: str = ""
    strict_mode: bool = False
    compare_with: Optional[Path] = None


__all__ = [
    "Source",
    "Variable",
    "Resolution",
    "DiffVar",
    "CompareResult",
    "ResolveOptions",
]
