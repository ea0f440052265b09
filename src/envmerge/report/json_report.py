"""JSON report rendering."""
from __future__ import annotations

import json
from typing import Any, Dict

from envmerge.core.models import CompareResult, Resolution


def resolution_payload(resolution: Resolution, *, only_overridden: bool = False) -> Dict[str, Any]:
    payload = resolution.to_dict()
    if only_overridden:
        payload["variables"] = [v for v in payload["variables"] if v["overridden"]]
    return payload


def format_json(resolution: Resolution, *, indent: int = 2, only_overridden: bool = False) -> str:
    """Serialize a resolution as indented JSON."""
    return json.dumps(
        resolution_payload(resolution, only_overridden=only_overridden),
        indent=indent,
        ensure_ascii=False,
    )


def format_compare_json(first: str, second: str, result: CompareResult, *, indent: int = 2) -> str:
    payload = {"first": first, "second": second, **result.to_dict()}
    return json.dumps(payload, indent=indent, ensure_ascii=False)


__all__ = ["resolution_payload", "format_json", "format_compare_json"]
