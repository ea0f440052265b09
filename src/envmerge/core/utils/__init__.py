"""Shared utilities for envmerge core."""

from .io import atomic_write, read_yaml, resolve_yaml_path, write_text
from .merge import deep_merge

__all__ = [
    "atomic_write",
    "read_yaml",
    "resolve_yaml_path",
    "write_text",
    "deep_merge",
]
