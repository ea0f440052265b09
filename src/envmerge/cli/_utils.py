"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

from envmerge.core.config import ConfigManager
from envmerge.core.models import ResolveOptions


def get_base_path(args: argparse.Namespace, attr: str = "path") -> Path:
    """Return the directory argument as an absolute path."""
    return Path(getattr(args, attr, None) or ".").resolve()


def get_config(base_path: Path) -> ConfigManager:
    manager = ConfigManager(base_path)
    manager.load_config()
    return manager


def options_from_args(
    manager: ConfigManager,
    args: argparse.Namespace,
    *,
    compare_with: Optional[str] = None,
) -> ResolveOptions:
    """Merge CLI flags over configuration into resolve options."""
    return manager.resolve_options(
        include_ambient_env=getattr(args, "include_env", None),
        service_name=getattr(args, "service", None),
        strict_mode=getattr(args, "strict", None),
        compare_with=compare_with,
    )


def output_format(manager: ConfigManager, args: argparse.Namespace) -> str:
    """``--json`` wins, then ``--format``, then ``output.format`` from config."""
    if getattr(args, "json", False):
        return "json"
    return getattr(args, "format", None) or str(manager.get("output.format", "text"))


__all__ = ["get_base_path", "get_config", "options_from_args", "output_format"]
