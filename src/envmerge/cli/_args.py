"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse

from envmerge.report import FORMATS


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_path_arg(parser: argparse.ArgumentParser, name: str = "path", help_text: str = "Directory to scan (default: current directory)") -> None:
    """Add an optional positional directory argument."""
    parser.add_argument(name, nargs="?", default=".", help=help_text)


def add_format_flag(parser: argparse.ArgumentParser) -> None:
    """Add --format; the default comes from configuration (output.format)."""
    parser.add_argument(
        "--format",
        "-f",
        choices=list(FORMATS),
        default=None,
        help="Output format (default: from config, normally text)",
    )


def add_resolve_flags(parser: argparse.ArgumentParser) -> None:
    """Add the flags that map onto resolve options.

    Unset flags stay None so project config and ENVMERGE_* values apply.
    """
    parser.add_argument(
        "--service",
        "-s",
        dest="service",
        default=None,
        help="Only show variables used by this compose service",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail if variables are referenced but never defined",
    )
    parser.add_argument(
        "--include-env",
        dest="include_env",
        action="store_true",
        default=None,
        help="Let the current process environment override tracked variables",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    """Add --verbose flag."""
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging on stderr",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add --json and --verbose."""
    add_json_flag(parser)
    add_verbose_flag(parser)


__all__ = [
    "add_json_flag",
    "add_path_arg",
    "add_format_flag",
    "add_resolve_flags",
    "add_verbose_flag",
    "add_standard_flags",
]
