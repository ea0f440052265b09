"""
envmerge compare command.

SUMMARY: Compare resolved variables of two directories
"""

from __future__ import annotations

import argparse
import sys

from envmerge.cli import (
    OutputFormatter,
    add_resolve_flags,
    add_standard_flags,
    get_base_path,
    get_config,
)
from envmerge.core.compare import compare
from envmerge.core.exceptions import ConfigError
from envmerge.core.resolver import resolve
from envmerge.report import format_compare, format_compare_json

SUMMARY = "Compare resolved variables of two directories"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("first", help="First directory")
    parser.add_argument("second", help="Second directory")
    add_resolve_flags(parser)
    parser.add_argument(
        "--fail-on-diff",
        action="store_true",
        help="Exit with status 1 when the directories differ",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    first_path = get_base_path(args, "first")
    second_path = get_base_path(args, "second")

    resolutions = []
    for path in (first_path, second_path):
        try:
            manager = get_config(path)
        except ConfigError as e:
            formatter.error(e, error_code="config_error")
            return 1
        # Strict mode is a scan policy; comparison always sees both sides.
        options = manager.resolve_options(
            include_ambient_env=getattr(args, "include_env", None),
            service_name=getattr(args, "service", None),
            strict_mode=False,
        )
        resolutions.append(resolve(path, options, settings=manager.discovery_settings()))

    result = compare(resolutions[0], resolutions[1])
    if formatter.json_mode:
        formatter.text(format_compare_json(args.first, args.second, result))
    else:
        formatter.text(format_compare(args.first, args.second, result))

    if getattr(args, "fail_on_diff", False) and not result.is_identical():
        return 1
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
