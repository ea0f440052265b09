"""
envmerge explain command.

SUMMARY: Show where one variable's value comes from
"""

from __future__ import annotations

import argparse
import sys

from envmerge.cli import (
    OutputFormatter,
    add_path_arg,
    add_resolve_flags,
    add_standard_flags,
    get_base_path,
    get_config,
)
from envmerge.core.exceptions import ConfigError
from envmerge.core.resolver import resolve
from envmerge.report import format_variable_detail

SUMMARY = "Show where one variable's value comes from"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("name", help="Variable name (case-sensitive)")
    add_path_arg(parser)
    add_resolve_flags(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    base_path = get_base_path(args)

    try:
        manager = get_config(base_path)
    except ConfigError as e:
        formatter.error(e, error_code="config_error")
        return 1

    options = manager.resolve_options(
        include_ambient_env=getattr(args, "include_env", None),
        service_name=getattr(args, "service", None),
        strict_mode=False,
    )
    resolution = resolve(base_path, options, settings=manager.discovery_settings())

    var = resolution.get(args.name)
    if var is None:
        formatter.error(KeyError(args.name), f"Variable not found: {args.name}", error_code="not_found")
        return 1

    if formatter.json_mode:
        formatter.json_output(var.to_dict(include_chain=True))
    else:
        formatter.text(format_variable_detail(var))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
