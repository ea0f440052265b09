"""
envmerge scan command.

SUMMARY: Resolve environment variables in a directory and explain precedence

Scans env files and compose manifests, resolves every variable and renders
the result as text, JSON or Markdown. In strict mode the report is still
printed before the command fails on undefined variables.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from envmerge.cli import (
    OutputFormatter,
    add_format_flag,
    add_path_arg,
    add_resolve_flags,
    add_standard_flags,
    get_base_path,
    get_config,
    options_from_args,
    output_format,
    print_success,
)
from envmerge.core.compare import compare
from envmerge.core.config import ConfigManager
from envmerge.core.exceptions import ConfigError, UndefinedVariablesError
from envmerge.core.models import ResolveOptions
from envmerge.core.resolver import resolve
from envmerge.report import (
    format_compare,
    render,
    resolution_payload,
    unwritable_names,
    write_effective,
)

SUMMARY = "Resolve environment variables in a directory and explain precedence"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_path_arg(parser)
    add_format_flag(parser)
    add_resolve_flags(parser)
    parser.add_argument(
        "--compare-with",
        dest="compare_with",
        metavar="PATH",
        help="Also compare final values against another directory",
    )
    parser.add_argument(
        "--write-effective",
        dest="write_effective",
        metavar="FILE",
        help="Write the resolved NAME=value pairs to FILE",
    )
    parser.add_argument(
        "--only-overridden",
        action="store_true",
        help="Only list variables whose value is overridden somewhere",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors in text output",
    )
    add_standard_flags(parser)


def _resolve_other(path: Path, options: ResolveOptions):
    other_cfg = ConfigManager(path)
    other_cfg.load_config()
    other_options = ResolveOptions(
        include_ambient_env=options.include_ambient_env,
        service_name=options.service_name,
    )
    return resolve(path, other_options, settings=other_cfg.discovery_settings())


def main(args: argparse.Namespace) -> int:
    """Resolve and render - delegates to the resolver and report renderers."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    base_path = get_base_path(args)

    try:
        manager = get_config(base_path)
    except ConfigError as e:
        formatter.error(e, error_code="config_error")
        return 1

    fmt = output_format(manager, args)
    formatter.json_mode = fmt == "json"
    options = options_from_args(manager, args, compare_with=getattr(args, "compare_with", None))

    failure: UndefinedVariablesError | None = None
    try:
        resolution = resolve(base_path, options, settings=manager.discovery_settings())
    except UndefinedVariablesError as e:
        failure = e
        resolution = e.resolution

    comparison = None
    if options.compare_with is not None:
        other = _resolve_other(options.compare_with.resolve(), options)
        comparison = compare(resolution, other)

    only_overridden = bool(getattr(args, "only_overridden", False))
    if fmt == "json":
        payload = resolution_payload(resolution, only_overridden=only_overridden)
        if comparison is not None:
            payload["compare"] = {"with": str(options.compare_with), **comparison.to_dict()}
        formatter.json_output(payload)
    else:
        color = (
            bool(manager.get("output.color", True))
            and not getattr(args, "no_color", False)
            and sys.stdout.isatty()
        )
        formatter.text(
            render(
                resolution,
                fmt,
                color=color,
                truncate=int(manager.get("output.truncate", 30)),
                only_overridden=only_overridden,
            )
        )
        if comparison is not None:
            formatter.text("")
            formatter.text(format_compare(str(base_path), str(options.compare_with), comparison))

    if getattr(args, "write_effective", None):
        skipped = unwritable_names(resolution)
        target = write_effective(resolution, args.write_effective)
        if not formatter.json_mode:
            written = len(resolution.variables) - len(skipped)
            print_success(f"Wrote {written} variable(s) to {target}", file=sys.stderr)
            if skipped:
                print(
                    f"Skipped {len(skipped)} variable(s) that do not fit on one env line: {', '.join(skipped)}",
                    file=sys.stderr,
                )

    if failure is not None:
        formatter.error(failure, error_code="strict_mode")
        return 1
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
