"""
envmerge CLI package.

Commands are auto-discovered from ``cli/commands/``; each module exposes
``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter, print_success
from ._args import (
    add_format_flag,
    add_json_flag,
    add_path_arg,
    add_resolve_flags,
    add_standard_flags,
    add_verbose_flag,
)
from ._utils import get_base_path, get_config, options_from_args, output_format

__all__ = [
    # Output formatting
    "OutputFormatter",
    "print_success",
    # Argument helpers
    "add_format_flag",
    "add_json_flag",
    "add_path_arg",
    "add_resolve_flags",
    "add_standard_flags",
    "add_verbose_flag",
    # Utilities
    "get_base_path",
    "get_config",
    "options_from_args",
    "output_format",
]
