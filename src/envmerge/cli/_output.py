"""Unified CLI output formatting utilities.

Supports both JSON and text output modes so every command reports results
and errors the same way.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional, TextIO

from envmerge.core.exceptions import EnvmergeError


class OutputFormatter:
    """Unified output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def error(
        self,
        error: Exception,
        message: Optional[str] = None,
        *,
        error_code: str = "error",
    ) -> None:
        """Output error result.

        Args:
            error: The exception that occurred
            message: Optional human-readable message (defaults to str(error))
            error_code: Error code for JSON output
        """
        msg = message or str(error)
        if self.json_mode:
            output: Dict[str, Any] = {"error": error_code, "message": msg}
            if isinstance(error, EnvmergeError) and error.context:
                output["context"] = error.context
            print(json.dumps(output, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(json.dumps(data, indent=self.indent, default=str, ensure_ascii=False))

    def text(self, message: str) -> None:
        # Rendered reports already end with a newline.
        print(message, end="" if message.endswith("\n") else "\n")


def print_success(message: str, *, file: TextIO | None = None) -> None:
    """Print success message with checkmark."""
    print(f"✓ {message}", file=file or sys.stdout)


__all__ = ["OutputFormatter", "print_success"]
