"""CLI logging setup.

Library modules only create ``logging.getLogger(__name__)`` loggers. The CLI
calls :func:`configure_cli_logging` once per invocation to attach a single
stderr handler to the ``envmerge`` logger.
"""
from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "envmerge"

_CLI_HANDLER: logging.Handler | None = None


def configure_cli_logging(*, verbose: bool = False, json_mode: bool = False) -> logging.Logger:
    """Install (or replace) the envmerge stderr handler.

    Per-artifact warnings already appear in the rendered report, so the
    default level is ERROR; ``verbose`` lowers it to DEBUG. JSON mode gets a
    NullHandler so stderr stays free of log lines.

    Idempotent per process: a previously installed handler is replaced.
    """
    global _CLI_HANDLER

    logger = logging.getLogger(PACKAGE_LOGGER)
    if _CLI_HANDLER is not None:
        logger.removeHandler(_CLI_HANDLER)
        _CLI_HANDLER.close()
        _CLI_HANDLER = None

    if json_mode and not verbose:
        handler: logging.Handler = logging.NullHandler()
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    logger.setLevel(logging.DEBUG if verbose else logging.ERROR)
    logger.addHandler(handler)
    logger.propagate = False
    _CLI_HANDLER = handler
    return logger


def reset_cli_logging_for_tests() -> None:
    """Test-only: remove the CLI handler and restore propagation."""
    global _CLI_HANDLER
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _CLI_HANDLER is not None:
        logger.removeHandler(_CLI_HANDLER)
        _CLI_HANDLER.close()
        _CLI_HANDLER = None
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


__all__ = ["PACKAGE_LOGGER", "configure_cli_logging", "reset_cli_logging_for_tests"]
