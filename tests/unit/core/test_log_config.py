from __future__ import annotations

import logging

import pytest

from envmerge.core.log_config import PACKAGE_LOGGER, configure_cli_logging, reset_cli_logging_for_tests

pytestmark = pytest.mark.fast


def _handlers() -> list[logging.Handler]:
    return logging.getLogger(PACKAGE_LOGGER).handlers


def test_default_level_is_error() -> None:
    logger = configure_cli_logging()

    assert logger.level == logging.ERROR
    assert logger.propagate is False
    assert len(_handlers()) == 1
    assert isinstance(_handlers()[0], logging.StreamHandler)


def test_verbose_enables_debug() -> None:
    assert configure_cli_logging(verbose=True).level == logging.DEBUG


def test_json_mode_installs_null_handler() -> None:
    configure_cli_logging(json_mode=True)

    assert isinstance(_handlers()[0], logging.NullHandler)


def test_reconfiguring_replaces_the_handler() -> None:
    configure_cli_logging()
    configure_cli_logging(verbose=True)

    assert len(_handlers()) == 1


def test_reset_restores_propagation() -> None:
    configure_cli_logging()
    reset_cli_logging_for_tests()

    logger = logging.getLogger(PACKAGE_LOGGER)
    assert logger.handlers == []
    assert logger.propagate is True
    assert logger.level == logging.NOTSET
