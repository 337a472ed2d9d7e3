"""Tests for shared logging configuration."""

from __future__ import annotations

import importlib
import logging
from typing import List

import pytest

import catalog_rest.logging_config as logging_config


def _reset_package_logger() -> None:
    """Remove all handlers from the package logger to create a clean slate."""
    package_logger = logging.getLogger(logging_config.PACKAGE_LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.propagate = True


def _handler_ids(logger: logging.Logger) -> List[int]:
    """Return stable identifiers for handlers attached to ``logger``."""
    return [id(handler) for handler in logger.handlers]


def test_configure_logging_is_idempotent() -> None:
    """Importing or configuring logging repeatedly must not add handlers."""
    _reset_package_logger()
    reloaded_logging = importlib.reload(logging_config)
    package_logger = logging.getLogger(reloaded_logging.PACKAGE_LOGGER_NAME)
    assert len(package_logger.handlers) == 1
    existing_handlers = _handler_ids(package_logger)

    reloaded_logging.configure_logging()
    reloaded_logging.configure_logging("debug")

    assert _handler_ids(package_logger) == existing_handlers
    assert package_logger.level == logging.DEBUG
    assert package_logger.propagate is False
    reloaded_logging.configure_logging()


def test_module_loggers_share_package_handler() -> None:
    """Module loggers are children of the configured package logger."""
    import catalog_rest.controller as controller_module

    package_logger = logging.getLogger(logging_config.PACKAGE_LOGGER_NAME)
    assert controller_module.logger.parent is package_logger
    assert controller_module.logger is logging.getLogger(controller_module.__name__)


def test_unknown_level_is_rejected() -> None:
    with pytest.raises(ValueError):
        logging_config.configure_logging("chatty")
