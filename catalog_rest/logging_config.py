"""Shared logging configuration for the ``catalog_rest`` package."""

from __future__ import annotations

import logging as _logging
from typing import Iterable
from typing import Union

PACKAGE_LOGGER_NAME = "catalog_rest"
_DEFAULT_LOG_LEVEL = _logging.INFO
_HANDLER_NAME = "catalog_rest.stream"
_LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def _handler_exists(handlers: Iterable[_logging.Handler]) -> bool:
    """Return ``True`` when the shared stream handler is already attached."""
    return any(getattr(handler, "name", "") == _HANDLER_NAME for handler in handlers)


def _resolve_level(level: Union[int, str]) -> int:
    """Translate textual level names such as ``"debug"`` into numeric levels."""
    if isinstance(level, int):
        return level
    resolved = _logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(level: Union[int, str] = _DEFAULT_LOG_LEVEL) -> _logging.Logger:
    """Configure and return the package logger.

    Args:
        level (Union[int, str]): Level applied to the package logger, either
            numeric or a level name. Defaults to :data:`logging.INFO`.

    Returns:
        logging.Logger: The shared package logger instance.
    """
    logger = _logging.getLogger(PACKAGE_LOGGER_NAME)
    logger.setLevel(_resolve_level(level))
    if not _handler_exists(logger.handlers):
        handler = _logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(_logging.Formatter(_LOG_FORMAT))
        logger.addHandler(handler)
    logger.propagate = False
    return logger


configure_logging()

__all__ = ["configure_logging", "PACKAGE_LOGGER_NAME"]
