"""Logging setup shared by the library and the server."""

from __future__ import annotations

import logging

from project_context.config import PROJECT_CONTEXT_LOG_LEVEL

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_ROOT_LOGGER_NAME = "project_context"

_configured = False


def configure_logging(level: str | int = PROJECT_CONTEXT_LOG_LEVEL) -> None:
    """Attach a stream handler to the package loggers once.

    Args:
        level: Log level name or number applied to the package loggers.
    """
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    for name in (_ROOT_LOGGER_NAME, "server"):
        logger = logging.getLogger(name)
        logger.addHandler(handler)
        logger.setLevel(level)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a module logger, configuring package logging on first use."""
    configure_logging()
    return logging.getLogger(name)
