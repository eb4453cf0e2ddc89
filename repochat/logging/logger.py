# repochat/logging/logger.py
"""
Logger factory for repochat.

All modules do:

    from repochat.logging.logger import get_logger
    logger = get_logger(__name__)

Handlers are installed once, on the package root logger, by
configure_logging(). Library use without configure_logging() stays silent
apart from warnings, which the stdlib last-resort handler prints.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER_NAME = "repochat"
DEFAULT_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"

_handler: logging.Handler | None = None


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the repochat namespace."""
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(level: str | int = "WARNING") -> None:
    """
    Install a stderr handler on the root repochat logger.

    Safe to call repeatedly; the handler is rebound to the current
    sys.stderr each time.
    """
    global _handler

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    if _handler is not None:
        root.removeHandler(_handler)
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    root.addHandler(_handler)
    root.propagate = False
