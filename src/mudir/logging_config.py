"""Logging setup for mudir."""

__all__ = [
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import logging
import sys
import threading
from typing import Any

_LOGGER_PREFIX = "mudir"
_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_configured = False
_lock = threading.Lock()
_handler: logging.Handler | None = None


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the mudir namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


def configure_logging(
    *,
    verbose: bool = False,
    stream: Any = None,
) -> None:
    """Configure the mudir logger hierarchy (idempotent).

    Warnings and errors always go to stderr; ``verbose`` lowers the level to
    DEBUG so hydration and write activity become visible.
    """
    global _configured, _handler
    with _lock:
        if _configured:
            return
        _configured = True

    root_logger = logging.getLogger(_LOGGER_PREFIX)
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    _handler = logging.StreamHandler(stream or sys.stderr)
    _handler.setFormatter(logging.Formatter(_FORMAT))
    root_logger.addHandler(_handler)


def reset_logging() -> None:
    """Reset logging configuration. FOR TESTING ONLY."""
    global _configured, _handler
    with _lock:
        _configured = False
    logger = logging.getLogger(_LOGGER_PREFIX)
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler = None
    logger.setLevel(logging.NOTSET)
