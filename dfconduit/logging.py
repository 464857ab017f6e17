"""Logging utilities for dfconduit.

Every optimizer logs through a cached, package-scoped logger so that a single
call to :func:`set_log_level` or :func:`configure_logging` controls the verbosity
of all algorithms at once.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

_DEFAULT_LEVEL = logging.WARNING
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_loggers: dict[str, logging.Logger] = {}


def _resolve_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger scoped under ``dfconduit``.

    Args:
        name: Logger name, typically ``__name__`` of the calling module. Names
            outside the package are prefixed with ``dfconduit.``.

    Returns:
        Cached logger instance with a single stderr handler.

    Example:
        >>> from dfconduit.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("population initialized")
    """
    if name is None:
        name = "dfconduit"
    logger_name = name if name.startswith("dfconduit") else f"dfconduit.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the level of every dfconduit logger, including ones created later.

    Args:
        level: ``logging`` level constant or its name (``"DEBUG"``, ``"INFO"``...).
    """
    global _DEFAULT_LEVEL
    level = _resolve_level(level)
    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
    _DEFAULT_LEVEL = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """Reconfigure level, format and output stream of all dfconduit loggers.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. If None, uses the default.
        stream: Output stream (default: ``sys.stderr``).
    """
    global _DEFAULT_LEVEL
    level = _resolve_level(level)
    formatter = logging.Formatter(format_string or _DEFAULT_FORMAT)
    if stream is None:
        stream = sys.stderr

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _DEFAULT_LEVEL = level


__all__ = ["get_logger", "set_log_level", "configure_logging"]
