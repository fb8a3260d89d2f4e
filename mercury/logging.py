"""Logging helpers for mercury.

Every module obtains its logger through :func:`get_logger` so that the whole
library can be silenced or made verbose from one place. Optimizers report
simplex steps at DEBUG, failed runs at INFO and campaign-wide failures at
WARNING.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

_ROOT_NAME = "mercury"
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_default_level = logging.WARNING
_loggers: dict[str, logging.Logger] = {}


def _resolve_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return int(level)


def _make_handler(
    stream: IO[str], level: int, format_string: str = _DEFAULT_FORMAT
) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string))
    return handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the cached logger for ``name`` under the ``mercury`` namespace.

    Args:
        name: Usually ``__name__`` of the calling module. Names that do not
            already start with ``mercury.`` are prefixed. ``None`` gives the
            package logger.

    Returns:
        A logger writing ``[LEVEL] name: message`` lines to stderr that does
        not propagate to the root logger.

    Example:
        >>> from mercury.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("reflected point accepted")
    """
    if name is None or name == _ROOT_NAME:
        logger_name = _ROOT_NAME
    elif name.startswith(_ROOT_NAME + "."):
        logger_name = name
    else:
        logger_name = f"{_ROOT_NAME}.{name}"

    cached = _loggers.get(logger_name)
    if cached is not None:
        return cached

    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        logger.setLevel(_default_level)
        logger.addHandler(_make_handler(sys.stderr, _default_level))
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Change the level of every mercury logger, existing and future.

    Args:
        level: A ``logging`` constant or its name (``"DEBUG"``, ``"info"``...).
            Unknown names fall back to WARNING.
    """
    global _default_level
    resolved = _resolve_level(level)
    for logger in _loggers.values():
        logger.setLevel(resolved)
        for handler in logger.handlers:
            handler.setLevel(resolved)
    _default_level = resolved


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Replace the handlers of all mercury loggers.

    Intended to be called once by applications that want optimizer traces.

    Args:
        level: Logging level (default WARNING).
        format_string: Record format, ``[LEVEL] name: message`` if omitted.
        stream: Destination stream, stderr if omitted.

    Example:
        >>> import logging
        >>> from mercury.logging import configure_logging
        >>> configure_logging(level=logging.DEBUG)
    """
    global _default_level
    resolved = _resolve_level(level)
    target = sys.stderr if stream is None else stream
    fmt = _DEFAULT_FORMAT if format_string is None else format_string

    for logger in _loggers.values():
        logger.setLevel(resolved)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.addHandler(_make_handler(target, resolved, fmt))

    _default_level = resolved


__all__ = ["configure_logging", "get_logger", "set_log_level"]
