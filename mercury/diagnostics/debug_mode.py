"""Debug mode switch for mercury.

When debug mode is on, optimizers verify the simplex ordering after every
evaluation pass. The initial state is read from the ``MERCURY_DEBUG``
environment variable.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

_DEBUG_ENV_VAR = "MERCURY_DEBUG"
_TRUTHY = ("1", "true", "yes", "on")


def _read_env() -> bool:
    return os.getenv(_DEBUG_ENV_VAR, "0").strip().lower() in _TRUTHY


_debug_enabled: bool = _read_env()


def is_debug_enabled() -> bool:
    """
    Return whether invariant checking is currently enabled.

    Returns
    -------
    bool
        True if debug mode is on.
    """
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """
    Turn debug mode on or off for the whole process.

    Parameters
    ----------
    enabled:
        New debug state.
    """
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Temporarily set debug mode, restoring the previous state on exit.

    Example
    -------
    >>> with debug_context(True):
    ...     pass  # simplex invariants are checked in here
    """
    global _debug_enabled
    previous = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = previous
