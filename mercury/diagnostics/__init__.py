"""Diagnostics and debugging utilities for mercury."""

from .core import assert_simplex_sorted, is_simplex_sorted
from .debug_mode import debug_context, is_debug_enabled, set_debug_enabled

__all__ = [
    "assert_simplex_sorted",
    "is_simplex_sorted",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
