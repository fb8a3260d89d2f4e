"""Convergence checkers used by the simplex searches.

A checker compares the same vertex slot across two consecutive iterations.
Both simple checkers accept a pair when the change is small either relative
to the magnitude involved or in absolute terms. Passing a negative threshold
disables the corresponding criterion.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from .core import PointValuePair

DEFAULT_RELATIVE_THRESHOLD = 100 * float(np.finfo(float).eps)
DEFAULT_ABSOLUTE_THRESHOLD = 100 * float(np.finfo(float).tiny)


class ConvergenceChecker(ABC):
    """Decides whether a search has stopped making progress."""

    @abstractmethod
    def converged(
        self, iteration: int, previous: PointValuePair, current: PointValuePair
    ) -> bool:
        """Return True if ``current`` is close enough to ``previous``."""

    def __call__(
        self, iteration: int, previous: PointValuePair, current: PointValuePair
    ) -> bool:
        return self.converged(iteration, previous, current)


class _ThresholdChecker(ConvergenceChecker):
    def __init__(
        self,
        relative_threshold: float = DEFAULT_RELATIVE_THRESHOLD,
        absolute_threshold: float = DEFAULT_ABSOLUTE_THRESHOLD,
    ) -> None:
        self.relative_threshold = float(relative_threshold)
        self.absolute_threshold = float(absolute_threshold)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(relative_threshold={self.relative_threshold!r}, "
            f"absolute_threshold={self.absolute_threshold!r})"
        )


class SimpleScalarValueChecker(_ThresholdChecker):
    """Converged when the objective value no longer changes."""

    def converged(
        self, iteration: int, previous: PointValuePair, current: PointValuePair
    ) -> bool:
        p = previous.value
        c = current.value
        if p is None or c is None:
            return False
        difference = abs(p - c)
        size = max(abs(p), abs(c))
        return (
            difference <= size * self.relative_threshold
            or difference <= self.absolute_threshold
        )


class SimpleRealPointChecker(_ThresholdChecker):
    """Converged when every coordinate of the point no longer changes."""

    def converged(
        self, iteration: int, previous: PointValuePair, current: PointValuePair
    ) -> bool:
        p = np.atleast_1d(np.asarray(previous.point, dtype=float))
        c = np.atleast_1d(np.asarray(current.point, dtype=float))
        if p.shape != c.shape:
            return False
        difference = np.abs(p - c)
        size = np.maximum(np.abs(p), np.abs(c))
        per_coordinate = (difference <= size * self.relative_threshold) | (
            difference <= self.absolute_threshold
        )
        return bool(np.all(per_coordinate))


def check_simplex_convergence(
    checker: ConvergenceChecker,
    iteration: int,
    previous: Sequence[PointValuePair],
    current: Sequence[PointValuePair],
) -> bool:
    """True if every vertex slot reports convergence."""
    if len(previous) != len(current):
        return False
    converged = True
    for before, after in zip(previous, current):
        converged &= checker.converged(iteration, before, after)
    return converged


__all__ = [
    "ConvergenceChecker",
    "DEFAULT_ABSOLUTE_THRESHOLD",
    "DEFAULT_RELATIVE_THRESHOLD",
    "SimpleRealPointChecker",
    "SimpleScalarValueChecker",
    "check_simplex_convergence",
]
