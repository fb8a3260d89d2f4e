"""Exception hierarchy shared by the mercury optimizers.

Configuration problems derive from :class:`ValueError` and are raised as soon
as they are detected. Failures that happen while a search is running derive
from :class:`OptimizationError`; a multi-start campaign records those per
run and only raises :class:`NoConvergenceError` when every start failed.
"""

from __future__ import annotations

from typing import Optional, Sequence


class OptimizationError(RuntimeError):
    """A search could not produce an optimum."""


class MaxCountExceededError(OptimizationError):
    """A counted resource (evaluations, iterations) went over its limit."""

    def __init__(self, max_count: int, message: Optional[str] = None) -> None:
        self.max_count = int(max_count)
        super().__init__(message or f"maximal count ({self.max_count}) exceeded")


class TooManyEvaluationsError(MaxCountExceededError):
    """The objective function was called more often than allowed."""

    def __init__(self, max_count: int, point: object = None) -> None:
        self.point = point
        super().__init__(
            max_count,
            f"maximal number of evaluations ({int(max_count)}) exceeded"
            + ("" if point is None else f" at point {point!r}"),
        )


class TooManyIterationsError(MaxCountExceededError):
    """The search performed more iterations than allowed."""

    def __init__(self, max_count: int) -> None:
        super().__init__(
            max_count, f"maximal number of iterations ({int(max_count)}) exceeded"
        )


class NoConvergenceError(OptimizationError):
    """None of the starts of a multi-start campaign converged."""

    def __init__(self, starts: int) -> None:
        self.starts = int(starts)
        super().__init__(f"none of the {self.starts} start points lead to convergence")


class DimensionMismatchError(ValueError):
    """Two objects that must share a dimension do not."""

    def __init__(self, got: int, expected: int) -> None:
        self.got = int(got)
        self.expected = int(expected)
        super().__init__(f"dimension mismatch: got {self.got}, expected {self.expected}")


class DegenerateSimplexError(ValueError):
    """A simplex has two identical vertices."""

    def __init__(self, indices: Sequence[int]) -> None:
        self.indices = tuple(int(i) for i in indices)
        i, j = self.indices
        super().__init__(f"equal vertices {i} and {j} in simplex configuration")


class NoOptimumComputedError(RuntimeError):
    """Results were requested before any optimization was run."""

    def __init__(self) -> None:
        super().__init__("no optimum computed yet")


__all__ = [
    "DegenerateSimplexError",
    "DimensionMismatchError",
    "MaxCountExceededError",
    "NoConvergenceError",
    "NoOptimumComputedError",
    "OptimizationError",
    "TooManyEvaluationsError",
    "TooManyIterationsError",
]
