"""Random start generators for multi-start campaigns.

All generators draw from a ``numpy.random.Generator``. When none is given a
generator seeded with 0 is used so that campaigns are reproducible.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

import numpy as np

from ..exceptions import DimensionMismatchError

ArrayLike = Union[np.ndarray, Sequence[float], float]


def _default_rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return np.random.default_rng(0) if rng is None else rng


class UniformRandomVectorGenerator:
    """
    Points drawn uniformly from the box ``[lower, upper]``.

    Args:
        lower: Lower corner of the box.
        upper: Upper corner, same shape as ``lower`` and not below it.
        rng: Source of randomness.
    """

    def __init__(
        self,
        lower: ArrayLike,
        upper: ArrayLike,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        lower_arr = np.atleast_1d(np.asarray(lower, dtype=float))
        upper_arr = np.atleast_1d(np.asarray(upper, dtype=float))
        if lower_arr.shape != upper_arr.shape:
            raise DimensionMismatchError(upper_arr.size, lower_arr.size)
        if np.any(upper_arr < lower_arr):
            raise ValueError("upper bound must not be below lower bound.")
        self.lower = lower_arr
        self.upper = upper_arr
        self.rng = _default_rng(rng)

    @property
    def dimension(self) -> int:
        return int(self.lower.size)

    def next_vector(self) -> np.ndarray:
        return self.rng.uniform(self.lower, self.upper)

    __call__ = next_vector


class UncorrelatedRandomVectorGenerator:
    """
    Points with independent Gaussian components.

    Args:
        mean: Mean of every component.
        standard_deviation: Standard deviation of every component.
        rng: Source of randomness.
    """

    def __init__(
        self,
        mean: ArrayLike,
        standard_deviation: ArrayLike,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        mean_arr = np.atleast_1d(np.asarray(mean, dtype=float))
        std_arr = np.atleast_1d(np.asarray(standard_deviation, dtype=float))
        if mean_arr.shape != std_arr.shape:
            raise DimensionMismatchError(std_arr.size, mean_arr.size)
        if np.any(std_arr < 0):
            raise ValueError("standard_deviation must be non-negative.")
        self.mean = mean_arr
        self.standard_deviation = std_arr
        self.rng = _default_rng(rng)

    @property
    def dimension(self) -> int:
        return int(self.mean.size)

    def next_vector(self) -> np.ndarray:
        return self.mean + self.standard_deviation * self.rng.standard_normal(self.dimension)

    __call__ = next_vector


class UniformIntervalGenerator:
    """Random sub-intervals ``(a, b)`` with ``lower <= a <= b <= upper``."""

    def __init__(
        self, lower: float, upper: float, rng: Optional[np.random.Generator] = None
    ) -> None:
        if upper < lower:
            raise ValueError("upper bound must not be below lower bound.")
        self.lower = float(lower)
        self.upper = float(upper)
        self.rng = _default_rng(rng)

    def next_interval(self) -> tuple[float, float]:
        width = self.upper - self.lower
        bound1 = self.lower + self.rng.random() * width
        bound2 = self.lower + self.rng.random() * width
        return min(bound1, bound2), max(bound1, bound2)

    __call__ = next_interval


__all__ = [
    "UncorrelatedRandomVectorGenerator",
    "UniformIntervalGenerator",
    "UniformRandomVectorGenerator",
]
