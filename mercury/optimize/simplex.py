"""Simplex geometry for the direct-search optimizers.

A simplex in ``n`` dimensions is an ordered list of ``n + 1`` vertices. Once
evaluated it is ranked best-first for the active goal, so index 0 is the best
vertex and index ``n`` the worst.
"""

from __future__ import annotations

from typing import Iterator, Optional, Sequence, Union, overload

import numpy as np

from ..diagnostics import assert_simplex_sorted, is_debug_enabled
from ..exceptions import DegenerateSimplexError, DimensionMismatchError
from .core import Array, GoalType, Objective, PointValuePair, RunContext


class StartConfiguration:
    """
    Shape of the initial simplex, independent of where it is placed.

    ``offsets[i]`` is the displacement of vertex ``i + 1`` from vertex 0, so a
    configuration for ``n`` dimensions is an ``n x n`` array. The same
    configuration can build simplices around any number of start points.
    """

    def __init__(self, offsets: Array) -> None:
        offsets = np.array(offsets, dtype=float)
        if offsets.ndim != 2 or offsets.shape[0] != offsets.shape[1]:
            raise ValueError(
                f"Start configuration must be a square array, got shape {offsets.shape}."
            )
        offsets.flags.writeable = False
        self._offsets = offsets

    @classmethod
    def from_reference(
        cls, reference_simplex: Union[Array, Sequence[Sequence[float]]]
    ) -> "StartConfiguration":
        """
        Build a configuration from ``n + 1`` reference vertices of length ``n``.

        Only the relative position of the vertices matters; the first one is
        replaced by the start point when a simplex is built.

        Raises:
            ValueError: If no vertex is given.
            DimensionMismatchError: If a vertex does not have ``n`` coordinates.
            DegenerateSimplexError: If two vertices are identical.
        """
        rows = [np.asarray(row, dtype=float).reshape(-1) for row in reference_simplex]
        n = len(rows) - 1
        if n < 0:
            raise ValueError("A simplex needs at least one point.")
        for i, row in enumerate(rows):
            if row.size != n:
                raise DimensionMismatchError(row.size, n)
            for j in range(i):
                if np.array_equal(row, rows[j]):
                    raise DegenerateSimplexError((i, j))
        if n == 0:
            return cls(np.zeros((0, 0)))
        ref0 = rows[0]
        return cls(np.stack([row - ref0 for row in rows[1:]]))

    @classmethod
    def from_steps(cls, steps: Union[Array, Sequence[float]]) -> "StartConfiguration":
        """
        Build an axis-aligned configuration from one step size per dimension.

        Vertex ``i + 1`` is moved by ``steps[0..i]`` along the first ``i + 1``
        axes, which gives a non-degenerate simplex whenever no step is zero.
        """
        steps = np.asarray(steps, dtype=float).reshape(-1)
        n = steps.size
        zero = np.flatnonzero(steps == 0.0)
        if zero.size:
            j = int(zero[0])
            raise DegenerateSimplexError((j, j + 1))
        offsets = np.tril(np.tile(steps, (n, 1)))
        return cls(offsets)

    @classmethod
    def unit(cls, dimension: int) -> "StartConfiguration":
        """Unit steps along every axis."""
        return cls.from_steps(np.ones(int(dimension)))

    @property
    def dimension(self) -> int:
        return int(self._offsets.shape[0])

    @property
    def offsets(self) -> Array:
        return self._offsets

    def __repr__(self) -> str:
        return f"StartConfiguration(dimension={self.dimension})"


class Simplex:
    """Ordered ``n + 1`` vertices of an ``n``-dimensional search."""

    def __init__(self, vertices: Sequence[PointValuePair]) -> None:
        vertices = list(vertices)
        if not vertices:
            raise ValueError("A simplex needs at least one vertex.")
        n = len(vertices) - 1
        for vertex in vertices:
            size = np.size(vertex.point)
            if size != n:
                raise DimensionMismatchError(size, n)
        self._vertices = vertices

    @classmethod
    def build(
        cls, start_point: Union[Array, Sequence[float]], configuration: StartConfiguration
    ) -> "Simplex":
        """Place ``configuration`` at ``start_point``; every vertex is pending."""
        start = np.asarray(start_point, dtype=float).reshape(-1)
        if start.size != configuration.dimension:
            raise DimensionMismatchError(start.size, configuration.dimension)
        vertices = [PointValuePair(start)]
        vertices.extend(PointValuePair(start + offset) for offset in configuration.offsets)
        return cls(vertices)

    # Sequence protocol -------------------------------------------------

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[PointValuePair]:
        return iter(self._vertices)

    @overload
    def __getitem__(self, index: int) -> PointValuePair: ...

    @overload
    def __getitem__(self, index: slice) -> list[PointValuePair]: ...

    def __getitem__(self, index):
        return self._vertices[index]

    def __repr__(self) -> str:
        return f"Simplex({self._vertices!r})"

    # Accessors ---------------------------------------------------------

    @property
    def dimension(self) -> int:
        return len(self._vertices) - 1

    @property
    def vertices(self) -> tuple[PointValuePair, ...]:
        return tuple(self._vertices)

    @property
    def points(self) -> Array:
        return np.stack([np.asarray(v.point, dtype=float) for v in self._vertices])

    @property
    def values(self) -> list[Optional[float]]:
        return [v.value for v in self._vertices]

    @property
    def best(self) -> PointValuePair:
        return self._vertices[0]

    @property
    def second_best(self) -> PointValuePair:
        return self._vertices[-2] if len(self._vertices) > 1 else self._vertices[0]

    @property
    def worst(self) -> PointValuePair:
        return self._vertices[-1]

    def copy(self) -> "Simplex":
        return Simplex(self._vertices)

    # Operations --------------------------------------------------------

    def evaluate(self, f: Objective, goal: GoalType, ctx: RunContext) -> None:
        """Evaluate every pending vertex, then rank all vertices best-first."""
        for i, vertex in enumerate(self._vertices):
            if not vertex.evaluated:
                self._vertices[i] = vertex.with_value(ctx.evaluate(f, vertex.point))
        # list.sort is stable: equal values keep their previous order
        self._vertices.sort(key=lambda v: goal.key(v.value))
        if is_debug_enabled():
            self.check_invariants(goal)

    def check_invariants(self, goal: GoalType) -> None:
        """Raise ValueError if a vertex is pending or the ranking is broken."""
        assert_simplex_sorted(self, goal)

    def centroid(self) -> Array:
        """Mean of all vertices except the worst one."""
        n = self.dimension
        total = np.zeros(n)
        for vertex in self._vertices[:n]:
            total += vertex.point
        return total * (1.0 / n)

    def replace_worst(self, vertex: PointValuePair, goal: GoalType) -> None:
        """
        Drop the worst vertex in favour of ``vertex``.

        ``vertex`` is moved down the best ``n`` slots, swapping with each
        vertex it beats; whatever is left over after the scan becomes the new
        worst vertex.
        """
        n = self.dimension
        for i in range(n):
            if goal.is_better(vertex.value, self._vertices[i].value):
                self._vertices[i], vertex = vertex, self._vertices[i]
        self._vertices[n] = vertex

    def shrink(self, sigma: float) -> None:
        """Pull every vertex towards the best one; moved vertices become pending."""
        x_best = np.asarray(self._vertices[0].point)
        for i in range(1, len(self._vertices)):
            x = np.asarray(self._vertices[i].point)
            self._vertices[i] = PointValuePair(x_best + sigma * (x - x_best))

    def transformed(self, coefficient: float) -> "Simplex":
        """
        Map every vertex ``x`` to ``x0 + coefficient * (x0 - x)``.

        The best vertex ``x0`` keeps its value; the others are pending.
        """
        x_best = np.asarray(self._vertices[0].point)
        vertices = [self._vertices[0]]
        for vertex in self._vertices[1:]:
            x = np.asarray(vertex.point)
            vertices.append(PointValuePair(x_best + coefficient * (x_best - x)))
        return Simplex(vertices)


__all__ = ["Simplex", "StartConfiguration"]
