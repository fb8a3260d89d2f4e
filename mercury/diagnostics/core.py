"""Invariant checks for simplex searches."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from ..optimize.core import GoalType
    from ..optimize.simplex import Simplex


def is_simplex_sorted(simplex: "Simplex", goal: "GoalType") -> bool:
    """
    Check that every vertex is evaluated and the vertices are ranked best-first.

    Parameters
    ----------
    simplex:
        Simplex to inspect.
    goal:
        Goal giving the ranking direction.
    """
    if not all(vertex.evaluated for vertex in simplex):
        return False
    keys = np.array([goal.key(vertex.value) for vertex in simplex], dtype=float)
    return bool(np.all(keys[:-1] <= keys[1:]))


def assert_simplex_sorted(simplex: "Simplex", goal: "GoalType") -> None:
    """
    Raise if the simplex has a pending vertex or is not ranked best-first.

    Raises
    ------
    ValueError
        If a vertex has no value or two neighbours are out of order.
    """
    pending = [i for i, vertex in enumerate(simplex) if not vertex.evaluated]
    if pending:
        raise ValueError(f"Simplex has pending vertices at indices {pending}.")
    if not is_simplex_sorted(simplex, goal):
        values = [vertex.value for vertex in simplex]
        raise ValueError(
            f"Simplex is not sorted for {goal.name.lower()}: values {values}"
        )


__all__ = ["assert_simplex_sorted", "is_simplex_sorted"]
