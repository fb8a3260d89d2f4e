"""Core types shared by the direct-search optimizers.

A search works on :class:`PointValuePair` vertices. A vertex whose ``value``
is ``None`` is *pending*: its point is known but the objective has not been
called on it yet. Every single run owns a :class:`RunContext` holding its
counters and budgets and ends with a :class:`RunOutcome`, which is either
converged (carrying the optimum) or failed (carrying the error).
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from numbers import Real
from typing import Any, Callable, Optional, Union

import numpy as np

from ..exceptions import TooManyEvaluationsError, TooManyIterationsError

Array = np.ndarray
Point = Union[Array, float]
Objective = Callable[[Any], float]
UnivariateObjective = Callable[[float], float]

UNLIMITED = sys.maxsize


class GoalType(Enum):
    """Direction of the search."""

    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"

    def key(self, value: float) -> float:
        """Sort key under which ascending order means best-first."""
        return value if self is GoalType.MINIMIZE else -value

    def compare(self, a: float, b: float) -> int:
        """Return -1, 0 or 1 as ``a`` is better than, as good as, or worse than ``b``."""
        ka, kb = self.key(a), self.key(b)
        if ka == kb:
            return 0
        return -1 if ka < kb else 1

    def is_better(self, a: float, b: float) -> bool:
        """True if ``a`` is strictly better than ``b``."""
        return self.key(a) < self.key(b)


def _freeze_point(point: Any) -> Point:
    if isinstance(point, Real) and not isinstance(point, bool):
        return float(point)
    arr = np.array(point, dtype=float).reshape(-1)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class PointValuePair:
    """
    A point of the search space and the objective value found there.

    Attributes:
        point: Read-only float array for multivariate searches, ``float`` for
            univariate ones.
        value: Objective value, or ``None`` while the point is pending.
    """

    point: Point
    value: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "point", _freeze_point(self.point))
        if self.value is not None:
            object.__setattr__(self, "value", float(self.value))

    @property
    def evaluated(self) -> bool:
        return self.value is not None

    def with_value(self, value: float) -> "PointValuePair":
        return PointValuePair(self.point, value)

    def __repr__(self) -> str:
        point = self.point if isinstance(self.point, float) else self.point.tolist()
        value = "pending" if self.value is None else repr(self.value)
        return f"PointValuePair(point={point}, value={value})"


class RunStatus(Enum):
    """Final status of a single run."""

    CONVERGED = "converged"
    FAILED = "failed"


class RunState(Enum):
    """Lifecycle of a single run."""

    NOT_STARTED = "not_started"
    EVALUATING = "evaluating"
    ITERATING = "iterating"
    CONVERGED = "converged"
    FAILED = "failed"


@dataclass
class RunContext:
    """
    Counters and budgets of one optimization run.

    A fresh context is created for every run, so nothing here is shared
    between the starts of a multi-start campaign.
    """

    max_evaluations: int = UNLIMITED
    max_iterations: int = UNLIMITED
    evaluations: int = 0
    iterations: int = 0
    state: RunState = RunState.NOT_STARTED

    def evaluate(self, f: Objective, point: Point) -> float:
        """Call ``f`` at ``point``, charging one evaluation to the budget."""
        self.evaluations += 1
        if self.evaluations > self.max_evaluations:
            raise TooManyEvaluationsError(self.max_evaluations, point)
        return float(f(point))

    def increment_iterations(self) -> None:
        self.iterations += 1
        if self.iterations > self.max_iterations:
            raise TooManyIterationsError(self.max_iterations)

    def enter(self, state: RunState) -> None:
        if self.state in (RunState.CONVERGED, RunState.FAILED):
            raise RuntimeError(f"run already finished in state {self.state.value}")
        self.state = state


@dataclass(frozen=True, eq=False)
class RunOutcome:
    """
    Tagged result of one run.

    Attributes:
        status: Whether the run converged or failed.
        optimum: Best vertex for converged runs, ``None`` otherwise.
        error: Exception that ended a failed run.
        evaluations: Objective calls spent by the run.
        iterations: Iterations performed by the run.
    """

    status: RunStatus
    optimum: Optional[PointValuePair] = None
    error: Optional[BaseException] = field(default=None, repr=False)
    evaluations: int = 0
    iterations: int = 0

    @classmethod
    def converged(cls, optimum: PointValuePair, ctx: RunContext) -> "RunOutcome":
        return cls(
            status=RunStatus.CONVERGED,
            optimum=optimum,
            evaluations=ctx.evaluations,
            iterations=ctx.iterations,
        )

    @classmethod
    def failed(cls, error: BaseException, ctx: RunContext) -> "RunOutcome":
        return cls(
            status=RunStatus.FAILED,
            error=error,
            evaluations=ctx.evaluations,
            iterations=ctx.iterations,
        )

    @property
    def ok(self) -> bool:
        return self.status is RunStatus.CONVERGED

    def unwrap(self) -> PointValuePair:
        """Return the optimum, re-raising the recorded error of a failed run."""
        if self.ok:
            assert self.optimum is not None
            return self.optimum
        assert self.error is not None
        raise self.error


__all__ = [
    "Array",
    "GoalType",
    "Objective",
    "Point",
    "PointValuePair",
    "RunContext",
    "RunOutcome",
    "RunState",
    "RunStatus",
    "UNLIMITED",
    "UnivariateObjective",
]
