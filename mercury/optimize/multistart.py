"""Multi-start wrappers around single-run optimizers.

A local search started from one point may settle in a local optimum.
Multi-start runs the wrapped optimizer several times, once from the caller's
start and then from randomly drawn starts, and returns the best result while
keeping every run's outcome for inspection.

Runs are isolated: a run that exhausts its budget or whose objective raises
is recorded as failed and the campaign carries on. Only when no run at all
converged is :class:`~mercury.exceptions.NoConvergenceError` raised.
"""

from __future__ import annotations

from typing import Callable, Generic, Optional, Protocol, Sequence, TypeVar, Union

import numpy as np

from ..exceptions import NoConvergenceError, NoOptimumComputedError
from ..logging import get_logger
from .convergence import ConvergenceChecker
from .core import (
    UNLIMITED,
    Array,
    GoalType,
    Objective,
    PointValuePair,
    RunOutcome,
    UnivariateObjective,
)
from .nelder_mead import NelderMeadConfig, NelderMeadOptimizer
from .random import UniformIntervalGenerator

logger = get_logger(__name__)

S = TypeVar("S")
S_contra = TypeVar("S_contra", contravariant=True)


class StartRunner(Protocol[S_contra]):
    """Anything that performs one run from a start of type ``S``."""

    def run(
        self,
        f: Callable,
        goal: GoalType,
        start: S_contra,
        max_evaluations: int = ...,
        max_iterations: Optional[int] = ...,
    ) -> RunOutcome: ...


def rank_outcomes(outcomes: Sequence[RunOutcome], goal: GoalType) -> list[RunOutcome]:
    """
    Sort outcomes best-first for ``goal``.

    Failed runs go last and keep their relative order; the sort is stable so
    equal values keep theirs too.
    """

    def key(outcome: RunOutcome) -> tuple[int, float]:
        if outcome.ok:
            return (0, goal.key(outcome.optimum.value))
        return (1, 0.0)

    return sorted(outcomes, key=key)


class MultiStartOptimizer(Generic[S]):
    """
    Repeat a single-run optimizer from several starts.

    Args:
        optimizer: Inner optimizer exposing ``run(f, goal, start,
            max_evaluations, max_iterations)``.
        starts: Number of runs, at least 1.
        generator: Zero-argument callable drawing a random start for runs
            after the first.
        max_evaluations: Evaluation budget shared by all runs of a call.
        max_iterations: Iteration budget shared by all runs of a call. When
            unlimited, each run keeps the inner optimizer's own limit.
    """

    def __init__(
        self,
        optimizer: StartRunner[S],
        starts: int,
        generator: Optional[Callable[[], S]],
        max_evaluations: int = UNLIMITED,
        max_iterations: int = UNLIMITED,
    ) -> None:
        if optimizer is None:
            raise ValueError("optimizer must not be None.")
        if starts < 1:
            raise ValueError(f"Number of starts must be positive, got {starts}.")
        self.optimizer = optimizer
        self.starts = int(starts)
        self._check_generator(generator)
        self.generator = generator
        self.max_evaluations = int(max_evaluations)
        self.max_iterations = int(max_iterations)
        self._outcomes: Optional[list[RunOutcome]] = None
        self._total_evaluations = 0
        self._total_iterations = 0

    def _check_generator(self, generator: Optional[Callable[[], S]]) -> None:
        if generator is None and self.starts > 1:
            raise ValueError("A start generator is required for more than one start.")

    @property
    def evaluations(self) -> int:
        """Objective calls summed over the runs of the last call."""
        return self._total_evaluations

    @property
    def iterations(self) -> int:
        """Iterations summed over the runs of the last call."""
        return self._total_iterations

    def optimize(self, f: Callable, goal: GoalType, start: S) -> PointValuePair:
        """
        Run every start and return the best optimum.

        Raises:
            NoConvergenceError: If every run failed. The last run's error is
                chained as ``__cause__``.
        """
        outcomes: list[RunOutcome] = []
        self._outcomes = None
        self._total_evaluations = 0
        self._total_iterations = 0
        last_error: Optional[BaseException] = None

        for i in range(self.starts):
            run_start = start if i == 0 else self.generator()
            remaining_iterations = (
                None
                if self.max_iterations == UNLIMITED
                else self.max_iterations - self._total_iterations
            )
            outcome = self.optimizer.run(
                f,
                goal,
                run_start,
                max_evaluations=self.max_evaluations - self._total_evaluations,
                max_iterations=remaining_iterations,
            )
            if not outcome.ok:
                last_error = outcome.error
                logger.info("start %d/%d failed: %s", i + 1, self.starts, outcome.error)
            self._total_evaluations += outcome.evaluations
            self._total_iterations += outcome.iterations
            outcomes.append(outcome)

        self._outcomes = rank_outcomes(outcomes, goal)
        best = self._outcomes[0]
        if not best.ok:
            logger.warning("no convergence with any of %d start points", self.starts)
            raise NoConvergenceError(self.starts) from last_error
        return best.optimum

    def get_outcomes(self) -> list[RunOutcome]:
        """Ranked outcomes of the last call."""
        if self._outcomes is None:
            raise NoOptimumComputedError()
        return list(self._outcomes)

    def get_optima(self) -> list[Optional[PointValuePair]]:
        """Ranked optima of the last call, ``None`` for failed runs."""
        return [outcome.optimum for outcome in self.get_outcomes()]


class UnivariateMultiStartOptimizer(MultiStartOptimizer[tuple[float, float]]):
    """
    Multi-start for ``f: R -> R`` over an interval.

    The first run searches the whole ``[lo, hi]``; later runs search random
    sub-intervals of it. Failed runs show up as NaN in :meth:`get_optima`
    and :meth:`get_optima_values`.

    Args:
        optimizer: Univariate optimizer, e.g. :class:`BrentOptimizer`.
        starts: Number of runs, at least 1.
        rng: Source of randomness for the sub-intervals.
        max_evaluations: Evaluation budget shared by all runs of a call.
        max_iterations: Iteration budget shared by all runs of a call.
    """

    def __init__(
        self,
        optimizer: StartRunner[tuple[float, float]],
        starts: int,
        rng: Optional[np.random.Generator] = None,
        max_evaluations: int = UNLIMITED,
        max_iterations: int = UNLIMITED,
    ) -> None:
        self.rng = np.random.default_rng(0) if rng is None else rng
        super().__init__(
            optimizer,
            starts,
            generator=None,
            max_evaluations=max_evaluations,
            max_iterations=max_iterations,
        )

    def _check_generator(self, generator: Optional[Callable[[], tuple[float, float]]]) -> None:
        # sub-intervals are drawn from the bounds given to each optimize call
        pass

    def optimize(  # type: ignore[override]
        self, f: UnivariateObjective, goal: GoalType, lo: float, hi: float
    ) -> PointValuePair:
        """Search ``[lo, hi]`` from ``starts`` intervals and return the best optimum."""
        lo, hi = min(lo, hi), max(lo, hi)
        self.generator = UniformIntervalGenerator(lo, hi, self.rng)
        return super().optimize(f, goal, (lo, hi))

    def get_optima(self) -> np.ndarray:  # type: ignore[override]
        """Ranked abscissas of the last call, NaN for failed runs."""
        return np.array(
            [o.optimum.point if o.ok else np.nan for o in self.get_outcomes()], dtype=float
        )

    def get_optima_values(self) -> np.ndarray:
        """Objective values matching :meth:`get_optima`, NaN for failed runs."""
        return np.array(
            [o.optimum.value if o.ok else np.nan for o in self.get_outcomes()], dtype=float
        )


def nelder_mead(
    f: Objective,
    x0: Union[Array, Sequence[float]],
    goal: GoalType = GoalType.MINIMIZE,
    starts: int = 1,
    generator: Optional[Callable[[], Array]] = None,
    max_evaluations: int = 10_000,
    config: Optional[NelderMeadConfig] = None,
    checker: Optional[ConvergenceChecker] = None,
) -> PointValuePair:
    """
    Minimize (or maximize) ``f`` with Nelder-Mead, optionally from several starts.

    Args:
        f: Objective taking a float array.
        x0: First start point.
        goal: Search direction.
        starts: Number of runs; runs after the first start from ``generator()``.
        generator: Random start generator, required when ``starts > 1``.
        max_evaluations: Evaluation budget shared by all runs.
        config: Coefficients and thresholds; defaults when omitted.
        checker: Overrides the value checker built from ``config``.

    Returns:
        Best vertex found.
    """
    optimizer = NelderMeadOptimizer.from_config(config or NelderMeadConfig())
    if checker is not None:
        optimizer.checker = checker
    campaign: MultiStartOptimizer[Array] = MultiStartOptimizer(
        optimizer, starts, generator, max_evaluations=max_evaluations
    )
    return campaign.optimize(f, goal, np.asarray(x0, dtype=float))


__all__ = [
    "MultiStartOptimizer",
    "StartRunner",
    "UnivariateMultiStartOptimizer",
    "nelder_mead",
    "rank_outcomes",
]
