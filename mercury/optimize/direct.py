"""Shared driver for simplex-based direct-search optimizers.

Subclasses only provide :meth:`DirectSearchOptimizer._iterate`, one
transformation step of the simplex. Building the initial simplex, budget
accounting and the convergence loop live here.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence, Union

import numpy as np

from ..exceptions import DimensionMismatchError
from ..logging import get_logger
from .convergence import (
    ConvergenceChecker,
    SimpleScalarValueChecker,
    check_simplex_convergence,
)
from .core import (
    UNLIMITED,
    Array,
    GoalType,
    Objective,
    PointValuePair,
    RunContext,
    RunOutcome,
    RunState,
)
from .simplex import Simplex, StartConfiguration

logger = get_logger(__name__)

IterationCallback = Callable[[int, Simplex], None]


class DirectSearchOptimizer(ABC):
    """
    Base class for optimizers that only compare objective values.

    Args:
        checker: Convergence checker applied to every vertex slot between two
            consecutive iterations. Defaults to :class:`SimpleScalarValueChecker`
            with its default thresholds.
        max_iterations: Iteration budget of a single run.
    """

    def __init__(
        self,
        checker: Optional[ConvergenceChecker] = None,
        max_iterations: int = UNLIMITED,
    ) -> None:
        if max_iterations < 0:
            raise ValueError("max_iterations must be non-negative.")
        self.checker = checker if checker is not None else SimpleScalarValueChecker()
        self.max_iterations = int(max_iterations)
        self._configuration: Optional[StartConfiguration] = None
        self._explicit_configuration = False
        self._last_evaluations = 0
        self._last_iterations = 0

    # Configuration -----------------------------------------------------

    def set_start_configuration(
        self, reference_simplex: Union[Array, Sequence[Sequence[float]]]
    ) -> None:
        """Use the shape of ``reference_simplex`` (``n + 1`` points) for every run."""
        self._configuration = StartConfiguration.from_reference(reference_simplex)
        self._explicit_configuration = True

    def set_start_steps(self, steps: Union[Array, Sequence[float]]) -> None:
        """Use an axis-aligned initial simplex with the given step sizes."""
        self._configuration = StartConfiguration.from_steps(steps)
        self._explicit_configuration = True

    @property
    def start_configuration(self) -> Optional[StartConfiguration]:
        return self._configuration

    def _configuration_for(self, dimension: int) -> StartConfiguration:
        config = self._configuration
        if config is None or (
            not self._explicit_configuration and config.dimension != dimension
        ):
            config = StartConfiguration.unit(dimension)
            self._configuration = config
        if config.dimension != dimension:
            raise DimensionMismatchError(dimension, config.dimension)
        return config

    # Counters of the last run ------------------------------------------

    @property
    def evaluations(self) -> int:
        """Objective calls made by the last run."""
        return self._last_evaluations

    @property
    def iterations(self) -> int:
        """Iterations performed by the last run."""
        return self._last_iterations

    # Driver ------------------------------------------------------------

    def run(
        self,
        f: Objective,
        goal: GoalType,
        start_point: Union[Array, Sequence[float]],
        max_evaluations: int = UNLIMITED,
        max_iterations: Optional[int] = None,
        callback: Optional[IterationCallback] = None,
    ) -> RunOutcome:
        """
        Run one search and report its outcome instead of raising.

        Configuration errors (bad dimension, degenerate start simplex) are
        still raised immediately. Budget exhaustion and exceptions raised by
        ``f`` end the run with a failed :class:`RunOutcome`.

        Args:
            f: Objective, called with a read-only float array.
            goal: Minimize or maximize.
            start_point: First vertex of the initial simplex.
            max_evaluations: Evaluation budget of this run.
            max_iterations: Iteration budget; the optimizer's own limit if None.
            callback: Called as ``callback(iteration, simplex)`` after each
                iteration.
        """
        start = np.asarray(start_point, dtype=float).reshape(-1)
        if start.size == 0:
            raise ValueError("start_point must have at least one coordinate.")
        configuration = self._configuration_for(start.size)
        ctx = RunContext(
            max_evaluations=int(max_evaluations),
            max_iterations=self.max_iterations if max_iterations is None else int(max_iterations),
        )
        try:
            optimum = self._search(f, goal, start, configuration, ctx, callback)
        except Exception as exc:
            ctx.state = RunState.FAILED
            logger.debug(
                "%s run failed after %d evaluations: %s",
                type(self).__name__,
                ctx.evaluations,
                exc,
            )
            outcome = RunOutcome.failed(exc, ctx)
        else:
            outcome = RunOutcome.converged(optimum, ctx)
        self._last_evaluations = outcome.evaluations
        self._last_iterations = outcome.iterations
        return outcome

    def optimize(
        self,
        max_evaluations: int,
        f: Objective,
        goal: GoalType,
        start_point: Union[Array, Sequence[float]],
    ) -> PointValuePair:
        """
        Run one search and return the best vertex.

        Every failure propagates: budget exhaustion raises
        :class:`~mercury.exceptions.TooManyEvaluationsError` or
        :class:`~mercury.exceptions.TooManyIterationsError`, and an exception
        raised by ``f`` reaches the caller unchanged.
        """
        return self.run(f, goal, start_point, max_evaluations=max_evaluations).unwrap()

    def _search(
        self,
        f: Objective,
        goal: GoalType,
        start: Array,
        configuration: StartConfiguration,
        ctx: RunContext,
        callback: Optional[IterationCallback],
    ) -> PointValuePair:
        simplex = Simplex.build(start, configuration)
        ctx.enter(RunState.EVALUATING)
        simplex.evaluate(f, goal, ctx)
        ctx.enter(RunState.ITERATING)

        previous: Optional[Simplex] = None
        while True:
            if ctx.iterations > 0 and previous is not None:
                if check_simplex_convergence(
                    self.checker, ctx.iterations, previous.vertices, simplex.vertices
                ):
                    ctx.enter(RunState.CONVERGED)
                    logger.debug(
                        "%s converged after %d iterations (%d evaluations), best value %r",
                        type(self).__name__,
                        ctx.iterations,
                        ctx.evaluations,
                        simplex.best.value,
                    )
                    return simplex.best
            previous = simplex.copy()
            simplex = self._iterate(simplex, f, goal, ctx)
            if callback is not None:
                callback(ctx.iterations, simplex)

    @abstractmethod
    def _iterate(
        self, simplex: Simplex, f: Objective, goal: GoalType, ctx: RunContext
    ) -> Simplex:
        """Perform one iteration and return the simplex to continue with."""


__all__ = ["DirectSearchOptimizer", "IterationCallback"]
