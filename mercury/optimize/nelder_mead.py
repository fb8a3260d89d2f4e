"""Nelder-Mead simplex search.

Each iteration replaces the worst vertex by a point on the line through the
worst vertex and the centroid of the others (reflection, expansion or
contraction), or shrinks the whole simplex towards the best vertex when none
of those points is good enough.

References:
    Nelder, J. A., & Mead, R. (1965). A simplex method for function
    minimization. The Computer Journal, 7(4), 308-313.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..logging import get_logger
from .convergence import (
    DEFAULT_ABSOLUTE_THRESHOLD,
    DEFAULT_RELATIVE_THRESHOLD,
    ConvergenceChecker,
    SimpleScalarValueChecker,
)
from .core import UNLIMITED, GoalType, Objective, PointValuePair, RunContext
from .direct import DirectSearchOptimizer
from .simplex import Simplex

logger = get_logger(__name__)


@dataclass(frozen=True)
class NelderMeadConfig:
    """
    Coefficients and stopping thresholds of a Nelder-Mead search.

    Args:
        rho: Reflection coefficient. Defaults to 1.0.
        khi: Expansion coefficient. Defaults to 2.0.
        gamma: Contraction coefficient. Defaults to 0.5.
        sigma: Shrink coefficient. Defaults to 0.5.
        relative_threshold: Relative threshold of the value checker.
            Defaults to 100 machine epsilons; negative disables it.
        absolute_threshold: Absolute threshold of the value checker.
            Defaults to 100 times the smallest normal double; negative
            disables it.
        max_iterations: Iteration budget of a run. Unlimited by default.
    """

    rho: float = 1.0
    khi: float = 2.0
    gamma: float = 0.5
    sigma: float = 0.5
    relative_threshold: float = DEFAULT_RELATIVE_THRESHOLD
    absolute_threshold: float = DEFAULT_ABSOLUTE_THRESHOLD
    max_iterations: int = UNLIMITED


class NelderMeadOptimizer(DirectSearchOptimizer):
    """
    Nelder-Mead optimizer for ``f: R^n -> R``.

    Example:
        >>> import numpy as np
        >>> from mercury.optimize import GoalType, NelderMeadOptimizer
        >>> opt = NelderMeadOptimizer()
        >>> best = opt.optimize(2000, lambda x: (x[0] - 5.0) ** 2,
        ...                     GoalType.MINIMIZE, [0.0])
        >>> round(float(best.point[0]), 6)
        5.0
    """

    def __init__(
        self,
        rho: float = 1.0,
        khi: float = 2.0,
        gamma: float = 0.5,
        sigma: float = 0.5,
        checker: Optional[ConvergenceChecker] = None,
        max_iterations: int = UNLIMITED,
    ) -> None:
        if rho <= 0:
            raise ValueError("Reflection coefficient rho must be positive.")
        if khi <= 1 or khi <= rho:
            raise ValueError("Expansion coefficient khi must exceed 1 and rho.")
        if not (0 < gamma < 1):
            raise ValueError("Contraction coefficient gamma must lie in (0, 1).")
        if not (0 < sigma < 1):
            raise ValueError("Shrink coefficient sigma must lie in (0, 1).")
        super().__init__(checker=checker, max_iterations=max_iterations)
        self.rho = float(rho)
        self.khi = float(khi)
        self.gamma = float(gamma)
        self.sigma = float(sigma)

    @classmethod
    def from_config(cls, config: NelderMeadConfig) -> "NelderMeadOptimizer":
        checker = SimpleScalarValueChecker(
            config.relative_threshold, config.absolute_threshold
        )
        return cls(
            rho=config.rho,
            khi=config.khi,
            gamma=config.gamma,
            sigma=config.sigma,
            checker=checker,
            max_iterations=config.max_iterations,
        )

    def _iterate(
        self, simplex: Simplex, f: Objective, goal: GoalType, ctx: RunContext
    ) -> Simplex:
        ctx.increment_iterations()
        best = simplex.best
        second_best = simplex.second_best
        worst = simplex.worst
        x_worst = worst.point

        centroid = simplex.centroid()

        x_r = centroid + self.rho * (centroid - x_worst)
        reflected = PointValuePair(x_r, ctx.evaluate(f, x_r))

        if goal.compare(best.value, reflected.value) <= 0 and goal.is_better(
            reflected.value, second_best.value
        ):
            logger.debug("iteration %d: reflect", ctx.iterations)
            simplex.replace_worst(reflected, goal)
            return simplex

        if goal.is_better(reflected.value, best.value):
            x_e = centroid + self.khi * (x_r - centroid)
            expanded = PointValuePair(x_e, ctx.evaluate(f, x_e))
            if goal.is_better(expanded.value, reflected.value):
                logger.debug("iteration %d: expand", ctx.iterations)
                simplex.replace_worst(expanded, goal)
            else:
                logger.debug("iteration %d: reflect (expansion rejected)", ctx.iterations)
                simplex.replace_worst(reflected, goal)
            return simplex

        if goal.is_better(reflected.value, worst.value):
            x_c = centroid + self.gamma * (x_r - centroid)
            contracted = PointValuePair(x_c, ctx.evaluate(f, x_c))
            if goal.compare(contracted.value, reflected.value) <= 0:
                logger.debug("iteration %d: outside contraction", ctx.iterations)
                simplex.replace_worst(contracted, goal)
                return simplex
        else:
            x_c = centroid - self.gamma * (centroid - x_worst)
            contracted = PointValuePair(x_c, ctx.evaluate(f, x_c))
            if goal.is_better(contracted.value, worst.value):
                logger.debug("iteration %d: inside contraction", ctx.iterations)
                simplex.replace_worst(contracted, goal)
                return simplex

        logger.debug("iteration %d: shrink", ctx.iterations)
        simplex.shrink(self.sigma)
        simplex.evaluate(f, goal, ctx)
        return simplex


__all__ = ["NelderMeadConfig", "NelderMeadOptimizer"]
