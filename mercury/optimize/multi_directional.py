"""Multi-directional search (Torczon).

Instead of moving a single vertex, every iteration reflects, expands or
contracts the whole simplex through its best vertex.

References:
    Torczon, V. (1991). On the convergence of the multidirectional search
    algorithm. SIAM Journal on Optimization, 1(1), 123-145.
"""

from __future__ import annotations

from typing import Optional

from ..logging import get_logger
from .convergence import ConvergenceChecker, check_simplex_convergence
from .core import UNLIMITED, GoalType, Objective, RunContext
from .direct import DirectSearchOptimizer
from .simplex import Simplex

logger = get_logger(__name__)


class MultiDirectionalOptimizer(DirectSearchOptimizer):
    """
    Multi-directional direct search.

    The contraction step maps every vertex ``x`` to
    ``x0 + gamma * (x - x0)``, pulling the simplex towards the best vertex
    ``x0`` as in Torczon's method. Implementations that apply
    ``x0 + gamma * (x0 - x)`` instead perform a half-size reflection there and
    visit different points.

    Args:
        khi: Expansion coefficient, greater than 1. Defaults to 2.0.
        gamma: Contraction coefficient in (0, 1). Defaults to 0.5.
        checker: Convergence checker, see :class:`DirectSearchOptimizer`.
        max_iterations: Iteration budget of a run.
    """

    def __init__(
        self,
        khi: float = 2.0,
        gamma: float = 0.5,
        checker: Optional[ConvergenceChecker] = None,
        max_iterations: int = UNLIMITED,
    ) -> None:
        if khi <= 1:
            raise ValueError("Expansion coefficient khi must exceed 1.")
        if not (0 < gamma < 1):
            raise ValueError("Contraction coefficient gamma must lie in (0, 1).")
        super().__init__(checker=checker, max_iterations=max_iterations)
        self.khi = float(khi)
        self.gamma = float(gamma)

    def _iterate(
        self, simplex: Simplex, f: Objective, goal: GoalType, ctx: RunContext
    ) -> Simplex:
        original = simplex
        while True:
            ctx.increment_iterations()
            best = original.best

            reflected = original.transformed(1.0)
            reflected.evaluate(f, goal, ctx)
            if goal.is_better(reflected.best.value, best.value):
                expanded = original.transformed(self.khi)
                expanded.evaluate(f, goal, ctx)
                if goal.is_better(expanded.best.value, reflected.best.value):
                    logger.debug("iteration %d: expand", ctx.iterations)
                    return expanded
                logger.debug("iteration %d: reflect", ctx.iterations)
                return reflected

            # negative coefficient keeps the contracted vertices on the original side
            contracted = original.transformed(-self.gamma)
            contracted.evaluate(f, goal, ctx)
            if goal.is_better(contracted.best.value, best.value):
                logger.debug("iteration %d: contract", ctx.iterations)
                return contracted

            if check_simplex_convergence(
                self.checker, ctx.iterations, original.vertices, contracted.vertices
            ):
                logger.debug("iteration %d: contracted simplex stalled", ctx.iterations)
                return contracted
            original = contracted


__all__ = ["MultiDirectionalOptimizer"]
