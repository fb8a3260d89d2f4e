"""Univariate search: Brent's method and bracket finding.

References:
    Brent, R. P. (1973). Algorithms for Minimization without Derivatives.
    Prentice-Hall, chapter 5.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence, Union

from ..exceptions import TooManyIterationsError
from ..logging import get_logger
from .core import (
    UNLIMITED,
    GoalType,
    PointValuePair,
    RunContext,
    RunOutcome,
    RunState,
    UnivariateObjective,
)

logger = get_logger(__name__)

GOLDEN_SECTION = 0.5 * (3.0 - math.sqrt(5.0))

Interval = Union[tuple[float, float], tuple[float, float, float], Sequence[float]]


class BrentOptimizer:
    """
    Brent's local search for ``f: R -> R`` on a closed interval.

    Combines golden-section steps with parabolic interpolation. The search
    stops when the current best point ``x`` lies within
    ``2 * (relative_accuracy * |x| + absolute_accuracy)`` of the middle of
    the shrinking bracket.

    Args:
        relative_accuracy: Relative tolerance on the abscissa. Must be positive.
        absolute_accuracy: Absolute tolerance on the abscissa. Must be positive.
        max_iterations: Iteration budget of a run.
    """

    def __init__(
        self,
        relative_accuracy: float = 1e-9,
        absolute_accuracy: float = 1e-11,
        max_iterations: int = 100,
    ) -> None:
        if relative_accuracy <= 0:
            raise ValueError("relative_accuracy must be positive.")
        if absolute_accuracy <= 0:
            raise ValueError("absolute_accuracy must be positive.")
        self.relative_accuracy = float(relative_accuracy)
        self.absolute_accuracy = float(absolute_accuracy)
        self.max_iterations = int(max_iterations)
        self._last_evaluations = 0
        self._last_iterations = 0

    @property
    def evaluations(self) -> int:
        return self._last_evaluations

    @property
    def iterations(self) -> int:
        return self._last_iterations

    def run(
        self,
        f: UnivariateObjective,
        goal: GoalType,
        interval: Interval,
        max_evaluations: int = UNLIMITED,
        max_iterations: Optional[int] = None,
    ) -> RunOutcome:
        """
        Search ``interval`` = ``(lo, hi)`` or ``(lo, hi, start)``.

        The start defaults to the midpoint and must lie inside the interval,
        otherwise ``ValueError`` is raised. Budget exhaustion and exceptions
        from ``f`` produce a failed outcome.
        """
        bounds = [float(v) for v in interval]
        if len(bounds) == 2:
            lo, hi = bounds
            start = lo + 0.5 * (hi - lo)
        elif len(bounds) == 3:
            lo, hi, start = bounds
        else:
            raise ValueError("interval must be (lo, hi) or (lo, hi, start).")
        if not (min(lo, hi) <= start <= max(lo, hi)):
            raise ValueError(f"start {start} lies outside the interval [{lo}, {hi}].")
        ctx = RunContext(
            max_evaluations=int(max_evaluations),
            max_iterations=self.max_iterations if max_iterations is None else int(max_iterations),
        )
        try:
            optimum = self._local_min(f, goal, lo, start, hi, ctx)
        except Exception as exc:
            ctx.state = RunState.FAILED
            logger.debug("Brent search on [%g, %g] failed: %s", lo, hi, exc)
            outcome = RunOutcome.failed(exc, ctx)
        else:
            outcome = RunOutcome.converged(optimum, ctx)
        self._last_evaluations = outcome.evaluations
        self._last_iterations = outcome.iterations
        return outcome

    def optimize(
        self,
        f: UnivariateObjective,
        goal: GoalType,
        lo: float,
        hi: float,
        start: Optional[float] = None,
        max_evaluations: int = 1000,
    ) -> PointValuePair:
        """Search ``[lo, hi]`` and return the optimum; failures are raised."""
        interval = (lo, hi) if start is None else (lo, hi, start)
        return self.run(f, goal, interval, max_evaluations=max_evaluations).unwrap()

    def _local_min(
        self,
        f: UnivariateObjective,
        goal: GoalType,
        lo: float,
        mid: float,
        hi: float,
        ctx: RunContext,
    ) -> PointValuePair:
        is_minim = goal is GoalType.MINIMIZE
        eps = self.relative_accuracy
        t = self.absolute_accuracy

        def objective(point: float) -> float:
            value = ctx.evaluate(f, point)
            return value if is_minim else -value

        a, b = (lo, hi) if lo < hi else (hi, lo)
        x = v = w = mid
        d = 0.0
        e = 0.0
        ctx.enter(RunState.EVALUATING)
        fx = objective(x)
        fv = fw = fx
        ctx.enter(RunState.ITERATING)

        while True:
            m = 0.5 * (a + b)
            tol1 = eps * abs(x) + t
            tol2 = 2 * tol1

            if abs(x - m) <= tol2 - 0.5 * (b - a):
                ctx.enter(RunState.CONVERGED)
                return PointValuePair(x, fx if is_minim else -fx)

            golden = True
            if abs(e) > tol1:
                # Parabolic fit through x, v, w.
                r = (x - w) * (fx - fv)
                q = (x - v) * (fx - fw)
                p = (x - v) * q - (x - w) * r
                q = 2 * (q - r)
                if q > 0:
                    p = -p
                else:
                    q = -q
                r = e
                e = d
                if p > q * (a - x) and p < q * (b - x) and abs(p) < abs(0.5 * q * r):
                    d = p / q
                    u = x + d
                    # f must not be evaluated too close to a or b.
                    if u - a < tol2 or b - u < tol2:
                        d = tol1 if x <= m else -tol1
                    golden = False
            if golden:
                e = (b - x) if x < m else (a - x)
                d = GOLDEN_SECTION * e

            if abs(d) < tol1:
                u = x + tol1 if d >= 0 else x - tol1
            else:
                u = x + d
            fu = objective(u)

            if fu <= fx:
                if u < x:
                    b = x
                else:
                    a = x
                v, fv = w, fw
                w, fw = x, fx
                x, fx = u, fu
            else:
                if u < x:
                    a = u
                else:
                    b = u
                if fu <= fw or w == x:
                    v, fv = w, fw
                    w, fw = u, fu
                elif fu <= fv or v == x or v == w:
                    v, fv = u, fu

            ctx.increment_iterations()


class BracketFinder:
    """
    Locate three points ``lo < mid < hi`` (in search order) bracketing an optimum.

    Starting from two points the search walks downhill (uphill when
    maximizing), growing the step by the golden ratio and using parabolic
    extrapolation limited by ``grow_limit``.

    Args:
        grow_limit: Largest parabolic step, in units of the current step.
        max_iterations: Iteration limit of :meth:`search`.
    """

    EPS_MIN = 1e-21
    GOLD = 1.618034

    def __init__(self, grow_limit: float = 100.0, max_iterations: int = 50) -> None:
        if grow_limit <= 0:
            raise ValueError("grow_limit must be positive.")
        if max_iterations <= 0:
            raise ValueError("max_iterations must be positive.")
        self.grow_limit = float(grow_limit)
        self.max_iterations = int(max_iterations)
        self.iterations = 0
        self.evaluations = 0
        self.lo = self.mid = self.hi = math.nan
        self.f_lo = self.f_mid = self.f_hi = math.nan

    def _eval(self, f: UnivariateObjective, x: float) -> float:
        self.evaluations += 1
        return float(f(x))

    def search(
        self, f: UnivariateObjective, goal: GoalType, x_a: float, x_b: float
    ) -> "BracketFinder":
        """Bracket an optimum of ``f`` starting from ``x_a`` and ``x_b``."""
        self.iterations = 0
        self.evaluations = 0

        def better(f1: float, f2: float) -> bool:
            return goal.is_better(f1, f2)

        f_a = self._eval(f, x_a)
        f_b = self._eval(f, x_b)
        if better(f_a, f_b):
            x_a, x_b = x_b, x_a
            f_a, f_b = f_b, f_a

        x_c = x_b + self.GOLD * (x_b - x_a)
        f_c = self._eval(f, x_c)

        while better(f_c, f_b):
            self.iterations += 1
            if self.iterations > self.max_iterations:
                raise TooManyIterationsError(self.max_iterations)

            tmp1 = (x_b - x_a) * (f_b - f_c)
            tmp2 = (x_b - x_c) * (f_b - f_a)
            val = tmp2 - tmp1
            denom = 2 * self.EPS_MIN if abs(val) < self.EPS_MIN else 2 * val

            w = x_b - ((x_b - x_c) * tmp2 - (x_b - x_a) * tmp1) / denom
            w_lim = x_b + self.grow_limit * (x_c - x_b)

            if (w - x_c) * (x_b - w) > 0:
                f_w = self._eval(f, w)
                if better(f_w, f_c):
                    x_a, x_b = x_b, w
                    f_a, f_b = f_b, f_w
                    break
                if better(f_b, f_w):
                    x_c, f_c = w, f_w
                    break
                w = x_c + self.GOLD * (x_c - x_b)
                f_w = self._eval(f, w)
            elif (w - w_lim) * (w_lim - x_c) >= 0:
                w = w_lim
                f_w = self._eval(f, w)
            elif (w - w_lim) * (x_c - w) > 0:
                f_w = self._eval(f, w)
                if better(f_w, f_c):
                    x_b, x_c = x_c, w
                    w = x_c + self.GOLD * (x_c - x_b)
                    f_b, f_c = f_c, f_w
                    f_w = self._eval(f, w)
            else:
                w = x_c + self.GOLD * (x_c - x_b)
                f_w = self._eval(f, w)

            x_a, x_b, x_c = x_b, x_c, w
            f_a, f_b, f_c = f_b, f_c, f_w

        self.lo, self.mid, self.hi = x_a, x_b, x_c
        self.f_lo, self.f_mid, self.f_hi = f_a, f_b, f_c
        return self


__all__ = ["BracketFinder", "BrentOptimizer", "GOLDEN_SECTION"]
