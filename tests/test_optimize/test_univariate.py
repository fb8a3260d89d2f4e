import math

import numpy as np
import pytest

from mercury.exceptions import TooManyEvaluationsError, TooManyIterationsError
from mercury.optimize import BracketFinder, BrentOptimizer, GoalType


def quadratic(x: float) -> float:
    return x * x + 7.0 * x + 12.0


def test_brent_quadratic_minimum():
    opt = BrentOptimizer()
    best = opt.optimize(quadratic, GoalType.MINIMIZE, -10.0, 10.0)
    assert best.point == pytest.approx(-3.5, abs=1e-6)
    assert best.value == pytest.approx(-0.25, abs=1e-9)
    assert isinstance(best.point, float)
    assert 0 < opt.evaluations < 50


def test_brent_maximize():
    best = BrentOptimizer().optimize(lambda x: -((x - 2.0) ** 2), GoalType.MAXIMIZE, 0.0, 5.0)
    assert best.point == pytest.approx(2.0, abs=1e-6)
    assert best.value == pytest.approx(0.0, abs=1e-9)


def test_brent_sine():
    best = BrentOptimizer().optimize(math.sin, GoalType.MINIMIZE, 1.0, 5.0)
    assert best.point == pytest.approx(1.5 * math.pi, abs=1e-6)
    assert best.value == pytest.approx(-1.0, abs=1e-12)


def test_brent_reversed_bounds_and_start():
    opt = BrentOptimizer()
    reversed_bounds = opt.optimize(quadratic, GoalType.MINIMIZE, 10.0, -10.0)
    with_start = opt.optimize(quadratic, GoalType.MINIMIZE, -10.0, 10.0, start=5.0)
    assert reversed_bounds.point == pytest.approx(-3.5, abs=1e-6)
    assert with_start.point == pytest.approx(-3.5, abs=1e-6)


def test_brent_rejects_start_outside_interval():
    opt = BrentOptimizer()
    with pytest.raises(ValueError, match="outside the interval"):
        opt.optimize(lambda x: (x - 2.0) ** 2, GoalType.MINIMIZE, 0.0, 1.0, start=5.0)
    with pytest.raises(ValueError, match="outside the interval"):
        opt.run(quadratic, GoalType.MINIMIZE, (10.0, -10.0, -11.0))
    # reversed bounds with a start between them are fine
    best = opt.optimize(lambda x: (x - 2.0) ** 2, GoalType.MINIMIZE, 1.0, 0.0, start=0.25)
    assert 0.0 <= best.point <= 1.0
    assert best.point == pytest.approx(1.0, abs=1e-4)


def test_brent_run_interval_forms():
    opt = BrentOptimizer()
    assert opt.run(quadratic, GoalType.MINIMIZE, (-10.0, 10.0)).ok
    assert opt.run(quadratic, GoalType.MINIMIZE, (-10.0, 10.0, 1.0)).ok
    with pytest.raises(ValueError):
        opt.run(quadratic, GoalType.MINIMIZE, (-10.0,))


def test_brent_budgets():
    opt = BrentOptimizer()
    with pytest.raises(TooManyEvaluationsError):
        opt.optimize(math.sin, GoalType.MINIMIZE, 1.0, 5.0, max_evaluations=3)

    outcome = BrentOptimizer(max_iterations=2).run(math.sin, GoalType.MINIMIZE, (1.0, 5.0))
    assert not outcome.ok
    assert isinstance(outcome.error, TooManyIterationsError)


def test_brent_objective_error_is_a_failed_run():
    def broken(x):
        raise ArithmeticError("no value here")

    outcome = BrentOptimizer().run(broken, GoalType.MINIMIZE, (0.0, 1.0))
    assert not outcome.ok
    assert isinstance(outcome.error, ArithmeticError)


@pytest.mark.parametrize("kwargs", [{"relative_accuracy": 0.0}, {"absolute_accuracy": -1.0}])
def test_brent_invalid_accuracy(kwargs):
    with pytest.raises(ValueError):
        BrentOptimizer(**kwargs)


def test_brent_matches_scipy_bounded():
    optimize = pytest.importorskip("scipy.optimize")

    def f(x: float) -> float:
        return x ** 4 - 3.0 * x + 1.0

    ours = BrentOptimizer().optimize(f, GoalType.MINIMIZE, 0.0, 3.0)
    ref = optimize.minimize_scalar(f, bounds=(0.0, 3.0), method="bounded")
    assert ref.success
    assert ours.point == pytest.approx(ref.x, abs=1e-4)
    assert ours.point == pytest.approx(0.75 ** (1.0 / 3.0), abs=1e-6)


def test_bracket_finder_minimum():
    finder = BracketFinder().search(lambda x: (x - 2.0) ** 2, GoalType.MINIMIZE, 0.0, 1.0)
    assert finder.lo < finder.mid < finder.hi
    assert finder.lo <= 2.0 <= finder.hi
    assert finder.f_mid <= finder.f_lo
    assert finder.f_mid <= finder.f_hi
    assert finder.evaluations == 4


def test_bracket_finder_maximum():
    finder = BracketFinder().search(lambda x: -((x - 2.0) ** 2), GoalType.MAXIMIZE, 0.0, 1.0)
    assert finder.lo <= 2.0 <= finder.hi
    assert finder.f_mid >= finder.f_lo
    assert finder.f_mid >= finder.f_hi


def test_bracket_then_brent():
    def f(x: float) -> float:
        return (x - 7.0) ** 2 + 1.0

    finder = BracketFinder().search(f, GoalType.MINIMIZE, 0.0, 1.0)
    lo, hi = min(finder.lo, finder.hi), max(finder.lo, finder.hi)
    best = BrentOptimizer().optimize(f, GoalType.MINIMIZE, lo, hi, start=finder.mid)
    assert best.point == pytest.approx(7.0, abs=1e-6)


def test_bracket_finder_gives_up_on_unbounded_function():
    finder = BracketFinder(max_iterations=5)
    with pytest.raises(TooManyIterationsError):
        finder.search(lambda x: x, GoalType.MINIMIZE, 0.0, 1.0)
    assert finder.iterations == 6


def test_bracket_finder_invalid_arguments():
    with pytest.raises(ValueError):
        BracketFinder(grow_limit=0.0)
    with pytest.raises(ValueError):
        BracketFinder(max_iterations=0)
    assert np.isnan(BracketFinder().mid)
