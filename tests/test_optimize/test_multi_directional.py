import numpy as np
import pytest

from mercury.exceptions import TooManyEvaluationsError
from mercury.optimize import GoalType, MultiDirectionalOptimizer


def bowl(x: np.ndarray) -> float:
    return (x[0] - 3.0) ** 2 + (x[1] + 2.0) ** 2


def test_bowl_minimum():
    opt = MultiDirectionalOptimizer()
    best = opt.optimize(20000, bowl, GoalType.MINIMIZE, [0.0, 0.0])
    assert np.allclose(best.point, [3.0, -2.0], atol=1e-5)
    assert opt.evaluations > 0


def test_maximize():
    opt = MultiDirectionalOptimizer()
    best = opt.optimize(20000, lambda x: 10.0 - bowl(x), GoalType.MAXIMIZE, [0.0, 0.0])
    assert np.allclose(best.point, [3.0, -2.0], atol=1e-5)
    assert best.value == pytest.approx(10.0)


def test_best_value_never_gets_worse():
    opt = MultiDirectionalOptimizer()
    best_values = []
    opt.run(
        bowl,
        GoalType.MINIMIZE,
        [0.0, 0.0],
        max_evaluations=20000,
        callback=lambda i, s: best_values.append(s.best.value),
    )
    assert best_values
    assert all(b <= a for a, b in zip(best_values, best_values[1:]))


def test_custom_steps():
    opt = MultiDirectionalOptimizer(khi=3.0, gamma=0.25)
    opt.set_start_steps([0.1, 0.1])
    best = opt.optimize(20000, bowl, GoalType.MINIMIZE, [10.0, 10.0])
    assert np.allclose(best.point, [3.0, -2.0], atol=1e-5)


@pytest.mark.parametrize("kwargs", [{"khi": 1.0}, {"gamma": 0.0}, {"gamma": 1.0}])
def test_invalid_coefficients(kwargs):
    with pytest.raises(ValueError):
        MultiDirectionalOptimizer(**kwargs)


def test_evaluation_budget_exhausted():
    outcome = MultiDirectionalOptimizer().run(
        bowl, GoalType.MINIMIZE, [0.0, 0.0], max_evaluations=10
    )
    assert not outcome.ok
    assert isinstance(outcome.error, TooManyEvaluationsError)


def test_contraction_pulls_towards_best_vertex():
    evaluated = []

    def parabola(x):
        evaluated.append(float(x[0]))
        return float(x[0] ** 2)

    opt = MultiDirectionalOptimizer()
    opt.set_start_configuration([[0.0], [1.0]])
    opt.run(parabola, GoalType.MINIMIZE, [0.0])

    # initial vertices, rejected reflection, then a contraction on the side
    # of the original vertex
    assert evaluated[:4] == [0.0, 1.0, -1.0, 0.5]
