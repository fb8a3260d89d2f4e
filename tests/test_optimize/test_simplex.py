import numpy as np
import pytest

from mercury.exceptions import DegenerateSimplexError, DimensionMismatchError
from mercury.optimize import (
    GoalType,
    PointValuePair,
    RunContext,
    Simplex,
    StartConfiguration,
)


def sphere(x: np.ndarray) -> float:
    return float(np.dot(x, x))


def make(points, values):
    return Simplex([PointValuePair(p, v) for p, v in zip(points, values)])


def test_from_steps_is_triangular():
    config = StartConfiguration.from_steps([1.0, 2.0])
    assert np.array_equal(config.offsets, [[1.0, 0.0], [1.0, 2.0]])
    assert config.dimension == 2


def test_from_steps_rejects_zero_step():
    with pytest.raises(DegenerateSimplexError) as info:
        StartConfiguration.from_steps([1.0, 0.0, 3.0])
    assert info.value.indices == (1, 2)


def test_from_reference_keeps_relative_shape():
    config = StartConfiguration.from_reference([[1.0, 1.0], [2.0, 1.0], [1.0, 3.0]])
    assert np.array_equal(config.offsets, [[1.0, 0.0], [0.0, 2.0]])


def test_from_reference_rejects_bad_input():
    with pytest.raises(ValueError):
        StartConfiguration.from_reference([])
    with pytest.raises(DimensionMismatchError):
        StartConfiguration.from_reference([[0.0, 0.0], [1.0, 0.0], [0.0]])
    with pytest.raises(DegenerateSimplexError) as info:
        StartConfiguration.from_reference([[0.0, 0.0], [1.0, 0.0], [1.0, 0.0]])
    assert info.value.indices == (2, 1)


def test_configuration_is_read_only():
    config = StartConfiguration.unit(2)
    with pytest.raises(ValueError):
        config.offsets[0, 0] = 5.0


def test_build_places_configuration_at_start():
    simplex = Simplex.build([1.0, -1.0], StartConfiguration.from_steps([0.5, 0.5]))
    assert np.array_equal(simplex.points, [[1.0, -1.0], [1.5, -1.0], [1.5, -0.5]])
    assert simplex.values == [None, None, None]
    with pytest.raises(DimensionMismatchError):
        Simplex.build([1.0, 2.0, 3.0], StartConfiguration.unit(2))


def test_evaluate_ranks_best_first():
    simplex = Simplex.build([-1.0, -1.0], StartConfiguration.unit(2))
    ctx = RunContext()
    simplex.evaluate(sphere, GoalType.MINIMIZE, ctx)
    assert simplex.values == [0.0, 1.0, 2.0]
    assert np.array_equal(simplex.best.point, [0.0, 0.0])
    assert ctx.evaluations == 3

    # nothing pending, so no further calls
    simplex.evaluate(sphere, GoalType.MINIMIZE, ctx)
    assert ctx.evaluations == 3

    simplex.evaluate(sphere, GoalType.MAXIMIZE, ctx)
    assert simplex.values == [2.0, 1.0, 0.0]


def test_evaluate_keeps_order_of_ties():
    simplex = Simplex.build([0.0, 0.0], StartConfiguration.unit(2))
    before = simplex.points
    simplex.evaluate(lambda x: 1.0, GoalType.MINIMIZE, RunContext())
    assert np.array_equal(simplex.points, before)


def test_replace_worst_inserts_in_rank_order():
    simplex = make([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]], [1.0, 2.0, 3.0])
    simplex.replace_worst(PointValuePair([5.0, 5.0], 1.5), GoalType.MINIMIZE)
    assert simplex.values == [1.0, 1.5, 2.0]
    assert np.array_equal(simplex[1].point, [5.0, 5.0])


def test_replace_worst_new_vertex_goes_after_equal_one():
    simplex = make([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]], [1.0, 2.0, 3.0])
    simplex.replace_worst(PointValuePair([7.0, 7.0], 1.0), GoalType.MINIMIZE)
    assert simplex.values == [1.0, 1.0, 2.0]
    assert np.array_equal(simplex.best.point, [0.0, 0.0])
    assert np.array_equal(simplex[1].point, [7.0, 7.0])


def test_centroid_excludes_worst():
    simplex = make([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]], [1.0, 2.0, 3.0])
    assert np.allclose(simplex.centroid(), [0.5, 0.0])


def test_shrink_moves_towards_best():
    simplex = make([[0.0, 0.0], [2.0, 0.0], [0.0, 2.0]], [1.0, 2.0, 3.0])
    simplex.shrink(0.5)
    assert np.array_equal(simplex.points, [[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]])
    assert simplex.values == [1.0, None, None]


def test_transformed_reflects_through_best():
    simplex = make([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]], [1.0, 2.0, 3.0])
    reflected = simplex.transformed(1.0)
    assert np.array_equal(reflected.points, [[0.0, 0.0], [-1.0, 0.0], [0.0, -1.0]])
    assert reflected.values == [1.0, None, None]
    # the source simplex is untouched
    assert simplex.values == [1.0, 2.0, 3.0]


def test_copy_is_independent():
    simplex = make([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]], [1.0, 2.0, 3.0])
    snapshot = simplex.copy()
    simplex.shrink(0.5)
    assert snapshot.values == [1.0, 2.0, 3.0]


def test_simplex_rejects_wrong_vertex_size():
    with pytest.raises(DimensionMismatchError):
        Simplex([PointValuePair([0.0, 0.0]), PointValuePair([1.0, 0.0])])


def test_check_invariants():
    simplex = make([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]], [1.0, 2.0, 3.0])
    simplex.check_invariants(GoalType.MINIMIZE)
    with pytest.raises(ValueError, match="not sorted"):
        simplex.check_invariants(GoalType.MAXIMIZE)
    simplex.shrink(0.5)
    with pytest.raises(ValueError, match="pending"):
        simplex.check_invariants(GoalType.MINIMIZE)
