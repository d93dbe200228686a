import numpy as np
import pytest

from glslmath.core import as_period, as_points, fade, finish, fold, lerp, simplex_rank
from glslmath.vector import Vec3


def test_fade_endpoints():
    t = np.array([0.0, 1.0], dtype=np.float64)
    out = fade(t)
    assert out[0] == 0.0
    assert out[1] == 1.0


def test_fade_midpoint_and_symmetry():
    t = np.linspace(0.0, 1.0, 11)
    assert fade(np.array(0.5)) == 0.5
    assert np.allclose(fade(t) + fade(1.0 - t), 1.0)


def test_lerp_basic():
    a = np.array([0.0, 10.0])
    b = np.array([10.0, 20.0])
    t = np.array([0.0, 0.5])
    out = lerp(a, b, t)
    assert np.allclose(out, np.array([0.0, 15.0]))


def test_as_points_flattens_batches():
    pts = np.zeros((4, 5, 3))
    flat, shape = as_points(pts, 3)
    assert flat.shape == (20, 3)
    assert shape == (4, 5)


def test_as_points_accepts_vectors_and_keeps_width():
    flat, shape = as_points(Vec3(1.0, 2.0, 3.0), 3)
    assert flat.shape == (1, 3)
    assert shape == ()

    flat32, _ = as_points(np.zeros((2, 3), dtype=np.float32), 3)
    assert flat32.dtype == np.float32

    flat_int, _ = as_points([[1, 2, 3]], 3)
    assert flat_int.dtype == np.float64


def test_as_points_1d_takes_any_shape():
    flat, shape = as_points(np.zeros((2, 3)), 1)
    assert flat.shape == (6,)
    assert shape == (2, 3)


def test_as_points_rejects_wrong_trailing_axis():
    with pytest.raises(ValueError):
        as_points(np.zeros((5, 2)), 3)
    with pytest.raises(ValueError):
        as_points(1.0, 2)


def test_as_period_broadcasts_and_validates():
    assert as_period(None, 3) is None
    assert as_period(4, 3).tolist() == [4, 4, 4]
    assert as_period((2, 3), 2).tolist() == [2, 3]
    assert as_period(np.array([5.0, 6.0]), 2).dtype == np.int64

    with pytest.raises(ValueError):
        as_period(2.5, 2)
    with pytest.raises(ValueError):
        as_period(0, 2)
    with pytest.raises(ValueError):
        as_period((2, 3, 4), 2)
    with pytest.raises(ValueError):
        as_period(np.inf, 1)


def test_fold_reduces_by_period_then_limit():
    i = np.array([-1, 5, 300], dtype=np.int64)
    assert fold(i, 4, 256).tolist() == [3, 1, 0]
    assert fold(np.array([-1, 256]), None, 256).tolist() == [255, 0]


def test_simplex_rank_orders_largest_first():
    rank = simplex_rank(np.array([[0.3, 0.1, 0.2]]))
    assert rank.tolist() == [[0, 2, 1]]


def test_simplex_rank_ties_favour_lower_axis():
    assert simplex_rank(np.array([[0.2, 0.2]])).tolist() == [[0, 1]]
    assert simplex_rank(np.array([[0.5, 0.5, 0.5, 0.5]])).tolist() == [[0, 1, 2, 3]]


def test_finish_returns_scalar_for_single_points():
    out = finish(np.array([0.25]), (), np.dtype(np.float32))
    assert isinstance(out, np.float32)
    arr = finish(np.arange(6.0), (2, 3), np.dtype(np.float64))
    assert arr.shape == (2, 3)
