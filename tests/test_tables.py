import numpy as np
import pytest

from glslmath.tables import (
    GRAD1,
    GRAD2,
    GRAD3,
    GRAD4,
    PERM,
    PERM289,
    SIMPLEX_GRAD1,
    SIMPLEX_GRAD2,
    SIMPLEX_GRAD3,
    SIMPLEX_GRAD4,
    perm,
    permute289,
    taylor_inv_sqrt,
)


def test_perm_is_doubled_permutation():
    assert PERM.shape == (512,)
    assert np.array_equal(PERM[:256], PERM[256:])
    assert sorted(PERM[:256].tolist()) == list(range(256))
    assert PERM[0] == 151


def test_perm_wraps_indices():
    i = np.array([0, 256, -1, 511])
    assert np.array_equal(perm(i), PERM[[0, 0, 255, 255]])


def test_perm289_is_bijection():
    assert PERM289.shape == (289,)
    assert sorted(PERM289.tolist()) == list(range(289))
    assert np.array_equal(permute289(np.array([0, 1, 289, 290, -1])), [0, 35, 0, 35, PERM289[288]])


def test_tables_are_read_only():
    for table in (PERM, PERM289, GRAD2, SIMPLEX_GRAD3):
        with pytest.raises(ValueError):
            table[0] = 0


def test_classic_gradients_are_unit_length():
    for g in (GRAD2, GRAD3, GRAD4):
        assert np.allclose(np.linalg.norm(g, axis=1), 1.0)
    assert GRAD2.shape == (8, 2)
    assert GRAD3.shape == (12, 3)
    assert GRAD4.shape == (32, 4)
    assert np.all((np.abs(GRAD1) > 0.0) & (np.abs(GRAD1) <= 1.0))


def test_grad4_has_one_zero_axis_per_direction():
    zeros = np.sum(GRAD4 == 0.0, axis=1)
    assert np.all(zeros == 1)
    assert len({tuple(row) for row in GRAD4.tolist()}) == 32


def test_simplex_gradient_shapes():
    assert SIMPLEX_GRAD1.shape == (289,)
    assert SIMPLEX_GRAD2.shape == (289, 2)
    assert SIMPLEX_GRAD3.shape == (289, 3)
    assert SIMPLEX_GRAD4.shape == (289, 4)
    for g in (SIMPLEX_GRAD1, SIMPLEX_GRAD2, SIMPLEX_GRAD3, SIMPLEX_GRAD4):
        assert np.isfinite(g).all()


def test_simplex_gradients_2d_3d_are_roughly_normalized():
    assert np.all((SIMPLEX_GRAD1 >= -1.0) & (SIMPLEX_GRAD1 < 1.0))
    for g in (SIMPLEX_GRAD2, SIMPLEX_GRAD3):
        n = np.linalg.norm(g, axis=1)
        assert np.all((n > 0.5) & (n < 1.5))


def test_taylor_inv_sqrt_near_one():
    assert abs(taylor_inv_sqrt(1.0) - 1.0) < 0.1
