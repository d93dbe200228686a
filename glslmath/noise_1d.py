from __future__ import annotations

from typing import Any

import numpy as np

from .core import as_period, as_points, fade, finish, finish_grad, fold, lerp
from .scalar import floor, pow_
from .tables import (
    CLASSIC_PERIOD_LIMIT,
    PERM,
    SIMPLEX_GRAD1,
    SIMPLEX_PERIOD_LIMIT,
    classic_grad1,
    permute289,
)

# Extremum of 1D gradient noise with |g| <= 1 is 0.5.
PERLIN1_SCALE = 2.0

# The 1D simplex is the unit segment itself; r^2 = 1 reaches the neighbour
# corner. Two opposing unit gradients peak at 2 * 0.5 * 0.75**4 mid-cell.
SIMPLEX1_R2 = 1.0
SIMPLEX1_SCALE = 1.0 / 0.31640625


def perlin1(x: Any, period: Any = None):
    """Classic Perlin noise of a scalar or of every element of an array."""

    xs, shape = as_points(x, 1)
    dtype = xs.dtype
    per = as_period(period, 1)

    xfl = floor(xs)
    xi = xfl.astype(np.int64)
    xi0 = fold(xi, per, CLASSIC_PERIOD_LIMIT)
    xi1 = fold(xi + 1, per, CLASSIC_PERIOD_LIMIT)

    xf = xs - xfl
    u = fade(xf)

    g0 = classic_grad1(PERM[xi0]).astype(dtype)
    g1 = classic_grad1(PERM[xi1]).astype(dtype)

    d0 = g0 * xf
    d1 = g1 * (xf - 1.0)
    return finish(PERLIN1_SCALE * lerp(d0, d1, u), shape, dtype)


def _simplex1(x: Any, period: Any, want_grad: bool):
    xs, shape = as_points(x, 1)
    dtype = xs.dtype
    per = as_period(period, 1)

    xfl = floor(xs)
    i0 = xfl.astype(np.int64)
    x0 = xs - xfl
    x1 = x0 - 1.0

    n = np.zeros_like(xs)
    dn = np.zeros_like(xs)
    for i, xk in ((i0, x0), (i0 + 1, x1)):
        h = permute289(fold(i, per, SIMPLEX_PERIOD_LIMIT))
        g = SIMPLEX_GRAD1[h].astype(dtype)
        t = np.maximum(SIMPLEX1_R2 - xk * xk, 0.0)
        t4 = pow_(t, 4)
        gx = g * xk
        n += t4 * gx
        if want_grad:
            dn += t4 * g - 8.0 * pow_(t, 3) * gx * xk

    value = finish(SIMPLEX1_SCALE * n, shape, dtype)
    if not want_grad:
        return value, None
    return value, finish_grad(x, SIMPLEX1_SCALE * dn, shape, dtype)


def simplex1(x: Any, period: Any = None):
    return _simplex1(x, period, False)[0]


def simplex1_deriv(x: Any, period: Any = None):
    """Simplex noise value and its exact derivative d/dx."""
    return _simplex1(x, period, True)
