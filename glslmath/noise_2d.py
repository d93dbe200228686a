from __future__ import annotations

from typing import Any

import numpy as np

from .core import as_period, as_points, fade, finish, finish_grad, fold, lerp, simplex_rank
from .scalar import floor, pow_
from .tables import (
    CLASSIC_PERIOD_LIMIT,
    PERM,
    SIMPLEX_GRAD2,
    SIMPLEX_PERIOD_LIMIT,
    classic_grad2,
    permute289,
)
from .vector import dot

PERLIN2_SCALE = 1.4142135623730951  # 2 / sqrt(2)

SKEW2 = 0.366025403784439  # 0.5 * (sqrt(3) - 1)
UNSKEW2 = 0.211324865405187  # (3 - sqrt(3)) / 6
SIMPLEX2_R2 = 0.5
SIMPLEX2_SCALE = 130.0


def perlin2(p: Any, period: Any = None):
    """Classic Perlin noise at 2D points (a `Vec2` or an array of shape (..., 2))."""

    pts, shape = as_points(p, 2)
    dtype = pts.dtype
    per = as_period(period, 2)
    px, py = (None, None) if per is None else per

    x = pts[:, 0]
    y = pts[:, 1]
    xfl = floor(x)
    yfl = floor(y)
    xi = xfl.astype(np.int64)
    yi = yfl.astype(np.int64)

    xi0 = fold(xi, px, CLASSIC_PERIOD_LIMIT)
    yi0 = fold(yi, py, CLASSIC_PERIOD_LIMIT)
    xi1 = fold(xi + 1, px, CLASSIC_PERIOD_LIMIT)
    yi1 = fold(yi + 1, py, CLASSIC_PERIOD_LIMIT)

    xf = x - xfl
    yf = y - yfl
    u = fade(xf)
    v = fade(yf)

    aa = PERM[PERM[xi0] + yi0]
    ab = PERM[PERM[xi0] + yi1]
    ba = PERM[PERM[xi1] + yi0]
    bb = PERM[PERM[xi1] + yi1]

    x0 = xf
    y0 = yf
    x1 = xf - 1.0
    y1 = yf - 1.0

    def corner(h: np.ndarray, dx: np.ndarray, dy: np.ndarray) -> np.ndarray:
        g = classic_grad2(h).astype(dtype)
        return dot(g, np.stack([dx, dy], axis=-1))

    d00 = corner(aa, x0, y0)
    d01 = corner(ab, x0, y1)
    d10 = corner(ba, x1, y0)
    d11 = corner(bb, x1, y1)

    x_lerp0 = lerp(d00, d10, u)
    x_lerp1 = lerp(d01, d11, u)
    return finish(PERLIN2_SCALE * lerp(x_lerp0, x_lerp1, v), shape, dtype)


def _simplex2(p: Any, period: Any, want_grad: bool):
    pts, shape = as_points(p, 2)
    dtype = pts.dtype
    per = as_period(period, 2)

    # First corner, in skewed lattice space.
    s = (pts[:, 0] + pts[:, 1]) * SKEW2
    i = floor(pts + s[:, None])
    x0 = pts - i + ((i[:, 0] + i[:, 1]) * UNSKEW2)[:, None]

    # The larger offset component picks the middle corner.
    o1 = simplex_rank(x0) < 1
    x1 = x0 - o1.astype(dtype) + UNSKEW2
    x2 = x0 - 1.0 + 2.0 * UNSKEW2

    base = i.astype(np.int64)
    n = np.zeros(len(pts), dtype=dtype)
    grad = np.zeros_like(pts) if want_grad else None
    for corner, xk in ((base, x0), (base + o1, x1), (base + 1, x2)):
        k = fold(corner, per, SIMPLEX_PERIOD_LIMIT)
        h = permute289(permute289(k[:, 1]) + k[:, 0])
        g = SIMPLEX_GRAD2[h].astype(dtype)

        t = np.maximum(SIMPLEX2_R2 - dot(xk, xk), 0.0)
        t4 = pow_(t, 4)
        gx = dot(g, xk)
        n += t4 * gx
        if want_grad:
            grad += t4[:, None] * g - (8.0 * pow_(t, 3) * gx)[:, None] * xk

    value = finish(SIMPLEX2_SCALE * n, shape, dtype)
    if not want_grad:
        return value, None
    return value, finish_grad(p, SIMPLEX2_SCALE * grad, shape, dtype)


def simplex2(p: Any, period: Any = None):
    """Simplex noise at 2D points.

    With `period`, lattice indices are folded per axis in skewed lattice
    space, so the field repeats under translation by the unskewed lattice
    vector ``per * e_k - UNSKEW2 * per * (1, 1)``, not by ``per * e_k``.
    """

    return _simplex2(p, period, False)[0]


def simplex2_deriv(p: Any, period: Any = None):
    """Simplex noise value and its analytic gradient at 2D points."""
    return _simplex2(p, period, True)
