from __future__ import annotations

from typing import Any

import numpy as np

from .core import as_period, as_points, fade, finish, finish_grad, fold, lerp, simplex_rank
from .scalar import floor, pow_
from .tables import (
    CLASSIC_PERIOD_LIMIT,
    PERM,
    SIMPLEX_GRAD3,
    SIMPLEX_PERIOD_LIMIT,
    classic_grad3,
    permute289,
)
from .vector import dot

PERLIN3_SCALE = 1.1547005383792517  # 2 / sqrt(3)

SKEW3 = 1.0 / 3.0
UNSKEW3 = 1.0 / 6.0
SIMPLEX3_R2 = 0.6
SIMPLEX3_SCALE = 42.0


def perlin3(p: Any, period: Any = None):
    """Classic Perlin noise at 3D points (a `Vec3` or an array of shape (..., 3))."""

    pts, shape = as_points(p, 3)
    dtype = pts.dtype
    per = as_period(period, 3)
    px, py, pz = (None, None, None) if per is None else per

    x = pts[:, 0]
    y = pts[:, 1]
    z = pts[:, 2]
    xfl = floor(x)
    yfl = floor(y)
    zfl = floor(z)

    xi = xfl.astype(np.int64)
    yi = yfl.astype(np.int64)
    zi = zfl.astype(np.int64)

    xi0 = fold(xi, px, CLASSIC_PERIOD_LIMIT)
    yi0 = fold(yi, py, CLASSIC_PERIOD_LIMIT)
    zi0 = fold(zi, pz, CLASSIC_PERIOD_LIMIT)
    xi1 = fold(xi + 1, px, CLASSIC_PERIOD_LIMIT)
    yi1 = fold(yi + 1, py, CLASSIC_PERIOD_LIMIT)
    zi1 = fold(zi + 1, pz, CLASSIC_PERIOD_LIMIT)

    xf = x - xfl
    yf = y - yfl
    zf = z - zfl

    u = fade(xf)
    v = fade(yf)
    w = fade(zf)

    p_ = PERM

    x0 = xf
    y0 = yf
    z0 = zf
    x1 = xf - 1.0
    y1 = yf - 1.0
    z1 = zf - 1.0

    aaa = p_[p_[p_[xi0] + yi0] + zi0]
    aab = p_[p_[p_[xi0] + yi0] + zi1]
    aba = p_[p_[p_[xi0] + yi1] + zi0]
    abb = p_[p_[p_[xi0] + yi1] + zi1]
    baa = p_[p_[p_[xi1] + yi0] + zi0]
    bab = p_[p_[p_[xi1] + yi0] + zi1]
    bba = p_[p_[p_[xi1] + yi1] + zi0]
    bbb = p_[p_[p_[xi1] + yi1] + zi1]

    def corner(h, dx, dy, dz):
        g = classic_grad3(h).astype(dtype)
        return dot(g, np.stack([dx, dy, dz], axis=-1))

    d000 = corner(aaa, x0, y0, z0)
    d100 = corner(baa, x1, y0, z0)
    d010 = corner(aba, x0, y1, z0)
    d110 = corner(bba, x1, y1, z0)
    d001 = corner(aab, x0, y0, z1)
    d101 = corner(bab, x1, y0, z1)
    d011 = corner(abb, x0, y1, z1)
    d111 = corner(bbb, x1, y1, z1)

    x_lerp00 = lerp(d000, d100, u)
    x_lerp10 = lerp(d010, d110, u)
    y_lerp0 = lerp(x_lerp00, x_lerp10, v)

    x_lerp01 = lerp(d001, d101, u)
    x_lerp11 = lerp(d011, d111, u)
    y_lerp1 = lerp(x_lerp01, x_lerp11, v)

    return finish(PERLIN3_SCALE * lerp(y_lerp0, y_lerp1, w), shape, dtype)


def _simplex3(p: Any, period: Any, want_grad: bool):
    pts, shape = as_points(p, 3)
    dtype = pts.dtype
    per = as_period(period, 3)

    s = np.sum(pts, axis=-1) * SKEW3
    i = floor(pts + s[:, None])
    x0 = pts - i + (np.sum(i, axis=-1) * UNSKEW3)[:, None]

    rank = simplex_rank(x0)
    o1 = rank < 1
    o2 = rank < 2
    x1 = x0 - o1.astype(dtype) + UNSKEW3
    x2 = x0 - o2.astype(dtype) + 2.0 * UNSKEW3
    x3 = x0 - 1.0 + 3.0 * UNSKEW3

    base = i.astype(np.int64)
    n = np.zeros(len(pts), dtype=dtype)
    grad = np.zeros_like(pts) if want_grad else None
    corners = ((base, x0), (base + o1, x1), (base + o2, x2), (base + 1, x3))
    for corner, xk in corners:
        k = fold(corner, per, SIMPLEX_PERIOD_LIMIT)
        h = permute289(permute289(permute289(k[:, 2]) + k[:, 1]) + k[:, 0])
        g = SIMPLEX_GRAD3[h].astype(dtype)

        t = np.maximum(SIMPLEX3_R2 - dot(xk, xk), 0.0)
        t4 = pow_(t, 4)
        gx = dot(g, xk)
        n += t4 * gx
        if want_grad:
            grad += t4[:, None] * g - (8.0 * pow_(t, 3) * gx)[:, None] * xk

    value = finish(SIMPLEX3_SCALE * n, shape, dtype)
    if not want_grad:
        return value, None
    return value, finish_grad(p, SIMPLEX3_SCALE * grad, shape, dtype)


def simplex3(p: Any, period: Any = None):
    """Simplex noise at 3D points.

    With `period`, lattice indices are folded per axis in skewed lattice
    space, so the field repeats under translation by the unskewed lattice
    vector ``per * e_k - UNSKEW3 * per * (1, 1, 1)``, not by ``per * e_k``.
    """

    return _simplex3(p, period, False)[0]


def simplex3_deriv(p: Any, period: Any = None):
    """Simplex noise value and its analytic gradient at 3D points."""
    return _simplex3(p, period, True)
