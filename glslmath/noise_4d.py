from __future__ import annotations

from typing import Any

import numpy as np

from .core import as_period, as_points, fade, finish, finish_grad, fold, lerp, simplex_rank
from .scalar import floor, pow_
from .tables import (
    CLASSIC_PERIOD_LIMIT,
    PERM,
    SIMPLEX_GRAD4,
    SIMPLEX_PERIOD_LIMIT,
    classic_grad4,
    permute289,
)
from .vector import dot

PERLIN4_SCALE = 1.0  # 2 / sqrt(4)

SKEW4 = 0.309016994374947451  # (sqrt(5) - 1) / 4
UNSKEW4 = 0.138196601125011  # (5 - sqrt(5)) / 20
SIMPLEX4_R2 = 0.6
SIMPLEX4_SCALE = 49.0


def perlin4(p: Any, period: Any = None):
    """Classic Perlin noise at 4D points (a `Vec4` or an array of shape (..., 4)).

    The sixteen corners of the enclosing hypercube are blended by fade-weighted
    lerps along x, then y, then z, then w.
    """

    pts, shape = as_points(p, 4)
    dtype = pts.dtype
    per = as_period(period, 4)
    px, py, pz, pw = (None, None, None, None) if per is None else per

    fl = floor(pts)
    ii = fl.astype(np.int64)
    f = pts - fl

    xi0 = fold(ii[:, 0], px, CLASSIC_PERIOD_LIMIT)
    yi0 = fold(ii[:, 1], py, CLASSIC_PERIOD_LIMIT)
    zi0 = fold(ii[:, 2], pz, CLASSIC_PERIOD_LIMIT)
    wi0 = fold(ii[:, 3], pw, CLASSIC_PERIOD_LIMIT)
    xi1 = fold(ii[:, 0] + 1, px, CLASSIC_PERIOD_LIMIT)
    yi1 = fold(ii[:, 1] + 1, py, CLASSIC_PERIOD_LIMIT)
    zi1 = fold(ii[:, 2] + 1, pz, CLASSIC_PERIOD_LIMIT)
    wi1 = fold(ii[:, 3] + 1, pw, CLASSIC_PERIOD_LIMIT)

    u = fade(f[:, 0])
    v = fade(f[:, 1])
    s = fade(f[:, 2])
    t = fade(f[:, 3])

    p_ = PERM

    def corner(xi, yi, zi, wi, ox, oy, oz, ow):
        h = p_[p_[p_[p_[xi] + yi] + zi] + wi]
        g = classic_grad4(h).astype(dtype)
        return dot(g, f - np.array([ox, oy, oz, ow], dtype=dtype))

    d0000 = corner(xi0, yi0, zi0, wi0, 0, 0, 0, 0)
    d1000 = corner(xi1, yi0, zi0, wi0, 1, 0, 0, 0)
    d0100 = corner(xi0, yi1, zi0, wi0, 0, 1, 0, 0)
    d1100 = corner(xi1, yi1, zi0, wi0, 1, 1, 0, 0)
    d0010 = corner(xi0, yi0, zi1, wi0, 0, 0, 1, 0)
    d1010 = corner(xi1, yi0, zi1, wi0, 1, 0, 1, 0)
    d0110 = corner(xi0, yi1, zi1, wi0, 0, 1, 1, 0)
    d1110 = corner(xi1, yi1, zi1, wi0, 1, 1, 1, 0)
    d0001 = corner(xi0, yi0, zi0, wi1, 0, 0, 0, 1)
    d1001 = corner(xi1, yi0, zi0, wi1, 1, 0, 0, 1)
    d0101 = corner(xi0, yi1, zi0, wi1, 0, 1, 0, 1)
    d1101 = corner(xi1, yi1, zi0, wi1, 1, 1, 0, 1)
    d0011 = corner(xi0, yi0, zi1, wi1, 0, 0, 1, 1)
    d1011 = corner(xi1, yi0, zi1, wi1, 1, 0, 1, 1)
    d0111 = corner(xi0, yi1, zi1, wi1, 0, 1, 1, 1)
    d1111 = corner(xi1, yi1, zi1, wi1, 1, 1, 1, 1)

    # w = 0 slab
    y_lerp00 = lerp(lerp(d0000, d1000, u), lerp(d0100, d1100, u), v)
    y_lerp10 = lerp(lerp(d0010, d1010, u), lerp(d0110, d1110, u), v)
    z_lerp0 = lerp(y_lerp00, y_lerp10, s)

    # w = 1 slab
    y_lerp01 = lerp(lerp(d0001, d1001, u), lerp(d0101, d1101, u), v)
    y_lerp11 = lerp(lerp(d0011, d1011, u), lerp(d0111, d1111, u), v)
    z_lerp1 = lerp(y_lerp01, y_lerp11, s)

    return finish(PERLIN4_SCALE * lerp(z_lerp0, z_lerp1, t), shape, dtype)


def _simplex4(p: Any, period: Any, want_grad: bool):
    pts, shape = as_points(p, 4)
    dtype = pts.dtype
    per = as_period(period, 4)

    s = np.sum(pts, axis=-1) * SKEW4
    i = floor(pts + s[:, None])
    x0 = pts - i + (np.sum(i, axis=-1) * UNSKEW4)[:, None]

    # Rank sorting picks the order in which the simplex walks the axes.
    rank = simplex_rank(x0)
    o1 = rank < 1
    o2 = rank < 2
    o3 = rank < 3
    x1 = x0 - o1.astype(dtype) + UNSKEW4
    x2 = x0 - o2.astype(dtype) + 2.0 * UNSKEW4
    x3 = x0 - o3.astype(dtype) + 3.0 * UNSKEW4
    x4 = x0 - 1.0 + 4.0 * UNSKEW4

    base = i.astype(np.int64)
    n = np.zeros(len(pts), dtype=dtype)
    grad = np.zeros_like(pts) if want_grad else None
    corners = (
        (base, x0),
        (base + o1, x1),
        (base + o2, x2),
        (base + o3, x3),
        (base + 1, x4),
    )
    for corner, xk in corners:
        k = fold(corner, per, SIMPLEX_PERIOD_LIMIT)
        h = permute289(
            permute289(permute289(permute289(k[:, 3]) + k[:, 2]) + k[:, 1]) + k[:, 0]
        )
        g = SIMPLEX_GRAD4[h].astype(dtype)

        t = np.maximum(SIMPLEX4_R2 - dot(xk, xk), 0.0)
        t4 = pow_(t, 4)
        gx = dot(g, xk)
        n += t4 * gx
        if want_grad:
            grad += t4[:, None] * g - (8.0 * pow_(t, 3) * gx)[:, None] * xk

    value = finish(SIMPLEX4_SCALE * n, shape, dtype)
    if not want_grad:
        return value, None
    return value, finish_grad(p, SIMPLEX4_SCALE * grad, shape, dtype)


def simplex4(p: Any, period: Any = None):
    """Simplex noise at 4D points.

    With `period`, lattice indices are folded per axis in skewed lattice
    space, so the field repeats under translation by the unskewed lattice
    vector ``per * e_k - UNSKEW4 * per * (1, 1, 1, 1)``, not by ``per * e_k``.
    """

    return _simplex4(p, period, False)[0]


def simplex4_deriv(p: Any, period: Any = None):
    """Simplex noise value and its analytic gradient at 4D points."""
    return _simplex4(p, period, True)
