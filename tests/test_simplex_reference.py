"""Simplex fields checked point by point against a plain-float GLM formula."""

import math

import numpy as np

from glslmath.noise_2d import simplex2
from glslmath.noise_3d import simplex3
from glslmath.noise_4d import simplex4


def _perm(x):
    x %= 289
    return ((34 * x + 1) * x) % 289


def _taylor(r):
    return 1.79284291400159 - 0.85373472095314 * r


def _dot(a, b):
    return sum(p * q for p, q in zip(a, b))


def _glm_simplex2(v):
    c = (0.211324865405187, 0.366025403784439)
    s = (v[0] + v[1]) * c[1]
    i = [math.floor(v[0] + s), math.floor(v[1] + s)]
    t = (i[0] + i[1]) * c[0]
    x0 = [v[0] - i[0] + t, v[1] - i[1] + t]
    i1 = (1, 0) if x0[0] > x0[1] else (0, 1)
    xs = [
        x0,
        [x0[0] + c[0] - i1[0], x0[1] + c[0] - i1[1]],
        [x0[0] - 1.0 + 2.0 * c[0], x0[1] - 1.0 + 2.0 * c[0]],
    ]
    i = [i[0] % 289, i[1] % 289]
    offs = [(0, 0), i1, (1, 1)]

    total = 0.0
    for (ox, oy), x in zip(offs, xs):
        p = _perm(_perm(i[1] + oy) + i[0] + ox)
        gx = 2.0 * (p % 41) / 41.0 - 1.0
        h = abs(gx) - 0.5
        a0 = gx - math.floor(gx + 0.5)
        m = max(0.5 - _dot(x, x), 0.0) ** 4
        m *= _taylor(a0 * a0 + h * h)
        total += m * (a0 * x[0] + h * x[1])
    return 130.0 * total


def _grad3(p):
    j = p % 49
    x = (j // 7) * (2.0 / 7.0) - 13.0 / 14.0
    y = (j % 7) * (2.0 / 7.0) - 13.0 / 14.0
    h = 1.0 - abs(x) - abs(y)
    if h <= 0.0:
        x -= math.floor(x) * 2.0 + 1.0
        y -= math.floor(y) * 2.0 + 1.0
    g = [x, y, h]
    n = _taylor(_dot(g, g))
    return [c * n for c in g]


def _glm_simplex3(v):
    s = sum(v) / 3.0
    i = [math.floor(c + s) for c in v]
    t = sum(i) / 6.0
    x0 = [c - k + t for c, k in zip(v, i)]

    g = [
        1 if x0[0] >= x0[1] else 0,
        1 if x0[1] >= x0[2] else 0,
        1 if x0[2] >= x0[0] else 0,
    ]
    l = [1 - k for k in g]
    lzxy = [l[2], l[0], l[1]]
    i1 = [min(a, b) for a, b in zip(g, lzxy)]
    i2 = [max(a, b) for a, b in zip(g, lzxy)]

    offs = [[0, 0, 0], i1, i2, [1, 1, 1]]
    xs = [[c - o + n / 6.0 for c, o in zip(x0, off)] for n, off in enumerate(offs)]
    i = [k % 289 for k in i]

    total = 0.0
    for off, x in zip(offs, xs):
        p = _perm(_perm(_perm(i[2] + off[2]) + i[1] + off[1]) + i[0] + off[0])
        m = max(0.6 - _dot(x, x), 0.0) ** 4
        total += m * _dot(_grad3(p), x)
    return 42.0 * total


def _grad4(p):
    xyz = [(p // 42) / 7.0 - 1.0, ((p % 49) // 7) / 7.0 - 1.0, (p % 7) / 7.0 - 1.0]
    w = 1.5 - sum(abs(c) for c in xyz)
    if w < 0.0:
        xyz = [c + (1.0 if c < 0.0 else -1.0) for c in xyz]
    g = xyz + [w]
    n = _taylor(_dot(g, g))
    return [c * n for c in g]


def _glm_simplex4(v):
    cx = 0.138196601125011
    s = sum(v) * 0.309016994374947451
    i = [math.floor(c + s) for c in v]
    t = sum(i) * cx
    x0 = [c - k + t for c, k in zip(v, i)]

    is_x = [
        1 if x0[0] >= x0[1] else 0,
        1 if x0[0] >= x0[2] else 0,
        1 if x0[0] >= x0[3] else 0,
    ]
    is_yz = [
        1 if x0[1] >= x0[2] else 0,
        1 if x0[1] >= x0[3] else 0,
        1 if x0[2] >= x0[3] else 0,
    ]
    i0 = [sum(is_x), 1 - is_x[0], 1 - is_x[1], 1 - is_x[2]]
    i0[1] += is_yz[0] + is_yz[1]
    i0[2] += 1 - is_yz[0]
    i0[3] += 1 - is_yz[1]
    i0[2] += is_yz[2]
    i0[3] += 1 - is_yz[2]

    i3 = [min(max(k, 0), 1) for k in i0]
    i2 = [min(max(k - 1, 0), 1) for k in i0]
    i1 = [min(max(k - 2, 0), 1) for k in i0]

    offs = [[0, 0, 0, 0], i1, i2, i3, [1, 1, 1, 1]]
    xs = [[c - o + n * cx for c, o in zip(x0, off)] for n, off in enumerate(offs)]
    i = [k % 289 for k in i]

    total = 0.0
    for off, x in zip(offs, xs):
        p = _perm(
            _perm(_perm(_perm(i[3] + off[3]) + i[2] + off[2]) + i[1] + off[1])
            + i[0]
            + off[0]
        )
        m = max(0.6 - _dot(x, x), 0.0) ** 4
        total += m * _dot(_grad4(p), x)
    # All five corners carry the 49 scale.
    return 49.0 * total


def _points(dim, n=200, seed=11):
    return np.random.default_rng(seed).uniform(-20.0, 20.0, size=(n, dim))


def test_simplex2_matches_glm_formula():
    pts = _points(2)
    expected = np.array([_glm_simplex2(p.tolist()) for p in pts])
    assert np.allclose(simplex2(pts), expected, atol=1e-10)


def test_simplex3_matches_glm_formula():
    pts = _points(3)
    expected = np.array([_glm_simplex3(p.tolist()) for p in pts])
    assert np.allclose(simplex3(pts), expected, atol=1e-10)


def test_simplex4_matches_glm_formula():
    pts = _points(4)
    expected = np.array([_glm_simplex4(p.tolist()) for p in pts])
    assert np.allclose(simplex4(pts), expected, atol=1e-10)


def test_simplex_reference_values():
    # Off-diagonal points, away from any corner-order tie.
    cases = (
        (simplex2, [0.3, 0.1], _glm_simplex2),
        (simplex3, [0.7, -0.2, 0.45], _glm_simplex3),
        (simplex4, [0.1, 0.9, -0.35, 0.6], _glm_simplex4),
    )
    for fn, p, ref in cases:
        value = fn(np.array(p))
        assert np.allclose(value, ref(p), atol=1e-10)
