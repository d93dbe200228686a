"""Dimension-dispatching noise entry points and the GLSL ``noiseN`` built-ins."""

from __future__ import annotations

from typing import Any

import numpy as np

from .noise_1d import perlin1, simplex1, simplex1_deriv
from .noise_2d import perlin2, simplex2, simplex2_deriv
from .noise_3d import perlin3, simplex3, simplex3_deriv
from .noise_4d import perlin4, simplex4, simplex4_deriv
from .vector import Vec2, Vec3, Vec4, Vector

_PERLIN = {1: perlin1, 2: perlin2, 3: perlin3, 4: perlin4}
_SIMPLEX = {1: simplex1, 2: simplex2, 3: simplex3, 4: simplex4}
_SIMPLEX_DERIV = {
    1: simplex1_deriv,
    2: simplex2_deriv,
    3: simplex3_deriv,
    4: simplex4_deriv,
}


def point_dim(p: Any) -> int:
    """Dimension of a sample: a vector's length, 1 for scalars, else the last axis."""

    if isinstance(p, Vector):
        return p.dim
    shape = np.shape(p)
    if len(shape) == 0:
        return 1
    dim = int(shape[-1])
    if dim not in _PERLIN:
        raise ValueError(f"noise is defined for 1 to 4 dimensions, got points of shape {shape}")
    return dim


def _squeeze_1d(p: Any):
    # (..., 1) arrays carry 1D samples along a unit last axis.
    if isinstance(p, Vector) or np.ndim(p) == 0:
        return p, False
    return np.asarray(p)[..., 0], True


def perlin(p: Any, period: Any = None):
    dim = point_dim(p)
    if dim == 1:
        x, _ = _squeeze_1d(p)
        return perlin1(x, period)
    return _PERLIN[dim](p, period)


def simplex(p: Any, period: Any = None):
    dim = point_dim(p)
    if dim == 1:
        x, _ = _squeeze_1d(p)
        return simplex1(x, period)
    return _SIMPLEX[dim](p, period)


def simplex_deriv(p: Any, period: Any = None):
    """Simplex value and gradient; the gradient matches the shape of `p`."""

    dim = point_dim(p)
    if dim == 1:
        x, squeezed = _squeeze_1d(p)
        value, grad = simplex1_deriv(x, period)
        if squeezed:
            grad = np.asarray(grad)[..., None]
        return value, grad
    return _SIMPLEX_DERIV[dim](p, period)


def noise1(x: Any):
    """GLSL ``noise1``: the simplex field of the argument's own dimension.

    A float (or an array of floats) samples the 2D field along y = 0, the way
    GLM's scalar overload does.
    """

    if isinstance(x, Vector):
        return _SIMPLEX[x.dim](x)
    xs = _sample(x)
    return simplex2(np.stack([xs, np.zeros_like(xs)], axis=-1))


def _sample(x: Any):
    if isinstance(x, Vector):
        return x
    xs = np.asarray(x)
    return xs if xs.dtype.type in (np.float32, np.float64) else xs.astype(np.float64)


def _pack(x: Any, values: list, vec_type: type[Vector]):
    if isinstance(x, Vector) or np.ndim(x) == 0:
        return vec_type(*values)
    return np.stack(values, axis=-1)


def noise2(x: Any):
    x = _sample(x)
    return _pack(x, [noise1(x), noise1(-x)], Vec2)


def noise3(x: Any):
    x = _sample(x)
    return _pack(x, [noise1(x - 1.0), noise1(x), noise1(x + 1.0)], Vec3)


def noise4(x: Any):
    x = _sample(x)
    return _pack(
        x,
        [noise1(x - 1.0), noise1(x), noise1(x + 1.0), noise1(x + 2.0)],
        Vec4,
    )
