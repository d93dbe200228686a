from __future__ import annotations

from typing import Any

import numpy as np

from .scalar import floor
from .vector import Vector


def fade(t: np.ndarray) -> np.ndarray:
    """Quintic fade curve used by Improved Perlin Noise (2002)."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + t * (b - a)


def _float_array(p: Any) -> np.ndarray:
    a = np.asarray(p)
    if a.dtype.type in (np.float32, np.float64):
        return a
    return a.astype(np.float64)


def as_points(p: Any, dim: int) -> tuple[np.ndarray, tuple[int, ...]]:
    """Flatten `p` into a batch of `dim`-component points.

    Returns the flat float array (``(n,)`` for 1D, ``(n, dim)`` otherwise) and
    the batch shape to restore on the way out. float32/float64 input keeps its
    width; anything else is computed in float64.
    """

    a = _float_array(p)
    if dim == 1:
        return a.reshape(-1), a.shape
    if a.ndim == 0 or a.shape[-1] != dim:
        raise ValueError(f"expected {dim}D points (last axis of length {dim}), got shape {a.shape}")
    return a.reshape(-1, dim), a.shape[:-1]


def as_period(period: Any, dim: int) -> np.ndarray | None:
    """Per-axis integer periods, or ``None`` for an infinite (untiled) field."""

    if period is None:
        return None
    raw = np.asarray(period)
    if raw.ndim == 0:
        raw = np.full(dim, raw)
    if raw.shape != (dim,):
        raise ValueError(f"period must be a scalar or have {dim} entries, got shape {raw.shape}")
    if not np.all(np.isfinite(raw)) or not np.all(floor(raw) == raw):
        raise ValueError("period must be integral")
    per = raw.astype(np.int64)
    if np.any(per < 1):
        raise ValueError("period must be >= 1")
    return per


def fold(i: np.ndarray, period: np.ndarray | int | None, limit: int) -> np.ndarray:
    """Reduce integer lattice indices by the tiling period, then by the table size."""

    if period is not None:
        i = np.mod(i, period)
    return np.mod(i, limit)


def simplex_rank(x0: np.ndarray) -> np.ndarray:
    """Order of each component of `x0`, 0 for the largest.

    Equal components rank the lower axis first, so the simplex decomposition
    of a cube is unique.
    """

    n = x0.shape[-1]
    rank = np.zeros(x0.shape, dtype=np.int64)
    for a in range(n):
        for b in range(a + 1, n):
            a_first = x0[..., a] >= x0[..., b]
            rank[..., b] += a_first
            rank[..., a] += ~a_first
    return rank


def finish(value: np.ndarray, shape: tuple[int, ...], dtype: np.dtype):
    value = np.asarray(value, dtype=dtype).reshape(shape)
    return value[()] if value.ndim == 0 else value


def finish_grad(p: Any, grad: np.ndarray, shape: tuple[int, ...], dtype: np.dtype):
    grad = np.asarray(grad, dtype=dtype)
    if grad.ndim > 1:
        shape = shape + grad.shape[-1:]
    grad = grad.reshape(shape)
    if isinstance(p, Vector):
        return type(p)._wrap(grad)
    return grad[()] if grad.ndim == 0 else grad
