from __future__ import annotations

import numbers
import operator
from typing import Any, Iterator

import numpy as np

from . import scalar
from .scalar import Scalar, result_dtype, scalar_dtype


def _is_scalar(x: Any) -> bool:
    return isinstance(x, (numbers.Real, np.floating, np.integer)) and not isinstance(
        x, bool
    )


class Vector:
    """Fixed-length vector of scalars with GLSL value semantics.

    Use the concrete `Vec2`, `Vec3` and `Vec4`. Components live in a
    read-only numpy array, so every operation produces a new vector.
    """

    __slots__ = ("_v",)
    __array_ufunc__ = None

    dim: int = 0

    def __init__(self, *components: Scalar, dtype: Any = None):
        if self.dim == 0:
            raise TypeError("Vector is abstract; use Vec2, Vec3 or Vec4")
        if len(components) == 1 and np.ndim(components[0]) == 0:
            components = components * self.dim
        if len(components) != self.dim:
            raise ValueError(
                f"{type(self).__name__} takes {self.dim} components, got {len(components)}"
            )
        dt = scalar_dtype(dtype) if dtype is not None else result_dtype(*components)
        v = np.array([np.asarray(c) for c in components], dtype=dt)
        if v.shape != (self.dim,):
            raise ValueError(f"{type(self).__name__} components must be scalars")
        v.flags.writeable = False
        self._v = v

    @classmethod
    def _wrap(cls, values: np.ndarray) -> "Vector":
        out = object.__new__(cls)
        v = np.array(values)
        if not np.issubdtype(v.dtype, np.floating):
            v = v.astype(np.float64)
        v.flags.writeable = False
        out._v = v
        return out

    @staticmethod
    def from_array(values: Any) -> "Vector":
        v = np.asarray(values)
        if v.ndim != 1 or v.shape[0] not in VECTOR_TYPES:
            raise ValueError(f"expected 2, 3 or 4 components, got shape {v.shape}")
        dt = v.dtype if v.dtype.type in (np.float32, np.float64) else np.float64
        return VECTOR_TYPES[v.shape[0]]._wrap(v.astype(dt))

    @property
    def dtype(self) -> np.dtype:
        return self._v.dtype

    @property
    def x(self) -> Scalar:
        return self._v[0]

    @property
    def y(self) -> Scalar:
        return self._v[1]

    def __len__(self) -> int:
        return self.dim

    def __getitem__(self, i: int) -> Scalar:
        return self._v[i]

    def __iter__(self) -> Iterator:
        return iter(self._v)

    def __array__(self, dtype: Any = None, copy: Any = None) -> np.ndarray:
        return np.array(self._v, dtype=dtype)

    def tolist(self) -> list[float]:
        return self._v.tolist()

    def __repr__(self) -> str:
        parts = ", ".join(repr(float(c)) for c in self._v)
        if self.dtype == np.float32:
            return f"{type(self).__name__}({parts}, dtype=float32)"
        return f"{type(self).__name__}({parts})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return type(self) is type(other) and bool(np.array_equal(self._v, other._v))

    def __hash__(self) -> int:
        return hash((type(self).__name__, tuple(self._v.tolist())))

    def _operand(self, other: Any):
        if isinstance(other, Vector):
            return other._v if type(other) is type(self) else None
        if _is_scalar(other):
            return other
        return None

    def _binary(self, other: Any, op, *, reflected: bool = False):
        rhs = self._operand(other)
        if rhs is None:
            return NotImplemented
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            out = op(rhs, self._v) if reflected else op(self._v, rhs)
        return type(self)._wrap(out)

    def __add__(self, other):
        return self._binary(other, operator.add)

    def __radd__(self, other):
        return self._binary(other, operator.add, reflected=True)

    def __sub__(self, other):
        return self._binary(other, operator.sub)

    def __rsub__(self, other):
        return self._binary(other, operator.sub, reflected=True)

    def __mul__(self, other):
        return self._binary(other, operator.mul)

    def __rmul__(self, other):
        return self._binary(other, operator.mul, reflected=True)

    def __truediv__(self, other):
        return self._binary(other, operator.truediv)

    def __rtruediv__(self, other):
        return self._binary(other, operator.truediv, reflected=True)

    def __neg__(self):
        return type(self)._wrap(-self._v)

    def __pos__(self):
        return self


class Vec2(Vector):
    __slots__ = ()
    dim = 2


class Vec3(Vector):
    __slots__ = ()
    dim = 3

    @property
    def z(self) -> Scalar:
        return self._v[2]


class Vec4(Vector):
    __slots__ = ()
    dim = 4

    @property
    def z(self) -> Scalar:
        return self._v[2]

    @property
    def w(self) -> Scalar:
        return self._v[3]


VECTOR_TYPES = {2: Vec2, 3: Vec3, 4: Vec4}


def _unwrap(v: Any) -> np.ndarray:
    if isinstance(v, Vector):
        return v._v
    return np.asarray(v)


def _rewrap(like: Any, values: np.ndarray):
    if isinstance(like, Vector):
        return type(like)._wrap(values)
    return values


def _check_pair(a: Any, b: Any, name: str) -> None:
    if isinstance(a, Vector) and isinstance(b, Vector) and type(a) is not type(b):
        raise TypeError(
            f"{name}() needs vectors of one length, got {type(a).__name__} and {type(b).__name__}"
        )


# The functions below accept vectors or numpy arrays; arrays are treated as
# batches of vectors along the last axis.


def dot(a, b):
    _check_pair(a, b, "dot")
    return np.sum(_unwrap(a) * _unwrap(b), axis=-1)


def cross(a, b):
    if isinstance(a, Vector) or isinstance(b, Vector):
        if not (isinstance(a, Vec3) and isinstance(b, Vec3)):
            raise TypeError("cross() is defined for Vec3 only")
    x = _unwrap(a)
    y = _unwrap(b)
    if x.shape[-1] != 3 or y.shape[-1] != 3:
        raise ValueError("cross() needs 3-component vectors")
    out = np.stack(
        [
            x[..., 1] * y[..., 2] - y[..., 1] * x[..., 2],
            x[..., 2] * y[..., 0] - y[..., 2] * x[..., 0],
            x[..., 0] * y[..., 1] - y[..., 0] * x[..., 1],
        ],
        axis=-1,
    )
    return _rewrap(a, out)


def length(a):
    return scalar.sqrt(dot(a, a))


def distance(a, b):
    _check_pair(a, b, "distance")
    return length(_unwrap(a) - _unwrap(b))


def normalize(a):
    """Scale `a` to unit length; a zero vector yields NaN components."""

    v = _unwrap(a)
    with np.errstate(divide="ignore", invalid="ignore"):
        out = v / scalar.sqrt(np.sum(v * v, axis=-1, keepdims=True))
    return _rewrap(a, out)


def mix(a, b, t: Scalar | Vector | np.ndarray):
    _check_pair(a, b, "mix")
    x = _unwrap(a)
    y = _unwrap(b)
    w = t if _is_scalar(t) else _unwrap(t)
    return _rewrap(a, x + w * (y - x))


def floor(a):
    return _rewrap(a, scalar.floor(_unwrap(a)))


def fract(a):
    return _rewrap(a, scalar.fract(_unwrap(a)))


def faceforward(n, i, nref):
    """Return `n` if it faces away from the incident `i`, else `-n`."""

    nv = _unwrap(n)
    keep = dot(_unwrap(nref), _unwrap(i)) < 0
    return _rewrap(n, np.where(np.asarray(keep)[..., None], nv, -nv))


def reflect(i, n):
    iv = _unwrap(i)
    nv = _unwrap(n)
    d = np.sum(nv * iv, axis=-1, keepdims=True)
    return _rewrap(i, iv - 2.0 * d * nv)


def refract(i, n, eta: Scalar):
    """Refraction direction for incident `i`, surface normal `n` and ratio `eta`.

    Total internal reflection gives the zero vector.
    """

    iv = _unwrap(i)
    nv = _unwrap(n)
    d = np.sum(nv * iv, axis=-1, keepdims=True)
    k = 1.0 - eta * eta * (1.0 - d * d)
    with np.errstate(invalid="ignore"):
        out = eta * iv - (eta * d + scalar.sqrt(k)) * nv
    out = np.where(k < 0.0, np.zeros_like(out), out)
    return _rewrap(i, out)


def is_close(a, b, tol: float = 1e-6) -> bool:
    x = np.asarray(a)
    y = np.asarray(b)
    if x.shape != y.shape:
        return False
    return bool(np.all(scalar.abs_(x - y) <= tol))
