from __future__ import annotations

from typing import Any, Iterator

import numpy as np

from .scalar import Scalar, result_dtype, scalar_dtype
from .vector import VECTOR_TYPES, Vector, _is_scalar

_SIZES = (2, 3, 4)


class Matrix:
    """Column-major matrix of `cols` column vectors, each `rows` long.

    ``m[j]`` is column ``j`` and ``m[j, i]`` is row ``i`` of that column, as in
    GLSL. ``numpy.asarray(m)`` gives the conventional row-major ``(rows, cols)``
    array, so ``asarray(m) @ asarray(v)`` agrees with ``m * v``.
    """

    __slots__ = ("_m",)
    __array_ufunc__ = None

    def __init__(self, *columns: Vector):
        if len(columns) not in _SIZES:
            raise ValueError(f"a matrix takes 2, 3 or 4 columns, got {len(columns)}")
        if not all(isinstance(c, Vector) for c in columns):
            raise ValueError("matrix columns must be Vec2, Vec3 or Vec4")
        rows = columns[0].dim
        if any(c.dim != rows for c in columns):
            raise ValueError("matrix columns must all have the same length")
        dt = result_dtype(*columns)
        m = np.stack([np.asarray(c, dtype=dt) for c in columns], axis=1)
        m.flags.writeable = False
        self._m = m

    @classmethod
    def _wrap(cls, values: np.ndarray) -> "Matrix":
        out = object.__new__(cls)
        m = np.array(values)
        if not np.issubdtype(m.dtype, np.floating):
            m = m.astype(np.float64)
        m.flags.writeable = False
        out._m = m
        return out

    @classmethod
    def from_array(cls, values: Any) -> "Matrix":
        """Build from a row-major ``(rows, cols)`` array."""

        a = np.asarray(values)
        if a.ndim != 2 or a.shape[0] not in _SIZES or a.shape[1] not in _SIZES:
            raise ValueError(f"expected a (rows, cols) array with sizes 2..4, got {a.shape}")
        dt = a.dtype if a.dtype.type in (np.float32, np.float64) else np.float64
        return cls._wrap(a.astype(dt))

    @property
    def rows(self) -> int:
        return int(self._m.shape[0])

    @property
    def cols(self) -> int:
        return int(self._m.shape[1])

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    @property
    def dtype(self) -> np.dtype:
        return self._m.dtype

    def column(self, j: int) -> Vector:
        return VECTOR_TYPES[self.rows]._wrap(self._m[:, j])

    def __getitem__(self, key):
        if isinstance(key, tuple):
            j, i = key
            return self._m[i, j]
        return self.column(key)

    def __len__(self) -> int:
        return self.cols

    def __iter__(self) -> Iterator[Vector]:
        for j in range(self.cols):
            yield self.column(j)

    def __array__(self, dtype: Any = None, copy: Any = None) -> np.ndarray:
        return np.array(self._m, dtype=dtype)

    def __repr__(self) -> str:
        return f"Matrix({', '.join(repr(c) for c in self)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._m, other._m))

    def __hash__(self) -> int:
        return hash((self.shape, tuple(self._m.ravel().tolist())))

    def _same_shape(self, other: "Matrix", op: str) -> None:
        if other.shape != self.shape:
            raise ValueError(f"cannot {op} {self.shape} and {other.shape} matrices")

    def __add__(self, other):
        if isinstance(other, Matrix):
            self._same_shape(other, "add")
            return Matrix._wrap(self._m + other._m)
        if _is_scalar(other):
            return Matrix._wrap(self._m + other)
        return NotImplemented

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        if isinstance(other, Matrix):
            self._same_shape(other, "subtract")
            return Matrix._wrap(self._m - other._m)
        if _is_scalar(other):
            return Matrix._wrap(self._m - other)
        return NotImplemented

    def __rsub__(self, other):
        if _is_scalar(other):
            return Matrix._wrap(other - self._m)
        return NotImplemented

    def __neg__(self):
        return Matrix._wrap(-self._m)

    def __mul__(self, other):
        if _is_scalar(other):
            return Matrix._wrap(self._m * other)
        return self.__matmul__(other)

    def __rmul__(self, other):
        if _is_scalar(other):
            return Matrix._wrap(other * self._m)
        return self.__rmatmul__(other)

    def __truediv__(self, other: Scalar):
        if not _is_scalar(other):
            return NotImplemented
        with np.errstate(divide="ignore", invalid="ignore"):
            return Matrix._wrap(self._m / other)

    def __matmul__(self, other):
        if isinstance(other, Vector):
            if other.dim != self.cols:
                raise ValueError(
                    f"cannot multiply {self.shape} matrix by {other.dim}-component vector"
                )
            return VECTOR_TYPES[self.rows]._wrap(self._m @ np.asarray(other))
        if isinstance(other, Matrix):
            if other.rows != self.cols:
                raise ValueError(
                    f"cannot multiply {self.shape} and {other.shape} matrices"
                )
            return Matrix._wrap(self._m @ other._m)
        return NotImplemented

    def __rmatmul__(self, other):
        # v * m treats v as a row vector.
        if isinstance(other, Vector):
            if other.dim != self.rows:
                raise ValueError(
                    f"cannot multiply {other.dim}-component vector by {self.shape} matrix"
                )
            return VECTOR_TYPES[self.cols]._wrap(np.asarray(other) @ self._m)
        return NotImplemented


def _constructor(cols: int, rows: int, name: str):
    def make(*args: Scalar | Vector, dtype: Any = None) -> Matrix:
        dt = scalar_dtype(dtype) if dtype is not None else result_dtype(*args)
        if len(args) == 1 and not isinstance(args[0], Vector) and np.ndim(args[0]) == 0:
            a = np.zeros((rows, cols), dtype=dt)
            np.fill_diagonal(a, args[0])
            return Matrix._wrap(a)
        if len(args) == cols and all(isinstance(c, Vector) for c in args):
            if any(c.dim != rows for c in args):
                raise ValueError(f"{name} columns must have {rows} components")
            return Matrix._wrap(np.stack([np.asarray(c, dtype=dt) for c in args], axis=1))
        if len(args) == cols * rows and all(np.ndim(s) == 0 for s in args):
            flat = np.array([np.asarray(s) for s in args], dtype=dt)
            return Matrix._wrap(flat.reshape(cols, rows).T)
        raise ValueError(
            f"{name} takes {cols} column vectors, {cols * rows} scalars or one scalar"
        )

    make.__name__ = name
    make.__qualname__ = name
    make.__doc__ = f"Build a {cols}-column, {rows}-row matrix (GLSL ``{name}``)."
    return make


mat2 = _constructor(2, 2, "mat2")
mat3 = _constructor(3, 3, "mat3")
mat4 = _constructor(4, 4, "mat4")
mat2x3 = _constructor(2, 3, "mat2x3")
mat2x4 = _constructor(2, 4, "mat2x4")
mat3x2 = _constructor(3, 2, "mat3x2")
mat3x4 = _constructor(3, 4, "mat3x4")
mat4x2 = _constructor(4, 2, "mat4x2")
mat4x3 = _constructor(4, 3, "mat4x3")


def identity(n: int, *, dtype: Any = None) -> Matrix:
    if n not in _SIZES:
        raise ValueError(f"identity size must be 2, 3 or 4, got {n}")
    return Matrix._wrap(np.eye(n, dtype=scalar_dtype(dtype)))


def _square(m: Matrix, name: str) -> np.ndarray:
    if m.rows != m.cols:
        raise ValueError(f"{name}() needs a square matrix, got {m.shape}")
    return m._m


def _det(a: np.ndarray) -> Scalar:
    n = a.shape[0]
    if n == 2:
        return a[0, 0] * a[1, 1] - a[0, 1] * a[1, 0]
    if n == 3:
        return (
            a[0, 0] * (a[1, 1] * a[2, 2] - a[1, 2] * a[2, 1])
            - a[0, 1] * (a[1, 0] * a[2, 2] - a[1, 2] * a[2, 0])
            + a[0, 2] * (a[1, 0] * a[2, 1] - a[1, 1] * a[2, 0])
        )
    # 4x4: cofactor expansion along the first row.
    total = a[0, 0] * _det(_minor(a, 0, 0))
    for j in range(1, 4):
        term = a[0, j] * _det(_minor(a, 0, j))
        total = total - term if j % 2 else total + term
    return total


def _minor(a: np.ndarray, i: int, j: int) -> np.ndarray:
    return np.delete(np.delete(a, i, axis=0), j, axis=1)


def transpose(m: Matrix) -> Matrix:
    return Matrix._wrap(m._m.T)


def determinant(m: Matrix) -> Scalar:
    return _det(_square(m, "determinant"))


def inverse(m: Matrix) -> Matrix:
    """Adjugate over determinant.

    A singular matrix is not an error: the division by a zero determinant
    leaves inf/NaN entries.
    """

    a = _square(m, "inverse")
    n = a.shape[0]
    if n == 2:
        adj = np.array([[a[1, 1], -a[0, 1]], [-a[1, 0], a[0, 0]]], dtype=a.dtype)
    else:
        cof = np.empty_like(a)
        for i in range(n):
            for j in range(n):
                c = _det(_minor(a, i, j))
                cof[i, j] = -c if (i + j) % 2 else c
        adj = cof.T
    with np.errstate(divide="ignore", invalid="ignore"):
        return Matrix._wrap(adj / _det(a))


def matrix_comp_mult(a: Matrix, b: Matrix) -> Matrix:
    a._same_shape(b, "multiply componentwise")
    return Matrix._wrap(a._m * b._m)


def outer_product(c: Vector, r: Vector) -> Matrix:
    """Matrix with ``len(r)`` columns, column ``j`` being ``c * r[j]``."""

    return Matrix._wrap(np.outer(np.asarray(c), np.asarray(r)))
