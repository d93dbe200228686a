from __future__ import annotations

from typing import Any, Protocol, TypeVar

import numpy as np

SCALAR_TYPES = (np.float32, np.float64)

T = TypeVar("T", bound="Scalar")


class Scalar(Protocol):
    """Floating-point capability contract shared by every formula in the kernel.

    numpy ``float32``/``float64`` scalars (and plain Python floats) satisfy it;
    the elementwise functions below lift it to arrays of either width.
    """

    def __lt__(self, other: Any) -> bool:  # pragma: no cover
        ...

    def __le__(self, other: Any) -> bool:  # pragma: no cover
        ...

    def __add__(self: T, other: Any) -> T:  # pragma: no cover
        ...

    def __sub__(self: T, other: Any) -> T:  # pragma: no cover
        ...

    def __mul__(self: T, other: Any) -> T:  # pragma: no cover
        ...

    def __truediv__(self: T, other: Any) -> T:  # pragma: no cover
        ...

    def __neg__(self: T) -> T:  # pragma: no cover
        ...

    def __abs__(self: T) -> T:  # pragma: no cover
        ...

    def __floor__(self) -> int:  # pragma: no cover
        ...


def scalar_dtype(dtype: Any = None) -> np.dtype:
    if dtype is None:
        return np.dtype(np.float64)
    try:
        dt = np.dtype(dtype)
    except TypeError as exc:
        raise ValueError(f"unsupported scalar type: {dtype!r}") from exc
    if dt.type not in SCALAR_TYPES:
        raise ValueError(f"unsupported scalar type: {dt.name}")
    return dt


def result_dtype(*values: Any) -> np.dtype:
    """Width an expression over `values` is computed in.

    float32 survives only when every floating operand is float32; integers and
    Python numbers never widen.
    """

    widths = []
    for v in values:
        dt = getattr(v, "dtype", None)
        if dt is not None and np.issubdtype(dt, np.floating):
            widths.append(np.dtype(dt))
    if widths and all(dt == np.float32 for dt in widths):
        return np.dtype(np.float32)
    return np.dtype(np.float64)


def abs_(x):
    return np.abs(x)


def floor(x):
    return np.floor(x)


def fract(x):
    return x - np.floor(x)


def sqrt(x):
    return np.sqrt(x)


def pow_(x, y):
    return np.power(x, y)
