import inspect

import numpy as np
import pytest

from glslmath import scalar, vector
from glslmath.matrix import determinant
from glslmath.scalar import abs_, floor, fract, pow_, result_dtype, scalar_dtype, sqrt
from glslmath.vector import Vec2, Vec3, refract


def test_scalar_dtype_defaults_to_float64():
    assert scalar_dtype() == np.float64
    assert scalar_dtype(None) == np.float64
    assert scalar_dtype(np.float32) == np.float32
    assert scalar_dtype("float32") == np.float32


def test_scalar_dtype_rejects_other_types():
    with pytest.raises(ValueError):
        scalar_dtype(np.int32)
    with pytest.raises(ValueError):
        scalar_dtype(np.float16)
    with pytest.raises(ValueError):
        scalar_dtype("not-a-dtype")


def test_result_dtype_keeps_float32_only_when_all_float32():
    f32 = np.float32(1.0)
    assert result_dtype(f32, np.float32(2.0)) == np.float32
    assert result_dtype(f32, 2.0, 3) == np.float32
    assert result_dtype(f32, np.float64(2.0)) == np.float64
    assert result_dtype(1, 2) == np.float64


def test_elementwise_functions():
    x = np.array([-1.5, -0.25, 0.0, 2.75])
    assert np.array_equal(abs_(x), [1.5, 0.25, 0.0, 2.75])
    assert np.array_equal(floor(x), [-2.0, -1.0, 0.0, 2.0])
    assert np.array_equal(fract(x), [0.5, 0.75, 0.0, 0.75])
    assert sqrt(np.float64(9.0)) == 3.0
    assert pow_(2.0, 10.0) == 1024.0


def test_elementwise_functions_keep_width():
    x = np.float32(1.5)
    assert fract(x).dtype == np.float32
    assert sqrt(x).dtype == np.float32
    assert floor(np.array([1.5], dtype=np.float32)).dtype == np.float32


def test_vector_builtins_go_through_scalar_functions(monkeypatch):
    calls = []

    def spy(name, fn):
        def wrapped(x):
            calls.append(name)
            return fn(x)

        monkeypatch.setattr(scalar, name, wrapped)

    spy("floor", scalar.floor)
    spy("fract", scalar.fract)
    spy("sqrt", scalar.sqrt)

    v = Vec2(-0.5, 3.25)
    assert vector.floor(v) == Vec2(-1.0, 3.0)
    assert vector.fract(v) == Vec2(0.5, 0.25)
    assert vector.length(Vec2(3.0, 4.0)) == 5.0
    assert calls == ["floor", "fract", "sqrt"]


def test_kernel_signatures_use_scalar_contract():
    assert inspect.signature(determinant).return_annotation == "Scalar"
    assert inspect.signature(refract).parameters["eta"].annotation == "Scalar"
    assert inspect.signature(Vec3.__init__).parameters["components"].annotation == "Scalar"
