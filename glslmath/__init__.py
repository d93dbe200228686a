from .matrix import (
    Matrix,
    determinant,
    identity,
    inverse,
    mat2,
    mat2x3,
    mat2x4,
    mat3,
    mat3x2,
    mat3x4,
    mat4,
    mat4x2,
    mat4x3,
    matrix_comp_mult,
    outer_product,
    transpose,
)
from .noise import noise1, noise2, noise3, noise4, perlin, simplex, simplex_deriv
from .noise_1d import perlin1, simplex1, simplex1_deriv
from .noise_2d import perlin2, simplex2, simplex2_deriv
from .noise_3d import perlin3, simplex3, simplex3_deriv
from .noise_4d import perlin4, simplex4, simplex4_deriv
from .tile import noise_tile, tile_to_png_bytes
from .vector import (
    Vec2,
    Vec3,
    Vec4,
    Vector,
    cross,
    distance,
    dot,
    faceforward,
    is_close,
    length,
    mix,
    normalize,
    reflect,
    refract,
)

__all__ = [
    "Matrix",
    "Vec2",
    "Vec3",
    "Vec4",
    "Vector",
    "cross",
    "determinant",
    "distance",
    "dot",
    "faceforward",
    "identity",
    "inverse",
    "is_close",
    "length",
    "mat2",
    "mat2x3",
    "mat2x4",
    "mat3",
    "mat3x2",
    "mat3x4",
    "mat4",
    "mat4x2",
    "mat4x3",
    "matrix_comp_mult",
    "mix",
    "noise1",
    "noise2",
    "noise3",
    "noise4",
    "noise_tile",
    "normalize",
    "outer_product",
    "perlin",
    "perlin1",
    "perlin2",
    "perlin3",
    "perlin4",
    "reflect",
    "refract",
    "simplex",
    "simplex1",
    "simplex1_deriv",
    "simplex2",
    "simplex2_deriv",
    "simplex3",
    "simplex3_deriv",
    "simplex4",
    "simplex4_deriv",
    "simplex_deriv",
    "tile_to_png_bytes",
    "transpose",
]
