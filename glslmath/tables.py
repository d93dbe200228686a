"""Read-only permutation and gradient tables shared by the noise evaluators.

Everything here is built once at import and marked non-writeable.
"""

from __future__ import annotations

import itertools

import numpy as np

from .scalar import abs_, floor

CLASSIC_PERIOD_LIMIT = 256
SIMPLEX_PERIOD_LIMIT = 289


def _frozen(a: np.ndarray) -> np.ndarray:
    a.flags.writeable = False
    return a


# Ken Perlin's reference permutation.
_PERLIN_PERM = [
    151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225,
    140, 36, 103, 30, 69, 142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148,
    247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219, 203, 117, 35, 11, 32,
    57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175,
    74, 165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122,
    60, 211, 133, 230, 220, 105, 92, 41, 55, 46, 245, 40, 244, 102, 143, 54,
    65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208, 89, 18, 169,
    200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64,
    52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212,
    207, 206, 59, 227, 47, 16, 58, 17, 182, 189, 28, 42, 223, 183, 170, 213,
    119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167, 43, 172, 9,
    129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104,
    218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241,
    81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199, 106, 157,
    184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205, 93,
    222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
]

# Doubled so p[p[i] + j] never needs a wrap check.
PERM = _frozen(np.array(_PERLIN_PERM + _PERLIN_PERM, dtype=np.int64))

# Permutation polynomial (34x^2 + x) mod 289 from the GLM simplex code; it
# is a bijection on 0..288.
PERM289 = _frozen(
    np.array([((34 * i + 1) * i) % 289 for i in range(289)], dtype=np.int64)
)


def perm(i: np.ndarray) -> np.ndarray:
    return PERM[np.bitwise_and(i, 255)]


def permute289(i: np.ndarray) -> np.ndarray:
    return PERM289[np.mod(i, 289)]


def taylor_inv_sqrt(r):
    return 1.79284291400159 - 0.85373472095314 * r


def _unit(rows) -> np.ndarray:
    g = np.array(rows, dtype=np.float64)
    g /= np.linalg.norm(g, axis=1, keepdims=True)
    return g


# -- classic gradients -------------------------------------------------------

GRAD1 = _frozen(
    np.array(
        [(1 + (h & 7)) / 8.0 * (-1.0 if h & 8 else 1.0) for h in range(16)],
        dtype=np.float64,
    )
)

GRAD2 = _frozen(
    _unit(
        [
            [1.0, 0.0],
            [-1.0, 0.0],
            [0.0, 1.0],
            [0.0, -1.0],
            [1.0, 1.0],
            [-1.0, 1.0],
            [1.0, -1.0],
            [-1.0, -1.0],
        ]
    )
)

GRAD3 = _frozen(
    _unit(
        [
            [1.0, 1.0, 0.0],
            [-1.0, 1.0, 0.0],
            [1.0, -1.0, 0.0],
            [-1.0, -1.0, 0.0],
            [1.0, 0.0, 1.0],
            [-1.0, 0.0, 1.0],
            [1.0, 0.0, -1.0],
            [-1.0, 0.0, -1.0],
            [0.0, 1.0, 1.0],
            [0.0, -1.0, 1.0],
            [0.0, 1.0, -1.0],
            [0.0, -1.0, -1.0],
        ]
    )
)


def _grad4_rows() -> list[list[float]]:
    rows = []
    for zero_axis in range(4):
        for signs in itertools.product((1.0, -1.0), repeat=3):
            g = list(signs)
            g.insert(zero_axis, 0.0)
            rows.append(g)
    return rows


GRAD4 = _frozen(_unit(_grad4_rows()))


def classic_grad1(h: np.ndarray) -> np.ndarray:
    return GRAD1[np.bitwise_and(h, 15)]


def classic_grad2(h: np.ndarray) -> np.ndarray:
    return GRAD2[np.bitwise_and(h, 7)]


def classic_grad3(h: np.ndarray) -> np.ndarray:
    return GRAD3[np.mod(h, 12)]


def classic_grad4(h: np.ndarray) -> np.ndarray:
    return GRAD4[np.bitwise_and(h, 31)]


# -- simplex gradients -------------------------------------------------------
# Indexed by a PERM289 hash. Integer arithmetic replaces GLM's float
# fract/floor steps so both scalar widths pick identical gradients.

_H = np.arange(289, dtype=np.int64)


def _ring41() -> np.ndarray:
    # 41 points uniformly over a line; 17*17 = 289 is close to 41*7 = 287.
    return (np.mod(_H, 41) * 2.0) / 41.0 - 1.0


def _simplex_grad2() -> np.ndarray:
    x = _ring41()
    h = abs_(x) - 0.5
    a0 = x - floor(x + 0.5)
    g = np.stack([a0, h], axis=1)
    return g * taylor_inv_sqrt(a0 * a0 + h * h)[:, None]


def _simplex_grad3() -> np.ndarray:
    # 7x7 points over a square, mapped onto an octahedron.
    j = np.mod(_H, 49)
    x = (j // 7) * (2.0 / 7.0) - 13.0 / 14.0
    y = np.mod(j, 7) * (2.0 / 7.0) - 13.0 / 14.0
    h = 1.0 - abs_(x) - abs_(y)
    sh = -(h <= 0.0).astype(np.float64)
    gx = x + (floor(x) * 2.0 + 1.0) * sh
    gy = y + (floor(y) * 2.0 + 1.0) * sh
    g = np.stack([gx, gy, h], axis=1)
    return g * taylor_inv_sqrt(np.sum(g * g, axis=1))[:, None]


def _simplex_grad4() -> np.ndarray:
    # 7x7x6 points over a cube, mapped onto a 4-cross polytope.
    xyz = np.stack([_H // 42, np.mod(_H, 49) // 7, np.mod(_H, 7)], axis=1) / 7.0 - 1.0
    w = 1.5 - np.sum(abs_(xyz), axis=1)
    s = (xyz < 0.0).astype(np.float64)
    sw = (w < 0.0).astype(np.float64)
    xyz = xyz + (s * 2.0 - 1.0) * sw[:, None]
    g = np.concatenate([xyz, w[:, None]], axis=1)
    return g * taylor_inv_sqrt(np.sum(g * g, axis=1))[:, None]


SIMPLEX_GRAD1 = _frozen(_ring41())
SIMPLEX_GRAD2 = _frozen(_simplex_grad2())
SIMPLEX_GRAD3 = _frozen(_simplex_grad3())
SIMPLEX_GRAD4 = _frozen(_simplex_grad4())
