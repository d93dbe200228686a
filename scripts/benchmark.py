from __future__ import annotations

import time

import numpy as np

from glslmath import noise_tile, perlin, simplex, simplex_deriv


def _timeit(label: str, fn) -> float:
    t0 = time.perf_counter()
    fn()
    t1 = time.perf_counter()
    ms = (t1 - t0) * 1000.0
    print(f"{label}: {ms:.2f} ms")
    return ms


def main() -> None:
    """Quick CPU benchmark of the vectorized noise evaluators.

    Each run evaluates 262144 points (a 512x512 grid's worth) per dimension,
    once in float64 and once in float32.
    """

    rng = np.random.default_rng(0)
    n = 512 * 512

    for dim in (1, 2, 3, 4):
        pts = rng.uniform(-64.0, 64.0, size=(n, dim))
        pts32 = pts.astype(np.float32)
        _timeit(f"perlin {dim}D (reference)", lambda: perlin(pts))
        _timeit(f"perlin {dim}D (fast float32)", lambda: perlin(pts32))
        _timeit(f"simplex {dim}D (reference)", lambda: simplex(pts))
        _timeit(f"simplex {dim}D (fast float32)", lambda: simplex(pts32))
        _timeit(f"simplex_deriv {dim}D", lambda: simplex_deriv(pts))

    _timeit(
        "Tile: noise_tile 512x512",
        lambda: noise_tile(width=512, height=512, period=8),
    )


if __name__ == "__main__":
    main()
