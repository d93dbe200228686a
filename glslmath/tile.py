from __future__ import annotations

import io
from typing import Any

import numpy as np
from PIL import Image

from .noise_2d import perlin2
from .scalar import scalar_dtype


def noise_tile(
    *,
    width: int,
    height: int,
    period: Any,
    offset: tuple[float, float] = (0.0, 0.0),
    dtype: Any = None,
) -> np.ndarray:
    """Sample periodic 2D Perlin noise into a seamlessly tiling ``(height, width)`` map.

    The grid spans exactly `period` lattice cells on each axis with the
    endpoint excluded, so a copy of the tile placed next to itself continues
    the field without a seam.
    """

    width = int(width)
    height = int(height)
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")

    per = np.broadcast_to(np.asarray(period), (2,))
    if np.any(per <= 0):
        raise ValueError("period must be > 0")
    px = float(per[0])
    py = float(per[1])

    dt = scalar_dtype(dtype)
    ox = float(offset[0])
    oy = float(offset[1])
    xs = ox + np.arange(width, dtype=np.float64) * (px / width)
    ys = oy + np.arange(height, dtype=np.float64) * (py / height)
    xg, yg = np.meshgrid(xs, ys)

    pts = np.stack([xg, yg], axis=-1).astype(dt)
    return perlin2(pts, period=per)


def tile_to_png_bytes(z: np.ndarray) -> bytes:
    """Encode a noise map as an 8-bit grayscale PNG.

    Values map linearly from [-1, 1] to [0, 255] and are clipped, so tiles
    rendered separately share one brightness scale.
    """

    z = np.asarray(z, dtype=np.float64)
    if z.ndim != 2:
        raise ValueError("expected a 2D array")

    img = np.clip((z + 1.0) * 127.5, 0.0, 255.0).round().astype(np.uint8)

    out = io.BytesIO()
    # 2D uint8 arrays load as mode "L".
    Image.fromarray(img).save(out, format="PNG")
    return out.getvalue()
