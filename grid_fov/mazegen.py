"""
Random occupancy grids built by stamping rectangles.

Scatter single wall pixels, stamp opaque rectangles, then carve transparent
rectangles back out. Good enough to exercise the field of view on something
that looks like ruins.
"""
import logging
from typing import Optional

import numpy as np

from .config import (
    MAZE_PIXEL_DENSITY,
    MAZE_RECT_DENSITY,
    MAZE_RECT_SIDE_DIVISOR,
    MAZE_RECT_SIDE_SPAN,
)

logger = logging.getLogger(__name__)


def stamp_rectangle(opaque: np.ndarray, x: int, y: int, w: int, h: int,
                    value: bool = True) -> None:
    """Fill cells ``[x, x + w] x [y, y + h]`` (inclusive, clipped to the map)."""
    height, width = opaque.shape
    min_x = min(max(x, 0), width - 1)
    max_x = min(max(x + w, 0), width - 1)
    min_y = min(max(y, 0), height - 1)
    max_y = min(max(y + h, 0), height - 1)
    opaque[min_y:max_y + 1, min_x:max_x + 1] = value


def generate_maze(width: int,
                  height: int,
                  *,
                  rng: Optional[np.random.Generator] = None,
                  seed: Optional[int] = None) -> np.ndarray:
    """
    Return a ``(height, width)`` bool grid, True meaning opaque.

    Pass *rng* to share a generator, or *seed* for a reproducible grid.
    """
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive")
    if rng is None:
        rng = np.random.default_rng(seed)

    opaque = np.zeros((height, width), dtype=np.bool_)
    size = width * height
    num_pixels = size // MAZE_PIXEL_DENSITY
    num_rects = size // MAZE_RECT_DENSITY
    min_side = max(min(width, height) // MAZE_RECT_SIDE_DIVISOR, 1)
    max_side = min_side * MAZE_RECT_SIDE_SPAN
    logger.debug("maze %dx%d: %d pixels, %d rects, sides [%d, %d)",
                 width, height, num_pixels, num_rects, min_side, max_side)

    xs = rng.integers(0, width, size=num_pixels)
    ys = rng.integers(0, height, size=num_pixels)
    opaque[ys, xs] = True

    for value, count in ((True, num_rects), (False, num_rects // 2)):
        for _ in range(count):
            rx = int(rng.integers(0, width))
            ry = int(rng.integers(0, height))
            rw = int(rng.integers(min_side, max_side))
            rh = int(rng.integers(min_side, max_side))
            stamp_rectangle(opaque, rx, ry, rw, rh, value)

    return opaque
