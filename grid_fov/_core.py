"""
Low-level NumPy+Numba kernels for the octant sweep and its post passes.

All kernels work in octant-local coordinates: world cell of local
``(column, row)`` is ``origin + column * e0 + row * e1``. Callers guarantee
``column <= limit_x`` and ``row <= limit_y`` map onto the grid, so no kernel
bounds-checks the writes it makes inside that box.
"""
import numpy as np
from numba import njit

from .config import DARK, INITIAL_RAY_CAPACITY, LIT

RAY_OVERFLOW = -1


# --------------------------------------------------------------------------- #
# Integer helpers
# --------------------------------------------------------------------------- #

@njit(cache=True)
def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        return -q
    return q


@njit(cache=True)
def _is_clear(opaque: np.ndarray, x: int, y: int) -> bool:
    """True for an on-map transparent cell."""
    if x < 0 or y < 0 or y >= opaque.shape[0] or x >= opaque.shape[1]:
        return False
    return not opaque[y, x]


@njit(cache=True)
def _push_ray(rays: np.ndarray, count: int, x: int, y: int):
    if count == rays.shape[0]:
        grown = np.empty((rays.shape[0] * 2, 2), dtype=np.int64)
        grown[:count] = rays[:count]
        rays = grown
    rays[count, 0] = x
    rays[count, 1] = y
    return rays, count + 1


# --------------------------------------------------------------------------- #
# Column sweep
# --------------------------------------------------------------------------- #

@njit(cache=True)
def _sweep_octant(opaque: np.ndarray, out: np.ndarray,
                  ox: int, oy: int,
                  e0x: int, e0y: int, e1x: int, e1y: int,
                  limit_x: int, limit_y: int,
                  max_rays: int) -> int:
    """
    Light every cell of one octant that a frustum from the origin reaches.

    Rays are ``(column, row)`` directions in half-pixel units. ``max_rays``
    <= 0 lets the ray lists grow freely. Returns the largest number of rays
    carried into any column, or ``RAY_OVERFLOW``.
    """
    curr = np.empty((INITIAL_RAY_CAPACITY, 2), dtype=np.int64)
    nxt = np.empty((INITIAL_RAY_CAPACITY, 2), dtype=np.int64)
    curr[0, 0] = 1
    curr[0, 1] = 0
    curr[1, 0] = 1
    curr[1, 1] = 1
    n_curr = 2
    peak = n_curr

    for column in range(limit_x + 1):
        i2 = column << 1
        cx = ox + column * e0x
        cy = oy + column * e0y
        n_next = 0

        for r in range(0, n_curr - 1, 2):
            r0x = curr[r, 0]
            r0y = curr[r, 1]
            r1x = curr[r + 1, 0]
            r1y = curr[r + 1, 1]

            # top / bottom ray crossings with the previous and current column
            inyr0 = _tdiv((i2 - 1) * r0y, r0x)
            outyr0 = _tdiv((i2 + 1) * r0y, r0x)
            inyr1 = _tdiv((i2 - 1) * r1y, r1x)
            outyr1 = _tdiv((i2 + 1) * r1y, r1x)

            # 1) cells whose centers are inside the frustum
            start = max((outyr0 + 1) >> 1, 0)
            end = min((outyr1 - 1) >> 1, limit_y)
            for row in range(start, end + 1):
                out[cy + row * e1y, cx + row * e1x] = LIT

            # 2) pin the top ray below any opaque cells it clips
            row_in = _tdiv(inyr0 + 1, 2)
            row_out = _tdiv(outyr0 + 1, 2)
            if (_is_clear(opaque, cx + row_in * e1x, cy + row_in * e1y)
                    and _is_clear(opaque, cx + row_out * e1x, cy + row_out * e1y)):
                b0x = r0x
                b0y = r0y
            else:
                top = max(_tdiv(outyr0 + 1, 2), 0)
                bottom = min(_tdiv(inyr1 + 1, 2), limit_y)
                y = top * 2
                while y <= bottom * 2:
                    row = y >> 1
                    px = cx + row * e1x
                    py = cy + row * e1y
                    if not opaque[py, px]:
                        break
                    # cells that force a correction are seen too
                    out[py, px] = LIT
                    y += 2
                b0x = i2 - 1
                b0y = y - 1
                outyr0 = _tdiv((i2 + 1) * b0y, b0x)

            # 3) pin the bottom ray above any opaque cells it clips
            row_in = _tdiv(inyr1 + 1, 2)
            row_out = _tdiv(outyr1 + 1, 2)
            if (_is_clear(opaque, cx + row_in * e1x, cy + row_in * e1y)
                    and _is_clear(opaque, cx + row_out * e1x, cy + row_out * e1y)):
                b1x = r1x
                b1y = r1y
            else:
                top = max(_tdiv(outyr0 + 1, 2), 0)
                bottom = min(_tdiv(inyr1 + 1, 2), limit_y)
                y = bottom * 2
                while y >= top * 2:
                    row = y >> 1
                    px = cx + row * e1x
                    py = cy + row * e1y
                    if not opaque[py, px]:
                        break
                    out[py, px] = LIT
                    y -= 2
                b1x = i2 + 1
                b1y = y + 1
                inyr1 = _tdiv((i2 - 1) * b1y, b1x)

            # zero-area frustum
            if b0x * b1y - b0y * b1x <= 0:
                continue

            # 4) rays for the next column, split at occupancy transitions
            nxt, n_next = _push_ray(nxt, n_next, b0x, b0y)
            top = max(_tdiv(outyr0 + 1, 2), 0)
            bottom = min(_tdiv(inyr1 + 1, 2), limit_y)
            if top <= bottom:
                prev = opaque[cy + top * e1y, cx + top * e1x]
                for y in range(top * 2, bottom * 2 + 1, 2):
                    row = y >> 1
                    pixel = opaque[cy + row * e1y, cx + row * e1x]
                    if pixel != prev:
                        if pixel:
                            nxt, n_next = _push_ray(nxt, n_next, i2 + 1, y - 1)
                        else:
                            nxt, n_next = _push_ray(nxt, n_next, i2 - 1, y - 1)
                    prev = pixel
            nxt, n_next = _push_ray(nxt, n_next, b1x, b1y)

            if max_rays > 0 and n_next > max_rays:
                return RAY_OVERFLOW

        if n_next > peak:
            peak = n_next
        curr, nxt = nxt, curr
        n_curr = n_next

    return peak


# --------------------------------------------------------------------------- #
# Post-processing passes over the octant's bounding box
# --------------------------------------------------------------------------- #

@njit(cache=True)
def _attenuate(out: np.ndarray, ox: int, oy: int,
               e0x: int, e0y: int, e1x: int, e1y: int,
               limit_x: int, limit_y: int, radius: int) -> None:
    """Scale lit cells by ``1 - d^2 / r^2``; unlit cells become dark."""
    rsq = radius * radius
    for i in range(limit_x + 1):
        for j in range(limit_y + 1):
            px = ox + i * e0x + j * e1x
            py = oy + i * e0y + j * e1y
            if out[py, px] != DARK:
                dsq = i * i + j * j
                out[py, px] = LIT - min(dsq * LIT // rsq, LIT)
            else:
                out[py, px] = DARK


@njit(cache=True)
def _clamp_to_radius(out: np.ndarray, ox: int, oy: int,
                     e0x: int, e0y: int, e1x: int, e1y: int,
                     limit_x: int, limit_y: int, radius: int) -> None:
    rsq = radius * radius
    for i in range(limit_x + 1):
        for j in range(limit_y + 1):
            if i * i + j * j > rsq:
                out[oy + i * e0y + j * e1y, ox + i * e0x + j * e1x] = DARK


@njit(cache=True)
def _darken_walls(opaque: np.ndarray, out: np.ndarray, ox: int, oy: int,
                  e0x: int, e0y: int, e1x: int, e1y: int,
                  limit_x: int, limit_y: int) -> None:
    for i in range(limit_x + 1):
        for j in range(limit_y + 1):
            px = ox + i * e0x + j * e1x
            py = oy + i * e0y + j * e1y
            if opaque[py, px]:
                out[py, px] = DARK
