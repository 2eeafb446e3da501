"""
Symmetric shadow-casting field of view on an occupancy grid.

One call to :func:`rasterize_fov_octant` lights one 45° octant of the view
around an origin cell. Instead of tracing a line per destination cell, it
carries a short list of bounding rays (frustums) outward one column at a
time, so most cells are visited exactly once. Ray crossings are computed in
half-pixel units with integer arithmetic only, which keeps the eight octants
exactly symmetric.

Public API
----------
rasterize_fov_octant(origin, radius, grid, octant, output, ...)
    – light one octant into *output* in place

compute_fov(origin, radius, grid, output=None, ...)
    – clear *output* (or allocate it) and light all 8 octants
"""
from __future__ import annotations

import logging
from numbers import Integral
from typing import Optional, Tuple

import numpy as np

from ._core import (
    RAY_OVERFLOW,
    _attenuate,
    _clamp_to_radius,
    _darken_walls,
    _sweep_octant,
)
from .config import LIT, OCTANT_COUNT
from .errors import DegenerateRadius, RayCapacityExceeded
from .octant import Point, octant_frame, octant_limits

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------- #
# Argument normalization
# --------------------------------------------------------------------------- #

def _as_opaque(grid) -> np.ndarray:
    """Return a C-contiguous ``(height, width)`` bool view of *grid*."""
    opaque = getattr(grid, "opaque", grid)
    arr = np.ascontiguousarray(opaque, dtype=np.bool_)
    if arr.ndim != 2:
        raise ValueError("grid must be 2-D (height, width)")
    if arr.size == 0:
        raise ValueError("grid must not be empty")
    return arr


def _check_output(output: np.ndarray, shape: Tuple[int, int]) -> None:
    if not isinstance(output, np.ndarray) or output.dtype != np.uint8:
        raise ValueError("output must be a uint8 numpy array")
    if output.shape != shape:
        raise ValueError(f"output shape {output.shape} does not match grid {shape}")
    if not output.flags.writeable:
        raise ValueError("output must be writeable")


def _check_radius(radius) -> int:
    if not isinstance(radius, Integral) or isinstance(radius, bool) or radius < 0:
        raise DegenerateRadius(radius)
    return int(radius)


def _check_max_rays(max_rays) -> Optional[int]:
    if max_rays is None:
        return None
    if not isinstance(max_rays, Integral) or isinstance(max_rays, bool):
        raise ValueError(f"max_rays must be an integer or None, got {max_rays!r}")
    if max_rays < 2:
        raise ValueError("max_rays must hold at least one frustum (2 rays)")
    return int(max_rays)


def _clamp_origin(origin, width: int, height: int) -> Point:
    x, y = (int(v) for v in origin)
    clamped = Point(min(max(x, 0), width - 1), min(max(y, 0), height - 1))
    if clamped != (x, y):
        logger.debug("origin (%d, %d) clamped onto grid as %s", x, y, clamped)
    return clamped


# --------------------------------------------------------------------------- #
# Single octant
# --------------------------------------------------------------------------- #

def _rasterize(origin: Point, radius: int, opaque: np.ndarray, octant: int,
               output: np.ndarray, skip_attenuation: bool,
               skip_radius_clamp: bool, dark_walls: bool,
               max_rays: Optional[int]) -> int:
    """Core of :func:`rasterize_fov_octant` on already validated arguments."""
    e0, e1 = octant_frame(octant)
    if opaque[origin.y, origin.x]:
        # observer is inside a wall
        output[origin.y, origin.x] = LIT
        return 0

    height, width = opaque.shape
    limit_x, limit_y = octant_limits(origin, radius, (e0, e1), width, height)
    frame = (origin.x, origin.y, e0.x, e0.y, e1.x, e1.y, limit_x, limit_y)

    if max_rays is None:
        peak = _sweep_octant(opaque, output, *frame, 0)
    else:
        # a capped sweep may abort midway; only commit a finished one
        scratch = output.copy()
        peak = _sweep_octant(opaque, scratch, *frame, max_rays)
        if peak == RAY_OVERFLOW:
            raise RayCapacityExceeded(max_rays)
        np.copyto(output, scratch)

    # radius 0 only reaches the origin, which attenuation leaves fully lit
    if not skip_attenuation:
        if radius > 0:
            _attenuate(output, *frame, radius)
    elif not skip_radius_clamp:
        _clamp_to_radius(output, *frame, radius)

    if dark_walls:
        _darken_walls(opaque, output, *frame)

    logger.debug("octant %d from %s: limits=(%d, %d) peak_rays=%d",
                 octant, origin, limit_x, limit_y, peak)
    return peak


def rasterize_fov_octant(origin: Tuple[int, int],
                         radius: int,
                         grid,
                         octant: int,
                         output: np.ndarray,
                         *,
                         skip_attenuation: bool = False,
                         skip_radius_clamp: bool = False,
                         dark_walls: bool = False,
                         max_rays: Optional[int] = None) -> int:
    """
    Light one octant of the field of view from *origin* into *output*.

    Parameters
    ----------
    origin            : ``(x, y)`` observer cell; clamped onto the grid
    radius            : maximum sight distance in cells, >= 0
    grid              : ``Grid`` or 2-D array-like ``(height, width)``,
                        nonzero meaning opaque
    octant            : 0..7, see :data:`grid_fov.octant.OCTANT_BASES`
    output            : ``uint8`` lightmap shaped like *grid*, updated in place
    skip_attenuation  : leave lit cells at 255 instead of fading with distance
    skip_radius_clamp : with attenuation skipped, keep lit cells beyond
                        *radius* (the sweep itself works on a square)
    dark_walls        : darken opaque cells after lighting
    max_rays          : raise :class:`RayCapacityExceeded` if a column needs
                        more rays than this; ``None`` grows without limit

    Returns the largest ray count carried between two columns.
    If :class:`RayCapacityExceeded` is raised, *output* is left as it was.

    Only cells inside the octant's bounding box are written. Call once per
    octant on a cleared lightmap for a full view (see :func:`compute_fov`).
    """
    opaque = _as_opaque(grid)
    _check_output(output, opaque.shape)
    max_rays = _check_max_rays(max_rays)
    radius = _check_radius(radius)
    height, width = opaque.shape
    origin = _clamp_origin(origin, width, height)
    return _rasterize(origin, radius, opaque, octant, output,
                      skip_attenuation, skip_radius_clamp, dark_walls, max_rays)


# --------------------------------------------------------------------------- #
# Full view
# --------------------------------------------------------------------------- #

def compute_fov(origin: Tuple[int, int],
                radius: int,
                grid,
                output: Optional[np.ndarray] = None,
                *,
                skip_attenuation: bool = False,
                skip_radius_clamp: bool = False,
                dark_walls: bool = False,
                max_rays: Optional[int] = None) -> np.ndarray:
    """
    Return the full 360° lightmap seen from *origin*.

    *output* is overwritten and returned when given, otherwise a new
    ``uint8`` array shaped like *grid* is returned. On error *output* is
    left as it was. Keyword flags are the same as for
    :func:`rasterize_fov_octant`.
    """
    opaque = _as_opaque(grid)
    if output is not None:
        _check_output(output, opaque.shape)
    radius = _check_radius(radius)
    max_rays = _check_max_rays(max_rays)
    height, width = opaque.shape
    origin = _clamp_origin(origin, width, height)

    lightmap = np.zeros(opaque.shape, dtype=np.uint8)
    for octant in range(OCTANT_COUNT):
        _rasterize(origin, radius, opaque, octant, lightmap,
                   skip_attenuation, skip_radius_clamp, dark_walls, max_rays)
    if output is None:
        return lightmap
    np.copyto(output, lightmap)
    return output
