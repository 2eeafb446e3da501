"""
Symmetric shadow-casting field of view on 2-D occupancy grids.
"""
from .errors import DegenerateRadius, FovError, InvalidOctant, RayCapacityExceeded
from .fov import compute_fov, rasterize_fov_octant
from .grid import Grid, fov_mask
from .mazegen import generate_maze, stamp_rectangle
from .octant import OCTANT_BASES, Point, octant_frame, octant_limits

__all__ = [
    "DegenerateRadius",
    "FovError",
    "Grid",
    "InvalidOctant",
    "OCTANT_BASES",
    "Point",
    "RayCapacityExceeded",
    "compute_fov",
    "fov_mask",
    "generate_maze",
    "octant_frame",
    "octant_limits",
    "rasterize_fov_octant",
    "stamp_rectangle",
]
