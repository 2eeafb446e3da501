"""
User‑facing Grid class and top‑level helpers.
"""
from typing import Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.axes import Axes

from .config import LIT
from .fov import _as_opaque, compute_fov, rasterize_fov_octant


class Grid:
    """2‑D occupancy grid, stored ``(height, width)`` and indexed ``[y, x]``."""

    def __init__(
        self,
        *,
        opaque=None,
        shape: Optional[Tuple[int, int]] = None,
    ) -> None:
        if opaque is not None:
            self.opaque = _as_opaque(opaque)
            if shape is not None and tuple(shape) != self.opaque.shape:
                raise ValueError(
                    f"shape {tuple(shape)} does not match opaque {self.opaque.shape}"
                )
        elif shape is not None:
            height, width = (int(s) for s in shape)
            if height <= 0 or width <= 0:
                raise ValueError("shape must be positive")
            self.opaque = np.zeros((height, width), dtype=np.bool_)
        else:
            raise ValueError("Must specify either opaque or shape.")

    @property
    def height(self) -> int:
        return self.opaque.shape[0]

    @property
    def width(self) -> int:
        return self.opaque.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.opaque.shape

    # ---------------------------------------------------------------------
    # Cell access
    # ---------------------------------------------------------------------
    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_opaque(self, x: int, y: int) -> bool:
        """Return the occupancy of cell ``(x, y)``; raises IndexError off the map."""
        if not self.contains(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")
        return bool(self.opaque[y, x])

    def set_opaque(self, x: int, y: int, value: bool = True) -> None:
        if not self.contains(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")
        self.opaque[y, x] = value

    def new_lightmap(self) -> np.ndarray:
        """Return a dark ``uint8`` lightmap shaped like this grid."""
        return np.zeros(self.shape, dtype=np.uint8)

    # ---------------------------------------------------------------------
    # Field of view
    # ---------------------------------------------------------------------
    def rasterize_octant(
        self,
        origin: Tuple[int, int],
        radius: int,
        octant: int,
        output: np.ndarray,
        **flags,
    ) -> int:
        """Delegate to :func:`grid_fov.fov.rasterize_fov_octant`."""
        return rasterize_fov_octant(origin, radius, self.opaque, octant, output, **flags)

    def fov(
        self,
        origin: Tuple[int, int],
        radius: int,
        output: Optional[np.ndarray] = None,
        **flags,
    ) -> np.ndarray:
        """Delegate to :func:`grid_fov.fov.compute_fov`."""
        return compute_fov(origin, radius, self.opaque, output, **flags)

    # ---------------------------------------------------------------------
    # Visualization
    # ---------------------------------------------------------------------
    def plot(
        self,
        lightmap: Optional[np.ndarray] = None,
        ax: Optional[Axes] = None,
        origin: Optional[Tuple[int, int]] = None,
        wall_color: Tuple[float, float, float] = (0.0, 0.565, 0.0),
        cmap: str = 'gray',
        show: bool = True,
    ) -> Axes:
        """Draw the lightmap under the walls using matplotlib, one pixel per cell."""
        if ax is None:
            fig = plt.figure()
            ax = fig.add_subplot(111)

        if lightmap is not None:
            if lightmap.shape != self.shape:
                raise ValueError("lightmap must match the grid shape")
            ax.imshow(lightmap, cmap=cmap, vmin=0, vmax=LIT,
                      interpolation='nearest')

        # walls as a tinted overlay, transparent elsewhere
        overlay = np.zeros(self.shape + (4,), dtype=float)
        overlay[..., :3] = wall_color
        overlay[..., 3] = self.opaque.astype(float)
        ax.imshow(overlay, interpolation='nearest')

        if origin is not None:
            ax.plot(origin[0], origin[1], marker='o', color='r', markersize=4)

        ax.set_xlim(-0.5, self.width - 0.5)
        ax.set_ylim(self.height - 0.5, -0.5)

        if show:
            plt.show()
        return ax


# -------------------------------------------------------------------------
# Convenience top‑level helpers
# -------------------------------------------------------------------------
def fov_mask(
    origin,
    radius,
    opaque,
    *,
    dark_walls=False,
):
    """Return a bool mask of the cells seen from *origin* within *radius*."""
    lightmap = compute_fov(
        origin,
        radius,
        opaque,
        skip_attenuation=True,
        dark_walls=dark_walls,
    )
    return lightmap != 0
