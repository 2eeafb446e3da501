"""
Octant frames: the change of basis that lets one sweep serve all 8 octants.
"""
from numbers import Integral
from typing import NamedTuple, Tuple

from .errors import InvalidOctant


class Point(NamedTuple):
    x: int
    y: int

    def dot(self, other: "Point") -> int:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Point") -> int:
        return self.x * other.y - self.y * other.x


# (column axis, row axis) per octant. Octant 0 covers dx >= dy >= 0.
OCTANT_BASES: Tuple[Tuple[Point, Point], ...] = (
    (Point(1, 0), Point(0, 1)),
    (Point(1, 0), Point(0, -1)),
    (Point(-1, 0), Point(0, -1)),
    (Point(-1, 0), Point(0, 1)),
    (Point(0, 1), Point(-1, 0)),
    (Point(0, 1), Point(1, 0)),
    (Point(0, -1), Point(1, 0)),
    (Point(0, -1), Point(-1, 0)),
)


def octant_frame(octant: int) -> Tuple[Point, Point]:
    """Return ``(e0, e1)``: the column and row unit axes of *octant*."""
    if (not isinstance(octant, Integral) or isinstance(octant, bool)
            or not 0 <= octant < len(OCTANT_BASES)):
        raise InvalidOctant(octant)
    return OCTANT_BASES[int(octant)]


def octant_limits(origin: Point,
                  radius: int,
                  frame: Tuple[Point, Point],
                  width: int,
                  height: int) -> Tuple[int, int]:
    """
    Return ``(limit_x, limit_y)``, the last column and row the sweep may touch.

    Each limit is the radius clipped to the distance from *origin* to the map
    edge along that axis, and never negative.
    """
    dmin = Point(-origin.x, -origin.y)
    dmax = Point(width - 1 - origin.x, height - 1 - origin.y)
    limits = []
    for axis in frame:
        # one of the two dots is >= 0, the other <= 0
        edge = max(dmin.dot(axis), dmax.dot(axis))
        limits.append(max(0, min(radius, edge)))
    return limits[0], limits[1]
