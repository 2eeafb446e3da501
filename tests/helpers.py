"""
Brute-force sight-line reference for checking the shadow caster.

The shadow caster lights a cell when its center falls inside a frustum whose
edges pass through wall corners, but it rounds the lit span to whole rows, so
a cell up to half a row from a frustum edge can go either way. The reference
therefore only rules on targets whose center sits clearly away from every
wall's shadow edge, measured where the target is.
"""
import math

import numpy as np

_CORNERS = np.array([[-0.5, -0.5], [0.5, -0.5], [0.5, 0.5], [-0.5, 0.5]])


def sight_line(opaque: np.ndarray, origin, target, *, margin: float = 0.55):
    """
    Classify the view from the center of *origin* to the center of *target*.

    For each wall the shadow edges are the lines from the origin through its
    corners. Returns ``"clear"`` when no wall square touches the sight line
    and the target sits at least *margin* cells off every shadow edge,
    ``"blocked"`` when the sight line crosses a wall in front of the target
    with the target at least *margin* inside both of its shadow edges, and
    ``None`` otherwise.
    """
    o = np.asarray(origin, dtype=float)
    d = np.asarray(target, dtype=float) - o
    reach = math.hypot(d[0], d[1])
    u = d / reach
    n = np.array([-u[1], u[0]])

    walls = np.argwhere(opaque)[:, ::-1].astype(float)   # (x, y)
    keep = ~(np.all(walls == origin, axis=1) | np.all(walls == target, axis=1))
    walls = walls[keep]
    if len(walls) == 0:
        return "clear"

    rel = walls[:, None, :] + _CORNERS[None, :, :] - o   # (walls, 4, 2)
    along = rel @ u
    across = rel @ n
    # offset of the target from the shadow edge through each corner
    offset = across * reach / np.hypot(rel[..., 0], rel[..., 1])

    ahead = (along > 0).any(axis=1) & (along.min(axis=1) < reach + 1)
    straddles = (across > 0).any(axis=1) & (across < 0).any(axis=1)

    in_front = (along > 0).all(axis=1) & ((walls - o) @ u <= reach - 1)
    deep = (offset.max(axis=1) >= margin) & (-offset.min(axis=1) >= margin)
    if np.any(in_front & straddles & deep):
        return "blocked"

    if np.any(ahead & straddles):
        return None
    clearance = np.abs(offset).min(axis=1)
    if np.all(clearance[ahead] >= margin):
        return "clear"
    return None


def lit_cells(lightmap: np.ndarray):
    """Return the set of ``(x, y)`` cells with a nonzero value."""
    return {(int(x), int(y)) for y, x in np.argwhere(lightmap)}
