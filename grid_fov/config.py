"""
Module-level constants shared by the kernels and the grid generator.
"""

# Lightmap values
LIT = 255
DARK = 0

OCTANT_COUNT = 8

# Starting allocation for each per-column ray list; lists double when full.
INITIAL_RAY_CAPACITY = 64

# -------------------------------------------------------------------------
# Maze generator tunables
# -------------------------------------------------------------------------
MAZE_PIXEL_DENSITY = 100      # one stray wall pixel per this many cells
MAZE_RECT_DENSITY = 50        # one wall rectangle per this many cells
MAZE_RECT_SIDE_DIVISOR = 64   # min side = min(width, height) // divisor
MAZE_RECT_SIDE_SPAN = 8       # max side = min side * span
