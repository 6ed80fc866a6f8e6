"""Boundary tracer: binary mask -> closed 8-connected Contour.

Chain-code walk (Pavlidis style). Direction codes, with y pointing down:

    5 6 7
    4 . 0
    3 2 1

The walk faces direction S (always even). At each step it tries the
front-left (S-1), front (S) and front-right (S+1) neighbours; a front-left
move also turns left (S-2). If none is foreground the walker rotates right
(S+2) and retries, up to four times.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import ArrayLike

from fuzzyshape.errors import TracingStuckError
from fuzzyshape.shape.contour import Contour
from fuzzyshape.utils.morphology import as_binary_mask, count_components

logger = logging.getLogger(__name__)

# (dx, dy) per chain code
FREEMAN_STEPS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (-1, -1),
    (0, -1),
    (1, -1),
)

_INITIAL_DIRECTION = 6
_MAX_HOPS = 4


def trace_boundary(mask: ArrayLike) -> Contour:
    """Trace the outer boundary of the first foreground component.

    The first component is the one holding the first foreground pixel in a
    row-major scan. Returns an empty contour for an empty mask; raises
    TracingStuckError when the walk cannot continue (e.g. a lone pixel).
    """
    grid = as_binary_mask(mask)
    height, width = grid.shape

    fg = np.flatnonzero(grid)
    if len(fg) == 0:
        return Contour()

    n_components = count_components(grid)
    if n_components > 1:
        logger.warning(
            "Mask has %d 8-connected components; tracing only the first one", n_components
        )

    row, col = divmod(int(fg[0]), width)
    initial = (col, row)

    def is_foreground(x: int, y: int) -> bool:
        return 0 <= x < width and 0 <= y < height and bool(grid[y, x])

    points: list[tuple[int, int]] = []
    current = initial
    direction = _INITIAL_DIRECTION
    first_iteration = True
    # A pixel can be entered from at most four sides
    max_steps = 4 * len(fg) + 4

    while first_iteration or current != initial:
        points.append(current)
        moved = False
        for _ in range(_MAX_HOPS):
            x, y = current
            left = (direction - 1) % 8
            front_right = (direction + 1) % 8
            dx, dy = FREEMAN_STEPS[left]
            if is_foreground(x + dx, y + dy):
                current = (x + dx, y + dy)
                direction = (direction - 2) % 8
                moved = True
                break
            dx, dy = FREEMAN_STEPS[direction]
            if is_foreground(x + dx, y + dy):
                current = (x + dx, y + dy)
                moved = True
                break
            dx, dy = FREEMAN_STEPS[front_right]
            if is_foreground(x + dx, y + dy):
                current = (x + dx, y + dy)
                moved = True
                break
            direction = (direction + 2) % 8
        if not moved:
            raise TracingStuckError(current, len(points))
        first_iteration = False
        if len(points) > max_steps:
            raise TracingStuckError(current, len(points))

    logger.debug("Traced boundary: %d points from start %s", len(points), initial)
    return Contour(points)


def contour_to_mask(contour: Contour) -> np.ndarray:
    """Raster mask with the contour pixels set (bounds = max coordinate + 1)."""
    return contour.to_mask()
