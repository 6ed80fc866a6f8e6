"""Binary mask helpers: normalisation, component counting, rasterisation."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray
from skimage.measure import label


def as_binary_mask(mask: ArrayLike) -> NDArray[np.bool_]:
    """Coerce any 2-D array-like into a boolean mask (non-zero = foreground)."""
    grid = np.asarray(mask)
    if grid.ndim == 3:
        # Colour or alpha channels: any non-zero channel counts
        grid = np.any(grid != 0, axis=2)
    if grid.ndim != 2:
        raise ValueError(f"Mask must be 2-D, got shape {grid.shape}")
    return grid != 0


def count_components(mask: NDArray[np.bool_]) -> int:
    """Number of 8-connected foreground components."""
    if not mask.any():
        return 0
    _, num = label(mask, connectivity=2, return_num=True)
    return int(num)


def rasterize_points(
    points: NDArray[np.float64],
    shape: tuple[int, int] | None = None,
    values: NDArray[np.float64] | None = None,
) -> NDArray[np.float64]:
    """Paint points (x, y) into a grid indexed [row, col].

    Without ``shape`` the grid is sized max coordinate + 1 on each axis.
    Without ``values`` every painted pixel gets 1.
    """
    if len(points) == 0:
        return np.zeros(shape or (0, 0), dtype=np.float64)

    cols = np.rint(points[:, 0]).astype(np.int64)
    rows = np.rint(points[:, 1]).astype(np.int64)
    if shape is None:
        shape = (int(rows.max()) + 1, int(cols.max()) + 1)

    grid = np.zeros(shape, dtype=np.float64)
    keep = (rows >= 0) & (rows < shape[0]) & (cols >= 0) & (cols < shape[1])
    fill = np.ones(len(points)) if values is None else np.asarray(values, dtype=np.float64)
    grid[rows[keep], cols[keep]] = fill[keep]
    return grid
