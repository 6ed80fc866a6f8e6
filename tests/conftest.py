"""Shared test fixtures: synthetic binary masks."""

from __future__ import annotations

import numpy as np
import pytest
from skimage.draw import disk, rectangle


# 40 wide x 20 tall, top-left pixel at (x=10, y=10)
RECT_CORNERS = [(10, 10), (49, 10), (49, 29), (10, 29)]
RECT_BOUNDARY_PIXELS = 116

CIRCLE_RADIUS = 40


def rectangle_mask() -> np.ndarray:
    mask = np.zeros((40, 60), dtype=np.uint8)
    rr, cc = rectangle(start=(10, 10), extent=(20, 40), shape=mask.shape)
    mask[rr, cc] = 1
    return mask


def circle_mask(radius: int = CIRCLE_RADIUS) -> np.ndarray:
    """Disk with a 10 pixel margin on every side."""
    size = 2 * radius + 21
    mask = np.zeros((size, size), dtype=np.uint8)
    rr, cc = disk((radius + 10, radius + 10), radius, shape=mask.shape)
    mask[rr, cc] = 1
    return mask


def l_shape_mask() -> np.ndarray:
    """Vertical arm cols 10..29, horizontal arm rows 30..49; concave corner near (29, 29)."""
    mask = np.zeros((60, 60), dtype=np.uint8)
    mask[10:50, 10:30] = 1
    mask[30:50, 10:50] = 1
    return mask


def lone_pixel_mask() -> np.ndarray:
    mask = np.zeros((10, 10), dtype=np.uint8)
    mask[4, 4] = 1
    return mask


def two_blobs_mask() -> np.ndarray:
    mask = np.zeros((50, 50), dtype=np.uint8)
    mask[5:15, 5:15] = 1
    mask[30:40, 30:40] = 1
    return mask


@pytest.fixture
def rect_mask() -> np.ndarray:
    return rectangle_mask()


@pytest.fixture
def disk_mask() -> np.ndarray:
    return circle_mask()


@pytest.fixture
def l_mask() -> np.ndarray:
    return l_shape_mask()


@pytest.fixture
def rect_contour():
    from fuzzyshape.shape.tracer import trace_boundary

    return trace_boundary(rectangle_mask())


@pytest.fixture
def disk_contour():
    from fuzzyshape.shape.tracer import trace_boundary

    return trace_boundary(circle_mask())
