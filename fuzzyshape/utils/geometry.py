"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import LinearRing


def signed_area(points: NDArray[np.float64]) -> float:
    """Shoelace formula over a closed point sequence (last point joins the first)."""
    if len(points) < 3:
        return 0.0
    x = points[:, 0]
    y = points[:, 1]
    return float(0.5 * np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def is_ccw(points: NDArray[np.float64]) -> bool:
    """True when the closed sequence winds counter-clockwise in (x, y) axes.

    In image coordinates (y pointing down) a ccw ring looks clockwise on screen.
    """
    if len(points) < 3:
        return False
    try:
        return bool(LinearRing(points).is_ccw)
    except ValueError:
        # Shapely rejects rings it cannot build; the shoelace sign is still defined
        return signed_area(points) > 0


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def line_distances(
    start: NDArray[np.float64],
    end: NDArray[np.float64],
    points: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Perpendicular distance from each point to the infinite line start–end.

    Coincident endpoints degrade to plain Euclidean distance from ``start``.
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    direction = np.asarray(end, dtype=np.float64) - np.asarray(start, dtype=np.float64)
    length = float(np.hypot(direction[0], direction[1]))
    rel = points - start
    if length < 1e-12:
        return np.hypot(rel[:, 0], rel[:, 1])
    cross = direction[0] * rel[:, 1] - direction[1] * rel[:, 0]
    return np.abs(cross) / length


def chord_error(
    start: NDArray[np.float64],
    end: NDArray[np.float64],
    points: NDArray[np.float64],
) -> float:
    """Chord-fitting error: max perpendicular distance of ``points`` to start–end."""
    if len(points) == 0:
        return 0.0
    return float(np.max(line_distances(start, end, points)))


def wrap_angle(angle: float | NDArray[np.float64]):
    """Wrap an angle (or array of angles) into [-pi, pi)."""
    wrapped = (np.asarray(angle, dtype=np.float64) + np.pi) % (2 * np.pi) - np.pi
    if np.ndim(wrapped) == 0:
        return float(wrapped)
    return wrapped
