"""Curvature estimation along a contour.

Two estimators share the same sign convention (positive = convex):

- LINE_BASED: fit orthogonal-regression lines to the windows just behind and
  just ahead of each point and measure the turn between them.
- GAUSSIAN: classic (x'y'' - x''y') / (x'^2 + y'^2)^1.5 with Gaussian
  derivative filters.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator

import numpy as np
from numpy.typing import NDArray
from scipy.ndimage import gaussian_filter1d

from fuzzyshape.errors import ConstructionError
from fuzzyshape.shape.contour import Contour
from fuzzyshape.shape.regression import direction_vectors
from fuzzyshape.utils.geometry import wrap_angle

DEFAULT_WINDOW_RATIO = 1.0 / 15
DEFAULT_OFFSET = 0


class CurvatureMethod(str, enum.Enum):
    LINE_BASED = "line_based"
    GAUSSIAN = "gaussian"


class CurvatureFunction:
    """Contour index -> signed curvature. Indexing is circular."""

    def __init__(self, contour: Contour, values: NDArray[np.float64]) -> None:
        if len(values) != len(contour):
            raise ConstructionError(
                f"Curvature has {len(values)} values for a contour of {len(contour)} points"
            )
        values = np.array(values, dtype=np.float64)
        values.setflags(write=False)
        self.contour = contour
        self._values = values

    @property
    def values(self) -> NDArray[np.float64]:
        return self._values

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, i: int) -> float:
        return float(self._values[int(i) % len(self._values)])

    def __iter__(self) -> Iterator[float]:
        return (float(v) for v in self._values)

    def zero_crossings(self, eps: float = 1e-3) -> NDArray[np.int64]:
        """Indices where the curvature sign flips (convex <-> concave).

        Values within ``eps`` of zero are skipped, so a straight run between a
        convex and a concave stretch still counts as one crossing. The reported
        index is the first point of the new sign.
        """
        nonzero = np.flatnonzero(np.abs(self._values) > eps)
        if len(nonzero) < 2:
            return np.empty(0, dtype=np.int64)
        signs = np.sign(self._values[nonzero])
        flips = signs != np.roll(signs, 1)
        return np.sort(nonzero[flips])

    def local_maxima(self, window: int, strict: bool = True) -> NDArray[np.int64]:
        """Indices whose curvature tops every neighbour within ``window // 2``.

        Values are rounded to 7 decimals first so numerical noise on straight
        runs does not produce spurious peaks. With ``strict`` a point must be
        greater than all its neighbours; otherwise greater or equal.
        """
        n = len(self._values)
        if n == 0:
            return np.empty(0, dtype=np.int64)
        rounded = np.round(self._values, 7)
        half = min(max(int(window), 0) // 2, (n - 1) // 2)
        keep = np.ones(n, dtype=bool)
        for shift in range(1, half + 1):
            for neighbour in (np.roll(rounded, shift), np.roll(rounded, -shift)):
                keep &= rounded > neighbour if strict else rounded >= neighbour
        return np.flatnonzero(keep)


def resolve_window(window: int | float, length: int) -> int:
    """Absolute window size from an int (points) or a float ratio of ``length``.

    Floats up to 1.0 inclusive are ratios, so ``1.0`` spans the whole contour.
    Clamped to [2, length].
    """
    if isinstance(window, float) and window <= 1.0:
        size = int(window * length)
    else:
        size = int(window)
    return max(2, min(size, length))


def estimate_curvature(
    contour: Contour,
    window: int | float = DEFAULT_WINDOW_RATIO,
    offset: int = DEFAULT_OFFSET,
    method: CurvatureMethod = CurvatureMethod.LINE_BASED,
) -> CurvatureFunction:
    """Signed curvature at every contour point, in [-pi, pi] for LINE_BASED."""
    if contour.is_empty:
        return CurvatureFunction(contour, np.empty(0))
    if isinstance(window, (int, float)) and window <= 0:
        raise ConstructionError(f"Curvature window must be positive, got {window}")

    w = resolve_window(window, len(contour))
    if method == CurvatureMethod.GAUSSIAN:
        values = _gaussian_curvature(contour, w)
    else:
        values = _line_based_curvature(contour, w, offset)
    return CurvatureFunction(contour, values)


def _line_based_curvature(contour: Contour, w: int, offset: int) -> NDArray[np.float64]:
    n = len(contour)
    pts = contour.points
    idx = np.arange(n)
    steps = np.arange(w)

    ahead = (idx[:, None] + offset + steps[None, :]) % n
    behind = (idx[:, None] - offset - steps[None, :]) % n

    dir_ahead = direction_vectors(pts[ahead], pts)
    dir_behind = direction_vectors(pts[behind], pts)

    angle_ahead = _signed_acos(dir_ahead)
    angle_behind = _signed_acos(dir_behind)

    # Straight runs give opposite directions (difference of ±pi), hence the shift
    kappa = wrap_angle(angle_behind - angle_ahead + np.pi)
    if contour.is_ccw:
        kappa = -kappa
    return np.asarray(kappa, dtype=np.float64)


def _gaussian_curvature(contour: Contour, w: int) -> NDArray[np.float64]:
    sigma = max(w / 7.0, 0.5)
    x = contour.points[:, 0]
    y = contour.points[:, 1]
    dx = gaussian_filter1d(x, sigma, order=1, mode="wrap")
    dy = gaussian_filter1d(y, sigma, order=1, mode="wrap")
    ddx = gaussian_filter1d(x, sigma, order=2, mode="wrap")
    ddy = gaussian_filter1d(y, sigma, order=2, mode="wrap")
    denom = np.maximum((dx**2 + dy**2) ** 1.5, 1e-12)
    kappa = (dx * ddy - ddx * dy) / denom
    if not contour.is_ccw:
        kappa = -kappa
    return kappa


def _signed_acos(vectors: NDArray[np.float64]) -> NDArray[np.float64]:
    angle = np.arccos(np.clip(vectors[:, 0], -1.0, 1.0))
    return np.where(vectors[:, 1] < 0, -angle, angle)
