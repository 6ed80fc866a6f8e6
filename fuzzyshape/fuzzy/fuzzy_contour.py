"""FuzzyContour: a discrete fuzzy set over the points of one contour.

Members are stored by contour index so that repeated coordinates (a traced
boundary can revisit a pixel on one-pixel-wide parts) keep separate degrees.
Iteration follows insertion order.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import numpy as np
from numpy.typing import ArrayLike, NDArray

from fuzzyshape.errors import ConstructionError
from fuzzyshape.shape.contour import Contour
from fuzzyshape.utils.morphology import rasterize_points


class FuzzyContour:
    def __init__(self, contour: Contour, label: str = "") -> None:
        self.contour = contour
        self.label = label
        self._members: dict[int, float] = {}

    @classmethod
    def from_degrees(
        cls, contour: Contour, degrees: ArrayLike, label: str = ""
    ) -> FuzzyContour:
        """One member per contour point, in contour order."""
        values = np.asarray(degrees, dtype=np.float64)
        if len(values) != len(contour):
            raise ConstructionError(
                f"{len(values)} degrees given for a contour of {len(contour)} points"
            )
        fuzzy = cls(contour, label)
        for i, d in enumerate(values):
            fuzzy.add(i, d)
        return fuzzy

    @classmethod
    def from_members(
        cls, contour: Contour, members: Iterable[tuple[int, float]], label: str = ""
    ) -> FuzzyContour:
        fuzzy = cls(contour, label)
        for i, d in members:
            fuzzy.add(i, d)
        return fuzzy

    def add(self, index: int, degree: float) -> None:
        if self.contour.is_empty:
            raise ConstructionError("Cannot add members over an empty contour")
        if not -1e-9 <= degree <= 1.0 + 1e-9:
            raise ConstructionError(f"Membership degree {degree} outside [0, 1]")
        self._members[self.contour.index.wrap(index)] = float(min(max(degree, 0.0), 1.0))

    # --- fuzzy set capability ---

    def degree(self, point: ArrayLike) -> float:
        """Degree of the first member located at ``point``; 0 for non-members."""
        target = np.asarray(point, dtype=np.float64).reshape(2)
        pts = self.contour.points
        for i, d in self._members.items():
            if pts[i][0] == target[0] and pts[i][1] == target[1]:
                return d
        return 0.0

    def degree_at(self, index: int) -> float:
        if self.contour.is_empty:
            return 0.0
        return self._members.get(self.contour.index.wrap(index), 0.0)

    def alpha_cut(self, alpha: float) -> FuzzyContour:
        """Members with degree >= alpha, degrees preserved."""
        if not 0.0 <= alpha <= 1.0:
            raise ConstructionError(f"Alpha must lie in [0, 1], got {alpha}")
        return self._subset(lambda d: d >= alpha, f"{self.label}>={alpha:g}")

    def support(self) -> FuzzyContour:
        return self._subset(lambda d: d > 0.0, f"supp({self.label})")

    def kernel(self) -> FuzzyContour:
        return self._subset(lambda d: d >= 1.0, f"ker({self.label})")

    def _subset(self, keep, label: str) -> FuzzyContour:
        return FuzzyContour.from_members(
            self.contour, ((i, d) for i, d in self._members.items() if keep(d)), label
        )

    # --- views ---

    def indices(self) -> NDArray[np.int64]:
        return np.fromiter(self._members.keys(), dtype=np.int64, count=len(self._members))

    def points(self) -> NDArray[np.float64]:
        if not self._members:
            return np.empty((0, 2), dtype=np.float64)
        return self.contour.points[self.indices()]

    def degrees(self) -> NDArray[np.float64]:
        return np.fromiter(self._members.values(), dtype=np.float64, count=len(self._members))

    def local_maxima(self, window: int = 3) -> NDArray[np.int64]:
        """Contour indices whose degree is non-zero and maximal in a centred window.

        The window runs over members in insertion order, circularly.
        """
        if window < 1:
            raise ConstructionError(f"Window must be positive, got {window}")
        degrees = self.degrees()
        n = len(degrees)
        if n == 0:
            return np.empty(0, dtype=np.int64)
        size = min(window, n)
        offsets = np.arange(size) - size // 2
        neighbourhood = degrees[(np.arange(n)[:, None] + offsets[None, :]) % n]
        is_max = (degrees >= neighbourhood.max(axis=1)) & (degrees > 0)
        return self.indices()[is_max]

    def to_image(self, shape: tuple[int, int] | None = None) -> NDArray[np.uint8]:
        """Grey-level raster with each member painted at 255 * degree."""
        values = np.rint(255.0 * self.degrees())
        return rasterize_points(self.points(), shape, values).astype(np.uint8)

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[tuple[int, float]]:
        return iter(self._members.items())

    def __contains__(self, point: ArrayLike) -> bool:
        target = np.asarray(point, dtype=np.float64).reshape(2)
        pts = self.contour.points
        return any(pts[i][0] == target[0] and pts[i][1] == target[1] for i in self._members)

    def __repr__(self) -> str:
        return f"FuzzyContour({self.label!r}, n={len(self)})"
