"""Contour, ContourSegment and ContourSegmentation.

A contour is a closed, ordered sequence of 2-D points with circular indexing.
Segments reference an arc of a source contour by its two endpoints and are
always walked in a fixed traversal direction.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from functools import cached_property

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.spatial import KDTree

from fuzzyshape.errors import ConstructionError
from fuzzyshape.shape.circular import CircularIndex
from fuzzyshape.utils.geometry import bbox, is_ccw
from fuzzyshape.utils.morphology import rasterize_points


class Contour:
    """Immutable closed point sequence. Points are (x, y) = (column, row)."""

    def __init__(self, points: ArrayLike | None = None) -> None:
        if points is None:
            arr = np.empty((0, 2), dtype=np.float64)
        else:
            arr = np.array(points, dtype=np.float64).reshape(-1, 2)
        arr.setflags(write=False)
        self._points = arr

    @property
    def points(self) -> NDArray[np.float64]:
        """Read-only N×2 array of points."""
        return self._points

    @property
    def is_empty(self) -> bool:
        return len(self._points) == 0

    @cached_property
    def index(self) -> CircularIndex:
        if self.is_empty:
            raise ConstructionError("Empty contour has no circular index")
        return CircularIndex(len(self._points))

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[tuple[float, float]]:
        for x, y in self._points:
            yield (float(x), float(y))

    def __getitem__(self, i: int) -> NDArray[np.float64]:
        return self._points[self.index.wrap(i)]

    def __repr__(self) -> str:
        return f"Contour(n={len(self)})"

    def point(self, i: int) -> tuple[float, float]:
        x, y = self[i]
        return (float(x), float(y))

    def walk(self, i: int, k: int) -> int:
        """Index reached after ``k`` steps from ``i`` (negative walks backward)."""
        return self.index.step(i, k)

    # --- lookup ---

    @cached_property
    def _tree(self) -> KDTree:
        return KDTree(self._points)

    def index_of(self, point: ArrayLike) -> int:
        """Index of the first point equal to ``point``, or -1 if absent."""
        if self.is_empty:
            return -1
        target = np.asarray(point, dtype=np.float64).reshape(2)
        hits = np.flatnonzero(np.all(self._points == target, axis=1))
        return int(hits[0]) if len(hits) else -1

    def contains(self, point: ArrayLike) -> bool:
        return self.index_of(point) >= 0

    def nearest_index(self, point: ArrayLike) -> int:
        """Index of the contour point closest (Euclidean) to ``point``."""
        if self.is_empty:
            raise ConstructionError("Nearest point requested on an empty contour")
        _, idx = self._tree.query(np.asarray(point, dtype=np.float64).reshape(2))
        return int(idx)

    def nearest_indices(self, points: ArrayLike) -> NDArray[np.int64]:
        if self.is_empty:
            raise ConstructionError("Nearest point requested on an empty contour")
        _, idx = self._tree.query(np.asarray(points, dtype=np.float64).reshape(-1, 2))
        return np.asarray(idx, dtype=np.int64)

    # --- walks ---

    def arc(self, start: int, end: int, loop: bool = False) -> NDArray[np.float64]:
        """Points walked forward from index ``start`` to ``end`` (inclusive)."""
        return self._points[self.index.forward_range(start, end, loop=loop)]

    def window(self, start: int, size: int) -> NDArray[np.float64]:
        """``|size|`` points from ``start``, forward if size > 0, backward otherwise."""
        return self._points[self.index.window(start, size)]

    # --- geometry ---

    def bounds(self) -> tuple[int, int, int, int]:
        """Integer (xmin, ymin, xmax, ymax)."""
        xmin, ymin, xmax, ymax = bbox(self._points)
        return (int(np.floor(xmin)), int(np.floor(ymin)), int(np.ceil(xmax)), int(np.ceil(ymax)))

    @cached_property
    def is_ccw(self) -> bool:
        """Counter-clockwise in (x, y) axes; clockwise as seen on screen (y down)."""
        return is_ccw(self._points)

    @property
    def is_clockwise(self) -> bool:
        """Clockwise in (x, y) axes. Empty and degenerate contours are neither."""
        return len(self) >= 3 and not self.is_ccw

    def to_mask(self) -> NDArray[np.uint8]:
        """Raster with 1 at every (rounded) contour coordinate; size = max coord + 1."""
        return rasterize_points(self._points).astype(np.uint8)


class ContourSegment:
    """Arc of a source contour between two of its points.

    The arc is walked forward (increasing index) unless ``forward`` is False.
    """

    def __init__(
        self,
        contour: Contour,
        start: ArrayLike,
        end: ArrayLike,
        forward: bool = True,
    ) -> None:
        if contour is None or contour.is_empty:
            raise ConstructionError("Segment source contour cannot be empty")
        start_idx = contour.index_of(start)
        end_idx = contour.index_of(end)
        if start_idx < 0 or end_idx < 0:
            raise ConstructionError("Segment endpoints must be contained in the contour")
        self.contour = contour
        self.forward = forward
        self.start_index = start_idx
        self.end_index = end_idx

    @classmethod
    def from_indices(
        cls, contour: Contour, start: int, end: int, forward: bool = True
    ) -> ContourSegment:
        if contour is None or contour.is_empty:
            raise ConstructionError("Segment source contour cannot be empty")
        if not (0 <= start < len(contour) and 0 <= end < len(contour)):
            raise ConstructionError(
                f"Segment indices ({start}, {end}) outside contour of length {len(contour)}"
            )
        segment = cls(contour, contour.points[start], contour.points[end], forward=forward)
        # Coordinates can repeat on a traced contour; keep the requested positions
        segment.start_index = int(start)
        segment.end_index = int(end)
        return segment

    @property
    def start(self) -> tuple[float, float]:
        return self.contour.point(self.start_index)

    @property
    def end(self) -> tuple[float, float]:
        return self.contour.point(self.end_index)

    def indices(self) -> NDArray[np.int64]:
        """Contour indices in walk order. Equal endpoints span the whole loop."""
        idx = self.contour.index
        loop = self.start_index == self.end_index
        if self.forward:
            return idx.forward_range(self.start_index, self.end_index, loop=loop)
        return idx.forward_range(self.end_index, self.start_index, loop=loop)[::-1]

    def points(self) -> NDArray[np.float64]:
        return self.contour.points[self.indices()]

    def contains(self, point: ArrayLike) -> bool:
        target = np.asarray(point, dtype=np.float64).reshape(2)
        return bool(np.any(np.all(self.points() == target, axis=1)))

    def __len__(self) -> int:
        return len(self.indices())

    def __repr__(self) -> str:
        return (
            f"ContourSegment({self.start} -> {self.end}, "
            f"{'forward' if self.forward else 'backward'}, n={len(self)})"
        )


class ContourSegmentation:
    """Ordered collection of segments sharing one source contour."""

    def __init__(self, contour: Contour, segments: Iterable[ContourSegment] = ()) -> None:
        self.contour = contour
        self._segments: list[ContourSegment] = []
        for seg in segments:
            self.add(seg)

    def add(self, segment: ContourSegment) -> None:
        if segment.contour is not self.contour:
            raise ConstructionError("All segments must share the segmentation's source contour")
        self._segments.append(segment)

    def __iter__(self) -> Iterator[ContourSegment]:
        return iter(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __getitem__(self, i: int) -> ContourSegment:
        return self._segments[i]

    def endpoints(self) -> list[tuple[float, float]]:
        return [seg.start for seg in self._segments]
