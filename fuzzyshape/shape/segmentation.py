"""Split a contour into segments between salient points or inflections."""

from __future__ import annotations

from collections.abc import Iterable

from fuzzyshape.errors import ConstructionError
from fuzzyshape.shape.contour import Contour, ContourSegment, ContourSegmentation
from fuzzyshape.shape.curvature import (
    DEFAULT_WINDOW_RATIO,
    CurvatureFunction,
    estimate_curvature,
)
from fuzzyshape.shape.smoothing import smooth_contour


def segment_by_points(contour: Contour, indices: Iterable[int]) -> ContourSegmentation:
    """One forward segment per consecutive pair of break points, closing the loop.

    A single break point yields one segment covering the whole contour.
    """
    segmentation = ContourSegmentation(contour)
    if contour.is_empty:
        return segmentation
    breaks = sorted({contour.index.wrap(i) for i in indices})
    if not breaks:
        return segmentation
    for start, end in zip(breaks, breaks[1:] + breaks[:1]):
        segmentation.add(ContourSegment.from_indices(contour, start, end))
    return segmentation


def segment_by_inflections(
    contour: Contour,
    curvature: CurvatureFunction | None = None,
    eps: float = 1e-3,
    sigma: float | None = None,
    window: int | float = DEFAULT_WINDOW_RATIO,
) -> ContourSegmentation:
    """Segments between consecutive curvature zero crossings.

    With ``sigma`` the crossings are found on a Gaussian-smoothed copy, whose
    curvature is estimated with ``window``; smoothing keeps the point count, so
    the crossings index the original contour directly.
    """
    if sigma is not None and curvature is not None:
        raise ConstructionError("Pass either a curvature or a smoothing sigma, not both")
    if curvature is None:
        source = smooth_contour(contour, sigma) if sigma else contour
        curvature = estimate_curvature(source, window=window)
    return segment_by_points(contour, curvature.zero_crossings(eps).tolist())
