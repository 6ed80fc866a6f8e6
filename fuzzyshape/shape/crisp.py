"""Crisp salient points: local maxima of the curvature, each with degree 1."""

from __future__ import annotations

import logging

from fuzzyshape.fuzzy.fuzzy_contour import FuzzyContour
from fuzzyshape.shape.contour import Contour
from fuzzyshape.shape.curvature import (
    DEFAULT_WINDOW_RATIO,
    CurvatureFunction,
    estimate_curvature,
    resolve_window,
)

logger = logging.getLogger(__name__)

LABEL = "curvature maxima"


def maxima_window(length: int, ratio: float = DEFAULT_WINDOW_RATIO) -> int:
    """Default neighbourhood: half the curvature window."""
    return int(ratio * length) // 2


def select_curvature_maxima(
    contour: Contour,
    curvature: CurvatureFunction | None = None,
    window: int | None = None,
    ratio: float = DEFAULT_WINDOW_RATIO,
    strict: bool = True,
) -> FuzzyContour:
    """Every strict local maximum of the curvature, as a crisp fuzzy contour.

    ``curvature`` defaults to the line-based estimate with window ``ratio``.
    Neighbours are compared within ``window // 2`` on either side.
    """
    selected = FuzzyContour(contour, LABEL)
    if contour.is_empty:
        return selected
    if curvature is None:
        curvature = estimate_curvature(contour, window=resolve_window(ratio, len(contour)))
    if window is None:
        window = maxima_window(len(contour), ratio)

    for i in curvature.local_maxima(window, strict=strict):
        selected.add(int(i), 1.0)
    logger.debug("%d curvature maxima with window %d", len(selected), window)
    return selected
