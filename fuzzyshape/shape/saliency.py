"""Fuzzy contour properties: saliency, linearity and verticity.

Saliency(i) = T(enough(curvacity(i)), almost_all(#neighbours more curved than i))

curvacity is 1 - linearity, where linearity is the regression fit of the
window around i raised to the power K.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from fuzzyshape.engine.config import SalienceConfig
from fuzzyshape.fuzzy.fuzzy_contour import FuzzyContour
from fuzzyshape.fuzzy.quantifiers import almost_all, enough
from fuzzyshape.fuzzy.tnorms import get_tnorm
from fuzzyshape.shape.contour import Contour
from fuzzyshape.shape.regression import fit_quality

logger = logging.getLogger(__name__)


def window_size(n: int, ratio: float) -> int:
    """Curvacity half-window: int(ratio * n), at least 2 and at most n."""
    return min(max(2, int(ratio * n)), max(n, 1))


def window_fit(contour: Contour, start_offset: int, size: int) -> NDArray[np.float64]:
    """Regression fit of the ``size`` points starting at ``i + start_offset``, for every i."""
    n = len(contour)
    size = min(size, n)
    idx = (np.arange(n)[:, None] + start_offset + np.arange(size)[None, :]) % n
    return fit_quality(contour.points[idx])


def centred_linearity(contour: Contour, w: int, exponent: float) -> NDArray[np.float64]:
    """Linearity over the 2*w points starting at i - w + 1."""
    return window_fit(contour, 1 - w, 2 * w) ** exponent


def curvacity_values(contour: Contour, config: SalienceConfig) -> NDArray[np.float64]:
    if contour.is_empty:
        return np.empty(0)
    w = window_size(len(contour), config.window_ratio)
    return 1.0 - centred_linearity(contour, w, config.linearity_exponent)


def maximality_values(curvacity: NDArray[np.float64], size: int, gamma: float) -> NDArray[np.float64]:
    """Degree to which each point is more curved than almost all of its neighbours.

    Neighbours are the other points of a centred window of ``size`` points.
    """
    n = len(curvacity)
    if n == 0:
        return np.empty(0)
    size = min(size, n)
    offsets = np.arange(size) - size // 2
    offsets = offsets[offsets != 0]
    if len(offsets) == 0:
        return np.ones(n)
    neighbours = curvacity[(np.arange(n)[:, None] + offsets[None, :]) % n]
    count = np.sum(neighbours > curvacity[:, None], axis=1)
    return almost_all(count, gamma)


def saliency_values(contour: Contour, config: SalienceConfig | None = None) -> NDArray[np.float64]:
    config = config or SalienceConfig()
    if contour.is_empty:
        return np.empty(0)
    n = len(contour)
    w = window_size(n, config.window_ratio)
    curvacity = curvacity_values(contour, config)
    maxima_size = config.window_size_maxima or max(3, w // 2)

    is_enough = enough(curvacity, config.enough_alpha, config.enough_beta)
    is_maximal = maximality_values(curvacity, maxima_size, config.almost_all_gamma)
    tnorm = get_tnorm(config.tnorm)
    return np.clip(tnorm(is_enough, is_maximal), 0.0, 1.0)


def saliency_contour(contour: Contour, config: SalienceConfig | None = None) -> FuzzyContour:
    """Fuzzy set of salient (corner-like) points over every contour point."""
    if contour.is_empty:
        return FuzzyContour(contour, "saliency")
    values = saliency_values(contour, config)
    logger.debug(
        "Saliency over %d points: max=%.3f, mean=%.3f", len(values), values.max(), values.mean()
    )
    return FuzzyContour.from_degrees(contour, values, "saliency")


def linearity_contour(contour: Contour, config: SalienceConfig | None = None) -> FuzzyContour:
    """Straightness of the centred window, relative to a reference arc.

    A window fitting no better than an arc spanning ``config.arc_angle``
    (fit = ``alpha_curvacity``) has linearity 0; a perfect line has 1.
    """
    config = config or SalienceConfig()
    if contour.is_empty:
        return FuzzyContour(contour, "linearity")
    w = window_size(len(contour), config.window_ratio)
    fit = window_fit(contour, 1 - w, 2 * w)
    values = enough(fit, config.alpha_curvacity, 1.0)
    return FuzzyContour.from_degrees(contour, values, "linearity")


def verticity_contour(contour: Contour, config: SalienceConfig | None = None) -> FuzzyContour:
    """Vertex-likeness: straight on both sides and curved across the point.

    min(left linearity, right linearity, enough(1 - centred linearity; vv_min, vv_max))
    """
    config = config or SalienceConfig()
    if contour.is_empty:
        return FuzzyContour(contour, "verticity")
    k = config.linearity_exponent
    w = window_size(len(contour), config.window_ratio)

    left = window_fit(contour, 1 - w, w) ** k
    right = window_fit(contour, 0, w) ** k
    across = enough(
        1.0 - centred_linearity(contour, w, k), config.verticity_min, config.verticity_max
    )

    values = np.minimum(np.minimum(left, right), across)
    return FuzzyContour.from_degrees(contour, values, "verticity")
