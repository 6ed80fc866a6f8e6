"""Circular Gaussian smoothing of contours."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray
from scipy.ndimage import correlate1d

from fuzzyshape.shape.contour import Contour

# Kernel half-width in sigmas (95% of the mass)
KERNEL_SPREAD = 1.96


def gaussian_kernel(sigma: float, size: int | None = None) -> NDArray[np.float64]:
    """Odd-length sampled Gaussian normalised to sum 1.

    Default size is ``2 * ceil(1.96 * sigma) + 1``.
    """
    if size is None:
        size = 2 * math.ceil(KERNEL_SPREAD * sigma) + 1
    if size % 2 == 0:
        size += 1
    offsets = np.arange(size) - size // 2
    kernel = np.exp(-(offsets**2) / (2.0 * sigma**2))
    return kernel / kernel.sum()


def smooth_contour(contour: Contour, sigma: float) -> Contour:
    """Convolve x and y independently with a Gaussian, wrapping at the ends.

    ``sigma <= 0`` returns the input contour.
    """
    if sigma <= 0 or contour.is_empty:
        return contour
    kernel = _fold_kernel(gaussian_kernel(sigma), len(contour))
    pts = contour.points
    xs = correlate1d(pts[:, 0], kernel, mode="wrap")
    ys = correlate1d(pts[:, 1], kernel, mode="wrap")
    return Contour(np.column_stack([xs, ys]))


def _fold_kernel(kernel: NDArray[np.float64], length: int) -> NDArray[np.float64]:
    """Wrap a kernel longer than the contour onto ``length`` taps.

    Tap ``j`` of the result weights offset ``j - length // 2``, matching how
    correlate1d centres its weights.
    """
    if len(kernel) <= length:
        return kernel
    centre = length // 2
    offsets = np.arange(len(kernel)) - len(kernel) // 2
    folded = np.zeros(length, dtype=np.float64)
    np.add.at(folded, (offsets + centre) % length, kernel)
    return folded
