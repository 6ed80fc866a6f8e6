"""Tests for circular Gaussian smoothing."""

import numpy as np

from fuzzyshape.shape.contour import Contour
from fuzzyshape.shape.smoothing import gaussian_kernel, smooth_contour


def test_kernel_is_odd_and_normalised():
    kernel = gaussian_kernel(2.0)
    assert len(kernel) == 9
    assert np.isclose(kernel.sum(), 1.0)
    assert np.argmax(kernel) == 4
    np.testing.assert_allclose(kernel, kernel[::-1])


def test_non_positive_sigma_is_identity(rect_contour):
    assert smooth_contour(rect_contour, 0) is rect_contour
    assert smooth_contour(rect_contour, -1.0) is rect_contour


def test_empty_contour_stays_empty():
    assert smooth_contour(Contour(), 3.0).is_empty


def test_length_and_centroid_preserved(rect_contour):
    smoothed = smooth_contour(rect_contour, 4.0)
    assert len(smoothed) == len(rect_contour)
    np.testing.assert_allclose(
        smoothed.points.mean(axis=0), rect_contour.points.mean(axis=0), atol=1e-9
    )


def test_corners_move_inward(rect_contour):
    smoothed = smooth_contour(rect_contour, 2.0)
    i = rect_contour.index_of((10, 10))
    x, y = smoothed.point(i)
    assert x > 10.0 and y > 10.0


def test_straight_run_stays_on_its_line(rect_contour):
    smoothed = smooth_contour(rect_contour, 2.0)
    i = rect_contour.index_of((30, 10))
    assert np.allclose(smoothed.point(i), (30.0, 10.0))


def test_kernel_longer_than_contour_wraps():
    square = Contour([(0, 0), (1, 0), (1, 1), (0, 1), (0, 0.5)])
    smoothed = smooth_contour(square, 10.0)
    assert len(smoothed) == 5
    assert np.all(np.isfinite(smoothed.points))
    np.testing.assert_allclose(smoothed.points.mean(axis=0), square.points.mean(axis=0))
