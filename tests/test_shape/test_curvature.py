"""Tests for curvature estimation."""

import math

import numpy as np
import pytest

from fuzzyshape.errors import ConstructionError
from fuzzyshape.shape.contour import Contour
from fuzzyshape.shape.curvature import (
    CurvatureFunction,
    CurvatureMethod,
    estimate_curvature,
    resolve_window,
)
from fuzzyshape.shape.saliency import window_size
from fuzzyshape.shape.tracer import trace_boundary
from tests.conftest import RECT_CORNERS, circle_mask, l_shape_mask


def test_rectangle_corners_are_right_angles(rect_contour):
    kappa = estimate_curvature(rect_contour)
    for corner in RECT_CORNERS:
        i = rect_contour.index_of(corner)
        assert kappa[i] == pytest.approx(math.pi / 2, abs=0.1)


def test_straight_edge_has_zero_curvature(rect_contour):
    kappa = estimate_curvature(rect_contour)
    assert kappa[rect_contour.index_of((30, 10))] == pytest.approx(0.0, abs=1e-6)
    assert kappa[rect_contour.index_of((49, 20))] == pytest.approx(0.0, abs=1e-6)


def test_values_bounded(rect_contour, disk_contour):
    for contour in (rect_contour, disk_contour):
        values = estimate_curvature(contour).values
        assert len(values) == len(contour)
        assert np.all(values >= -math.pi) and np.all(values <= math.pi)


def test_circle_is_convex(disk_contour):
    values = estimate_curvature(disk_contour).values
    assert values.mean() > 0
    assert np.mean(values > 0) > 0.8


def _relative_spread(radius):
    values = estimate_curvature(trace_boundary(circle_mask(radius))).values
    return values.std() / values.mean()


def test_larger_circles_have_steadier_curvature():
    small, large = _relative_spread(20), _relative_spread(40)
    assert 0 < large < small


def test_concave_corner_is_negative():
    contour = trace_boundary(l_shape_mask())
    kappa = estimate_curvature(contour)
    i = contour.index_of((29, 29))
    assert kappa[i] < -1.0
    assert kappa.values.max() > 1.0


def test_orientation_does_not_flip_sign(rect_contour):
    reversed_contour = Contour(rect_contour.points[::-1])
    kappa = estimate_curvature(reversed_contour)
    assert kappa[reversed_contour.index_of((49, 10))] == pytest.approx(math.pi / 2, abs=0.1)


def test_gaussian_method(rect_contour):
    kappa = estimate_curvature(rect_contour, method=CurvatureMethod.GAUSSIAN)
    assert len(kappa) == len(rect_contour)
    assert kappa.values.mean() > 0
    corner = kappa[rect_contour.index_of((49, 10))]
    middle = kappa[rect_contour.index_of((30, 10))]
    assert corner > middle


def test_empty_contour():
    kappa = estimate_curvature(Contour())
    assert len(kappa) == 0
    assert len(kappa.zero_crossings()) == 0


def test_invalid_window(rect_contour):
    with pytest.raises(ConstructionError):
        estimate_curvature(rect_contour, window=0)


def test_resolve_window():
    assert resolve_window(1 / 15, 116) == 7
    assert resolve_window(10, 116) == 10
    assert resolve_window(0.001, 116) == 2
    assert resolve_window(500, 116) == 116
    assert resolve_window(1.0, 224) == 224
    assert resolve_window(1, 224) == 2


def test_full_length_ratio_matches_saliency_window(rect_contour):
    n = len(rect_contour)
    assert resolve_window(1.0, n) == window_size(n, 1.0) == n
    assert len(estimate_curvature(rect_contour, window=1.0)) == n


def test_values_are_read_only(rect_contour):
    kappa = estimate_curvature(rect_contour)
    with pytest.raises(ValueError):
        kappa.values[0] = 1.0


def test_length_mismatch_rejected():
    with pytest.raises(ConstructionError):
        CurvatureFunction(Contour([(0, 0), (1, 0), (1, 1)]), np.zeros(2))


def test_zero_crossings_skip_flat_runs():
    contour = Contour([(i, 0) for i in range(8)])
    kappa = CurvatureFunction(contour, np.array([1, 0, 0, -1, -1, 0, 1, 1], dtype=float))
    assert kappa.zero_crossings().tolist() == [3, 6]


def test_zero_crossings_none_for_one_sign():
    contour = Contour([(i, 0) for i in range(4)])
    kappa = CurvatureFunction(contour, np.array([0.5, 0.2, 0.0, 0.7]))
    assert kappa.zero_crossings().tolist() == []


def test_local_maxima_strict_and_plateaus():
    contour = Contour([(i, 0) for i in range(6)])
    kappa = CurvatureFunction(contour, np.array([0.0, 1.0, 1.0, 0.0, 2.0, 0.0]))
    assert kappa.local_maxima(3).tolist() == [4]
    assert kappa.local_maxima(3, strict=False).tolist() == [1, 2, 4]


def test_local_maxima_ignore_rounding_noise():
    contour = Contour([(i, 0) for i in range(4)])
    kappa = CurvatureFunction(contour, np.array([0.5, 0.5 + 1e-9, 0.5, 0.1]))
    assert kappa.local_maxima(3).tolist() == []
    assert kappa.local_maxima(3, strict=False).tolist() == [0, 1, 2]


def test_local_maxima_wrap_around():
    contour = Contour([(i, 0) for i in range(5)])
    kappa = CurvatureFunction(contour, np.array([3.0, 0.0, 1.0, 0.0, 2.0]))
    assert kappa.local_maxima(3).tolist() == [0, 2]
    assert kappa.local_maxima(5).tolist() == [0]


def test_rectangle_curvature_peaks_at_corners(rect_contour):
    kappa = estimate_curvature(rect_contour)
    peaks = kappa.local_maxima(resolve_window(1 / 15, len(rect_contour)) // 2)
    assert sorted(peaks.tolist()) == sorted(rect_contour.index_of(c) for c in RECT_CORNERS)
