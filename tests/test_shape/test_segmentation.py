"""Tests for contour segmentation."""

import pytest

from fuzzyshape.errors import ConstructionError
from fuzzyshape.shape.contour import Contour
from fuzzyshape.shape.curvature import estimate_curvature
from fuzzyshape.shape.segmentation import segment_by_inflections, segment_by_points
from fuzzyshape.shape.smoothing import smooth_contour
from fuzzyshape.shape.tracer import trace_boundary
from tests.conftest import RECT_CORNERS, l_shape_mask


def test_segments_between_corners(rect_contour):
    corners = [rect_contour.index_of(c) for c in RECT_CORNERS]
    segmentation = segment_by_points(rect_contour, corners)
    assert len(segmentation) == 4
    # Each break point is shared by two segments
    assert sum(len(seg) for seg in segmentation) == len(rect_contour) + 4
    assert segmentation.endpoints() == [tuple(map(float, c)) for c in RECT_CORNERS]
    for seg in segmentation:
        assert seg.contour is rect_contour


def test_single_point_covers_whole_loop(rect_contour):
    segmentation = segment_by_points(rect_contour, [5])
    assert len(segmentation) == 1
    assert len(segmentation[0]) == len(rect_contour) + 1


def test_duplicate_and_wrapped_indices_collapse(rect_contour):
    n = len(rect_contour)
    segmentation = segment_by_points(rect_contour, [3, 3, n + 3, 50])
    assert len(segmentation) == 2


def test_no_points_no_segments(rect_contour):
    assert len(segment_by_points(rect_contour, [])) == 0
    assert len(segment_by_points(Contour(), [1, 2])) == 0


def test_inflections_split_l_shape():
    contour = trace_boundary(l_shape_mask())
    curvature = estimate_curvature(contour)
    crossings = curvature.zero_crossings()
    assert len(crossings) >= 2
    segmentation = segment_by_inflections(contour, curvature)
    assert len(segmentation) == len(crossings)


def test_convex_shape_has_no_inflections(rect_contour):
    segmentation = segment_by_inflections(rect_contour, estimate_curvature(rect_contour))
    assert len(segmentation) == 0


def test_smoothed_inflections_index_the_original_contour():
    contour = trace_boundary(l_shape_mask())
    expected = estimate_curvature(smooth_contour(contour, 2.0)).zero_crossings()
    assert len(expected) >= 2
    segmentation = segment_by_inflections(contour, sigma=2.0)
    assert len(segmentation) == len(expected)
    assert segmentation.endpoints() == [contour.point(i) for i in expected]
    for seg in segmentation:
        assert seg.contour is contour


def test_curvature_defaults_to_raw_estimate():
    contour = trace_boundary(l_shape_mask())
    raw = segment_by_inflections(contour)
    assert len(raw) == len(estimate_curvature(contour).zero_crossings())


def test_curvature_and_sigma_are_exclusive(rect_contour):
    with pytest.raises(ConstructionError):
        segment_by_inflections(rect_contour, estimate_curvature(rect_contour), sigma=2.0)
