"""Tests for Contour, ContourSegment and ContourSegmentation."""

import numpy as np
import pytest

from fuzzyshape.errors import ConstructionError
from fuzzyshape.shape.circular import CircularIndex
from fuzzyshape.shape.contour import Contour, ContourSegment, ContourSegmentation

SQUARE = [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2), (1, 2), (0, 2), (0, 1)]


def test_circular_indexing():
    contour = Contour(SQUARE)
    assert contour.point(8) == (0.0, 0.0)
    assert contour.point(-1) == (0.0, 1.0)
    assert contour.walk(6, 3) == 1
    assert contour.walk(1, -3) == 6


def test_points_are_read_only():
    contour = Contour(SQUARE)
    with pytest.raises(ValueError):
        contour.points[0, 0] = 5


def test_arc_wraps_forward():
    contour = Contour(SQUARE)
    arc = contour.arc(6, 1)
    assert [tuple(p) for p in arc] == [(0, 2), (0, 1), (0, 0), (1, 0)]
    assert len(contour.arc(3, 3)) == 1
    assert len(contour.arc(3, 3, loop=True)) == 9


def test_window_both_directions():
    contour = Contour(SQUARE)
    assert [tuple(p) for p in contour.window(7, 2)] == [(0, 1), (0, 0)]
    assert [tuple(p) for p in contour.window(0, -2)] == [(0, 0), (0, 1)]


def test_between_on_circular_index():
    index = CircularIndex(8)
    assert index.between(6, 1, 7)
    assert index.between(6, 1, 0)
    assert not index.between(6, 1, 1)
    assert not index.between(6, 1, 3)
    # Equal endpoints: the whole loop
    assert index.between(2, 2, 5)
    assert not index.between(2, 2, 2)


def test_lookup():
    contour = Contour(SQUARE)
    assert contour.index_of((2, 1)) == 3
    assert contour.index_of((5, 5)) == -1
    assert contour.contains((1, 2))
    assert contour.nearest_index((2.2, 0.9)) == 3
    np.testing.assert_array_equal(contour.nearest_indices([(0, 0.1), (1.1, 2)]), [0, 5])


def test_empty_contour():
    contour = Contour()
    assert contour.is_empty
    assert contour.index_of((0, 0)) == -1
    assert not contour.is_clockwise
    with pytest.raises(ConstructionError):
        contour.nearest_index((0, 0))


def test_orientation():
    contour = Contour(SQUARE)
    assert contour.is_ccw
    assert not contour.is_clockwise
    reversed_contour = Contour(SQUARE[::-1])
    assert reversed_contour.is_clockwise


def test_segment_walks_forward_and_backward():
    contour = Contour(SQUARE)
    seg = ContourSegment(contour, (2, 2), (0, 0))
    assert seg.indices().tolist() == [4, 5, 6, 7, 0]
    assert seg.contains((0, 1))
    assert not seg.contains((1, 0))

    back = ContourSegment(contour, (2, 2), (0, 0), forward=False)
    assert back.indices().tolist() == [4, 3, 2, 1, 0]
    assert back.start == (2.0, 2.0)
    assert back.end == (0.0, 0.0)


def test_segment_with_equal_endpoints_is_full_loop():
    contour = Contour(SQUARE)
    seg = ContourSegment.from_indices(contour, 2, 2)
    assert len(seg) == len(contour) + 1


def test_segment_rejects_foreign_points():
    contour = Contour(SQUARE)
    with pytest.raises(ConstructionError):
        ContourSegment(contour, (0, 0), (9, 9))
    with pytest.raises(ConstructionError):
        ContourSegment.from_indices(contour, 0, 8)
    with pytest.raises(ConstructionError):
        ContourSegment(Contour(), (0, 0), (0, 0))


def test_from_indices_keeps_positions_on_repeated_coordinates():
    # Thin line traced out and back: x = 2, 3, 4, 3
    contour = Contour([(2, 0), (3, 0), (4, 0), (3, 0)])
    seg = ContourSegment.from_indices(contour, 3, 0)
    assert seg.start_index == 3
    assert seg.indices().tolist() == [3, 0]


def test_segmentation_requires_shared_contour():
    contour = Contour(SQUARE)
    other = Contour(SQUARE)
    segmentation = ContourSegmentation(contour, [ContourSegment.from_indices(contour, 0, 4)])
    assert len(segmentation) == 1
    assert segmentation.endpoints() == [(0.0, 0.0)]
    with pytest.raises(ConstructionError):
        segmentation.add(ContourSegment.from_indices(other, 4, 0))


def test_to_mask():
    raster = Contour(SQUARE).to_mask()
    assert raster.shape == (3, 3)
    assert raster.sum() == 8
    assert raster[1, 1] == 0


def test_bounds():
    assert Contour(SQUARE).bounds() == (0, 0, 2, 2)
    assert Contour([(0.5, 1.2), (3.4, 2.0), (1.0, 4.0)]).bounds() == (0, 1, 4, 4)
