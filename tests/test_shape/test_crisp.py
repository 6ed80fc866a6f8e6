"""Tests for crisp salient points at curvature maxima."""

import numpy as np

from fuzzyshape.shape.contour import Contour
from fuzzyshape.shape.crisp import maxima_window, select_curvature_maxima
from fuzzyshape.shape.curvature import CurvatureFunction
from tests.conftest import RECT_CORNERS


def test_default_window_is_half_the_curvature_window():
    assert maxima_window(116) == 3
    assert maxima_window(116, 0.1) == 5
    assert maxima_window(10) == 0


def test_rectangle_maxima_are_its_corners(rect_contour):
    selected = select_curvature_maxima(rect_contour)
    assert selected.label == "curvature maxima"
    assert sorted(selected.indices().tolist()) == sorted(
        rect_contour.index_of(c) for c in RECT_CORNERS
    )
    assert np.all(selected.degrees() == 1.0)


def test_given_curvature_and_plateaus():
    contour = Contour([(i, 0) for i in range(6)])
    kappa = CurvatureFunction(contour, np.array([0.0, 1.0, 1.0, 0.0, 2.0, 0.0]))
    assert select_curvature_maxima(contour, kappa, window=3).indices().tolist() == [4]
    relaxed = select_curvature_maxima(contour, kappa, window=3, strict=False)
    assert relaxed.indices().tolist() == [1, 2, 4]


def test_empty_contour():
    assert len(select_curvature_maxima(Contour())) == 0
