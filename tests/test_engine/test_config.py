"""Tests for SalienceConfig."""

import math

import pytest

from fuzzyshape.engine.config import SalienceConfig
from fuzzyshape.errors import ConstructionError
from fuzzyshape.fuzzy.tnorms import TNorm
from fuzzyshape.shape.curvature import CurvatureMethod


def test_defaults():
    config = SalienceConfig()
    assert config.window_ratio == pytest.approx(1 / 15)
    assert config.sigma0 == 2.0
    assert config.alpha_cut == 0.4
    assert config.tnorm is TNorm.PRODUCT
    assert config.alpha_curvacity == pytest.approx(0.63)


def test_string_enums_are_coerced():
    config = SalienceConfig(tnorm="hamacher", curvature_method="gaussian")
    assert config.tnorm is TNorm.HAMACHER
    assert config.curvature_method is CurvatureMethod.GAUSSIAN


@pytest.mark.parametrize(
    "overrides",
    [
        {"window_ratio": 0.0},
        {"offset": -1},
        {"inflection_sigma": -1.0},
        {"sigma0": 0.0},
        {"sigma_factor": 1.0},
        {"alpha_cut": 0.0},
        {"alpha_cut": 1.1},
        {"chord_threshold": -1.0},
        {"enough_alpha": 0.6},
        {"almost_all_gamma": 0.0},
        {"linearity_exponent": 0.0},
        {"window_size_maxima": 0},
        {"arc_angle": 4.0},
        {"verticity_min": 0.7},
        {"max_workers": 0},
        {"tnorm": "maximum"},
        {"curvature_method": "spline"},
    ],
)
def test_invalid_values_rejected(overrides):
    with pytest.raises(ConstructionError):
        SalienceConfig(**overrides)


def test_with_overrides():
    base = SalienceConfig()
    changed = base.with_overrides(alpha_cut=0.6, sigma0=None, tnorm="minimum")
    assert changed.alpha_cut == 0.6
    assert changed.sigma0 == base.sigma0
    assert changed.tnorm is TNorm.MINIMUM
    assert base.alpha_cut == 0.4


def test_with_overrides_validates():
    with pytest.raises(ConstructionError):
        SalienceConfig().with_overrides(enough_beta=0.1)
    with pytest.raises(ConstructionError):
        SalienceConfig().with_overrides(colour="red")


def test_frozen():
    with pytest.raises(AttributeError):
        SalienceConfig().alpha_cut = 0.9


def test_arc_angle_sets_reference_fit():
    assert SalienceConfig(arc_angle=math.pi / 2).alpha_curvacity == pytest.approx(0.815)
