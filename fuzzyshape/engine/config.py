"""Salience configuration: every tunable of the curvature, saliency and multi-scale stages."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass

from fuzzyshape.errors import ConstructionError
from fuzzyshape.fuzzy.tnorms import TNorm
from fuzzyshape.shape.curvature import CurvatureMethod


@dataclass(frozen=True)
class SalienceConfig:
    """Controls curvature estimation, fuzzy saliency and multi-scale selection."""

    # Window size as a fraction of the contour length
    window_ratio: float = 1.0 / 15
    # Gap between a point and its curvature windows
    offset: int = 0
    curvature_method: CurvatureMethod = CurvatureMethod.LINE_BASED
    # Gaussian smoothing before looking for inflections (None: raw curvature)
    inflection_sigma: float | None = None

    # Scale progression: sigma0, sigma0*k, sigma0*k^2, ... below min(max_sigma, ratio*n)
    sigma0: float = 2.0
    sigma_factor: float = 2.0
    max_sigma: float = 45.0
    max_sigma_ratio: float = 0.1

    alpha_cut: float = 0.4
    chord_threshold: float = 3.0  # pixels

    # Saliency quantifiers
    tnorm: TNorm = TNorm.PRODUCT
    enough_alpha: float = 0.2
    enough_beta: float = 0.5
    almost_all_gamma: float = 4.0
    linearity_exponent: float = 3.0
    window_size_maxima: int | None = None  # None: half the curvacity window, at least 3

    # Reference arc whose fit maps to zero linearity
    arc_angle: float = math.pi  # radians
    # Verticity
    verticity_min: float = 0.1
    verticity_max: float = 0.6

    # Per-scale analysis thread pool (1 = sequential)
    max_workers: int = 1

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "tnorm", TNorm(self.tnorm))
        except ValueError:
            raise ConstructionError(f"Unknown T-norm {self.tnorm!r}") from None
        try:
            object.__setattr__(self, "curvature_method", CurvatureMethod(self.curvature_method))
        except ValueError:
            raise ConstructionError(f"Unknown curvature method {self.curvature_method!r}") from None

        if not 0.0 < self.window_ratio <= 1.0:
            raise ConstructionError(f"window_ratio must lie in (0, 1], got {self.window_ratio}")
        if self.offset < 0:
            raise ConstructionError(f"offset must be >= 0, got {self.offset}")
        if self.inflection_sigma is not None and self.inflection_sigma < 0:
            raise ConstructionError(
                f"inflection_sigma must be >= 0, got {self.inflection_sigma}"
            )
        if self.sigma0 <= 0:
            raise ConstructionError(f"sigma0 must be positive, got {self.sigma0}")
        if self.sigma_factor <= 1.0:
            raise ConstructionError(f"sigma_factor must be > 1, got {self.sigma_factor}")
        if self.max_sigma <= 0 or self.max_sigma_ratio <= 0:
            raise ConstructionError("max_sigma and max_sigma_ratio must be positive")
        if not 0.0 < self.alpha_cut <= 1.0:
            raise ConstructionError(f"alpha_cut must lie in (0, 1], got {self.alpha_cut}")
        if self.chord_threshold < 0:
            raise ConstructionError(f"chord_threshold must be >= 0, got {self.chord_threshold}")
        if not self.enough_alpha < self.enough_beta:
            raise ConstructionError(
                f"enough_alpha ({self.enough_alpha}) must be below enough_beta ({self.enough_beta})"
            )
        if self.almost_all_gamma <= 0:
            raise ConstructionError(f"almost_all_gamma must be positive, got {self.almost_all_gamma}")
        if self.linearity_exponent <= 0:
            raise ConstructionError(
                f"linearity_exponent must be positive, got {self.linearity_exponent}"
            )
        if self.window_size_maxima is not None and self.window_size_maxima <= 0:
            raise ConstructionError(
                f"window_size_maxima must be positive, got {self.window_size_maxima}"
            )
        if not 0.0 < self.arc_angle <= math.pi:
            raise ConstructionError(f"arc_angle must lie in (0, pi], got {self.arc_angle}")
        if not self.verticity_min < self.verticity_max:
            raise ConstructionError("verticity_min must be below verticity_max")
        if self.max_workers < 1:
            raise ConstructionError(f"max_workers must be >= 1, got {self.max_workers}")

    @property
    def alpha_curvacity(self) -> float:
        """Fit value of an arc spanning ``arc_angle``: 1 - 0.37 * angle / pi."""
        return 1.0 - 0.37 * self.arc_angle / math.pi

    def with_overrides(self, **overrides) -> SalienceConfig:
        """Validated copy with the given fields replaced (None values are ignored)."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        unknown = set(changes) - {f.name for f in dataclasses.fields(self)}
        if unknown:
            raise ConstructionError(f"Unknown configuration fields: {sorted(unknown)}")
        return dataclasses.replace(self, **changes)
