"""ShapeContext — the single mutable state object flowing through all stages.

Every stage reads what upstream stages left here and writes its own result.
A failed stage leaves its field at the empty default so downstream stages
produce empty results instead of failing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np
from numpy.typing import NDArray

from fuzzyshape.engine.config import SalienceConfig
from fuzzyshape.shape.contour import Contour

if TYPE_CHECKING:
    from fuzzyshape.fuzzy.fuzzy_contour import FuzzyContour
    from fuzzyshape.shape.contour import ContourSegmentation
    from fuzzyshape.shape.curvature import CurvatureFunction
    from fuzzyshape.shape.multiscale import ScaleLevel


@dataclass
class ShapeContext:
    """Shared state for one mask."""

    # Binary mask, indexed [row, col]
    mask: Any = None
    config: SalienceConfig = field(default_factory=SalienceConfig)

    # --- Phase 0: tracing ---
    contour: Contour = field(default_factory=Contour)

    # --- Phase 1: single-scale analysis ---
    curvature: CurvatureFunction | None = None
    saliency: FuzzyContour | None = None
    alpha_cut: FuzzyContour | None = None
    inflections: ContourSegmentation | None = None
    curvature_maxima: FuzzyContour | None = None

    # --- Phase 2: multi-scale selection ---
    scale_levels: tuple[ScaleLevel, ...] = ()
    trajectories: tuple[NDArray[np.int64], ...] = ()
    refined_indices: list[int] = field(default_factory=list)
    salient_indices: list[int] = field(default_factory=list)
    salient_points: FuzzyContour | None = None
    segmentation: ContourSegmentation | None = None

    # --- Pipeline metadata ---
    completed_stages: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)
    timings_ms: dict[str, float] = field(default_factory=dict)

    @property
    def num_points(self) -> int:
        return len(self.contour)

    @property
    def sigmas(self) -> list[float]:
        return [level.sigma for level in self.scale_levels]
