"""S1.05 — Crisp salient points at local maxima of the curvature."""

from __future__ import annotations

from fuzzyshape.engine.context import ShapeContext
from fuzzyshape.engine.registry import Phase, stage
from fuzzyshape.fuzzy.fuzzy_contour import FuzzyContour
from fuzzyshape.shape.crisp import LABEL, maxima_window, select_curvature_maxima


@stage(
    id="S1.05",
    phase=Phase.CONTOUR_ANALYSIS,
    dependencies=["S1.01"],
    description="Strict local maxima of the curvature, degree 1",
)
def curvature_maxima(ctx: ShapeContext) -> None:
    if ctx.curvature is None:
        ctx.curvature_maxima = FuzzyContour(ctx.contour, LABEL)
        return
    cfg = ctx.config
    window = cfg.window_size_maxima or maxima_window(ctx.num_points, cfg.window_ratio)
    ctx.curvature_maxima = select_curvature_maxima(ctx.contour, ctx.curvature, window=window)
