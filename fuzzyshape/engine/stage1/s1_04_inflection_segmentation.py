"""S1.04 — Segmentation at curvature zero crossings (convex <-> concave)."""

from __future__ import annotations

from fuzzyshape.engine.context import ShapeContext
from fuzzyshape.engine.registry import Phase, stage
from fuzzyshape.shape.contour import ContourSegmentation
from fuzzyshape.shape.segmentation import segment_by_inflections


@stage(
    id="S1.04",
    phase=Phase.CONTOUR_ANALYSIS,
    dependencies=["S1.01"],
    description="Split the contour at curvature inflections",
)
def inflection_segmentation(ctx: ShapeContext) -> None:
    sigma = ctx.config.inflection_sigma
    if sigma:
        ctx.inflections = segment_by_inflections(
            ctx.contour, sigma=sigma, window=ctx.config.window_ratio
        )
        return
    if ctx.curvature is None:
        ctx.inflections = ContourSegmentation(ctx.contour)
        return
    ctx.inflections = segment_by_inflections(ctx.contour, ctx.curvature)
