"""S1.02 — Fuzzy saliency of every contour point at the original scale."""

from __future__ import annotations

from fuzzyshape.engine.context import ShapeContext
from fuzzyshape.engine.registry import Phase, stage
from fuzzyshape.shape.saliency import saliency_contour


@stage(
    id="S1.02",
    phase=Phase.CONTOUR_ANALYSIS,
    dependencies=["S0.01"],
    description="Fuzzy saliency: curvacity enough AND locally maximal",
)
def saliency(ctx: ShapeContext) -> None:
    ctx.saliency = saliency_contour(ctx.contour, ctx.config)
