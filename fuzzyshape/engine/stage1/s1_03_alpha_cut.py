"""S1.03 — Single-scale salient points: one per alpha-cut arc of the saliency."""

from __future__ import annotations

from fuzzyshape.engine.context import ShapeContext
from fuzzyshape.engine.registry import Phase, stage
from fuzzyshape.fuzzy.fuzzy_contour import FuzzyContour
from fuzzyshape.shape.alpha_cut import select_alpha_cut


@stage(
    id="S1.03",
    phase=Phase.CONTOUR_ANALYSIS,
    dependencies=["S1.02"],
    description="Centre point of each alpha-cut arc",
)
def alpha_cut(ctx: ShapeContext) -> None:
    if ctx.saliency is None:
        ctx.alpha_cut = FuzzyContour(ctx.contour, "salient points")
        return
    ctx.alpha_cut = select_alpha_cut(ctx.saliency, ctx.config.alpha_cut)
