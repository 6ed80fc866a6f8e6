"""S2.04 — Drop refined points whose neighbours' chord already fits."""

from __future__ import annotations

from fuzzyshape.engine.context import ShapeContext
from fuzzyshape.engine.registry import Phase, stage
from fuzzyshape.shape.multiscale import salient_fuzzy_contour, simplify


@stage(
    id="S2.04",
    phase=Phase.MULTISCALE,
    dependencies=["S2.03"],
    description="Simplify the refined salient point set",
)
def simplify_points(ctx: ShapeContext) -> None:
    ctx.salient_indices = simplify(ctx.contour, ctx.refined_indices, ctx.config.chord_threshold)
    ctx.salient_points = salient_fuzzy_contour(ctx.contour, ctx.scale_levels, ctx.salient_indices)
