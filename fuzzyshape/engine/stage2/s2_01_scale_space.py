"""S2.01 — Scale space: smoothing, saliency and alpha cut at every sigma."""

from __future__ import annotations

from fuzzyshape.engine.context import ShapeContext
from fuzzyshape.engine.registry import Phase, stage
from fuzzyshape.shape.multiscale import build_scale_space


@stage(
    id="S2.01",
    phase=Phase.MULTISCALE,
    dependencies=["S0.01"],
    description="Analyse the contour at a geometric progression of scales",
)
def scale_space(ctx: ShapeContext) -> None:
    ctx.scale_levels = build_scale_space(ctx.contour, ctx.config)
