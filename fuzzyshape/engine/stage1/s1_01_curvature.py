"""S1.01 — Curvature profile along the traced contour (positive = convex)."""

from __future__ import annotations

from fuzzyshape.engine.context import ShapeContext
from fuzzyshape.engine.registry import Phase, stage
from fuzzyshape.shape.curvature import estimate_curvature


@stage(
    id="S1.01",
    phase=Phase.CONTOUR_ANALYSIS,
    dependencies=["S0.01"],
    description="Estimate signed curvature by local line regression",
)
def curvature(ctx: ShapeContext) -> None:
    cfg = ctx.config
    ctx.curvature = estimate_curvature(
        ctx.contour,
        window=cfg.window_ratio,
        offset=cfg.offset,
        method=cfg.curvature_method,
    )
