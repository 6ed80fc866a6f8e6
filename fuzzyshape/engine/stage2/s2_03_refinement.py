"""S2.03 — Coarse-to-fine refinement of salient points by chord error."""

from __future__ import annotations

from fuzzyshape.engine.context import ShapeContext
from fuzzyshape.engine.registry import Phase, stage
from fuzzyshape.shape.multiscale import refine_all


@stage(
    id="S2.03",
    phase=Phase.MULTISCALE,
    dependencies=["S2.02"],
    description="Refine coarse salient points where chords fit poorly",
)
def refinement(ctx: ShapeContext) -> None:
    if len(ctx.trajectories) != len(ctx.scale_levels):
        ctx.refined_indices = []
        return
    ctx.refined_indices = refine_all(
        ctx.contour, ctx.scale_levels, ctx.trajectories, ctx.config.chord_threshold
    )
