"""S2.02 — Nearest-neighbour trajectory maps between adjacent scales."""

from __future__ import annotations

from fuzzyshape.engine.context import ShapeContext
from fuzzyshape.engine.registry import Phase, stage
from fuzzyshape.shape.multiscale import build_trajectories


@stage(
    id="S2.02",
    phase=Phase.MULTISCALE,
    dependencies=["S2.01"],
    description="Link every coarse-scale point to the next finer contour",
)
def trajectories(ctx: ShapeContext) -> None:
    ctx.trajectories = build_trajectories(ctx.contour, ctx.scale_levels)
