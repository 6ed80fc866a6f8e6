"""S2.05 — Segmentation between consecutive multi-scale salient points."""

from __future__ import annotations

from fuzzyshape.engine.context import ShapeContext
from fuzzyshape.engine.registry import Phase, stage
from fuzzyshape.shape.segmentation import segment_by_points


@stage(
    id="S2.05",
    phase=Phase.MULTISCALE,
    dependencies=["S2.04"],
    description="One segment per pair of consecutive salient points",
)
def salient_segmentation(ctx: ShapeContext) -> None:
    ctx.segmentation = segment_by_points(ctx.contour, ctx.salient_indices)
