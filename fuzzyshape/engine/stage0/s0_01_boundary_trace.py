"""S0.01 — Boundary tracing.

Mask -> closed 8-connected contour of the first foreground component.
An empty mask leaves an empty contour; a lone pixel fails the stage.
"""

from __future__ import annotations

from fuzzyshape.engine.context import ShapeContext
from fuzzyshape.engine.registry import Phase, stage
from fuzzyshape.shape.tracer import trace_boundary


@stage(
    id="S0.01",
    phase=Phase.TRACING,
    description="Trace the outer boundary of the mask",
)
def boundary_trace(ctx: ShapeContext) -> None:
    if ctx.mask is None:
        return
    ctx.contour = trace_boundary(ctx.mask)
