"""POST /api/contour — boundary tracing only."""

from __future__ import annotations

import asyncio
from functools import partial

from fastapi import APIRouter, Depends

from fuzzyshape.api.masks import decode_mask
from fuzzyshape.config import Settings
from fuzzyshape.dependencies import get_settings
from fuzzyshape.engine.context import ShapeContext
from fuzzyshape.engine.pipeline import create_pipeline
from fuzzyshape.engine.registry import Phase
from fuzzyshape.models.requests import MaskRequest
from fuzzyshape.models.responses import ContourResponse

router = APIRouter()


@router.post("/contour", response_model=ContourResponse)
async def contour(
    request: MaskRequest, settings: Settings = Depends(get_settings)
) -> ContourResponse:
    ctx = ShapeContext(mask=decode_mask(request.mask, settings))
    pipeline = create_pipeline()
    loop = asyncio.get_running_loop()
    ctx = await loop.run_in_executor(None, partial(pipeline.run, ctx, up_to=Phase.TRACING))

    points = [(int(x), int(y)) for x, y in ctx.contour]
    return ContourResponse(
        points=points,
        count=len(points),
        clockwise=ctx.contour.is_clockwise,
        errors=ctx.errors,
    )
