"""POST /api/salience — full pipeline: multi-scale salient points of a mask."""

from __future__ import annotations

import asyncio
import time

from fastapi import APIRouter, Depends

from fuzzyshape.api.masks import decode_mask
from fuzzyshape.config import Settings
from fuzzyshape.dependencies import get_settings
from fuzzyshape.engine.config import SalienceConfig
from fuzzyshape.engine.context import ShapeContext
from fuzzyshape.engine.pipeline import create_pipeline
from fuzzyshape.fuzzy.fuzzy_contour import FuzzyContour
from fuzzyshape.models.requests import SalienceRequest
from fuzzyshape.models.responses import SalienceResponse, SalientPoint

router = APIRouter()


def _salient_points(ctx: ShapeContext, fuzzy: FuzzyContour | None) -> list[SalientPoint]:
    if fuzzy is None:
        return []
    has_curvature = ctx.curvature is not None and len(ctx.curvature) == len(ctx.contour)
    points = []
    for index, degree in fuzzy:
        x, y = ctx.contour.point(index)
        points.append(
            SalientPoint(
                index=index,
                x=x,
                y=y,
                degree=round(degree, 4),
                curvature=round(ctx.curvature[index], 4) if has_curvature else None,
            )
        )
    return points


@router.post("/salience", response_model=SalienceResponse)
async def salience(
    request: SalienceRequest, settings: Settings = Depends(get_settings)
) -> SalienceResponse:
    start = time.perf_counter()
    # ConstructionError from invalid overrides is mapped to 422 by the app
    config = SalienceConfig().with_overrides(**request.config.model_dump())
    ctx = ShapeContext(mask=decode_mask(request.mask, settings), config=config)

    pipeline = create_pipeline()
    loop = asyncio.get_running_loop()
    ctx = await loop.run_in_executor(None, pipeline.run, ctx)

    elapsed = (time.perf_counter() - start) * 1000
    return SalienceResponse(
        points=_salient_points(ctx, ctx.salient_points),
        curvature_maxima=_salient_points(ctx, ctx.curvature_maxima),
        contour_length=ctx.num_points,
        sigmas=ctx.sigmas,
        processing_time_ms=round(elapsed, 1),
        stages_completed=len(ctx.completed_stages),
        stages_failed=len(ctx.errors),
        errors=ctx.errors,
    )
