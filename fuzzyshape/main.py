"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fuzzyshape.config import settings
from fuzzyshape.errors import ConstructionError

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.fuzzyshape_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="fuzzyshape",
        description="Fuzzy multi-scale salient point detection on binary shape masks",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ConstructionError)
    async def _construction_error(request: Request, exc: ConstructionError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    # Import all stage modules to trigger registration
    from fuzzyshape.engine.pipeline import register_stages

    register_stages()

    from fuzzyshape.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
