"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from fuzzyshape.api import contour, health, salience

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(contour.router)
api_router.include_router(salience.router)
