"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    stages_registered: int = 0


class ContourResponse(BaseModel):
    points: list[tuple[int, int]] = Field(default_factory=list)
    count: int = 0
    clockwise: bool = False
    errors: dict[str, str] = Field(default_factory=dict)


class SalientPoint(BaseModel):
    index: int
    x: float
    y: float
    degree: float
    curvature: float | None = None


class SalienceResponse(BaseModel):
    points: list[SalientPoint] = Field(default_factory=list)
    # Crisp local maxima of the single-scale curvature, degree 1
    curvature_maxima: list[SalientPoint] = Field(default_factory=list)
    contour_length: int = 0
    sigmas: list[float] = Field(default_factory=list)
    processing_time_ms: float = 0.0
    stages_completed: int = 0
    stages_failed: int = 0
    errors: dict[str, str] = Field(default_factory=dict)
