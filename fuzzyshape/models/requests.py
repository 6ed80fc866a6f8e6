"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class MaskRequest(BaseModel):
    mask: list[list[int]] = Field(..., description="Binary mask as rows of 0/1 values")

    @field_validator("mask")
    @classmethod
    def _rectangular_binary(cls, mask: list[list[int]]) -> list[list[int]]:
        if not mask or not mask[0]:
            raise ValueError("mask must have at least one row and one column")
        width = len(mask[0])
        if any(len(row) != width for row in mask):
            raise ValueError("all mask rows must have the same length")
        if any(v not in (0, 1) for row in mask for v in row):
            raise ValueError("mask values must be 0 or 1")
        return mask


class SalienceOverrides(BaseModel):
    """Optional overrides of the salience configuration; unset fields keep defaults."""

    window_ratio: float | None = None
    offset: int | None = None
    curvature_method: str | None = None
    inflection_sigma: float | None = None
    sigma0: float | None = None
    sigma_factor: float | None = None
    max_sigma: float | None = None
    max_sigma_ratio: float | None = None
    alpha_cut: float | None = None
    chord_threshold: float | None = None
    tnorm: str | None = None
    enough_alpha: float | None = None
    enough_beta: float | None = None
    almost_all_gamma: float | None = None
    linearity_exponent: float | None = None
    window_size_maxima: int | None = None
    arc_angle: float | None = None
    verticity_min: float | None = None
    verticity_max: float | None = None
    max_workers: int | None = Field(default=None, le=8)


class SalienceRequest(MaskRequest):
    config: SalienceOverrides = Field(default_factory=SalienceOverrides)
