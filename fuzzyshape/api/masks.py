"""Mask decoding shared by the endpoints."""

from __future__ import annotations

import numpy as np
from fastapi import HTTPException

from fuzzyshape.config import Settings


def decode_mask(rows: list[list[int]], settings: Settings) -> np.ndarray:
    mask = np.asarray(rows, dtype=np.uint8)
    if mask.size > settings.max_mask_pixels:
        raise HTTPException(
            status_code=422,
            detail=f"Mask has {mask.size} pixels; the limit is {settings.max_mask_pixels}",
        )
    return mask
