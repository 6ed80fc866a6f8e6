"""Membership functions used as fuzzy quantifiers.

Pure value functions; no membership-function objects.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from fuzzyshape.errors import ConstructionError


def trapezoid(x: ArrayLike, a: float, b: float, c: float, d: float) -> NDArray[np.float64]:
    """Trapezoid rising on [a, b], flat to c, falling on [c, d].

    A degenerate edge (a == b or c == d) becomes a step.
    """
    if not (a <= b <= c <= d):
        raise ConstructionError(f"Trapezoid needs a <= b <= c <= d, got ({a}, {b}, {c}, {d})")
    x = np.asarray(x, dtype=np.float64)
    if b > a:
        rise = np.clip((x - a) / (b - a), 0.0, 1.0)
    else:
        rise = (x >= a).astype(np.float64)
    if d > c:
        fall = np.clip((d - x) / (d - c), 0.0, 1.0)
    else:
        fall = (x <= d).astype(np.float64)
    return np.minimum(rise, fall)


def triangular(x: ArrayLike, a: float, b: float, c: float) -> NDArray[np.float64]:
    """Triangle with feet at a and c and peak at b."""
    return trapezoid(x, a, b, b, c)


def enough(x: ArrayLike, alpha: float, beta: float) -> NDArray[np.float64]:
    """Enough quantifier: 0 below alpha, 1 above beta, linear between."""
    if not alpha < beta:
        raise ConstructionError(f"'enough' needs alpha < beta, got alpha={alpha}, beta={beta}")
    x = np.asarray(x, dtype=np.float64)
    return np.clip((x - alpha) / (beta - alpha), 0.0, 1.0)


def almost_all(count: ArrayLike, gamma: float) -> NDArray[np.float64]:
    """Almost-all quantifier over a count of violators: triangular (0, 0, gamma)."""
    if gamma <= 0:
        raise ConstructionError(f"'almost all' needs gamma > 0, got {gamma}")
    return triangular(count, 0.0, 0.0, gamma)
