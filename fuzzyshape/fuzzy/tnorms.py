"""Triangular norms (fuzzy conjunctions).

All operate element-wise on scalars or numpy arrays with values in [0, 1].
"""

from __future__ import annotations

import enum
from typing import Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from fuzzyshape.errors import ConstructionError

TNormFn = Callable[[ArrayLike, ArrayLike], NDArray[np.float64]]


class TNorm(str, enum.Enum):
    PRODUCT = "product"
    MINIMUM = "minimum"
    LUKASIEWICZ = "lukasiewicz"
    DRASTIC = "drastic"
    HAMACHER = "hamacher"


def product(a: ArrayLike, b: ArrayLike) -> NDArray[np.float64]:
    return np.asarray(a, dtype=np.float64) * np.asarray(b, dtype=np.float64)


def minimum(a: ArrayLike, b: ArrayLike) -> NDArray[np.float64]:
    return np.minimum(np.asarray(a, dtype=np.float64), np.asarray(b, dtype=np.float64))


def lukasiewicz(a: ArrayLike, b: ArrayLike) -> NDArray[np.float64]:
    return np.maximum(0.0, np.asarray(a, dtype=np.float64) + np.asarray(b, dtype=np.float64) - 1.0)


def drastic(a: ArrayLike, b: ArrayLike) -> NDArray[np.float64]:
    """b where a == 1, a where b == 1, else 0."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    return np.where(a == 1.0, b, np.where(b == 1.0, a, 0.0))


def hamacher(a: ArrayLike, b: ArrayLike) -> NDArray[np.float64]:
    """Hamacher product ab / (a + b - ab); 0 when both are 0."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    denom = a + b - a * b
    safe = np.where(denom > 0, denom, 1.0)
    return np.where(denom > 0, a * b / safe, 0.0)


_TNORMS: dict[TNorm, TNormFn] = {
    TNorm.PRODUCT: product,
    TNorm.MINIMUM: minimum,
    TNorm.LUKASIEWICZ: lukasiewicz,
    TNorm.DRASTIC: drastic,
    TNorm.HAMACHER: hamacher,
}


def get_tnorm(name: str | TNorm) -> TNormFn:
    try:
        return _TNORMS[TNorm(name)]
    except ValueError:
        valid = ", ".join(t.value for t in TNorm)
        raise ConstructionError(f"Unknown T-norm {name!r} (expected one of: {valid})") from None
