"""Alpha-cut segmenter: one representative point per arc of high saliency."""

from __future__ import annotations

import numpy as np

from fuzzyshape.errors import ConstructionError
from fuzzyshape.fuzzy.fuzzy_contour import FuzzyContour


def select_alpha_cut(fuzzy: FuzzyContour, alpha: float) -> FuzzyContour:
    """Centre point of every maximal run of members with degree >= alpha.

    Members are walked circularly in insertion order. The scan starts just
    after a point below ``alpha`` so a run crossing the end of the sequence
    is seen once; if every member qualifies the whole loop is a single run.
    Each selected point carries the degree of the centre member itself, not
    the degree of the first member of its run.
    """
    if not 0.0 < alpha <= 1.0:
        raise ConstructionError(f"Alpha must lie in (0, 1], got {alpha}")

    selected = FuzzyContour(fuzzy.contour, "salient points")
    degrees = fuzzy.degrees()
    indices = fuzzy.indices()
    n = len(degrees)
    if n == 0:
        return selected

    inside = degrees >= alpha
    if not inside.any():
        return selected
    if inside.all():
        centre = n // 2
        selected.add(int(indices[centre]), float(degrees[centre]))
        return selected

    # First qualifying position after a non-qualifying one
    start = (int(np.flatnonzero(~inside)[-1]) + 1) % n
    i = 0
    while i < n:
        pos = (start + i) % n
        if not inside[pos]:
            i += 1
            continue
        length = 1
        while i + length < n and inside[(start + i + length) % n]:
            length += 1
        centre = (pos + length // 2) % n
        selected.add(int(indices[centre]), float(degrees[centre]))
        i += length
    return selected
