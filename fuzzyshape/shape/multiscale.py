"""Multi-scale salient point selection.

The contour is smoothed at a geometric progression of scales. Salient points
found at the coarsest scale are kept where the chord between consecutive ones
fits the original contour; where it does not, the arc is refined with the
next finer scale. Every point is carried back to the original contour along
a chain of nearest-neighbour trajectory maps. A final simplification pass
removes points whose neighbours already describe the contour well enough.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from fuzzyshape.engine.config import SalienceConfig
from fuzzyshape.fuzzy.fuzzy_contour import FuzzyContour
from fuzzyshape.shape.alpha_cut import select_alpha_cut
from fuzzyshape.shape.contour import Contour
from fuzzyshape.shape.saliency import saliency_contour
from fuzzyshape.shape.smoothing import smooth_contour
from fuzzyshape.utils.geometry import chord_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScaleLevel:
    """Analysis of the contour smoothed at one scale."""

    sigma: float
    contour: Contour
    saliency: FuzzyContour
    salient: FuzzyContour

    @property
    def indices(self) -> NDArray[np.int64]:
        """Salient point indices on this level's contour, in contour order."""
        return np.sort(self.salient.indices())


def scale_sequence(
    n: int,
    sigma0: float = 2.0,
    factor: float = 2.0,
    max_sigma: float = 45.0,
    max_sigma_ratio: float = 0.1,
) -> list[float]:
    """sigma0, sigma0*factor, ... strictly below min(max_sigma, max_sigma_ratio * n).

    Always holds at least sigma0.
    """
    cap = min(max_sigma, max_sigma_ratio * n)
    sigmas: list[float] = []
    sigma = sigma0
    while sigma < cap:
        sigmas.append(sigma)
        sigma *= factor
    return sigmas or [sigma0]


def analyze_scale(contour: Contour, sigma: float, config: SalienceConfig) -> ScaleLevel:
    smoothed = smooth_contour(contour, sigma)
    saliency = saliency_contour(smoothed, config)
    salient = select_alpha_cut(saliency, config.alpha_cut)
    logger.debug("Scale sigma=%.2f: %d salient points", sigma, len(salient))
    return ScaleLevel(sigma=sigma, contour=smoothed, saliency=saliency, salient=salient)


def build_scale_space(contour: Contour, config: SalienceConfig) -> tuple[ScaleLevel, ...]:
    """One ScaleLevel per sigma, ordered fine -> coarse."""
    if contour.is_empty:
        return ()
    sigmas = scale_sequence(
        len(contour),
        config.sigma0,
        config.sigma_factor,
        config.max_sigma,
        config.max_sigma_ratio,
    )
    if config.max_workers > 1 and len(sigmas) > 1:
        with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
            futures = {s: pool.submit(analyze_scale, contour, s, config) for s in sigmas}
            by_sigma = {s: f.result() for s, f in futures.items()}
    else:
        by_sigma = {s: analyze_scale(contour, s, config) for s in sigmas}
    return tuple(by_sigma[s] for s in sorted(by_sigma))


def build_trajectories(
    contour: Contour, levels: tuple[ScaleLevel, ...]
) -> tuple[NDArray[np.int64], ...]:
    """Trajectory maps, one per level.

    ``maps[k][i]`` is the index of the point nearest to point i of level k on
    the next finer contour (level k - 1, or the original contour for k = 0).
    """
    maps = []
    finer = contour
    for level in levels:
        maps.append(finer.nearest_indices(level.contour.points))
        finer = level.contour
    return tuple(maps)


def to_original(k: int, index: int, trajectories: tuple[NDArray[np.int64], ...]) -> int:
    """Follow the trajectory chain from level ``k`` down to the original contour."""
    for j in range(k, -1, -1):
        index = int(trajectories[j][index])
    return index


def arc_error(contour: Contour, start: int, end: int) -> float:
    """Chord error of the contour arc walked forward from start to end."""
    pts = contour.arc(start, end, loop=start == end)
    return chord_error(contour.points[start], contour.points[end], pts)


def refine(
    contour: Contour,
    levels: tuple[ScaleLevel, ...],
    trajectories: tuple[NDArray[np.int64], ...],
    start: int,
    end: int,
    remaining: tuple[int, ...],
    threshold: float,
) -> frozenset[int]:
    """Salient points of the original arc start -> end, refined scale by scale.

    ``remaining`` holds level positions ordered fine -> coarse; the coarsest
    one is consulted first. Returned indices refer to the original contour.
    """
    if not remaining:
        return frozenset((start, end))

    k = remaining[-1]
    rest = remaining[:-1]
    level = levels[k]

    level_index = level.contour.index
    s_k = level.contour.nearest_index(contour.points[start])
    e_k = level.contour.nearest_index(contour.points[end])
    on_arc = [int(i) for i in level.indices if level_index.between(s_k, e_k, int(i))]

    orig_index = contour.index
    interior = {to_original(k, i, trajectories) for i in on_arc}
    interior = sorted(
        (i for i in interior if orig_index.between(start, end, i)),
        key=lambda i: orig_index.forward_distance(start, i),
    )
    if not interior:
        return refine(contour, levels, trajectories, start, end, rest, threshold)

    sequence = [start, *interior, end]
    accepted: set[int] = set()
    for p, q in zip(sequence, sequence[1:]):
        if arc_error(contour, p, q) > threshold:
            accepted |= refine(contour, levels, trajectories, p, q, rest, threshold)
        else:
            accepted.update((p, q))
    return frozenset(accepted)


def refine_all(
    contour: Contour,
    levels: tuple[ScaleLevel, ...],
    trajectories: tuple[NDArray[np.int64], ...],
    threshold: float,
) -> list[int]:
    """Top-level refinement over the whole contour, starting at the coarsest level
    that has salient points. Returns original indices in contour order."""
    remaining = tuple(range(len(levels)))
    while remaining and len(levels[remaining[-1]].indices) == 0:
        remaining = remaining[:-1]
    if not remaining:
        return []

    k = remaining[-1]
    rest = remaining[:-1]
    anchors = sorted({to_original(k, int(i), trajectories) for i in levels[k].indices})

    accepted: set[int] = set()
    pairs = zip(anchors, anchors[1:] + anchors[:1])
    for p, q in pairs:
        if arc_error(contour, p, q) > threshold:
            accepted |= refine(contour, levels, trajectories, p, q, rest, threshold)
        else:
            accepted.update((p, q))
    return sorted(accepted)


def simplify(contour: Contour, indices, threshold: float) -> list[int]:
    """Greedily drop the point whose neighbours' chord fits best, while it fits.

    The chord error of removing point j is that of the arc from its
    predecessor to its successor. Stops when no removal stays within
    ``threshold`` or two points remain.
    """
    points = sorted({int(i) for i in indices})
    while len(points) > 2:
        m = len(points)
        errors = [
            arc_error(contour, points[j - 1], points[(j + 1) % m]) for j in range(m)
        ]
        j = int(np.argmin(errors))
        if errors[j] > threshold:
            break
        del points[j]
    return points


def salient_fuzzy_contour(
    contour: Contour, levels: tuple[ScaleLevel, ...], indices
) -> FuzzyContour:
    """Selected points on the original contour, with the finest scale's saliency."""
    result = FuzzyContour(contour, "multi-scale salient points")
    if not levels:
        return result
    finest = levels[0].saliency
    for i in sorted(int(i) for i in indices):
        result.add(i, finest.degree_at(i))
    return result


class MultiScaleSelector:
    """Salient point selection across scales, with final simplification."""

    def __init__(self, config: SalienceConfig | None = None) -> None:
        self.config = config or SalienceConfig()

    def select(self, contour: Contour) -> FuzzyContour:
        if contour.is_empty:
            return FuzzyContour(contour, "multi-scale salient points")
        levels = build_scale_space(contour, self.config)
        trajectories = build_trajectories(contour, levels)
        refined = refine_all(contour, levels, trajectories, self.config.chord_threshold)
        kept = simplify(contour, refined, self.config.chord_threshold)
        logger.debug(
            "Multi-scale selection over %d scales: %d refined, %d kept",
            len(levels),
            len(refined),
            len(kept),
        )
        return salient_fuzzy_contour(contour, levels, kept)
