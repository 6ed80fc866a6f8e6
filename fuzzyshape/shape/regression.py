"""Orthogonal (total least squares) line regression over point windows.

All functions are vectorised over a batch of windows shaped (m, w, 2). A line
is stored as a unit normal (a, b) plus offset c, i.e. a*x + b*y + c = 0.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

# Below this the scatter matrix has no preferred axis
_DEGENERATE_DELTA = 1e-5


def fit_lines(
    windows: NDArray[np.float64],
) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
    """Fit one orthogonal-regression line per window.

    The normal is the eigenvector of the smaller eigenvalue of the 2x2 central
    moment matrix, from the closed-form characteristic solution. Windows with
    no dominant direction fall back to a horizontal line when Syy < Sxx and a
    vertical one otherwise.

    Returns (normals (m, 2), offsets (m,), centroids (m, 2)).
    """
    centroids = windows.mean(axis=1)
    dev = windows - centroids[:, None, :]
    sxx = np.sum(dev[..., 0] ** 2, axis=1)
    syy = np.sum(dev[..., 1] ** 2, axis=1)
    sxy = np.sum(dev[..., 0] * dev[..., 1], axis=1)

    half_trace = (sxx + syy) / 2.0
    det = sxx * syy - sxy * sxy
    lam = half_trace - np.sqrt(np.maximum(half_trace * half_trace - det, 0.0))
    delta = np.sqrt(sxy * sxy + (lam - syy) ** 2)

    ok = delta > _DEGENERATE_DELTA
    safe = np.where(ok, delta, 1.0)
    a = np.where(ok, (lam - syy) / safe, np.where(syy < sxx, 0.0, 1.0))
    b = np.where(ok, sxy / safe, np.where(syy < sxx, 1.0, 0.0))

    normals = np.column_stack([a, b])
    offsets = -(a * centroids[:, 0] + b * centroids[:, 1])
    return normals, offsets, centroids


def project(
    points: NDArray[np.float64],
    normals: NDArray[np.float64],
    offsets: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Orthogonal projection of points (m, k, 2) onto the m lines."""
    signed = np.einsum("mkj,mj->mk", points, normals) + offsets[:, None]
    return points - signed[..., None] * normals[:, None, :]


def fit_quality(windows: NDArray[np.float64]) -> NDArray[np.float64]:
    """1 - (sum of perpendicular residuals / sum of distances to the centroid).

    1 means the window is perfectly straight; windows collapsed onto a single
    point count as straight.
    """
    normals, offsets, centroids = fit_lines(windows)
    residual = np.abs(np.einsum("mkj,mj->mk", windows, normals) + offsets[:, None]).sum(axis=1)
    spread = np.linalg.norm(windows - centroids[:, None, :], axis=2).sum(axis=1)
    quality = np.ones(len(windows))
    nz = spread > 1e-12
    quality[nz] = 1.0 - residual[nz] / spread[nz]
    return np.clip(quality, 0.0, 1.0)


def direction_vectors(
    windows: NDArray[np.float64],
    anchors: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Unit vectors pointing from each projected anchor to its window's mean projection.

    The mean of the projections is the centroid itself, since the fitted line
    passes through it. A zero-length result falls back to the line direction.
    """
    normals, offsets, centroids = fit_lines(windows)
    anchor_proj = project(anchors[:, None, :], normals, offsets)[:, 0, :]
    vec = centroids - anchor_proj
    norm = np.linalg.norm(vec, axis=1)
    along = np.column_stack([-normals[:, 1], normals[:, 0]])
    small = norm < 1e-12
    vec[small] = along[small]
    norm[small] = 1.0
    return vec / norm[:, None]
