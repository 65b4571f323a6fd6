"""Surface normal estimation for unorganised point clouds."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
from scipy.spatial import cKDTree

DEFAULT_RADIUS = 0.3
VIEWPOINT = np.zeros(3)
MIN_NEIGHBOURS = 3


def _as_cloud(points: Any) -> np.ndarray:
    cloud = np.asarray(points, dtype=float)
    if cloud.ndim == 1:
        if cloud.size % 3:
            raise ValueError(
                f"a flat point list needs a multiple of 3 values, got {cloud.size}"
            )
        return cloud.reshape(-1, 3)
    if cloud.ndim == 2 and cloud.shape[1] == 3:
        return cloud
    raise ValueError(f"points must be flat or of shape (N, 3), got shape {cloud.shape}")


def estimate_normals(
    points: Sequence[float] | Sequence[Sequence[float]] | np.ndarray,
    radius: float = DEFAULT_RADIUS,
) -> np.ndarray:
    """Estimate a unit normal for every point from its neighbours within ``radius``.

    ``points`` is either flat, ``[x0, y0, z0, x1, y1, z1, ...]``, or of shape
    (N, 3). The normal is the direction of least variance of the
    neighbourhood, oriented towards the origin. Points with fewer than three
    neighbours (themselves included) or non-finite coordinates get NaN.
    Returns an array of shape (N, 3).
    """
    if radius <= 0:
        raise ValueError(f"search radius must be positive, got {radius}")
    cloud = _as_cloud(points)
    normals = np.full(cloud.shape, np.nan)
    finite = np.all(np.isfinite(cloud), axis=1)
    positions = np.flatnonzero(finite)
    if positions.size == 0:
        return normals

    valid = cloud[finite]
    tree = cKDTree(valid)
    for row, point in zip(positions, valid):
        neighbours = tree.query_ball_point(point, radius)
        if len(neighbours) < MIN_NEIGHBOURS:
            continue
        patch = valid[neighbours]
        centred = patch - patch.mean(axis=0)
        covariance = centred.T @ centred / len(patch)
        _, vectors = np.linalg.eigh(covariance)
        normal = vectors[:, 0]
        if np.dot(VIEWPOINT - point, normal) < 0:
            normal = -normal
        normals[row] = normal
    return normals