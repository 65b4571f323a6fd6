"""Point cloud smoothing by moving least squares and radius outlier removal."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, NamedTuple

import numpy as np
from scipy.spatial import cKDTree

MIN_NEIGHBOURS_FOR_FIT = 3
MIN_NEIGHBOURS_IN_RADIUS = 20
_ORTHOGONAL_PRECISION = 1e-12


class SmoothingResult(NamedTuple):
    """Smoothed points and the input index each one comes from."""

    points: np.ndarray
    indices: list[int]


def _as_cloud(points: Any) -> np.ndarray:
    cloud = np.asarray(points, dtype=float)
    if cloud.size == 0:
        return cloud.reshape(0, 3)
    if cloud.ndim != 2 or cloud.shape[1] != 3:
        raise ValueError(f"points must have shape (N, 3), got shape {cloud.shape}")
    return cloud


def _unit_orthogonal(vector: np.ndarray) -> np.ndarray:
    x, y, z = vector
    if abs(x) > abs(z) * _ORTHOGONAL_PRECISION or abs(y) > abs(z) * _ORTHOGONAL_PRECISION:
        other = np.array([-y, x, 0.0])
    else:
        other = np.array([0.0, -z, y])
    return other / np.linalg.norm(other)


class SmootherMLS:
    """Smooths point clouds with moving least squares, or drops sparse points.

    ``polynomial_order`` is the order of the local surface fit and
    ``search_radius`` the radius of the neighbourhood used for it.
    """

    def __init__(self, polynomial_order: int = 2, search_radius: float = 0.03) -> None:
        if polynomial_order < 0:
            raise ValueError(f"polynomial order must be non-negative, got {polynomial_order}")
        if search_radius <= 0:
            raise ValueError(f"search radius must be positive, got {search_radius}")
        self.polynomial_order = polynomial_order
        self.search_radius = search_radius

    @property
    def _coefficient_count(self) -> int:
        order = self.polynomial_order
        return (order + 1) * (order + 2) // 2

    def _terms(self, u: np.ndarray, v: np.ndarray) -> np.ndarray:
        order = self.polynomial_order
        return np.array(
            [u**ui * v**vi for ui in range(order + 1) for vi in range(order + 1 - ui)]
        )

    def _project(self, point: np.ndarray, patch: np.ndarray) -> np.ndarray:
        centroid = patch.mean(axis=0)
        centred = patch - centroid
        _, vectors = np.linalg.eigh(centred.T @ centred / len(patch))
        normal = vectors[:, 0]
        projected = point - (np.dot(point, normal) - np.dot(normal, centroid)) * normal

        if len(patch) < self._coefficient_count:
            return projected

        offsets = patch - projected
        weights = np.exp(-np.sum(offsets**2, axis=1) / self.search_radius**2)
        v_axis = _unit_orthogonal(normal)
        u_axis = np.cross(normal, v_axis)
        terms = self._terms(offsets @ u_axis, offsets @ v_axis)
        heights = offsets @ normal
        weighted = terms * weights
        system = weighted @ terms.T
        rhs = weighted @ heights
        try:
            coefficients = np.linalg.solve(system, rhs)
        except np.linalg.LinAlgError:
            coefficients = np.linalg.lstsq(system, rhs, rcond=None)[0]
        return projected + coefficients[0] * normal

    def smooth_point_cloud(self, points: Sequence[Sequence[float]]) -> SmoothingResult:
        """Project each point onto a local polynomial fit of its neighbourhood.

        Points with fewer than three neighbours within the search radius
        (themselves included) are dropped; ``indices`` tells which input
        point every smoothed point comes from.
        """
        cloud = _as_cloud(points)
        if len(cloud) == 0:
            return SmoothingResult(np.empty((0, 3)), [])
        tree = cKDTree(cloud)
        smoothed: list[np.ndarray] = []
        indices: list[int] = []
        for index, point in enumerate(cloud):
            neighbours = tree.query_ball_point(point, self.search_radius)
            if len(neighbours) < MIN_NEIGHBOURS_FOR_FIT:
                continue
            smoothed.append(self._project(point, cloud[neighbours]))
            indices.append(index)
        if not smoothed:
            return SmoothingResult(np.empty((0, 3)), [])
        return SmoothingResult(np.vstack(smoothed), indices)

    def remove_outliers_radius(self, points: Sequence[Sequence[float]]) -> list[int]:
        """Indices of the points with at least 20 other points within the search radius."""
        cloud = _as_cloud(points)
        if len(cloud) == 0:
            return []
        tree = cKDTree(cloud)
        counts = tree.query_ball_point(cloud, self.search_radius, return_length=True)
        return [
            index
            for index, count in enumerate(counts)
            if count > MIN_NEIGHBOURS_IN_RADIUS
        ]