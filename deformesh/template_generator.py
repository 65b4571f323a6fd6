"""Factories for the templates used by the deformable mapping."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from deformesh.laplacian_mesh import LaplacianMesh


def load_laplacian_mesh(
    vertices: Iterable[Sequence[float]],
    indices: Iterable[Sequence[int]],
    map: Any,
) -> LaplacianMesh:
    """Load a Laplacian mesh from explicit vertices and triangles.

    Used for shape-from-template. As with any mesh built from explicit
    vertices, the last vertex row is not turned into a node.
    """
    return LaplacianMesh(vertices, indices, map)


def create_laplacian_mesh(
    vertices: Iterable[Sequence[float]],
    rows: int,
    cols: int,
    map_points: Iterable[Any],
    map: Any,
    keyframe: Any,
) -> LaplacianMesh:
    """Create a Laplacian mesh over a keyframe's surface sampled on a grid.

    ``vertices`` are the ``rows`` x ``cols`` grid nodes in world coordinates;
    the map points are embedded in the facets that contain them.
    """
    return LaplacianMesh.from_surface(vertices, rows, cols, map_points, map, keyframe)