"""Triangular meshes: templates built from nodes and triangular facets."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np

from deformesh.facet import Facet
from deformesh.node import Node
from deformesh.template import Template, _is_bad

SEARCH_DISTANCE = 100.0
PROJECTION_TOLERANCE = 1e-1

Barycentric = tuple[float, float, float]


def regular_triangulation(rows: int, cols: int) -> list[tuple[int, int, int]]:
    """Facets of a regular grid of ``rows`` by ``cols`` nodes.

    Node ``i + cols * j`` is the ``i``-th node of the ``j``-th line; every
    grid cell is split into two triangles.
    """
    facets: list[tuple[int, int, int]] = []
    for j in range(cols - 1):
        for i in range(rows - 1):
            here = i + cols * j
            below = cols * (j + 1) + i
            facets.append((here, here + 1, below))
            facets.append((here + 1, below, below + 1))
    return facets


def point_in_triangle(
    query: Sequence[float],
    vertex0: Sequence[float],
    vertex1: Sequence[float],
    vertex2: Sequence[float],
) -> Barycentric | None:
    """Barycentric coordinates of ``query`` projected onto the triangle.

    Returns None when the point lies too far from the triangle's plane or
    its projection falls outside the triangle.
    """
    p = np.asarray(query, dtype=float)
    p0 = np.asarray(vertex0, dtype=float)
    p1 = np.asarray(vertex1, dtype=float)
    p2 = np.asarray(vertex2, dtype=float)
    u = p1 - p0
    v = p2 - p0
    n = np.cross(u, v)
    w = p - p0
    with np.errstate(divide="ignore", invalid="ignore"):
        nn = np.dot(n, n)
        gamma = np.dot(np.cross(u, w), n) / nn
        beta = np.dot(np.cross(w, v), n) / nn
    alpha = 1.0 - gamma - beta
    projected = p0 * alpha + p1 * beta + p2 * gamma
    error = float(np.sum((projected - p) ** 2))
    if error > PROJECTION_TOLERANCE:
        return None
    inside = 0 <= alpha <= 1 and 0 <= beta <= 1 and 0 <= gamma <= 1
    if not inside:
        return None
    return (float(alpha), float(beta), float(gamma))


def _world_position(point: Any) -> np.ndarray:
    value = getattr(point, "world_position", point)
    if callable(value):
        value = value()
    return np.asarray(value, dtype=float).reshape(3)


def _facet_key(facet: Facet) -> tuple[int, ...]:
    return tuple(node.index for node in facet.node_array)


class TriangularMesh(Template):
    """A template whose surface is a set of triangular facets.

    Built from an explicit list of vertices and triangles, the last vertex
    row is not used as a node.
    """

    def __init__(
        self,
        vertices: Iterable[Sequence[float]],
        indices: Iterable[Sequence[int]],
        map: Any,
    ) -> None:
        super().__init__(map)
        self.embeddings: dict[Any, tuple[Facet, Barycentric]] = {}
        nodes = self._create_nodes(list(vertices)[:-1])
        self.node_array.extend(nodes)
        self._create_facets(nodes, indices)
        self._post_build()

    @classmethod
    def from_surface(
        cls,
        vertices: Iterable[Sequence[float]],
        rows: int,
        cols: int,
        map_points: Iterable[Any],
        map: Any,
        keyframe: Any,
    ) -> TriangularMesh:
        """Build a regular mesh over a surface sampled as a ``rows`` x ``cols`` grid.

        ``vertices`` are the grid nodes in world coordinates. The map points
        are embedded in the facets that contain them.
        """
        positions = list(vertices)
        if len(positions) != rows * cols:
            raise ValueError(
                f"expected {rows * cols} vertices for a {rows}x{cols} grid, got {len(positions)}"
            )
        mesh = cls.__new__(cls)
        Template.__init__(mesh, map, map_points, keyframe)
        mesh.embeddings = {}
        nodes = mesh._create_nodes(positions)
        mesh._create_facets(nodes, regular_triangulation(rows, cols))
        mesh._embed_map_points()
        mesh._post_build()
        return mesh

    def _post_build(self) -> None:
        """Hook run once the mesh has been built."""

    def _create_nodes(self, positions: Sequence[Sequence[float]]) -> list[Node]:
        nodes = []
        for index, vertex in enumerate(positions):
            node = Node(vertex[0], vertex[1], vertex[2], index, self)
            self.add_node(node)
            nodes.append(node)
            self.num_vertices += 1
        return nodes

    def _create_facets(self, nodes: Sequence[Node], indices: Iterable[Sequence[int]]) -> None:
        for triangle in indices:
            corners = [int(triangle[k]) for k in range(3)]
            for corner in corners:
                if not 0 <= corner < len(nodes):
                    raise IndexError(f"facet refers to missing vertex {corner}")
            self.add_facet(Facet(*(nodes[c] for c in corners), self))

    def locate_point(self, point: Sequence[float]) -> tuple[Facet, Barycentric] | None:
        """Facet containing ``point`` and its barycentric coordinates there.

        Only the facets around the node closest to the point are tried.
        """
        query = np.asarray(point, dtype=float).reshape(3)
        closest: Node | None = None
        best = SEARCH_DISTANCE
        for node in sorted(self.nodes, key=lambda n: n.index):
            distance = float(np.linalg.norm(np.asarray(node.position) - query))
            if distance < best:
                closest = node
                best = distance
        if closest is None:
            return None
        for facet in sorted(closest.facets, key=_facet_key):
            corners = [node.position for node in facet.node_array]
            barycentric = point_in_triangle(query, *corners)
            if barycentric is not None:
                return facet, barycentric
        return None

    def _embed_map_points(self) -> None:
        for point in self.points:
            if point is None or _is_bad(point):
                continue
            found = self.locate_point(_world_position(point))
            if found is not None:
                facet, _ = found
                self.embeddings[point] = found
                facet.add_map_point(point)

    def compute_facet_textures(self, keyframe: Any, pose: Any, camera_matrix: Any) -> int:
        """Take each facet's texture from the keyframe; returns how many were textured."""
        return sum(
            facet.compute_texture_coordinates(keyframe, pose, camera_matrix)
            for facet in self.facets
        )