"""Templates: deformable meshes of nodes, edges and facets that embed map points."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

import numpy as np

from deformesh.facet import Facet

if TYPE_CHECKING:
    from deformesh.edge import Edge
    from deformesh.node import Node

DEFAULT_EDGE_LENGTH = 0.10


def _is_bad(point: Any) -> bool:
    flag = getattr(point, "is_bad", False)
    return bool(flag()) if callable(flag) else bool(flag)


class Template:
    """A shape template for one keyframe.

    It holds the map points it embeds together with its nodes, edges and
    facets. Any representation may build on it; the only requirement is that
    it embeds map points.
    """

    def __init__(
        self,
        map: Any,
        map_points: Iterable[Any] | None = None,
        keyframe: Any = None,
    ) -> None:
        self.map = map
        self.keyframe = keyframe
        self.num_vertices = 0
        self.node_array: list[Node] = []
        self.texture: np.ndarray | None = None
        self.drawer_lock = threading.Lock()
        self._map_points: set[Any] = set()
        self._nodes: set[Node] = set()
        self._edges: set[Edge] = set()
        self._facets: set[Facet] = set()
        self._points_lock = threading.Lock()
        self._nodes_lock = threading.Lock()
        self._edges_lock = threading.Lock()
        self._facets_lock = threading.Lock()
        for point in map_points or ():
            if point is not None and not _is_bad(point):
                self.add_map_point(point)

    @property
    def points(self) -> set[Any]:
        """Map points embedded in the template."""
        with self._points_lock:
            return set(self._map_points)

    @property
    def nodes(self) -> set[Node]:
        with self._nodes_lock:
            return set(self._nodes)

    @property
    def edges(self) -> set[Edge]:
        with self._edges_lock:
            return set(self._edges)

    @property
    def facets(self) -> set[Facet]:
        with self._facets_lock:
            return set(self._facets)

    def add_map_point(self, point: Any) -> None:
        with self._points_lock:
            self._map_points.add(point)

    def erase_map_point(self, point: Any) -> None:
        with self._points_lock:
            self._map_points.discard(point)

    def add_node(self, node: Node) -> None:
        with self._nodes_lock:
            self._nodes.add(node)

    def erase_node(self, node: Node) -> None:
        with self._nodes_lock:
            self._nodes.discard(node)

    def add_facet(self, facet: Facet) -> None:
        with self._facets_lock:
            self._facets.add(facet)

    def erase_facet(self, facet: Facet) -> None:
        with self._facets_lock:
            self._facets.discard(facet)

    def add_edge(self, edge: Edge) -> None:
        with self._edges_lock:
            self._edges.add(edge)

    def erase_edge(self, edge: Edge) -> None:
        with self._edges_lock:
            self._edges.discard(edge)

    def edge_median_length(self) -> float:
        """Median rest length of the edges, or 0.10 when there are none."""
        with self._edges_lock:
            lengths = sorted(edge.initial_length for edge in self._edges)
        if not lengths:
            return DEFAULT_EDGE_LENGTH
        return lengths[len(lengths) // 2]

    def restart(self) -> None:
        """Return every node to the shape at rest."""
        for node in self.nodes:
            node.reset()

    def get_texture(self) -> np.ndarray | None:
        """A copy of the texture image, if any."""
        return None if self.texture is None else self.texture.copy()

    def release(self) -> None:
        """Detach the template from its map points and drop all mesh elements."""
        with self.drawer_lock:
            self.texture = None
            self.map = None
            with self._points_lock:
                for point in self._map_points:
                    if point is not None and not _is_bad(point):
                        detach = getattr(point, "remove_template", None)
                        if callable(detach):
                            detach()
                self._map_points.clear()
            with self._edges_lock:
                self._edges.clear()
            with self._facets_lock:
                self._facets.clear()
            with self._nodes_lock:
                self._nodes.clear()
            self.node_array.clear()
            Facet.clear_texture_dataset()