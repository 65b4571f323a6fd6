"""Triangular facets of a template mesh."""

from __future__ import annotations

import threading
from collections import defaultdict
from typing import TYPE_CHECKING, Any, ClassVar

import numpy as np

from deformesh.edge import Edge

if TYPE_CHECKING:
    from deformesh.node import Node

IMAGE_WIDTH = 640
IMAGE_HEIGHT = 480
DEFAULT_GRAY = 0.5


class Facet:
    """A triangle of three nodes; creates the edges the template lacks."""

    textures_dataset: ClassVar[dict[Any, set[Facet]]] = defaultdict(set)

    def __init__(self, node1: Node, node2: Node, node3: Node, template: Any) -> None:
        self.template = template
        self._node_array = (node1, node2, node3)
        self._nodes = set(self._node_array)
        self._map_points: set[Any] = set()
        self._lock = threading.Lock()
        for node in self._node_array:
            node.add_facet(self)

        pairs = ((node1, node2), (node2, node3), (node1, node3))
        existing = template.edges
        for first, second in pairs:
            if not any(edge.links(first, second) for edge in existing):
                Edge(first, second, self, template)

        self.texture: tuple[Any, dict[Node, tuple[int, int]]] = (None, {})
        self.color = (DEFAULT_GRAY, DEFAULT_GRAY, DEFAULT_GRAY)

    def __repr__(self) -> str:
        return "Facet({}, {}, {})".format(*(node.index for node in self._node_array))

    @property
    def nodes(self) -> set[Node]:
        return set(self._nodes)

    @property
    def node_array(self) -> tuple[Node, Node, Node]:
        """The three nodes in construction order."""
        return self._node_array

    @property
    def map_points(self) -> set[Any]:
        """Map points observed in this facet."""
        return set(self._map_points)

    def no_observations(self) -> bool:
        return not self._map_points

    def add_map_point(self, point: Any) -> None:
        self._map_points.add(point)

    def erase_map_point(self, point: Any) -> None:
        self._map_points.discard(point)

    def set_bad_flag(self) -> None:
        """Remove the facet; nodes left without facets are removed as well."""
        self.template.erase_facet(self)
        for node in self.template.nodes:
            node.erase_facet(self)
            if node.no_facets():
                node.set_bad_flag()

    def compute_texture_coordinates(self, keyframe: Any, pose: Any, camera_matrix: Any) -> bool:
        """Project the nodes into the keyframe image with pose ``Tcw`` and ``K``.

        The facet takes its texture from the keyframe when all three
        projections fall strictly inside the image. Returns whether it did.
        """
        self.texture = (None, {})
        tcw = np.asarray(pose, dtype=float)
        k = np.asarray(camera_matrix, dtype=float)
        rotation = tcw[:3, :3]
        translation = tcw[:3, 3]

        inside = True
        points: dict[Node, tuple[int, int]] = {}
        for node in self._node_array:
            camera = rotation @ np.array(node.position, dtype=np.float32) + translation
            with np.errstate(divide="ignore", invalid="ignore"):
                u = k[0, 0] * camera[0] / camera[2] + k[0, 2]
                v = k[1, 1] * camera[1] / camera[2] + k[1, 2]
            u = float(np.float32(u))
            v = float(np.float32(v))
            node.proju = u
            node.projv = v
            if np.isfinite(u) and np.isfinite(v):
                points[node] = (round(u), round(v))
            if not (0 < u < IMAGE_WIDTH and 0 < v < IMAGE_HEIGHT):
                inside = False

        if inside:
            self.texture = (keyframe, points)
            Facet.textures_dataset[keyframe].add(self)
        return inside

    @classmethod
    def clear_texture_dataset(cls) -> None:
        """Forget which facets are textured by which keyframe."""
        cls.textures_dataset.clear()