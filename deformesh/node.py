"""Mesh nodes: 3D vertices of a deformable template."""

from __future__ import annotations

import enum
import math
import threading
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from deformesh.edge import Edge


class Role(enum.IntEnum):
    """Zone of the template a node belongs to."""

    VIEWED = 0  # in a facet with observations
    LOCAL = 1  # in a facet neighbouring facets with observations
    NONOBS = 2


class Node:
    """A vertex of a template mesh, tracking its edges, facets and role."""

    def __init__(self, x: float, y: float, z: float, index: int, template: Any) -> None:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self._initial = (self.x, self.y, self.z)
        self.proju = 0.0
        self.projv = 0.0
        self.drawer_position = -1
        self.index = index
        self.template = template
        self.weights: dict[Node, float] = {}
        self.ring: dict[Node, tuple[Node, Node]] = {}
        self._edges: set[Edge] = set()
        self._facets: set[Any] = set()
        self._role = Role.NONOBS
        self._viewed = False
        self._local = False
        self._boundary = False
        self._position_lock = threading.Lock()
        self._role_lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Node(index={self.index}, x={self.x}, y={self.y}, z={self.z})"

    @property
    def edges(self) -> set[Edge]:
        """Edges that contain this node."""
        return set(self._edges)

    @property
    def facets(self) -> set[Any]:
        """Facets that contain this node."""
        return set(self._facets)

    @property
    def position(self) -> tuple[float, float, float]:
        """Current 3D position."""
        with self._position_lock:
            return (self.x, self.y, self.z)

    @property
    def initial_position(self) -> tuple[float, float, float]:
        """Shape-at-rest 3D position."""
        return self._initial

    @property
    def role(self) -> Role:
        with self._role_lock:
            return self._role

    @property
    def viewed(self) -> bool:
        """Whether the node was in the viewed zone at the last update."""
        with self._role_lock:
            return self._viewed

    @property
    def local(self) -> bool:
        """Whether the node was in the local zone at the last update."""
        with self._role_lock:
            return self._local

    @property
    def boundary(self) -> bool:
        """Whether the node lies on the mesh boundary."""
        return self._boundary

    def add_edge(self, edge: Edge) -> None:
        self._edges.add(edge)

    def erase_edge(self, edge: Edge) -> None:
        self._edges.discard(edge)

    def add_facet(self, facet: Any) -> None:
        self._facets.add(facet)

    def erase_facet(self, facet: Any) -> None:
        self._facets.discard(facet)

    def distance_to(self, other: Node) -> float:
        """Euclidean distance to another node's current position."""
        return math.sqrt(
            (self.x - other.x) ** 2 + (self.y - other.y) ** 2 + (self.z - other.z) ** 2
        )

    def no_facets(self) -> bool:
        return not self._facets

    def set_bad_flag(self) -> None:
        """Remove this node from its template and drop its edges."""
        self.template.erase_node(self)
        for edge in list(self._edges):
            edge.set_bad_flag()

    def neighbours(self) -> set[Node]:
        """Nodes connected to this one by an edge."""
        return {
            node for edge in self._edges for node in edge.node_set if node is not self
        }

    def set_viewed(self) -> None:
        with self._role_lock:
            self._role = Role.VIEWED

    def set_local(self) -> None:
        """Mark as local unless already viewed."""
        with self._role_lock:
            if self._role != Role.VIEWED:
                self._role = Role.LOCAL

    def reset_role(self) -> None:
        with self._role_lock:
            self._role = Role.NONOBS

    def update(self) -> None:
        """Refresh the viewed and local flags from the current role."""
        with self._role_lock:
            self._viewed = self._role == Role.VIEWED
            self._local = self._role == Role.LOCAL

    def reset(self) -> None:
        """Return the node to its shape-at-rest position."""
        with self._position_lock:
            self.x, self.y, self.z = self._initial

    def set_position(self, x: float, y: float, z: float) -> None:
        with self._position_lock:
            self.x = float(x)
            self.y = float(y)
            self.z = float(z)

    def set_boundary(self) -> None:
        self._boundary = True