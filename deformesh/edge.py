"""Mesh edges linking two nodes of a template."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from deformesh.node import Node


class Edge:
    """An edge between two nodes, remembering its length at rest.

    On construction the edge registers itself with the template and both
    nodes, unless the template already holds an edge between the same nodes;
    in that case ``registered`` is False and the edge is left detached.
    """

    def __init__(self, node1: Node, node2: Node, facet: Any, template: Any) -> None:
        self._nodes = (node1, node2)
        self._node_set = frozenset(self._nodes)
        self._facets: set[Any] = set()
        self.template: Any = None
        self.initial_length: float | None = None
        self.registered = not any(edge.same_nodes(self) for edge in template.edges)
        if self.registered:
            self.initial_length = node1.distance_to(node2)
            self.template = template
            template.add_edge(self)
            self.add_facet(facet)
            node1.add_edge(self)
            node2.add_edge(self)

    def __repr__(self) -> str:
        first, second = self._nodes
        return f"Edge({first.index}, {second.index})"

    @property
    def nodes(self) -> tuple[Node, Node]:
        """The two nodes, in construction order."""
        return self._nodes

    @property
    def node_set(self) -> frozenset[Node]:
        return self._node_set

    @property
    def facets(self) -> set[Any]:
        """Facets split by this edge."""
        return set(self._facets)

    def pair_indices(self) -> tuple[int, int]:
        """Optimisation indices of the two nodes."""
        first, second = self._nodes
        return (first.index, second.index)

    def add_facet(self, facet: Any) -> None:
        self._facets.add(facet)

    def erase_facet(self, facet: Any) -> None:
        self._facets.discard(facet)

    def no_facets(self) -> bool:
        return not self._facets

    def set_bad_flag(self) -> None:
        """Remove this edge from its template and from its nodes."""
        if self.template is not None:
            self.template.erase_edge(self)
        for node in self._node_set:
            node.erase_edge(self)

    def same_nodes(self, other: Edge) -> bool:
        """Whether ``other`` links the same two nodes."""
        return self.links(*other._nodes)

    def links(self, node1: Node, node2: Node) -> bool:
        """Whether this edge links ``node1`` and ``node2``."""
        first, second = self._nodes
        return (first is node1 or first is node2) and (second is node1 or second is node2)