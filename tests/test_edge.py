import pytest

from deformesh.edge import Edge
from deformesh.node import Node


class _Template:
    def __init__(self):
        self.edges = set()

    def add_edge(self, edge):
        self.edges.add(edge)

    def erase_edge(self, edge):
        self.edges.discard(edge)

    def erase_node(self, node):
        pass


@pytest.fixture
def template():
    return _Template()


@pytest.fixture
def nodes(template):
    return (
        Node(0.0, 0.0, 0.0, 10, template),
        Node(3.0, 4.0, 0.0, 11, template),
        Node(0.0, 0.0, 2.0, 12, template),
    )


def test_new_edge_registers(template, nodes):
    a, b, _ = nodes
    facet = object()
    edge = Edge(a, b, facet, template)
    assert edge.registered
    assert template.edges == {edge}
    assert edge.facets == {facet}
    assert edge in a.edges and edge in b.edges
    assert edge.template is template
    assert edge.initial_length == a.distance_to(b)


def test_initial_length_is_rest_length(template, nodes):
    a, b, _ = nodes
    edge = Edge(a, b, object(), template)
    rest = edge.initial_length
    b.set_position(100.0, 0.0, 0.0)
    assert edge.initial_length == rest


def test_repeated_edge_not_registered(template, nodes):
    a, b, _ = nodes
    first = Edge(a, b, object(), template)
    second = Edge(b, a, object(), template)
    assert not second.registered
    assert template.edges == {first}
    assert a.edges == {first}
    assert second.template is None
    assert second.no_facets()


def test_pair_indices(template, nodes):
    a, b, _ = nodes
    edge = Edge(a, b, object(), template)
    assert edge.pair_indices() == (a.index, b.index)


def test_links_and_same_nodes(template, nodes):
    a, b, c = nodes
    ab = Edge(a, b, object(), template)
    ac = Edge(a, c, object(), template)
    assert ab.links(a, b)
    assert ab.links(b, a)
    assert not ab.links(a, c)
    assert not ab.same_nodes(ac)
    assert ab.same_nodes(ab)


def test_facets_add_erase(template, nodes):
    a, b, _ = nodes
    facet = object()
    other = object()
    edge = Edge(a, b, facet, template)
    edge.add_facet(other)
    assert edge.facets == {facet, other}
    edge.erase_facet(facet)
    edge.erase_facet(other)
    assert edge.no_facets()


def test_set_bad_flag(template, nodes):
    a, b, c = nodes
    ab = Edge(a, b, object(), template)
    bc = Edge(b, c, object(), template)
    ab.set_bad_flag()
    assert template.edges == {bc}
    assert a.edges == set()
    assert b.edges == {bc}
    assert a.neighbours() == set()


def test_node_set(template, nodes):
    a, b, _ = nodes
    edge = Edge(a, b, object(), template)
    assert edge.node_set == frozenset({a, b})
    assert edge.nodes == (a, b)