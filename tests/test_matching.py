import pytest

from linecover.apsp import FloydWarshall
from linecover.balance import vertex_degrees
from linecover.matching import odd_vertex_matching
from linecover.network import Edge, Graph, Vertex


def _line(costs):
    vertices = [Vertex(i) for i in range(len(costs) + 1)]
    edges = [Edge(i, i + 1, service_cost=c) for i, c in enumerate(costs)]
    return Graph(vertices, edges)


def test_no_odd_vertices_gives_no_edges():
    graph = Graph(
        [Vertex(i) for i in range(3)],
        [Edge(0, 1), Edge(1, 2), Edge(2, 0)],
    )
    apsp = FloydWarshall(graph).compute()
    assert odd_vertex_matching(vertex_degrees(graph), apsp) == []


def test_path_ends_are_joined():
    graph = _line([1.0, 1.0, 1.0])
    apsp = FloydWarshall(graph).compute()
    edges = odd_vertex_matching(vertex_degrees(graph), apsp)
    assert len(edges) == graph.m
    assert edges[0].tail == 0 and edges[-1].head == 3
    for a, b in zip(edges, edges[1:]):
        assert a.head == b.tail
    assert all(not e.required for e in edges)


def test_cheapest_pairing_is_chosen():
    graph = _line([1.0, 10.0, 1.0])
    apsp = FloydWarshall(graph).compute()
    edges = odd_vertex_matching([1, 1, 1, 1], apsp)
    assert sorted((e.tail, e.head) for e in edges) == [(0, 1), (2, 3)]
    assert sum(e.cost for e in edges) == pytest.approx(apsp.cost(0, 1) + apsp.cost(2, 3))


def test_matching_makes_degrees_even():
    graph = Graph(
        [Vertex(i) for i in range(5)],
        [Edge(0, 1), Edge(0, 2), Edge(0, 3), Edge(3, 4), Edge(1, 2)],
    )
    apsp = FloydWarshall(graph).compute()
    extra = odd_vertex_matching(vertex_degrees(graph), apsp)
    graph.add_edges(extra)
    assert all(d % 2 == 0 for d in vertex_degrees(graph))


def test_odd_count_of_odd_vertices_raises():
    graph = _line([1.0, 1.0])
    apsp = FloydWarshall(graph).compute()
    with pytest.raises(ValueError):
        odd_vertex_matching([1, 1, 1], apsp)


def test_unreachable_pairs_raise():
    graph = Graph([Vertex(i) for i in range(4)], [Edge(0, 1), Edge(2, 3)])
    apsp = FloydWarshall(graph).compute()
    with pytest.raises(ValueError):
        odd_vertex_matching([1, 0, 1, 0], apsp)