import pytest

from linecover.euler import GraphType, euler_tour
from linecover.network import Edge, Graph, Vertex


def _assert_closed_chain(tour):
    for a, b in zip(tour, tour[1:]):
        assert a.head == b.tail
    assert tour[-1].head == tour[0].tail


def _figure_eight():
    vertices = [Vertex(i) for i in range(5)]
    edges = [
        Edge(0, 1, service_cost=1.0),
        Edge(1, 2, service_cost=1.0),
        Edge(2, 0, service_cost=1.0),
        Edge(0, 3, service_cost=2.0),
        Edge(3, 4, service_cost=2.0),
        Edge(4, 0, service_cost=2.0, required=False),
    ]
    return Graph(vertices, edges)


def test_directed_cycle_tour():
    graph = Graph(
        [Vertex(i) for i in range(3)],
        [Edge(0, 1), Edge(1, 2), Edge(2, 0)],
    )
    tour = euler_tour(graph)
    assert len(tour) == graph.m
    assert tour[0].tail == graph.required[0].tail
    _assert_closed_chain(tour)


def test_figure_eight_uses_every_edge_once():
    graph = _figure_eight()
    tour = euler_tour(graph, GraphType.DIRECTED)
    assert len(tour) == len(graph.edges)
    assert sorted((e.tail, e.head) for e in tour) == sorted(
        (e.tail, e.head) for e in graph.edges
    )
    _assert_closed_chain(tour)


def test_tour_cost_equals_graph_cost():
    graph = _figure_eight()
    tour = euler_tour(graph)
    assert sum(e.cost for e in tour) == pytest.approx(graph.total_cost())


def test_unbalanced_digraph_raises():
    graph = Graph([Vertex(0), Vertex(1)], [Edge(0, 1)])
    with pytest.raises(ValueError):
        euler_tour(graph)


def test_undirected_triangle_reverses_edges_as_needed():
    graph = Graph(
        [Vertex(i) for i in range(3)],
        [Edge(0, 1), Edge(2, 1), Edge(0, 2)],
    )
    tour = euler_tour(graph, GraphType.UNDIRECTED)
    assert len(tour) == graph.m
    _assert_closed_chain(tour)
    pairs = {frozenset((e.tail, e.head)) for e in tour}
    assert pairs == {frozenset((e.tail, e.head)) for e in graph.edges}


def test_undirected_reversal_uses_reverse_cost():
    graph = Graph(
        [Vertex(0), Vertex(1)],
        [
            Edge(0, 1, service_cost=1.0, reverse_service_cost=5.0),
            Edge(0, 1, service_cost=1.0, reverse_service_cost=5.0),
        ],
    )
    tour = euler_tour(graph, GraphType.UNDIRECTED)
    _assert_closed_chain(tour)
    back = [e for e in tour if e.tail == 1]
    assert len(back) == 1
    assert back[0].cost == 5.0


def test_odd_degree_rejected_for_undirected():
    graph = Graph([Vertex(0), Vertex(1), Vertex(2)], [Edge(0, 1), Edge(1, 2)])
    with pytest.raises(ValueError):
        euler_tour(graph, GraphType.UNDIRECTED)


def test_empty_graph_gives_empty_tour():
    graph = Graph([Vertex(0)])
    assert euler_tour(graph) == []