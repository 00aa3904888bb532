import math

import pytest

from linecover.apsp import FloydWarshall
from linecover.network import Edge, Graph, Vertex


def make_graph(extra_vertices=()):
    vertices = [Vertex(10), Vertex(20), Vertex(30), *extra_vertices]
    edges = [
        Edge(10, 20, required=True, service_cost=4.0, deadhead_cost=1.0,
             reverse_deadhead_cost=2.0, deadhead_demand=0.5, reverse_deadhead_demand=0.25),
        Edge(20, 30, required=False, deadhead_cost=3.0, deadhead_demand=1.5),
        Edge(10, 30, required=False, deadhead_cost=10.0, deadhead_demand=7.0),
    ]
    return Graph(vertices, edges)


def test_diagonal_is_zero_and_path_empty():
    fw = FloydWarshall(make_graph()).compute()
    for i in range(3):
        assert fw.cost(i, i) == 0.0
        assert fw.path(i, i) == []


def test_direct_edge_costs_both_directions():
    fw = FloydWarshall(make_graph()).compute()
    assert fw.cost(0, 1) == 1.0
    assert fw.cost(1, 0) == 2.0


def test_path_reversed_edge():
    fw = FloydWarshall(make_graph()).compute()
    (edge,) = fw.path(1, 0)
    assert (edge.tail, edge.head) == (20, 10)
    assert edge.cost == 2.0
    assert not edge.required


def test_path_is_connected_and_matches_cost():
    g = make_graph()
    fw = FloydWarshall(g).compute()
    for i in range(3):
        for j in range(3):
            if i == j:
                continue
            path = fw.path(i, j)
            assert path[0].tail == g.vertices[i].id
            assert path[-1].head == g.vertices[j].id
            for a, b in zip(path, path[1:]):
                assert a.head == b.tail
            assert sum(e.cost for e in path) == pytest.approx(fw.cost(i, j))


def test_shortest_beats_direct_edge_and_triangle_inequality():
    fw = FloydWarshall(make_graph()).compute()
    assert fw.cost(0, 2) < 10.0
    for i in range(3):
        for j in range(3):
            for k in range(3):
                assert fw.cost(i, j) <= fw.cost(i, k) + fw.cost(k, j) + 1e-12


def test_path_copies_do_not_change_graph():
    g = make_graph()
    fw = FloydWarshall(g).compute()
    fw.path(0, 1)
    assert g.required[0].required
    assert g.required[0].cost == 4.0


def test_unreachable_vertex():
    fw = FloydWarshall(make_graph([Vertex(40)])).compute()
    assert fw.cost(0, 3) == math.inf
    assert fw.path(0, 3) == []


def test_demand_requires_flag():
    fw = FloydWarshall(make_graph()).compute()
    with pytest.raises(RuntimeError):
        fw.demand(0, 1)


def test_demand_follows_path():
    fw = FloydWarshall(make_graph(), compute_demand=True).compute()
    assert fw.demand(0, 1) == 0.5
    assert fw.demand(1, 0) == 0.25
    assert fw.demand(0, 0) == 0.0
    assert fw.demand(0, 2) == pytest.approx(fw.demand(0, 1) + fw.demand(1, 2))


def test_index_out_of_range():
    fw = FloydWarshall(make_graph()).compute()
    with pytest.raises(IndexError):
        fw.cost(0, 5)