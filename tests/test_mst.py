from linecover.mst import mst_prim
from linecover.network import Edge, Graph, Vertex


def _square():
    vertices = [Vertex(i) for i in range(4)]
    edges = [
        Edge(0, 1, service_cost=1.0),
        Edge(1, 2, service_cost=2.0),
        Edge(2, 3, service_cost=3.0),
        Edge(3, 0, service_cost=4.0),
        Edge(0, 2, service_cost=10.0),
    ]
    return Graph(vertices, edges)


def test_tree_has_n_minus_one_edges_covering_all_vertices():
    graph = _square()
    tree = mst_prim(graph)
    assert len(tree) == graph.n - 1
    covered = {v for e in tree for v in (e.tail, e.head)}
    assert covered == {v.id for v in graph.vertices}


def test_tree_picks_cheapest_edges():
    tree = mst_prim(_square())
    assert sorted(e.cost for e in tree) == [1.0, 2.0, 3.0]


def test_tree_not_more_expensive_than_any_other_spanning_path():
    graph = _square()
    tree_cost = sum(e.cost for e in mst_prim(graph))
    alternative = sum(e.cost for e in graph.required[1:4])
    assert tree_cost <= alternative


def test_nonrequired_edges_are_ignored():
    graph = _square()
    graph.add_edges([Edge(1, 3, required=False, service_cost=0.5)])
    tree = mst_prim(graph)
    assert all(e.required for e in tree)
    assert len(tree) == graph.n - 1


def test_only_component_of_first_vertex_is_spanned():
    vertices = [Vertex(i) for i in range(4)]
    graph = Graph(vertices, [Edge(0, 1, service_cost=1.0), Edge(2, 3, service_cost=1.0)])
    tree = mst_prim(graph)
    assert [(e.tail, e.head) for e in tree] == [(0, 1)]


def test_empty_graph_gives_empty_tree():
    assert mst_prim(Graph([])) == []