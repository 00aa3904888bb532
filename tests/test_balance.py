from linecover.balance import is_balanced_digraph, is_balanced_graph, vertex_degrees
from linecover.network import Edge, Graph, Vertex


def graph_of(pairs, n=4):
    return Graph([Vertex(i) for i in range(n)], [Edge(t, h) for t, h in pairs])


def test_directed_cycle_is_balanced():
    g = graph_of([(0, 1), (1, 2), (2, 0)])
    assert is_balanced_digraph(g)
    assert is_balanced_graph(g)


def test_directed_path_is_not_balanced():
    g = graph_of([(0, 1), (1, 2)])
    assert not is_balanced_digraph(g)
    assert not is_balanced_graph(g)


def test_two_way_edge_balanced_digraph():
    g = graph_of([(0, 1), (1, 0)])
    assert is_balanced_digraph(g)


def test_undirected_balance_ignores_direction():
    g = graph_of([(0, 1), (2, 1), (2, 0)])
    assert not is_balanced_digraph(g)
    assert is_balanced_graph(g)


def test_degrees_sum_and_isolated_vertex():
    g = graph_of([(0, 1), (1, 2), (1, 3), (2, 0)])
    degrees = vertex_degrees(g)
    assert sum(degrees) == 2 * len(g.edges)
    assert degrees[1] == 3
    g2 = graph_of([(0, 1)])
    assert vertex_degrees(g2)[3] == 0


def test_reverse_edges_make_any_graph_balanced():
    g = graph_of([(0, 1), (1, 2), (1, 3)])
    g.add_reverse_edges()
    assert is_balanced_digraph(g)


def test_nonrequired_edges_count():
    g = Graph([Vertex(0), Vertex(1)], [Edge(0, 1), Edge(1, 0, required=False)])
    assert is_balanced_digraph(g)
    assert vertex_degrees(g) == [2, 2]