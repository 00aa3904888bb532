"""Balance and degree checks on graphs."""

from __future__ import annotations

from linecover.network import Graph


def is_balanced_digraph(graph: Graph) -> bool:
    """True when every vertex has as many incoming as outgoing edges."""
    imbalance = [0] * graph.n
    for edge in graph.edges:
        t, h = graph.edge_endpoints(edge)
        imbalance[t] += 1
        imbalance[h] -= 1
    return not any(imbalance)


def vertex_degrees(graph: Graph) -> list[int]:
    """Undirected degree of each vertex, by index."""
    degrees = [0] * graph.n
    for edge in graph.edges:
        t, h = graph.edge_endpoints(edge)
        degrees[t] += 1
        degrees[h] += 1
    return degrees


def is_balanced_graph(graph: Graph) -> bool:
    """True when every vertex has even undirected degree."""
    return all(d % 2 == 0 for d in vertex_degrees(graph))