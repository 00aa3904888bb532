"""Eulerian tours of balanced graphs."""

from __future__ import annotations

from dataclasses import replace
from enum import Enum, auto
from typing import Optional

from linecover.balance import is_balanced_digraph, is_balanced_graph
from linecover.network import Edge, Graph


class GraphType(Enum):
    """Whether edges may be traversed only along or also against their direction."""

    DIRECTED = auto()
    UNDIRECTED = auto()


def _oriented(graph: Graph, edge: Edge, from_index: int) -> Edge:
    if graph.vertex_index(edge.tail) == from_index:
        return edge
    flipped = edge.reversed()
    return replace(
        flipped,
        cost=flipped.service_cost if flipped.required else flipped.deadhead_cost,
    )


def euler_tour(graph: Graph, graph_type: GraphType = GraphType.DIRECTED) -> list[Edge]:
    """Closed tour using every edge reachable from the first edge's tail once.

    Edges of an undirected graph traversed against their direction appear
    reversed in the tour.  Raises ValueError when the graph is not balanced.
    """
    if graph_type is GraphType.DIRECTED:
        if not is_balanced_digraph(graph):
            raise ValueError("graph is not an Eulerian digraph")
    elif not is_balanced_graph(graph):
        raise ValueError("graph is not balanced")

    edges = graph.edges
    if not edges:
        return []

    adjacency: list[list[int]] = [[] for _ in range(graph.n)]
    for k, edge in enumerate(edges):
        t, h = graph.edge_endpoints(edge)
        adjacency[t].append(k)
        if graph_type is GraphType.UNDIRECTED:
            adjacency[h].append(k)

    used = [False] * len(edges)
    pending = [iter(adj) for adj in adjacency]
    start = graph.vertex_index(edges[0].tail)
    stack: list[tuple[int, Optional[Edge]]] = [(start, None)]
    circuit: list[Edge] = []
    while stack:
        v, arrived_by = stack[-1]
        k = next((k for k in pending[v] if not used[k]), None)
        if k is None:
            stack.pop()
            if arrived_by is not None:
                circuit.append(arrived_by)
            continue
        used[k] = True
        oriented = _oriented(graph, edges[k], v)
        stack.append((graph.vertex_index(oriented.head), oriented))
    circuit.reverse()
    return circuit