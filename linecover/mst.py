"""Minimum spanning tree by Prim's algorithm."""

from __future__ import annotations

import heapq
import itertools
import math
from typing import Optional

from linecover.network import Edge, Graph


def mst_prim(graph: Graph) -> list[Edge]:
    """Minimum spanning tree over the required edges, grown from vertex index 0.

    Edges are treated as undirected and weighted by their ``cost``.  Only the
    part of the graph reachable from vertex 0 is spanned.
    """
    n = graph.n
    if n == 0:
        return []
    adjacency: list[list[tuple[int, Edge]]] = [[] for _ in range(n)]
    for edge in graph.required:
        t, h = graph.edge_endpoints(edge)
        adjacency[t].append((h, edge))
        adjacency[h].append((t, edge))

    best = [math.inf] * n
    parent: list[Optional[Edge]] = [None] * n
    visited = [False] * n
    best[0] = 0.0
    order = itertools.count()
    heap = [(0.0, next(order), 0)]
    tree: list[Edge] = []
    while heap:
        _, _, u = heapq.heappop(heap)
        if visited[u]:
            continue
        visited[u] = True
        if parent[u] is not None:
            tree.append(parent[u])
        for v, edge in adjacency[u]:
            if not visited[v] and edge.cost < best[v]:
                best[v] = edge.cost
                parent[v] = edge
                heapq.heappush(heap, (edge.cost, next(order), v))
    return tree