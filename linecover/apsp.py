"""All-pairs shortest deadheading paths by Floyd-Warshall."""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Optional

import numpy as np

from linecover.network import Edge, Graph, ShortestPaths

_NIL = -1


class FloydWarshall(ShortestPaths):
    """Shortest deadheading paths over all edges of a graph, by vertex index."""

    def __init__(self, graph: Graph, compute_demand: bool = False) -> None:
        self.graph = graph
        self.compute_demand = compute_demand
        n = graph.n
        self._n = n
        self._distance = np.full((n, n), math.inf)
        self._helper = np.full((n, n), _NIL, dtype=np.int64)
        self._edge: list[list[Optional[tuple[Edge, bool]]]] = [[None] * n for _ in range(n)]
        self._demand = np.full((n, n), math.inf) if compute_demand else None

    def compute(self) -> FloydWarshall:
        """Run the algorithm; returns self."""
        dist = self._distance
        demand = self._demand
        np.fill_diagonal(dist, 0.0)
        if demand is not None:
            np.fill_diagonal(demand, 0.0)

        for edge in self.graph.edges:
            t, h = self.graph.edge_endpoints(edge)
            if edge.deadhead_cost < dist[t, h]:
                dist[t, h] = edge.deadhead_cost
                self._edge[t][h] = (edge, False)
                if demand is not None:
                    demand[t, h] = edge.deadhead_demand
            if edge.reverse_deadhead_cost < dist[h, t]:
                dist[h, t] = edge.reverse_deadhead_cost
                self._edge[h][t] = (edge, True)
                if demand is not None:
                    demand[h, t] = edge.reverse_deadhead_demand

        for k in range(self._n):
            via = dist[:, k:k + 1] + dist[k:k + 1, :]
            better = via < dist
            dist = np.where(better, via, dist)
            self._helper[better] = k
            if demand is not None:
                demand = np.where(better, demand[:, k:k + 1] + demand[k:k + 1, :], demand)
        self._distance = dist
        self._demand = demand
        return self

    def _check(self, i: int, j: int) -> None:
        if not (0 <= i < self._n and 0 <= j < self._n):
            raise IndexError(f"vertex index out of range: {i}, {j}")

    def path(self, i: int, j: int) -> list[Edge]:
        """Non-required edge copies along the shortest path from i to j."""
        self._check(i, j)
        result: list[Edge] = []
        stack = [(i, j)]
        while stack:
            a, b = stack.pop()
            k = int(self._helper[a, b])
            if k == _NIL:
                entry = self._edge[a][b]
                if entry is None:
                    continue
                edge, is_reverse = entry
                if is_reverse:
                    result.append(replace(edge.reversed(), required=False,
                                          cost=edge.reverse_deadhead_cost))
                else:
                    result.append(replace(edge, required=False, cost=edge.deadhead_cost))
            else:
                stack.append((k, b))
                stack.append((a, k))
        return result

    def cost(self, i: int, j: int) -> float:
        self._check(i, j)
        return float(self._distance[i, j])

    def demand(self, i: int, j: int) -> float:
        """Deadheading demand along the shortest path from i to j."""
        if self._demand is None:
            raise RuntimeError("demand was not computed")
        self._check(i, j)
        return float(self._demand[i, j])