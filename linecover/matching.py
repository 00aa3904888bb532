"""Minimum-cost perfect matching of odd-degree vertices."""

from __future__ import annotations

import math
from itertools import combinations
from typing import Sequence

import networkx as nx

from linecover.network import Edge, ShortestPaths


def odd_vertex_matching(degrees: Sequence[int], apsp: ShortestPaths) -> list[Edge]:
    """Shortest-path edges joining odd-degree vertices in a cheapest perfect matching.

    ``degrees`` lists the degree of each vertex by index; pairs are joined by
    ``apsp.path`` from the lower to the higher vertex index.  Raises ValueError
    when the odd vertices cannot all be matched.
    """
    odd = [i for i, degree in enumerate(degrees) if degree % 2 == 1]
    if not odd:
        return []
    if len(odd) % 2:
        raise ValueError("odd number of odd-degree vertices")

    pairing = nx.Graph()
    pairing.add_nodes_from(range(len(odd)))
    for a, b in combinations(range(len(odd)), 2):
        cost = apsp.cost(odd[a], odd[b])
        if math.isfinite(cost):
            pairing.add_edge(a, b, weight=cost)

    matched = nx.min_weight_matching(pairing, weight="weight")
    if 2 * len(matched) != len(odd):
        raise ValueError("odd-degree vertices admit no perfect matching")

    edges: list[Edge] = []
    for a, b in sorted(tuple(sorted(pair)) for pair in matched):
        edges.extend(apsp.path(odd[a], odd[b]))
    return edges