"""Frederickson's 3/2-approximation for the rural postman problem."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from linecover.apsp import FloydWarshall
from linecover.balance import vertex_degrees
from linecover.base import SLCSolver
from linecover.components import ConnectedComponents, required_graph
from linecover.euler import GraphType
from linecover.matching import odd_vertex_matching
from linecover.mst import mst_prim
from linecover.network import Edge, Graph, Vertex


@dataclass
class MSTEdge:
    """Cheapest link between two components: its cost and the vertex indices it joins."""

    cost: float = math.inf
    u: Optional[int] = None
    v: Optional[int] = None


class RuralPostman(SLCSolver):
    """Route joining the required components by a spanning tree, then matching."""

    def __init__(self, graph: Graph, use_2opt: bool = True) -> None:
        super().__init__(graph, use_2opt)
        self.apsp = FloydWarshall(graph).compute()
        self.solution = self._new_solution_graph(graph.required)
        self.num_components = 0
        self.connections: list[list[MSTEdge]] = []

    def _component_tree(self, g_r: Graph, cc: ConnectedComponents) -> Graph:
        k = cc.num_components
        self.connections = [[MSTEdge() for _ in range(k)] for _ in range(k)]
        members = [
            (cc.component_of(i), self.graph.vertex_index(vertex.id))
            for i, vertex in enumerate(g_r.vertices)
        ]
        for comp_u, idx_u in members:
            for comp_v, idx_v in members:
                cost = self.apsp.cost(idx_u, idx_v)
                link = self.connections[comp_u][comp_v]
                if cost < link.cost:
                    link.cost, link.u, link.v = cost, idx_u, idx_v
        vertices = [Vertex(i) for i in range(k)]
        edges = [
            Edge(i, j, required=True, service_cost=self.connections[i][j].cost)
            for i in range(k)
            for j in range(i + 1, k)
        ]
        return Graph(vertices, edges)

    def solve(self) -> list[Edge]:
        g_r = required_graph(self.graph)
        g_r.add_reverse_edges()
        cc = ConnectedComponents(g_r).compute()
        self.num_components = cc.num_components

        if self.num_components > 1:
            tree = self._component_tree(g_r, cc)
            links: list[Edge] = []
            for edge in mst_prim(tree):
                link = self.connections[edge.tail][edge.head]
                links.extend(self.apsp.path(link.u, link.v))
            self.solution.add_edges(links)

        degrees = vertex_degrees(self.solution)
        if any(degree % 2 for degree in degrees):
            self.solution.add_edges(odd_vertex_matching(degrees, self.apsp))
        self._adopt_route(self._tour(GraphType.UNDIRECTED))
        return self.route