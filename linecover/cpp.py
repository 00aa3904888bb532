"""Chinese postman tours over graphs whose edges are all required."""

from __future__ import annotations

from linecover.apsp import FloydWarshall
from linecover.balance import vertex_degrees
from linecover.base import SLCSolver
from linecover.euler import GraphType
from linecover.matching import odd_vertex_matching
from linecover.network import Edge, Graph


class ChinesePostman(SLCSolver):
    """Route by matching odd-degree vertices and taking an Euler tour."""

    def __init__(self, graph: Graph, use_2opt: bool = True) -> None:
        super().__init__(graph, use_2opt)
        self.apsp = FloydWarshall(graph).compute()
        self.solution = self._new_solution_graph(graph.edges)

    def solve(self) -> list[Edge]:
        degrees = vertex_degrees(self.graph)
        if any(degree % 2 for degree in degrees):
            self.solution.add_edges(odd_vertex_matching(degrees, self.apsp))
        self._adopt_route(self._tour(GraphType.UNDIRECTED))
        return self.route