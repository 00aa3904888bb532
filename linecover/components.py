"""Connected components of balanced digraphs and the required subgraph."""

from __future__ import annotations

from dataclasses import replace
from enum import Enum, auto

from linecover.balance import is_balanced_digraph
from linecover.network import Graph


class Color(Enum):
    """Visit state of a vertex during the depth-first search."""

    WHITE = auto()
    GRAY = auto()
    BLACK = auto()


class ConnectedComponents:
    """Strongly connected components of a balanced digraph.

    In a balanced digraph every weakly connected component is strongly
    connected, so a single depth-first search along outgoing edges suffices.
    Vertices without outgoing edges belong to no component.
    """

    def __init__(self, graph: Graph) -> None:
        self.graph = graph
        self._adjacent: list[list[int]] = [[] for _ in range(graph.n)]
        for edge in graph.edges:
            t, h = graph.edge_endpoints(edge)
            self._adjacent[t].append(h)
        self._component = [0] * graph.n
        self._representatives: list[int] = []
        self.colors: list[Color] = []

    @property
    def num_components(self) -> int:
        return len(self._representatives)

    def compute(self) -> ConnectedComponents:
        """Label every vertex with its component; returns self.

        Raises ValueError when the graph is not balanced.
        """
        if not is_balanced_digraph(self.graph):
            raise ValueError(
                "graph is not balanced: at each vertex, the number of incoming "
                "edges must equal the number of outgoing edges"
            )
        self.colors = [Color.WHITE if adj else Color.BLACK for adj in self._adjacent]
        self._component = [0] * self.graph.n
        self._representatives = []
        for vertex, _ in enumerate(self._adjacent):
            if self.colors[vertex] is Color.WHITE:
                self._representatives.append(vertex)
                self._visit(vertex, len(self._representatives) - 1)
        return self

    def _visit(self, root: int, label: int) -> None:
        colors, component = self.colors, self._component
        colors[root] = Color.GRAY
        component[root] = label
        stack = [(root, iter(self._adjacent[root]))]
        while stack:
            u, neighbours = stack[-1]
            for v in neighbours:
                if colors[v] is Color.WHITE:
                    colors[v] = Color.GRAY
                    component[v] = label
                    stack.append((v, iter(self._adjacent[v])))
                    break
            else:
                colors[u] = Color.BLACK
                stack.pop()

    def component_of(self, i: int) -> int:
        """Component label of the vertex with index i."""
        return self._component[i]

    def representative(self, i: int) -> int:
        """Index of the first vertex found in component i."""
        return self._representatives[i]


def required_graph(graph: Graph) -> Graph:
    """Subgraph of the required edges and the vertices they touch.

    Vertices appear in the order in which the required edges first reach them.
    """
    seen: set[int] = set()
    vertices = []
    for edge in graph.required:
        for vertex_id in (edge.tail, edge.head):
            if vertex_id not in seen:
                seen.add(vertex_id)
                vertices.append(graph.vertices[graph.vertex_index(vertex_id)])
    return Graph(vertices, [replace(edge) for edge in graph.required])


def num_required_components(graph: Graph) -> int:
    """Number of connected components formed by the required edges."""
    g_r = required_graph(graph)
    g_r.add_reverse_edges()
    return ConnectedComponents(g_r).compute().num_components