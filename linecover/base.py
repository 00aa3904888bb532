"""Common behaviour of single-vehicle line coverage (SLC) solvers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Iterable, Optional, Sequence

from linecover.balance import is_balanced_digraph
from linecover.components import ConnectedComponents
from linecover.euler import GraphType, euler_tour
from linecover.network import Edge, Graph


class SolutionError(RuntimeError):
    """A solver could not produce a valid closed route."""


class SLCSolver(ABC):
    """Base for solvers that cover every required edge with one closed route.

    After :meth:`solve`, ``route`` holds the edges of the route in order and
    ``solution`` holds the same edges as a graph over the input vertices.
    """

    def __init__(self, graph: Graph, use_2opt: bool = True) -> None:
        self.graph = graph
        self.use_2opt = use_2opt
        self.solution: Optional[Graph] = None
        self.route: list[Edge] = []

    @abstractmethod
    def solve(self) -> list[Edge]:
        """Compute the route and return it."""

    def check_solution(self) -> bool:
        """True when the solution graph is balanced and forms one component."""
        if self.solution is None or not is_balanced_digraph(self.solution):
            return False
        return ConnectedComponents(self.solution).compute().num_components == 1

    def route_cost(self) -> float:
        """Total cost of the route."""
        return sum(edge.cost for edge in self.route)

    def computation_times(self) -> list[float]:
        """Timings of the solver's phases in milliseconds; empty if not tracked."""
        return []

    def costs(self) -> list[float]:
        """Route costs recorded at the solver's stages; empty if not tracked."""
        return []

    def _new_solution_graph(self, edges: Iterable[Edge]) -> Graph:
        solution = Graph(self.graph.vertices, [replace(edge) for edge in edges])
        if self.graph.has_depot:
            solution.set_depot(self.graph.depot_id)
        return solution

    def _tour(self, graph_type: GraphType) -> list[Edge]:
        if self.solution is None:
            raise SolutionError("no solution graph to tour")
        try:
            return euler_tour(self.solution, graph_type)
        except ValueError as exc:
            raise SolutionError(str(exc)) from exc

    def _adopt_route(self, route: Sequence[Edge]) -> None:
        """Check that ``route`` is a closed walk over the whole solution and keep it."""
        if self.solution is None:
            raise SolutionError("no solution graph")
        route = list(route)
        if len(route) != len(self.solution.edges):
            raise SolutionError("route does not use every edge of the solution")
        for current, following in zip(route, route[1:] + route[:1]):
            if current.head != following.tail:
                raise SolutionError(
                    f"route is broken between {current.head} and {following.tail}"
                )
        self.route = route
        self.solution.clear_edges()
        self.solution.add_edges(route)