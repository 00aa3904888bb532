"""Line coverage heuristics built on an LP relaxation and a tour over components.

The beta-2 solvers orient the edges the relaxation left undecided by the
cheaper of serving each edge and walking back, or serving it the other way
and walking back.  The beta-3 solver serves every required edge in its
cheaper direction.  In both, the separate components of the resulting
balanced graph are then joined by a closed tour over one representative
vertex of each component.
"""

from __future__ import annotations

import math
import time
from dataclasses import replace
from typing import Optional, Sequence, Union

from linecover.apsp import FloydWarshall
from linecover.atsp import HeldKarp, LKHSolver, TourError
from linecover.base import SLCSolver, SolutionError
from linecover.components import ConnectedComponents
from linecover.euler import GraphType
from linecover.lp import Beta3LP, LPRelaxation
from linecover.network import Edge, Graph

_EXACT_TOUR_LIMIT = 20


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


class _ComponentTourSolver(SLCSolver):
    """Shared steps: orienting undecided edges, joining components, finishing."""

    #: Largest number of components for the exact tour; None means no limit.
    _exact_limit: Optional[int] = _EXACT_TOUR_LIMIT

    def __init__(self, graph: Graph, use_2opt: bool = True,
                 lkh_executable: Union[str, Sequence[str]] = "LKH") -> None:
        super().__init__(graph, use_2opt)
        self.lkh_executable = lkh_executable
        self.apsp: Optional[FloydWarshall] = None
        self.num_components = 0
        self.component_tour: list[int] = []
        self._times: list[float] = []
        self._stage_cost = math.nan
        self._cost = math.nan

    def computation_times(self) -> list[float]:
        """Milliseconds spent in each of the four phases of the last solve."""
        return list(self._times)

    def costs(self) -> list[float]:
        """Route cost after joining the components, and the final route cost."""
        return [self._stage_cost, self._cost]

    def _two_approx(self, undirected: Graph) -> list[Edge]:
        """Serve each undecided edge one way and walk back along a shortest path."""
        edges: list[Edge] = []
        for edge in undirected.required:
            t, h = self.graph.edge_endpoints(edge)
            forward = edge.service_cost + self.apsp.cost(h, t)
            backward = edge.reverse_service_cost + self.apsp.cost(t, h)
            if forward <= backward:
                edges.append(replace(edge, required=True, cost=edge.service_cost))
                edges.extend(self.apsp.path(h, t))
            else:
                edges.append(replace(edge.reversed(), required=True,
                                     cost=edge.reverse_service_cost))
                edges.extend(self.apsp.path(t, h))
        return edges

    def _components(self) -> ConnectedComponents:
        try:
            return ConnectedComponents(self.solution).compute()
        except ValueError as exc:
            raise SolutionError(str(exc)) from exc

    def _tour_solver(self, d: list[list[float]]):
        if self._exact_limit is None or len(d) <= self._exact_limit:
            return HeldKarp(d)
        return LKHSolver(d, self.lkh_executable)

    def _link_components(self, cc: ConnectedComponents) -> list[Edge]:
        """Shortest paths that visit every component in one closed tour."""
        reps = [cc.representative(i) for i in range(cc.num_components)]
        if len(reps) == 2:
            self.component_tour = [0, 1, 0]
            return self.apsp.path(reps[0], reps[1]) + self.apsp.path(reps[1], reps[0])
        d = [[self.apsp.cost(a, b) for b in reps] for a in reps]
        try:
            self.component_tour = self._tour_solver(d).path()
        except TourError as exc:
            raise SolutionError(f"components cannot be joined: {exc}") from exc
        edges: list[Edge] = []
        for a, b in zip(self.component_tour, self.component_tour[1:]):
            edges.extend(self.apsp.path(reps[a], reps[b]))
        return edges

    def _join_components(self) -> None:
        cc = self._components()
        self.num_components = cc.num_components
        if cc.num_components > 1:
            self.solution.add_edges(self._link_components(cc))

    def _rotated(self, route: list[Edge]) -> list[Edge]:
        if not self.graph.has_depot:
            return route
        depot_id = self.graph.depot_id
        start = next((k for k, edge in enumerate(route) if edge.tail == depot_id), 0)
        return route[start:] + route[:start]

    def _finish(self, route: list[Edge]) -> float:
        """Rotate to the depot and keep the route; returns the phase time."""
        start = time.perf_counter()
        self._adopt_route(self._rotated(route))
        self._cost = self.route_cost()
        return _elapsed_ms(start)


class Beta2ATSP(_ComponentTourSolver):
    """LP relaxation, beta-2 orientation, then an ATSP tour over components.

    Up to 20 components are joined by an exact tour; more use the external
    LKH program.
    """

    _exact_limit = _EXACT_TOUR_LIMIT

    def solve(self) -> list[Edge]:
        """Compute the route and return it.

        Raises SolutionError when no closed route covering every required
        edge can be formed.
        """
        start = time.perf_counter()
        lp = LPRelaxation(self.graph)
        lp.solve()
        directed, undirected = lp.solution_graphs()
        self.solution = self._new_solution_graph(directed.edges)
        self.apsp = FloydWarshall(self.graph)
        time_lp = _elapsed_ms(start)

        start = time.perf_counter()
        self.apsp.compute()
        self.solution.add_edges(self._two_approx(undirected))
        time_beta2 = _elapsed_ms(start)

        start = time.perf_counter()
        self._join_components()
        route = self._tour(GraphType.DIRECTED)
        self._stage_cost = sum(edge.cost for edge in route)
        time_tour = _elapsed_ms(start)

        time_finish = self._finish(route)
        self._times = [time_lp, time_beta2, time_tour, time_finish]
        return self.route

    def computation_times(self) -> list[float]:
        """Milliseconds for the LP, beta-2 orientation, tour and finishing phases."""
        return super().computation_times()

    def costs(self) -> list[float]:
        """Route cost after the ATSP phase, and the final route cost."""
        return super().costs()


class Beta2GTSP(Beta2ATSP):
    """Like :class:`Beta2ATSP`, joining components by an exact tour of any size."""

    _exact_limit = None

    def solve(self) -> list[Edge]:
        """Compute the route and return it.

        Raises SolutionError when no closed route covering every required
        edge can be formed.
        """
        return super().solve()

    def computation_times(self) -> list[float]:
        """Milliseconds for the LP, beta-2 orientation, tour and finishing phases."""
        return super().computation_times()

    def costs(self) -> list[float]:
        """Route cost after the tour phase, and the final route cost."""
        return super().costs()


class Beta3ATSP(_ComponentTourSolver):
    """Cheapest-direction service with LP deadheading, then an ATSP tour."""

    _exact_limit = _EXACT_TOUR_LIMIT

    def solve(self) -> list[Edge]:
        """Compute the route and return it.

        Raises SolutionError when the components cannot be joined into one.
        """
        start = time.perf_counter()
        lp = Beta3LP(self.graph)
        lp.solve()
        directed, _ = lp.solution_graphs()
        self.solution = self._new_solution_graph(directed.edges)
        self.apsp = FloydWarshall(self.graph)
        time_beta3 = _elapsed_ms(start)

        start = time.perf_counter()
        self.apsp.compute()
        self._join_components()
        remaining = self._components().num_components
        if remaining > 1:
            self._cost = math.inf
            raise SolutionError(f"solution still has {remaining} components")
        route = self._tour(GraphType.DIRECTED)
        self._stage_cost = sum(edge.cost for edge in route)
        time_tour = _elapsed_ms(start)

        time_finish = self._finish(route)
        self._times = [0.0, time_beta3, time_tour, time_finish]
        return self.route

    def computation_times(self) -> list[float]:
        """Milliseconds for the phases; the first, the LP phase, is always 0."""
        return super().computation_times()

    def costs(self) -> list[float]:
        """Route cost after the ATSP phase, and the final route cost."""
        return super().costs()