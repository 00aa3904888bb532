"""Exact integer programme for single-vehicle line coverage."""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Optional

import numpy as np
from scipy.optimize import Bounds, LinearConstraint, milp

from linecover.base import SLCSolver, SolutionError
from linecover.euler import GraphType
from linecover.network import Edge, Graph

_REQ_VARS = 6
_NONREQ_VARS = 4


def _count(x: float) -> int:
    """Round a non-negative solver value to the nearest whole count."""
    return max(0, math.floor(x + 0.5))


class ExactILP(SLCSolver):
    """Optimal route from a flow-based integer programme.

    Each required edge has binary service variables for both directions and
    integer deadheading and flow variables; non-required edges have
    deadheading and flow variables only.  A single-commodity flow of one
    unit per required edge, leaving the tail of the first required edge,
    keeps the route connected.

    ``status`` is 0 when the optimum was proven and 1 when the time limit
    stopped the search with a feasible route.
    """

    def __init__(self, graph: Graph, time_limit: Optional[float] = 3600.0,
                 use_2opt: bool = True) -> None:
        super().__init__(graph, use_2opt)
        self.time_limit = time_limit
        self.objective: Optional[float] = None
        self.status: Optional[int] = None
        self._bound = 0.0

    def objective_bound(self) -> float:
        """Best proven lower bound on the optimal cost; 0 before solving."""
        return self._bound

    @staticmethod
    def _term(cost: float, upper: float) -> tuple[float, float, float]:
        # A variable whose cost is infinite is fixed at zero.
        if math.isinf(cost):
            return 0.0, 0.0, 0.0
        return cost, 0.0, upper

    def _model(self) -> tuple[np.ndarray, Bounds, list[LinearConstraint]]:
        g = self.graph
        n, m, m_nr = g.n, g.m, g.m_nr
        num_vars = _REQ_VARS * m + _NONREQ_VARS * m_nr
        costs = np.zeros(num_vars)
        lower = np.zeros(num_vars)
        upper = np.full(num_vars, np.inf)

        symmetry = np.zeros((n, num_vars))
        traversing = np.zeros((m, num_vars))
        flow = np.zeros((n, num_vars))
        depot_row = np.zeros(num_vars)
        limits = np.zeros((2 * m + 2 * m_nr, num_vars))
        depot = g.vertex_index(g.required[0].tail)

        for i, edge in enumerate(g.required):
            t, h = g.edge_endpoints(edge)
            s, s_rev, d, d_rev, z, z_rev = range(_REQ_VARS * i, _REQ_VARS * (i + 1))
            for var, cost, ub in (
                (s, edge.service_cost, 1.0),
                (s_rev, edge.reverse_service_cost, 1.0),
                (d, edge.deadhead_cost, np.inf),
                (d_rev, edge.reverse_deadhead_cost, np.inf),
                (z, 0.0, np.inf),
                (z_rev, 0.0, np.inf),
            ):
                costs[var], lower[var], upper[var] = self._term(cost, ub)

            for var, sign in ((s, 1.0), (d, 1.0), (s_rev, -1.0), (d_rev, -1.0)):
                symmetry[h, var] += sign
                symmetry[t, var] -= sign
            traversing[i, s] = traversing[i, s_rev] = 1.0

            flow[h, z] += 1.0
            flow[t, z] -= 1.0
            flow[t, z_rev] += 1.0
            flow[h, z_rev] -= 1.0
            flow[h, s] -= 1.0
            flow[t, s_rev] -= 1.0

            if t == depot:
                depot_row[z] += 1.0
            if h == depot:
                depot_row[z_rev] += 1.0

            limits[2 * i, z] = 1.0
            limits[2 * i, d] -= m
            limits[2 * i, s] -= m
            limits[2 * i + 1, z_rev] = 1.0
            limits[2 * i + 1, d_rev] -= m
            limits[2 * i + 1, s_rev] -= m

        base = _REQ_VARS * m
        for i, edge in enumerate(g.nonrequired):
            t, h = g.edge_endpoints(edge)
            d, d_rev, z, z_rev = range(base + _NONREQ_VARS * i, base + _NONREQ_VARS * (i + 1))
            for var, cost in (
                (d, edge.deadhead_cost),
                (d_rev, edge.reverse_deadhead_cost),
                (z, 0.0),
                (z_rev, 0.0),
            ):
                costs[var], lower[var], upper[var] = self._term(cost, np.inf)

            symmetry[h, d] += 1.0
            symmetry[t, d] -= 1.0
            symmetry[t, d_rev] += 1.0
            symmetry[h, d_rev] -= 1.0

            flow[h, z] += 1.0
            flow[t, z] -= 1.0
            flow[t, z_rev] += 1.0
            flow[h, z_rev] -= 1.0

            if t == depot:
                depot_row[z] += 1.0
            if h == depot:
                depot_row[z_rev] += 1.0

            row = 2 * m + 2 * i
            limits[row, z] = 1.0
            limits[row, d] -= m
            limits[row + 1, z_rev] = 1.0
            limits[row + 1, d_rev] -= m

        flow = np.delete(flow, depot, axis=0)
        constraints = [
            LinearConstraint(symmetry, 0.0, 0.0),
            LinearConstraint(traversing, 1.0, 1.0),
            LinearConstraint(depot_row[np.newaxis, :], float(m), float(m)),
            LinearConstraint(limits, -np.inf, 0.0),
        ]
        if flow.shape[0]:
            constraints.append(LinearConstraint(flow, 0.0, 0.0))
        return costs, Bounds(lower, upper), constraints

    def _solve_ilp(self) -> np.ndarray:
        costs, bounds, constraints = self._model()
        options = {} if self.time_limit is None else {"time_limit": float(self.time_limit)}
        result = milp(costs, constraints=constraints, bounds=bounds,
                      integrality=np.ones(len(costs)), options=options)
        if result.status == 0:
            self.status = 0
        elif result.status == 1 and result.x is not None:
            self.status = 1
        else:
            raise SolutionError(f"integer programme not solved: {result.message}")
        self.objective = float(result.fun)
        bound = getattr(result, "mip_dual_bound", None)
        self._bound = float(bound) if bound is not None and math.isfinite(bound) else self.objective
        return result.x

    def _solution_edges(self, x: np.ndarray) -> list[Edge]:
        g = self.graph
        edges: list[Edge] = []

        def deadheads(edge: Edge, forward: float, backward: float) -> None:
            edges.extend(replace(edge, required=False, cost=edge.deadhead_cost)
                         for _ in range(_count(forward)))
            flipped = edge.reversed()
            edges.extend(replace(flipped, required=False, cost=edge.reverse_deadhead_cost)
                         for _ in range(_count(backward)))

        for i, edge in enumerate(g.required):
            s, s_rev, d, d_rev = (float(v) for v in x[_REQ_VARS * i:_REQ_VARS * i + 4])
            if s > 0.5:
                edges.append(replace(edge, required=True, cost=edge.service_cost))
            if s_rev > 0.5:
                edges.append(replace(edge.reversed(), required=True,
                                     cost=edge.reverse_service_cost))
            deadheads(edge, d, d_rev)

        base = _REQ_VARS * g.m
        for i, edge in enumerate(g.nonrequired):
            start = base + _NONREQ_VARS * i
            deadheads(edge, float(x[start]), float(x[start + 1]))
        return edges

    def solve(self) -> list[Edge]:
        """Solve the programme and return the route.

        Raises SolutionError when no feasible route is found.
        """
        if self.graph.m == 0:
            self.solution = self._new_solution_graph([])
            self.route = []
            self.objective = 0.0
            self.status = 0
            self._bound = 0.0
            return self.route

        x = self._solve_ilp()
        self.solution = self._new_solution_graph(self._solution_edges(x))
        route = self._tour(GraphType.DIRECTED)
        if self.graph.has_depot:
            depot_id = self.graph.depot_id
            start = next((k for k, edge in enumerate(route) if edge.tail == depot_id), 0)
            route = route[start:] + route[:start]
        self._adopt_route(route)
        return self.route