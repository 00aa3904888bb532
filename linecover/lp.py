"""Linear-programming relaxations for single-vehicle line coverage."""

from __future__ import annotations

import math
from abc import ABC
from dataclasses import replace
from typing import Optional

import numpy as np
from scipy.optimize import linprog

from linecover.base import SolutionError
from linecover.network import Edge, Graph


def _round_count(x: float) -> int:
    """Round a non-negative LP value to the nearest count, halves upwards."""
    return max(0, math.floor(x + 0.5))


def _near(x: float, target: float, tol: float) -> bool:
    return abs(x - target) < tol


class _CoverageLP(ABC):
    """Shared model: service and deadheading variables with flow symmetry.

    Variables, in order: for each required edge ``s``, ``s_rev``, ``d``,
    ``d_rev``; then for each non-required edge ``d``, ``d_rev``.
    """

    #: Tolerance for deciding that a service variable equals one (or a half).
    _tolerance: float = 1e-1

    def __init__(self, graph: Graph) -> None:
        self.graph = graph
        self.objective: Optional[float] = None
        self._x: Optional[np.ndarray] = None

    def _service_bounds(self, edge: Edge) -> tuple[tuple[float, float], tuple[float, float]]:
        return (0.0, 1.0), (0.0, 1.0)

    @staticmethod
    def _term(cost: float, bound: tuple[float, Optional[float]]) -> tuple[float, tuple[float, Optional[float]]]:
        # An infinite cost forbids the variable altogether.
        if math.isinf(cost):
            return 0.0, (0.0, 0.0)
        return cost, bound

    def solve(self) -> float:
        """Solve the linear programme and return the optimal objective value.

        Raises SolutionError when the programme has no optimal solution.
        """
        g = self.graph
        m, m_nr = g.m, g.m_nr
        num_vars = 4 * m + 2 * m_nr
        costs: list[float] = []
        bounds: list[tuple[float, Optional[float]]] = []
        symmetry = np.zeros((g.n, num_vars))
        traversing = np.zeros((m, num_vars))

        for i, edge in enumerate(g.required):
            t, h = g.edge_endpoints(edge)
            s_bound, s_rev_bound = self._service_bounds(edge)
            for cost, bound in (
                (edge.service_cost, s_bound),
                (edge.reverse_service_cost, s_rev_bound),
                (edge.deadhead_cost, (0.0, None)),
                (edge.reverse_deadhead_cost, (0.0, None)),
            ):
                c, b = self._term(cost, bound)
                costs.append(c)
                bounds.append(b)
            base = 4 * i
            for offset, sign in ((0, 1.0), (2, 1.0), (1, -1.0), (3, -1.0)):
                symmetry[h, base + offset] += sign
                symmetry[t, base + offset] -= sign
            traversing[i, base] = 1.0
            traversing[i, base + 1] = 1.0

        for i, edge in enumerate(g.nonrequired):
            t, h = g.edge_endpoints(edge)
            for cost in (edge.deadhead_cost, edge.reverse_deadhead_cost):
                c, b = self._term(cost, (0.0, None))
                costs.append(c)
                bounds.append(b)
            base = 4 * m + 2 * i
            symmetry[h, base] += 1.0
            symmetry[t, base] -= 1.0
            symmetry[t, base + 1] += 1.0
            symmetry[h, base + 1] -= 1.0

        if num_vars == 0:
            self._x = np.zeros(0)
            self.objective = 0.0
            return self.objective

        a_eq = np.vstack([symmetry, traversing])
        b_eq = np.concatenate([np.zeros(g.n), np.ones(m)])
        result = linprog(np.array(costs), A_eq=a_eq, b_eq=b_eq,
                         bounds=bounds, method="highs")
        if result.status != 0:
            raise SolutionError(f"linear programme not solved: {result.message}")
        self._x = result.x
        self.objective = float(result.fun)
        return self.objective

    def _deadhead_copies(self, edge: Edge, forward: float, backward: float) -> list[Edge]:
        copies = [replace(edge, required=False, cost=edge.deadhead_cost)] * _round_count(forward)
        copies += [replace(edge.reversed(), required=False,
                           cost=edge.reverse_deadhead_cost)] * _round_count(backward)
        return [replace(e) for e in copies]

    def _classify_service(self, edge: Edge, s: float, s_rev: float,
                          directed: list[Edge], undirected: list[Edge]) -> None:
        raise NotImplementedError

    def solution_graphs(self) -> tuple[Graph, Graph]:
        """Return the directed solution graph and the graph of undecided edges.

        The first graph holds the required edges whose direction the LP fixed
        together with the deadheading copies; the second holds the required
        edges the LP left undirected.
        """
        if self._x is None:
            raise SolutionError("solve() has not been run")
        g, x = self.graph, self._x
        directed: list[Edge] = []
        undirected: list[Edge] = []
        for i, edge in enumerate(g.required):
            s, s_rev, d, d_rev = x[4 * i:4 * i + 4]
            self._classify_service(edge, float(s), float(s_rev), directed, undirected)
            directed.extend(self._deadhead_copies(edge, float(d), float(d_rev)))
        base = 4 * g.m
        for i, edge in enumerate(g.nonrequired):
            d, d_rev = x[base + 2 * i:base + 2 * i + 2]
            directed.extend(self._deadhead_copies(edge, float(d), float(d_rev)))
        return Graph(g.vertices, directed), Graph(g.vertices, undirected)


class LPRelaxation(_CoverageLP):
    """Relaxation in which each required edge may be served partly each way."""

    _tolerance = 1e-1

    def solve(self) -> float:
        return super().solve()

    def _classify_service(self, edge: Edge, s: float, s_rev: float,
                          directed: list[Edge], undirected: list[Edge]) -> None:
        if _near(s, 1.0, self._tolerance):
            directed.append(replace(edge, required=True, cost=edge.service_cost))
        elif _near(s_rev, 1.0, self._tolerance):
            directed.append(replace(edge.reversed(), required=True,
                                    cost=edge.reverse_service_cost))
        else:
            undirected.append(replace(edge, required=True))

    def solution_graphs(self) -> tuple[Graph, Graph]:
        return super().solution_graphs()


class Beta3LP(_CoverageLP):
    """Programme with each required edge served in its cheaper direction.

    Ties are served against the edge's direction.
    """

    _tolerance = 1e-5

    def _service_bounds(self, edge: Edge) -> tuple[tuple[float, float], tuple[float, float]]:
        if edge.service_cost < edge.reverse_service_cost:
            return (1.0, 1.0), (0.0, 0.0)
        return (0.0, 0.0), (1.0, 1.0)

    def solve(self) -> float:
        return super().solve()

    def _classify_service(self, edge: Edge, s: float, s_rev: float,
                          directed: list[Edge], undirected: list[Edge]) -> None:
        if _near(s, 1.0, self._tolerance):
            directed.append(replace(edge, required=True, cost=edge.service_cost))
        if _near(s_rev, 1.0, self._tolerance):
            directed.append(replace(edge.reversed(), required=True,
                                    cost=edge.reverse_service_cost))
        if _near(s, 0.5, self._tolerance):
            undirected.append(replace(edge, required=True))

    def solution_graphs(self) -> tuple[Graph, Graph]:
        return super().solution_graphs()