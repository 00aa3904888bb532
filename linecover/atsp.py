"""Asymmetric travelling salesman tours over a distance matrix."""

from __future__ import annotations

import math
import subprocess
import tempfile
from pathlib import Path
from typing import Sequence, Union

from linecover.network import TourSolver

_INT_MAX = 2**31 - 1


class TourError(RuntimeError):
    """A tour could not be produced or failed its consistency check."""


def _square(d: Sequence[Sequence[float]]) -> list[list[float]]:
    matrix = [[float(x) for x in row] for row in d]
    n = len(matrix)
    if n == 0:
        raise ValueError("empty distance matrix")
    if any(len(row) != n for row in matrix):
        raise ValueError("distance matrix must be square")
    return matrix


class HeldKarp(TourSolver):
    """Exact tour by the Bellman-Held-Karp dynamic programme, starting at 0."""

    def __init__(self, d: Sequence[Sequence[float]]) -> None:
        self._d = _square(d)
        self.n = len(self._d)
        self._best: dict[tuple[int, int], tuple[float, int | None]] = {}
        self.cost = self._solve()

    def _solve(self) -> float:
        n, d = self.n, self._d
        if n == 1:
            return d[0][0]
        full = (1 << n) - 1
        best = self._best
        masks = sorted(range(1, full, 2), key=lambda s: -s.bit_count())
        for s in masks:
            starts = (0,) if s == 1 else [v for v in range(1, n) if s >> v & 1]
            for v in starts:
                min_cost, min_next = math.inf, None
                for i in range(n):
                    if s >> i & 1:
                        continue
                    s_new = s | (1 << i)
                    rest = d[i][0] if s_new == full else best[(i, s_new)][0]
                    c = d[v][i] + rest
                    if c < min_cost:
                        min_cost, min_next = c, i
                best[(v, s)] = (min_cost, min_next)
        return best[(0, 1)][0]

    def path(self) -> list[int]:
        d = self._d
        if self.n == 1:
            return [0, 0]
        tour = [0]
        total = 0.0
        v, s = 0, 1
        for _ in range(self.n - 1):
            nxt = self._best[(v, s)][1]
            if nxt is None:
                raise TourError("no finite tour exists")
            total += d[v][nxt]
            s |= 1 << nxt
            v = nxt
            tour.append(v)
        tour.append(0)
        total += d[v][0]
        if len(tour) != self.n + 1 or not math.isclose(total, self.cost,
                                                        rel_tol=1e-9, abs_tol=1e-10):
            raise TourError("tour does not match its computed cost")
        return tour


class LKHSolver(TourSolver):
    """Tour computed by the external LKH program."""

    def __init__(self, d: Sequence[Sequence[float]],
                 executable: Union[str, Sequence[str]] = "LKH") -> None:
        self._d = _square(d)
        self.n = len(self._d)
        self._command = [executable] if isinstance(executable, str) else list(executable)
        self._path = self._solve()

    def _parameter_text(self, problem: Path, tour: Path) -> str:
        return (f"PROBLEM_FILE = {problem}\n"
                f"TOUR_FILE = {tour}\n"
                "RUNS = 1\n"
                "TRACE_LEVEL = 0\n")

    def _problem_text(self) -> str:
        sum_max = sum(max(row) for row in self._d)
        exponent = _INT_MAX / sum_max - 1 if sum_max else math.inf
        if not math.isfinite(exponent) or exponent > 3 or exponent < 0:
            exponent = 3
        multiplier = 10 ** int(exponent)
        lines = [
            "NAME : atsp",
            "TYPE : ATSP",
            f"DIMENSION : {self.n}",
            "EDGE_WEIGHT_TYPE: EXPLICIT",
            "EDGE_WEIGHT_FORMAT: FULL_MATRIX ",
            "EDGE_WEIGHT_SECTION",
        ]
        lines += ["".join(f"{int(x * multiplier)} " for x in row) for row in self._d]
        return "\n".join(lines) + "\n"

    def _parse_tour(self, text: str) -> list[int]:
        tokens = text.split()
        try:
            start = tokens.index("TOUR_SECTION") + 1
            vertices = [int(tok) - 1 for tok in tokens[start:start + self.n]]
        except ValueError as exc:
            raise TourError("malformed tour file") from exc
        if len(vertices) != self.n:
            raise TourError("tour file is incomplete")
        return vertices + [vertices[0]]

    def _solve(self) -> list[int]:
        with tempfile.TemporaryDirectory() as tmp:
            parameter_file = Path(tmp) / "atsp.par"
            problem_file = Path(tmp) / "atsp.in"
            tour_file = Path(tmp) / "atsp.out"
            parameter_file.write_text(self._parameter_text(problem_file, tour_file))
            problem_file.write_text(self._problem_text())
            try:
                result = subprocess.run([*self._command, str(parameter_file)],
                                        capture_output=True, check=False)
            except OSError as exc:
                raise TourError(f"LKH could not be started: {exc}") from exc
            if result.returncode != 0:
                raise TourError("LKH failed")
            if not tour_file.exists():
                raise TourError("LKH wrote no tour")
            return self._parse_tour(tour_file.read_text())

    def path(self) -> list[int]:
        return list(self._path)