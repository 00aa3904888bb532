"""Core graph model: vertices, edges, graphs and solver interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Iterable, Optional


@dataclass(frozen=True)
class Vertex:
    """A vertex identified by a user-chosen id, with planar coordinates."""

    id: int
    x: float = 0.0
    y: float = 0.0


@dataclass
class Edge:
    """A directed edge from ``tail`` to ``head`` (vertex ids).

    Reverse costs default to the forward ones.  ``cost`` is the cost the
    edge carries in a route; it defaults to the service cost for required
    edges and the deadhead cost otherwise.
    """

    tail: int
    head: int
    required: bool = True
    service_cost: float = 0.0
    deadhead_cost: Optional[float] = None
    reverse_service_cost: Optional[float] = None
    reverse_deadhead_cost: Optional[float] = None
    cost: Optional[float] = None
    deadhead_demand: float = 0.0
    reverse_deadhead_demand: Optional[float] = None

    def __post_init__(self) -> None:
        if self.deadhead_cost is None:
            self.deadhead_cost = self.service_cost
        if self.reverse_service_cost is None:
            self.reverse_service_cost = self.service_cost
        if self.reverse_deadhead_cost is None:
            self.reverse_deadhead_cost = self.deadhead_cost
        if self.reverse_deadhead_demand is None:
            self.reverse_deadhead_demand = self.deadhead_demand
        if self.cost is None:
            self.cost = self.service_cost if self.required else self.deadhead_cost

    def reversed(self) -> Edge:
        """Return a copy pointing the other way, with directional data swapped."""
        return replace(
            self,
            tail=self.head,
            head=self.tail,
            service_cost=self.reverse_service_cost,
            reverse_service_cost=self.service_cost,
            deadhead_cost=self.reverse_deadhead_cost,
            reverse_deadhead_cost=self.deadhead_cost,
            deadhead_demand=self.reverse_deadhead_demand,
            reverse_deadhead_demand=self.deadhead_demand,
        )


class Graph:
    """A graph holding required and non-required edges over a vertex set."""

    def __init__(self, vertices: Iterable[Vertex], edges: Iterable[Edge] = ()) -> None:
        self.vertices: list[Vertex] = list(vertices)
        self._index: dict[int, int] = {}
        for i, vertex in enumerate(self.vertices):
            if vertex.id in self._index:
                raise ValueError(f"duplicate vertex id {vertex.id}")
            self._index[vertex.id] = i
        self.required: list[Edge] = []
        self.nonrequired: list[Edge] = []
        self.depot_id: Optional[int] = None
        self.add_edges(edges)

    @property
    def n(self) -> int:
        return len(self.vertices)

    @property
    def m(self) -> int:
        return len(self.required)

    @property
    def m_nr(self) -> int:
        return len(self.nonrequired)

    @property
    def edges(self) -> list[Edge]:
        """Required edges followed by non-required edges."""
        return self.required + self.nonrequired

    @property
    def has_depot(self) -> bool:
        return self.depot_id is not None

    @property
    def depot(self) -> Optional[int]:
        """Index of the depot vertex, or None when no depot is set."""
        if self.depot_id is None:
            return None
        return self._index[self.depot_id]

    def vertex_index(self, vertex_id: int) -> int:
        try:
            return self._index[vertex_id]
        except KeyError:
            raise KeyError(f"unknown vertex {vertex_id}") from None

    def edge_endpoints(self, edge: Edge) -> tuple[int, int]:
        """Return the (tail, head) vertex indices of an edge."""
        return self.vertex_index(edge.tail), self.vertex_index(edge.head)

    def add_edges(self, edges: Iterable[Edge]) -> None:
        """Add edges; nothing is added if any endpoint is unknown."""
        edges = list(edges)
        for edge in edges:
            self.edge_endpoints(edge)
        for edge in edges:
            (self.required if edge.required else self.nonrequired).append(edge)

    def clear_edges(self) -> None:
        self.required.clear()
        self.nonrequired.clear()

    def add_reverse_edges(self) -> None:
        """Add a reversed copy of every edge."""
        self.add_edges([edge.reversed() for edge in self.edges])

    def set_depot(self, vertex_id: int) -> None:
        self.vertex_index(vertex_id)
        self.depot_id = vertex_id

    def total_cost(self) -> float:
        return sum(edge.cost for edge in self.edges)


class ShortestPaths(ABC):
    """All-pairs shortest paths between vertex indices."""

    @abstractmethod
    def path(self, i: int, j: int) -> list[Edge]:
        """Edges of a shortest path from vertex index i to j."""

    @abstractmethod
    def cost(self, i: int, j: int) -> float:
        """Cost of a shortest path from vertex index i to j."""


class TourSolver(ABC):
    """Solver for a closed tour over the indices of a distance matrix."""

    @abstractmethod
    def path(self) -> list[int]:
        """The tour as a list of indices, closed by repeating the first."""