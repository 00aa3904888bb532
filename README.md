# linecover

Route planning for covering the required lines (edges) of a network: every
required edge must be serviced once, and any edge of the network may be
travelled without servicing ("deadheading") to get between them. The result
is a single closed route for one vehicle.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Building a graph

Graphs live in `linecover.network`:

- `Vertex(id, x=0.0, y=0.0)` – a vertex with a user-chosen id.
- `Edge(tail, head, required=True, service_cost=0.0, ...)` – a directed edge
  between vertex ids. `deadhead_cost`, `reverse_service_cost` and
  `reverse_deadhead_cost` default to the forward values; `cost` is the cost
  the edge carries in a route. `Edge.reversed()` returns a copy pointing the
  other way with its directional data swapped.
- `Graph(vertices, edges)` – keeps required edges in `graph.required` and
  non-required ones in `graph.nonrequired`. `set_depot(vertex_id)` marks a
  depot; `add_edges`, `clear_edges`, `add_reverse_edges`, `vertex_index`,
  `edge_endpoints` and `total_cost` do what their names say.

```python
from linecover.network import Edge, Graph, Vertex
from linecover.cpp import ChinesePostman

vertices = [Vertex(0), Vertex(1), Vertex(2)]
edges = [
    Edge(0, 1, service_cost=1.0),
    Edge(1, 2, service_cost=2.0),
    Edge(2, 0, service_cost=1.5),
]
graph = Graph(vertices, edges)

solver = ChinesePostman(graph)
route = solver.solve()           # list of Edge, in order
print(solver.check_solution())   # True when the route is one closed walk
print(solver.route_cost())
```

## Solvers

All solvers derive from `SLCSolver` (`linecover.base`). After `solve()`,
`solver.route` holds the route's edges in order and `solver.solution` holds
them as a graph; `check_solution()` and `route_cost()` report on it.

- `ChinesePostman` (`linecover.cpp`) – matches odd-degree vertices by
  shortest paths and takes an Euler tour over all edges.
- `RuralPostman` (`linecover.rpp`) – joins the components of the required
  edges with a minimum spanning tree, matches odd-degree vertices and takes
  an Euler tour.
- `Beta2ATSP`, `Beta2GTSP`, `Beta3ATSP` (`linecover.beta`) – start from a
  linear programme (`LPRelaxation` or `Beta3LP` in `linecover.lp`, solved
  with SciPy's HiGHS), orient the remaining edges, then join the separate
  components with a closed tour. `Beta2ATSP` and `Beta3ATSP` use the exact
  `HeldKarp` tour for up to 20 components and the external `LKH` program
  (`LKHSolver`, configurable through `lkh_executable`) beyond that;
  `Beta2GTSP` always uses the exact tour. They also report
  `computation_times()` (milliseconds per phase) and `costs()` (cost after
  the tour phase and the final cost). When the graph has a depot the route
  starts there.
- `ExactILP` (`linecover.ilp`) – an integer programme with a flow-based
  connectivity model, solved with SciPy's `milp` under an optional
  `time_limit`. `status` is 0 for a proven optimum and 1 when the time limit
  stopped the search with a feasible route; `objective_bound()` gives the
  best lower bound found.

Building blocks are available on their own: `FloydWarshall`
(`linecover.apsp`), `HeldKarp` and `LKHSolver` (`linecover.atsp`),
`is_balanced_digraph`, `is_balanced_graph` and `vertex_degrees`
(`linecover.balance`), `ConnectedComponents`, `required_graph` and
`num_required_components` (`linecover.components`), `euler_tour`
(`linecover.euler`), `mst_prim` (`linecover.mst`) and
`odd_vertex_matching` (`linecover.matching`).

## Errors

Failures are raised: `SolutionError` (`linecover.base`) when no valid route
can be built or a programme cannot be solved, `TourError`
(`linecover.atsp`) when a tour solver cannot produce a consistent tour, and
`ValueError` for unbalanced graphs or unmatched odd vertices.

## What this package does not do

It is a library only. There is no command-line program, no configuration
file handling, no reading of networks from map or data files, and no
writing of routes to files or plots: graphs are built in Python and routes
are returned as lists of `Edge`. Apart from `LKHSolver`, which runs an
`LKH` executable found on `PATH`, no external solver is used.