"""Single-vehicle line coverage routing: graph model, shortest paths, tours and solvers."""

__version__ = "0.1.0"