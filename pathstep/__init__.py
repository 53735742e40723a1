"""Public package exports for :mod:`pathstep`."""

from __future__ import annotations

from .baselines import bellman_ford, dijkstra_reference, floyd_warshall, floyd_warshall_from
from .exceptions import (
    ConfigError,
    GraphFormatError,
    InputError,
    InvalidQueryError,
    NotFoundError,
    PathStepError,
)
from .graph import Edge, Graph, Vertex
from .logger import Logger, NoopLogger, StdLogger
from .path import path_weight, reconstruct_path
from .solver import (
    DistanceEntry,
    Phase,
    ShortestPathResult,
    SolverConfig,
    SolverView,
    StepEvent,
    StepSolver,
)

__version__ = "0.1.0"

__all__ = [
    "Edge",
    "Graph",
    "Vertex",
    "StepSolver",
    "SolverConfig",
    "SolverView",
    "StepEvent",
    "Phase",
    "DistanceEntry",
    "ShortestPathResult",
    "dijkstra_reference",
    "bellman_ford",
    "floyd_warshall",
    "floyd_warshall_from",
    "reconstruct_path",
    "path_weight",
    "Logger",
    "NoopLogger",
    "StdLogger",
    "PathStepError",
    "InputError",
    "GraphFormatError",
    "ConfigError",
    "NotFoundError",
    "InvalidQueryError",
]
