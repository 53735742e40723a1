"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

from typing import Dict, List

import pytest

from generator.scenarios import load_scenario
from pathstep.graph import Graph
from pathstep.solver import DistanceEntry, StepSolver


@pytest.fixture
def five_vertex() -> tuple[Graph, int]:
    """Return the five-vertex scenario graph and its source."""
    return load_scenario("five")


@pytest.fixture
def chain() -> Graph:
    """Return 1 -> 2 (3), 2 -> 3 (1); vertex 3 has no outgoing edges."""
    return Graph.from_edges([(1, 2, 3), (2, 3, 1)])


@pytest.fixture
def disconnected() -> tuple[Graph, int]:
    """Return a graph where vertex 4 cannot be reached from the source."""
    return load_scenario("disconnected")


def _record(solver: StepSolver) -> List[Dict[int, DistanceEntry]]:
    tables = [dict(solver.table)]
    while not solver.is_done():
        solver.advance()
        tables.append(dict(solver.table))
    return tables


@pytest.fixture
def record_tables():
    """Return a helper that advances a solver to termination, collecting the table after every step."""
    return _record
