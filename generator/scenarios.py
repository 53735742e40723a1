"""
Hand-written graphs for demos and tests.

Each scenario is a dictionary of keyword arguments for ``Graph.from_edges``
plus the source vertex. Edge lists are given in visitation order.
"""

from __future__ import annotations

from typing import Dict

from pathstep.graph import Graph

# -------------------------------------------------------------------
# Five vertices as listed edge by edge (directed)
# -------------------------------------------------------------------

FIVE_VERTEX = dict(
    edges=[
        (1, 2, 5),
        (1, 5, 2),
        (2, 3, 2),
        (2, 4, 1),
        (3, 4, 2),
        (4, 5, 1),
        (4, 2, 1),
        (5, 1, 2),
        (5, 4, 1),
    ],
    source=1,
)

# -------------------------------------------------------------------
# The same five vertices laid out as the interactive demo graph
# -------------------------------------------------------------------

FIVE_VERTEX_DEMO = dict(
    edges=[
        (1, 2, 5), (1, 5, 2),
        (2, 1, 5), (2, 3, 2), (2, 4, 1),
        (3, 2, 2), (3, 4, 2),
        (4, 3, 2), (4, 5, 1), (4, 2, 1),
        (5, 1, 2), (5, 4, 1),
    ],
    source=1,
)

# -------------------------------------------------------------------
# Degenerate shapes
# -------------------------------------------------------------------

SINGLE_VERTEX = dict(edges=[], vertices=[1], source=1)

DISCONNECTED = dict(
    edges=[(1, 2, 1), (2, 3, 4), (1, 3, 7)],
    vertices=[4],
    source=1,
)

ZERO_WEIGHTS = dict(
    edges=[(1, 2, 0), (2, 3, 0), (1, 3, 1), (3, 1, 0)],
    source=1,
)

SCENARIOS: Dict[str, dict] = {
    "five": FIVE_VERTEX,
    "demo": FIVE_VERTEX_DEMO,
    "single": SINGLE_VERTEX,
    "disconnected": DISCONNECTED,
    "zero-weights": ZERO_WEIGHTS,
}


def load_scenario(name: str) -> tuple[Graph, int]:
    """Return the graph and source vertex of scenario ``name``.

    Raises:
        KeyError: If no scenario has that name.
    """
    spec = SCENARIOS[name]
    G = Graph.from_edges(spec["edges"], vertices=spec.get("vertices", ()))
    return G, spec["source"]


__all__ = ["SCENARIOS", "load_scenario"]
