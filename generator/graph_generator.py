"""
Random weighted graph generator for driving the step solver.

SUPPORTED GRAPH TYPES
---------------------
1. complete
   Every vertex has an edge to every other vertex. Edge order per vertex
   follows vertex id order, which makes the visitation order of a run easy
   to follow on screen.

2. erdos_renyi
   Each ordered pair (u, v) gets an edge with probability ``density``.
   With ``ensure_weakly_connected`` a backbone chain i -> i+1 is added first
   so that small instances are never totally disconnected.

Weights are integers drawn uniformly from ``[w_min, w_max)``. All generated
graphs use non-negative weights and are safe for Dijkstra.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Tuple

from pathstep.exceptions import ConfigError
from pathstep.graph import Graph

GraphType = Literal["complete", "erdos_renyi"]
EdgeList = List[Tuple[int, int, int]]


@dataclass(frozen=True)
class GeneratedGraph:
    n: int
    m: int
    graph: Graph
    edges: EdgeList
    source: int
    metadata: Dict[str, object] = field(default_factory=dict)


def _sample_weight(rng: random.Random, w_min: int, w_max: int) -> int:
    # int(random() * max) as in the original demo: w_max itself never occurs
    return w_min + int(rng.random() * (w_max - w_min))


def generate_graph(
    *,
    n: int,
    graph_type: GraphType = "complete",
    w_min: int = 0,
    w_max: int = 10,
    seed: Optional[int] = 0,
    first_id: int = 1,
    density: float = 0.3,
    symmetric: bool = False,
    allow_self_loops: bool = False,
    ensure_weakly_connected: bool = True,
) -> GeneratedGraph:
    """
    Generate a directed weighted graph on ids ``first_id .. first_id + n - 1``.

    Notes:
    - With ``symmetric=True`` each sampled edge is mirrored with the same
      weight, producing an undirected graph in directed form.
    - The source of the returned instance is always ``first_id``.

    Raises:
        ConfigError: On invalid sizes, weight bounds or density.
    """
    if n <= 0:
        raise ConfigError("n must be > 0.")
    if w_min < 0:
        raise ConfigError("w_min must be >= 0 for Dijkstra-safe graphs.")
    if w_max <= w_min:
        raise ConfigError("w_max must be > w_min.")
    if not 0.0 <= density <= 1.0:
        raise ConfigError("density must be in [0, 1].")

    rng = random.Random(seed)
    ids = list(range(first_id, first_id + n))

    seen: set[Tuple[int, int]] = set()
    edges: EdgeList = []

    def add_edge(u: int, v: int) -> None:
        if not allow_self_loops and u == v:
            return
        if (u, v) in seen:
            return
        w = _sample_weight(rng, w_min, w_max)
        seen.add((u, v))
        edges.append((u, v, w))
        if symmetric and (v, u) not in seen:
            seen.add((v, u))
            edges.append((v, u, w))

    if graph_type == "complete":
        for u in ids:
            for v in ids:
                add_edge(u, v)
    elif graph_type == "erdos_renyi":
        if ensure_weakly_connected:
            for u, v in zip(ids, ids[1:]):
                add_edge(u, v)
        for u in ids:
            for v in ids:
                if rng.random() < density:
                    add_edge(u, v)
    else:
        raise ConfigError(f"Unknown graph type: {graph_type}")

    # Keep each vertex's edges grouped by tail, in the order they were drawn.
    edges.sort(key=lambda e: e[0])
    G = Graph.from_edges(edges, vertices=ids)
    return GeneratedGraph(
        n=n,
        m=len(edges),
        graph=G,
        edges=edges,
        source=first_id,
        metadata={
            "graph_type": graph_type,
            "w_min": w_min,
            "w_max": w_max,
            "seed": seed,
            "density": density if graph_type == "erdos_renyi" else 1.0,
            "symmetric": symmetric,
        },
    )


__all__ = ["GeneratedGraph", "GraphType", "generate_graph"]
