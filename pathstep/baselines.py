"""Reference shortest-path implementations used as oracles."""

from __future__ import annotations

import heapq
import math
from typing import Dict, List, Optional, Tuple

import numpy as np
import numpy.typing as npt

from .graph import Graph, VertexId, sorted_ids
from .solver import Distance, ShortestPathResult


def _init(G: Graph, source: VertexId) -> Tuple[Dict[VertexId, Distance], Dict[VertexId, Optional[VertexId]]]:
    G.lookup(source)
    dist: Dict[VertexId, Distance] = {v: math.inf for v in G}
    pred: Dict[VertexId, Optional[VertexId]] = {v: None for v in G}
    dist[source] = 0
    return dist, pred


def dijkstra_reference(G: Graph, source: VertexId) -> ShortestPathResult:
    """Run heap-based Dijkstra with lazy deletion.

    Args:
        G: Input graph with non-negative edge weights.
        source: Source vertex identifier.

    Returns:
        Distances and predecessors from running Dijkstra.
    """
    dist, pred = _init(G, source)
    rank = {v: i for i, v in enumerate(sorted_ids(G))}
    pq: List[Tuple[Distance, int, VertexId]] = [(0, rank[source], source)]
    seen = set()
    while pq:
        d, _r, u = heapq.heappop(pq)
        if d != dist[u] or u in seen:
            continue
        seen.add(u)
        for e in G.lookup(u).neighbours:
            nd = d + e.weight
            if nd < dist[e.target]:
                dist[e.target] = nd
                pred[e.target] = u
                heapq.heappush(pq, (nd, rank[e.target], e.target))
    return ShortestPathResult(distances=dist, predecessors=pred)


def bellman_ford(G: Graph, source: VertexId, max_iters: Optional[int] = None) -> ShortestPathResult:
    """Standard Bellman-Ford with early stopping.

    Args:
        G: Input graph.
        source: Source vertex identifier.
        max_iters: Optional cap on the number of passes (``n - 1`` by default).
    """
    dist, pred = _init(G, source)
    edges = list(G.edges())
    n = len(G)
    limit = n - 1 if max_iters is None else min(max_iters, n - 1)
    for _ in range(limit):
        updated = False
        for u, v, w in edges:
            du = dist[u]
            if du == math.inf:
                continue
            if du + w < dist[v]:
                dist[v] = du + w
                pred[v] = u
                updated = True
        if not updated:
            break
    return ShortestPathResult(distances=dist, predecessors=pred)


def floyd_warshall(G: Graph) -> Tuple[List[VertexId], npt.NDArray[np.float64]]:
    """All-pairs shortest distances.

    Returns:
        The vertex ids in matrix order and an ``n x n`` matrix where entry
        ``[i, j]`` is the distance from ``ids[i]`` to ``ids[j]`` (``inf`` when
        unreachable).
    """
    ids = list(sorted_ids(G))
    index = {v: i for i, v in enumerate(ids)}
    n = len(ids)
    D = np.full((n, n), np.inf, dtype=np.float64)
    np.fill_diagonal(D, 0.0)
    for u, v, w in G.edges():
        i, j = index[u], index[v]
        D[i, j] = min(D[i, j], float(w))
    for k in range(n):
        D = np.minimum(D, D[:, k, np.newaxis] + D[np.newaxis, k, :])
    return ids, D


def floyd_warshall_from(G: Graph, source: VertexId) -> Dict[VertexId, Distance]:
    """Distances from ``source`` taken from the all-pairs matrix."""
    G.lookup(source)
    ids, D = floyd_warshall(G)
    out: Dict[VertexId, Distance] = {}
    for v, d in zip(ids, D[ids.index(source)]):
        d = float(d)
        if math.isinf(d):
            out[v] = math.inf
        else:
            out[v] = int(d) if d.is_integer() else d
    return out


__all__ = ["dijkstra_reference", "bellman_ford", "floyd_warshall", "floyd_warshall_from"]
