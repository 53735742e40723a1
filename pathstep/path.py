"""Utilities for reconstructing paths from predecessor tables."""

from __future__ import annotations

from typing import List, Mapping, Optional

from .exceptions import InvalidQueryError, NotFoundError
from .graph import Graph, VertexId, Weight


def reconstruct_path(
    predecessors: Mapping[VertexId, Optional[VertexId]],
    source: VertexId,
    target: VertexId,
) -> List[VertexId]:
    """Return the vertices from ``source`` to ``target`` (inclusive).

    Args:
        predecessors: Predecessor of each vertex, ``None`` for the source and
            for vertices that were never reached.
        source: Source vertex identifier.
        target: Target vertex identifier.

    Raises:
        NotFoundError: If ``target`` has no entry in ``predecessors``.
        InvalidQueryError: If the chain ends before reaching ``source`` or
            loops back on itself.
    """
    if target not in predecessors:
        raise NotFoundError(f"unknown vertex {target!r}")
    chain: List[VertexId] = [target]
    seen = {target}
    cur = target
    while cur != source:
        prev = predecessors.get(cur)
        if prev is None:
            raise InvalidQueryError(f"vertex {target!r} is not reachable from {source!r}")
        if prev in seen:
            raise InvalidQueryError(f"predecessor cycle through {prev!r}")
        seen.add(prev)
        chain.append(prev)
        cur = prev
    chain.reverse()
    return chain


def path_weight(G: Graph, path: List[VertexId]) -> Weight:
    """Sum the cheapest edge weight between consecutive vertices of ``path``.

    Raises:
        InvalidQueryError: If two consecutive vertices are not joined by an edge.
    """
    total: Weight = 0
    for u, v in zip(path, path[1:]):
        weights = [e.weight for e in G.lookup(u).neighbours if e.target == v]
        if not weights:
            raise InvalidQueryError(f"no edge ({u}, {v}) in graph")
        total += min(weights)
    return total


__all__ = ["reconstruct_path", "path_weight"]
