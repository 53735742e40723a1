"""Weighted graph representation consumed by the step solver."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, Iterator, List, Mapping, Sequence, Tuple

from .exceptions import GraphFormatError, NotFoundError

VertexId = Hashable
Weight = int
EdgeTriple = Tuple[VertexId, VertexId, Weight]


@dataclass(frozen=True)
class Edge:
    """Outgoing edge owned by the vertex it starts from."""

    target: VertexId
    weight: Weight


@dataclass(frozen=True)
class Vertex:
    """A vertex and its ordered outgoing edges.

    The order of ``neighbours`` is the order in which the solver inspects the
    edges while expanding the vertex. Lists are frozen into tuples so a
    running solver never sees its edge sequence change.
    """

    id: VertexId
    neighbours: Tuple[Edge, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.neighbours, tuple):
            object.__setattr__(self, "neighbours", tuple(self.neighbours))


def _check_weight(u: VertexId, v: VertexId, w: object) -> Weight:
    if isinstance(w, bool) or not isinstance(w, (int, float)):
        raise GraphFormatError(f"non-numeric weight {w!r} on edge ({u}, {v})")
    if isinstance(w, float):
        if not math.isfinite(w) or not w.is_integer():
            raise GraphFormatError(f"weight {w} on edge ({u}, {v}) is not a whole number")
        w = int(w)
    if w < 0:
        raise GraphFormatError(f"negative weight {w} on edge ({u}, {v})")
    return w


class Graph:
    """Directed weighted graph keyed by vertex id.

    The constructor takes a mapping of ``VertexId -> Vertex`` and keeps its own
    copy of it. No validation is performed there: duplicate edges, self-loops
    and asymmetric weights are all allowed. Use :meth:`from_edges` or
    :meth:`add_edge` to get weight checks, and :meth:`validate` to check that
    every edge points at a known vertex.

    :meth:`add_edge` is for building a graph only. Once a graph is handed to
    a solver it is treated as immutable: the solver works on its own
    :meth:`copy`, so later ``add_edge`` calls never reach a running solver.

    Examples:
        ```python
        >>> g = Graph.from_edges([(1, 2, 5), (2, 3, 1)])
        >>> g.lookup(1).neighbours
        (Edge(target=2, weight=5),)
        ```
    """

    def __init__(self, vertices: Mapping[VertexId, Vertex] | None = None) -> None:
        self._vertices: Dict[VertexId, Vertex] = dict(vertices or {})

    # ---------- construction ----------------------------------------------

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[EdgeTriple],
        vertices: Iterable[VertexId] = (),
        symmetric: bool = False,
    ) -> "Graph":
        """Create a graph from ``(u, v, w)`` triples.

        Args:
            edges: Edges in visitation order.
            vertices: Extra vertex ids to create even without edges.
            symmetric: If ``True``, also add ``(v, u, w)`` for every edge.

        Returns:
            A graph populated with the provided vertices and edges.

        Raises:
            GraphFormatError: If a weight is negative, non-numeric or not a whole number.
        """
        g = cls({v: Vertex(v) for v in vertices})
        for u, v, w in edges:
            g.add_edge(u, v, w)
            if symmetric:
                g.add_edge(v, u, w)
        return g

    def add_edge(self, u: VertexId, v: VertexId, w: Weight) -> None:
        """Append a directed edge from ``u`` to ``v``, creating missing vertices.

        Builder-time API; see the class docstring.

        Raises:
            GraphFormatError: If ``w`` is negative, non-numeric or not a whole number.
        """
        w = _check_weight(u, v, w)
        for vid in (u, v):
            if vid not in self._vertices:
                self._vertices[vid] = Vertex(vid)
        src = self._vertices[u]
        self._vertices[u] = Vertex(u, src.neighbours + (Edge(v, w),))

    def copy(self) -> "Graph":
        """Return an independent copy (vertices and edges are immutable)."""
        return Graph(self._vertices)

    # ---------- lookup ----------------------------------------------------

    def lookup(self, vid: VertexId) -> Vertex:
        """Return the vertex with id ``vid``.

        Raises:
            NotFoundError: If ``vid`` is not in the graph.
        """
        try:
            return self._vertices[vid]
        except KeyError:
            raise NotFoundError(f"unknown vertex {vid!r}") from None

    def __contains__(self, vid: object) -> bool:
        return vid in self._vertices

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[VertexId]:
        return iter(self._vertices)

    def vertices(self) -> List[Vertex]:
        return list(self._vertices.values())

    def edges(self) -> Iterator[EdgeTriple]:
        """Yield every edge as a ``(u, v, w)`` triple."""
        for vid, vtx in self._vertices.items():
            for e in vtx.neighbours:
                yield vid, e.target, e.weight

    def out_degree(self, vid: VertexId) -> int:
        return len(self.lookup(vid).neighbours)

    def num_edges(self) -> int:
        return sum(len(v.neighbours) for v in self._vertices.values())

    def validate(self) -> None:
        """Check that every edge targets a vertex of this graph.

        Raises:
            NotFoundError: Naming the first dangling edge found.
        """
        for u, v, _w in self.edges():
            if v not in self._vertices:
                raise NotFoundError(f"edge ({u}, {v}) targets unknown vertex {v!r}")

    def __repr__(self) -> str:
        return f"Graph(n={len(self)}, m={self.num_edges()})"


def sorted_ids(ids: Iterable[VertexId]) -> Sequence[VertexId]:
    """Return ids in ascending order, falling back to ``repr`` for mixed types."""
    ids = list(ids)
    try:
        return sorted(ids)
    except TypeError:
        return sorted(ids, key=repr)


__all__ = ["Edge", "Graph", "Vertex", "VertexId", "Weight", "EdgeTriple", "sorted_ids"]
