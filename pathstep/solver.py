"""Step-wise Dijkstra solver that exposes every micro-step of a run."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Set, Tuple, Union

from .exceptions import ConfigError, InvalidQueryError, NotFoundError
from .graph import Edge, Graph, VertexId, sorted_ids
from .logger import Logger, NoopLogger
from .path import reconstruct_path

Distance = Union[int, float]


class Phase(Enum):
    """Position of the solver in its state machine."""

    IDLE = "Idle"
    SELECTING_VERTEX = "SelectingVertex"
    VISITING_EDGES = "VisitingEdges"
    TERMINATED = "Terminated"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DistanceEntry:
    """Tentative distance from the source and the vertex it was reached from."""

    distance: Distance
    predecessor: Optional[VertexId] = None


@dataclass(frozen=True)
class SolverConfig:
    """Configuration knobs for the solver.

    Attributes:
        infinity: Distance assigned to vertices not reached yet. Defaults to
            ``math.inf``; a finite value acts as a saturating sentinel and
            must exceed the graph's total edge weight, which
            :meth:`StepSolver.reset` checks.
    """

    infinity: Distance = math.inf

    def __post_init__(self) -> None:
        if isinstance(self.infinity, bool) or not isinstance(self.infinity, (int, float)):
            raise ConfigError(f"infinity must be numeric, got {self.infinity!r}")
        if not self.infinity > 0:
            raise ConfigError("infinity must be positive.")


@dataclass(frozen=True)
class StepEvent:
    """What a single :meth:`StepSolver.advance` call did.

    ``kind`` is one of ``"select"`` (new current vertex), ``"enter"`` (cursor
    placed on the first edge), ``"relax"`` (edge to an unvisited vertex
    inspected), ``"skip"`` (edge to a settled vertex ignored), ``"settle"``
    (vertex without edges settled) or ``"noop"`` (already terminated).
    """

    kind: str
    phase: Phase
    vertex: Optional[VertexId] = None
    edge: Optional[Edge] = None
    improved: bool = False
    settled: bool = False


@dataclass(frozen=True)
class SolverView:
    """Read-only snapshot of the solver taken between two steps."""

    phase: Phase
    source: VertexId
    current: Optional[VertexId]
    current_edge: Optional[Edge]
    table: Mapping[VertexId, DistanceEntry]
    unvisited: FrozenSet[VertexId]
    settled: Tuple[VertexId, ...]
    graph: Graph
    infinity: Distance = math.inf

    @property
    def is_done(self) -> bool:
        return self.phase is Phase.TERMINATED

    def distance(self, vid: VertexId) -> Distance:
        return self.table[vid].distance

    def is_reachable(self, vid: VertexId) -> bool:
        return self.table[vid].distance < self.infinity


@dataclass(frozen=True)
class ShortestPathResult:
    """Distances and predecessors produced by a finished run."""

    distances: Dict[VertexId, Distance]
    predecessors: Dict[VertexId, Optional[VertexId]]


class StepSolver:
    """Dijkstra's algorithm driven one observable micro-step at a time.

    Each :meth:`advance` call performs one unit of work: select the next
    vertex, place the cursor on its first edge, relax one edge, or settle a
    vertex without edges. Once the unvisited set empties the solver moves to
    :attr:`Phase.TERMINATED` and further calls do nothing.

    Among unvisited vertices with equal distance the one with the lowest id
    is selected first.

    Examples:
        ```python
        >>> g = Graph.from_edges([(1, 2, 3), (2, 3, 1)])
        >>> solver = StepSolver(g, 1)
        >>> solver.solve().distances
        {1: 0, 2: 3, 3: 4}
        >>> solver.shortest_path_to(3)
        [2, 3]
        ```
    """

    def __init__(
        self,
        G: Graph,
        source: VertexId,
        config: Optional[SolverConfig] = None,
        logger: Logger | None = None,
    ) -> None:
        """Initialize the solver.

        Args:
            G: Input graph. The solver keeps its own copy.
            source: Source vertex identifier.
            config: Optional solver configuration.
            logger: Optional event logger.

        Raises:
            NotFoundError: If ``source`` is not a vertex of ``G``.
        """
        self.cfg = config or SolverConfig()
        self.logger = logger or NoopLogger()
        self._graph = G.copy()
        self._source = source
        self._order: Dict[VertexId, int] = {}
        self._table: Dict[VertexId, DistanceEntry] = {}
        self._unvisited: Set[VertexId] = set()
        self._settled: List[VertexId] = []
        self._current: Optional[VertexId] = None
        self._cursor = 0
        self._phase = Phase.IDLE
        self.counters: Dict[str, int] = {}
        self.reset(source)

    # ---------- driving ---------------------------------------------------

    def reset(self, source: Optional[VertexId] = None, graph: Optional[Graph] = None) -> None:
        """Reinitialize the run, optionally with a new source and/or graph.

        The solver state is left untouched when either error is raised.

        Raises:
            NotFoundError: If the source is not a vertex of the graph.
            ConfigError: If a finite ``infinity`` does not exceed the total
                edge weight of the graph, so a real distance could reach it.
        """
        G = self._graph if graph is None else graph.copy()
        src = self._source if source is None else source
        G.lookup(src)

        inf = self.cfg.infinity
        if not math.isinf(inf):
            total = sum(w for _u, _v, w in G.edges())
            if inf <= total:
                raise ConfigError(
                    f"infinity={inf} must exceed the total edge weight {total}"
                )

        self._graph = G
        self._source = src
        self._order = {vid: i for i, vid in enumerate(sorted_ids(G))}
        self._table = {vid: DistanceEntry(inf) for vid in G}
        self._table[src] = DistanceEntry(0)
        self._unvisited = set(G)
        self._settled = []
        self._current = None
        self._cursor = 0
        self._phase = Phase.IDLE
        self.counters = {
            "steps": 0,
            "selections": 0,
            "edges_visited": 0,
            "edges_skipped": 0,
            "relaxations": 0,
            "settled": 0,
        }
        self.logger.info("reset", source=src, n=len(G), m=G.num_edges())

    def advance(self) -> StepEvent:
        """Perform one micro-step and describe it.

        Raises:
            NotFoundError: If the edge under inspection targets a vertex that
                is not in the graph.
        """
        if self._phase is Phase.TERMINATED:
            return StepEvent("noop", self._phase)

        event: Optional[StepEvent] = None
        while self._phase is not Phase.TERMINATED:
            if self._phase is Phase.IDLE and not self._unvisited:
                self._phase = Phase.TERMINATED
                self.logger.debug("terminate", steps=self.counters["steps"] + 1)
                break
            if event is not None:
                break
            if self._phase is Phase.IDLE:
                event = self._select_vertex()
            elif self._phase is Phase.SELECTING_VERTEX:
                event = self._enter_vertex()
            else:
                event = self._visit_edge()

        self.counters["steps"] += 1
        if event is None:
            return StepEvent("noop", self._phase)
        if event.phase is not self._phase:
            event = replace(event, phase=self._phase)
        return event

    def run(self, max_steps: Optional[int] = None) -> int:
        """Advance until terminated or ``max_steps`` calls were made.

        Returns:
            Number of :meth:`advance` calls performed.
        """
        steps = 0
        while not self.is_done() and (max_steps is None or steps < max_steps):
            self.advance()
            steps += 1
        return steps

    def solve(self) -> ShortestPathResult:
        """Run to termination and return distances and predecessors."""
        self.run()
        return self.result()

    # ---------- state machine ---------------------------------------------

    def _select_vertex(self) -> StepEvent:
        order = self._order
        table = self._table
        current = min(self._unvisited, key=lambda v: (table[v].distance, order[v]))
        self._current = current
        self._cursor = 0
        self._phase = Phase.SELECTING_VERTEX
        self.counters["selections"] += 1
        self.logger.debug("select", vertex=current, distance=table[current].distance)
        return StepEvent("select", self._phase, vertex=current)

    def _enter_vertex(self) -> StepEvent:
        current = self._current
        vtx = self._graph.lookup(current)
        if not vtx.neighbours:
            self._settle(current)
            return StepEvent("settle", self._phase, vertex=current, settled=True)
        self._cursor = 0
        self._phase = Phase.VISITING_EDGES
        return StepEvent("enter", self._phase, vertex=current, edge=vtx.neighbours[0])

    def _visit_edge(self) -> StepEvent:
        current = self._current
        vtx = self._graph.lookup(current)
        edge = vtx.neighbours[self._cursor]
        self._graph.lookup(edge.target)

        improved = False
        if edge.target in self._unvisited:
            kind = "relax"
            self.counters["edges_visited"] += 1
            base = self._table[current].distance
            if base < self.cfg.infinity:
                cand = base + edge.weight
                if cand < self._table[edge.target].distance:
                    self._table[edge.target] = DistanceEntry(cand, current)
                    self.counters["relaxations"] += 1
                    improved = True
                    self.logger.debug(
                        "relax", vertex=current, target=edge.target, distance=cand
                    )
        else:
            kind = "skip"
            self.counters["edges_skipped"] += 1

        self._cursor += 1
        settled = self._cursor >= len(vtx.neighbours)
        if settled:
            self._settle(current)
        return StepEvent(kind, self._phase, vertex=current, edge=edge, improved=improved, settled=settled)

    def _settle(self, vid: VertexId) -> None:
        self._unvisited.discard(vid)
        self._settled.append(vid)
        self._current = None
        self._cursor = 0
        self._phase = Phase.IDLE
        self.counters["settled"] += 1
        self.logger.debug("settle", vertex=vid, distance=self._table[vid].distance)

    # ---------- queries ---------------------------------------------------

    def is_done(self) -> bool:
        return self._phase is Phase.TERMINATED

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def source(self) -> VertexId:
        return self._source

    @property
    def current(self) -> Optional[VertexId]:
        """Vertex being expanded, ``None`` while idle or terminated."""
        return self._current

    @property
    def current_edge(self) -> Optional[Edge]:
        """Edge the next step will inspect, only set while visiting edges."""
        if self._phase is not Phase.VISITING_EDGES:
            return None
        return self._graph.lookup(self._current).neighbours[self._cursor]

    @property
    def unvisited(self) -> FrozenSet[VertexId]:
        return frozenset(self._unvisited)

    @property
    def table(self) -> Mapping[VertexId, DistanceEntry]:
        return MappingProxyType(dict(self._table))

    def view(self) -> SolverView:
        """Return a read-only snapshot of the current state."""
        return SolverView(
            phase=self._phase,
            source=self._source,
            current=self._current,
            current_edge=self.current_edge,
            table=self.table,
            unvisited=self.unvisited,
            settled=tuple(self._settled),
            graph=self._graph.copy(),
            infinity=self.cfg.infinity,
        )

    def result(self) -> ShortestPathResult:
        """Return the current distances and predecessors (final once done)."""
        return ShortestPathResult(
            distances={v: e.distance for v, e in self._table.items()},
            predecessors={v: e.predecessor for v, e in self._table.items()},
        )

    def shortest_path_to(
        self, destination: VertexId, include_source: bool = False
    ) -> List[VertexId]:
        """Return the shortest path to ``destination``.

        Args:
            destination: Target vertex identifier.
            include_source: Prepend the source vertex to the result.

        Returns:
            Vertices after the source up to and including ``destination``;
            empty when ``destination`` is the source itself.

        Raises:
            NotFoundError: If ``destination`` is not in the graph.
            InvalidQueryError: If the run has not terminated or
                ``destination`` is unreachable.
        """
        if destination not in self._table:
            raise NotFoundError(f"unknown vertex {destination!r}")
        if not self.is_done():
            raise InvalidQueryError(f"solver has not terminated (phase {self._phase})")
        if not self._table[destination].distance < self.cfg.infinity:
            raise InvalidQueryError(f"vertex {destination!r} is not reachable from {self._source!r}")
        preds = {v: e.predecessor for v, e in self._table.items()}
        path = reconstruct_path(preds, self._source, destination)
        return path if include_source else path[1:]

    def summary(self) -> Dict[str, int]:
        """Return a copy of internal counter values."""
        return dict(self.counters)


__all__ = [
    "DistanceEntry",
    "Phase",
    "ShortestPathResult",
    "SolverConfig",
    "SolverView",
    "StepEvent",
    "StepSolver",
]
