"""Tests for the step-wise solver state machine."""

import math

import pytest

from pathstep.exceptions import ConfigError, InvalidQueryError, NotFoundError
from pathstep.graph import Edge, Graph, Vertex
from pathstep.solver import DistanceEntry, Phase, SolverConfig, StepSolver


class TestInitialState:
    """State right after construction or reset."""

    def test_source_zero_others_infinite(self, five_vertex):
        G, source = five_vertex
        solver = StepSolver(G, source)
        table = solver.table
        assert table[source] == DistanceEntry(0, None)
        for vid in (2, 3, 4, 5):
            assert table[vid].distance == math.inf
            assert table[vid].predecessor is None

    def test_starts_idle_with_everything_unvisited(self, five_vertex):
        G, source = five_vertex
        solver = StepSolver(G, source)
        assert solver.phase is Phase.IDLE
        assert solver.unvisited == frozenset({1, 2, 3, 4, 5})
        assert solver.current is None
        assert solver.current_edge is None
        assert not solver.is_done()

    def test_unknown_source_raises(self, chain):
        with pytest.raises(NotFoundError):
            StepSolver(chain, 42)


class TestTransitions:
    """One observable unit of work per advance() call."""

    def test_chain_step_by_step(self, chain):
        solver = StepSolver(chain, 1)

        ev = solver.advance()
        assert (ev.kind, ev.vertex, ev.phase) == ("select", 1, Phase.SELECTING_VERTEX)
        assert solver.current == 1
        assert solver.current_edge is None

        ev = solver.advance()
        assert ev.kind == "enter"
        assert solver.phase is Phase.VISITING_EDGES
        assert solver.current_edge == Edge(2, 3)
        # nothing relaxed yet
        assert solver.table[2].distance == math.inf

        ev = solver.advance()
        assert ev.kind == "relax" and ev.improved and ev.settled
        assert solver.table[2] == DistanceEntry(3, 1)
        assert solver.phase is Phase.IDLE
        assert solver.unvisited == frozenset({2, 3})

        assert solver.advance().vertex == 2
        solver.advance()
        solver.advance()
        assert solver.table[3] == DistanceEntry(4, 2)

        ev = solver.advance()
        assert (ev.kind, ev.vertex) == ("select", 3)

        ev = solver.advance()
        assert ev.kind == "settle" and ev.settled
        assert ev.phase is Phase.TERMINATED
        assert solver.is_done()
        assert solver.summary()["steps"] == 8

    def test_single_vertex_terminates_one_step_after_selection(self):
        solver = StepSolver(Graph.from_edges([], vertices=[7]), 7)
        ev = solver.advance()
        assert ev.kind == "select"
        assert not solver.is_done()
        ev = solver.advance()
        assert ev.kind == "settle"
        assert solver.is_done()
        assert solver.table[7] == DistanceEntry(0, None)

    def test_edge_to_settled_vertex_is_skipped(self, five_vertex):
        G, source = five_vertex
        solver = StepSolver(G, source)
        kinds = []
        while not solver.is_done():
            ev = solver.advance()
            if ev.edge is not None and ev.kind in ("relax", "skip"):
                kinds.append((ev.vertex, ev.edge.target, ev.kind))
        assert (5, 1, "skip") in kinds
        assert (4, 5, "skip") in kinds
        assert solver.summary()["steps"] == 19

    def test_ties_broken_by_lowest_id(self):
        G = Graph.from_edges([(1, 3, 1), (1, 2, 1), (2, 4, 0), (3, 4, 0)])
        solver = StepSolver(G, 1)
        selected = []
        while not solver.is_done():
            ev = solver.advance()
            if ev.kind == "select":
                selected.append(ev.vertex)
        assert selected == [1, 2, 3, 4]
        assert solver.table[4] == DistanceEntry(1, 2)

    def test_equal_candidate_does_not_replace_predecessor(self):
        G = Graph.from_edges([(1, 2, 1), (1, 3, 1), (2, 4, 1), (3, 4, 1)])
        solver = StepSolver(G, 1)
        solver.solve()
        assert solver.table[4] == DistanceEntry(2, 2)

    def test_advance_after_termination_is_noop(self, five_vertex):
        G, source = five_vertex
        solver = StepSolver(G, source)
        solver.solve()
        before = solver.view()
        steps = solver.summary()["steps"]
        for _ in range(5):
            ev = solver.advance()
            assert ev.kind == "noop"
            assert ev.phase is Phase.TERMINATED
        after = solver.view()
        assert dict(after.table) == dict(before.table)
        assert after.unvisited == before.unvisited
        assert after.settled == before.settled
        assert solver.summary()["steps"] == steps

    def test_dangling_edge_raises_not_found(self):
        G = Graph({1: Vertex(1, [Edge(2, 1)])})
        solver = StepSolver(G, 1)
        solver.advance()
        solver.advance()
        with pytest.raises(NotFoundError):
            solver.advance()
        assert solver.phase is Phase.VISITING_EDGES
        assert solver.current_edge == Edge(2, 1)

    def test_self_loop_and_duplicate_edges(self):
        G = Graph.from_edges([(1, 1, 0), (1, 2, 5), (1, 2, 2)])
        res = StepSolver(G, 1).solve()
        assert res.distances == {1: 0, 2: 2}
        assert res.predecessors == {1: None, 2: 1}

    def test_run_respects_max_steps(self, five_vertex):
        G, source = five_vertex
        solver = StepSolver(G, source)
        assert solver.run(max_steps=3) == 3
        assert not solver.is_done()
        assert solver.run() == 16
        assert solver.is_done()


class TestReset:
    """reset() reinitializes without touching the graph."""

    def test_reset_restarts_run(self, five_vertex):
        G, source = five_vertex
        solver = StepSolver(G, source)
        first = solver.solve()
        solver.reset()
        assert solver.phase is Phase.IDLE
        assert len(solver.unvisited) == 5
        assert solver.summary()["steps"] == 0
        assert solver.solve() == first

    def test_reset_with_new_source(self, five_vertex):
        G, _ = five_vertex
        solver = StepSolver(G, 1)
        solver.solve()
        solver.reset(source=3)
        assert solver.source == 3
        assert solver.table[3].distance == 0
        assert solver.table[1].distance == math.inf
        res = solver.solve()
        assert res.distances[4] == 2

    def test_reset_with_new_graph(self, chain):
        solver = StepSolver(chain, 1)
        solver.solve()
        solver.reset(graph=Graph.from_edges([(1, 9, 4)]))
        assert solver.unvisited == frozenset({1, 9})
        assert solver.solve().distances == {1: 0, 9: 4}

    def test_reset_unknown_source_keeps_state(self, chain):
        solver = StepSolver(chain, 1)
        solver.advance()
        with pytest.raises(NotFoundError):
            solver.reset(source=99)
        assert solver.source == 1
        assert solver.current == 1
        assert solver.phase is Phase.SELECTING_VERTEX

    def test_solver_holds_its_own_copy(self, chain):
        solver = StepSolver(chain, 1)
        chain.add_edge(1, 3, 1)
        assert solver.solve().distances[3] == 4
        solver.reset()
        assert solver.solve().distances[3] == 4


class TestShortestPath:
    """Path reconstruction guards and results."""

    def test_path_excludes_source(self, five_vertex):
        G, source = five_vertex
        solver = StepSolver(G, source)
        solver.solve()
        assert solver.shortest_path_to(3) == [5, 4, 2, 3]
        assert solver.shortest_path_to(3, include_source=True) == [1, 5, 4, 2, 3]
        assert solver.shortest_path_to(source) == []

    def test_before_termination_raises(self, five_vertex):
        G, source = five_vertex
        solver = StepSolver(G, source)
        solver.run(max_steps=4)
        with pytest.raises(InvalidQueryError):
            solver.shortest_path_to(5)

    def test_unreachable_raises(self, disconnected):
        G, source = disconnected
        solver = StepSolver(G, source)
        solver.solve()
        assert solver.table[4].distance == math.inf
        assert solver.table[4].predecessor is None
        with pytest.raises(InvalidQueryError):
            solver.shortest_path_to(4)

    def test_unknown_destination_raises(self, chain):
        solver = StepSolver(chain, 1)
        solver.solve()
        with pytest.raises(NotFoundError):
            solver.shortest_path_to(99)


class TestConfig:
    """SolverConfig validation and finite infinity sentinels."""

    @pytest.mark.parametrize("value", [0, -5, "big", True])
    def test_invalid_infinity(self, value):
        with pytest.raises(ConfigError):
            SolverConfig(infinity=value)

    def test_finite_infinity_saturates(self, disconnected):
        G, source = disconnected
        solver = StepSolver(G, source, config=SolverConfig(infinity=999))
        res = solver.solve()
        assert res.distances == {1: 0, 2: 1, 3: 5, 4: 999}
        with pytest.raises(InvalidQueryError):
            solver.shortest_path_to(4)

    def test_finite_infinity_never_relaxes_from_unreached(self):
        G = Graph.from_edges([(2, 3, 0)], vertices=[1])
        solver = StepSolver(G, 1, config=SolverConfig(infinity=10))
        res = solver.solve()
        assert res.distances == {1: 0, 2: 10, 3: 10}
        assert res.predecessors[3] is None

    @pytest.mark.parametrize("value", [5, 17])
    def test_finite_infinity_must_exceed_total_weight(self, five_vertex, value):
        G, source = five_vertex
        with pytest.raises(ConfigError):
            StepSolver(G, source, config=SolverConfig(infinity=value))

    def test_finite_infinity_above_total_weight(self, five_vertex):
        G, source = five_vertex
        total = sum(w for _u, _v, w in G.edges())
        solver = StepSolver(G, source, config=SolverConfig(infinity=total + 1))
        assert solver.solve().distances[3] == 6
        assert solver.shortest_path_to(3) == [5, 4, 2, 3]

    def test_reset_rejects_heavier_graph(self, chain):
        solver = StepSolver(chain, 1, config=SolverConfig(infinity=5))
        with pytest.raises(ConfigError):
            solver.reset(graph=Graph.from_edges([(1, 2, 9)]))
        assert solver.solve().distances == {1: 0, 2: 3, 3: 4}


class TestView:
    """Read-only snapshots for renderers."""

    def test_view_is_a_snapshot(self, chain):
        solver = StepSolver(chain, 1)
        solver.advance()
        solver.advance()
        view = solver.view()
        solver.advance()
        assert view.phase is Phase.VISITING_EDGES
        assert view.current == 1
        assert view.current_edge == Edge(2, 3)
        assert view.table[2].distance == math.inf
        assert solver.table[2].distance == 3

    def test_view_table_is_read_only(self, chain):
        view = StepSolver(chain, 1).view()
        with pytest.raises(TypeError):
            view.table[1] = DistanceEntry(5)  # type: ignore[index]

    def test_view_tracks_settled_order(self, five_vertex):
        G, source = five_vertex
        solver = StepSolver(G, source)
        solver.solve()
        view = solver.view()
        assert view.is_done
        assert view.settled == (1, 5, 4, 2, 3)
        assert view.unvisited == frozenset()
        assert view.current is None
