import math

import numpy as np
import pytest

from dijkstrax import (
    Color,
    Graph,
    NumpyGraph,
    RecordingVisitor,
    create_dijkstra_states,
    dijkstra_reference,
    dijkstra_shortest_paths,
    dijkstra_shortest_paths_multi,
    dijkstra_shortest_paths_withlog,
    path_weight,
    reconstruct_path,
    run_dijkstra,
    shortest_path,
)
from dijkstrax.exceptions import InputError
from dijkstrax.visitor import DijkstraVisitor

from .conftest import random_edges


class StopOnNthInclude(DijkstraVisitor):
    def __init__(self, n):
        self.n = n
        self.included = []
        self.closed = []
        self.discovered = []

    def discover_vertex(self, u, v, d):
        self.discovered.append(v)

    def include_vertex(self, u, v, d):
        self.included.append(v)
        return len(self.included) < self.n

    def close_vertex(self, v):
        self.closed.append(v)


class HeapSyncChecker(DijkstraVisitor):
    """Checks that the heap holds exactly the gray vertices at their current distance."""

    def __init__(self, state):
        self.state = state
        self.checks = 0

    def _check(self):
        st = self.state
        in_heap = {}
        for _, entry in st.heap.items():
            in_heap[entry.vertex] = entry.dist
        gray = {i for i, c in enumerate(st.colormap) if c == Color.GRAY}
        assert set(in_heap) == gray
        for v, d in in_heap.items():
            assert d == st.dists[v]
        self.checks += 1

    def include_vertex(self, u, v, d):
        self._check()
        return True

    def close_vertex(self, v):
        self._check()


def test_scenario_distances_and_parents(scenario):
    state = dijkstra_shortest_paths(scenario, scenario.weights(), 0, -1)
    assert state.dists.tolist() == [0, 2, 3, 4]
    assert state.parents == [0, 0, 1, 2]
    assert state.completed
    assert all(c == Color.BLACK for c in state.colormap)
    assert state.heap.is_empty()


def test_scenario_event_order(scenario):
    rec = RecordingVisitor()
    dijkstra_shortest_paths(scenario, scenario.weights(), 0, -1, visitor=rec)
    assert rec.events == [
        ("include", 0, 0, 0),
        ("discover", 0, 1, 2),
        ("discover", 0, 2, 5),
        ("close", 0),
        ("include", 0, 1, 2),
        ("update", 1, 2, 3),
        ("discover", 1, 3, 6),
        ("close", 1),
        ("include", 1, 2, 3),
        ("update", 2, 3, 4),
        ("close", 2),
        ("include", 2, 3, 4),
        ("close", 3),
    ]


def test_integer_weights_give_integer_distances():
    g = Graph.from_edges(5, [(0, 1, 2), (1, 2, 1)])
    state = dijkstra_shortest_paths(g, g.weights(), 0, -1)
    assert state.dists.dtype.kind == "i"
    assert state.dists[3] == np.iinfo(state.dists.dtype).max
    assert state.infinity == state.dists[4]
    assert state.parents[3] == -1


def test_disconnected_sources_each_own_component(two_components):
    g = two_components
    state = dijkstra_shortest_paths(g, g.weights(), [0, 3], -1)
    assert state.dists.tolist() == [0.0, 1.0, 2.0, 0.0, 2.0, math.inf]
    assert state.parents == [0, 0, 1, 3, 3, -1]
    assert not state.is_reached(5)
    assert reconstruct_path(state, g, 4) == [3, 4]
    assert reconstruct_path(state, g, 5) == []


def test_nearest_source_wins():
    g = Graph.from_edges(5, [(0, 1, 1), (1, 2, 1), (2, 3, 1), (4, 3, 1)])
    state = dijkstra_shortest_paths(g, g.weights(), [0, 4], None)
    assert state.dists.tolist() == [0, 1, 2, 1, 0]
    assert state.parents == [0, 0, 1, 4, 4]


def test_stop_on_second_include_finalizes_one_non_source(scenario):
    vis = StopOnNthInclude(2)
    state = dijkstra_shortest_paths(scenario, scenario.weights(), 0, -1, visitor=vis)
    assert vis.included == [0, 1]
    assert vis.closed == [0]
    assert not state.completed
    assert state.colormap.tolist() == [Color.BLACK, Color.BLACK, Color.GRAY, Color.WHITE]
    # 1's neighbors were never examined
    assert state.dists[2] == 5
    assert state.dists[3] == state.infinity
    assert len(state.heap) == 1


def test_stop_at_first_source_skips_later_sources(two_components):
    g = two_components
    vis = StopOnNthInclude(1)
    state = dijkstra_shortest_paths(g, g.weights(), [0, 3], -1, visitor=vis)
    assert vis.included == [0]
    assert vis.discovered == []
    assert vis.closed == []
    assert state.is_finalized(0)
    assert not state.is_reached(3)
    assert not state.is_reached(1)
    assert state.parents[3] == -1


def test_stop_at_second_source_before_any_neighbor(two_components):
    g = two_components
    vis = StopOnNthInclude(2)
    state = dijkstra_shortest_paths(g, g.weights(), [0, 3], -1, visitor=vis)
    assert vis.included == [0, 3]
    assert vis.closed == []
    assert state.heap.is_empty()
    assert not state.is_reached(1) and not state.is_reached(4)


def test_repeated_source_is_initialized_once(scenario):
    rec = RecordingVisitor()
    state = dijkstra_shortest_paths(scenario, scenario.weights(), [0, 0], -1, visitor=rec)
    assert len(rec.of_kind("include")) == 4
    assert rec.of_kind("close").count(("close", 0)) == 1
    assert state.dists.tolist() == [0, 2, 3, 4]


def test_ties_are_not_propagated():
    # two equal paths to 2; the first one found keeps the parent
    g = Graph.from_edges(3, [(0, 1, 1), (0, 2, 2), (1, 2, 1)])
    rec = RecordingVisitor()
    state = dijkstra_shortest_paths(g, g.weights(), 0, -1, visitor=rec)
    assert state.parents[2] == 0
    assert rec.of_kind("update") == []


def test_undirected_graph_runs_both_ways():
    g = Graph.from_edges(4, [(0, 1, 1.0), (1, 2, 2.5), (3, 2, 1.0)], directed=False)
    state = dijkstra_shortest_paths(g, g.weights(), 3, -1)
    assert state.dists.tolist() == [4.5, 3.5, 1.0, 0.0]
    assert reconstruct_path(state, g, 0) == [3, 2, 1, 0]


def test_tuple_vertex_is_a_single_source():
    class Grid:
        """2x2 grid whose vertices are (row, col) tuples."""

        cells = [(0, 0), (0, 1), (1, 0), (1, 1)]
        edges = {
            (0, 0): [((0, 1), 0), ((1, 0), 1)],
            (0, 1): [((1, 1), 2)],
            (1, 0): [((1, 1), 3)],
            (1, 1): [],
        }

        def num_vertices(self):
            return 4

        def vertex_index(self, v):
            return self.cells.index(v)

        def out_edges(self, v):
            return self.edges[v]

        def target(self, e):
            return e[0]

        def edge_index(self, e):
            return e[1]

    grid = Grid()
    state = dijkstra_shortest_paths(grid, [1.0, 1.0, 1.0, 5.0], (0, 0), None)
    assert state.dists.tolist() == [0.0, 1.0, 1.0, 2.0]
    assert state.parents == [(0, 0), (0, 0), (0, 0), (0, 1)]
    assert reconstruct_path(state, grid, (1, 1)) == [(0, 0), (0, 1), (1, 1)]


@pytest.mark.parametrize("seed", range(20))
def test_matches_reference_on_random_graphs(seed):
    n = 30
    g = Graph.from_edges(n, random_edges(n, 90, seed))
    w = g.weights()
    sources = [0] if seed % 2 else [0, n // 2, n - 1]
    state = dijkstra_shortest_paths(g, w, sources, -1)
    ref_dist, _ = dijkstra_reference(g, w, sources)
    for v in range(n):
        if math.isinf(ref_dist[v]):
            assert state.dists[v] == math.inf
            assert state.parents[v] == -1
            continue
        assert state.dists[v] == pytest.approx(ref_dist[v])
        path = reconstruct_path(state, g, v)
        assert path[0] in sources
        assert path[-1] == v
        assert path_weight(path, g, w) == pytest.approx(state.dists[v])


@pytest.mark.parametrize("seed", range(10))
def test_visitor_contract_on_random_graphs(seed):
    n = 25
    g = Graph.from_edges(n, random_edges(n, 70, seed, integral=True), directed=seed % 2 == 0)
    rec = RecordingVisitor()
    state = dijkstra_shortest_paths(g, g.weights(), [0, 1], -1, visitor=rec)

    reached = [v for v in range(n) if state.is_reached(v)]
    discovered = [e[2] for e in rec.of_kind("discover")]
    included = rec.of_kind("include")
    closed = [e[1] for e in rec.of_kind("close")]

    assert sorted(discovered) == [v for v in reached if v not in (0, 1)]
    assert sorted(e[2] for e in included) == reached
    assert sorted(closed) == reached
    for _, parent, v, d in included:
        assert d == state.dists[v]
        assert parent == state.parents[v]
    dists = [e[3] for e in included]
    assert dists == sorted(dists)
    for _, u, v, d in rec.of_kind("update"):
        assert d >= state.dists[v]


@pytest.mark.parametrize("seed", range(5))
def test_heap_tracks_gray_vertices(seed):
    n = 40
    g = Graph.from_edges(n, random_edges(n, 160, seed))
    w = g.weights()
    state = create_dijkstra_states(g, w.dtype, -1)
    checker = HeapSyncChecker(state)
    run_dijkstra(g, w, checker, [0], state)
    assert checker.checks > 0
    assert state.completed


class GrayWatcher(DijkstraVisitor):
    """Records discoveries and checks each one happens as the vertex turns gray."""

    def __init__(self, state):
        self.state = state
        self.discovered = []

    def discover_vertex(self, u, v, d):
        assert self.state.colormap[v] == Color.GRAY
        self.discovered.append(v)


def test_sources_are_never_discovered(scenario):
    w = scenario.weights()
    state = create_dijkstra_states(scenario, w.dtype, -1)
    watcher = GrayWatcher(state)
    run_dijkstra(scenario, w, watcher, [0], state)
    assert watcher.discovered == [1, 2, 3]


@pytest.mark.parametrize("sources", [(0, 3), (v for v in [0, 3])], ids=["tuple", "generator"])
def test_multi_accepts_any_iterable(two_components, sources):
    g = two_components
    state = dijkstra_shortest_paths_multi(g, g.weights(), sources, -1)
    assert state.dists.tolist() == [0.0, 1.0, 2.0, 0.0, 2.0, math.inf]
    assert state.parents == [0, 0, 1, 3, 3, -1]


def test_falsy_visitor_is_used():
    class Quiet(RecordingVisitor):
        def __len__(self):
            return 0

    g = Graph.from_edges(2, [(0, 1, 1)])
    vis = Quiet()
    assert not vis
    dijkstra_shortest_paths(g, g.weights(), 0, -1, visitor=vis)
    assert vis.of_kind("include") == [("include", 0, 0, 0), ("include", 0, 1, 1)]


def test_rerun_is_idempotent():
    n = 50
    g = Graph.from_edges(n, random_edges(n, 200, 3))
    a = dijkstra_shortest_paths(g, g.weights(), [0, 7], -1)
    b = dijkstra_shortest_paths(g, g.weights(), [0, 7], -1)
    assert np.array_equal(a.dists, b.dists)
    assert a.parents == b.parents


@pytest.mark.parametrize("directed", [True, False])
def test_numpy_graph_agrees_with_list_graph(directed):
    n = 35
    edges = random_edges(n, 120, 5)
    g = Graph.from_edges(n, edges, directed=directed)
    ng = NumpyGraph.from_edges(n, edges, directed=directed)
    a = dijkstra_shortest_paths(g, g.weights(), 0, -1)
    b = dijkstra_shortest_paths(ng, ng.weights(), 0, -1)
    assert np.allclose(a.dists, b.dists)


def test_counters(scenario):
    state = dijkstra_shortest_paths(scenario, scenario.weights(), 0, -1)
    assert state.summary() == {"edges_examined": 5, "decrease_keys": 2, "included": 4}


def test_non_numeric_weights_rejected(scenario):
    with pytest.raises(InputError):
        dijkstra_shortest_paths(scenario, ["a", "b", "c", "d", "e"], 0, -1)


def test_withlog_writes_to_stdout(scenario, capsys):
    state = dijkstra_shortest_paths_withlog(scenario, scenario.weights(), 0, -1)
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "include vertex 0 (parent = 0, dist = 0)"
    assert lines[1] == "discover vertex 1 (parent = 0, dist = 2)"
    assert "update distance 2 (parent = 1, dist = 3)" in lines
    assert lines[-1] == "close vertex 3"
    assert len(lines) == 13
    assert state.dists.tolist() == [0, 2, 3, 4]


def test_shortest_path_stops_at_target(scenario):
    dist, path = shortest_path(scenario, scenario.weights(), 0, 2)
    assert dist == 3
    assert path == [0, 1, 2]


def test_shortest_path_to_source(scenario):
    assert shortest_path(scenario, scenario.weights(), 0, 0) == (0, [0])


def test_shortest_path_unreachable(scenario):
    dist, path = shortest_path(scenario, scenario.weights(), 3, 0)
    assert path == []
    assert dist == np.iinfo(np.int64).max
