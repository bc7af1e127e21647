"""Dijkstra's shortest paths driven by a visitor."""

from __future__ import annotations

import sys
from typing import Any, Iterable, List, Optional, Sequence, TextIO, Tuple

import numpy as np
import numpy.typing as npt

from .graph import GraphLike
from .logger import Logger, NoopLogger
from .path import reconstruct_path
from .state import Color, DijkstraStates, HeapEntry, create_dijkstra_states
from .visitor import DijkstraVisitor, LogDijkstraVisitor, TargetVisitor, TrivialDijkstraVisitor


def _set_source(state: DijkstraStates, graph: GraphLike, s: Any) -> bool:
    """Finalize source ``s`` at distance zero; ``False`` if it already was."""
    i = graph.vertex_index(s)
    if state.colormap[i] == Color.BLACK:
        return False
    state.parents[i] = s
    state.dists[i] = 0
    state.colormap[i] = Color.BLACK
    return True


def _process_neighbors(
    state: DijkstraStates,
    graph: GraphLike,
    edge_weights: npt.NDArray[Any],
    u: Any,
    du: Any,
    visitor: DijkstraVisitor,
) -> None:
    """Relax every outgoing edge of ``u``, which is final at distance ``du``."""
    dists = state.dists
    parents = state.parents
    colormap = state.colormap
    heap = state.heap
    hmap = state.hmap
    examined = 0
    decreased = 0

    for e in graph.out_edges(u):
        v = graph.target(e)
        iv = graph.vertex_index(v)
        v_color = colormap[iv]
        examined += 1

        if v_color == Color.WHITE:
            dists[iv] = du + edge_weights[graph.edge_index(e)]
            dv = dists[iv]
            parents[iv] = u
            colormap[iv] = Color.GRAY
            visitor.discover_vertex(u, v, dv)
            hmap[iv] = heap.insert(HeapEntry(v, dv))

        elif v_color == Color.GRAY:
            cand = du + edge_weights[graph.edge_index(e)]
            if cand < dists[iv]:
                dists[iv] = cand
                dv = dists[iv]
                parents[iv] = u
                heap.decrease(hmap[iv], HeapEntry(v, dv))
                decreased += 1
                visitor.update_vertex(u, v, dv)

    state.counters["edges_examined"] += examined
    state.counters["decrease_keys"] += decreased


def run_dijkstra(
    graph: GraphLike,
    edge_weights: npt.NDArray[Any],
    visitor: DijkstraVisitor,
    sources: Sequence[Any],
    state: DijkstraStates,
    logger: Optional[Logger] = None,
) -> DijkstraStates:
    """Run Dijkstra's algorithm from ``sources`` into a fresh ``state``.

    Sources are finalized first, in the given order, each one included
    before the next. They go straight from white to black, so they are never
    passed to ``discover_vertex``. Their neighbors are relaxed only after every
    source was included, then vertices are popped from the heap in order of
    distance until it drains.

    A visitor returning ``False`` from ``include_vertex`` ends the run at once:
    the vertex just included keeps its final distance but its neighbors are
    not examined and ``close_vertex`` is not called for it.

    Args:
        graph: Graph implementing :class:`~dijkstrax.graph.GraphLike`.
        edge_weights: Non-negative weight per edge index. Negative weights are
            not detected and give wrong distances.
        visitor: Hooks invoked during the traversal.
        sources: Source vertices. Repeated sources are handled once.
        state: State from :func:`~dijkstrax.state.create_dijkstra_states`.
        logger: Optional logger receiving run-level events.

    Returns:
        ``state``, with ``state.completed`` telling whether the heap drained.
    """
    logger = logger or NoopLogger()
    heap = state.heap
    colormap = state.colormap
    d0 = state.dists.dtype.type(0)
    state.completed = False
    logger.debug("dijkstra.start", n=graph.num_vertices(), sources=len(sources))

    # initialize for sources

    roots: List[Any] = []
    for s in sources:
        if not _set_source(state, graph, s):
            continue
        roots.append(s)
        state.counters["included"] += 1
        if not visitor.include_vertex(s, s, d0):
            logger.debug("dijkstra.stop", vertex=s, dist=d0, completed=False, **state.counters)
            return state

    # process direct neighbors of all sources

    for s in roots:
        _process_neighbors(state, graph, edge_weights, s, d0, visitor)
        visitor.close_vertex(s)

    # main loop

    while not heap.is_empty():
        # pick next vertex to include
        u, du = heap.pop_min()
        ui = graph.vertex_index(u)
        colormap[ui] = Color.BLACK
        state.counters["included"] += 1
        if not visitor.include_vertex(state.parents[ui], u, du):
            logger.debug("dijkstra.stop", vertex=u, dist=du, completed=False, **state.counters)
            return state

        _process_neighbors(state, graph, edge_weights, u, du, visitor)
        visitor.close_vertex(u)

    state.completed = True
    logger.debug("dijkstra.finish", completed=True, **state.counters)
    return state


def _as_sources(sources: Any) -> List[Any]:
    if isinstance(sources, (list, range, np.ndarray)):
        return list(sources)
    return [sources]


def dijkstra_shortest_paths_multi(
    graph: GraphLike,
    edge_weights: npt.ArrayLike,
    sources: Iterable[Any],
    no_parent: Any,
    visitor: Optional[DijkstraVisitor] = None,
    logger: Optional[Logger] = None,
) -> DijkstraStates:
    """Compute shortest paths from every vertex of ``sources`` at once.

    Each vertex ends up with its distance to the nearest source.

    Args:
        graph: Graph implementing :class:`~dijkstrax.graph.GraphLike`.
        edge_weights: Non-negative weight per edge index. Its NumPy dtype is
            the distance type; integer weights give integer distances.
        sources: Any iterable of source vertices, consumed once. Its items
            are always vertices, so a tuple of ints means several sources.
        no_parent: Parent recorded for vertices that are never reached.
        visitor: Optional :class:`~dijkstrax.visitor.DijkstraVisitor`.
        logger: Optional logger receiving run-level events.

    Returns:
        The populated traversal state.

    Raises:
        InputError: If the weights are not real numbers.
    """
    weights = np.asarray(edge_weights)
    state = create_dijkstra_states(graph, weights.dtype, no_parent)
    return run_dijkstra(
        graph,
        weights,
        visitor if visitor is not None else TrivialDijkstraVisitor(),
        list(sources),
        state,
        logger=logger,
    )


def dijkstra_shortest_paths(
    graph: GraphLike,
    edge_weights: npt.ArrayLike,
    sources: Any,
    no_parent: Any,
    visitor: Optional[DijkstraVisitor] = None,
    logger: Optional[Logger] = None,
) -> DijkstraStates:
    """Compute shortest paths from one source, or from a list of sources.

    A ``list``, ``range`` or NumPy array is read as several sources. Any other
    value, tuples included, is one vertex, so graphs with tuple-valued
    vertices work. Use :func:`dijkstra_shortest_paths_multi` to pass sources
    as an arbitrary iterable.

    Args:
        graph: Graph implementing :class:`~dijkstrax.graph.GraphLike`.
        edge_weights: Non-negative weight per edge index.
        sources: A source vertex or a list of them.
        no_parent: Parent recorded for vertices that are never reached.
        visitor: Optional :class:`~dijkstrax.visitor.DijkstraVisitor`.
        logger: Optional logger receiving run-level events.

    Returns:
        The populated traversal state.

    Raises:
        InputError: If the weights are not real numbers.

    Examples:
        ```python
        >>> from dijkstrax import Graph
        >>> g = Graph.from_edges(3, [(0, 1, 2), (1, 2, 1), (0, 2, 5)])
        >>> st = dijkstra_shortest_paths(g, g.weights(), 0, -1)
        >>> st.dists.tolist(), st.parents
        ([0, 2, 3], [0, 0, 1])
        ```
    """
    return dijkstra_shortest_paths_multi(
        graph, edge_weights, _as_sources(sources), no_parent, visitor=visitor, logger=logger
    )


def dijkstra_shortest_paths_withlog(
    graph: GraphLike,
    edge_weights: npt.ArrayLike,
    sources: Any,
    no_parent: Any,
    stream: Optional[TextIO] = None,
) -> DijkstraStates:
    """Like :func:`dijkstra_shortest_paths` with every hook traced to ``stream``.

    ``stream`` defaults to standard output.
    """
    return dijkstra_shortest_paths(
        graph,
        edge_weights,
        sources,
        no_parent,
        visitor=LogDijkstraVisitor(stream or sys.stdout),
    )


def shortest_path(
    graph: GraphLike,
    edge_weights: npt.ArrayLike,
    source: Any,
    target: Any,
    no_parent: Any = None,
) -> Tuple[Any, List[Any]]:
    """Return the distance and a shortest path from ``source`` to ``target``.

    The search stops as soon as ``target`` is final, so vertices farther away
    are never examined.

    Returns:
        ``(distance, path)``; an unreachable target gives the dtype's
        unreached sentinel and an empty path.
    """
    finder = TargetVisitor([target])
    state = dijkstra_shortest_paths(graph, edge_weights, source, no_parent, visitor=finder)
    if not finder.done:
        return state.infinity, []
    return finder.found[target], reconstruct_path(state, graph, target)


__all__ = [
    "dijkstra_shortest_paths",
    "dijkstra_shortest_paths_multi",
    "dijkstra_shortest_paths_withlog",
    "run_dijkstra",
    "shortest_path",
]
