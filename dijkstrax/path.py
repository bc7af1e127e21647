"""Utilities for reconstructing paths from a traversal state."""

from __future__ import annotations

from typing import Any, List

from .exceptions import AlgorithmError
from .graph import GraphLike
from .state import DijkstraStates


def reconstruct_path(state: DijkstraStates, graph: GraphLike, target: Any) -> List[Any]:
    """Return the vertices from a source to ``target`` along ``state.parents``.

    Args:
        state: State returned by a traversal.
        graph: The graph the traversal ran on.
        target: Vertex to walk back from.

    Returns:
        Vertices from the source to ``target`` (inclusive), or an empty list
        if ``target`` was never reached. For a vertex that is not final yet
        the path is the best one found so far.

    Raises:
        AlgorithmError: If the parent links do not lead back to a source.
    """
    if not state.is_reached(graph.vertex_index(target)):
        return []

    n = graph.num_vertices()
    chain: List[Any] = [target]
    cur = target
    while True:
        parent = state.parents[graph.vertex_index(cur)]
        if parent == cur:
            break
        chain.append(parent)
        if len(chain) > n:
            raise AlgorithmError(f"parent links from {target!r} do not reach a source")
        cur = parent
    chain.reverse()
    return chain


def path_weight(path: List[Any], graph: GraphLike, edge_weights: Any) -> Any:
    """Return the total weight of ``path``, taking the lightest parallel edge.

    Raises:
        AlgorithmError: If two consecutive vertices are not joined by an edge.
    """
    total: Any = 0
    for u, v in zip(path, path[1:]):
        best = None
        for e in graph.out_edges(u):
            if graph.target(e) == v:
                w = edge_weights[graph.edge_index(e)]
                if best is None or w < best:
                    best = w
        if best is None:
            raise AlgorithmError(f"no edge from {u!r} to {v!r}")
        total = total + best
    return total


__all__ = ["path_weight", "reconstruct_path"]
