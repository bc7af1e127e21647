"""Reference Dijkstra implementation used to cross-check the visitor engine."""

from __future__ import annotations

import heapq
import math
from typing import Any, Iterable, List, Optional, Tuple

from .graph import GraphLike


def dijkstra_reference(
    graph: GraphLike, edge_weights: Any, sources: Iterable[Any]
) -> Tuple[List[float], List[Optional[Any]]]:
    """Run the textbook lazy-deletion Dijkstra.

    Args:
        graph: Graph with non-negative edge weights.
        edge_weights: Weight per edge index.
        sources: Iterable of source vertices.

    Returns:
        ``(dists, parents)`` indexed by vertex index, with ``math.inf`` and
        ``None`` for unreached vertices and sources as their own parent.
    """
    n = graph.num_vertices()
    dist: List[float] = [math.inf] * n
    pred: List[Optional[Any]] = [None] * n
    pq: List[Tuple[float, int, Any]] = []
    for s in sources:
        i = graph.vertex_index(s)
        dist[i] = 0.0
        pred[i] = s
        pq.append((0.0, i, s))
    heapq.heapify(pq)
    done = [False] * n
    while pq:
        d, i, u = heapq.heappop(pq)
        if done[i] or d != dist[i]:
            continue
        done[i] = True
        for e in graph.out_edges(u):
            v = graph.target(e)
            j = graph.vertex_index(v)
            nd = d + float(edge_weights[graph.edge_index(e)])
            if nd < dist[j]:
                dist[j] = nd
                pred[j] = u
                heapq.heappush(pq, (nd, j, v))
    return dist, pred


__all__ = ["dijkstra_reference"]
