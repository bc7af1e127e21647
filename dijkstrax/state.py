"""Mutable per-run traversal state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from operator import attrgetter
from typing import Any, Dict, List, NamedTuple

import numpy as np
import numpy.typing as npt

from .exceptions import InputError
from .graph import GraphLike
from .heap import Handle, IndexedMinHeap


class Color(IntEnum):
    """Vertex colors; a vertex only ever moves forward through them."""

    WHITE = 0  # not reached
    GRAY = 1  # in the heap, distance tentative
    BLACK = 2  # distance final


class HeapEntry(NamedTuple):
    """Heap payload. Only ``dist`` takes part in the ordering."""

    vertex: Any
    dist: Any


def max_distance(dist_type: npt.DTypeLike) -> Any:
    """Return the "unreached" sentinel for a distance dtype.

    Float dtypes use ``inf``; integer dtypes use their largest value.

    Raises:
        InputError: If ``dist_type`` is not a real numeric dtype.
    """
    dt = np.dtype(dist_type)
    if np.issubdtype(dt, np.floating):
        return dt.type(np.inf)
    if np.issubdtype(dt, np.integer) and dt != np.bool_:
        return np.iinfo(dt).max
    raise InputError(f"distance type must be a real number type, got {dt}")


@dataclass
class DijkstraStates:
    """Per-vertex arrays of one traversal plus the heap of gray vertices.

    All arrays are indexed by ``graph.vertex_index(v)``.

    Attributes:
        parents: Predecessor on the shortest-path tree; sources point at
            themselves and unreached vertices hold the caller's sentinel.
        dists: Best known distance; unreached vertices hold
            :func:`max_distance` of the dtype.
        colormap: :class:`Color` values.
        heap: Entries ``(vertex, dist)`` for exactly the gray vertices.
        hmap: Heap handle of each gray vertex.
        completed: ``True`` once the heap drained, ``False`` while running or
            after a visitor stopped the run.
        counters: Work done by the run.
    """

    parents: List[Any]
    dists: npt.NDArray[Any]
    colormap: npt.NDArray[np.int8]
    heap: IndexedMinHeap[HeapEntry]
    hmap: List[Handle]
    completed: bool = False
    counters: Dict[str, int] = field(
        default_factory=lambda: {"edges_examined": 0, "decrease_keys": 0, "included": 0}
    )

    @property
    def infinity(self) -> Any:
        """Distance stored for vertices that were never reached."""
        return max_distance(self.dists.dtype)

    def is_reached(self, index: int) -> bool:
        """Return ``True`` if the vertex at ``index`` left the white state."""
        return bool(self.colormap[index] != Color.WHITE)

    def is_finalized(self, index: int) -> bool:
        """Return ``True`` if the vertex at ``index`` has its final distance."""
        return bool(self.colormap[index] == Color.BLACK)

    def summary(self) -> Dict[str, int]:
        """Return a copy of the counters."""
        return dict(self.counters)


def create_dijkstra_states(
    graph: GraphLike, dist_type: npt.DTypeLike, no_parent: Any
) -> DijkstraStates:
    """Allocate a fresh state sized for ``graph``.

    Args:
        graph: Graph the traversal will run on.
        dist_type: NumPy dtype of the distances, normally the edge weights' dtype.
        no_parent: Vertex value stored as the parent of unreached vertices.

    Returns:
        A state with every vertex white and an empty heap.
    """
    n = graph.num_vertices()
    dt = np.dtype(dist_type)
    return DijkstraStates(
        parents=[no_parent] * n,
        dists=np.full(n, max_distance(dt), dtype=dt),
        colormap=np.zeros(n, dtype=np.int8),
        heap=IndexedMinHeap(key=attrgetter("dist")),
        hmap=[-1] * n,
    )


__all__ = ["Color", "DijkstraStates", "HeapEntry", "create_dijkstra_states", "max_distance"]
