"""Graph capability consumed by the traversal and a list-backed graph."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import Any, Hashable, Iterable, Iterator, List, NamedTuple, Optional, Protocol, Tuple

import numpy as np
import numpy.typing as npt

from .exceptions import GraphFormatError, InputError

Vertex = int
Weight = float
EdgeTuple = Tuple[Vertex, Vertex, Weight]


class GraphLike(Protocol):
    """What the traversal needs from a graph.

    Vertices may be any hashable value as long as :meth:`vertex_index` maps
    them onto ``0 .. num_vertices() - 1``. Edges are opaque; the traversal only
    asks for their target and their index into the edge-weight array.
    """

    def num_vertices(self) -> int:
        """Return the number of vertices."""
        ...

    def vertex_index(self, v: Any) -> int:
        """Return the dense index of vertex ``v``."""
        ...

    def out_edges(self, v: Any) -> Iterable[Any]:
        """Return the outgoing edges of ``v``."""
        ...

    def target(self, e: Any) -> Hashable:
        """Return the head vertex of edge ``e``."""
        ...

    def edge_index(self, e: Any) -> int:
        """Return the dense index of edge ``e`` in the weight array."""
        ...


class Edge(NamedTuple):
    """Outgoing half of an edge as seen from ``source``."""

    index: int
    source: Vertex
    target: Vertex


def check_weight(u: Any, v: Any, w: Any) -> None:
    """Raise :class:`GraphFormatError` unless ``w`` is a non-negative real number."""
    if isinstance(w, bool) or not isinstance(w, (Real, np.number)):
        raise GraphFormatError(f"non-numeric weight {w!r} on edge ({u}, {v})")
    if w < 0:
        raise GraphFormatError(f"negative weight {w} on edge ({u}, {v})")


@dataclass
class Graph:
    """Graph over vertices ``0 .. n-1`` with one weight per edge index.

    In an undirected graph every edge is listed in the adjacency of both
    endpoints under the same edge index, so it owns a single weight.

    Negative weights are not supported: attempting to insert an edge with
    ``w < 0`` raises :class:`~dijkstrax.exceptions.GraphFormatError` that cites
    the offending edge.

    Attributes:
        n: Number of vertices.
        directed: Whether edges are one-way.
        adj: Outgoing :class:`Edge` lists per vertex.
    """

    n: int
    directed: bool = True

    def __post_init__(self) -> None:
        """Validate vertex count and initialize adjacency lists."""
        if not isinstance(self.n, int) or self.n <= 0:
            raise InputError("Graph.n must be a positive integer.")
        self.adj: List[List[Edge]] = [[] for _ in range(self.n)]
        self._ends: List[Tuple[Vertex, Vertex]] = []
        self._weights: List[Weight] = []

    def add_edge(self, u: Vertex, v: Vertex, w: Weight) -> int:
        """Add an edge between ``u`` and ``v`` and return its index.

        Args:
            u: Tail vertex.
            v: Head vertex.
            w: Non-negative edge weight. Integers stay integers.

        Raises:
            InputError: If ``u`` or ``v`` are out of range.
            GraphFormatError: If ``w`` is negative or not a number.

        Examples:
            ```python
            >>> g = Graph(2, directed=False)
            >>> g.add_edge(0, 1, 1.5)
            0
            >>> g.adj
            [[Edge(index=0, source=0, target=1)], [Edge(index=0, source=1, target=0)]]
            ```
        """
        if not (0 <= u < self.n and 0 <= v < self.n):
            raise InputError("u and v must be vertex ids in [0, n).")
        check_weight(u, v, w)
        idx = len(self._weights)
        self._weights.append(w)
        self._ends.append((u, v))
        self.adj[u].append(Edge(idx, u, v))
        if not self.directed and u != v:
            self.adj[v].append(Edge(idx, v, u))
        return idx

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[EdgeTuple], directed: bool = True) -> "Graph":
        """Create a graph from an iterable of ``(u, v, w)`` tuples.

        Edge indices follow the iteration order.
        """
        g = cls(n, directed=directed)
        for u, v, w in edges:
            g.add_edge(int(u), int(v), w)
        return g

    # ---- capability ---------------------------------------------------

    def num_vertices(self) -> int:
        """Return the number of vertices."""
        return self.n

    def vertex_index(self, v: Vertex) -> int:
        """Vertices are their own index."""
        return v

    def out_edges(self, v: Vertex) -> List[Edge]:
        """Return the outgoing edges of ``v``."""
        return self.adj[v]

    def target(self, e: Edge) -> Vertex:
        """Return the head of ``e``."""
        return e.target

    def edge_index(self, e: Edge) -> int:
        """Return the weight-array index of ``e``."""
        return e.index

    # ---- helpers ------------------------------------------------------

    def num_edges(self) -> int:
        """Return the number of edges (undirected edges count once)."""
        return len(self._weights)

    def out_degree(self, u: Vertex) -> int:
        """Return the number of edges leaving ``u``."""
        return len(self.adj[u])

    def edges(self) -> Iterator[EdgeTuple]:
        """Yield ``(u, v, w)`` in edge-index order."""
        for (u, v), w in zip(self._ends, self._weights):
            yield u, v, w

    def weights(self, dtype: Optional[npt.DTypeLike] = None) -> npt.NDArray[Any]:
        """Return the edge-weight array indexed by edge index.

        Args:
            dtype: Optional NumPy dtype. When omitted NumPy infers it, so an
                all-integer graph yields an integer array.
        """
        if not self._weights:
            return np.zeros(0, dtype=dtype or np.float64)
        return np.asarray(self._weights, dtype=dtype)


__all__ = ["Edge", "EdgeTuple", "Graph", "GraphLike", "Vertex", "Weight", "check_weight"]
