"""NumPy-backed graph representation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List

import numpy as np
import numpy.typing as npt

from .exceptions import GraphFormatError, InputError
from .graph import EdgeTuple, Graph, Vertex


@dataclass
class NumpyGraph:
    """Graph stored as compressed sparse rows.

    The outgoing edges of ``v`` occupy slots ``indptr[v]:indptr[v + 1]`` of
    ``targets`` and ``edge_ids``; an edge handed to the traversal is its slot
    number. Undirected edges fill one slot per endpoint and share an edge id.

    Negative weights are disallowed and will trigger
    :class:`~dijkstrax.exceptions.GraphFormatError` with the exact offending edge.
    """

    n: int
    indptr: npt.NDArray[np.intp]
    targets: npt.NDArray[np.intp]
    edge_ids: npt.NDArray[np.intp]
    edge_weights: npt.NDArray[Any]
    directed: bool = True

    @classmethod
    def from_edges(
        cls, n: int, edges: Iterable[EdgeTuple], directed: bool = True
    ) -> "NumpyGraph":
        """Construct a graph from an iterable of ``(u, v, w)`` edges."""
        if not isinstance(n, int) or n <= 0:
            raise InputError("Graph.n must be a positive integer.")
        triples = list(edges)
        tails = np.asarray([int(e[0]) for e in triples], dtype=np.intp)
        heads = np.asarray([int(e[1]) for e in triples], dtype=np.intp)
        weights = np.asarray([e[2] for e in triples]) if triples else np.zeros(0)

        if triples:
            outside = (tails < 0) | (tails >= n) | (heads < 0) | (heads >= n)
            if outside.any():
                raise InputError("u and v must be vertex ids in [0, n).")
            if weights.dtype == np.bool_ or not np.issubdtype(weights.dtype, np.number):
                raise GraphFormatError(f"non-numeric weights of dtype {weights.dtype}")
            bad = np.flatnonzero(weights < 0)
            if bad.size:
                i = int(bad[0])
                raise GraphFormatError(
                    f"negative weight {weights[i]} on edge ({tails[i]}, {heads[i]})"
                )

        ids = np.arange(len(triples), dtype=np.intp)
        if not directed:
            back = tails != heads
            tails, heads, ids = (
                np.concatenate([tails, heads[back]]),
                np.concatenate([heads, tails[back]]),
                np.concatenate([ids, ids[back]]),
            )

        order = np.argsort(tails, kind="stable")
        indptr = np.zeros(n + 1, dtype=np.intp)
        np.cumsum(np.bincount(tails, minlength=n), out=indptr[1:])
        return cls(n, indptr, heads[order], ids[order], weights, directed)

    # ---- capability ---------------------------------------------------

    def num_vertices(self) -> int:
        """Return the number of vertices."""
        return self.n

    def vertex_index(self, v: Vertex) -> int:
        """Vertices are their own index."""
        return int(v)

    def out_edges(self, v: Vertex) -> range:
        """Return the adjacency slots of ``v``."""
        return range(int(self.indptr[v]), int(self.indptr[v + 1]))

    def target(self, e: int) -> Vertex:
        """Return the head vertex stored in slot ``e``."""
        return int(self.targets[e])

    def edge_index(self, e: int) -> int:
        """Return the edge id stored in slot ``e``."""
        return int(self.edge_ids[e])

    # ---- helpers ------------------------------------------------------

    def num_edges(self) -> int:
        """Return the number of edges (undirected edges count once)."""
        return int(self.edge_weights.shape[0])

    def out_degree(self, u: Vertex) -> int:
        """Return the out-degree of vertex ``u``."""
        return int(self.indptr[u + 1] - self.indptr[u])

    def weights(self) -> npt.NDArray[Any]:
        """Return the edge-weight array indexed by edge id."""
        return self.edge_weights

    def to_graph(self) -> Graph:
        """Return a :class:`~dijkstrax.graph.Graph` with the same edge ids."""
        ends: List[EdgeTuple] = [(-1, -1, 0)] * self.num_edges()
        for u in range(self.n):
            for slot in self.out_edges(u):
                eid = int(self.edge_ids[slot])
                if ends[eid][0] < 0:
                    ends[eid] = (u, int(self.targets[slot]), self.edge_weights[eid].item())
        return Graph.from_edges(self.n, ends, directed=self.directed)


__all__ = ["NumpyGraph"]
