"""Bridges between :mod:`networkx` graphs and the traversal."""

from __future__ import annotations

from typing import Any, Dict, Hashable, List, Tuple

import networkx as nx
import numpy as np
import numpy.typing as npt

from .exceptions import InputError
from .graph import Graph, check_weight

NxEdge = Tuple[Hashable, int]


class NetworkXGraph:
    """Expose a NetworkX graph through :class:`~dijkstrax.graph.GraphLike`.

    Vertex indices follow ``G.nodes`` order and edge indices follow
    ``G.edges`` order, so multigraphs keep one weight per parallel edge. An
    undirected edge is offered from both endpoints under one index.

    Args:
        G: Any NetworkX graph.
        weight: Edge attribute holding the weight.
        default: Weight of edges without that attribute.

    Raises:
        InputError: If ``G`` has no nodes.
        GraphFormatError: If a weight is negative or not a number.
    """

    def __init__(self, G: nx.Graph, weight: str = "weight", default: float = 1) -> None:
        if G.number_of_nodes() == 0:
            raise InputError("graph must have at least one node")
        self.G = G
        self.nodes: List[Hashable] = list(G.nodes)
        self._index: Dict[Hashable, int] = {v: i for i, v in enumerate(self.nodes)}
        self._out: List[List[NxEdge]] = [[] for _ in self.nodes]
        weights: List[Any] = []
        for u, v, data in G.edges(data=True):
            w = data.get(weight, default)
            check_weight(u, v, w)
            idx = len(weights)
            weights.append(w)
            self._out[self._index[u]].append((v, idx))
            if not G.is_directed() and u != v:
                self._out[self._index[v]].append((u, idx))
        self._weights = np.asarray(weights) if weights else np.zeros(0)

    def num_vertices(self) -> int:
        return len(self.nodes)

    def vertex_index(self, v: Hashable) -> int:
        return self._index[v]

    def out_edges(self, v: Hashable) -> List[NxEdge]:
        return self._out[self._index[v]]

    def target(self, e: NxEdge) -> Hashable:
        return e[0]

    def edge_index(self, e: NxEdge) -> int:
        return e[1]

    def weights(self) -> npt.NDArray[Any]:
        """Return the edge-weight array indexed by edge index."""
        return self._weights


def to_networkx(graph: Graph) -> nx.MultiGraph:
    """Copy ``graph`` into a NetworkX multigraph with ``weight`` and ``index`` edge attributes."""
    G: nx.MultiGraph = nx.MultiDiGraph() if graph.directed else nx.MultiGraph()
    G.add_nodes_from(range(graph.n))
    for idx, (u, v, w) in enumerate(graph.edges()):
        G.add_edge(u, v, weight=w, index=idx)
    return G


__all__ = ["NetworkXGraph", "to_networkx"]
