"""Shortest-path tree rendering with NetworkX + Matplotlib."""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import networkx as nx

from .config import LAYOUTS
from .graph import GraphLike
from .state import DijkstraStates


def tree_edges(
    state: DijkstraStates, graph: GraphLike, vertices: Optional[Iterable[Any]] = None
) -> List[Tuple[Any, Any]]:
    """Return the ``(parent, vertex)`` links of every reached non-source vertex.

    Args:
        state: State returned by a traversal.
        graph: The graph the traversal ran on.
        vertices: All vertices of ``graph``; defaults to ``range(num_vertices())``.
    """
    if vertices is None:
        vertices = range(graph.num_vertices())
    links: List[Tuple[Any, Any]] = []
    for v in vertices:
        i = graph.vertex_index(v)
        if state.is_reached(i) and state.parents[i] != v:
            links.append((state.parents[i], v))
    return links


def draw_shortest_path_tree(
    graph: GraphLike,
    state: DijkstraStates,
    *,
    vertices: Optional[Sequence[Any]] = None,
    layout: str = "spring",
    show_dists: bool = True,
    node_size: int = 300,
    ax: Any = None,
) -> Any:
    """Draw ``graph`` with the shortest-path tree of ``state`` highlighted.

    Sources are red, final vertices blue, tentative ones orange and unreached
    ones grey. Tree links are drawn thick, other edges faint.

    Args:
        graph: The graph the traversal ran on.
        state: State returned by the traversal.
        vertices: All vertices of ``graph``; defaults to ``range(num_vertices())``.
        layout: ``"spring"``, ``"kamada_kawai"`` or ``"shell"``.
        show_dists: Label vertices with their distance.
        node_size: Marker size.
        ax: Matplotlib axes to draw on; a new figure is created if omitted.

    Returns:
        The axes drawn on.

    Raises:
        ValueError: If ``layout`` is unknown.
    """
    if layout not in LAYOUTS:
        raise ValueError(f"Unknown layout: {layout}")
    verts = list(vertices) if vertices is not None else list(range(graph.num_vertices()))

    G = nx.DiGraph()
    G.add_nodes_from(verts)
    for u in verts:
        for e in graph.out_edges(u):
            G.add_edge(u, graph.target(e))

    if layout == "spring":
        pos = nx.spring_layout(G, seed=42)
    elif layout == "kamada_kawai":
        pos = nx.kamada_kawai_layout(G)
    else:
        pos = nx.shell_layout(G)

    if ax is None:
        _, ax = plt.subplots(figsize=(12, 10))

    colors = []
    for v in verts:
        i = graph.vertex_index(v)
        if not state.is_reached(i):
            colors.append("tab:gray")
        elif state.parents[i] == v:
            colors.append("tab:red")
        elif state.is_finalized(i):
            colors.append("tab:blue")
        else:
            colors.append("tab:orange")

    links = tree_edges(state, graph, verts)
    nx.draw_networkx_nodes(G, pos, ax=ax, node_color=colors, node_size=node_size, alpha=0.9)
    nx.draw_networkx_edges(G, pos, ax=ax, arrowstyle="->", arrowsize=10, width=0.8, alpha=0.25)
    nx.draw_networkx_edges(G, pos, ax=ax, edgelist=links, arrowstyle="->", arrowsize=12, width=2.0)

    if show_dists:
        labels = {}
        for v in verts:
            i = graph.vertex_index(v)
            d = state.dists[i]
            labels[v] = f"{v}\n{d:g}" if state.is_reached(i) else str(v)
        nx.draw_networkx_labels(G, pos, ax=ax, labels=labels, font_size=8)
    else:
        nx.draw_networkx_labels(G, pos, ax=ax, font_size=8)

    ax.set_title("Shortest-path tree", fontsize=14)
    ax.set_axis_off()
    return ax


def save_shortest_path_tree(graph: GraphLike, state: DijkstraStates, path: str, **kwargs: Any) -> None:
    """Render :func:`draw_shortest_path_tree` into an image file at ``path``."""
    fig, ax = plt.subplots(figsize=(12, 10))
    try:
        draw_shortest_path_tree(graph, state, ax=ax, **kwargs)
        fig.tight_layout()
        fig.savefig(path)
    finally:
        plt.close(fig)


__all__ = ["LAYOUTS", "draw_shortest_path_tree", "save_shortest_path_tree", "tree_edges"]
