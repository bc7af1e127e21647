"""Graph input/output helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from .exceptions import GraphFormatError, InputError
from .graph import EdgeTuple, Graph, Weight

EdgeList = List[EdgeTuple]


def _parse_weight(raw: Any) -> Weight:
    """Keep integral weights as ``int`` so integer graphs get integer distances."""
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return raw
    text = str(raw).strip()
    try:
        return int(text)
    except ValueError:
        return float(text)


def _read_csv(path: Path) -> Tuple[int, EdgeList]:
    """Read ``u,v,w`` rows from a CSV file.

    Lines starting with ``#`` and empty lines are ignored. Columns can be
    separated by commas or tabs; columns past the third are ignored.

    Args:
        path: The path to the CSV file.

    Returns:
        The number of vertices (max vertex id + 1) and the edges in file order.

    Raises:
        GraphFormatError: If a row cannot be parsed or no edges are found.
    """
    edges: EdgeList = []
    max_id = -1
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row or row.startswith("#"):
                continue
            parts = row.replace("\t", ",").split(",")
            if len(parts) < 3:
                raise GraphFormatError(f"{path}:{lineno}: expected u,v,w")
            try:
                u = int(parts[0].strip())
                v = int(parts[1].strip())
                w = _parse_weight(parts[2])
            except ValueError as exc:
                raise GraphFormatError(f"{path}:{lineno}: {exc}") from exc
            edges.append((u, v, w))
            max_id = max(max_id, u, v)
    if max_id < 0:
        raise GraphFormatError("no edges parsed from file")
    return max_id + 1, edges


def _write_csv(path: Path, G: Graph) -> None:
    """Write one ``u,v,w`` row per edge, in edge-index order."""
    with path.open("w", encoding="utf-8") as fh:
        fh.write("# u,v,w\n")
        for u, v, w in G.edges():
            fh.write(f"{u},{v},{w}\n")


def _read_jsonl(path: Path) -> Tuple[int, EdgeList]:
    """Read a JSON Lines file of ``{"u": .., "v": .., "w": ..}`` objects.

    Raises:
        GraphFormatError: If a line is not such an object or no edges are found.
    """
    edges: EdgeList = []
    max_id = -1
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row:
                continue
            try:
                obj = json.loads(row)
                u = int(obj["u"])
                v = int(obj["v"])
                w = _parse_weight(obj["w"])
            except (ValueError, KeyError, TypeError) as exc:
                raise GraphFormatError(f"{path}:{lineno}: {exc}") from exc
            edges.append((u, v, w))
            max_id = max(max_id, u, v)
    if max_id < 0:
        raise GraphFormatError("no edges parsed from file")
    return max_id + 1, edges


def _write_jsonl(path: Path, G: Graph) -> None:
    """Write one JSON object per edge, in edge-index order."""
    with path.open("w", encoding="utf-8") as fh:
        for u, v, w in G.edges():
            fh.write(json.dumps({"u": u, "v": v, "w": w}) + "\n")


_FMT_READERS: Dict[str, Callable[[Path], Tuple[int, EdgeList]]] = {
    "csv": _read_csv,
    "jsonl": _read_jsonl,
}

_FMT_WRITERS: Dict[str, Callable[[Path, Graph], None]] = {
    "csv": _write_csv,
    "jsonl": _write_jsonl,
}

FORMATS = tuple(_FMT_READERS)


def _detect_format(path: Path) -> Optional[str]:
    """Return the format implied by the file extension, if any."""
    ext = path.suffix.lower()
    if ext in {".csv", ".tsv"}:
        return "csv"
    if ext in {".jsonl", ".json"}:
        return "jsonl"
    return None


def read_graph(
    path: str,
    fmt: Optional[str] = None,
    directed: bool = True,
    n: Optional[int] = None,
) -> Graph:
    """Read a graph from a file.

    Args:
        path: The path to the graph file.
        fmt: ``"csv"`` or ``"jsonl"``; auto-detected from the extension when
            omitted.
        directed: Build a directed graph; otherwise every edge goes both ways.
        n: Vertex count, for graphs whose highest vertices have no edges.
            Defaults to the highest vertex id in the file plus one.

    Returns:
        The graph, with edge indices in file order.

    Raises:
        GraphFormatError: If the format is unknown or the file is malformed.
        InputError: If ``n`` is smaller than the vertex ids in the file.
    """
    p = Path(path)
    fmt = fmt or _detect_format(p)
    if fmt is None or fmt not in _FMT_READERS:
        raise GraphFormatError("unknown graph format")
    seen, edges = _FMT_READERS[fmt](p)
    if n is not None and n < seen:
        raise InputError(f"n={n} is too small for vertex id {seen - 1}")
    return Graph.from_edges(n or seen, edges, directed=directed)


def write_graph(G: Graph, path: str, fmt: Optional[str] = None) -> None:
    """Write a graph's edges to a file.

    Raises:
        GraphFormatError: If the format is unknown or unsupported.
    """
    p = Path(path)
    fmt = fmt or _detect_format(p)
    if fmt is None or fmt not in _FMT_WRITERS:
        raise GraphFormatError("unknown graph format")
    _FMT_WRITERS[fmt](p, G)


__all__ = ["FORMATS", "read_graph", "write_graph"]
