"""Command-line interface for running the traversal."""

from __future__ import annotations

import argparse
import json
import math
import sys
import traceback
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .config import LAYOUTS, LOG_LEVELS, RunConfig
from .dijkstra import dijkstra_shortest_paths_multi
from .exceptions import ConfigError, DijkstraXError, InputError
from .graph import Graph
from .io import FORMATS, read_graph
from .logger import StdLogger
from .path import reconstruct_path

EXAMPLE_CSV = """# u,v,w
0,1,2
0,2,5
1,2,1
1,3,4
2,3,1
"""

EXIT_OK = 0
EXIT_USAGE = 64
EXIT_INTERNAL = 70


def _build_graph_from_file(path: str, cfg: RunConfig) -> Graph:
    """Build a :class:`Graph` from an edges file."""
    if not Path(path).exists():
        raise InputError(f"edges file not found: {path}")
    return read_graph(path, cfg.fmt, directed=cfg.directed)


def _build_random_graph(n: int, m: int, seed: int, directed: bool) -> Graph:
    """Generate a random graph for quick experiments."""
    import random

    if n <= 0 or m < 0:
        raise InputError("--n must be positive and --m non-negative")
    rnd = random.Random(seed)
    edges: List[Tuple[int, int, float]] = []
    for _ in range(m):
        u = rnd.randrange(n)
        v = rnd.randrange(n)
        w = rnd.random() * 10.0
        edges.append((u, v, w))
    return Graph.from_edges(n, edges, directed=directed)


def _parse_sources(args: argparse.Namespace) -> Tuple[int, ...]:
    if args.sources is None:
        return (args.source,)
    try:
        return tuple(int(x) for x in args.sources.split(",") if x.strip())
    except ValueError as exc:
        raise InputError("invalid --sources list") from exc


def _json_number(value: Any, infinity: Any) -> Any:
    if value == infinity:
        return None
    value = value.item() if hasattr(value, "item") else value
    if isinstance(value, float) and math.isinf(value):
        return None
    return value


def _parser() -> argparse.ArgumentParser:
    examples = (
        "Examples:\n"
        "  dijkstrax --edges graph.csv --source 0\n"
        "  dijkstrax --edges graph.csv --sources 0,4 --undirected\n"
        "  dijkstrax --edges graph.csv --target 3 --trace\n"
        "  dijkstrax --random --n 100 --m 500\n"
        "  dijkstrax --edges graph.csv --plot tree.png\n"
    )
    p = argparse.ArgumentParser(
        prog="dijkstrax",
        description="Dijkstra shortest paths with visitor tracing",
        epilog=examples,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("--verbose", action="store_true", help="Show full tracebacks")
    p.add_argument("--log-json", action="store_true", help="Emit structured log lines")
    p.add_argument("--log-level", choices=list(LOG_LEVELS), default="warning", help="Log verbosity")

    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--edges", type=str, help="Path to edges file")
    src.add_argument("--random", action="store_true", help="Use a random graph")
    src.add_argument(
        "--example",
        action="store_true",
        help="Print a sample edges CSV to stdout and exit",
    )
    p.add_argument(
        "--format",
        choices=list(FORMATS),
        default=None,
        help="Edge file format (auto-detected from extension)",
    )
    p.add_argument("--undirected", action="store_true", help="Treat edges as two-way")

    p.add_argument("--n", type=int, default=10, help="Vertices (random mode)")
    p.add_argument("--m", type=int, default=20, help="Edges (random mode)")
    p.add_argument("--seed", type=int, default=0, help="Seed controlling random graph generation")

    src_group = p.add_mutually_exclusive_group()
    src_group.add_argument("--source", type=int, default=0, help="Source vertex id")
    src_group.add_argument(
        "--sources",
        type=str,
        default=None,
        help="Comma-separated list of source vertex ids",
    )
    p.add_argument("--target", type=int, default=None, help="Stop at this vertex and print its path")
    p.add_argument("--trace", action="store_true", help="Write every visitor event to stderr")
    p.add_argument("--max-seconds", type=float, default=None, help="Time budget for the traversal")
    p.add_argument(
        "--plot",
        type=str,
        default=None,
        help="Save a drawing of the shortest-path tree to this image file",
    )
    p.add_argument("--layout", choices=list(LAYOUTS), default="spring", help="Layout used by --plot")
    return p


def run(cfg: RunConfig, G: Graph, trace_stream: Any = None, logger: Any = None) -> Dict[str, Any]:
    """Run the traversal described by ``cfg`` on ``G`` and return a JSON-ready result.

    Raises:
        InputError: If a source or the target is not a vertex of ``G``.
    """
    n = G.num_vertices()
    for v in cfg.sources + ((cfg.target,) if cfg.target is not None else ()):
        if v >= n:
            raise InputError(f"vertex {v} is out of range for a graph with {n} vertices")

    state = dijkstra_shortest_paths_multi(
        G,
        G.weights(),
        cfg.sources,
        None,
        visitor=cfg.visitor(trace_stream or sys.stderr),
        logger=logger,
    )
    inf = state.infinity
    out: Dict[str, Any] = {
        "sources": list(cfg.sources),
        "completed": state.completed,
        "distances": [_json_number(d, inf) for d in state.dists],
        "parents": list(state.parents),
    }
    if cfg.target is not None:
        reached = state.is_finalized(cfg.target)
        out["target"] = cfg.target
        out["distance"] = _json_number(state.dists[cfg.target], inf) if reached else None
        out["path"] = reconstruct_path(state, G, cfg.target) if reached else []
    out["counters"] = state.summary()
    if cfg.plot is not None:
        from .visualize import save_shortest_path_tree

        save_shortest_path_tree(G, state, cfg.plot, layout=cfg.layout)
        out["plot"] = cfg.plot
    return out


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``dijkstrax`` command-line tool."""
    args = _parser().parse_args(argv)

    if args.example:
        sys.stdout.write(EXAMPLE_CSV)
        return EXIT_OK

    try:
        cfg = RunConfig(
            sources=_parse_sources(args),
            target=args.target,
            directed=not args.undirected,
            fmt=args.format,
            trace=args.trace,
            max_seconds=args.max_seconds,
            log_level=args.log_level,
            log_json=args.log_json,
            plot=args.plot,
            layout=args.layout,
        )
        logger = StdLogger(level=cfg.log_level, json_fmt=cfg.log_json, stream=sys.stderr)

        if args.random:
            G = _build_random_graph(args.n, args.m, args.seed, cfg.directed)
        else:
            G = _build_graph_from_file(args.edges, cfg)

        if args.verbose and not cfg.log_json:
            sys.stderr.write(
                f"config: n={G.num_vertices()} m={G.num_edges()} "
                f"directed={cfg.directed} sources={list(cfg.sources)}\n"
            )

        out = run(cfg, G, logger=logger)
        if not out["completed"] and out.get("distance") is None:
            # only the deadline stops a run short of its target
            logger.warning(
                "run.deadline", max_seconds=cfg.max_seconds, included=out["counters"]["included"]
            )
        logger.info("run", n=G.num_vertices(), m=G.num_edges(), completed=out["completed"], **out["counters"])
        print(json.dumps(out))
        return EXIT_OK

    except (InputError, ConfigError) as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return EXIT_USAGE
    except DijkstraXError as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return EXIT_INTERNAL


if __name__ == "__main__":
    sys.exit(main())
