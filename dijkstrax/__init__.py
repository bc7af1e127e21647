"""Public package exports for :mod:`dijkstrax`."""

from __future__ import annotations

from .config import RunConfig
from .dijkstra import (
    dijkstra_shortest_paths,
    dijkstra_shortest_paths_multi,
    dijkstra_shortest_paths_withlog,
    run_dijkstra,
    shortest_path,
)
from .exceptions import (
    AlgorithmError,
    ConfigError,
    DijkstraXError,
    EmptyCollectionError,
    GraphFormatError,
    InputError,
    InvalidOperationError,
)
from .graph import Edge, Graph, GraphLike
from .graph_networkx import NetworkXGraph, to_networkx
from .graph_numpy import NumpyGraph
from .heap import IndexedMinHeap
from .io import read_graph, write_graph
from .logger import Logger, NoopLogger, StdLogger
from .path import path_weight, reconstruct_path
from .reference import dijkstra_reference
from .state import Color, DijkstraStates, HeapEntry, create_dijkstra_states
from .visitor import (
    DeadlineVisitor,
    DijkstraVisitor,
    LogDijkstraVisitor,
    RecordingVisitor,
    TargetVisitor,
    TrivialDijkstraVisitor,
    VisitorChain,
)

__version__ = "0.1.0"

__all__ = [
    "Color",
    "DijkstraStates",
    "HeapEntry",
    "create_dijkstra_states",
    "IndexedMinHeap",
    "DijkstraVisitor",
    "TrivialDijkstraVisitor",
    "LogDijkstraVisitor",
    "TargetVisitor",
    "DeadlineVisitor",
    "RecordingVisitor",
    "VisitorChain",
    "run_dijkstra",
    "dijkstra_shortest_paths",
    "dijkstra_shortest_paths_multi",
    "dijkstra_shortest_paths_withlog",
    "shortest_path",
    "reconstruct_path",
    "path_weight",
    "dijkstra_reference",
    "Edge",
    "Graph",
    "GraphLike",
    "NumpyGraph",
    "NetworkXGraph",
    "to_networkx",
    "read_graph",
    "write_graph",
    "RunConfig",
    "Logger",
    "NoopLogger",
    "StdLogger",
    "DijkstraXError",
    "AlgorithmError",
    "EmptyCollectionError",
    "InvalidOperationError",
    "InputError",
    "GraphFormatError",
    "ConfigError",
]
