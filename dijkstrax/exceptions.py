"""Custom exception types used across :mod:`dijkstrax`."""

from __future__ import annotations


class DijkstraXError(Exception):
    """Base class for all package-specific errors."""


class InputError(DijkstraXError, ValueError):
    """Raised for invalid user input such as malformed edges."""


class GraphFormatError(InputError):
    """Raised when parsing a graph file or an edge weight fails."""


class ConfigError(DijkstraXError, ValueError):
    """Raised for invalid configuration options."""


class AlgorithmError(DijkstraXError, RuntimeError):
    """Raised when algorithm invariants are violated at runtime."""


class EmptyCollectionError(AlgorithmError, IndexError):
    """Raised when popping from an empty heap."""


class InvalidOperationError(AlgorithmError):
    """Raised for heap operations that would break the heap invariants.

    This covers increasing a priority through :meth:`IndexedMinHeap.decrease`
    and using a handle whose entry has already been removed.
    """


__all__ = [
    "DijkstraXError",
    "InputError",
    "GraphFormatError",
    "ConfigError",
    "AlgorithmError",
    "EmptyCollectionError",
    "InvalidOperationError",
]
