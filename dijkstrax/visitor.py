"""Visitors observing and steering a Dijkstra traversal.

A visitor is called at four points of the traversal:

* ``discover_vertex(u, v, d)`` when ``v`` is reached for the first time,
  through ``u``, at tentative distance ``d``. Sources are never discovered;
  they go straight to ``include_vertex``.
* ``include_vertex(u, v, d)`` when the distance ``d`` of ``v`` becomes final.
  Returning ``False`` stops the traversal right away.
* ``update_vertex(u, v, d)`` when a shorter distance ``d`` to a not yet final
  vertex ``v`` is found through ``u``.
* ``close_vertex(v)`` once every outgoing edge of ``v`` has been examined.

Subclass :class:`DijkstraVisitor` and override only the hooks you need.
"""

from __future__ import annotations

import sys
import time
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Set, TextIO, Tuple


class DijkstraVisitor:
    """Base visitor: every hook does nothing and the traversal always continues."""

    def discover_vertex(self, u: Any, v: Any, d: Any) -> None:
        """Invoked when ``v`` is encountered for the first time."""
        return

    def include_vertex(self, u: Any, v: Any, d: Any) -> bool:
        """Invoked when the distance of ``v`` is determined.

        Returns:
            Whether the traversal should continue.
        """
        return True

    def update_vertex(self, u: Any, v: Any, d: Any) -> None:
        """Invoked when the tentative distance of ``v`` decreases."""
        return

    def close_vertex(self, v: Any) -> None:
        """Invoked when all neighbors of ``v`` have been examined."""
        return


class TrivialDijkstraVisitor(DijkstraVisitor):
    """Visitor that observes nothing."""


class LogDijkstraVisitor(DijkstraVisitor):
    """Writes one human-readable line per hook to ``stream``."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream or sys.stdout

    def discover_vertex(self, u: Any, v: Any, d: Any) -> None:
        print(f"discover vertex {v} (parent = {u}, dist = {d})", file=self.stream)

    def include_vertex(self, u: Any, v: Any, d: Any) -> bool:
        print(f"include vertex {v} (parent = {u}, dist = {d})", file=self.stream)
        return True

    def update_vertex(self, u: Any, v: Any, d: Any) -> None:
        print(f"update distance {v} (parent = {u}, dist = {d})", file=self.stream)

    def close_vertex(self, v: Any) -> None:
        print(f"close vertex {v}", file=self.stream)


class TargetVisitor(DijkstraVisitor):
    """Stops the traversal once every target has a final distance.

    Attributes:
        found: Final distance of each target included so far.
    """

    def __init__(self, targets: Iterable[Hashable]) -> None:
        self._pending: Set[Hashable] = set(targets)
        if not self._pending:
            raise ValueError("TargetVisitor needs at least one target")
        self.found: Dict[Hashable, Any] = {}

    @property
    def done(self) -> bool:
        """``True`` once all targets were included."""
        return not self._pending

    def include_vertex(self, u: Any, v: Any, d: Any) -> bool:
        if v in self._pending:
            self._pending.discard(v)
            self.found[v] = d
        return bool(self._pending)


class DeadlineVisitor(DijkstraVisitor):
    """Stops the traversal once a wall-clock budget is spent.

    The clock starts at the first ``include_vertex`` call and is checked on
    every later one, so a single vertex's neighbor pass is never interrupted.

    Args:
        seconds: Time budget.
        clock: Monotonic clock returning seconds.
    """

    def __init__(self, seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        if seconds <= 0:
            raise ValueError("seconds must be positive")
        self.seconds = float(seconds)
        self._clock = clock
        self._deadline: Optional[float] = None
        self.expired = False

    def include_vertex(self, u: Any, v: Any, d: Any) -> bool:
        now = self._clock()
        if self._deadline is None:
            self._deadline = now + self.seconds
        elif now >= self._deadline:
            self.expired = True
            return False
        return True


Event = Tuple[Any, ...]


class RecordingVisitor(DijkstraVisitor):
    """Keeps every hook invocation as an event tuple.

    Events look like ``("discover", u, v, d)``, ``("include", u, v, d)``,
    ``("update", u, v, d)`` and ``("close", v)``.
    """

    def __init__(self) -> None:
        self.events: List[Event] = []

    def discover_vertex(self, u: Any, v: Any, d: Any) -> None:
        self.events.append(("discover", u, v, d))

    def include_vertex(self, u: Any, v: Any, d: Any) -> bool:
        self.events.append(("include", u, v, d))
        return True

    def update_vertex(self, u: Any, v: Any, d: Any) -> None:
        self.events.append(("update", u, v, d))

    def close_vertex(self, v: Any) -> None:
        self.events.append(("close", v))

    def of_kind(self, kind: str) -> List[Event]:
        """Return the events of one hook, in call order."""
        return [e for e in self.events if e[0] == kind]


class VisitorChain(DijkstraVisitor):
    """Forwards every hook to several visitors in order.

    ``include_vertex`` calls every visitor and continues only if all of them
    want to continue.
    """

    def __init__(self, *visitors: DijkstraVisitor) -> None:
        self.visitors = visitors

    def discover_vertex(self, u: Any, v: Any, d: Any) -> None:
        for vis in self.visitors:
            vis.discover_vertex(u, v, d)

    def include_vertex(self, u: Any, v: Any, d: Any) -> bool:
        results = [vis.include_vertex(u, v, d) for vis in self.visitors]
        return all(results)

    def update_vertex(self, u: Any, v: Any, d: Any) -> None:
        for vis in self.visitors:
            vis.update_vertex(u, v, d)

    def close_vertex(self, v: Any) -> None:
        for vis in self.visitors:
            vis.close_vertex(v)


__all__ = [
    "DeadlineVisitor",
    "DijkstraVisitor",
    "LogDijkstraVisitor",
    "RecordingVisitor",
    "TargetVisitor",
    "TrivialDijkstraVisitor",
    "VisitorChain",
]
