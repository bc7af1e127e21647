"""Configuration of a command-line traversal run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, TextIO, Tuple

from .exceptions import ConfigError
from .io import FORMATS
from .logger import LEVELS
from .visitor import (
    DeadlineVisitor,
    DijkstraVisitor,
    LogDijkstraVisitor,
    TargetVisitor,
    TrivialDijkstraVisitor,
    VisitorChain,
)

LOG_LEVELS = tuple(LEVELS)
LAYOUTS = ("spring", "kamada_kawai", "shell")


@dataclass(frozen=True)
class RunConfig:
    """Configuration knobs for a run.

    Attributes:
        sources: Source vertex ids, in the order they are initialized.
        target: Optional vertex whose path is reported; the search stops once
            it is final.
        directed: Treat the edges as one-way.
        fmt: Edge file format, ``None`` to detect it from the extension.
        trace: Write every visitor event to the trace stream.
        max_seconds: Optional time budget for the traversal.
        log_level: ``"debug"``, ``"info"`` or ``"warning"``.
        log_json: Emit log events as JSON lines.
        plot: Optional image path for a drawing of the shortest-path tree.
        layout: Graph layout used for the drawing.
    """

    sources: Tuple[int, ...] = (0,)
    target: Optional[int] = None
    directed: bool = True
    fmt: Optional[str] = None
    trace: bool = False
    max_seconds: Optional[float] = None
    log_level: str = "warning"
    log_json: bool = False
    plot: Optional[str] = None
    layout: str = "spring"

    def __post_init__(self) -> None:
        """Validate the option values."""
        if not self.sources:
            raise ConfigError("at least one source is required")
        if any(not isinstance(s, int) or s < 0 for s in self.sources):
            raise ConfigError(f"sources must be non-negative vertex ids, got {self.sources}")
        if self.target is not None and self.target < 0:
            raise ConfigError("target must be a non-negative vertex id")
        if self.fmt is not None and self.fmt not in FORMATS:
            raise ConfigError(f"unknown format '{self.fmt}'")
        if self.max_seconds is not None and self.max_seconds <= 0:
            raise ConfigError("max_seconds must be positive")
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"unknown log level '{self.log_level}'")
        if self.layout not in LAYOUTS:
            raise ConfigError(f"unknown layout '{self.layout}'")

    def visitor(self, trace_stream: Optional[TextIO] = None) -> DijkstraVisitor:
        """Build the visitor these options ask for.

        Args:
            trace_stream: Destination of the trace when ``trace`` is set.
        """
        parts: List[DijkstraVisitor] = []
        if self.trace:
            parts.append(LogDijkstraVisitor(trace_stream))
        if self.max_seconds is not None:
            parts.append(DeadlineVisitor(self.max_seconds))
        if self.target is not None:
            parts.append(TargetVisitor([self.target]))
        if not parts:
            return TrivialDijkstraVisitor()
        if len(parts) == 1:
            return parts[0]
        return VisitorChain(*parts)


__all__ = ["LAYOUTS", "LOG_LEVELS", "RunConfig"]
