"""Error taxonomy and diagnostics for wall segmentation.

Per-wall and per-room failures are recovered where they happen and recorded
as :class:`Diagnostic` entries; only :class:`PipelineError` ever reaches the
caller of the pipeline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

LOGGER = logging.getLogger(__name__)


class WallSplitterError(Exception):
    """Base class for all wall-splitter errors."""

    pass


class GeometryDegenerate(WallSplitterError):
    """Raised when a wall has no usable straight curve or a segment is too short."""

    pass


class SplitFailure(WallSplitterError):
    """Raised by a wall host when it rejects a replacement wall."""

    pass


class UnresolvedBoundaryReference(WallSplitterError):
    """Raised when a room boundary references a wall that is not active."""

    pass


class PipelineError(WallSplitterError):
    """Raised when a mutation batch fails as a whole and has been rolled back."""

    pass


@dataclass(frozen=True)
class Diagnostic:
    """A recovered failure.

    Attributes:
        kind: Name of the error class that was recovered.
        subject: Wall id or room number the failure concerns.
        message: Human readable description.
    """

    kind: str
    subject: str
    message: str

    def __str__(self) -> str:
        return f"{self.kind} [{self.subject}]: {self.message}"


class Diagnostics:
    """Ordered collection of recovered failures for one pipeline run."""

    def __init__(self) -> None:
        self._entries: list[Diagnostic] = []

    def record(self, error: WallSplitterError, subject: str) -> Diagnostic:
        diagnostic = Diagnostic(type(error).__name__, str(subject), str(error))
        self._entries.append(diagnostic)
        LOGGER.warning("%s", diagnostic)
        return diagnostic

    def extend(self, other: "Diagnostics") -> None:
        self._entries.extend(other)

    def of_kind(self, kind: type[WallSplitterError]) -> list[Diagnostic]:
        return [d for d in self._entries if d.kind == kind.__name__]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
