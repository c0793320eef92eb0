"""Capability interfaces for host documents.

A host (a BIM document, a JSON plan, a test fixture) hands walls and rooms
to the pipeline through these protocols. Each element is resolved once,
here, into the immutable types of :mod:`wallsplitter.core.model`; nothing
downstream inspects host objects again.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol, Sequence

from ..config import DEFAULT_WALL_HEIGHT
from .errors import GeometryDegenerate
from .model import BoundaryEntry, Point, Room, Segment, Wall, WallAttributes

LOGGER = logging.getLogger(__name__)

Coordinates = tuple[float, float]


class WallSource(Protocol):
    """Anything that can stand in for a host wall."""

    id: str
    type_id: str
    level_id: str
    height: float | None

    def bounded_curve(self) -> tuple[Coordinates, Coordinates] | None:
        """Return the straight location curve, or None if it is not a line."""
        ...


class RoomSource(Protocol):
    """Anything that can stand in for a host room."""

    number: str
    name: str
    area: float | None

    def boundary_loops(self) -> Sequence[Sequence[tuple[str, Coordinates, Coordinates]]]:
        """Return loops of (wall id, curve start, curve end) entries."""
        ...


def _segment_from_curve(curve: tuple[Coordinates, Coordinates] | None) -> Segment | None:
    if curve is None:
        return None
    (x1, y1), (x2, y2) = curve
    try:
        return Segment(Point(float(x1), float(y1)), Point(float(x2), float(y2)))
    except GeometryDegenerate:
        return None


def ingest_wall(source: WallSource) -> Wall:
    """Resolve a host wall into a :class:`Wall`.

    Walls whose curve is missing, curved or zero-length are kept with
    ``segment=None`` so that they stay visible to boundary lookups but are
    never split.
    """
    segment = _segment_from_curve(source.bounded_curve())
    if segment is None:
        LOGGER.debug("Wall %s has no usable straight curve", source.id)

    height = source.height if source.height is not None else DEFAULT_WALL_HEIGHT
    return Wall(
        id=str(source.id),
        segment=segment,
        attributes=WallAttributes(
            type_id=str(source.type_id),
            level_id=str(source.level_id),
            height=float(height),
        ),
    )


def ingest_walls(sources: Iterable[WallSource]) -> list[Wall]:
    return [ingest_wall(source) for source in sources]


def ingest_room(source: RoomSource) -> Room:
    """Resolve a host room and its boundary into a :class:`Room`."""
    loops = []
    for loop in source.boundary_loops() or ():
        entries = []
        for wall_id, start, end in loop:
            entries.append(
                BoundaryEntry(
                    wall_id=str(wall_id),
                    start=Point(float(start[0]), float(start[1])),
                    end=Point(float(end[0]), float(end[1])),
                )
            )
        loops.append(tuple(entries))

    return Room(
        number=str(source.number),
        name=str(source.name),
        loops=tuple(loops),
        area=source.area,
    )


def ingest_rooms(sources: Iterable[RoomSource]) -> list[Room]:
    return [ingest_room(source) for source in sources]
