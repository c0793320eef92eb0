"""Per-room aggregation of bounding wall measurements."""

from __future__ import annotations

import logging
from typing import Iterable

from ..config import REPORT_MIN_WALL_LENGTH
from ..core.errors import Diagnostics, GeometryDegenerate, UnresolvedBoundaryReference
from ..core.model import ReportRow, Room, Wall
from .network import WallNetwork

LOGGER = logging.getLogger(__name__)

EAST = "East Facing"
WEST = "West Facing"
NORTH = "North Facing"
SOUTH = "South Facing"

ORIENTATIONS = (EAST, WEST, NORTH, SOUTH)

RoomReport = dict[str, tuple[ReportRow, ...]]


def classify_orientation(dx: float, dy: float) -> str:
    """Classify a direction vector into one of four compass labels.

    The dominant component decides the axis, ties going to x, and its sign
    decides the label.

    Raises:
        GeometryDegenerate: If the vector is zero.
    """
    if dx == 0.0 and dy == 0.0:
        raise GeometryDegenerate("Cannot orient a zero-length direction")
    if abs(dx) >= abs(dy):
        return EAST if dx > 0 else WEST
    return NORTH if dy > 0 else SOUTH


def report_row(room: Room, wall: Wall) -> ReportRow:
    """Measure one bounding wall of a room.

    Raises:
        GeometryDegenerate: If the wall has no straight location curve or
            is shorter than REPORT_MIN_WALL_LENGTH.
    """
    segment = wall.require_segment()
    length = segment.length
    if length < REPORT_MIN_WALL_LENGTH:
        raise GeometryDegenerate(f"Wall '{wall.id}' is too short to report ({length:.3f})")
    return ReportRow(
        room_number=room.number,
        room_name=room.display_name,
        wall_id=wall.id,
        length=length,
        area=length * wall.attributes.height,
        orientation=classify_orientation(*segment.direction),
    )


def aggregate_room(
    room: Room,
    walls: WallNetwork,
    diagnostics: Diagnostics | None = None,
) -> tuple[ReportRow, ...]:
    """Build the report rows of a single room in boundary traversal order."""
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    rows: list[ReportRow] = []

    for loop in room.loops:
        for entry in loop:
            wall = walls.get(entry.wall_id)
            if wall is None:
                diagnostics.record(
                    UnresolvedBoundaryReference(f"Boundary references missing wall {entry.wall_id}"),
                    room.number,
                )
                continue
            try:
                rows.append(report_row(room, wall))
            except GeometryDegenerate as exc:
                diagnostics.record(exc, room.number)

    return tuple(rows)


def aggregate(
    rooms: Iterable[Room],
    walls: WallNetwork,
    diagnostics: Diagnostics | None = None,
) -> RoomReport:
    """Group the bounding walls of every room into report rows.

    Args:
        rooms: Rooms to report on.
        walls: The post-split wall network. It is only read.
        diagnostics: Collector for skipped entries.

    Returns:
        Mapping from room number to its rows. Every placed room has a key,
        even when none of its entries resolve.
    """
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    report: RoomReport = {}

    for room in rooms:
        if not room.is_placed:
            diagnostics.record(GeometryDegenerate("Room is not placed"), room.number)
            continue
        report[room.number] = aggregate_room(room, walls, diagnostics)
        LOGGER.debug("Room %s: %d row(s)", room.number, len(report[room.number]))

    return report


def placeholder_row(room: Room) -> ReportRow:
    """Row standing in for a placed room none of whose walls could be reported."""
    return ReportRow(
        room_number=room.number,
        room_name=room.display_name,
        wall_id="",
        length=0.0,
        area=0.0,
        orientation="",
    )


def iter_rows(report: RoomReport, rooms: Iterable[Room] = ()) -> Iterable[ReportRow]:
    """Yield report rows room by room.

    Rooms passed in ``rooms`` whose entry in the report is empty yield a
    single placeholder row instead, so they still appear in the output.
    """
    by_number = {room.number: room for room in rooms}
    for number, rows in report.items():
        if not rows and number in by_number:
            yield placeholder_row(by_number[number])
        yield from rows
