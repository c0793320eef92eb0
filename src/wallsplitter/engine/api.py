"""Core API for wall segmentation.

This module provides the main interface for splitting a wall network at
wall crossings and room boundary breaks, re-deriving room boundaries over
the split walls, and producing the per-room wall report.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, Sequence

from ..config import EPSILON, MIN_SEGMENT_LENGTH
from ..core.errors import Diagnostics, GeometryDegenerate
from ..core.model import BoundaryEntry, Room, Segment, Wall
from ..geom.index import WallIndex
from .aggregate import RoomReport, aggregate
from .network import WallNetwork
from .rebuild import rebuild_segments
from .split_points import SplitPointSet, collect_split_points

LOGGER = logging.getLogger(__name__)


@dataclass
class SplitResult:
    """Outcome of one segmentation pass.

    Attributes:
        lineage: Mapping of retired wall id to the ids that replaced it.
        split_points: Cut points used for every superseded wall.
        diagnostics: Recovered failures.
    """

    lineage: dict[str, tuple[str, ...]] = field(default_factory=dict)
    split_points: dict[str, SplitPointSet] = field(default_factory=dict)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass
class PipelineResult:
    """Outcome of a full run: split, relink and aggregate."""

    report: RoomReport
    rooms: list[Room]
    split: SplitResult
    diagnostics: Diagnostics


def plan_splits(
    network: WallNetwork,
    rooms: Sequence[Room],
    eps: float = EPSILON,
    min_length: float = MIN_SEGMENT_LENGTH,
    diagnostics: Diagnostics | None = None,
) -> list[tuple[Wall, SplitPointSet, tuple[Segment, ...]]]:
    """Compute the rebuild of every wall without touching the network.

    Walls without a straight curve and walls whose rebuild is their original
    segment are left out of the plan.
    """
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    walls = network.walls()
    index = WallIndex(walls, eps)
    plan = []

    for wall in walls:
        if wall.segment is None:
            diagnostics.record(
                GeometryDegenerate(f"Wall '{wall.id}' has no straight location curve"), wall.id
            )
            continue

        points = collect_split_points(wall, walls, rooms, eps=eps, index=index)
        if not points:
            continue

        segments = rebuild_segments(wall, points, min_length=min_length, eps=eps)
        dropped = len(points) + 1 - len(segments)
        if dropped > 0:
            diagnostics.record(
                GeometryDegenerate(f"Dropped {dropped} piece(s) shorter than {min_length}"),
                wall.id,
            )

        if len(segments) == 1 and segments[0].almost_equals(wall.segment, eps):
            continue
        plan.append((wall, points, segments))

    return plan


def split_walls(
    network: WallNetwork,
    rooms: Sequence[Room],
    eps: float = EPSILON,
    min_length: float = MIN_SEGMENT_LENGTH,
) -> SplitResult:
    """Run one segmentation pass over the whole network.

    Every wall is examined against the network as it was on entry; the
    replacements are then applied in a single atomic batch.

    Args:
        network: The wall network to split in place.
        rooms: Rooms whose boundary starts force extra cuts.
        eps: Point equality tolerance.
        min_length: Minimum length of a replacement wall.

    Returns:
        The lineage of superseded walls and the diagnostics of the pass.

    Raises:
        PipelineError: If the mutation batch failed and was rolled back.
    """
    result = SplitResult()
    plan = plan_splits(network, rooms, eps=eps, min_length=min_length, diagnostics=result.diagnostics)

    with network.batch():
        for wall, points, segments in plan:
            created = network.supersede(wall, segments, result.diagnostics)
            result.lineage[wall.id] = tuple(w.id for w in created)
            result.split_points[wall.id] = points

    LOGGER.info(
        "Split %d wall(s) into %d",
        len(result.lineage),
        sum(len(c) for c in result.lineage.values()),
    )
    return result


def _active_descendants(network: WallNetwork, wall_id: str) -> list[Wall]:
    found = []
    for child_id in network.children_of(wall_id):
        child = network.get(child_id)
        if child is not None:
            found.append(child)
        else:
            found.extend(_active_descendants(network, child_id))
    return found


def relink_entry(entry: BoundaryEntry, network: WallNetwork, eps: float = EPSILON) -> list[BoundaryEntry]:
    """Re-derive a boundary entry over the walls that replaced its wall.

    Each replacement wall that overlaps the entry's span yields a new entry
    clipped to that span, ordered along the entry direction. Entries whose
    wall is still active, or that cannot be re-derived, are returned as is.
    """
    if entry.wall_id in network or not network.is_retired(entry.wall_id):
        return [entry]

    try:
        span = Segment(entry.start, entry.end)
    except GeometryDegenerate:
        return [entry]

    pieces = []
    for child in _active_descendants(network, entry.wall_id):
        if child.segment is None:
            continue
        t0 = span.parameter_of(child.segment.start)
        t1 = span.parameter_of(child.segment.end)
        low, high = max(0.0, min(t0, t1)), min(1.0, max(t0, t1))
        if (high - low) * span.length <= eps:
            continue
        pieces.append(
            (low, BoundaryEntry(wall_id=child.id, start=span.point_at(low), end=span.point_at(high)))
        )

    if not pieces:
        return [entry]

    pieces.sort(key=lambda item: item[0])
    return [piece for _, piece in pieces]


def relink_rooms(rooms: Iterable[Room], network: WallNetwork, eps: float = EPSILON) -> list[Room]:
    """Re-derive every room boundary over the current wall network."""
    relinked = []
    for room in rooms:
        loops = tuple(
            tuple(new for entry in loop for new in relink_entry(entry, network, eps))
            for loop in room.loops
        )
        relinked.append(replace(room, loops=loops))
    return relinked


def run(
    network: WallNetwork,
    rooms: Sequence[Room],
    eps: float = EPSILON,
    min_length: float = MIN_SEGMENT_LENGTH,
    relink: bool = True,
) -> PipelineResult:
    """Split the network, then report every room's bounding walls.

    Args:
        network: Wall network, split in place.
        rooms: Rooms of the plan.
        eps: Point equality tolerance.
        min_length: Minimum length of a replacement wall.
        relink: Re-derive room boundaries over the replacement walls before
            aggregating. Without it, entries pointing at superseded walls
            are reported as unresolved.

    Returns:
        The report, the rooms it was computed from and all diagnostics.

    Raises:
        PipelineError: If the mutation batch failed and was rolled back.
    """
    for room in rooms:
        for i, loop in enumerate(room.loops):
            if loop and not room.is_loop_closed(i, eps):
                LOGGER.warning("Room %s: boundary loop %d is not closed", room.number, i)

    split = split_walls(network, rooms, eps=eps, min_length=min_length)
    diagnostics = Diagnostics()
    diagnostics.extend(split.diagnostics)

    report_rooms = relink_rooms(rooms, network, eps) if relink else list(rooms)
    report = aggregate(report_rooms, network, diagnostics)

    return PipelineResult(report=report, rooms=report_rooms, split=split, diagnostics=diagnostics)
