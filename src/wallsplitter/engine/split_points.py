"""Collection of the points at which a wall must be cut.

A wall is cut wherever another wall crosses its interior and wherever a
room boundary curve starts on it. The result is a plain value per wall;
nothing is accumulated across walls.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ..config import EPSILON
from ..core.model import Point, Room, Segment, Wall
from ..geom.index import WallIndex
from ..geom.intersect import intersect

LOGGER = logging.getLogger(__name__)

SplitPointSet = tuple[Point, ...]


def _add_unique(points: list[Point], candidate: Point, eps: float) -> bool:
    """Append candidate unless an equal point is already present."""
    for existing in points:
        if existing.almost_equals(candidate, eps):
            return False
    points.append(candidate)
    return True


def _is_interior(segment: Segment, point: Point, eps: float) -> bool:
    """Check that a point projects strictly inside the segment.

    The guard band is eps in length units at both ends.
    """
    distance = segment.parameter_of(point) * segment.length
    return eps < distance < segment.length - eps


def _boundary_cut(segment: Segment, point: Point, eps: float) -> Point | None:
    """Place a boundary start point on the wall line.

    Returns None when the point cannot produce a cut: it coincides with a
    wall endpoint or projects outside the wall.
    """
    t = segment.parameter_of(point)
    if t <= 0.0 or t >= 1.0:
        return None
    on_line = segment.point_at(t)
    if on_line.almost_equals(segment.start, eps) or on_line.almost_equals(segment.end, eps):
        return None
    return on_line


def intersection_points(
    wall: Wall,
    walls: Iterable[Wall],
    eps: float = EPSILON,
) -> list[Point]:
    """Points where other walls cross the interior of a wall."""
    segment = wall.require_segment()
    points: list[Point] = []

    for other in walls:
        if other.id == wall.id or other.segment is None:
            continue
        for point in intersect(segment, other.segment, eps):
            if _is_interior(segment, point, eps):
                _add_unique(points, point, eps)

    return points


def boundary_points(wall: Wall, rooms: Iterable[Room], eps: float = EPSILON) -> list[Point]:
    """Start points of every room boundary curve that runs along a wall."""
    segment = wall.require_segment()
    points: list[Point] = []

    for room in rooms:
        for loop in room.loops:
            for entry in loop:
                if entry.wall_id != wall.id:
                    continue
                cut = _boundary_cut(segment, entry.start, eps)
                if cut is not None:
                    _add_unique(points, cut, eps)

    return points


def collect_split_points(
    wall: Wall,
    walls: Sequence[Wall],
    rooms: Iterable[Room],
    eps: float = EPSILON,
    index: WallIndex | None = None,
) -> SplitPointSet:
    """Gather the deduplicated interior points where a wall must be cut.

    Args:
        wall: The wall to cut.
        walls: Every wall of the network, the wall itself included.
        rooms: Rooms whose boundaries may start on the wall.
        eps: Point equality tolerance and endpoint guard band.
        index: Optional spatial index over ``walls`` to narrow the
            wall-wall candidates.

    Returns:
        Tuple of points, no two within eps of each other and none equal to
        the wall's endpoints.

    Raises:
        GeometryDegenerate: If the wall has no straight location curve.
    """
    candidates = index.candidates(wall) if index is not None else walls

    points = intersection_points(wall, candidates, eps)
    for point in boundary_points(wall, rooms, eps):
        _add_unique(points, point, eps)

    LOGGER.debug("Wall %s: %d split point(s)", wall.id, len(points))
    return tuple(points)
