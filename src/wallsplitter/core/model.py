"""Core data models for wall segmentation.

This module defines the immutable value types shared by every stage of
the pipeline: points, bounded segments, walls with their host attributes,
room boundary loops and the rows of the final report.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from ..config import EPSILON
from .errors import GeometryDegenerate


@dataclass(frozen=True)
class Point:
    """Represents a 2D point in plan coordinates.

    Attributes:
        x: The x-coordinate of the point.
        y: The y-coordinate of the point.
    """

    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        """Calculate Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def almost_equals(self, other: Point, eps: float = EPSILON) -> bool:
        """Check if two points are the same point within tolerance."""
        return self.distance_to(other) < eps


@dataclass(frozen=True)
class Segment:
    """Represents a bounded straight segment.

    Attributes:
        start: Starting point (parameter 0).
        end: Ending point (parameter 1).

    Raises:
        GeometryDegenerate: If start and end coincide within EPSILON.
    """

    start: Point
    end: Point

    def __post_init__(self) -> None:
        if self.start.almost_equals(self.end):
            raise GeometryDegenerate(
                f"Segment from ({self.start.x}, {self.start.y}) to "
                f"({self.end.x}, {self.end.y}) has no length"
            )

    @property
    def dx(self) -> float:
        return self.end.x - self.start.x

    @property
    def dy(self) -> float:
        return self.end.y - self.start.y

    @property
    def length(self) -> float:
        return math.hypot(self.dx, self.dy)

    @property
    def direction(self) -> tuple[float, float]:
        """Unit vector from start to end."""
        length = self.length
        return self.dx / length, self.dy / length

    def parameter_of(self, point: Point) -> float:
        """Project a point onto the supporting line and return its parameter.

        Args:
            point: Any point in the plane.

        Returns:
            Scalar t such that 0 is the start and 1 is the end. Points beyond
            the segment give values outside [0, 1].
        """
        length_sq = self.dx * self.dx + self.dy * self.dy
        return (
            (point.x - self.start.x) * self.dx + (point.y - self.start.y) * self.dy
        ) / length_sq

    def point_at(self, t: float) -> Point:
        """Return the point at parameter t along the supporting line."""
        return Point(self.start.x + t * self.dx, self.start.y + t * self.dy)

    def almost_equals(self, other: Segment, eps: float = EPSILON) -> bool:
        """Check if two segments have the same endpoints, in either order."""
        same = self.start.almost_equals(other.start, eps) and self.end.almost_equals(
            other.end, eps
        )
        flipped = self.start.almost_equals(other.end, eps) and self.end.almost_equals(
            other.start, eps
        )
        return same or flipped


@dataclass(frozen=True)
class WallAttributes:
    """Host attributes carried over from a wall to its replacements.

    Attributes:
        type_id: Identifier of the wall type.
        level_id: Identifier of the base level.
        height: Unconnected height in plan length units.
    """

    type_id: str
    level_id: str
    height: float


@dataclass(frozen=True)
class Wall:
    """Represents a wall in the network.

    Attributes:
        id: Stable identifier of the wall.
        segment: Straight location curve, or None when the host curve is not
            a usable straight line (arcs, missing geometry).
        attributes: Type, level and height of the wall.
    """

    id: str
    segment: Segment | None
    attributes: WallAttributes

    def require_segment(self) -> Segment:
        """Return the location segment or raise GeometryDegenerate."""
        if self.segment is None:
            raise GeometryDegenerate(f"Wall '{self.id}' has no straight location curve")
        return self.segment


@dataclass(frozen=True)
class BoundaryEntry:
    """One curve of a room boundary loop.

    Attributes:
        wall_id: ID of the wall this part of the boundary runs along.
        start: Start of the boundary curve; the wall is cut here.
        end: End of the boundary curve.
    """

    wall_id: str
    start: Point
    end: Point


@dataclass(frozen=True)
class Room:
    """Represents a room and its boundary.

    Attributes:
        number: Room number as shown on the plan.
        name: Room name, possibly suffixed with the number.
        loops: Boundary loops; the first is the outer loop, the rest holes.
        area: Placed area of the room, or None when unknown.
    """

    number: str
    name: str
    loops: tuple[tuple[BoundaryEntry, ...], ...] = field(default_factory=tuple)
    area: float | None = None

    @property
    def display_name(self) -> str:
        """Room name without a trailing copy of the room number."""
        suffix = " " + self.number
        if self.number and self.name.endswith(suffix):
            return self.name[: -len(suffix)]
        return self.name

    @property
    def is_placed(self) -> bool:
        return self.area is None or self.area > 0

    def wall_ids(self) -> tuple[str, ...]:
        """All wall ids referenced by the boundary, in traversal order."""
        return tuple(entry.wall_id for loop in self.loops for entry in loop)

    def is_loop_closed(self, index: int, eps: float = EPSILON) -> bool:
        """Check that a boundary loop ends where it starts.

        Closure is asserted here and never repaired.
        """
        loop = self.loops[index]
        if not loop:
            return False
        return loop[-1].end.almost_equals(loop[0].start, eps)


@dataclass(frozen=True)
class ReportRow:
    """One line of the room wall report."""

    room_number: str
    room_name: str
    wall_id: str
    length: float
    area: float
    orientation: str
