"""Intersection of bounded wall segments.

Walls are straight, so two segments meet in at most one point unless they
lie on the same line, in which case the endpoints of their common stretch
are reported.
"""

from __future__ import annotations

from typing import Iterator

from ..config import EPSILON, PARALLEL_TOLERANCE
from ..core.model import Point, Segment


def _cross(ax: float, ay: float, bx: float, by: float) -> float:
    return ax * by - ay * bx


def _collinear_overlap(a: Segment, b: Segment, eps: float) -> Iterator[Point]:
    """Yield the endpoints of the stretch two collinear segments share."""
    t0 = a.parameter_of(b.start)
    t1 = a.parameter_of(b.end)
    low = max(0.0, min(t0, t1))
    high = min(1.0, max(t0, t1))

    length = a.length
    if (high - low) * length < -eps:
        return

    if (high - low) * length < eps:
        # Segments only touch end to end
        yield a.point_at(min(max((low + high) / 2.0, 0.0), 1.0))
        return

    yield a.point_at(low)
    yield a.point_at(high)


def intersect(a: Segment, b: Segment, eps: float = EPSILON) -> Iterator[Point]:
    """Enumerate the points where two segments meet.

    Args:
        a: First segment.
        b: Second segment.
        eps: Distance under which parallel lines count as the same line.

    Yields:
        Nothing when the segments miss each other or are parallel on
        distinct lines, the crossing point when both solved parameters lie
        in [0, 1] (endpoint contact included), or the two ends of the
        shared stretch for collinear overlapping segments.
    """
    det = _cross(a.dx, a.dy, b.dx, b.dy)
    wx = b.start.x - a.start.x
    wy = b.start.y - a.start.y

    if abs(det) < PARALLEL_TOLERANCE * a.length * b.length:
        # Distance from b.start to the line through a
        offset = abs(_cross(a.dx, a.dy, wx, wy)) / a.length
        if offset < eps:
            yield from _collinear_overlap(a, b, eps)
        return

    t = _cross(wx, wy, b.dx, b.dy) / det
    u = _cross(wx, wy, a.dx, a.dy) / det

    if 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0:
        yield a.point_at(t)
