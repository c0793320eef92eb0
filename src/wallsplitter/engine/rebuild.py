"""Rebuild a wall as an ordered chain of sub-segments."""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

from ..config import EPSILON, MIN_SEGMENT_LENGTH
from ..core.errors import GeometryDegenerate
from ..core.model import Point, Segment, Wall

LOGGER = logging.getLogger(__name__)


def order_along(segment: Segment, points: Iterable[Point]) -> list[Point]:
    """Sort points by their parameter along a segment.

    Ties keep input order.
    """
    points = list(points)
    if not points:
        return []
    params = np.array([segment.parameter_of(p) for p in points], dtype=float)
    order = np.argsort(params, kind="stable")
    return [points[i] for i in order]


def rebuild_segments(
    wall: Wall,
    split_points: Iterable[Point],
    min_length: float = MIN_SEGMENT_LENGTH,
    eps: float = EPSILON,
) -> tuple[Segment, ...]:
    """Cut a wall at its split points.

    Args:
        wall: The wall to rebuild.
        split_points: Interior cut points, in any order.
        min_length: Pieces shorter than this are dropped.
        eps: Point equality tolerance.

    Returns:
        Sub-segments ordered from the wall's start to its end. With no split
        points this is the original segment on its own.

    Raises:
        GeometryDegenerate: If the wall has no straight location curve.
    """
    segment = wall.require_segment()
    split_points = list(split_points)
    if not split_points:
        return (segment,)

    chain = [segment.start] + order_along(segment, split_points) + [segment.end]

    pieces: list[Segment] = []
    for p1, p2 in zip(chain, chain[1:]):
        if p1.almost_equals(p2, eps) or p1.distance_to(p2) < min_length:
            LOGGER.debug("Wall %s: dropping short piece at (%.3f, %.3f)", wall.id, p1.x, p1.y)
            continue
        try:
            pieces.append(Segment(p1, p2))
        except GeometryDegenerate:
            # Shorter than the tolerance Segment enforces
            LOGGER.debug("Wall %s: dropping degenerate piece at (%.3f, %.3f)", wall.id, p1.x, p1.y)

    if not pieces and segment.length >= min_length:
        # Every cut landed inside a dropped piece
        return (segment,)

    return tuple(pieces)
