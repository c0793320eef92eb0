"""Spatial index over wall segments."""

from __future__ import annotations

from typing import Sequence

from shapely.geometry import LineString
from shapely.strtree import STRtree

from ..config import EPSILON
from ..core.model import Segment, Wall


def segment_to_linestring(segment: Segment) -> LineString:
    return LineString([(segment.start.x, segment.start.y), (segment.end.x, segment.end.y)])


class WallIndex:
    """STRtree over the walls that have a straight location curve.

    Only bounding boxes are compared, so callers still run the exact
    intersection test on every candidate.
    """

    def __init__(self, walls: Sequence[Wall], eps: float = EPSILON):
        self.eps = eps
        self._walls: list[Wall] = [w for w in walls if w.segment is not None]
        self._tree = (
            STRtree([segment_to_linestring(w.segment) for w in self._walls]) if self._walls else None
        )

    def __len__(self) -> int:
        return len(self._walls)

    def candidates(self, wall: Wall) -> list[Wall]:
        """Return walls whose extent comes within eps of the given wall."""
        if wall.segment is None or self._tree is None:
            return []
        buffered = segment_to_linestring(wall.segment).buffer(self.eps)
        hits = sorted(int(i) for i in self._tree.query(buffered))
        return [self._walls[i] for i in hits if self._walls[i].id != wall.id]
