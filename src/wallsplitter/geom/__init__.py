"""Geometry utilities for wall segmentation.

This module provides segment intersection and a spatial index used to
find the walls that may cross a given wall.
"""

from .index import WallIndex, segment_to_linestring
from .intersect import intersect

__all__ = ["intersect", "WallIndex", "segment_to_linestring"]
