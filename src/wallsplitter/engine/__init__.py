"""Engine module for wall segmentation.

This module provides the split/rebuild pipeline, the wall network it
mutates and the per-room aggregation of the result.
"""

from .aggregate import aggregate, classify_orientation
from .api import relink_rooms, run, split_walls
from .network import WallNetwork
from .rebuild import rebuild_segments
from .split_points import collect_split_points

__all__ = [
    "WallNetwork",
    "aggregate",
    "classify_orientation",
    "collect_split_points",
    "rebuild_segments",
    "relink_rooms",
    "run",
    "split_walls",
]
