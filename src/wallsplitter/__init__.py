"""Wall Splitter - Split a floor plan's walls at crossings and room breaks."""

__version__ = "0.1.0"

from .core.model import BoundaryEntry, Point, ReportRow, Room, Segment, Wall, WallAttributes
from .engine.api import run, split_walls
from .engine.network import WallNetwork

__all__ = [
    "BoundaryEntry",
    "Point",
    "ReportRow",
    "Room",
    "Segment",
    "Wall",
    "WallAttributes",
    "WallNetwork",
    "run",
    "split_walls",
]
