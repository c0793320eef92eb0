"""Core data models for wall segmentation."""

from .errors import (
    Diagnostic,
    Diagnostics,
    GeometryDegenerate,
    PipelineError,
    SplitFailure,
    UnresolvedBoundaryReference,
    WallSplitterError,
)
from .model import BoundaryEntry, Point, ReportRow, Room, Segment, Wall, WallAttributes
from .topology import build_room_graph, build_wall_adjacency

__all__ = [
    "BoundaryEntry",
    "Diagnostic",
    "Diagnostics",
    "GeometryDegenerate",
    "PipelineError",
    "Point",
    "ReportRow",
    "Room",
    "Segment",
    "SplitFailure",
    "UnresolvedBoundaryReference",
    "Wall",
    "WallAttributes",
    "WallSplitterError",
    "build_room_graph",
    "build_wall_adjacency",
]
