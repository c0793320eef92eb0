"""Parser for wall plan JSON files.

This module provides functionality to load a plan (walls plus rooms with
their boundary loops) from JSON, and to write a split network back in the
same format.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Iterable

from ..config import DEFAULT_LEVEL, DEFAULT_WALL_HEIGHT, DEFAULT_WALL_TYPE
from ..core.errors import GeometryDegenerate
from ..core.model import BoundaryEntry, Point, Room, Segment, Wall, WallAttributes
from ..engine.network import WallNetwork

LOGGER = logging.getLogger(__name__)

# Pattern to match "M x1,y1 L x2,y2"
_LINE_PATTERN = re.compile(
    r"M\s*([-+0-9.eE]+)\s*,\s*([-+0-9.eE]+)\s+L\s*([-+0-9.eE]+)\s*,\s*([-+0-9.eE]+)$"
)


def _parse_svg_path(svg_path: str) -> tuple[Point, Point]:
    """Parse SVG path string to extract start and end points.

    Args:
        svg_path: SVG path string in format "M x1,y1 L x2,y2".

    Returns:
        Tuple of (start_point, end_point).

    Raises:
        ValueError: If the path is not a single straight line.
    """
    match = _LINE_PATTERN.match(svg_path.strip())
    if not match:
        raise ValueError(f"Not a straight line path: {svg_path}")

    x1, y1, x2, y2 = map(float, match.groups())
    return Point(x1, y1), Point(x2, y2)


def _format_svg_path(start: Point, end: Point) -> str:
    return f"M {start.x:g},{start.y:g} L {end.x:g},{end.y:g}"


def _parse_wall(wall_id: str, wall_data: dict) -> Wall:
    segment: Segment | None = None
    path = wall_data.get("path")
    if path is not None:
        try:
            start, end = _parse_svg_path(path)
            segment = Segment(start, end)
        except (ValueError, GeometryDegenerate) as e:
            LOGGER.debug("Wall %s has no usable straight curve: %s", wall_id, e)

    height = wall_data.get("height")
    attributes = WallAttributes(
        type_id=str(wall_data.get("type", DEFAULT_WALL_TYPE)),
        level_id=str(wall_data.get("level", DEFAULT_LEVEL)),
        height=float(height) if height is not None else DEFAULT_WALL_HEIGHT,
    )
    return Wall(id=wall_id, segment=segment, attributes=attributes)


def _parse_room(number: str, room_data: dict) -> Room:
    loops = []
    for loop_data in room_data.get("boundaries", []):
        entries = []
        for entry_data in loop_data:
            start, end = _parse_svg_path(entry_data["path"])
            entries.append(BoundaryEntry(wall_id=str(entry_data["wall"]), start=start, end=end))
        loops.append(tuple(entries))

    area = room_data.get("area")
    return Room(
        number=number,
        name=str(room_data.get("name", number)),
        loops=tuple(loops),
        area=float(area) if area is not None else None,
    )


def load_plan(path: str) -> tuple[WallNetwork, list[Room]]:
    """Load a wall plan from a JSON file.

    Args:
        path: Path to the JSON file containing plan data.

    Returns:
        The wall network and the rooms, in file order.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the JSON data is invalid or malformed.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(file_path, encoding="utf-8") as f:
        data = json.load(f)

    return parse_plan(data)


def parse_plan(data: dict) -> tuple[WallNetwork, list[Room]]:
    """Build the wall network and rooms from already decoded plan data."""
    network = WallNetwork()
    for wall_id, wall_data in data.get("walls", {}).items():
        try:
            network.add(_parse_wall(str(wall_id), wall_data))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid wall data for {wall_id}: {e}") from e

    rooms = []
    for number, room_data in data.get("rooms", {}).items():
        try:
            rooms.append(_parse_room(str(number), room_data))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid room data for {number}: {e}") from e

    LOGGER.info("Loaded %d wall(s) and %d room(s)", len(network), len(rooms))
    return network, rooms


def plan_to_dict(walls: Iterable[Wall], rooms: Iterable[Room]) -> dict:
    """Convert walls and rooms to the plan JSON structure."""
    walls_dict = {}
    for wall in walls:
        wall_data = {
            "type": wall.attributes.type_id,
            "level": wall.attributes.level_id,
            "height": wall.attributes.height,
        }
        if wall.segment is not None:
            wall_data["path"] = _format_svg_path(wall.segment.start, wall.segment.end)
        walls_dict[wall.id] = wall_data

    rooms_dict = {}
    for room in rooms:
        room_data = {
            "name": room.name,
            "boundaries": [
                [
                    {"wall": entry.wall_id, "path": _format_svg_path(entry.start, entry.end)}
                    for entry in loop
                ]
                for loop in room.loops
            ],
        }
        if room.area is not None:
            room_data["area"] = room.area
        rooms_dict[room.number] = room_data

    return {"walls": walls_dict, "rooms": rooms_dict}


def save_plan(network: WallNetwork, rooms: Iterable[Room], output_path: str) -> None:
    """Save the active walls of a network and the rooms to a JSON file.

    Args:
        network: The wall network to save.
        rooms: Rooms to save alongside.
        output_path: Path where to save the JSON file.
    """
    plan = plan_to_dict(network.walls(), rooms)

    # Ensure output directory exists
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(plan, f, indent=2)
