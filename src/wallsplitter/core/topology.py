"""Topology analysis for room boundaries.

This module derives the relationships between rooms and the walls that
bound them, including which rooms share a wall.
"""

from __future__ import annotations

from typing import Iterable

import networkx as nx

from .model import Room


def build_wall_adjacency(rooms: Iterable[Room]) -> dict[str, set[str]]:
    """Build adjacency mapping from walls to rooms.

    Args:
        rooms: Rooms whose boundaries reference walls.

    Returns:
        Dictionary mapping wall_id to the set of room numbers it bounds.
    """
    adjacency: dict[str, set[str]] = {}

    for room in rooms:
        for wall_id in room.wall_ids():
            adjacency.setdefault(wall_id, set()).add(room.number)

    return adjacency


def build_room_graph(rooms: Iterable[Room]) -> nx.Graph:
    """Build a graph of rooms that share at least one bounding wall.

    Args:
        rooms: Rooms to connect.

    Returns:
        NetworkX Graph whose nodes are room numbers. Each edge carries the
        sorted ids of the shared walls in its ``wall_ids`` attribute.
    """
    rooms = list(rooms)
    G = nx.Graph()

    for room in rooms:
        G.add_node(room.number, name=room.display_name)

    for wall_id, numbers in build_wall_adjacency(rooms).items():
        ordered = sorted(numbers)
        for i, first in enumerate(ordered):
            for second in ordered[i + 1 :]:
                if G.has_edge(first, second):
                    G[first][second]["wall_ids"].append(wall_id)
                    G[first][second]["wall_ids"].sort()
                else:
                    G.add_edge(first, second, wall_ids=[wall_id])

    return G
