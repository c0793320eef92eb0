"""In-memory wall network and the mutations applied to it.

The network is the only writer of wall identity and lifecycle. Splitting a
wall supersedes it: replacement walls are created with fresh ids and the
original is retired, which makes every later lookup of its id fail while
keeping its record for lineage queries.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, Sequence

from ..config import CHILD_ID_SEPARATOR, EPSILON
from ..core.errors import Diagnostics, PipelineError, SplitFailure
from ..core.model import Segment, Wall

LOGGER = logging.getLogger(__name__)


class WallNetwork:
    """Active and retired walls of a plan.

    Attributes:
        eps: Tolerance used to detect duplicate walls.
    """

    def __init__(self, walls: Iterable[Wall] = (), eps: float = EPSILON):
        self.eps = eps
        self._active: dict[str, Wall] = {}
        self._retired: dict[str, Wall] = {}
        self._children: dict[str, tuple[str, ...]] = {}
        for wall in walls:
            self.add(wall)

    # ------------------------------------------------------------------ #
    # Lookups
    # ------------------------------------------------------------------ #
    def get(self, wall_id: str) -> Wall | None:
        """Return the active wall with this id, or None if absent or retired."""
        return self._active.get(wall_id)

    def walls(self) -> list[Wall]:
        return list(self._active.values())

    def retired(self) -> list[Wall]:
        return list(self._retired.values())

    def is_retired(self, wall_id: str) -> bool:
        return wall_id in self._retired

    def children_of(self, wall_id: str) -> tuple[str, ...]:
        """Ids of the walls that replaced a retired wall."""
        return self._children.get(wall_id, ())

    @property
    def lineage(self) -> dict[str, tuple[str, ...]]:
        return dict(self._children)

    def __contains__(self, wall_id: object) -> bool:
        return wall_id in self._active

    def __iter__(self) -> Iterator[Wall]:
        return iter(list(self._active.values()))

    def __len__(self) -> int:
        return len(self._active)

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #
    def add(self, wall: Wall) -> Wall:
        """Register an existing wall.

        Raises:
            ValueError: If the id is already used by an active or retired wall.
        """
        if wall.id in self._active or wall.id in self._retired:
            raise ValueError(f"Duplicate wall id: {wall.id}")
        self._active[wall.id] = wall
        return wall

    def _next_child_id(self, parent_id: str) -> str:
        n = 1
        while True:
            candidate = f"{parent_id}{CHILD_ID_SEPARATOR}{n}"
            if candidate not in self._active and candidate not in self._retired:
                return candidate
            n += 1

    def create_wall(self, parent: Wall, segment: Segment) -> Wall:
        """Create a wall with a fresh id and the parent's attributes.

        Raises:
            SplitFailure: If an active wall already occupies the segment.
        """
        for other in self._active.values():
            if other.id == parent.id or other.segment is None:
                continue
            if other.segment.almost_equals(segment, self.eps):
                raise SplitFailure(
                    f"Segment ({segment.start.x:.3f}, {segment.start.y:.3f}) - "
                    f"({segment.end.x:.3f}, {segment.end.y:.3f}) duplicates wall {other.id}"
                )

        wall = Wall(id=self._next_child_id(parent.id), segment=segment, attributes=parent.attributes)
        self._active[wall.id] = wall
        return wall

    def retire(self, wall_id: str) -> Wall:
        """Remove a wall from the active set, keeping its record.

        Raises:
            KeyError: If no active wall has this id.
        """
        wall = self._active.pop(wall_id)
        self._retired[wall_id] = wall
        return wall

    def supersede(
        self,
        wall: Wall,
        segments: Sequence[Segment],
        diagnostics: Diagnostics | None = None,
    ) -> tuple[Wall, ...]:
        """Replace a wall with one new wall per segment.

        A rejected segment is skipped and recorded; the remaining segments
        are still created and the original wall is retired regardless.

        Args:
            wall: The active wall to replace.
            segments: Rebuilt chain for the wall.
            diagnostics: Collector for rejected segments.

        Returns:
            The walls that were created, in chain order.
        """
        created: list[Wall] = []
        for segment in segments:
            try:
                created.append(self.create_wall(wall, segment))
            except SplitFailure as exc:
                if diagnostics is not None:
                    diagnostics.record(exc, wall.id)
                else:
                    LOGGER.warning("Wall %s: %s", wall.id, exc)

        self.retire(wall.id)
        self._children[wall.id] = tuple(w.id for w in created)
        LOGGER.debug("Wall %s superseded by %s", wall.id, [w.id for w in created])
        return tuple(created)

    @contextmanager
    def batch(self) -> Iterator["WallNetwork"]:
        """Apply a group of mutations atomically.

        Any exception escaping the block restores the network to its state
        on entry and is re-raised as PipelineError.
        """
        snapshot = (dict(self._active), dict(self._retired), dict(self._children))
        try:
            yield self
        except Exception as exc:
            self._active, self._retired, self._children = snapshot
            LOGGER.error("Mutation batch rolled back: %s", exc)
            raise PipelineError(f"Mutation batch failed: {exc}") from exc
