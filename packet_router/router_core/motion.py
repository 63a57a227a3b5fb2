"""
Motion Updater
==============

Advances falling entities one step per frame and drops the ones that
leave the playfield.
"""

from __future__ import annotations

from typing import Iterable, List

from packet_router.router_core.entities import EntityArena, FallingEntity


class MotionUpdater:
    """
    Frame-coupled vertical motion.

    Each frame moves every entity down by its speed. Motion is not scaled
    by elapsed time: a slow frame rate means slow entities.
    """

    def __init__(self, playfield_height: float):
        self._playfield_height = playfield_height

    @property
    def playfield_height(self) -> float:
        return self._playfield_height

    def step_arena(self, arena: EntityArena) -> List[FallingEntity]:
        """
        Move every entity of one arena, in spawn order.

        Args:
            arena: Arena to advance.

        Returns:
            Entities removed for falling past the playfield bottom.
        """
        removed = []
        for entity in arena.snapshot():
            entity.y += entity.speed
            if entity.y > self._playfield_height:
                arena.remove(entity.uid)
                removed.append(entity)
        return removed

    def step(self, arenas: Iterable[EntityArena]) -> List[FallingEntity]:
        """Move every arena. Returns all entities that left the playfield."""
        removed = []
        for arena in arenas:
            removed.extend(self.step_arena(arena))
        return removed
