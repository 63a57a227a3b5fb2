"""
Entity Spawner
==============

Creates falling entities at random horizontal positions, subject to a
per-kind population cap.
"""

from __future__ import annotations

import random
from typing import Optional

from packet_router.router_core.config_loader import GameConfig, get_config
from packet_router.router_core.entities import EntityArena, FallingEntity


class EntitySpawner:
    """
    Seeded spawner shared by every entity kind.

    Each kind is spawned by its own timer; a spawn only ever touches the
    arena it is given.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize spawner.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._playfield_width = config.playfield.width
        self._rng = random.Random(seed)
        self._spawned: int = 0

    @property
    def spawned(self) -> int:
        """Total entities created since the last reset."""
        return self._spawned

    def random_x(self, entity_width: float) -> float:
        """Uniform x in [0, playfield_width - entity_width]."""
        return self._rng.random() * (self._playfield_width - entity_width)

    def spawn(self, arena: EntityArena, level: int) -> Optional[FallingEntity]:
        """
        Spawn one entity into the arena unless it is at capacity.

        The entity starts just above the visible area with speed
        base_speed + level.

        Args:
            arena: Arena of the kind to spawn.
            level: Current game level.

        Returns:
            The new entity, or None if the arena is full.
        """
        entity_type = arena.entity_type
        if len(arena) >= entity_type.max_live:
            return None

        entity = arena.spawn(
            x=self.random_x(entity_type.width),
            y=-float(entity_type.height),
            speed=entity_type.spawn_speed(level)
        )
        self._spawned += 1
        return entity

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset the spawner with optional new seed.

        Args:
            seed: New random seed. Keeps current stream if None.
        """
        if seed is not None:
            self._rng = random.Random(seed)
        self._spawned = 0
