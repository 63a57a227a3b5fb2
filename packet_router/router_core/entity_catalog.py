"""
Entity Catalog
==============

Provides convenient access to falling entity kinds loaded from config.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple, Optional

from packet_router.router_core.config_loader import (
    GameConfig,
    EntityKindConfig,
    get_config
)


class EntityKind(Enum):
    """Kinds of falling entities."""
    PACKET = "packet"
    VIRUS = "virus"

    @property
    def code(self) -> int:
        """Small integer code used in snapshot arrays (0 = empty slot)."""
        return 1 if self is EntityKind.PACKET else 2


@dataclass
class EntityType:
    """
    Runtime representation of an entity kind.

    Wraps EntityKindConfig with the resolved EntityKind.
    """
    config: EntityKindConfig

    @property
    def kind(self) -> EntityKind:
        return EntityKind(self.config.kind)

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def base_speed(self) -> int:
        return self.config.base_speed

    @property
    def spawn_interval_ms(self) -> float:
        return self.config.spawn_interval_ms

    @property
    def max_live(self) -> int:
        return self.config.max_live

    @property
    def color(self) -> Tuple[int, int, int]:
        return self.config.color

    def spawn_speed(self, level: int) -> int:
        """Initial speed of an entity spawned at the given level."""
        return self.base_speed + level

    def __repr__(self) -> str:
        return f"EntityType({self.kind.value})"


class EntityCatalog:
    """
    Collection of all entity kinds.

    Indexed by EntityKind.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize catalog from game config.

        Args:
            config: GameConfig instance. If None, loads from default location.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._types: Dict[EntityKind, EntityType] = {
            EntityKind(entity_config.kind): EntityType(entity_config)
            for entity_config in config.entities
        }

    def __len__(self) -> int:
        return len(self._types)

    def __getitem__(self, kind: EntityKind) -> EntityType:
        """Get entity type by kind."""
        try:
            return self._types[kind]
        except KeyError:
            raise KeyError(f"Unknown entity kind: {kind}") from None

    def __iter__(self):
        """Iterate over entity types in kind order."""
        return iter(self._types[kind] for kind in EntityKind)

    @property
    def packet(self) -> EntityType:
        return self._types[EntityKind.PACKET]

    @property
    def virus(self) -> EntityType:
        return self._types[EntityKind.VIRUS]

