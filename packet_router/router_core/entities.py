"""
Entities
========

Pure-data game objects: falling entities, the router, and the
insertion-ordered arena that owns the live entities of one kind.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from packet_router.router_core.entity_catalog import EntityKind, EntityType


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in playfield coordinates (y grows downward)."""
    left: float
    top: float
    right: float
    bottom: float

    @staticmethod
    def from_size(x: float, y: float, width: float, height: float) -> "Rect":
        return Rect(x, y, x + width, y + height)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


@dataclass
class FallingEntity:
    """
    A packet or virus falling through the playfield.

    Position is the top-left corner. Speed is pixels per frame.
    """
    uid: int
    entity_type: EntityType
    x: float
    y: float
    speed: int

    @property
    def kind(self) -> EntityKind:
        return self.entity_type.kind

    @property
    def rect(self) -> Rect:
        return Rect.from_size(self.x, self.y, self.entity_type.width, self.entity_type.height)


@dataclass
class Router:
    """
    The player-controlled router.

    Only x changes during play; y is fixed near the playfield bottom.
    """
    x: float
    y: float
    width: int
    height: int
    playfield_width: float

    @property
    def min_x(self) -> float:
        return 0.0

    @property
    def max_x(self) -> float:
        return self.playfield_width - self.width

    @property
    def centered_x(self) -> float:
        return (self.playfield_width - self.width) / 2

    @property
    def rect(self) -> Rect:
        return Rect.from_size(self.x, self.y, self.width, self.height)

    def clamp(self, x: float) -> float:
        """Clamp an x position into the router's legal range."""
        return max(self.min_x, min(self.max_x, x))

    def move_to(self, x: float) -> None:
        self.x = self.clamp(x)

    def center(self) -> None:
        self.x = self.centered_x


class EntityArena:
    """
    Live entities of a single kind, in spawn order.

    Entities are keyed by a per-arena UID so removal during a pass over
    list(arena) never disturbs the remaining order.
    """

    def __init__(self, entity_type: EntityType):
        self._entity_type = entity_type
        self._entities: Dict[int, FallingEntity] = {}
        self._next_uid = 0

    @property
    def entity_type(self) -> EntityType:
        return self._entity_type

    @property
    def kind(self) -> EntityKind:
        return self._entity_type.kind

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[FallingEntity]:
        return iter(self._entities.values())

    def __contains__(self, uid: int) -> bool:
        return uid in self._entities

    def spawn(self, x: float, y: float, speed: int) -> FallingEntity:
        """
        Create a new entity and append it to the arena.

        Args:
            x: Left edge.
            y: Top edge.
            speed: Initial pixels per frame.

        Returns:
            The created FallingEntity.
        """
        uid = self._next_uid
        self._next_uid += 1
        entity = FallingEntity(
            uid=uid,
            entity_type=self._entity_type,
            x=x,
            y=y,
            speed=speed
        )
        self._entities[uid] = entity
        return entity

    def remove(self, uid: int) -> Optional[FallingEntity]:
        """Remove an entity by UID. Returns it, or None if not present."""
        return self._entities.pop(uid, None)

    def get(self, uid: int) -> Optional[FallingEntity]:
        return self._entities.get(uid)

    def snapshot(self) -> List[FallingEntity]:
        """Stable list of live entities, safe to iterate while removing."""
        return list(self._entities.values())

    def bump_speeds(self, delta: int = 1) -> None:
        """Raise the speed of every live entity."""
        for entity in self._entities.values():
            entity.speed += delta

    def reset_speeds(self) -> None:
        """Set every live entity back to its kind's base speed."""
        for entity in self._entities.values():
            entity.speed = self._entity_type.base_speed

    def clear(self) -> None:
        """Remove all entities."""
        self._entities.clear()
        self._next_uid = 0
