"""
Router Core - The headless game simulation.

Main exports:
- GameSession: Game state controller (spawning, motion, collisions, scoring)
- GameConfig: Configuration loaded from game_config.yaml
- HighScoreStore: Persistent high score entry
- SnapshotBuilder / GameSnapshot: Pure-data view for renderers
- SolidRenderer: Headless numpy renderer
"""

from packet_router.router_core.config_loader import GameConfig, load_config
from packet_router.router_core.entity_catalog import EntityKind, EntityType, EntityCatalog
from packet_router.router_core.entities import FallingEntity, Rect, Router, EntityArena
from packet_router.router_core.scheduler import Scheduler, TaskGroup, TaskHandle
from packet_router.router_core.high_score import HighScoreStore, MemoryHighScoreStore
from packet_router.router_core.input_handler import Direction
from packet_router.router_core.session import (
    GameSession,
    GameState,
    GameStateError,
    FrameResult,
)
from packet_router.router_core.state_snapshot import GameSnapshot, SnapshotBuilder
from packet_router.router_core.render_solid import SolidRenderer

__all__ = [
    "GameConfig",
    "load_config",
    "EntityKind",
    "EntityType",
    "EntityCatalog",
    "FallingEntity",
    "Rect",
    "Router",
    "EntityArena",
    "Scheduler",
    "TaskGroup",
    "TaskHandle",
    "HighScoreStore",
    "MemoryHighScoreStore",
    "Direction",
    "GameSession",
    "GameState",
    "GameStateError",
    "FrameResult",
    "GameSnapshot",
    "SnapshotBuilder",
    "SolidRenderer",
]
