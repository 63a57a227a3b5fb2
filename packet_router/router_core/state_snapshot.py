"""
State Snapshot
==============

Packs session state into fixed-size numpy arrays for the visual layer.

Renderers only ever see snapshots, never the live arenas, so the
simulation can run and be tested without a display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, TYPE_CHECKING
import numpy as np

from packet_router.router_core.config_loader import GameConfig, get_config

if TYPE_CHECKING:
    from packet_router.router_core.session import GameSession


@dataclass
class RenderHandle:
    """One drawable entity: identity, kind code and rectangle."""
    key: str            # "<kind>:<uid>", stable for the entity's lifetime
    kind_code: int
    x: float
    y: float
    width: float
    height: float
    color: tuple


@dataclass
class GameSnapshot:
    """
    Complete session state snapshot.

    Entity arrays are fixed-size (sum of per-kind caps) with a mask for
    the live slots. Packets come first, then viruses, each in spawn order.
    """
    # Core state
    state: str
    score: int
    level: int
    high_score: int
    final_score: Optional[int]
    frames: int
    status_line: str

    # Playfield
    playfield_width: float
    playfield_height: float

    # Router
    router_x: float
    router_y: float
    router_width: float
    router_height: float

    # Entity arrays (fixed size, padded)
    ent_kind: np.ndarray      # (MAX_ENT,) int8, 0 = empty, 1 = packet, 2 = virus
    ent_x: np.ndarray         # (MAX_ENT,) float32
    ent_y: np.ndarray         # (MAX_ENT,) float32
    ent_speed: np.ndarray     # (MAX_ENT,) int16
    ent_mask: np.ndarray      # (MAX_ENT,) bool

    # Drawables in draw order
    handles: List[RenderHandle]

    @property
    def packet_count(self) -> int:
        return int(np.sum(self.ent_kind == 1))

    @property
    def virus_count(self) -> int:
        return int(np.sum(self.ent_kind == 2))

    def to_dict(self) -> Dict[str, object]:
        """Plain-python view of the snapshot."""
        live = self.ent_mask
        return {
            "state": self.state,
            "score": self.score,
            "level": self.level,
            "high_score": self.high_score,
            "final_score": self.final_score,
            "frames": self.frames,
            "status_line": self.status_line,
            "playfield_width": self.playfield_width,
            "playfield_height": self.playfield_height,
            "router_x": self.router_x,
            "router_y": self.router_y,
            "entities": [
                {
                    "kind": int(k),
                    "x": float(x),
                    "y": float(y),
                    "speed": int(s),
                }
                for k, x, y, s in zip(
                    self.ent_kind[live], self.ent_x[live],
                    self.ent_y[live], self.ent_speed[live]
                )
            ],
        }


class SnapshotBuilder:
    """Builds GameSnapshots from a live session."""

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize builder.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._max_entities = config.max_entities

    @property
    def max_entities(self) -> int:
        return self._max_entities

    def build(self, session: "GameSession") -> GameSnapshot:
        """
        Snapshot the session.

        Args:
            session: Session to capture.

        Returns:
            GameSnapshot copy of the current state.
        """
        n = self._max_entities
        ent_kind = np.zeros(n, dtype=np.int8)
        ent_x = np.zeros(n, dtype=np.float32)
        ent_y = np.zeros(n, dtype=np.float32)
        ent_speed = np.zeros(n, dtype=np.int16)
        ent_mask = np.zeros(n, dtype=bool)
        handles: List[RenderHandle] = []

        i = 0
        for arena in session.arenas:
            for entity in arena:
                if i >= n:
                    break
                entity_type = entity.entity_type
                ent_kind[i] = entity.kind.code
                ent_x[i] = entity.x
                ent_y[i] = entity.y
                ent_speed[i] = entity.speed
                ent_mask[i] = True
                handles.append(RenderHandle(
                    key=f"{entity.kind.value}:{entity.uid}",
                    kind_code=entity.kind.code,
                    x=entity.x,
                    y=entity.y,
                    width=entity_type.width,
                    height=entity_type.height,
                    color=entity_type.color
                ))
                i += 1

        router = session.router
        return GameSnapshot(
            state=session.state.value,
            score=session.score,
            level=session.level,
            high_score=session.high_score,
            final_score=session.final_score,
            frames=session.frames,
            status_line=session.status_line,
            playfield_width=session.playfield_width,
            playfield_height=session.playfield_height,
            router_x=router.x,
            router_y=router.y,
            router_width=router.width,
            router_height=router.height,
            ent_kind=ent_kind,
            ent_x=ent_x,
            ent_y=ent_y,
            ent_speed=ent_speed,
            ent_mask=ent_mask,
            handles=handles
        )
