"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple, Optional

import yaml


# Entity kinds the game knows how to spawn, in spawn-timer order
ENTITY_KINDS = ("packet", "virus")


@dataclass(frozen=True)
class PlayfieldConfig:
    """Playfield geometry."""
    width: int                 # Fixed playfield width in pixels
    viewport_height: int       # Viewport height the playfield is derived from
    height_fraction: float     # Fraction of the viewport used by the playfield

    @property
    def height(self) -> float:
        """Playfield height, derived once from the viewport."""
        return self.viewport_height * self.height_fraction


@dataclass(frozen=True)
class RouterConfig:
    """Player-controlled router parameters."""
    width: int
    height: int
    bottom_margin: int
    step: int                  # Pixels per directional key press
    lock_when_inactive: bool   # Ignore input unless the game is running


@dataclass(frozen=True)
class EntityKindConfig:
    """Configuration for a single falling entity kind."""
    kind: str
    width: int
    height: int
    base_speed: int
    spawn_interval_ms: float
    max_live: int
    color: Tuple[int, int, int]


@dataclass(frozen=True)
class TimingConfig:
    """Frame loop timing."""
    frame_interval_ms: float


@dataclass(frozen=True)
class ScoringConfig:
    """Scoring parameters."""
    points_per_catch: int
    points_per_level: int


@dataclass(frozen=True)
class StorageConfig:
    """Persistent high score storage."""
    path: str
    high_score_key: str

    @property
    def resolved_path(self) -> Path:
        return Path(os.path.expanduser(self.path))


@dataclass(frozen=True)
class RenderConfig:
    """Colors shared by the renderers."""
    background_color: Tuple[int, int, int]
    router_color: Tuple[int, int, int]
    text_color: Tuple[int, int, int]


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    playfield: PlayfieldConfig
    router: RouterConfig
    entities: Tuple[EntityKindConfig, ...]
    timing: TimingConfig
    scoring: ScoringConfig
    storage: StorageConfig
    render: RenderConfig

    @property
    def max_entities(self) -> int:
        """Upper bound on live entities across all kinds."""
        return sum(e.max_live for e in self.entities)

    def get_entity(self, kind: str) -> EntityKindConfig:
        """Get entity config by kind name."""
        for entity in self.entities:
            if entity.kind == kind:
                return entity
        raise ValueError(f"Invalid entity kind: {kind}")

    def with_viewport_height(self, viewport_height: int) -> "GameConfig":
        """Copy of this config with the playfield derived from another viewport."""
        playfield = PlayfieldConfig(
            width=self.playfield.width,
            viewport_height=int(viewport_height),
            height_fraction=self.playfield.height_fraction
        )
        config = GameConfig(
            playfield=playfield,
            router=self.router,
            entities=self.entities,
            timing=self.timing,
            scoring=self.scoring,
            storage=self.storage,
            render=self.render
        )
        _validate_config(config)
        return config

    def with_storage_path(self, path: str) -> "GameConfig":
        """Copy of this config persisting the high score somewhere else."""
        return GameConfig(
            playfield=self.playfield,
            router=self.router,
            entities=self.entities,
            timing=self.timing,
            scoring=self.scoring,
            storage=StorageConfig(path=str(path), high_score_key=self.storage.high_score_key),
            render=self.render
        )


def _parse_color(color_data: List) -> Tuple[int, int, int]:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    return (int(color_data[0]), int(color_data[1]), int(color_data[2]))


def _parse_entity(entity_data: Dict) -> EntityKindConfig:
    """Parse a single entity kind configuration from YAML."""
    return EntityKindConfig(
        kind=str(entity_data["kind"]),
        width=int(entity_data["width"]),
        height=int(entity_data["height"]),
        base_speed=int(entity_data["base_speed"]),
        spawn_interval_ms=float(entity_data["spawn_interval_ms"]),
        max_live=int(entity_data["max_live"]),
        color=_parse_color(entity_data["color"])
    )


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    kinds = [e.kind for e in config.entities]
    if sorted(kinds) != sorted(ENTITY_KINDS):
        raise ValueError(
            f"entities must define each of {ENTITY_KINDS} exactly once, got {kinds}"
        )

    if config.router.width > config.playfield.width:
        raise ValueError(
            f"router.width ({config.router.width}) exceeds "
            f"playfield.width ({config.playfield.width})"
        )

    for entity in config.entities:
        if entity.width > config.playfield.width:
            raise ValueError(
                f"{entity.kind} width ({entity.width}) exceeds "
                f"playfield.width ({config.playfield.width})"
            )
        if entity.base_speed < 1:
            raise ValueError(f"{entity.kind} base_speed must be >= 1, got {entity.base_speed}")
        if entity.spawn_interval_ms <= 0:
            raise ValueError(f"{entity.kind} spawn_interval_ms must be positive")
        if entity.max_live < 0:
            raise ValueError(f"{entity.kind} max_live must be >= 0")

    if config.playfield.height <= config.router.height + config.router.bottom_margin:
        raise ValueError(
            f"Playfield height ({config.playfield.height}) too small for the router"
        )

    if config.timing.frame_interval_ms <= 0:
        raise ValueError("timing.frame_interval_ms must be positive")

    if config.scoring.points_per_level < 1:
        raise ValueError("scoring.points_per_level must be >= 1")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    playfield_data = raw["playfield"]
    playfield = PlayfieldConfig(
        width=int(playfield_data["width"]),
        viewport_height=int(playfield_data["viewport_height"]),
        height_fraction=float(playfield_data.get("height_fraction", 0.8))
    )

    router_data = raw["router"]
    router = RouterConfig(
        width=int(router_data["width"]),
        height=int(router_data["height"]),
        bottom_margin=int(router_data.get("bottom_margin", 10)),
        step=int(router_data["step"]),
        lock_when_inactive=bool(router_data.get("lock_when_inactive", False))
    )

    entities = tuple(_parse_entity(e) for e in raw["entities"])

    timing_data = raw.get("timing", {})
    timing = TimingConfig(
        frame_interval_ms=float(timing_data.get("frame_interval_ms", 1000.0 / 60.0))
    )

    scoring_data = raw.get("scoring", {})
    scoring = ScoringConfig(
        points_per_catch=int(scoring_data.get("points_per_catch", 1)),
        points_per_level=int(scoring_data.get("points_per_level", 10))
    )

    storage_data = raw.get("storage", {})
    storage = StorageConfig(
        path=str(storage_data.get("path", "~/.packet_router/storage.json")),
        high_score_key=str(storage_data.get("high_score_key", "highScore"))
    )

    render_data = raw.get("render", {})
    render = RenderConfig(
        background_color=_parse_color(render_data.get("background_color", [18, 24, 38])),
        router_color=_parse_color(render_data.get("router_color", [70, 140, 255])),
        text_color=_parse_color(render_data.get("text_color", [235, 235, 245]))
    )

    config = GameConfig(
        playfield=playfield,
        router=router,
        entities=entities,
        timing=timing,
        scoring=scoring,
        storage=storage,
        render=render
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
