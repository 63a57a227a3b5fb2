"""
Scoring System
==============

Tracks score, level and the persisted high score.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union, TYPE_CHECKING

from packet_router.router_core.config_loader import GameConfig, get_config

if TYPE_CHECKING:
    from packet_router.router_core.high_score import HighScoreStore, MemoryHighScoreStore

    ScoreStore = Union[HighScoreStore, MemoryHighScoreStore]


@dataclass
class ScoreEvent:
    """Record of a caught packet."""
    points: int
    score: int
    level: int
    levels_gained: int
    new_record: bool

    @property
    def level_up(self) -> bool:
        return self.levels_gained > 0

    def __repr__(self) -> str:
        parts = [f"+{self.points}", f"score={self.score}"]
        if self.level_up:
            parts.append(f"level_up={self.level}")
        if self.new_record:
            parts.append("record")
        return f"ScoreEvent({', '.join(parts)})"


class ScoreTracker:
    """
    Score, level and high score for a session.

    - Score grows by points_per_catch per caught packet
    - Level grows by one each time the score reaches a multiple of
      points_per_level
    - High score never decreases and is saved every time it is beaten
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        store: Optional[ScoreStore] = None
    ):
        """
        Initialize score tracker.

        Args:
            config: Game configuration. Uses default if None.
            store: High score persistence. Nothing is persisted if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._store = store
        self._points_per_catch = config.scoring.points_per_catch
        self._points_per_level = config.scoring.points_per_level

        self._score: int = 0
        self._level: int = 1
        self._catches: int = 0
        self._high_score: int = store.load() if store is not None else 0

    @property
    def score(self) -> int:
        """Current score."""
        return self._score

    @property
    def level(self) -> int:
        """Current level (starts at 1)."""
        return self._level

    @property
    def high_score(self) -> int:
        """Best score seen, including previous sessions."""
        return self._high_score

    @property
    def catches(self) -> int:
        """Packets caught this run."""
        return self._catches

    def apply_catch(self) -> ScoreEvent:
        """
        Apply score for one caught packet and return the event.

        Returns:
            ScoreEvent describing the new score, level change and record.
        """
        old_score = self._score
        self._score += self._points_per_catch
        self._catches += 1

        new_record = False
        if self._score > self._high_score:
            self._high_score = self._score
            new_record = True
            if self._store is not None:
                self._store.save(self._high_score)

        levels_gained = (
            self._score // self._points_per_level - old_score // self._points_per_level
        )
        self._level += levels_gained

        return ScoreEvent(
            points=self._points_per_catch,
            score=self._score,
            level=self._level,
            levels_gained=levels_gained,
            new_record=new_record
        )

    def status_line(self) -> str:
        """Text shown above the playfield."""
        return f"Score: {self._score} | Level: {self._level} | High Score: {self._high_score}"

    def reset(self) -> None:
        """Reset score and level. The high score is kept."""
        self._score = 0
        self._level = 1
        self._catches = 0
