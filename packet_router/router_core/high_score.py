"""
High Score Storage
==================

Persists the high score as a single named entry in a small JSON
key-value file. Values are stored as strings, the way browser local
storage keeps them, and parsed back leniently.
"""

from __future__ import annotations

import json
import math
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

from packet_router.router_core.config_loader import GameConfig, get_config


_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_high_score(raw: Any) -> int:
    """
    Parse a stored high score.

    Accepts ints and strings with a leading integer ("12", " 7px").
    Anything else, including negative and non-finite values, reads as 0.
    """
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return max(0, raw)
    if isinstance(raw, float):
        return max(0, int(raw)) if math.isfinite(raw) else 0
    if isinstance(raw, str):
        match = _LEADING_INT.match(raw)
        if match:
            try:
                return max(0, int(match.group(1)))
            except ValueError:
                # Digit strings past the interpreter's int conversion limit
                return 0
    return 0


class HighScoreStore:
    """
    Reads and writes one high-score key in a JSON storage file.

    Other keys in the same file are preserved on write. A missing or
    corrupt file reads as empty.
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        key: Optional[str] = None,
        config: Optional[GameConfig] = None
    ):
        """
        Initialize store.

        Args:
            path: Storage file. Uses config storage.path if None.
            key: Entry name. Uses config storage.high_score_key if None.
            config: Game configuration. Uses default if None.
        """
        if path is None or key is None:
            if config is None:
                config = get_config()
            if path is None:
                path = config.storage.resolved_path
            if key is None:
                key = config.storage.high_score_key

        self._path = Path(path)
        self._key = key

    @property
    def path(self) -> Path:
        return self._path

    @property
    def key(self) -> str:
        return self._key

    def _read_all(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r") as f:
                data = json.load(f)
        except (OSError, ValueError):
            return {}
        if not isinstance(data, dict):
            return {}
        return data

    def load(self) -> int:
        """Read the stored high score, 0 if absent or unparseable."""
        return parse_high_score(self._read_all().get(self._key))

    def save(self, high_score: int) -> None:
        """
        Overwrite the stored high score.

        Args:
            high_score: New record.
        """
        data = self._read_all()
        data[self._key] = str(int(high_score))

        # Create parent directories if needed
        self._path.parent.mkdir(parents=True, exist_ok=True)

        with open(self._path, "w") as f:
            json.dump(data, f, indent=2)


class MemoryHighScoreStore:
    """In-process store with the same interface, for headless runs."""

    def __init__(self, initial: Any = None):
        self._value = initial

    def load(self) -> int:
        return parse_high_score(self._value)

    def save(self, high_score: int) -> None:
        self._value = str(int(high_score))
