"""
Input Handler
=============

Maps directional key presses to router moves.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from packet_router.router_core.config_loader import GameConfig, get_config
from packet_router.router_core.entities import Router


class Direction(Enum):
    LEFT = -1
    RIGHT = 1


class InputHandler:
    """
    Moves the router a fixed step per key press.

    Position is always clamped into [0, playfield_width - router_width].
    Whether input is accepted outside a running game is decided by the
    caller through the `active` flag of move().
    """

    def __init__(self, router: Router, config: Optional[GameConfig] = None):
        """
        Initialize input handler.

        Args:
            router: Router to move.
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._router = router
        self._step = config.router.step
        self._lock_when_inactive = config.router.lock_when_inactive

    @property
    def step(self) -> int:
        return self._step

    @property
    def lock_when_inactive(self) -> bool:
        return self._lock_when_inactive

    def move(self, direction: Direction, active: bool = True) -> float:
        """
        Apply one key press.

        Args:
            direction: LEFT or RIGHT.
            active: False when the game is not running. Only matters if
                lock_when_inactive is set.

        Returns:
            Router x after the move.
        """
        if self._lock_when_inactive and not active:
            return self._router.x

        self._router.move_to(self._router.x + direction.value * self._step)
        return self._router.x

    def move_left(self, active: bool = True) -> float:
        return self.move(Direction.LEFT, active)

    def move_right(self, active: bool = True) -> float:
        return self.move(Direction.RIGHT, active)
