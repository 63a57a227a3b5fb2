"""
Tests for router input handling.
"""

import dataclasses

import pytest

from packet_router.router_core.config_loader import load_config
from packet_router.router_core.entities import Router
from packet_router.router_core.input_handler import Direction, InputHandler


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def router(config):
    r = Router(
        x=0.0,
        y=570.0,
        width=config.router.width,
        height=config.router.height,
        playfield_width=float(config.playfield.width)
    )
    r.center()
    return r


@pytest.fixture
def handler(router, config):
    return InputHandler(router, config)


class TestInputHandler:
    """Test stepping and clamping."""

    def test_starts_centered(self, router):
        assert router.x == 220.0

    def test_step_left_right(self, handler, router):
        assert handler.move(Direction.LEFT) == 200.0
        assert handler.move(Direction.RIGHT) == 220.0
        assert handler.move_right() == 240.0
        assert handler.move_left() == 220.0

    def test_clamped_left(self, handler, router):
        """Router stops at the left wall without overshooting."""
        for _ in range(50):
            handler.move_left()
            assert router.x >= 0.0
        assert router.x == 0.0

    def test_clamped_right(self, handler, router):
        """Router stops at playfield_width - router_width."""
        for _ in range(50):
            handler.move_right()
            assert router.x <= 440.0
        assert router.x == 440.0

    def test_partial_step_clamped(self, handler, router):
        """A step that would cross the wall lands exactly on it."""
        router.move_to(10.0)
        assert handler.move_left() == 0.0
        router.move_to(430.0)
        assert handler.move_right() == 440.0

    def test_moves_while_inactive_by_default(self, handler, router):
        """Input is not gated on game state unless configured to be."""
        assert handler.move(Direction.LEFT, active=False) == 200.0

    def test_lock_when_inactive(self, config, router):
        """With lock_when_inactive, input outside a running game is ignored."""
        locked = dataclasses.replace(
            config, router=dataclasses.replace(config.router, lock_when_inactive=True)
        )
        handler = InputHandler(router, locked)

        assert handler.move(Direction.LEFT, active=False) == 220.0
        assert handler.move(Direction.LEFT, active=True) == 200.0
