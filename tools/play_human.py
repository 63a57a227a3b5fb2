"""
Human Play Mode
================

Play Packet Router in a pygame window.

Controls:
    - Left/Right arrows: Move the router
    - Space/Enter: Start
    - R: Restart after game over
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--viewport-height H] [--fps FPS] [--storage PATH]
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from packet_router.router_core.config_loader import load_config, GameConfig
from packet_router.router_core.high_score import HighScoreStore
from packet_router.router_core.input_handler import Direction
from packet_router.router_core.render_pygame import PygameRenderer
from packet_router.router_core.session import GameSession, GameState


class HumanPlayer:
    """
    Interactive game loop.

    Keyboard events move the router immediately; the display clock feeds
    elapsed time to the session, which runs frames and spawn timers.
    """

    # Cap on simulated time per display frame, so a stalled window does
    # not replay seconds of frames at once
    MAX_FRAME_MS = 200.0

    def __init__(
        self,
        config: GameConfig,
        seed: Optional[int] = None,
        viewport_height: Optional[int] = None,
        target_fps: int = 60
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for human play mode")

        pygame.init()

        if viewport_height is None:
            viewport_height = pygame.display.Info().current_h or config.playfield.viewport_height
            viewport_height = min(viewport_height, config.playfield.viewport_height)

        self._session = GameSession(
            config=config,
            seed=seed,
            store=HighScoreStore(config=config),
            viewport_height=viewport_height
        )
        self._renderer = PygameRenderer(config)

        size = self._renderer.window_size(
            self._session.playfield_width, self._session.playfield_height
        )
        self._screen = pygame.display.set_mode(size)
        pygame.display.set_caption("Packet Router")

        # Held arrow keys repeat like browser keydown events
        pygame.key.set_repeat(200, 40)

        self._clock = pygame.time.Clock()
        self._target_fps = target_fps
        self._running = True

    def run(self) -> int:
        """Run the game loop. Returns the last score."""
        print("=== Packet Router ===")
        print("Arrows to move, Space to start")
        print("R to restart, ESC to quit")
        print()

        while self._running:
            elapsed_ms = self._clock.tick(self._target_fps)
            self._handle_events()

            if self._session.is_running:
                self._session.advance(min(float(elapsed_ms), self.MAX_FRAME_MS))
                if self._session.is_over:
                    print(f"\nGAME OVER - Score: {self._session.final_score}")

            self._renderer.render(self._screen, self._session.snapshot())
            pygame.display.flip()

        self._session.close()
        pygame.quit()
        return self._session.score

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key == pygame.K_LEFT:
                    self._session.move(Direction.LEFT)
                elif event.key == pygame.K_RIGHT:
                    self._session.move(Direction.RIGHT)
                elif event.key in (pygame.K_SPACE, pygame.K_RETURN):
                    if self._session.state is GameState.IDLE:
                        self._session.start()
                elif event.key == pygame.K_r:
                    if self._session.state is GameState.GAME_OVER:
                        self._session.restart()
                        print("\n=== Game Restarted ===\n")


def main():
    parser = argparse.ArgumentParser(description="Play Packet Router interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--viewport-height", type=int, default=None,
                        help="Viewport height the playfield is derived from (default: screen height)")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--storage", type=str, default=None,
                        help="High score storage file (default: from game_config.yaml)")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
        if args.storage is not None:
            config = config.with_storage_path(args.storage)
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            viewport_height=args.viewport_height,
            target_fps=args.fps
        )
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
