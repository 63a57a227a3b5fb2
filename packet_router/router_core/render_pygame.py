"""
Pygame Renderer
===============

Windowed renderer: status line, playfield, start screen and game-over
screen. Draws from GameSnapshots only.
"""

from __future__ import annotations

from typing import Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from packet_router.router_core.config_loader import GameConfig, get_config
from packet_router.router_core.state_snapshot import GameSnapshot, RenderHandle


class PygameRenderer:
    """
    Renders a session snapshot to a pygame surface.

    The playfield is drawn 1:1 below a status bar and centred
    horizontally in the window.
    """

    STATUS_BAR_HEIGHT = 44

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameRenderer")

        if config is None:
            config = get_config()

        self._config = config

        if not pygame.get_init():
            pygame.init()

        pygame.font.init()
        self._font_huge = pygame.font.Font(None, 56)
        self._font_large = pygame.font.Font(None, 40)
        self._font_medium = pygame.font.Font(None, 28)
        self._font_small = pygame.font.Font(None, 22)

        # Colors
        self._bg_color = (8, 10, 16)
        self._field_color = config.render.background_color
        self._field_border = (60, 70, 95)
        self._router_color = config.render.router_color
        self._text_color = config.render.text_color
        self._text_dim = (150, 155, 175)
        self._panel_color = (28, 34, 52)

    def window_size(self, playfield_width: float, playfield_height: float) -> Tuple[int, int]:
        """Window size that fits the playfield and status bar."""
        return (int(playfield_width) + 40, int(playfield_height) + self.STATUS_BAR_HEIGHT + 20)

    def _field_origin(self, surface: "pygame.Surface", snapshot: GameSnapshot) -> Tuple[int, int]:
        width, _ = surface.get_size()
        return (int((width - snapshot.playfield_width) // 2), self.STATUS_BAR_HEIGHT + 10)

    def render(self, surface: "pygame.Surface", snapshot: GameSnapshot) -> None:
        """
        Draw the full frame.

        Args:
            surface: Target surface (usually the display).
            snapshot: State to draw.
        """
        surface.fill(self._bg_color)
        ox, oy = self._field_origin(surface, snapshot)

        self._draw_status(surface, snapshot)

        field_rect = pygame.Rect(ox, oy, int(snapshot.playfield_width), int(snapshot.playfield_height))
        pygame.draw.rect(surface, self._field_color, field_rect)
        pygame.draw.rect(surface, self._field_border, field_rect.inflate(4, 4), 2)

        # Entities may poke above the field while spawning; clip to it
        previous_clip = surface.get_clip()
        surface.set_clip(field_rect)
        for handle in snapshot.handles:
            self._draw_entity(surface, handle, ox, oy)

        router_rect = pygame.Rect(
            ox + int(snapshot.router_x),
            oy + int(snapshot.router_y),
            int(snapshot.router_width),
            int(snapshot.router_height)
        )
        pygame.draw.rect(surface, self._router_color, router_rect, border_radius=4)
        surface.set_clip(previous_clip)

        if snapshot.state == "idle":
            self._draw_start_screen(surface)
        elif snapshot.state == "game_over":
            self._draw_game_over(surface, snapshot.final_score or 0)

    def _draw_status(self, surface: "pygame.Surface", snapshot: GameSnapshot) -> None:
        """Draw the score / level / high score line."""
        text = self._font_medium.render(snapshot.status_line, True, self._text_color)
        width, _ = surface.get_size()
        surface.blit(text, ((width - text.get_width()) // 2, (self.STATUS_BAR_HEIGHT - text.get_height()) // 2))

    def _draw_entity(self, surface: "pygame.Surface", handle: RenderHandle, ox: int, oy: int) -> None:
        rect = pygame.Rect(ox + int(handle.x), oy + int(handle.y), int(handle.width), int(handle.height))
        if handle.kind_code == 1:
            # Packet: rounded box with a header stripe
            pygame.draw.rect(surface, handle.color, rect, border_radius=6)
            stripe = pygame.Rect(rect.x + 6, rect.y + 8, rect.width - 12, 4)
            pygame.draw.rect(surface, self._field_color, stripe)
        else:
            # Virus: spiky circle
            center = rect.center
            radius = min(rect.width, rect.height) // 2
            pygame.draw.circle(surface, handle.color, center, radius - 4)
            for dx, dy in ((0, -1), (1, 0), (0, 1), (-1, 0), (1, 1), (-1, -1), (1, -1), (-1, 1)):
                tip = (center[0] + dx * radius * 0.9, center[1] + dy * radius * 0.9)
                pygame.draw.line(surface, handle.color, center, tip, 3)

    def _draw_overlay_box(self, surface: "pygame.Surface", lines) -> None:
        width, height = surface.get_size()
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 150))
        surface.blit(overlay, (0, 0))

        box_w, box_h = 320, 190
        box_x = (width - box_w) // 2
        box_y = (height - box_h) // 2
        pygame.draw.rect(surface, self._panel_color, (box_x, box_y, box_w, box_h), border_radius=16)
        pygame.draw.rect(surface, self._field_border, (box_x, box_y, box_w, box_h), 3, border_radius=16)

        y = box_y + 25
        for font, text, color in lines:
            rendered = font.render(text, True, color)
            surface.blit(rendered, (box_x + (box_w - rendered.get_width()) // 2, y))
            y += rendered.get_height() + 18

    def _draw_start_screen(self, surface: "pygame.Surface") -> None:
        self._draw_overlay_box(surface, [
            (self._font_huge, "PACKET ROUTER", self._text_color),
            (self._font_small, "Catch packets, dodge viruses", self._text_dim),
            (self._font_medium, "Press Space to start", self._text_dim),
        ])

    def _draw_game_over(self, surface: "pygame.Surface", final_score: int) -> None:
        self._draw_overlay_box(surface, [
            (self._font_huge, "GAME OVER", self._text_color),
            (self._font_large, f"Score: {final_score}", self._text_color),
            (self._font_medium, "Press R to restart", self._text_dim),
        ])
