"""
Solid Renderer
==============

Fast numpy-based renderer that draws the playfield as solid-color
rectangles. Needs no display, so it doubles as a test and recording aid.
"""

from __future__ import annotations

from typing import Optional, Tuple
import numpy as np

from packet_router.router_core.config_loader import GameConfig, get_config
from packet_router.router_core.state_snapshot import GameSnapshot


class SolidRenderer:
    """
    Renders a GameSnapshot to an RGB array.

    The playfield is scaled uniformly to fit the output and centred;
    everything outside it is left as border color. A game-over snapshot
    is drawn dimmed.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._bg_color = np.array(config.render.background_color, dtype=np.uint8)
        self._border_color = np.array([8, 10, 16], dtype=np.uint8)
        self._router_color = np.array(config.render.router_color, dtype=np.uint8)

    def _fit(
        self,
        snapshot: GameSnapshot,
        width: int,
        height: int
    ) -> Tuple[float, float, float]:
        """Scale and offset mapping playfield pixels to image pixels."""
        scale = min(width / snapshot.playfield_width, height / snapshot.playfield_height)
        offset_x = (width - snapshot.playfield_width * scale) / 2
        offset_y = (height - snapshot.playfield_height * scale) / 2
        return scale, offset_x, offset_y

    def _fill_rect(
        self,
        img: np.ndarray,
        field: Tuple[int, int, int, int],
        rect: Tuple[float, float, float, float],
        color: np.ndarray
    ) -> None:
        """Fill a rect, clipped to the playfield area of the image."""
        fx0, fy0, fx1, fy1 = field
        x0 = max(fx0, int(round(rect[0])))
        y0 = max(fy0, int(round(rect[1])))
        x1 = min(fx1, int(round(rect[2])))
        y1 = min(fy1, int(round(rect[3])))
        if x1 > x0 and y1 > y0:
            img[y0:y1, x0:x1] = color

    def render(self, snapshot: GameSnapshot, width: int, height: int) -> np.ndarray:
        """
        Render the snapshot.

        Args:
            snapshot: State to draw.
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        img = np.zeros((height, width, 3), dtype=np.uint8)
        img[:] = self._border_color

        scale, offset_x, offset_y = self._fit(snapshot, width, height)

        field = (
            int(round(offset_x)),
            int(round(offset_y)),
            int(round(offset_x + snapshot.playfield_width * scale)),
            int(round(offset_y + snapshot.playfield_height * scale)),
        )
        img[field[1]:field[3], field[0]:field[2]] = self._bg_color

        def to_image(x: float, y: float, w: float, h: float) -> Tuple[float, float, float, float]:
            return (
                offset_x + x * scale,
                offset_y + y * scale,
                offset_x + (x + w) * scale,
                offset_y + (y + h) * scale,
            )

        for handle in snapshot.handles:
            self._fill_rect(
                img, field,
                to_image(handle.x, handle.y, handle.width, handle.height),
                np.array(handle.color, dtype=np.uint8)
            )

        self._fill_rect(
            img, field,
            to_image(snapshot.router_x, snapshot.router_y,
                     snapshot.router_width, snapshot.router_height),
            self._router_color
        )

        if snapshot.state == "game_over":
            img = (img // 2).astype(np.uint8)

        return img
