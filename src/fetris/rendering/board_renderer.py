from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

from fetris.constants import BOARD_TOP_MARGIN, CELL_SIZE, SCREEN_HEIGHT, SCREEN_WIDTH
from fetris.rendering import palette

if TYPE_CHECKING:
    from fetris.snapshot import GameSnapshot

Rect = Tuple[float, float, float, float]

HUD_X = SCREEN_WIDTH - 190
HUD_LINE_HEIGHT = 50


def board_left(columns: int, screen_width: float = SCREEN_WIDTH, cell_size: int = CELL_SIZE) -> float:
    return (screen_width - columns * cell_size) // 2


def cell_rect(
    x: int,
    y: int,
    columns: int,
    *,
    screen_width: float = SCREEN_WIDTH,
    screen_height: float = SCREEN_HEIGHT,
    cell_size: int = CELL_SIZE,
) -> Rect:
    """Left, bottom, width, height of grid cell ``(x, y)`` in arcade's bottom-up coordinates."""
    left = board_left(columns, screen_width, cell_size) + x * cell_size
    top = BOARD_TOP_MARGIN + y * cell_size
    return left, screen_height - top - cell_size, cell_size, cell_size


class BoardRenderer:
    """Draws the well, its frame, the falling piece, the preview queue and the HUD."""

    def __init__(self, window) -> None:
        self.window = window
        self.elapsed = 0.0

    def update(self, dt: float) -> None:
        self.elapsed += dt

    def _cell(self, arcade, snapshot: GameSnapshot, x: int, y: int, color, special: bool = False) -> None:
        rect = cell_rect(x, y, snapshot.width, screen_width=self.window.width, screen_height=self.window.height)
        left, bottom, width, height = rect
        arcade.draw_lbwh_rectangle_filled(left + 1, bottom + 1, width - 2, height - 2, color)
        if special:
            arcade.draw_lbwh_rectangle_outline(left + 4, bottom + 4, width - 8, height - 8, palette.SPECIAL_MARK, 2)

    def render(self, arcade, snapshot: GameSnapshot) -> None:
        columns, rows = snapshot.width, snapshot.height
        left, bottom, _, _ = cell_rect(0, rows - 1, columns, screen_width=self.window.width, screen_height=self.window.height)
        arcade.draw_lbwh_rectangle_filled(left, bottom, columns * CELL_SIZE, rows * CELL_SIZE, palette.WELL_BACKGROUND)

        for x in range(-1, columns + 1):
            self._cell(arcade, snapshot, x, -1, palette.FRAME)
            self._cell(arcade, snapshot, x, rows, palette.FRAME)
        for y in range(rows):
            self._cell(arcade, snapshot, -1, y, palette.FRAME)
            self._cell(arcade, snapshot, columns, y, palette.FRAME)

        for y, row in enumerate(snapshot.grid):
            for x, value in enumerate(row):
                if value:
                    self._cell(arcade, snapshot, x, y, palette.color_for(value, self.elapsed))

        active = snapshot.active
        if active is not None:
            color = palette.color_for(active.piece_id, self.elapsed)
            for x, y in active.cells:
                if y >= 0:
                    self._cell(arcade, snapshot, x, y, color, active.special)

        self._render_queue(arcade, snapshot)
        self._render_hud(arcade, snapshot)

    def _render_queue(self, arcade, snapshot: GameSnapshot) -> None:
        height = self.window.height
        arcade.draw_text("NEXT:", 10, height - 150, palette.TEXT_ACCENT, 14)
        size = CELL_SIZE * 2 // 3
        for index, entry in enumerate(snapshot.queue):
            origin_x = 20
            origin_y = height - 190 - index * 4 * size
            color = palette.SPECIAL_MARK if entry.special else palette.color_for(entry.piece_id, self.elapsed)
            for dx, dy in entry.shape:
                arcade.draw_lbwh_rectangle_filled(origin_x + dx * size, origin_y - dy * size, size - 1, size - 1, color)

    def _render_hud(self, arcade, snapshot: GameSnapshot) -> None:
        height = self.window.height
        y = height - 50
        for line in (f"Level: {snapshot.level}", f"Score: {snapshot.score}", f"Time: {snapshot.timer:02d}"):
            arcade.draw_text(line, HUD_X, y, palette.TEXT, 16)
            y -= HUD_LINE_HEIGHT
        arcade.draw_text("PLAYER:", 10, height - 50, palette.WARNING, 16)
        arcade.draw_text(snapshot.player_name, 10, height - 100, palette.WARNING, 16)
        if snapshot.banner:
            arcade.draw_text(snapshot.banner, self.window.width / 2, 60, palette.BANNER, 24, anchor_x="center")
