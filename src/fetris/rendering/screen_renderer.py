"""Draws whichever screen the current game mode calls for."""
from __future__ import annotations

from typing import Tuple

from esper import World

from fetris.components.game_state import GameMode
from fetris.events.bus import EVENT_TICK, EventBus
from fetris.rendering import palette
from fetris.rendering.board_renderer import BoardRenderer
from fetris.rendering.particles import ParticleField
from fetris.snapshot import GameSnapshot, take_snapshot
from fetris.systems.screen_flow_system import PLAY_MENU_LABELS

RULES_TEXT: Tuple[str, ...] = (
    "RULES",
    "Move the pieces with the arrow keys.",
    "Rotate with Z or the up arrow.",
    "Speed up the fall with the down arrow, drop with X or space.",
    "Complete horizontal lines to score points and outlast the clock.",
    "Marked pieces grant a small bonus when you lock them.",
    "The multicolour piece is special: a line with it is worth a lot.",
    "Every level gets faster.",
)

LORE_TEXT: Tuple[str, ...] = (
    "Year 2437, after the age of machines:",
    "Humanity tried to conquer the stars, but it was not alone.",
    "Attacks from beyond the planets began in 2430 and destroyed the Earth;",
    "only a few escaped aboard the X97 ships.",
    "",
    "As captain of the ship Fetris you guard humanity's last hope,",
    "the crew travelling with you towards a new home.",
    "",
    "Build gapless lines of defence from the star-mining cubes you find,",
    "and keep your crew alive.",
    "",
    "The fate of humanity is in your hands. Think, and you will survive.",
)

BACK_HINT = "Back to the menu with ESC or LEFT"


class ScreenRenderer:
    """Renders the snapshot for the active mode; menus share a particle backdrop."""

    def __init__(self, world: World, event_bus: EventBus, window, *, particles: ParticleField | None = None) -> None:
        self.world = world
        self.window = window
        self.particles = particles or ParticleField(width=window.width, height=window.height)
        self.board_renderer = BoardRenderer(window)
        event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **payload) -> None:
        dt = float(payload.get("dt", 0.0))
        self.board_renderer.update(dt)
        self.particles.update(dt)

    def process(self) -> None:
        # Local import keeps tests headless without creating a window.
        import arcade

        snapshot = take_snapshot(self.world)
        mode = snapshot.mode
        if mode in (GameMode.GAME, GameMode.PAUSE, GameMode.GAME_OVER):
            self._draw_background(arcade, palette.BACKGROUND)
            self.board_renderer.render(arcade, snapshot)
            if mode == GameMode.PAUSE:
                self._draw_overlay(arcade, 128)
                self._centered(arcade, "PAUSE", self.window.height / 2, palette.TEXT, 32)
            elif mode == GameMode.GAME_OVER:
                self._draw_game_over(arcade, snapshot)
            return

        self._draw_background(arcade, palette.SPLASH_BACKGROUND if mode == GameMode.SPLASH else palette.BACKGROUND)
        self.particles.render(arcade)
        if mode == GameMode.SPLASH:
            self._centered(arcade, "FETRIS", self.window.height / 2, palette.TEXT, 40)
        elif mode == GameMode.TITLE:
            self._centered(arcade, "FETRIS", self.window.height * 0.65, palette.TEXT, 48)
            self._centered(arcade, "Press SPACE to start", self.window.height * 0.4, palette.TEXT_DIM, 18)
        elif mode == GameMode.NAME_ENTRY:
            self._centered(arcade, "Enter your name:", self.window.height * 0.6, palette.TEXT, 20)
            self._centered(arcade, snapshot.name_buffer + "_", self.window.height * 0.5, palette.BANNER, 24)
            self._centered(arcade, "Press ENTER to confirm", self.window.height * 0.35, palette.TEXT_DIM, 14)
        elif mode == GameMode.PLAY_MENU:
            self._draw_play_menu(arcade, snapshot)
        elif mode == GameMode.RULES:
            self._draw_lines(arcade, RULES_TEXT)
        elif mode == GameMode.LORE:
            self._draw_lines(arcade, LORE_TEXT)
        elif mode == GameMode.GAME_MENU:
            self._centered(arcade, "SPACE or ENTER: play", self.window.height * 0.6, palette.TEXT, 20)
            self._centered(arcade, "H: high scores    S: quit", self.window.height * 0.5, palette.TEXT_DIM, 16)
            self._centered(arcade, BACK_HINT, self.window.height * 0.4, palette.TEXT_DIM, 14)
        elif mode == GameMode.HIGH_SCORES:
            self._draw_high_scores(arcade, snapshot)

    def _draw_background(self, arcade, color) -> None:
        arcade.draw_lrbt_rectangle_filled(0, self.window.width, 0, self.window.height, color)

    def _draw_overlay(self, arcade, alpha: int) -> None:
        arcade.draw_lrbt_rectangle_filled(0, self.window.width, 0, self.window.height, (0, 0, 0, alpha))

    def _centered(self, arcade, text: str, y: float, color, size: int) -> None:
        arcade.draw_text(text, self.window.width / 2, y, color, size, anchor_x="center", anchor_y="center")

    def _draw_lines(self, arcade, lines: Tuple[str, ...]) -> None:
        top = self.window.height - 100
        for index, line in enumerate(lines):
            arcade.draw_text(line, 100, top - index * 30, palette.TEXT, 14)
        arcade.draw_text(BACK_HINT, 100, 60, palette.TEXT_DIM, 14)

    def _draw_play_menu(self, arcade, snapshot: GameSnapshot) -> None:
        top = self.window.height - 100
        arcade.draw_text("SELECT WITH THE RIGHT ARROW", 200, top, palette.TEXT, 16)
        for index, label in enumerate(PLAY_MENU_LABELS):
            y = top - 100 - index * 50
            arcade.draw_text(label.upper(), 200, y, palette.TEXT, 18)
            if index == snapshot.menu_index:
                arcade.draw_text(">", 150, y, palette.TEXT, 18)

    def _draw_game_over(self, arcade, snapshot: GameSnapshot) -> None:
        self._draw_overlay(arcade, 180)
        height = self.window.height
        self._centered(arcade, "GAME OVER", height * 0.6, palette.GAME_OVER, 36)
        self._centered(arcade, f"Score: {snapshot.score}   Level: {snapshot.level}", height * 0.5, palette.TEXT, 18)
        self._centered(arcade, "SPACE: menu    H: high scores", height * 0.4, palette.TEXT_DIM, 14)

    def _draw_high_scores(self, arcade, snapshot: GameSnapshot) -> None:
        top = self.window.height - 80
        self._centered(arcade, "HIGH SCORES", top, palette.TEXT, 24)
        for index, entry in enumerate(snapshot.high_scores):
            line = f"{index + 1:2d}. {entry.name:<12} {entry.score:>7}  L{entry.level:<3} {entry.date}"
            arcade.draw_text(line, 100, top - 60 - index * 32, palette.TEXT, 14)
        arcade.draw_text(BACK_HINT, 100, 40, palette.TEXT_DIM, 14)
