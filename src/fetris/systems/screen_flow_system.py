"""Front-end screen machine: splash, title, menus, gameplay, pause and game over."""
from __future__ import annotations

from enum import Enum, auto
from typing import Tuple

from esper import World

from fetris.components.game_state import GameMode, GameState
from fetris.components.session import SessionPhase
from fetris.constants import MAX_NAME_LENGTH, SPLASH_SECONDS
from fetris.events.bus import (
    EVENT_GAME_OVER,
    EVENT_INPUT_ACTION,
    EVENT_MENU_CURSOR_MOVED,
    EVENT_QUIT_REQUESTED,
    EVENT_SESSION_END_REQUEST,
    EVENT_SESSION_PHASE_CHANGED,
    EVENT_SESSION_START_REQUEST,
    EVENT_TEXT_INPUT,
    EVENT_TICK,
    EventBus,
)
from fetris.input_actions import InputAction
from fetris.utils.game_state import get_game_state, set_game_mode


class FlowKey(Enum):
    """Abstract navigation keys; the window maps physical keys onto these."""
    CONFIRM = auto()
    ENTER = auto()
    BACK = auto()
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    BACKSPACE = auto()
    PAUSE = auto()
    HIGH_SCORES = auto()
    QUIT = auto()


class PlayMenuOption(Enum):
    PLAY = 0
    RULES = 1
    HIGH_SCORES = 2
    LORE = 3
    TITLE = 4
    QUIT = 5


PLAY_MENU_LABELS: Tuple[str, ...] = ("Play", "Rules", "High scores", "Lore", "Title", "Quit")


class ScreenFlowSystem:
    """Moves between screens in response to navigation keys and session events."""

    def __init__(self, world: World, event_bus: EventBus, *, splash_seconds: float = SPLASH_SECONDS) -> None:
        self.world = world
        self.event_bus = event_bus
        self.splash_seconds = splash_seconds
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_TEXT_INPUT, self.on_text_input)
        self.event_bus.subscribe(EVENT_SESSION_PHASE_CHANGED, self.on_session_phase_changed)
        self.event_bus.subscribe(EVENT_GAME_OVER, self.on_game_over)

    def _state(self) -> GameState:
        state = get_game_state(self.world)
        if state is None:
            raise RuntimeError("GameState component not found")
        return state

    def _go(self, mode: GameMode) -> None:
        set_game_mode(self.world, self.event_bus, mode)

    # ------------------------------------------------------------------
    # Bus handlers
    # ------------------------------------------------------------------
    def on_tick(self, sender, **payload) -> None:
        state = self._state()
        if state.mode != GameMode.SPLASH:
            return
        state.splash_elapsed += float(payload.get("dt", 0.0))
        if state.splash_elapsed >= self.splash_seconds:
            self._go(GameMode.TITLE)

    def on_text_input(self, sender, **payload) -> None:
        state = self._state()
        if state.mode != GameMode.NAME_ENTRY:
            return
        for char in str(payload.get("text", "")):
            if len(state.name_buffer) >= MAX_NAME_LENGTH:
                break
            if char.isprintable():
                state.name_buffer += char

    def on_session_phase_changed(self, sender, **payload) -> None:
        new_phase = payload.get("new_phase")
        mode = self._state().mode
        if new_phase == SessionPhase.PAUSED and mode == GameMode.GAME:
            self._go(GameMode.PAUSE)
        elif new_phase == SessionPhase.RUNNING and mode == GameMode.PAUSE:
            self._go(GameMode.GAME)

    def on_game_over(self, sender, **payload) -> None:
        if self._state().mode in (GameMode.GAME, GameMode.PAUSE):
            self._go(GameMode.GAME_OVER)

    # ------------------------------------------------------------------
    # Key handling
    # ------------------------------------------------------------------
    def handle_key(self, key: FlowKey) -> None:
        handler = {
            GameMode.TITLE: self._title_key,
            GameMode.NAME_ENTRY: self._name_entry_key,
            GameMode.PLAY_MENU: self._play_menu_key,
            GameMode.RULES: self._info_screen_key,
            GameMode.LORE: self._info_screen_key,
            GameMode.HIGH_SCORES: self._info_screen_key,
            GameMode.GAME_MENU: self._game_menu_key,
            GameMode.GAME: self._game_key,
            GameMode.PAUSE: self._game_key,
            GameMode.GAME_OVER: self._game_over_key,
        }.get(self._state().mode)
        if handler is not None:
            handler(key)

    def _title_key(self, key: FlowKey) -> None:
        if key == FlowKey.CONFIRM:
            self._state().name_buffer = ""
            self._go(GameMode.NAME_ENTRY)
        elif key == FlowKey.BACK:
            self.event_bus.emit(EVENT_QUIT_REQUESTED)

    def _name_entry_key(self, key: FlowKey) -> None:
        state = self._state()
        if key == FlowKey.BACKSPACE:
            state.name_buffer = state.name_buffer[:-1]
        elif key == FlowKey.ENTER and state.name_buffer:
            state.player_name = state.name_buffer
            self._go(GameMode.PLAY_MENU)

    def _play_menu_key(self, key: FlowKey) -> None:
        state = self._state()
        if key in (FlowKey.UP, FlowKey.DOWN):
            step = 1 if key == FlowKey.DOWN else -1
            state.menu_index = (state.menu_index + step) % len(PLAY_MENU_LABELS)
            self.event_bus.emit(EVENT_MENU_CURSOR_MOVED, index=state.menu_index)
        elif key == FlowKey.BACKSPACE:
            self._go(GameMode.TITLE)
        elif key == FlowKey.RIGHT:
            self._activate(PlayMenuOption(state.menu_index))

    def _activate(self, option: PlayMenuOption) -> None:
        if option == PlayMenuOption.QUIT:
            self.event_bus.emit(EVENT_QUIT_REQUESTED)
            return
        self._go({
            PlayMenuOption.PLAY: GameMode.GAME_MENU,
            PlayMenuOption.RULES: GameMode.RULES,
            PlayMenuOption.HIGH_SCORES: GameMode.HIGH_SCORES,
            PlayMenuOption.LORE: GameMode.LORE,
            PlayMenuOption.TITLE: GameMode.TITLE,
        }[option])

    def _info_screen_key(self, key: FlowKey) -> None:
        if key in (FlowKey.BACK, FlowKey.LEFT):
            self._go(GameMode.PLAY_MENU)

    def _game_menu_key(self, key: FlowKey) -> None:
        if key in (FlowKey.CONFIRM, FlowKey.ENTER):
            self._go(GameMode.GAME)
            self.event_bus.emit(EVENT_SESSION_START_REQUEST, player_name=self._state().player_name)
        elif key == FlowKey.HIGH_SCORES:
            self._go(GameMode.HIGH_SCORES)
        elif key in (FlowKey.LEFT, FlowKey.BACK):
            self._go(GameMode.PLAY_MENU)
        elif key == FlowKey.QUIT:
            self.event_bus.emit(EVENT_QUIT_REQUESTED)

    def _game_key(self, key: FlowKey) -> None:
        if key == FlowKey.PAUSE:
            self.event_bus.emit(EVENT_INPUT_ACTION, action=InputAction.PAUSE)
        elif key == FlowKey.BACK:
            self.event_bus.emit(EVENT_SESSION_END_REQUEST, reason="menu")
            self._go(GameMode.GAME_MENU)

    def _game_over_key(self, key: FlowKey) -> None:
        if key in (FlowKey.CONFIRM, FlowKey.BACK):
            self._go(GameMode.GAME_MENU)
        elif key == FlowKey.HIGH_SCORES:
            self._go(GameMode.HIGH_SCORES)
