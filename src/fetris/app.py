"""Arcade window wiring the world, the event bus and every system together."""
from __future__ import annotations

import logging
from typing import Set

from arcade import Window, color, key, run, set_background_color

from fetris.audio.audio_system import AudioSystem, SoundBank
from fetris.components.game_state import GameMode, GameState
from fetris.constants import SCREEN_HEIGHT, SCREEN_WIDTH, UPDATE_RATE
from fetris.events.bus import EVENT_INPUT_ACTION, EVENT_QUIT_REQUESTED, EVENT_TEXT_INPUT, EVENT_TICK, EventBus
from fetris.input_actions import InputAction
from fetris.rendering.screen_renderer import ScreenRenderer
from fetris.systems.high_score_system import HighScoreSystem
from fetris.systems.scoring_system import ScoringSystem
from fetris.systems.screen_flow_system import FlowKey, ScreenFlowSystem
from fetris.systems.session_system import SessionSystem
from fetris.world import create_world

logger = logging.getLogger(__name__)

FLOW_KEYS = {
    key.SPACE: FlowKey.CONFIRM,
    key.ENTER: FlowKey.ENTER,
    key.ESCAPE: FlowKey.BACK,
    key.UP: FlowKey.UP,
    key.DOWN: FlowKey.DOWN,
    key.LEFT: FlowKey.LEFT,
    key.RIGHT: FlowKey.RIGHT,
    key.BACKSPACE: FlowKey.BACKSPACE,
    key.P: FlowKey.PAUSE,
    key.H: FlowKey.HIGH_SCORES,
    key.S: FlowKey.QUIT,
}

# Pressed once per key-down during play.
PRESS_ACTIONS = {
    key.Z: InputAction.ROTATE_CW,
    key.UP: InputAction.ROTATE_CW,
    key.X: InputAction.HARD_DROP,
    key.SPACE: InputAction.HARD_DROP,
}

# Sampled every frame while the key stays down.
HELD_ACTIONS = {
    key.LEFT: InputAction.MOVE_LEFT,
    key.RIGHT: InputAction.MOVE_RIGHT,
    key.DOWN: InputAction.SOFT_DROP,
}


class FetrisWindow(Window):
    def __init__(self):
        super().__init__(SCREEN_WIDTH, SCREEN_HEIGHT, "Fetris")
        self.set_update_rate(UPDATE_RATE)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus, initial_mode=GameMode.SPLASH)

        # Simulation systems
        self.scoring_system = ScoringSystem(self.world, self.event_bus)
        self.session_system = SessionSystem(self.world, self.event_bus)
        self.high_score_system = HighScoreSystem(self.world, self.event_bus)

        # Front-end systems
        self.screen_flow_system = ScreenFlowSystem(self.world, self.event_bus)
        self.audio_system = AudioSystem(self.world, self.event_bus, SoundBank())
        self.screen_renderer = ScreenRenderer(self.world, self.event_bus, self)

        self.event_bus.subscribe(EVENT_QUIT_REQUESTED, self._on_quit_requested)
        self._held: Set[InputAction] = set()
        # Swallows the text event produced by the same key press that opened name entry.
        self._text_guard = False
        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        self.screen_renderer.process()

    def on_update(self, delta_time: float):
        self._text_guard = False
        held = frozenset(self._held) if self._mode() == GameMode.GAME else frozenset()
        self.event_bus.emit(EVENT_TICK, dt=delta_time, held=held)

    def on_key_press(self, symbol: int, modifiers: int):
        mode = self._mode()
        if mode == GameMode.GAME:
            if symbol in HELD_ACTIONS:
                self._held.add(HELD_ACTIONS[symbol])
            if symbol in PRESS_ACTIONS:
                self.event_bus.emit(EVENT_INPUT_ACTION, action=PRESS_ACTIONS[symbol])
        flow_key = FLOW_KEYS.get(symbol)
        if flow_key is not None:
            self.screen_flow_system.handle_key(flow_key)
        if self._mode() != mode:
            self._text_guard = True

    def on_key_release(self, symbol: int, modifiers: int):
        action = HELD_ACTIONS.get(symbol)
        if action is not None:
            self._held.discard(action)

    def on_text(self, text: str):
        if self._text_guard:
            return
        self.event_bus.emit(EVENT_TEXT_INPUT, text=text)

    def _on_quit_requested(self, sender, **payload) -> None:
        logger.info("Quit requested")
        self.close()

    def _mode(self) -> GameMode | None:
        for _, state in self.world.get_component(GameState):
            return state.mode
        return None


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    FetrisWindow()
    run()


if __name__ == "__main__":
    main()
