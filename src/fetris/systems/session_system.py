from __future__ import annotations

import logging
from typing import AbstractSet

from esper import World

from fetris.components.banner import Banner
from fetris.components.piece_queue import PieceQueue
from fetris.components.session import Session, SessionPhase
from fetris.events.bus import (
    EVENT_BANNER_CLEARED,
    EVENT_GAME_OVER,
    EVENT_INPUT_ACTION,
    EVENT_LEVEL_UP,
    EVENT_SESSION_END_REQUEST,
    EVENT_SESSION_PHASE_CHANGED,
    EVENT_SESSION_START_REQUEST,
    EVENT_TICK,
    EVENT_TIMER_CHANGED,
    EventBus,
)
from fetris.input_actions import InputAction
from fetris.systems import queue_ops
from fetris.systems.board_ops import fill_ratio, get_board, get_rules, get_session_entity, get_shape_catalog
from fetris.systems.piece_controller_system import PieceControllerSystem
from fetris.systems.scoring_system import fall_speed_for_level

logger = logging.getLogger(__name__)


class SessionSystem:
    """Owns the session lifecycle: start, pause, level timer and game over.

    Each running tick processes, in order, the banner countdown, the level
    timer and then the falling piece through the piece controller.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        piece_controller: PieceControllerSystem | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.piece_controller = piece_controller or PieceControllerSystem(world, event_bus)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_INPUT_ACTION, self.on_input_action)
        self.event_bus.subscribe(EVENT_SESSION_START_REQUEST, self.on_start_request)
        self.event_bus.subscribe(EVENT_SESSION_END_REQUEST, self.on_end_request)

    @property
    def session(self) -> Session:
        return self.world.component_for_entity(get_session_entity(self.world), Session)

    def _banner(self) -> Banner:
        return self.world.component_for_entity(get_session_entity(self.world), Banner)

    def _set_phase(self, phase: SessionPhase) -> None:
        session = self.session
        previous = session.phase
        if previous == phase:
            return
        session.phase = phase
        self.event_bus.emit(EVENT_SESSION_PHASE_CHANGED, previous_phase=previous, new_phase=phase)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def on_tick(self, sender, **payload) -> None:
        dt = float(payload.get("dt", 0.0))
        held = payload.get("held") or frozenset()
        self.tick(dt, held)

    def on_input_action(self, sender, **payload) -> None:
        action = payload.get("action")
        if action == InputAction.PAUSE:
            if self.session.phase == SessionPhase.RUNNING:
                self.pause()
            else:
                self.resume()
            return
        if action is None or self.session.phase != SessionPhase.RUNNING:
            return
        if not self.piece_controller.handle_action(action):
            self._game_over("blocked")

    def on_start_request(self, sender, **payload) -> None:
        self.start_session(payload.get("player_name"))

    def on_end_request(self, sender, **payload) -> None:
        self.end_session()

    # ------------------------------------------------------------------
    # Lifecycle operations
    # ------------------------------------------------------------------
    def start_session(self, player_name: str | None = None) -> bool:
        session = self.session
        if session.phase not in (SessionPhase.IDLE, SessionPhase.OVER):
            return False
        rules = get_rules(self.world)
        get_board(self.world).clear()
        session.score = 0
        session.level = 1
        session.timer = rules.level_time_limit
        session.speed = rules.initial_speed
        session.lines_cleared = 0
        session.bgm_track = 0
        session.gravity_frames = 0
        session.timer_accumulator = 0.0
        if player_name is not None:
            session.player_name = player_name
        banner = self._banner()
        banner.text = ""
        banner.remaining = 0.0

        entity = get_session_entity(self.world)
        queue = self.world.component_for_entity(entity, PieceQueue)
        queue_ops.fill_queue(queue, self.world.random, rules, get_shape_catalog(self.world))
        self.piece_controller.reset()

        self._set_phase(SessionPhase.RUNNING)
        logger.info("Session started for %r", session.player_name)
        if not self.piece_controller.spawn_next():
            self._game_over("blocked")
        return True

    def pause(self) -> bool:
        if self.session.phase != SessionPhase.RUNNING:
            return False
        self._set_phase(SessionPhase.PAUSED)
        return True

    def resume(self) -> bool:
        if self.session.phase != SessionPhase.PAUSED:
            return False
        self._set_phase(SessionPhase.RUNNING)
        return True

    def end_session(self) -> bool:
        """Abandon the current session without recording a score."""
        if self.session.phase == SessionPhase.IDLE:
            return False
        self.piece_controller.reset()
        self._set_phase(SessionPhase.IDLE)
        return True

    # ------------------------------------------------------------------
    # Per-frame update
    # ------------------------------------------------------------------
    def tick(self, dt: float, held: AbstractSet[InputAction] = frozenset()) -> None:
        if self.session.phase != SessionPhase.RUNNING:
            return
        self._update_banner(dt)
        if not self._update_timer(dt):
            return
        if not self.piece_controller.step_frame(held):
            self._game_over("blocked")

    def _update_banner(self, dt: float) -> None:
        banner = self._banner()
        if not banner.visible:
            return
        banner.remaining -= dt
        if banner.remaining <= 0:
            text = banner.text
            banner.text = ""
            banner.remaining = 0.0
            self.event_bus.emit(EVENT_BANNER_CLEARED, text=text)

    def _update_timer(self, dt: float) -> bool:
        session = self.session
        session.timer_accumulator += dt
        while session.timer_accumulator >= 1.0:
            session.timer_accumulator -= 1.0
            session.timer -= 1
            self.event_bus.emit(EVENT_TIMER_CHANGED, remaining=session.timer)
            if session.timer <= 0 and not self._complete_level():
                return False
        return True

    def _complete_level(self) -> bool:
        rules = get_rules(self.world)
        if fill_ratio(get_board(self.world)) >= rules.board_full_threshold:
            self._game_over("board_full")
            return False
        session = self.session
        session.level += 1
        session.timer = rules.level_time_limit
        session.speed = fall_speed_for_level(session.level, rules)
        session.bgm_track = (session.level - 1) % rules.bgm_track_count
        banner = self._banner()
        banner.text = f"LEVEL {session.level}"
        banner.remaining = rules.banner_seconds
        logger.info("Level up: %d (speed %d)", session.level, session.speed)
        self.event_bus.emit(EVENT_LEVEL_UP, level=session.level, speed=session.speed, track=session.bgm_track)
        return True

    def _game_over(self, reason: str) -> None:
        session = self.session
        if session.phase == SessionPhase.OVER:
            return
        self._set_phase(SessionPhase.OVER)
        logger.info("Game over (%s): score=%d level=%d", reason, session.score, session.level)
        self.event_bus.emit(
            EVENT_GAME_OVER,
            score=session.score,
            level=session.level,
            reason=reason,
            player_name=session.player_name,
        )
