from __future__ import annotations

from esper import World

from fetris.components.game_rules import GameRules
from fetris.components.session import Session
from fetris.events.bus import (
    EVENT_LINES_CLEARED,
    EVENT_PIECE_LOCKED,
    EVENT_SCORE_CHANGED,
    EventBus,
)
from fetris.systems.board_ops import get_rules, get_session_entity


def line_clear_points(lines: int, special_lines: int, rules: GameRules) -> int:
    if lines <= 0:
        return 0
    points = rules.line_clear_points.get(lines, rules.line_clear_points_max)
    bonus = rules.special_line_bonus * special_lines
    if rules.double_special_bonus:
        bonus *= 2
    return points + bonus


def lock_points(special: bool, rules: GameRules) -> int:
    points = rules.lock_points
    if special:
        points += rules.special_lock_bonus
    return points


def fall_speed_for_level(level: int, rules: GameRules | None = None) -> int:
    """Frames per gravity step at ``level``; never faster than the floor."""
    rules = rules or GameRules()
    return max(rules.min_speed, rules.initial_speed - level * rules.speed_step)


class ScoringSystem:
    """Awards lock and line-clear points to the running session."""

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_PIECE_LOCKED, self._on_piece_locked)
        self.event_bus.subscribe(EVENT_LINES_CLEARED, self._on_lines_cleared)

    def _session(self) -> Session:
        return self.world.component_for_entity(get_session_entity(self.world), Session)

    def _on_piece_locked(self, sender, **payload) -> None:
        special = bool(payload.get("special", False))
        self._award(lock_points(special, get_rules(self.world)), "lock")

    def _on_lines_cleared(self, sender, **payload) -> None:
        lines = int(payload.get("lines", 0))
        if lines <= 0:
            return
        special_lines = int(payload.get("special_lines", 0))
        session = self._session()
        session.lines_cleared += lines
        self._award(line_clear_points(lines, special_lines, get_rules(self.world)), "lines")

    def _award(self, delta: int, reason: str) -> None:
        session = self._session()
        session.score += delta
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=session.score, delta=delta, reason=reason)
