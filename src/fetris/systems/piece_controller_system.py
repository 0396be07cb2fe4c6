from __future__ import annotations

from typing import AbstractSet

from esper import World

from fetris.components.active_piece import ActivePiece
from fetris.components.horizontal_shift import HorizontalShift
from fetris.components.piece_queue import PieceQueue
from fetris.components.session import Session
from fetris.events.bus import (
    EVENT_LINES_CLEARED,
    EVENT_PIECE_LOCKED,
    EVENT_PIECE_ROTATED,
    EVENT_PIECE_SPAWNED,
    EventBus,
)
from fetris.input_actions import InputAction
from fetris.systems import queue_ops
from fetris.systems.board_ops import (
    can_place,
    clear_full_lines,
    get_board,
    get_rules,
    get_session_entity,
    get_shape_catalog,
    lock_piece,
)


class PieceControllerSystem:
    """Moves, rotates, drops and locks the falling piece.

    The session system drives it: ``step_frame`` once per running frame and
    ``handle_action`` for discrete presses. Every method that can spawn a new
    piece returns ``False`` when the spawn is blocked, which ends the game.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def _session_entity(self) -> int:
        return get_session_entity(self.world)

    def active_piece(self) -> ActivePiece | None:
        return self.world.try_component(self._session_entity(), ActivePiece)

    def _shift(self) -> HorizontalShift:
        return self.world.component_for_entity(self._session_entity(), HorizontalShift)

    def _fits(self, piece: ActivePiece, *, x: int, y: int, rotation: int) -> bool:
        return can_place(get_board(self.world), get_shape_catalog(self.world), piece.piece_id, rotation, x, y)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reset(self) -> None:
        entity = self._session_entity()
        if self.world.has_component(entity, ActivePiece):
            self.world.remove_component(entity, ActivePiece)
        self._shift().reset()

    def spawn_next(self) -> bool:
        entity = self._session_entity()
        queue = self.world.component_for_entity(entity, PieceQueue)
        rules = get_rules(self.world)
        entry = queue_ops.advance(queue, self.world.random, rules, get_shape_catalog(self.world))
        x, y = rules.width // 2, 0
        if not can_place(get_board(self.world), get_shape_catalog(self.world), entry.piece_id, 0, x, y):
            return False
        self.world.add_component(entity, ActivePiece(piece_id=entry.piece_id, x=x, y=y, special=entry.special))
        self.event_bus.emit(EVENT_PIECE_SPAWNED, piece_id=entry.piece_id, special=entry.special, x=x, y=y)
        return True

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------
    def move(self, dx: int, dy: int = 0) -> bool:
        piece = self.active_piece()
        if piece is None:
            return False
        if not self._fits(piece, x=piece.x + dx, y=piece.y + dy, rotation=piece.rotation):
            return False
        piece.x += dx
        piece.y += dy
        return True

    def rotate(self) -> bool:
        piece = self.active_piece()
        if piece is None:
            return False
        for candidate in ((piece.rotation + 1) % 4, (piece.rotation + 3) % 4):
            if self._fits(piece, x=piece.x, y=piece.y, rotation=candidate):
                piece.rotation = candidate
                self.event_bus.emit(EVENT_PIECE_ROTATED, piece_id=piece.piece_id, rotation=candidate)
                return True
        return False

    def hard_drop(self) -> bool:
        if self.active_piece() is None:
            return True
        while self.move(0, 1):
            pass
        return self._lock_and_spawn()

    def handle_action(self, action: InputAction) -> bool:
        if action == InputAction.ROTATE_CW:
            self.rotate()
        elif action == InputAction.HARD_DROP:
            return self.hard_drop()
        return True

    # ------------------------------------------------------------------
    # Per-frame update
    # ------------------------------------------------------------------
    def step_frame(self, held: AbstractSet[InputAction] = frozenset()) -> bool:
        self._apply_horizontal_shift(held)
        return self._apply_gravity(held)

    def _apply_horizontal_shift(self, held: AbstractSet[InputAction]) -> None:
        shift = self._shift()
        direction = 0
        if InputAction.MOVE_LEFT in held:
            direction = -1
        elif InputAction.MOVE_RIGHT in held:
            direction = 1

        if direction == 0:
            shift.reset()
            return
        if direction != shift.direction:
            self.move(direction)
            shift.direction = direction
            shift.held_frames = 1
            shift.repeat_counter = 0
            return

        rules = get_rules(self.world)
        shift.held_frames += 1
        if shift.held_frames <= rules.das_initial_frames:
            return
        shift.repeat_counter += 1
        if shift.repeat_counter >= rules.das_repeat_frames:
            self.move(direction)
            shift.repeat_counter = 0

    def _apply_gravity(self, held: AbstractSet[InputAction]) -> bool:
        session = self.world.component_for_entity(self._session_entity(), Session)
        step = get_rules(self.world).soft_drop_multiplier if InputAction.SOFT_DROP in held else 1
        session.gravity_frames += step
        if session.gravity_frames < session.speed:
            return True
        session.gravity_frames = 0
        if self.active_piece() is None:
            return self.spawn_next()
        if self.move(0, 1):
            return True
        return self._lock_and_spawn()

    def _lock_and_spawn(self) -> bool:
        entity = self._session_entity()
        piece = self.world.component_for_entity(entity, ActivePiece)
        board = get_board(self.world)
        used_y = lock_piece(board, get_shape_catalog(self.world), piece.piece_id, piece.rotation, piece.x, piece.y)
        self.world.remove_component(entity, ActivePiece)
        self.event_bus.emit(
            EVENT_PIECE_LOCKED,
            piece_id=piece.piece_id,
            special=piece.special,
            x=piece.x,
            y=used_y,
            rotation=piece.rotation,
        )
        cleared = clear_full_lines(board)
        if cleared.lines:
            self.event_bus.emit(
                EVENT_LINES_CLEARED,
                lines=cleared.lines,
                special_lines=cleared.special_lines,
                rows=list(cleared.rows),
            )
        return self.spawn_next()
