"""Read-only view of the world for renderers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from esper import World

from fetris.components.active_piece import ActivePiece
from fetris.components.banner import Banner
from fetris.components.game_state import GameMode
from fetris.components.high_scores import HighScoreEntry, HighScoreTable
from fetris.components.piece_queue import PieceQueue
from fetris.components.session import Session, SessionPhase
from fetris.shapes import Offset, Shape
from fetris.systems.board_ops import get_board, get_session_entity, get_shape_catalog, piece_cells
from fetris.utils.game_state import get_game_state


@dataclass(frozen=True, slots=True)
class ActivePieceView:
    piece_id: int
    special: bool
    rotation: int
    cells: Tuple[Offset, ...]


@dataclass(frozen=True, slots=True)
class QueueView:
    piece_id: int
    special: bool
    shape: Shape


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    grid: Tuple[Tuple[int, ...], ...]
    active: ActivePieceView | None
    queue: Tuple[QueueView, ...]
    score: int
    level: int
    timer: int
    phase: SessionPhase
    banner: str
    player_name: str
    mode: GameMode | None
    menu_index: int
    name_buffer: str
    high_scores: Tuple[HighScoreEntry, ...]

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    @property
    def height(self) -> int:
        return len(self.grid)


def take_snapshot(world: World) -> GameSnapshot:
    catalog = get_shape_catalog(world)
    board = get_board(world)
    entity = get_session_entity(world)
    session = world.component_for_entity(entity, Session)
    queue = world.component_for_entity(entity, PieceQueue)
    banner = world.component_for_entity(entity, Banner)

    active = None
    piece = world.try_component(entity, ActivePiece)
    if piece is not None:
        active = ActivePieceView(
            piece_id=piece.piece_id,
            special=piece.special,
            rotation=piece.rotation,
            cells=tuple(piece_cells(catalog, piece.piece_id, piece.rotation, piece.x, piece.y)),
        )

    high_scores: Tuple[HighScoreEntry, ...] = ()
    for _, table in world.get_component(HighScoreTable):
        high_scores = tuple(table.entries)
        break

    state = get_game_state(world)
    return GameSnapshot(
        grid=tuple(tuple(row) for row in board.cells),
        active=active,
        queue=tuple(
            QueueView(piece_id=entry.piece_id, special=entry.special, shape=catalog.shape(entry.piece_id, 0))
            for entry in queue.entries
        ),
        score=session.score,
        level=session.level,
        timer=session.timer,
        phase=session.phase,
        banner=banner.text,
        player_name=session.player_name or (state.player_name if state else ""),
        mode=state.mode if state else None,
        menu_index=state.menu_index if state else 0,
        name_buffer=state.name_buffer if state else "",
        high_scores=high_scores,
    )
