from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from esper import World

from fetris.components.board import EMPTY, Board
from fetris.components.game_rules import GameRules
from fetris.components.session import Session
from fetris.components.shape_registry import ShapeRegistry
from fetris.shapes import ShapeCatalog

Position = Tuple[int, int]


@dataclass(slots=True)
class LineClearResult:
    lines: int = 0
    special_lines: int = 0
    rows: List[int] = field(default_factory=list)


def get_shape_catalog(world: World) -> ShapeCatalog:
    for entity, _ in world.get_component(ShapeRegistry):
        return world.component_for_entity(entity, ShapeCatalog)
    raise RuntimeError("ShapeCatalog not registered")


def get_rules(world: World) -> GameRules:
    for entity, _ in world.get_component(ShapeRegistry):
        return world.component_for_entity(entity, GameRules)
    raise RuntimeError("GameRules not registered")


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board component not found")


def get_session_entity(world: World) -> int:
    for entity, _ in world.get_component(Session):
        return entity
    raise RuntimeError("Session component not found")


def piece_cells(catalog: ShapeCatalog, piece_id: int, rotation: int, x: int, y: int) -> List[Position]:
    return list(catalog.cells(piece_id, rotation, x, y))


def cell_at(board: Board, x: int, y: int) -> int:
    """Cell value, with anything above the top row reading as empty."""
    if y < 0:
        return EMPTY
    return board.cells[y][x]


def can_place(board: Board, catalog: ShapeCatalog, piece_id: int, rotation: int, x: int, y: int) -> bool:
    for cx, cy in catalog.cells(piece_id, rotation, x, y):
        if cx < 0 or cx >= board.width or cy >= board.height:
            return False
        if cy >= 0 and board.cells[cy][cx] != EMPTY:
            return False
    return True


def lock_piece(board: Board, catalog: ShapeCatalog, piece_id: int, rotation: int, x: int, y: int) -> int:
    """Write the piece into the grid and return the anchor row actually used.

    An invalid placement is nudged up one row once; cells that still fall
    outside the grid are dropped.
    """
    if not can_place(board, catalog, piece_id, rotation, x, y):
        y -= 1
    for cx, cy in catalog.cells(piece_id, rotation, x, y):
        if 0 <= cx < board.width and 0 <= cy < board.height:
            board.cells[cy][cx] = piece_id
    return y


def _row_full(row: Iterable[int]) -> bool:
    return all(value != EMPTY for value in row)


def clear_full_lines(board: Board) -> LineClearResult:
    """Remove every full row, shifting the rows above it down by one."""
    result = LineClearResult()
    for y in range(board.height):
        if not _row_full(board.cells[y]):
            continue
        result.lines += 1
        # Every full row also counts as special; the bonus is scored separately.
        result.special_lines += 1
        result.rows.append(y)
        for row in range(y, 0, -1):
            board.cells[row][:] = board.cells[row - 1]
        board.cells[0][:] = [EMPTY] * board.width
    return result


def fill_ratio(board: Board) -> float:
    total = board.width * board.height
    if total == 0:
        return 0.0
    filled = sum(1 for row in board.cells for value in row if value != EMPTY)
    return filled / total
