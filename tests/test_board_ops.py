from fetris.components.board import Board
from fetris.shapes import DEFAULT_CATALOG
from fetris.systems.board_ops import can_place, cell_at, clear_full_lines, fill_ratio, lock_piece, piece_cells

I_PIECE = 1
O_PIECE = 2


def _board() -> Board:
    return Board(width=10, height=17)


def _fill_row(board: Board, y: int, value: int = 3) -> None:
    board.cells[y] = [value] * board.width


def test_can_place_respects_walls_and_floor():
    board = _board()
    assert can_place(board, DEFAULT_CATALOG, I_PIECE, 0, 0, 0)
    assert can_place(board, DEFAULT_CATALOG, I_PIECE, 0, 6, 0)
    assert not can_place(board, DEFAULT_CATALOG, I_PIECE, 0, 7, 0)
    assert not can_place(board, DEFAULT_CATALOG, I_PIECE, 0, -1, 0)
    assert can_place(board, DEFAULT_CATALOG, I_PIECE, 0, 0, 16)
    assert not can_place(board, DEFAULT_CATALOG, I_PIECE, 0, 0, 17)


def test_can_place_treats_cells_above_the_top_as_empty():
    board = _board()
    # Vertical I reaches one row above its anchor.
    assert can_place(board, DEFAULT_CATALOG, I_PIECE, 1, 0, 0)


def test_can_place_rejects_occupied_cells():
    board = _board()
    board.cells[5][3] = O_PIECE
    assert not can_place(board, DEFAULT_CATALOG, I_PIECE, 0, 0, 5)
    assert can_place(board, DEFAULT_CATALOG, I_PIECE, 0, 0, 4)


def test_lock_piece_only_writes_cells_inside_the_grid():
    board = _board()
    used_y = lock_piece(board, DEFAULT_CATALOG, I_PIECE, 1, 0, 0)
    assert used_y == 0
    written = [(x, y) for y, row in enumerate(board.cells) for x, value in enumerate(row) if value == I_PIECE]
    assert written == [(1, 0), (1, 1), (1, 2)]


def test_lock_piece_nudges_invalid_placement_up_one_row():
    board = _board()
    used_y = lock_piece(board, DEFAULT_CATALOG, O_PIECE, 0, 0, 16)
    assert used_y == 15
    assert board.cells[15][0] == O_PIECE and board.cells[16][1] == O_PIECE
    assert sum(value != 0 for row in board.cells for value in row) == 4


def test_clear_full_lines_removes_non_adjacent_rows():
    board = _board()
    _fill_row(board, 2)
    _fill_row(board, 5)
    board.cells[1][0] = 7
    board.cells[3][0] = 5
    board.cells[4][0] = 6

    result = clear_full_lines(board)

    assert result.lines == 2
    assert result.special_lines == 2
    assert result.rows == [2, 5]
    assert board.cells[3][0] == 7
    assert board.cells[4][0] == 5
    assert board.cells[5][0] == 6
    assert all(value == 0 for row in board.cells[:3] for value in row)
    assert sum(value != 0 for row in board.cells for value in row) == 3


def test_clear_full_lines_handles_adjacent_rows():
    board = _board()
    _fill_row(board, 15)
    _fill_row(board, 16)

    result = clear_full_lines(board)

    assert result.lines == 2
    assert result.rows == [15, 16]
    assert fill_ratio(board) == 0.0


def test_clear_full_lines_without_full_rows_is_a_noop():
    board = _board()
    board.cells[16][:9] = [4] * 9
    result = clear_full_lines(board)
    assert result.lines == 0 and result.rows == []
    assert board.cells[16][:9] == [4] * 9


def test_fill_ratio_and_cell_at():
    board = _board()
    _fill_row(board, 16)
    board.cells[15][:7] = [1] * 7
    assert fill_ratio(board) == 17 / 170
    assert cell_at(board, 0, 16) == 3
    assert cell_at(board, 0, -1) == 0


def test_piece_cells_lists_absolute_positions():
    assert piece_cells(DEFAULT_CATALOG, O_PIECE, 2, 3, 4) == [(3, 4), (4, 4), (3, 5), (4, 5)]
