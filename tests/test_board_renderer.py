from fetris.rendering import palette
from fetris.rendering.board_renderer import board_left, cell_rect


def test_board_is_centred_horizontally():
    assert board_left(10) == 250


def test_cell_rect_flips_to_bottom_up_coordinates():
    assert cell_rect(0, 0, 10) == (250, 520, 30, 30)
    assert cell_rect(9, 16, 10) == (520, 40, 30, 30)
    # Frame cells sit one step outside the grid.
    assert cell_rect(-1, -1, 10) == (220, 550, 30, 30)


def test_palette_has_a_colour_for_every_piece():
    for piece_id in range(1, 12):
        r, g, b = palette.color_for(piece_id, elapsed=1.5)
        assert all(0 <= channel <= 255 for channel in (r, g, b))
    assert palette.color_for(9, 0.0) != palette.color_for(9, 2.0)
