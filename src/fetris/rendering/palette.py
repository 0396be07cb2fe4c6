from __future__ import annotations

import math
from typing import Dict, Tuple

Color = Tuple[int, int, int]

BACKGROUND: Color = (29, 29, 41)
SPLASH_BACKGROUND: Color = (3, 5, 22)
WELL_BACKGROUND: Color = (40, 40, 40)
FRAME: Color = (100, 100, 100)
TEXT: Color = (225, 225, 225)
TEXT_DIM: Color = (150, 150, 150)
TEXT_ACCENT: Color = (150, 150, 255)
BANNER: Color = (255, 220, 100)
WARNING: Color = (255, 120, 120)
GAME_OVER: Color = (255, 50, 50)
SPECIAL_MARK: Color = (255, 215, 0)

RAINBOW_PIECE_ID = 9

PIECE_COLORS: Dict[int, Color] = {
    1: (230, 255, 255),  # I, metallic cyan
    2: (255, 255, 204),  # O, neon yellow
    3: (230, 153, 230),  # T, violet
    4: (255, 230, 153),  # L, orange
    5: (153, 153, 255),  # J, electric blue
    6: (255, 153, 153),  # Z, ruby
    7: (153, 255, 153),  # S, emerald
    8: (20, 20, 20),     # U
    10: (204, 204, 255),  # long bar, light blue
    11: (204, 77, 230),   # corner, vermilion
}


def color_for(piece_id: int, elapsed: float = 0.0) -> Color:
    """Fill colour for a cell; the rainbow piece cycles with ``elapsed`` seconds."""
    if piece_id == RAINBOW_PIECE_ID:
        phases = (0.0, 2.0 * math.pi / 3.0, 4.0 * math.pi / 3.0)
        r, g, b = (int(255 * (0.1 + 0.9 * (math.sin(elapsed + phase) * 0.5 + 0.5))) for phase in phases)
        return r, g, b
    return PIECE_COLORS.get(piece_id, FRAME)
