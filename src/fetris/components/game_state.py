"""Game state resource describing the active front-end screen."""
from dataclasses import dataclass
from enum import Enum, auto


class GameMode(Enum):
    """High-level screens; only GAME and PAUSE show the board."""
    SPLASH = auto()
    TITLE = auto()
    NAME_ENTRY = auto()
    PLAY_MENU = auto()
    RULES = auto()
    LORE = auto()
    GAME_MENU = auto()
    GAME = auto()
    PAUSE = auto()
    GAME_OVER = auto()
    HIGH_SCORES = auto()


@dataclass
class GameState:
    """Singleton component storing the active screen and its local input state."""
    mode: GameMode = GameMode.SPLASH
    menu_index: int = 0
    name_buffer: str = ""
    player_name: str = ""
    splash_elapsed: float = 0.0
