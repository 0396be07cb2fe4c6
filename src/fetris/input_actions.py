"""Abstract gameplay inputs, decoupled from any keyboard layout."""
from enum import Enum, auto


class InputAction(Enum):
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    SOFT_DROP = auto()
    HARD_DROP = auto()
    ROTATE_CW = auto()
    PAUSE = auto()
