"""Session component describing the running game's score, level and lifecycle."""
from dataclasses import dataclass
from enum import Enum, auto

from fetris.constants import INITIAL_SPEED, LEVEL_TIME_LIMIT_SECONDS


class SessionPhase(Enum):
    IDLE = auto()
    RUNNING = auto()
    PAUSED = auto()
    OVER = auto()


@dataclass(slots=True)
class Session:
    """Singleton component owned by the session entity."""
    score: int = 0
    level: int = 1
    timer: int = LEVEL_TIME_LIMIT_SECONDS
    speed: int = INITIAL_SPEED
    phase: SessionPhase = SessionPhase.IDLE
    player_name: str = ""
    lines_cleared: int = 0
    bgm_track: int = 0
    # Frame counter for gravity; a step happens when it reaches ``speed``.
    gravity_frames: int = 0
    # Real time accumulated towards the next one-second timer decrement.
    timer_accumulator: float = 0.0
