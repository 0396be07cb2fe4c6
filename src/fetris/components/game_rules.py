"""Tunable simulation rules, stored on the registry entity so systems share one copy."""
from dataclasses import dataclass, field
from typing import Dict

from fetris import constants


@dataclass(slots=True)
class GameRules:
    width: int = constants.GRID_WIDTH
    height: int = constants.GRID_HEIGHT
    initial_speed: int = constants.INITIAL_SPEED
    min_speed: int = constants.MIN_SPEED
    speed_step: int = constants.SPEED_STEP_PER_LEVEL
    soft_drop_multiplier: int = constants.SOFT_DROP_MULTIPLIER
    das_initial_frames: int = constants.DAS_INITIAL_FRAMES
    das_repeat_frames: int = constants.DAS_REPEAT_FRAMES
    queue_depth: int = constants.QUEUE_DEPTH
    special_probability: float = constants.SPECIAL_PIECE_PROBABILITY
    line_clear_points: Dict[int, int] = field(default_factory=lambda: dict(constants.LINE_CLEAR_POINTS))
    line_clear_points_max: int = constants.LINE_CLEAR_POINTS_MAX
    special_line_bonus: int = constants.SPECIAL_LINE_BONUS
    # Adds the special-line bonus twice, as the first release scored it.
    double_special_bonus: bool = False
    lock_points: int = constants.LOCK_POINTS
    special_lock_bonus: int = constants.SPECIAL_LOCK_BONUS
    level_time_limit: int = constants.LEVEL_TIME_LIMIT_SECONDS
    board_full_threshold: float = constants.BOARD_FULL_THRESHOLD
    banner_seconds: float = constants.LEVEL_BANNER_SECONDS
    bgm_track_count: int = constants.BGM_TRACK_COUNT
