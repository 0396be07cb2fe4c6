from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that are not stored anywhere else alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                        # payload: dt=float, held=frozenset[InputAction]
EVENT_QUIT_REQUESTED = "quit_requested"    # payload: None


# ============================================================================
# INPUT
# ============================================================================
EVENT_INPUT_ACTION = "input_action"        # payload: action=InputAction
EVENT_TEXT_INPUT = "text_input"            # payload: text=str


# ============================================================================
# PIECES & BOARD
# ============================================================================
EVENT_PIECE_SPAWNED = "piece_spawned"      # payload: piece_id=int, special=bool, x=int, y=int
EVENT_PIECE_ROTATED = "piece_rotated"      # payload: piece_id=int, rotation=int
EVENT_PIECE_LOCKED = "piece_locked"        # payload: piece_id=int, special=bool, x=int, y=int, rotation=int
EVENT_LINES_CLEARED = "lines_cleared"      # payload: lines=int, special_lines=int, rows=list[int]


# ============================================================================
# SCORE, LEVEL & SESSION
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"                    # payload: score=int, delta=int, reason=str
EVENT_TIMER_CHANGED = "timer_changed"                    # payload: remaining=int
EVENT_LEVEL_UP = "level_up"                              # payload: level=int, speed=int, track=int
EVENT_BANNER_CLEARED = "banner_cleared"                  # payload: text=str
EVENT_SESSION_PHASE_CHANGED = "session_phase_changed"    # payload: previous_phase=SessionPhase, new_phase=SessionPhase
EVENT_SESSION_START_REQUEST = "session_start_request"    # payload: player_name=str|None
EVENT_SESSION_END_REQUEST = "session_end_request"        # payload: reason=str|None
EVENT_GAME_OVER = "game_over"                            # payload: score=int, level=int, reason=str, player_name=str


# ============================================================================
# HIGH SCORES
# ============================================================================
EVENT_HIGH_SCORES_UPDATED = "high_scores_updated"        # payload: entries=list[HighScoreEntry], rank=int|None


# ============================================================================
# GAME FLOW & UI
# ============================================================================
EVENT_GAME_MODE_CHANGED = "game_mode_changed"            # payload: previous_mode=GameMode|None, new_mode=GameMode
EVENT_MENU_CURSOR_MOVED = "menu_cursor_moved"            # payload: index=int
