from dataclasses import dataclass


@dataclass(slots=True)
class HorizontalShift:
    """Delayed auto-shift bookkeeping for a held left/right input."""
    direction: int = 0  # -1 left, +1 right, 0 released
    held_frames: int = 0
    repeat_counter: int = 0

    def reset(self) -> None:
        self.direction = 0
        self.held_frames = 0
        self.repeat_counter = 0
