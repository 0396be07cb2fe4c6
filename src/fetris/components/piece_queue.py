from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True, slots=True)
class QueueEntry:
    piece_id: int
    special: bool = False


@dataclass(slots=True)
class PieceQueue:
    """Lookahead buffer of upcoming pieces; index 0 spawns next."""
    entries: List[QueueEntry] = field(default_factory=list)
