from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True, slots=True)
class HighScoreEntry:
    name: str
    score: int
    level: int
    date: str


@dataclass(slots=True)
class HighScoreTable:
    """Persisted best results; kept sorted by score, highest first."""
    entries: List[HighScoreEntry] = field(default_factory=list)
