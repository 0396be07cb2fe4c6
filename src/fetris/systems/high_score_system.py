from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Sequence, Tuple

from esper import World

from fetris.components.high_scores import HighScoreEntry, HighScoreTable
from fetris.constants import HIGH_SCORE_DATE_FORMAT, MAX_HIGH_SCORES, MAX_NAME_LENGTH
from fetris.events.bus import EVENT_GAME_OVER, EVENT_HIGH_SCORES_UPDATED, EventBus

logger = logging.getLogger(__name__)


def insert_high_score(
    entries: Sequence[HighScoreEntry],
    entry: HighScoreEntry,
    limit: int = MAX_HIGH_SCORES,
) -> Tuple[List[HighScoreEntry], int | None]:
    """Return the new table and the 1-based rank of ``entry`` (``None`` if it missed the cut).

    Sorting is stable, so an older entry keeps its place ahead of a new one
    with the same score.
    """
    merged = sorted([*entries, entry], key=lambda item: item.score, reverse=True)[:limit]
    rank = next((index + 1 for index, item in enumerate(merged) if item is entry), None)
    return merged, rank


def _entry_from_payload(item) -> HighScoreEntry | None:
    if not isinstance(item, dict):
        return None
    try:
        return HighScoreEntry(
            name=str(item["name"]),
            score=int(item["score"]),
            level=int(item["level"]),
            date=str(item.get("date", "")),
        )
    except (KeyError, TypeError, ValueError):
        return None


class HighScoreSystem:
    """Keeps the best results in a JSON file and records each finished game."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        save_path: Path | None = None,
        load_existing: bool = True,
        clock: Callable[[], datetime] | None = None,
        limit: int = MAX_HIGH_SCORES,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._save_path = Path(save_path) if save_path is not None else self._default_save_path()
        self._clock = clock or datetime.now
        self._limit = limit
        self._table_entity = self._ensure_table_entity()

        self.event_bus.subscribe(EVENT_GAME_OVER, self._on_game_over)

        if load_existing:
            self.load_scores()

    @staticmethod
    def _default_save_path() -> Path:
        return Path(__file__).resolve().parents[3] / "data" / "high_scores.json"

    def _ensure_table_entity(self) -> int:
        existing = list(self.world.get_component(HighScoreTable))
        if existing:
            return existing[0][0]
        return self.world.create_entity(HighScoreTable())

    def _table(self) -> HighScoreTable:
        return self.world.component_for_entity(self._table_entity, HighScoreTable)

    @property
    def entries(self) -> List[HighScoreEntry]:
        return list(self._table().entries)

    def load_scores(self) -> None:
        table = self._table()
        try:
            with self._save_path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            table.entries = []
            return
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
            logger.warning("Ignoring unreadable high score file %s: %s", self._save_path, exc)
            table.entries = []
            return
        if not isinstance(payload, list):
            logger.warning("Ignoring high score file %s: expected a list", self._save_path)
            table.entries = []
            return
        loaded = [entry for entry in map(_entry_from_payload, payload) if entry is not None]
        loaded.sort(key=lambda item: item.score, reverse=True)
        table.entries = loaded[: self._limit]

    def save_scores(self) -> bool:
        table = self._table()
        try:
            self._save_path.parent.mkdir(parents=True, exist_ok=True)
            with self._save_path.open("w", encoding="utf-8") as handle:
                json.dump([
                    {"name": entry.name, "score": entry.score, "level": entry.level, "date": entry.date}
                    for entry in table.entries
                ], handle, indent=2)
        except OSError as exc:
            logger.warning("Could not save high scores to %s: %s", self._save_path, exc)
            return False
        return True

    def record(self, name: str, score: int, level: int) -> int | None:
        entry = HighScoreEntry(
            name=(name or "")[:MAX_NAME_LENGTH],
            score=int(score),
            level=int(level),
            date=self._clock().strftime(HIGH_SCORE_DATE_FORMAT),
        )
        table = self._table()
        table.entries, rank = insert_high_score(table.entries, entry, self._limit)
        self.save_scores()
        self.event_bus.emit(EVENT_HIGH_SCORES_UPDATED, entries=list(table.entries), rank=rank)
        return rank

    # Event handlers -----------------------------------------------------

    def _on_game_over(self, sender, **payload) -> None:
        self.record(
            payload.get("player_name", ""),
            payload.get("score", 0),
            payload.get("level", 1),
        )
