from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterable

from esper import World

from fetris.components.session import Session, SessionPhase
from fetris.constants import BGM_TRACK_COUNT
from fetris.events.bus import (
    EVENT_GAME_MODE_CHANGED,
    EVENT_GAME_OVER,
    EVENT_LEVEL_UP,
    EVENT_LINES_CLEARED,
    EVENT_MENU_CURSOR_MOVED,
    EVENT_PIECE_LOCKED,
    EVENT_SESSION_PHASE_CHANGED,
    EventBus,
)
from fetris.systems.board_ops import get_session_entity

logger = logging.getLogger(__name__)

SOUND_NAMES = ("lock", "special", "match", "levelup", "gameover", "select")


def _arcade_loader(path: Path) -> Any:
    import arcade

    return arcade.load_sound(path)


class SoundBank:
    """Loaded effects and background tracks; files that fail to load are skipped."""

    def __init__(
        self,
        asset_dir: Path | None = None,
        *,
        loader: Callable[[Path], Any] | None = None,
        sound_names: Iterable[str] = SOUND_NAMES,
        track_count: int = BGM_TRACK_COUNT,
    ) -> None:
        self.asset_dir = Path(asset_dir) if asset_dir is not None else self._default_asset_dir()
        self._loader = loader or _arcade_loader
        self.sounds: Dict[str, Any] = {}
        self.tracks: Dict[int, Any] = {}
        self.current_track: int | None = None
        self._track_player: Any = None

        for name in sound_names:
            sound = self._load(self.asset_dir / "sounds" / f"{name}.wav")
            if sound is not None:
                self.sounds[name] = sound
        for index in range(track_count):
            track = self._load(self.asset_dir / "music" / f"bgm{index + 1}.ogg")
            if track is not None:
                self.tracks[index] = track

    @staticmethod
    def _default_asset_dir() -> Path:
        return Path(__file__).resolve().parents[3] / "assets"

    def _load(self, path: Path) -> Any:
        if not path.is_file():
            logger.warning("Audio asset missing: %s", path)
            return None
        try:
            return self._loader(path)
        except Exception as exc:
            logger.warning("Could not load audio asset %s: %s", path, exc)
            return None

    def play(self, name: str) -> bool:
        sound = self.sounds.get(name)
        if sound is None:
            return False
        sound.play()
        return True

    def play_track(self, index: int) -> bool:
        self.stop_track()
        track = self.tracks.get(index)
        if track is None:
            return False
        self._track_player = track.play(loop=True)
        self.current_track = index
        return True

    def stop_track(self) -> None:
        if self._track_player is not None and self.current_track is not None:
            self.tracks[self.current_track].stop(self._track_player)
        self._track_player = None
        self.current_track = None


class AudioSystem:
    """Turns gameplay and menu events into sound effects and background music."""

    def __init__(self, world: World, event_bus: EventBus, sound_bank: SoundBank) -> None:
        self.world = world
        self.event_bus = event_bus
        self.sound_bank = sound_bank
        self.event_bus.subscribe(EVENT_PIECE_LOCKED, self._on_piece_locked)
        self.event_bus.subscribe(EVENT_LINES_CLEARED, self._on_lines_cleared)
        self.event_bus.subscribe(EVENT_LEVEL_UP, self._on_level_up)
        self.event_bus.subscribe(EVENT_GAME_OVER, self._on_game_over)
        self.event_bus.subscribe(EVENT_SESSION_PHASE_CHANGED, self._on_phase_changed)
        self.event_bus.subscribe(EVENT_GAME_MODE_CHANGED, self._on_select)
        self.event_bus.subscribe(EVENT_MENU_CURSOR_MOVED, self._on_select)

    def _on_piece_locked(self, sender, **payload) -> None:
        self.sound_bank.play("special" if payload.get("special") else "lock")

    def _on_lines_cleared(self, sender, **payload) -> None:
        self.sound_bank.play("match")

    def _on_level_up(self, sender, **payload) -> None:
        self.sound_bank.play("levelup")
        self.sound_bank.play_track(int(payload.get("track", 0)))

    def _on_game_over(self, sender, **payload) -> None:
        self.sound_bank.stop_track()
        self.sound_bank.play("gameover")

    def _on_phase_changed(self, sender, **payload) -> None:
        new_phase = payload.get("new_phase")
        if new_phase == SessionPhase.RUNNING:
            session = self.world.component_for_entity(get_session_entity(self.world), Session)
            self.sound_bank.play_track(session.bgm_track)
        elif new_phase in (SessionPhase.PAUSED, SessionPhase.IDLE):
            self.sound_bank.stop_track()

    def _on_select(self, sender, **payload) -> None:
        self.sound_bank.play("select")
