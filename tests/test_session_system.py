import random

from fetris.components.active_piece import ActivePiece
from fetris.components.banner import Banner
from fetris.components.board import Board
from fetris.components.game_rules import GameRules
from fetris.components.piece_queue import PieceQueue, QueueEntry
from fetris.components.session import Session, SessionPhase
from fetris.events.bus import (
    EVENT_BANNER_CLEARED,
    EVENT_GAME_OVER,
    EVENT_INPUT_ACTION,
    EVENT_LEVEL_UP,
    EVENT_SESSION_PHASE_CHANGED,
    EVENT_TICK,
    EventBus,
)
from fetris.input_actions import InputAction
from fetris.systems.session_system import SessionSystem
from fetris.world import create_world


def _setup(rules: GameRules | None = None):
    bus = EventBus()
    world = create_world(bus, rules=rules, rng=random.Random(7))
    system = SessionSystem(world, bus)
    return bus, world, system


def _session_entity(world) -> int:
    return next(entity for entity, _ in world.get_component(Session))


def _board(world) -> Board:
    return next(comp for _, comp in world.get_component(Board))


def _record(bus, name):
    events = []
    bus.subscribe(name, lambda sender, **payload: events.append(payload))
    return events


def _fill_cells(board: Board, count: int) -> None:
    for index in range(count):
        board.cells[index // board.width][index % board.width] = 3


def test_start_session_runs_and_spawns_a_piece():
    bus, world, system = _setup()
    phases = _record(bus, EVENT_SESSION_PHASE_CHANGED)

    assert system.start_session("Ada") is True

    session = system.session
    assert session.phase == SessionPhase.RUNNING
    assert (session.score, session.level, session.timer, session.speed) == (0, 1, 122, 60)
    assert session.player_name == "Ada"
    entity = _session_entity(world)
    assert world.has_component(entity, ActivePiece)
    assert len(world.component_for_entity(entity, PieceQueue).entries) == 3
    assert phases == [{"previous_phase": SessionPhase.IDLE, "new_phase": SessionPhase.RUNNING}]


def test_invalid_transitions_are_ignored():
    bus, world, system = _setup()
    assert system.pause() is False
    assert system.resume() is False
    assert system.end_session() is False
    system.start_session()
    assert system.start_session() is False
    assert system.resume() is False


def test_pause_input_toggles_and_freezes_the_timer():
    bus, world, system = _setup()
    system.start_session()

    bus.emit(EVENT_INPUT_ACTION, action=InputAction.PAUSE)
    assert system.session.phase == SessionPhase.PAUSED
    bus.emit(EVENT_TICK, dt=5.0, held=frozenset())
    assert system.session.timer == 122

    bus.emit(EVENT_INPUT_ACTION, action=InputAction.PAUSE)
    assert system.session.phase == SessionPhase.RUNNING
    bus.emit(EVENT_TICK, dt=1.0, held=frozenset())
    assert system.session.timer == 121


def test_timer_counts_whole_seconds_of_tick_time():
    bus, world, system = _setup()
    system.start_session()
    for _ in range(5):
        system.tick(0.5)
    assert system.session.timer == 120
    system.tick(3.0)
    assert system.session.timer == 117


def test_level_up_when_the_board_has_room():
    bus, world, system = _setup(GameRules(level_time_limit=2))
    level_ups = _record(bus, EVENT_LEVEL_UP)
    system.start_session()
    _fill_cells(_board(world), 168)

    system.tick(1.0)
    system.tick(1.0)

    session = system.session
    assert session.phase == SessionPhase.RUNNING
    assert (session.level, session.timer, session.speed, session.bgm_track) == (2, 2, 48, 1)
    banner = world.component_for_entity(_session_entity(world), Banner)
    assert banner.text == "LEVEL 2"
    assert banner.remaining == 2.0
    assert level_ups == [{"level": 2, "speed": 48, "track": 1}]


def test_game_over_when_the_board_is_full_at_expiry():
    bus, world, system = _setup(GameRules(level_time_limit=1))
    game_overs = _record(bus, EVENT_GAME_OVER)
    system.start_session("Ada")
    _fill_cells(_board(world), 170)

    system.tick(1.0)

    assert system.session.phase == SessionPhase.OVER
    assert system.session.level == 1
    assert game_overs == [{"score": 0, "level": 1, "reason": "board_full", "player_name": "Ada"}]


def test_banner_clears_after_its_countdown():
    bus, world, system = _setup()
    cleared = _record(bus, EVENT_BANNER_CLEARED)
    system.start_session()
    banner = world.component_for_entity(_session_entity(world), Banner)
    banner.text = "LEVEL 2"
    banner.remaining = 2.0

    for _ in range(3):
        system.tick(0.5)
    assert banner.visible

    system.tick(0.5)
    assert not banner.visible
    assert cleared == [{"text": "LEVEL 2"}]


def test_blocked_spawn_ends_the_game():
    bus, world, system = _setup()
    game_overs = _record(bus, EVENT_GAME_OVER)
    system.start_session()
    entity = _session_entity(world)
    board = _board(world)
    for y in range(1, board.height):
        for x in range(1, board.width):
            board.cells[y][x] = 3
    world.remove_component(entity, ActivePiece)
    world.add_component(entity, ActivePiece(piece_id=2, x=5, y=0))
    world.component_for_entity(entity, PieceQueue).entries = [QueueEntry(2) for _ in range(3)]

    bus.emit(EVENT_INPUT_ACTION, action=InputAction.HARD_DROP)

    assert system.session.phase == SessionPhase.OVER
    assert [event["reason"] for event in game_overs] == ["blocked"]
    # Input after game over is ignored.
    bus.emit(EVENT_INPUT_ACTION, action=InputAction.HARD_DROP)
    assert len(game_overs) == 1


def test_end_session_abandons_without_game_over():
    bus, world, system = _setup()
    game_overs = _record(bus, EVENT_GAME_OVER)
    system.start_session()

    assert system.end_session() is True

    assert system.session.phase == SessionPhase.IDLE
    assert not world.has_component(_session_entity(world), ActivePiece)
    assert game_overs == []


def test_new_session_after_game_over_resets_state():
    bus, world, system = _setup(GameRules(level_time_limit=1))
    system.start_session("Ada")
    _fill_cells(_board(world), 170)
    system.tick(1.0)
    assert system.session.phase == SessionPhase.OVER

    assert system.start_session() is True

    session = system.session
    assert session.phase == SessionPhase.RUNNING
    assert session.player_name == "Ada"
    assert session.timer == 1
    assert sum(value != 0 for row in _board(world).cells for value in row) == 0
