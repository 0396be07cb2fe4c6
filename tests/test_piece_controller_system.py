import random

from fetris.components.active_piece import ActivePiece
from fetris.components.board import Board
from fetris.components.piece_queue import PieceQueue, QueueEntry
from fetris.components.session import Session
from fetris.events.bus import EVENT_LINES_CLEARED, EVENT_PIECE_LOCKED, EVENT_PIECE_SPAWNED, EventBus
from fetris.input_actions import InputAction
from fetris.systems.piece_controller_system import PieceControllerSystem
from fetris.world import create_world

I_PIECE = 1
O_PIECE = 2
T_PIECE = 3

LEFT = frozenset({InputAction.MOVE_LEFT})


def _setup(piece_id: int):
    bus = EventBus()
    world = create_world(bus, rng=random.Random(0))
    controller = PieceControllerSystem(world, bus)
    session_entity = next(entity for entity, _ in world.get_component(Session))
    queue = world.component_for_entity(session_entity, PieceQueue)
    queue.entries = [QueueEntry(piece_id) for _ in range(3)]
    return bus, world, controller


def _board(world) -> Board:
    return next(comp for _, comp in world.get_component(Board))


def _record(bus, name):
    events = []
    bus.subscribe(name, lambda sender, **payload: events.append(payload))
    return events


def test_spawn_places_queue_front_at_top_centre():
    bus, world, controller = _setup(T_PIECE)
    spawned = _record(bus, EVENT_PIECE_SPAWNED)

    assert controller.spawn_next() is True

    piece = controller.active_piece()
    assert (piece.piece_id, piece.x, piece.y, piece.rotation) == (T_PIECE, 5, 0, 0)
    assert spawned == [{"piece_id": T_PIECE, "special": False, "x": 5, "y": 0}]
    session_entity = next(entity for entity, _ in world.get_component(Session))
    assert len(world.component_for_entity(session_entity, PieceQueue).entries) == 3


def test_spawn_fails_when_the_entry_is_blocked():
    bus, world, controller = _setup(O_PIECE)
    _board(world).cells[1][5] = 7

    assert controller.spawn_next() is False
    assert controller.active_piece() is None


def test_horizontal_shift_repeats_after_initial_delay():
    bus, world, controller = _setup(O_PIECE)
    controller.spawn_next()

    controller.step_frame(LEFT)
    assert controller.active_piece().x == 4
    for _ in range(12):
        controller.step_frame(LEFT)
    assert controller.active_piece().x == 4
    controller.step_frame(LEFT)
    assert controller.active_piece().x == 3
    for _ in range(4):
        controller.step_frame(LEFT)
    assert controller.active_piece().x == 2


def test_releasing_the_key_resets_the_shift():
    bus, world, controller = _setup(O_PIECE)
    controller.spawn_next()

    controller.step_frame(LEFT)
    controller.step_frame(frozenset())
    controller.step_frame(LEFT)
    assert controller.active_piece().x == 3


def test_left_wins_when_both_directions_are_held():
    bus, world, controller = _setup(O_PIECE)
    controller.spawn_next()
    controller.step_frame(frozenset({InputAction.MOVE_LEFT, InputAction.MOVE_RIGHT}))
    assert controller.active_piece().x == 4


def test_moves_into_walls_are_rejected():
    bus, world, controller = _setup(O_PIECE)
    controller.spawn_next()
    for _ in range(3):
        assert controller.move(1)
    assert controller.move(1) is False
    assert controller.active_piece().x == 8


def test_rotate_takes_clockwise_state():
    bus, world, controller = _setup(T_PIECE)
    controller.spawn_next()
    assert controller.rotate() is True
    assert controller.active_piece().rotation == 1


def test_rotate_falls_back_to_counter_clockwise():
    bus, world, controller = _setup(I_PIECE)
    controller.spawn_next()
    _board(world).cells[1][6] = 7

    assert controller.rotate() is True
    assert controller.active_piece().rotation == 3


def test_rotate_keeps_state_when_no_candidate_fits():
    bus, world, controller = _setup(I_PIECE)
    controller.spawn_next()
    board = _board(world)
    board.cells[1][6] = 7
    board.cells[1][7] = 7

    assert controller.rotate() is False
    assert controller.active_piece().rotation == 0


def test_gravity_steps_every_speed_frames():
    bus, world, controller = _setup(O_PIECE)
    controller.spawn_next()
    for _ in range(59):
        controller.step_frame()
    assert controller.active_piece().y == 0
    controller.step_frame()
    assert controller.active_piece().y == 1


def test_soft_drop_advances_gravity_four_times_faster():
    bus, world, controller = _setup(O_PIECE)
    controller.spawn_next()
    for _ in range(15):
        controller.step_frame(frozenset({InputAction.SOFT_DROP}))
    assert controller.active_piece().y == 1


def test_hard_drop_locks_at_the_floor_and_spawns_next():
    bus, world, controller = _setup(O_PIECE)
    locked = _record(bus, EVENT_PIECE_LOCKED)
    controller.spawn_next()

    assert controller.handle_action(InputAction.HARD_DROP) is True

    board = _board(world)
    assert [board.cells[15][5], board.cells[15][6], board.cells[16][5], board.cells[16][6]] == [O_PIECE] * 4
    assert locked == [{"piece_id": O_PIECE, "special": False, "x": 5, "y": 15, "rotation": 0}]
    piece = controller.active_piece()
    assert (piece.x, piece.y) == (5, 0)


def test_locking_a_full_row_clears_it():
    bus, world, controller = _setup(O_PIECE)
    cleared = _record(bus, EVENT_LINES_CLEARED)
    board = _board(world)
    for x in range(10):
        if x not in (5, 6):
            board.cells[16][x] = 4
    controller.spawn_next()

    controller.hard_drop()

    assert cleared == [{"lines": 1, "special_lines": 1, "rows": [16]}]
    assert board.cells[16] == [0, 0, 0, 0, 0, O_PIECE, O_PIECE, 0, 0, 0]
    assert all(value == 0 for value in board.cells[15])


def test_reset_removes_the_active_piece():
    bus, world, controller = _setup(O_PIECE)
    controller.spawn_next()
    controller.reset()
    assert controller.active_piece() is None
    session_entity = next(entity for entity, _ in world.get_component(Session))
    assert not world.has_component(session_entity, ActivePiece)
