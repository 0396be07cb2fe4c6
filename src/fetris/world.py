import random

from esper import World

from fetris.components.banner import Banner
from fetris.components.board import Board
from fetris.components.game_rules import GameRules
from fetris.components.game_state import GameMode, GameState
from fetris.components.high_scores import HighScoreTable
from fetris.components.horizontal_shift import HorizontalShift
from fetris.components.piece_queue import PieceQueue
from fetris.components.session import Session
from fetris.components.shape_registry import ShapeRegistry
from fetris.events.bus import EventBus
from fetris.shapes import DEFAULT_CATALOG, ShapeCatalog


def create_world(
    event_bus: EventBus,
    initial_mode: GameMode = GameMode.SPLASH,
    *,
    rules: GameRules | None = None,
    catalog: ShapeCatalog | None = None,
    rng: random.Random | None = None,
) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())
    rules = rules or GameRules()

    # Register the global game state resource.
    state_entity = world.create_entity()
    world.add_component(state_entity, GameState(mode=initial_mode))

    # Shared lookup tables: one catalog and one rule set for every system.
    world.create_entity(ShapeRegistry(), catalog or DEFAULT_CATALOG, rules)

    world.create_entity(Board(width=rules.width, height=rules.height))

    world.create_entity(
        Session(timer=rules.level_time_limit, speed=rules.initial_speed),
        PieceQueue(),
        HorizontalShift(),
        Banner(),
    )

    world.create_entity(HighScoreTable())
    return world
