from __future__ import annotations

import random

from fetris.components.game_rules import GameRules
from fetris.components.piece_queue import PieceQueue, QueueEntry
from fetris.shapes import ShapeCatalog


def random_entry(rng: random.Random, rules: GameRules, catalog: ShapeCatalog | None = None) -> QueueEntry:
    if catalog is not None:
        piece_id = rng.choice(catalog.piece_ids())
    else:
        piece_id = rng.randint(1, 11)
    special = rng.random() < rules.special_probability
    return QueueEntry(piece_id=piece_id, special=special)


def fill_queue(queue: PieceQueue, rng: random.Random, rules: GameRules, catalog: ShapeCatalog | None = None) -> None:
    queue.entries = [random_entry(rng, rules, catalog) for _ in range(rules.queue_depth)]


def peek_next(queue: PieceQueue) -> QueueEntry:
    return queue.entries[0]


def advance(queue: PieceQueue, rng: random.Random, rules: GameRules, catalog: ShapeCatalog | None = None) -> QueueEntry:
    """Pop the front entry and top the queue back up with a fresh random one."""
    front = queue.entries.pop(0)
    queue.entries.append(random_entry(rng, rules, catalog))
    return front
