"""Shape catalog: piece id -> four rotation states -> cell offsets from the anchor.

Offsets are ``(dx, dy)`` with y growing downwards. Rotation states that add
nothing new for a symmetric piece repeat an earlier state, so every piece has
exactly four slots.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Sequence, Tuple

Offset = Tuple[int, int]
Shape = Tuple[Offset, ...]

ROTATIONS = 4

PIECE_NAMES: Dict[int, str] = {
    1: "I",
    2: "O",
    3: "T",
    4: "L",
    5: "J",
    6: "Z",
    7: "S",
    8: "U",
    9: "Prism",  # multicolour bonus pentomino
    10: "Long",
    11: "Corner",
}

_DEFAULT_TABLE: Dict[int, Sequence[Sequence[Offset]]] = {
    1: (
        ((0, 0), (1, 0), (2, 0), (3, 0)),
        ((1, -1), (1, 0), (1, 1), (1, 2)),
        ((0, 1), (1, 1), (2, 1), (3, 1)),
        ((2, -1), (2, 0), (2, 1), (2, 2)),
    ),
    2: (
        ((0, 0), (1, 0), (0, 1), (1, 1)),
        ((0, 0), (1, 0), (0, 1), (1, 1)),
        ((0, 0), (1, 0), (0, 1), (1, 1)),
        ((0, 0), (1, 0), (0, 1), (1, 1)),
    ),
    3: (
        ((1, 0), (0, 1), (1, 1), (2, 1)),
        ((1, 0), (1, 1), (2, 1), (1, 2)),
        ((0, 1), (1, 1), (2, 1), (1, 2)),
        ((1, 0), (0, 1), (1, 1), (1, 2)),
    ),
    4: (
        ((0, 0), (0, 1), (0, 2), (1, 2)),
        ((0, 0), (1, 0), (2, 0), (0, 1)),
        ((0, 0), (1, 0), (1, 1), (1, 2)),
        ((2, 0), (0, 1), (1, 1), (2, 1)),
    ),
    5: (
        ((1, 0), (1, 1), (0, 2), (1, 2)),
        ((0, 0), (0, 1), (1, 1), (2, 1)),
        ((0, 0), (1, 0), (0, 1), (0, 2)),
        ((0, 0), (1, 0), (2, 0), (2, 1)),
    ),
    6: (
        ((0, 0), (1, 0), (1, 1), (2, 1)),
        ((2, 0), (1, 1), (2, 1), (1, 2)),
        ((0, 1), (1, 1), (1, 2), (2, 2)),
        ((1, 0), (0, 1), (1, 1), (0, 2)),
    ),
    7: (
        ((1, 0), (2, 0), (0, 1), (1, 1)),
        ((1, 0), (1, 1), (2, 1), (2, 2)),
        ((1, 1), (2, 1), (0, 2), (1, 2)),
        ((0, 0), (0, 1), (1, 1), (1, 2)),
    ),
    8: (
        ((1, 0), (0, 0), (0, 1), (0, 2), (1, 2)),
        ((0, 1), (0, 0), (1, 0), (2, 0), (2, 1)),
        ((0, 0), (1, 0), (1, 1), (1, 2), (0, 2)),
        ((0, 0), (0, 1), (1, 1), (2, 1), (2, 0)),
    ),
    9: (
        ((2, 0), (2, 1), (1, 1), (1, 2), (0, 2)),
        ((1, 0), (1, 1), (1, 2), (0, 1), (2, 1)),
        ((0, 0), (0, 1), (1, 1), (2, 1), (2, 2)),
        ((2, 0), (2, 1), (1, 1), (0, 1), (0, 2)),
    ),
    10: (
        ((0, 0), (1, 0), (2, 0), (3, 0), (4, 0)),
        ((2, 0), (2, 1), (2, 2), (2, 3), (2, 4)),
        ((0, 0), (1, 0), (2, 0), (3, 0), (4, 0)),
        ((2, 0), (2, 1), (2, 2), (2, 3), (2, 4)),
    ),
    11: (
        ((0, 2), (1, 2), (2, 2), (0, 1), (0, 0)),
        ((0, 0), (1, 0), (2, 0), (0, 1), (0, 2)),
        ((0, 0), (1, 0), (2, 0), (2, 1), (2, 2)),
        ((0, 2), (1, 2), (2, 2), (2, 1), (2, 0)),
    ),
}


@dataclass(frozen=True, slots=True)
class ShapeCatalog:
    """Immutable lookup shared by the board helpers and the piece controller."""

    table: Mapping[int, Tuple[Shape, ...]] = field(default_factory=dict)

    @classmethod
    def from_table(cls, table: Mapping[int, Sequence[Sequence[Offset]]]) -> "ShapeCatalog":
        frozen: Dict[int, Tuple[Shape, ...]] = {}
        for piece_id, rotations in table.items():
            states = tuple(tuple((int(dx), int(dy)) for dx, dy in state) for state in rotations)
            if len(states) != ROTATIONS:
                raise ValueError(f"Piece {piece_id} defines {len(states)} rotations, expected {ROTATIONS}")
            frozen[int(piece_id)] = states
        return cls(table=MappingProxyType(frozen))

    def shape(self, piece_id: int, rotation: int) -> Shape:
        return self.table[piece_id][rotation]

    def piece_ids(self) -> Tuple[int, ...]:
        return tuple(sorted(self.table))

    def is_rotation_invariant(self, piece_id: int) -> bool:
        states = [frozenset(state) for state in self.table[piece_id]]
        return all(state == states[0] for state in states)

    def cells(self, piece_id: int, rotation: int, x: int, y: int) -> Iterable[Offset]:
        """Absolute board cells covered by a piece anchored at ``(x, y)``."""
        for dx, dy in self.shape(piece_id, rotation):
            yield x + dx, y + dy

    def __len__(self) -> int:
        return len(self.table)


DEFAULT_CATALOG = ShapeCatalog.from_table(_DEFAULT_TABLE)
