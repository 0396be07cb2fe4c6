from dataclasses import dataclass, field
from typing import List

EMPTY = 0


@dataclass(slots=True)
class Board:
    """Fixed-size occupancy grid; ``cells[y][x]`` holds 0 or the id of the piece that locked there.

    Row 0 is the top of the well. Rows above it are never stored.
    """
    width: int
    height: int
    cells: List[List[int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[EMPTY] * self.width for _ in range(self.height)]

    def clear(self) -> None:
        for row in self.cells:
            row[:] = [EMPTY] * self.width
