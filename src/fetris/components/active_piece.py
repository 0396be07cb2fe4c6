from dataclasses import dataclass


@dataclass(slots=True)
class ActivePiece:
    """The falling piece. Lives on the session entity between spawn and lock."""
    piece_id: int
    x: int
    y: int
    rotation: int = 0
    special: bool = False
