"""
Type definitions used across layers
"""

from enum import StrEnum


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class EngineAssignment(StrEnum):
    """Which color (if any) the remote engine plays. Comes from the settings control of the UI."""

    NONE = "none"
    WHITE = "white"
    BLACK = "black"

    def engine_color(self) -> Color | None:
        if self == EngineAssignment.NONE:
            return None
        return Color(self.value)


class Actor(StrEnum):
    """Outcome of the turn arbiter: who should act on the current position."""

    HUMAN = "human"
    ENGINE = "engine"
    NOBODY = "nobody"
