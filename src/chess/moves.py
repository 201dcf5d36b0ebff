"""
Moves as the game service sends and receives them.

Legality is NOT decided here: the service owns the rules, we only parse its move list.
"""

from dataclasses import dataclass
from typing import Optional, Self

from src.chess.square import Square
from src.core.exceptions import InvalidSquareFormatError
from src.core.shared_types import PieceType

UCI_TO_PROMOTION: dict[str, PieceType] = {
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
}
PROMOTION_TO_UCI: dict[PieceType, str] = {
    value: key for key, value in UCI_TO_PROMOTION.items()
}


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square
    promote_to: Optional[PieceType] = None

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface:
        ---
        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "e7e8q" : (pawn) moves from e7 to e8 and promotes to a queen (the q)

        The service only ever needs the 4 character form from us, but it does list promotions with the 5th character.
        """
        if len(uci) not in (4, 5):
            raise InvalidSquareFormatError(f"Cannot interpret {uci!r} as a move.")

        from_sq = Square.from_algebraic(uci[:2])
        to_sq = Square.from_algebraic(uci[2:4])
        promote_to = None
        if len(uci) == 5:
            if uci[4] not in UCI_TO_PROMOTION:
                raise InvalidSquareFormatError(
                    f"Unknown promotion piece {uci[4]!r} in {uci!r}."
                )
            promote_to = UCI_TO_PROMOTION[uci[4]]
        return cls(from_sq, to_sq, promote_to)

    def to_uci(self) -> str:
        """Convert into UCI notation"""
        piece_char = PROMOTION_TO_UCI[self.promote_to] if self.promote_to else ""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}{piece_char}"

    def connects(self, origin: Square, destination: Square) -> bool:
        return self.from_square == origin and self.to_square == destination
