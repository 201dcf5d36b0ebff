"""Defines the piece codes the game service uses on the wire.

A PieceCode is a small bitfield:
* 2 low bits: color (00 empty, 01 white, 10 black)
* 3 bits above that: the piece kind
combined by bitwise OR, ex. white knight = 0b01101
"""

from dataclasses import dataclass
from typing import Optional, Self

from src.core.exceptions import InvalidPieceCodeError
from src.core.shared_types import Color, PieceType

PieceCode = int

EMPTY: PieceCode = 0
COLOR_MASK = 0b11
KIND_MASK = 0b11100

WHITE = 0b01
BLACK = 0b10

PAWN = 0b00100
BISHOP = 0b01000
KNIGHT = 0b01100
ROOK = 0b10000
QUEEN = 0b10100
KING = 0b11000

CODE_TO_COLOR: dict[int, Color] = {WHITE: Color.WHITE, BLACK: Color.BLACK}
COLOR_TO_CODE: dict[Color, int] = {value: key for key, value in CODE_TO_COLOR.items()}

CODE_TO_PIECE: dict[int, PieceType] = {
    PAWN: PieceType.PAWN,
    BISHOP: PieceType.BISHOP,
    KNIGHT: PieceType.KNIGHT,
    ROOK: PieceType.ROOK,
    QUEEN: PieceType.QUEEN,
    KING: PieceType.KING,
}
PIECE_TO_CODE: dict[PieceType, int] = {value: key for key, value in CODE_TO_PIECE.items()}


@dataclass(frozen=True)
class Piece:
    type: PieceType
    color: Color

    @classmethod
    def from_code(cls, code: PieceCode) -> Self:
        """Decode an occupied square. Empty squares have no Piece (see `decode_piece`)."""
        color = CODE_TO_COLOR.get(code & COLOR_MASK)
        piece_type = CODE_TO_PIECE.get(code & KIND_MASK)
        if color is None or piece_type is None or code & ~(COLOR_MASK | KIND_MASK):
            raise InvalidPieceCodeError(f"Cannot interpret {code!r} as a piece.")
        return cls(piece_type, color)

    def to_code(self) -> PieceCode:
        return COLOR_TO_CODE[self.color] | PIECE_TO_CODE[self.type]


def decode_piece(code: PieceCode) -> Optional[Piece]:
    """None for an empty square"""
    if code == EMPTY:
        return None
    return Piece.from_code(code)


def color_of(code: PieceCode) -> Optional[Color]:
    piece = decode_piece(code)
    return piece.color if piece else None


def is_valid_code(code: PieceCode) -> bool:
    try:
        decode_piece(code)
    except InvalidPieceCodeError:
        return False
    return True
