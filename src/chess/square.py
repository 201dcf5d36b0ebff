"""
A square on the board

(placed in its own module as multiple other modules need to import it)

Grid coordinates follow the board as the service sends it: row 0 is the 8th rank, col 0 the a-file.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.exceptions import InvalidSquareFormatError

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)
FILES = "abcdefgh"
RANKS = "12345678"


@dataclass(frozen=True)
class Square:
    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' - 'h1' get converted to (0,0) - (7,7)"""
        if len(sq) != 2:
            raise InvalidSquareFormatError(f"Expected 2 characters, got {sq!r}.")

        file_char, rank_char = sq[0], sq[1]
        if file_char not in FILES:
            raise InvalidSquareFormatError(f"Unknown file {file_char!r} in {sq!r}.")
        if rank_char not in RANKS:
            raise InvalidSquareFormatError(f"Unknown rank {rank_char!r} in {sq!r}.")

        return cls(row=BOARD_DIMENSIONS[0] - int(rank_char), col=FILES.index(file_char))

    def to_algebraic(self) -> str:
        if not self.is_within_bounds():
            raise InvalidSquareFormatError(f"{self} is not on the board.")
        return f"{FILES[self.col]}{BOARD_DIMENSIONS[0] - self.row}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )


def decode(square_text: str) -> Square:
    return Square.from_algebraic(square_text)


def encode(square: Square) -> str:
    return square.to_algebraic()


def square_to_row_col(square_text: str) -> tuple[int, int]:
    """ex. 'e2' -> (6, 4)"""
    square = decode(square_text)
    return square.row, square.col
