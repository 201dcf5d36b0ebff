"""Unit tests for /src/chess/square.py"""

from string import ascii_lowercase

import pytest

from src.chess.square import (
    BOARD_DIMENSIONS,
    Square,
    decode,
    encode,
    square_to_row_col,
)
from src.core.exceptions import InvalidSquareFormatError

ALL_NOTATIONS = [
    f"{ascii_lowercase[col]}{8 - row}" for row in range(8) for col in range(8)
]


@pytest.mark.parametrize(
    "row, col, notation",
    [
        (row, col, f"{ascii_lowercase[col]}{8 - row}")
        for row in range(8)
        for col in range(8)
    ],
)
def test_creating_from_algebraic(row: int, col: int, notation: str) -> None:
    """'a8' is the top left of the grid (0,0), 'h1' the bottom right (7,7)"""
    square = Square.from_algebraic(notation)
    assert square.row == row
    assert square.col == col


@pytest.mark.parametrize("notation", ALL_NOTATIONS)
def test_decode_then_encode_gives_same_text(notation: str) -> None:
    assert encode(decode(notation)) == notation


def test_decode_is_injective() -> None:
    """64 different names should give 64 different squares, covering the whole board."""
    squares = {decode(notation) for notation in ALL_NOTATIONS}
    assert len(squares) == 64
    assert squares == {
        Square(row, col)
        for row in range(BOARD_DIMENSIONS[0])
        for col in range(BOARD_DIMENSIONS[1])
    }


@pytest.mark.parametrize(
    "notation, expected",
    [("e2", (6, 4)), ("e7", (1, 4)), ("a8", (0, 0)), ("h1", (7, 7))],
)
def test_square_to_row_col(notation: str, expected: tuple[int, int]) -> None:
    assert square_to_row_col(notation) == expected


@pytest.mark.parametrize(
    "notation",
    [
        "i2",  # file outside a..h
        "A2",  # upper case is not a file
        "e9",  # rank outside 1..8
        "e0",
        "ee",  # rank is not a digit
        "a²",  # digit-like, but not a rank
        "a٣",  # non-ASCII digit
        "e",  # too short
        "e22",  # too long
        "",
    ],
)
def test_invalid_square_format(notation: str) -> None:
    with pytest.raises(InvalidSquareFormatError):
        _ = decode(notation)


def test_square_within_bounds() -> None:
    """happy case: every square of the 8x8 grid"""
    for row in range(BOARD_DIMENSIONS[0]):
        for col in range(BOARD_DIMENSIONS[1]):
            assert Square(row, col).is_within_bounds()


@pytest.mark.parametrize("row, col", [(8, 0), (0, 8), (-1, 3), (3, -1), (9, 9)])
def test_square_out_of_bounds(row: int, col: int) -> None:
    """Clicks next to the board resolve to such squares. They have no algebraic name."""
    square = Square(row, col)
    assert not square.is_within_bounds()
    with pytest.raises(InvalidSquareFormatError):
        _ = square.to_algebraic()
