"""Unit tests for /src/chess/moves.py"""

import pytest

from src.chess.moves import Move
from src.chess.square import Square
from src.core.exceptions import InvalidSquareFormatError
from src.core.shared_types import PieceType


def test_move_from_uci() -> None:
    move = Move.from_uci("e2e4")
    assert move.from_square == Square(6, 4)
    assert move.to_square == Square(4, 4)
    assert move.promote_to is None
    assert move.to_uci() == "e2e4"


def test_promotion_from_uci() -> None:
    """The service lists promotions with a 5th character"""
    move = Move.from_uci("e7e8q")
    assert move.from_square == Square(1, 4)
    assert move.to_square == Square(0, 4)
    assert move.promote_to == PieceType.QUEEN
    assert move.to_uci() == "e7e8q"


@pytest.mark.parametrize(
    "uci",
    [
        "e2",  # too short
        "e2e4e6",  # too long
        "z2e4",  # unknown file
        "e2e9",  # unknown rank
        "e7e8k",  # cannot promote to a king
    ],
)
def test_invalid_uci(uci: str) -> None:
    with pytest.raises(InvalidSquareFormatError):
        _ = Move.from_uci(uci)


def test_connects() -> None:
    move = Move.from_uci("g1f3")
    assert move.connects(Square.from_algebraic("g1"), Square.from_algebraic("f3"))
    assert not move.connects(Square.from_algebraic("f3"), Square.from_algebraic("g1"))
    assert not move.connects(Square.from_algebraic("g1"), Square.from_algebraic("h3"))
