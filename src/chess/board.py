"""
The board as last reported by the game service, and the store that holds it.

The service is the only source of truth: a Board is never edited in place, the store swaps in a complete new snapshot.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Self, Sequence

from src.chess.pieces import PieceCode, color_of, is_valid_code
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import (
    InvalidPieceCodeError,
    NoActiveGameError,
    StaleResponseDiscardedError,
)
from src.core.shared_types import Color

_log = logging.getLogger(__name__)

Rows = tuple[tuple[PieceCode, ...], ...]


@dataclass(frozen=True)
class Board:
    rows: Rows

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> Self:
        """
        Construct a board from the 8x8 grid of piece codes.

        Row-major, row 0 is the 8th rank (so black's back rank in the starting position).
        """
        if len(rows) != BOARD_DIMENSIONS[0] or any(
            len(row) != BOARD_DIMENSIONS[1] for row in rows
        ):
            raise InvalidPieceCodeError(
                f"Board must be {BOARD_DIMENSIONS[0]}x{BOARD_DIMENSIONS[1]}."
            )
        for row in rows:
            for code in row:
                if not is_valid_code(code):
                    raise InvalidPieceCodeError(f"Cannot interpret {code!r} as a piece.")
        return cls(tuple(tuple(row) for row in rows))

    def to_rows(self) -> list[list[PieceCode]]:
        return [list(row) for row in self.rows]

    def piece_code(self, square: Square) -> PieceCode:
        return self.rows[square.row][square.col]

    def color_at(self, square: Square) -> Optional[Color]:
        return color_of(self.piece_code(square))


class BoardStore:
    """Holds the last-known board snapshot. Only ever replaced wholesale."""

    def __init__(self) -> None:
        self._board: Optional[Board] = None
        self._generation = -1

    @property
    def generation(self) -> int:
        """Generation of the request whose response produced the current board."""
        return self._generation

    def has_board(self) -> bool:
        return self._board is not None

    def current(self) -> Board:
        if self._board is None:
            raise NoActiveGameError("No board loaded yet.")
        return self._board

    def replace(self, board: Board, generation: int) -> None:
        """
        Swap in a complete board.

        A response belonging to a request older than the one that produced the current board gets discarded.
        """
        if generation < self._generation:
            raise StaleResponseDiscardedError(
                f"Response of request {generation} arrived after request {self._generation} was applied."
            )
        _log.debug("Board replaced by response of request %d", generation)
        self._board = board
        self._generation = generation
