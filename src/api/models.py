"""Response models for the payloads of the game service"""

from typing import Any, Self

from pydantic import BaseModel, field_validator

from src.chess.board import Board
from src.chess.pieces import is_valid_code
from src.chess.square import BOARD_DIMENSIONS
from src.core.exceptions import InvalidResponseError
from src.core.shared_types import Color

BoardRows = list[list[int]]


def _validate_rows(value: BoardRows) -> BoardRows:
    if len(value) != BOARD_DIMENSIONS[0] or any(
        len(row) != BOARD_DIMENSIONS[1] for row in value
    ):
        raise InvalidResponseError(
            f"Board must be a {BOARD_DIMENSIONS[0]}x{BOARD_DIMENSIONS[1]} grid."
        )
    for row in value:
        for code in row:
            if not is_valid_code(code):
                raise InvalidResponseError(f"Cannot interpret {code!r} as a piece.")
    return value


# --- RESPONSE MODELS ---
class BoardPayload(BaseModel):
    rows: BoardRows

    @field_validator("rows")
    @classmethod
    def validate_rows(cls, value: BoardRows) -> BoardRows:
        return _validate_rows(value)

    def to_board(self) -> Board:
        return Board.from_rows(self.rows)


class NewGameResponse(BaseModel):
    """The service answers `[game_id, board]`, with the id as a decimal string."""

    game_id: int
    rows: BoardRows

    @field_validator("game_id", mode="before")
    @classmethod
    def parse_game_id(cls, value: Any) -> int:
        # bool is an int subclass, but never a valid id
        if isinstance(value, bool):
            raise InvalidResponseError(f"Cannot interpret {value!r} as a game id.")
        text = str(value)
        # int() would also take signs, underscores, padding and non-ASCII digits
        if not (text.isascii() and text.isdigit()):
            raise InvalidResponseError(f"Cannot interpret {value!r} as a game id.")
        return int(text)

    @field_validator("rows")
    @classmethod
    def validate_rows(cls, value: BoardRows) -> BoardRows:
        return _validate_rows(value)

    @classmethod
    def from_wire(cls, payload: Any) -> Self:
        if not isinstance(payload, list) or len(payload) != 2:
            raise InvalidResponseError(
                f"Expected [game_id, board] from the service, got {payload!r}."
            )
        return cls(game_id=payload[0], rows=payload[1])

    def to_board(self) -> Board:
        return Board.from_rows(self.rows)


class LegalMovesPayload(BaseModel):
    moves: list[str]


class MovePayload(BaseModel):
    uci: str

    @field_validator("uci")
    @classmethod
    def validate_uci(cls, value: str) -> str:
        if len(value) not in (4, 5):
            raise InvalidResponseError(f"Cannot interpret {value!r} as a move.")
        return value


class TurnPayload(BaseModel):
    """The service answers with a single bool: true when white is to move."""

    white_to_move: bool

    def to_color(self) -> Color:
        return Color.WHITE if self.white_to_move else Color.BLACK
