"""Protocol for the remote game service (can implement for HTTP / an in-process fake for tests etc.)"""

from typing import Protocol

from src.chess.board import Board
from src.core.shared_types import Color

# Arbitrary precision session id handed out by the service. Python ints are unbounded.
GameId = int


class GameService(Protocol):
    """Owns the board, the rules, and the engine. We only consume its responses."""

    async def create_game(self) -> tuple[GameId, Board]:
        """Start a new session in the starting position."""
        ...

    async def fetch_board(self, game_id: GameId) -> Board:
        """Current board of an existing session."""
        ...

    async def fetch_legal_moves(self, game_id: GameId) -> list[str]:
        """Legal moves (UCI strings) for the side to move."""
        ...

    async def fetch_best_move(self, game_id: GameId) -> str:
        """The engine's chosen move (UCI string) for the side to move."""
        ...

    async def make_move(self, game_id: GameId, uci: str) -> Board:
        """Execute a move, return the resulting board."""
        ...

    async def fetch_side_to_move(self, game_id: GameId) -> Color:
        """Explicit side to move, so callers need not infer it from the move list."""
        ...

    async def remove_game(self, game_id: GameId) -> None:
        """Drop the session on the service side."""
        ...
