"""
State of the one game a controller plays: game id, board, legal moves, selection.

Also the serialization point for move-affecting requests, see `GameSession.move_guard`.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from src.chess.board import Board, BoardStore
from src.chess.legal_moves import LegalMoveCache
from src.chess.selection import IDLE, SelectionState
from src.core.exceptions import (
    GameAlreadyStartedError,
    MoveInFlightError,
    NoActiveGameError,
    RemoteRequestFailedError,
)
from src.remote.game_service import GameId, GameService

_log = logging.getLogger(__name__)


class GameSession:
    """Owned by exactly one controller, mutated only from its tasks."""

    def __init__(self, service: GameService, request_timeout: float) -> None:
        self.game_id: Optional[GameId] = None
        self.board_store = BoardStore()
        self.legal_moves = LegalMoveCache(service)
        self.selection: SelectionState = IDLE
        self.request_timeout = request_timeout
        self.engine_tasks: set[asyncio.Task[None]] = set()
        self._generation = 0
        self._move_lock = asyncio.Lock()

    # --- Game id ---
    def bind(self, game_id: GameId) -> None:
        if self.game_id is not None and self.game_id != game_id:
            raise GameAlreadyStartedError(
                f"Session already plays game {self.game_id}, cannot switch to {game_id}."
            )
        self.game_id = game_id

    def require_game_id(self) -> GameId:
        """The 'unset' id must never reach the service."""
        if self.game_id is None:
            raise NoActiveGameError("No active game. Create a session first.")
        return self.game_id

    # --- Ordering ---
    def next_generation(self) -> int:
        self._generation += 1
        return self._generation

    @property
    def move_in_flight(self) -> bool:
        return self._move_lock.locked()

    @asynccontextmanager
    async def move_guard(self) -> AsyncIterator[int]:
        """
        Single slot for move-affecting requests. A second one is rejected (not queued) while the first is outstanding.

        Yields the generation of the guarded request. The slot is released on success, failure, and timeout.
        """
        if self.move_in_flight:
            raise MoveInFlightError("A move request is still outstanding.")
        async with self._move_lock:
            generation = self.next_generation()
            try:
                async with asyncio.timeout(self.request_timeout):
                    yield generation
            except TimeoutError as e:
                _log.warning("Move request %d timed out", generation)
                raise RemoteRequestFailedError(
                    f"No answer within {self.request_timeout}s."
                ) from e

    def apply_board(self, board: Board, generation: int) -> None:
        """Whatever happens to the board, the cached legal moves belong to the previous position now."""
        self.legal_moves.invalidate()
        self.board_store.replace(board, generation)

    # --- Engine tasks ---
    @property
    def engine_busy(self) -> bool:
        return any(not task.done() for task in self.engine_tasks)

    def track_engine_task(self, task: "asyncio.Task[None]") -> None:
        self.engine_tasks.add(task)
        task.add_done_callback(self.engine_tasks.discard)
