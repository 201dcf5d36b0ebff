"""
Pytest will auto-discover / import this file called 'conftest.py'. ]
This file defines fixtures/mocks required for testing multiple layers.
"""

import asyncio
from typing import Callable, Optional

import pytest

from src.chess.board import Board
from src.chess.pieces import BISHOP, BLACK, KING, KNIGHT, PAWN, QUEEN, ROOK, WHITE
from src.chess.square import Square
from src.core.config import ControllerSettings
from src.core.exceptions import RemoteRequestFailedError
from src.core.models import DrawRequest
from src.core.shared_types import Color, EngineAssignment
from src.remote.game_service import GameId
from src.services.controller import GameController

BACK_RANK = [ROOK, KNIGHT, BISHOP, QUEEN, KING, BISHOP, KNIGHT, ROOK]
STARTING_ROWS = (
    [[BLACK | kind for kind in BACK_RANK], [BLACK | PAWN] * 8]
    + [[0] * 8 for _ in range(4)]
    + [[WHITE | PAWN] * 8, [WHITE | kind for kind in BACK_RANK]]
)
WHITE_OPENING_MOVES = ["e2e4", "e2e3", "d2d4", "g1f3"]
BLACK_OPENING_MOVES = ["e7e5", "e7e6", "d7d5", "g8f6"]


# --- MOCK DEPENDENCIES ----
class FakeGameService:
    """
    Mock the remote game service: no rules, just moves pieces around on a grid and records every call.

    * `fail`: names of operations that should raise RemoteRequestFailedError
    * `move_gate` / `board_gate` / `turn_gate`: when set, make_move / fetch_board / fetch_side_to_move wait for
      the event before answering
    """

    def __init__(
        self,
        game_id: GameId = 7,
        legal_moves: Optional[list[str]] = None,
        best_move: str = "e2e4",
    ) -> None:
        self.game_id = game_id
        self.board = Board.from_rows(STARTING_ROWS)
        self.legal_moves = list(
            WHITE_OPENING_MOVES if legal_moves is None else legal_moves
        )
        self.best_move = best_move
        self.side_to_move = Color.WHITE
        self.calls: list[str] = []
        self.move_requests: list[str] = []
        self.removed: list[GameId] = []
        self.fail: set[str] = set()
        self.move_gate: Optional[asyncio.Event] = None
        self.board_gate: Optional[asyncio.Event] = None
        self.turn_gate: Optional[asyncio.Event] = None

    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail:
            raise RemoteRequestFailedError(f"{operation} failed (mock)")

    async def create_game(self) -> tuple[GameId, Board]:
        self._record("create_game")
        return self.game_id, self.board

    async def fetch_board(self, game_id: GameId) -> Board:
        self._record("fetch_board")
        board = self.board
        if self.board_gate is not None:
            await self.board_gate.wait()
        return board

    async def fetch_legal_moves(self, game_id: GameId) -> list[str]:
        self._record("fetch_legal_moves")
        return list(self.legal_moves)

    async def fetch_best_move(self, game_id: GameId) -> str:
        self._record("fetch_best_move")
        return self.best_move

    async def make_move(self, game_id: GameId, uci: str) -> Board:
        self.move_requests.append(uci)
        self._record("make_move")
        if self.move_gate is not None:
            await self.move_gate.wait()

        rows = self.board.to_rows()
        origin = Square.from_algebraic(uci[:2])
        destination = Square.from_algebraic(uci[2:4])
        rows[destination.row][destination.col] = rows[origin.row][origin.col]
        rows[origin.row][origin.col] = 0
        self.board = Board.from_rows(rows)
        self.side_to_move = (
            Color.BLACK if self.side_to_move == Color.WHITE else Color.WHITE
        )
        return self.board

    async def fetch_side_to_move(self, game_id: GameId) -> Color:
        self._record("fetch_side_to_move")
        if self.turn_gate is not None:
            await self.turn_gate.wait()
        return self.side_to_move

    async def remove_game(self, game_id: GameId) -> None:
        self._record("remove_game")
        self.removed.append(game_id)


class RecordingRenderer:
    def __init__(self) -> None:
        self.requests: list[DrawRequest] = []

    def redraw(self, request: DrawRequest) -> None:
        self.requests.append(request)

    @property
    def last(self) -> DrawRequest:
        return self.requests[-1]


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def notify_error(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def fake_service() -> FakeGameService:
    return FakeGameService()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def starting_board() -> Board:
    return Board.from_rows(STARTING_ROWS)


@pytest.fixture
def make_controller(
    fake_service: FakeGameService,
    renderer: RecordingRenderer,
    notifier: RecordingNotifier,
) -> Callable[..., GameController]:
    """Call the inner function with the engine assignment (and settings) the test needs"""

    def _create_controller(
        assignment: EngineAssignment = EngineAssignment.NONE,
        settings: Optional[ControllerSettings] = None,
    ) -> GameController:
        return GameController(
            fake_service,
            renderer,
            notifier,
            engine_assignment=lambda: assignment,
            settings=settings,
        )

    return _create_controller
