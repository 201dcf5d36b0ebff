"""Implementation of GameService talking to the game server over HTTP (httpx)"""

import logging
from types import TracebackType
from typing import Any, Callable, Optional, Self, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from src.api.models import (
    BoardPayload,
    LegalMovesPayload,
    MovePayload,
    NewGameResponse,
    TurnPayload,
)
from src.chess.board import Board
from src.core.config import ControllerSettings
from src.core.exceptions import InvalidResponseError, RemoteRequestFailedError
from src.core.shared_types import Color
from src.remote.game_service import GameId

_log = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class HttpGameService:
    """Every route is a plain GET returning JSON."""

    def __init__(
        self,
        settings: ControllerSettings,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.settings = settings
        self._client = client or httpx.AsyncClient(
            base_url=settings.base_url, timeout=settings.request_timeout
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # -- GameService ---
    async def create_game(self) -> tuple[GameId, Board]:
        payload = await self._get_json("/board")
        response = self._parse(NewGameResponse.from_wire, payload)
        _log.info("Created game %d", response.game_id)
        return response.game_id, response.to_board()

    async def fetch_board(self, game_id: GameId) -> Board:
        payload = await self._get_json(f"/retboard/{game_id}")
        return self._parse(BoardPayload, rows=payload).to_board()

    async def fetch_legal_moves(self, game_id: GameId) -> list[str]:
        payload = await self._get_json(f"/legalmoves/{game_id}")
        return self._parse(LegalMovesPayload, moves=payload).moves

    async def fetch_best_move(self, game_id: GameId) -> str:
        payload = await self._get_json(f"/bestmove/{game_id}")
        return self._parse(MovePayload, uci=payload).uci

    async def make_move(self, game_id: GameId, uci: str) -> Board:
        payload = await self._get_json(f"/makemove/{game_id}/{uci}")
        return self._parse(BoardPayload, rows=payload).to_board()

    async def fetch_side_to_move(self, game_id: GameId) -> Color:
        payload = await self._get_json(f"/turn/{game_id}")
        return self._parse(TurnPayload, white_to_move=payload).to_color()

    async def remove_game(self, game_id: GameId) -> None:
        await self._get(f"/removegame/{game_id}")
        _log.info("Removed game %d", game_id)

    # -- Internal helpers --
    async def _get(self, path: str) -> httpx.Response:
        """Any transport problem, timeout or error status becomes a RemoteRequestFailedError."""
        _log.debug("GET %s", path)
        try:
            response = await self._client.get(path)
            response.raise_for_status()
        except httpx.HTTPError as e:
            _log.warning("Request GET %s failed: %s", path, e)
            raise RemoteRequestFailedError(f"GET {path} failed: {e}") from e
        return response

    async def _get_json(self, path: str) -> Any:
        response = await self._get(path)
        try:
            return response.json()
        except ValueError as e:
            raise InvalidResponseError(f"GET {path} did not return JSON.") from e

    def _parse(self, model: Callable[..., M], *args: Any, **kwargs: Any) -> M:
        try:
            return model(*args, **kwargs)
        except ValidationError as e:
            raise InvalidResponseError(f"Unexpected payload from the service: {e}") from e
