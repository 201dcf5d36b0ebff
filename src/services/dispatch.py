"""Turning a (selected origin, clicked destination) pair or an engine decision into an executed move."""

import asyncio
import logging
from typing import Callable, Optional

from src.chess.moves import Move
from src.chess.square import Square
from src.core.exceptions import (
    MoveInFlightError,
    NoActiveGameError,
    NoMatchingMoveError,
    RemoteRequestFailedError,
    StaleResponseDiscardedError,
)
from src.remote.game_service import GameService
from src.services.ports import Notifier
from src.services.session import GameSession

_log = logging.getLogger(__name__)

Redraw = Callable[[], None]


class MoveDispatcher:
    """Human moves."""

    def __init__(self, service: GameService, redraw: Redraw) -> None:
        self.service = service
        self.redraw = redraw

    def resolve(self, session: GameSession, origin: Square, destination: Square) -> Move:
        """
        Find the legal move connecting origin and destination.

        Under standard chess only a promotion could give more than one match. The first one listed by the service wins.
        """
        if not (origin.is_within_bounds() and destination.is_within_bounds()):
            raise NoMatchingMoveError(f"{origin} -> {destination} is not on the board.")

        matches = session.legal_moves.matching(origin, destination)
        if not matches:
            raise NoMatchingMoveError(
                f"No legal move from {origin.to_algebraic()} to {destination.to_algebraic()}."
            )
        if len(matches) > 1:
            _log.debug(
                "%d legal moves match, taking %s",
                len(matches),
                matches[0].to_uci(),
            )
        return matches[0]

    async def dispatch(
        self, session: GameSession, origin: Square, destination: Square
    ) -> Move:
        """Issue exactly one move request and apply the board it returns."""
        game_id = session.require_game_id()
        move = self.resolve(session, origin, destination)

        async with session.move_guard() as generation:
            board = await self.service.make_move(game_id, move.to_uci())

        session.apply_board(board, generation)
        _log.info("Played %s in game %d", move.to_uci(), game_id)
        self.redraw()
        return move


class EngineAutoPlayer:
    """Engine moves, played in the background of the click that noticed it is the engine's turn."""

    def __init__(self, service: GameService, notifier: Notifier, redraw: Redraw) -> None:
        self.service = service
        self.notifier = notifier
        self.redraw = redraw

    async def play(self, session: GameSession) -> str:
        """Ask for the engine's move and execute it, as one guarded sequence."""
        game_id = session.require_game_id()

        async with session.move_guard() as generation:
            uci = await self.service.fetch_best_move(game_id)
            board = await self.service.make_move(game_id, uci)

        session.apply_board(board, generation)
        _log.info("Engine played %s in game %d", uci, game_id)
        self.redraw()
        return uci

    def schedule(self, session: GameSession) -> Optional["asyncio.Task[None]"]:
        """Start `play` without waiting for it. At most one engine sequence per session at a time."""
        if session.engine_busy:
            _log.debug("Engine is already thinking, not scheduling another search.")
            return None
        task = asyncio.create_task(self._run(session))
        session.track_engine_task(task)
        return task

    async def _run(self, session: GameSession) -> None:
        """Nothing may escape a background task: errors end up in the log or as a notice."""
        try:
            await self.play(session)
        except MoveInFlightError:
            _log.info("Engine move skipped, another move request is outstanding.")
        except StaleResponseDiscardedError as e:
            _log.info("Engine move response discarded: %s", e)
        except NoActiveGameError as e:
            _log.warning("Engine move without a game: %s", e)
        except RemoteRequestFailedError as e:
            _log.warning("Engine move failed: %s", e)
            self.notifier.notify_error(f"Engine move failed: {e}")
