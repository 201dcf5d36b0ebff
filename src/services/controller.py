"""Orchestration of a click: from the UI, through the session state, to the remote game service (and the reverse direction)."""

import asyncio
import logging
from typing import Optional

from src.chess.legal_moves import LegalMoveSet
from src.chess.selection import Selected, next_selection
from src.chess.square import Square
from src.chess.turn import TurnArbiter
from src.core.config import ControllerSettings
from src.core.exceptions import (
    MoveInFlightError,
    NoActiveGameError,
    NoMatchingMoveError,
    RemoteRequestFailedError,
    StaleLegalMovesError,
    StaleResponseDiscardedError,
)
from src.core.models import DrawRequest
from src.core.shared_types import Actor, Color, EngineAssignment
from src.remote.game_service import GameId, GameService
from src.services.dispatch import EngineAutoPlayer, MoveDispatcher
from src.services.ports import EngineAssignmentSource, Notifier, Renderer
from src.services.session import GameSession

_log = logging.getLogger(__name__)


class GameController:
    """Mediates between square clicks and the game service for a single game."""

    def __init__(
        self,
        service: GameService,
        renderer: Renderer,
        notifier: Notifier,
        engine_assignment: Optional[EngineAssignmentSource] = None,
        settings: Optional[ControllerSettings] = None,
    ) -> None:
        self.service = service
        self.renderer = renderer
        self.notifier = notifier
        self.settings = settings or ControllerSettings()
        self.engine_assignment = engine_assignment or (
            lambda: self.settings.engine_assignment
        )
        self.session = GameSession(service, self.settings.request_timeout)
        self.arbiter = TurnArbiter()
        self.dispatcher = MoveDispatcher(service, self._redraw)
        self.auto_player = EngineAutoPlayer(service, notifier, self._redraw)

    # -- UI entry points ---
    async def start(self) -> GameId:
        """
        Load the game: create a new session, or pick up the configured/current one by fetching its board.
        ----
        Without a game there is nothing to play, so a failing service is re-raised after the notice.
        """
        try:
            if self.session.game_id is None and self.settings.game_id is None:
                game_id, board = await self.service.create_game()
                self.session.bind(game_id)
                self.session.apply_board(board, self.session.next_generation())
                _log.info("Started new game %d", game_id)
            else:
                if self.session.game_id is None:
                    self.session.bind(self.settings.game_id)
                await self._fetch_board()
        except RemoteRequestFailedError as e:
            _log.warning("Could not load a game: %s", e)
            self.notifier.notify_error(f"Could not load a game: {e}")
            raise

        self._redraw()
        return self.session.require_game_id()

    async def reload(self) -> None:
        """Fetch the board of the current game again (ex. after the page came back)."""
        try:
            self.session.require_game_id()
            await self._fetch_board()
        except NoActiveGameError as e:
            self.notifier.notify_error(str(e))
            return
        except RemoteRequestFailedError as e:
            _log.warning("Could not reload the board: %s", e)
            self.notifier.notify_error(f"Could not reload the board: {e}")
            return
        self._redraw()

    async def handle_click(self, row: int, col: int) -> None:
        """
        A click on a board-relative square (possibly off the board).

        Legal moves are refreshed on every click, even one that only toggles the selection:
        the other side may have moved since the last one.
        """
        clicked = Square(row, col)
        try:
            game_id = self.session.require_game_id()
        except NoActiveGameError as e:
            _log.info("Click ignored: %s", e)
            self.notifier.notify_error(str(e))
            return

        try:
            legal_moves = await self.session.legal_moves.refresh(game_id)
            if clicked.is_within_bounds():
                await self._act(game_id, legal_moves, clicked)
        except NoActiveGameError as e:
            # game id known but its board never arrived
            _log.info("Click ignored: %s", e)
            self.notifier.notify_error(str(e))
            return
        except RemoteRequestFailedError as e:
            # selection and board stay as they were, so the user can simply click again
            _log.warning("Click on %s not processed: %s", clicked, e)
            self.notifier.notify_error(f"Game service unavailable: {e}")
            return

        self.session.selection = next_selection(self.session.selection, clicked)
        self._redraw()

    async def close(self) -> None:
        """Requests in flight cannot be cancelled, so wait for the engine before leaving."""
        if self.session.engine_tasks:
            await asyncio.gather(*self.session.engine_tasks, return_exceptions=True)

        if self.settings.remove_game_on_close and self.session.game_id is not None:
            try:
                await self.service.remove_game(self.session.game_id)
            except RemoteRequestFailedError as e:
                _log.warning("Could not remove game %d: %s", self.session.game_id, e)

    def draw_request(self) -> DrawRequest:
        selection = self.session.selection
        destinations = (
            self.session.legal_moves.destinations_from(selection.square)
            if isinstance(selection, Selected)
            else frozenset()
        )
        return DrawRequest(
            board=self.session.board_store.current(),
            selection=selection,
            legal_destinations=destinations,
            game_id=self.session.game_id,
        )

    # -- Internal helpers --
    async def _act(
        self, game_id: GameId, legal_moves: LegalMoveSet, clicked: Square
    ) -> None:
        """Engine's turn: start it in the background. Human's turn: try the selected origin -> clicked move."""
        assignment = self.engine_assignment()
        actor = await self._whose_turn(game_id, assignment, legal_moves)

        if actor == Actor.ENGINE:
            self.auto_player.schedule(self.session)
            return
        if actor == Actor.NOBODY:
            _log.debug("No legal moves in game %d, nobody acts.", game_id)
            return

        selection = self.session.selection
        if not isinstance(selection, Selected):
            return
        try:
            await self.dispatcher.dispatch(self.session, selection.square, clicked)
        except NoMatchingMoveError as e:
            _log.debug("Click only changes the selection: %s", e)
        except MoveInFlightError as e:
            _log.info("Move rejected: %s", e)
        except StaleResponseDiscardedError as e:
            _log.info("Move response discarded: %s", e)
        except StaleLegalMovesError:
            # the engine moved while this click was being processed
            _log.info("Position changed during the click, move not sent.")

    async def _whose_turn(
        self,
        game_id: GameId,
        assignment: EngineAssignment,
        legal_moves: LegalMoveSet,
    ) -> Actor:
        side_to_move: Optional[Color] = None
        if (
            self.settings.use_turn_endpoint
            and assignment != EngineAssignment.NONE
            and legal_moves
        ):
            try:
                side_to_move = await self.service.fetch_side_to_move(game_id)
            except RemoteRequestFailedError as e:
                _log.info("Side to move not reported (%s), inferring it.", e)

        return self.arbiter.decide(
            assignment,
            legal_moves,
            self.session.board_store.current(),
            side_to_move,
        )

    async def _fetch_board(self) -> None:
        game_id = self.session.require_game_id()
        generation = self.session.next_generation()
        board = await self.service.fetch_board(game_id)
        try:
            self.session.apply_board(board, generation)
        except StaleResponseDiscardedError as e:
            _log.info("Board fetch discarded: %s", e)

    def _redraw(self) -> None:
        if not self.session.board_store.has_board():
            return
        self.renderer.redraw(self.draw_request())
