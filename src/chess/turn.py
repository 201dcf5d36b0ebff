"""Decide whether the engine or the human should act on the current position."""

import logging
from typing import Optional

from src.chess.board import Board
from src.chess.legal_moves import LegalMoveSet
from src.core.shared_types import Actor, Color, EngineAssignment

_log = logging.getLogger(__name__)


class TurnArbiter:
    def side_to_move(
        self,
        legal_moves: LegalMoveSet,
        board: Board,
        reported: Optional[Color] = None,
    ) -> Optional[Color]:
        """
        Prefer what the service reported. Otherwise infer it from the first legal move:
        the piece standing on its origin square belongs, by construction, to the side to move.
        """
        if reported is not None:
            return reported
        if not legal_moves:
            return None
        return board.color_at(legal_moves[0].from_square)

    def decide(
        self,
        assignment: EngineAssignment,
        legal_moves: LegalMoveSet,
        board: Board,
        side_to_move: Optional[Color] = None,
    ) -> Actor:
        # No legal moves: checkmate, stalemate, or nothing loaded. Nobody can act.
        if not legal_moves:
            return Actor.NOBODY

        engine_color = assignment.engine_color()
        if engine_color is None:
            return Actor.HUMAN

        side = self.side_to_move(legal_moves, board, side_to_move)
        if side is None:
            _log.warning("Could not determine the side to move, nobody acts.")
            return Actor.NOBODY
        return Actor.ENGINE if side == engine_color else Actor.HUMAN
