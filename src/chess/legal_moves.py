"""Locally held set of legal moves. Must be refreshed from the service before each use."""

import logging

from src.chess.moves import Move
from src.chess.square import Square
from src.core.exceptions import InvalidSquareFormatError, StaleLegalMovesError
from src.remote.game_service import GameId, GameService

_log = logging.getLogger(__name__)

LegalMoveSet = tuple[Move, ...]


def parse_moves(uci_moves: list[str]) -> LegalMoveSet:
    """Moves we cannot parse are treated as non-matching, not as an error."""
    parsed: list[Move] = []
    for uci in uci_moves:
        try:
            parsed.append(Move.from_uci(uci))
        except InvalidSquareFormatError as exc:
            _log.debug("Skipping legal move %r: %s", uci, exc)
    return tuple(parsed)


class LegalMoveCache:
    def __init__(self, service: GameService) -> None:
        self.service = service
        self._moves: LegalMoveSet = ()
        self._fresh = False

    async def refresh(self, game_id: GameId) -> LegalMoveSet:
        """Fetch the moves for the side to move and replace whatever was cached."""
        uci_moves = await self.service.fetch_legal_moves(game_id)
        self._moves = parse_moves(uci_moves)
        self._fresh = True
        _log.debug("Refreshed %d legal moves for game %d", len(self._moves), game_id)
        return self._moves

    def invalidate(self) -> None:
        """A move got applied: the cached set belongs to the previous position now."""
        self._fresh = False

    @property
    def is_fresh(self) -> bool:
        return self._fresh

    @property
    def moves(self) -> LegalMoveSet:
        if not self.is_fresh:
            raise StaleLegalMovesError("Legal moves must be refreshed before use.")
        return self._moves

    def matching(self, origin: Square, destination: Square) -> list[Move]:
        """All moves from origin to destination, in the order the service listed them."""
        return [move for move in self.moves if move.connects(origin, destination)]

    def destinations_from(self, square: Square) -> frozenset[Square]:
        """Used for highlighting. Falls back to nothing if the cache is stale."""
        if not self.is_fresh:
            return frozenset()
        return frozenset(
            move.to_square for move in self._moves if move.from_square == square
        )
