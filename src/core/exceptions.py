"""
Custom exceptions used across layers.

Everything derives from ControllerError, so the controller (and tests) can catch
the whole family in one place while the lower layers raise the specific type.
"""


class ControllerError(Exception):
    """Top-level exception of the board controller."""


# --- Parsing / domain level ---
class InvalidSquareFormatError(ControllerError):
    """Algebraic text could not be turned into a square on the board."""


class InvalidPieceCodeError(ControllerError):
    """Integer on the wire does not encode a known piece."""


class NoMatchingMoveError(ControllerError):
    """No legal move connects the selected origin to the clicked destination."""


class StaleLegalMovesError(ControllerError):
    """Legal moves were consulted after a move was applied, without refreshing."""


# --- Session / ordering ---
class NoActiveGameError(ControllerError):
    """Operation needs a game id, but no session was created yet."""


class GameAlreadyStartedError(ControllerError):
    """The session is bound to a game id already. Ids never change during a session."""


class MoveInFlightError(ControllerError):
    """A move-affecting request is still outstanding for this session."""


class StaleResponseDiscardedError(ControllerError):
    """A response arrived after a newer request already updated the board."""


# --- Remote service ---
class RemoteRequestFailedError(ControllerError):
    """Network or service failure while talking to the game service."""


class InvalidResponseError(RemoteRequestFailedError):
    """The game service answered, but with a payload we cannot interpret."""


# --- Configuration ---
class ConfigurationError(ControllerError):
    """Settings could not be validated."""
