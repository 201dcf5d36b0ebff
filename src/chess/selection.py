"""
Which square (if any) the user tentatively picked as the origin of a move.

Two states only: Idle, or Selected(square).
"""

from dataclasses import dataclass

from src.chess.square import Square


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Selected:
    square: Square


SelectionState = Idle | Selected

IDLE = Idle()


def next_selection(current: SelectionState, clicked: Square) -> SelectionState:
    """
    Transition after a click.

    * clicking the selected square again deselects
    * clicking outside the board deselects
    * anything else (re)selects the clicked square
    """
    if not clicked.is_within_bounds():
        return IDLE
    if isinstance(current, Selected) and current.square == clicked:
        return IDLE
    return Selected(clicked)
