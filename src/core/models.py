"""
Boundary layer data model(s).

What the controller hands over to the rendering collaborator. Declarative: the renderer decides how to draw it.
"""

from dataclasses import dataclass, field
from typing import Optional

from src.chess.board import Board
from src.chess.selection import SelectionState
from src.chess.square import Square


@dataclass(frozen=True)
class DrawRequest:
    """Everything needed to draw one frame."""

    board: Board
    selection: SelectionState
    legal_destinations: frozenset[Square] = field(default_factory=frozenset)
    game_id: Optional[int] = None
