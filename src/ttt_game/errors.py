"""
Error taxonomy for the engine.

All errors are local and recoverable: the engine raises them at the point of
the attempted action and the session layer rejects the action, leaving the
game state unchanged.
"""
from __future__ import annotations

from typing import Optional

OUT_OF_RANGE = "out-of-range"
OCCUPIED = "occupied"
GAME_OVER = "game-over"
NOT_YOUR_TURN = "not-your-turn"
EMPTY_MARK = "empty-mark"


class GameError(Exception):
    """Base class for rejected game actions."""


class IllegalMove(GameError):
    def __init__(self, reason: str, row: Optional[int] = None, col: Optional[int] = None):
        self.reason = reason
        self.row = row
        self.col = col
        where = f" at ({row}, {col})" if row is not None and col is not None else ""
        super().__init__(f"Illegal move{where}: {reason}")


class NoLegalMove(GameError):
    """Raised when the advisor is asked to move on a full or finished board."""

    def __init__(self, message: str = "No legal move available"):
        super().__init__(message)
