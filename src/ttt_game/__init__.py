"""ttt_game package.

Board/rules engine, heuristic computer player, immutable game state with an
explicit transition function, a session with versioned computer moves, and a
simple CLI.

Convenience imports are exposed for common workflows.
"""

from .advisor import choose_move
from .errors import GameError, IllegalMove, NoLegalMove
from .game import GameState, new_game, status, status_text, transition
from .game_basics import Board, Mark, apply_move, detect_outcome
from .rules import GameMode, is_move_legal
from .session import GameSession

__all__ = [
    "Board",
    "Mark",
    "apply_move",
    "detect_outcome",
    "is_move_legal",
    "GameMode",
    "choose_move",
    "GameState",
    "new_game",
    "transition",
    "status",
    "status_text",
    "GameSession",
    "GameError",
    "IllegalMove",
    "NoLegalMove",
]
