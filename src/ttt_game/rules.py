"""
Move legality under game modes.

In computer mode the human always plays X and the computer always plays O.
"""
from __future__ import annotations

from enum import Enum

from .errors import GAME_OVER, NOT_YOUR_TURN, OCCUPIED, OUT_OF_RANGE, IllegalMove
from .game_basics import Board, Mark, detect_outcome, in_range

HUMAN_MARK = Mark.X
COMPUTER_MARK = Mark.O
FIRST_MOVER = Mark.X


class GameMode(Enum):
    PLAYER_VS_PLAYER = "pvp"
    PLAYER_VS_COMPUTER = "pvc"


def next_turn(mark: Mark) -> Mark:
    return mark.opponent()


def is_computer_turn(mode: GameMode, turn: Mark) -> bool:
    return mode == GameMode.PLAYER_VS_COMPUTER and turn == COMPUTER_MARK


def check_move(board: Board, row: int, col: int, mode: GameMode, turn: Mark) -> None:
    """Raise IllegalMove if a human may not play (row, col) right now."""
    if not in_range(row, col):
        raise IllegalMove(OUT_OF_RANGE, row, col)
    if board[row, col] != Mark.EMPTY:
        raise IllegalMove(OCCUPIED, row, col)
    if detect_outcome(board).is_terminal:
        raise IllegalMove(GAME_OVER, row, col)
    if is_computer_turn(mode, turn):
        raise IllegalMove(NOT_YOUR_TURN, row, col)


def is_move_legal(board: Board, row: int, col: int, mode: GameMode, turn: Mark) -> bool:
    try:
        check_move(board, row, col, mode, turn)
    except IllegalMove:
        return False
    return True
