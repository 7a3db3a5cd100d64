"""
Heuristic move advisor for the computer side.

Rules are tried in strict priority order and the first that yields a cell wins:

1. win now: a cell that completes a line for the advisor's mark
2. block: a cell that would complete a line for the opponent
3. center
4. first empty corner, in the order (0,0), (0,2), (2,0), (2,2)
5. first empty cell, row-major

Every scan runs row-major. This is a one-ply lookahead, not minimax: forks set
up more than one move ahead go unnoticed.
"""
from __future__ import annotations

import logging
from typing import Tuple

from .errors import NoLegalMove
from .game_basics import Board, Coord, Mark, detect_outcome
from .rules import COMPUTER_MARK
from .tactics import immediate_winning_moves

CENTER: Coord = (1, 1)
CORNERS: Tuple[Coord, ...] = ((0, 0), (0, 2), (2, 0), (2, 2))

RULE_WIN = "win"
RULE_BLOCK = "block"
RULE_CENTER = "center"
RULE_CORNER = "corner"
RULE_FIRST_EMPTY = "first-empty"


def explain_move(board: Board, mark: Mark = COMPUTER_MARK) -> Tuple[Coord, str]:
    """Return the advisor's cell together with the name of the rule that picked it."""
    if mark == Mark.EMPTY:
        raise ValueError("advisor needs a player mark")
    if detect_outcome(board).is_terminal:
        # Full boards are terminal too (draw).
        raise NoLegalMove("Advisor invoked on a finished game")

    wins = immediate_winning_moves(board, mark)
    if wins:
        return wins[0], RULE_WIN
    blocks = immediate_winning_moves(board, mark.opponent())
    if blocks:
        return blocks[0], RULE_BLOCK
    if board[CENTER] == Mark.EMPTY:
        return CENTER, RULE_CENTER
    for corner in CORNERS:
        if board[corner] == Mark.EMPTY:
            return corner, RULE_CORNER
    empty = board.empty_cells()
    if not empty:
        raise NoLegalMove("Board is full")
    return empty[0], RULE_FIRST_EMPTY


def choose_move(board: Board, mark: Mark = COMPUTER_MARK) -> Coord:
    move, rule = explain_move(board, mark)
    logging.debug("advisor mark=%s move=%s rule=%s", mark.symbol, move, rule)
    return move
