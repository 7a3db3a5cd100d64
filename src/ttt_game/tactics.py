"""
Tactics and simple motifs: immediate wins and blocks.
Teaching notes:
- A one-ply lookahead finds every cell that completes a line right now.
- Simulation goes through apply_move/detect_outcome, the same primitives real
  play uses, so simulated and real wins can never disagree.
"""
from typing import List

from .game_basics import Board, Coord, Mark, Win, apply_move, detect_outcome


def immediate_winning_moves(board: Board, mark: Mark) -> List[Coord]:
    wins: List[Coord] = []
    for row, col in board.empty_cells():
        outcome = detect_outcome(apply_move(board, row, col, mark))
        if isinstance(outcome, Win) and outcome.mark == mark:
            wins.append((row, col))
    return wins


def gives_opponent_immediate_win(board: Board, mark: Mark, move: Coord) -> bool:
    row, col = move
    if board[row, col] != Mark.EMPTY:
        return False
    b = apply_move(board, row, col, mark)
    if detect_outcome(b).is_terminal:
        return False
    return len(immediate_winning_moves(b, mark.opponent())) > 0
