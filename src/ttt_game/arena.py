"""
Arena: batch games of the computer player against baseline opponents.

The computer always plays O (as in computer mode); the baseline plays X and
moves first. Games run through the same transition() the interactive session
uses, so arena results reflect real play.
"""
from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Tuple

import numpy as np

from .advisor import choose_move
from .game import (
    AwaitingComputer,
    ComputerMove,
    DrawStatus,
    SelectCell,
    WinStatus,
    new_game,
    status,
    transition,
)
from .game_basics import Board, Coord, Mark
from .rules import GameMode, HUMAN_MARK

OPPONENTS = ("random", "first-empty", "advisor")

Opponent = Callable[[Board, np.random.Generator], Coord]


def _random_opponent(board: Board, rng: np.random.Generator) -> Coord:
    moves = board.empty_cells()
    return moves[int(rng.integers(len(moves)))]


def _first_empty_opponent(board: Board, rng: np.random.Generator) -> Coord:
    return board.empty_cells()[0]


def _advisor_opponent(board: Board, rng: np.random.Generator) -> Coord:
    return choose_move(board, HUMAN_MARK)


def get_opponent(name: str) -> Opponent:
    table: Dict[str, Opponent] = {
        "random": _random_opponent,
        "first-empty": _first_empty_opponent,
        "advisor": _advisor_opponent,
    }
    if name not in table:
        raise ValueError(f"Unknown opponent: {name} (choose from {', '.join(OPPONENTS)})")
    return table[name]


def play_game(opponent: Opponent, rng: np.random.Generator) -> Tuple[str, List[Coord]]:
    """Play one game; return the result ("X", "O" or "draw") and the move list."""
    state = new_game(GameMode.PLAYER_VS_COMPUTER)
    moves: List[Coord] = []
    while True:
        st = status(state)
        if isinstance(st, WinStatus):
            return st.mark.symbol, moves
        if isinstance(st, DrawStatus):
            return "draw", moves
        if isinstance(st, AwaitingComputer):
            row, col = choose_move(state.board, st.mark)
            state = transition(state, ComputerMove(state.version, row, col))
        else:
            row, col = opponent(state.board, rng)
            state = transition(state, SelectCell(row, col))
        moves.append((row, col))


@dataclass
class ArenaResult:
    opponent: str
    seed: int
    x_wins: int = 0
    o_wins: int = 0
    draws: int = 0
    games: List[str] = field(default_factory=list)
    results: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.x_wins + self.o_wins + self.draws

    def rates(self) -> Dict[str, float]:
        n = max(self.total, 1)
        return {
            "x_win_rate": self.x_wins / n,
            "o_win_rate": self.o_wins / n,
            "draw_rate": self.draws / n,
        }


def encode_moves(moves: List[Coord]) -> str:
    """Moves as a string of row-major cell indices, e.g. "0418"."""
    return ''.join(str(r * 3 + c) for r, c in moves)


def run_arena(games: int, opponent: str = "random", seed: int = 42) -> ArenaResult:
    if games < 0:
        raise ValueError(f"games must be >= 0, got {games}")
    opp = get_opponent(opponent)
    rng = np.random.default_rng(seed)
    res = ArenaResult(opponent=opponent, seed=seed)
    for _ in range(games):
        winner, moves = play_game(opp, rng)
        if winner == Mark.X.symbol:
            res.x_wins += 1
        elif winner == Mark.O.symbol:
            res.o_wins += 1
        else:
            res.draws += 1
        res.games.append(encode_moves(moves))
        res.results.append(winner)
    logging.info("arena opponent=%s games=%d x=%d o=%d draw=%d",
                 opponent, res.total, res.x_wins, res.o_wins, res.draws)
    return res


def write_games_csv(path: Path, result: ArenaResult) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = [
        {"game": i, "moves": m, "plies": len(m), "result": r}
        for i, (m, r) in enumerate(zip(result.games, result.results))
    ]
    with path.open('w', newline='') as f:
        w = csv.DictWriter(f, fieldnames=["game", "moves", "plies", "result"])
        w.writeheader()
        for r in rows:
            w.writerow(r)
    logging.info("Wrote %s (%d rows)", path, len(rows))
    return path
