"""
Game basics: board representation, serialization, rules, winner/draw checks, validity.
Teaching notes:
- A board is an immutable 3x3 grid of marks: 0=empty, 1=X, 2=O. X always starts.
- Moves never mutate a board; apply_move returns a new snapshot, so hypothetical
  moves can be simulated safely.
- Lines are scanned in a fixed order (rows, columns, diagonals) and the first
  complete line is reported.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple, Union

from .errors import EMPTY_MARK, OCCUPIED, OUT_OF_RANGE, IllegalMove

SIZE = 3

Coord = Tuple[int, int]
Line = Tuple[Coord, Coord, Coord]


class Mark(IntEnum):
    EMPTY = 0
    X = 1
    O = 2

    def opponent(self) -> "Mark":
        if self == Mark.EMPTY:
            raise ValueError("EMPTY has no opponent")
        return Mark.O if self == Mark.X else Mark.X

    @property
    def symbol(self) -> str:
        return {Mark.EMPTY: " ", Mark.X: "X", Mark.O: "O"}[self]


WIN_LINES: Tuple[Line, ...] = (
    # rows
    ((0, 0), (0, 1), (0, 2)),
    ((1, 0), (1, 1), (1, 2)),
    ((2, 0), (2, 1), (2, 2)),
    # columns
    ((0, 0), (1, 0), (2, 0)),
    ((0, 1), (1, 1), (2, 1)),
    ((0, 2), (1, 2), (2, 2)),
    # diagonals
    ((0, 0), (1, 1), (2, 2)),
    ((0, 2), (1, 1), (2, 0)),
)


@dataclass(frozen=True)
class Board:
    cells: Tuple[Tuple[Mark, ...], ...]

    def __post_init__(self) -> None:
        if len(self.cells) != SIZE or any(len(r) != SIZE for r in self.cells):
            raise ValueError("Board must be 3x3")
        # Raw 0/1/2 cells become Marks; anything else raises ValueError.
        object.__setattr__(self, "cells", tuple(tuple(Mark(v) for v in r) for r in self.cells))

    @classmethod
    def empty(cls) -> "Board":
        return cls(tuple(tuple(Mark.EMPTY for _ in range(SIZE)) for _ in range(SIZE)))

    @classmethod
    def from_rows(cls, rows: List[List[Union[int, str, None]]]) -> "Board":
        """Build a board from nested rows of 0/1/2, "X"/"O"/"" or None."""
        lookup = {None: Mark.EMPTY, "": Mark.EMPTY, " ": Mark.EMPTY, "_": Mark.EMPTY,
                  "X": Mark.X, "O": Mark.O}
        out = []
        for row in rows:
            out.append(tuple(Mark(v) if isinstance(v, int) else lookup[v] for v in row))
        return cls(tuple(out))

    def __getitem__(self, coord: Coord) -> Mark:
        row, col = coord
        return self.cells[row][col]

    def rows(self) -> Tuple[Tuple[Mark, ...], ...]:
        return self.cells

    def empty_cells(self) -> List[Coord]:
        return [(r, c) for r in range(SIZE) for c in range(SIZE) if self.cells[r][c] == Mark.EMPTY]

    def piece_counts(self) -> Tuple[int, int]:
        flat = [v for row in self.cells for v in row]
        return flat.count(Mark.X), flat.count(Mark.O)

    def is_full(self) -> bool:
        return not self.empty_cells()


@dataclass(frozen=True)
class Unset:
    is_terminal = False


@dataclass(frozen=True)
class Draw:
    is_terminal = True


@dataclass(frozen=True)
class Win:
    mark: Mark
    line: Line
    is_terminal = True


Outcome = Union[Unset, Win, Draw]

UNSET = Unset()
DRAW = Draw()


def in_range(row: int, col: int) -> bool:
    return 0 <= row < SIZE and 0 <= col < SIZE


def apply_move(board: Board, row: int, col: int, mark: Mark) -> Board:
    if not in_range(row, col):
        raise IllegalMove(OUT_OF_RANGE, row, col)
    if mark == Mark.EMPTY:
        raise IllegalMove(EMPTY_MARK, row, col)
    if board.cells[row][col] != Mark.EMPTY:
        raise IllegalMove(OCCUPIED, row, col)
    rows = [list(r) for r in board.cells]
    rows[row][col] = Mark(mark)
    return Board(tuple(tuple(r) for r in rows))


def detect_outcome(board: Board) -> Outcome:
    for line in WIN_LINES:
        a, b, c = (board[p] for p in line)
        if a != Mark.EMPTY and a == b and a == c:
            return Win(a, line)
    if board.is_full():
        return DRAW
    return UNSET


def serialize_board(board: Board) -> str:
    return ''.join(str(int(v)) for row in board.rows() for v in row)


def deserialize_board(board_str: str) -> Board:
    raw = board_str.strip()
    if len(raw) != SIZE * SIZE or any(c not in "012" for c in raw):
        raise ValueError("Invalid board string. Must be 9 chars of 0/1/2.")
    flat = [Mark(int(c)) for c in raw]
    return Board(tuple(tuple(flat[r * SIZE:(r + 1) * SIZE]) for r in range(SIZE)))


def is_valid_state(board: Board) -> bool:
    x_count, o_count = board.piece_counts()
    if not (x_count == o_count or x_count == o_count + 1):
        return False

    def count_wins(p: Mark) -> int:
        return sum(1 for line in WIN_LINES if all(board[c] == p for c in line))
    x_wins, o_wins = count_wins(Mark.X), count_wins(Mark.O)
    if x_wins > 0 and o_wins > 0:
        return False
    if x_wins > 0 and x_count != o_count + 1:
        return False
    if o_wins > 0 and x_count != o_count:
        return False
    return True


def turn_from_board(board: Board) -> Mark:
    x, o = board.piece_counts()
    return Mark.X if x == o else Mark.O


def reachable_boards() -> Dict[str, Board]:
    """Enumerate every board reachable from the empty board by legal alternating play."""
    start = Board.empty()
    seen = {serialize_board(start): start}
    q = deque([start])
    while q:
        b = q.popleft()
        if detect_outcome(b).is_terminal:
            continue
        p = turn_from_board(b)
        for row, col in b.empty_cells():
            child = apply_move(b, row, col, p)
            key = serialize_board(child)
            if key not in seen:
                seen[key] = child
                q.append(child)
    return seen


def format_board(board: Board, highlight: Tuple[Coord, ...] = ()) -> str:
    """Render the board as a small text grid; highlighted cells are bracketed."""
    lines = ["    0   1   2"]
    for r, row in enumerate(board.rows()):
        cells = []
        for c, mark in enumerate(row):
            sym = mark.symbol
            cells.append(f"[{sym}]" if (r, c) in highlight else f" {sym} ")
        lines.append(f"{r}  " + "|".join(cells))
        if r < SIZE - 1:
            lines.append("   " + "+".join(["---"] * SIZE))
    return "\n".join(lines)
