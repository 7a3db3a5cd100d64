"""
Game state as an immutable value with an explicit transition function.

Perspective note: the state carries whose turn it is and a version counter.
Every accepted event produces a new state with a higher version; a computer
move computed against an older version is discarded when it arrives.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Tuple, Union

from .errors import GAME_OVER, NOT_YOUR_TURN, IllegalMove
from .game_basics import (
    UNSET,
    Board,
    Coord,
    Draw,
    Mark,
    Outcome,
    Win,
    apply_move,
    detect_outcome,
)
from .rules import COMPUTER_MARK, FIRST_MOVER, GameMode, check_move, is_computer_turn, is_move_legal, next_turn


@dataclass(frozen=True)
class GameState:
    board: Board
    turn: Mark
    mode: GameMode
    outcome: Outcome
    version: int = 0


def new_game(mode: GameMode = GameMode.PLAYER_VS_PLAYER, version: int = 0) -> GameState:
    return GameState(board=Board.empty(), turn=FIRST_MOVER, mode=mode, outcome=UNSET, version=version)


# Events


@dataclass(frozen=True)
class SelectCell:
    row: int
    col: int


@dataclass(frozen=True)
class SelectMode:
    mode: GameMode


@dataclass(frozen=True)
class Restart:
    pass


@dataclass(frozen=True)
class ComputerMove:
    version: int
    row: int
    col: int


Event = Union[SelectCell, SelectMode, Restart, ComputerMove]


def _place(state: GameState, row: int, col: int) -> GameState:
    board = apply_move(state.board, row, col, state.turn)
    return replace(
        state,
        board=board,
        turn=next_turn(state.turn),
        outcome=detect_outcome(board),
        version=state.version + 1,
    )


def transition(state: GameState, event: Event) -> GameState:
    """Apply one event. Raises IllegalMove when a move is rejected."""
    if isinstance(event, SelectCell):
        check_move(state.board, event.row, event.col, state.mode, state.turn)
        return _place(state, event.row, event.col)
    if isinstance(event, SelectMode):
        # Board is kept; only pending computer moves are invalidated.
        return replace(state, mode=event.mode, version=state.version + 1)
    if isinstance(event, Restart):
        return new_game(state.mode, version=state.version + 1)
    if isinstance(event, ComputerMove):
        if event.version != state.version:
            logging.debug("discarding stale computer move v%d (state v%d)", event.version, state.version)
            return state
        if state.outcome.is_terminal:
            raise IllegalMove(GAME_OVER, event.row, event.col)
        if not is_computer_turn(state.mode, state.turn):
            raise IllegalMove(NOT_YOUR_TURN, event.row, event.col)
        return _place(state, event.row, event.col)
    raise TypeError(f"Unknown event: {event!r}")


# Status


@dataclass(frozen=True)
class WinStatus:
    mark: Mark


@dataclass(frozen=True)
class DrawStatus:
    pass


@dataclass(frozen=True)
class AwaitingHuman:
    mark: Mark


@dataclass(frozen=True)
class AwaitingComputer:
    mark: Mark = COMPUTER_MARK


Status = Union[WinStatus, DrawStatus, AwaitingHuman, AwaitingComputer]


def status(state: GameState) -> Status:
    if isinstance(state.outcome, Win):
        return WinStatus(state.outcome.mark)
    if isinstance(state.outcome, Draw):
        return DrawStatus()
    if is_computer_turn(state.mode, state.turn):
        return AwaitingComputer()
    return AwaitingHuman(state.turn)


def status_text(state: GameState) -> str:
    st = status(state)
    if isinstance(st, WinStatus):
        return f"{st.mark.symbol} wins!"
    if isinstance(st, DrawStatus):
        return "Draw!"
    if isinstance(st, AwaitingComputer):
        return f"AI's move ({st.mark.symbol})"
    if state.mode == GameMode.PLAYER_VS_COMPUTER:
        return f"Your move ({st.mark.symbol})"
    return f"Next: {st.mark.symbol}"


def winning_line(state: GameState) -> Tuple[Coord, ...]:
    if isinstance(state.outcome, Win):
        return state.outcome.line
    return ()


def cell_legality(state: GameState) -> List[List[bool]]:
    return [
        [is_move_legal(state.board, r, c, state.mode, state.turn) for c in range(3)]
        for r in range(3)
    ]
