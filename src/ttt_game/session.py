"""
Session: the single authoritative game state plus the pending computer move.

The computer's reply is not a timer closure. It is a PendingComputerMove stamped
with the version of the state it was computed against; when it comes due it is
dispatched as a ComputerMove event and transition() drops it if the state has
moved on (restart, mode switch).
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .advisor import choose_move
from .config import EngineConfig
from .errors import GameError
from .game import (
    AwaitingComputer,
    ComputerMove,
    Event,
    GameState,
    Restart,
    SelectCell,
    SelectMode,
    new_game,
    status,
    transition,
)
from .rules import GameMode


@dataclass(frozen=True)
class PendingComputerMove:
    version: int
    row: int
    col: int
    due: float

    def as_event(self) -> ComputerMove:
        return ComputerMove(self.version, self.row, self.col)


class GameSession:
    def __init__(
        self,
        mode: Optional[GameMode] = None,
        config: Optional[EngineConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or EngineConfig()
        self._clock = clock
        self.state: GameState = new_game(mode or self.config.default_mode)
        self.pending: Optional[PendingComputerMove] = None

    def snapshot(self) -> GameState:
        return self.state

    def dispatch(self, event: Event) -> bool:
        """Apply an event; rejected events are logged and leave the state unchanged."""
        try:
            new_state = transition(self.state, event)
        except GameError as e:
            logging.warning("Rejected %s: %s", type(event).__name__, e)
            return False
        if new_state is self.state:
            return False
        self.state = new_state
        self._schedule()
        return True

    def _schedule(self) -> None:
        self.pending = None
        if not isinstance(status(self.state), AwaitingComputer):
            return
        row, col = choose_move(self.state.board)
        self.pending = PendingComputerMove(
            version=self.state.version,
            row=row,
            col=col,
            due=self._clock() + self.config.computer_delay,
        )
        logging.debug("scheduled computer move %s at v%d", (row, col), self.state.version)

    def run_pending(self, sleep: Callable[[float], None] = time.sleep) -> bool:
        """Wait out the pacing delay, then apply the pending computer move if still current."""
        task = self.pending
        if task is None:
            return False
        remaining = task.due - self._clock()
        if remaining > 0:
            sleep(remaining)
        if self.pending is not task:
            logging.debug("pending computer move superseded")
            return False
        self.pending = None
        return self.fire(task)

    def fire(self, task: PendingComputerMove) -> bool:
        """Dispatch a computer move; a stale task is a no-op."""
        if task.version != self.state.version:
            logging.info("Discarded stale computer move %s (v%d, now v%d)",
                         (task.row, task.col), task.version, self.state.version)
            return False
        return self.dispatch(task.as_event())

    def select_cell(self, row: int, col: int) -> bool:
        return self.dispatch(SelectCell(row, col))

    def select_mode(self, mode: GameMode) -> bool:
        return self.dispatch(SelectMode(mode))

    def restart(self) -> bool:
        return self.dispatch(Restart())
