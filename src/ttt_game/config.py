"""Engine configuration.

Environment-first: values can be overridden through TTT_* variables and,
on top of that, by CLI flags.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .rules import GameMode

DEFAULT_COMPUTER_DELAY = 0.5


@dataclass(frozen=True)
class EngineConfig:
    computer_delay: float = DEFAULT_COMPUTER_DELAY  # seconds, cosmetic pacing
    default_mode: GameMode = GameMode.PLAYER_VS_PLAYER

    def __post_init__(self) -> None:
        if self.computer_delay < 0:
            raise ValueError(f"computer_delay must be >= 0, got {self.computer_delay}")

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Read TTT_COMPUTER_DELAY and TTT_DEFAULT_MODE, falling back to defaults."""
        delay = os.getenv("TTT_COMPUTER_DELAY")
        mode = os.getenv("TTT_DEFAULT_MODE")
        return cls(
            computer_delay=float(delay) if delay else DEFAULT_COMPUTER_DELAY,
            default_mode=GameMode(mode) if mode else GameMode.PLAYER_VS_PLAYER,
        )
