"""Game configuration carried by every position."""

from __future__ import annotations

from dataclasses import dataclass, field

from pawnstorm.core.clock import TimeControl
from pawnstorm.core.enums import SearchMode

DEFAULT_DEPTH = 2


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Settings that survive every transition and history replay.

    Args:
        time_control: Clock budget for both sides.
        mode: How the engine picks moves for this game.
        depth: Minimax search depth in plies (ignored by greedy mode).
    """

    time_control: TimeControl = field(default_factory=TimeControl.blitz_5m)
    mode: SearchMode = SearchMode.MINIMAX
    depth: int = DEFAULT_DEPTH

    def __post_init__(self) -> None:
        if self.depth < 1:
            raise ValueError(f"Search depth must be >= 1, got {self.depth!r}")
        # Accept plain strings such as "greedy".
        object.__setattr__(self, "mode", SearchMode(self.mode))
