"""Time controls and per-side clock arithmetic.

Positions carry each side's remaining seconds plus the monotonic timestamp
at which the current turn began; the helpers here read a live value off a
position without changing it.
"""

from __future__ import annotations

import math
import time
from typing import TYPE_CHECKING

from pawnstorm.core.enums import Color

if TYPE_CHECKING:
    from pawnstorm.core.position import Position


class TimeControl:
    """Immutable time-control definition.

    Args:
        initial_seconds: Starting time per player.
        increment_seconds: Per-move increment (Fischer).
    """

    __slots__ = ("initial_seconds", "increment_seconds")

    def __init__(self, initial_seconds: float, increment_seconds: float = 0.0) -> None:
        if initial_seconds < 0 or math.isnan(initial_seconds):
            raise ValueError(f"Invalid initial time: {initial_seconds!r}")
        if increment_seconds < 0 or math.isnan(increment_seconds):
            raise ValueError(f"Invalid increment: {increment_seconds!r}")
        self.initial_seconds = float(initial_seconds)
        self.increment_seconds = float(increment_seconds)

    # Common presets
    @classmethod
    def bullet_1m(cls) -> TimeControl:
        return cls(60, 0)

    @classmethod
    def blitz_3m(cls) -> TimeControl:
        return cls(180, 0)

    @classmethod
    def blitz_5m(cls) -> TimeControl:
        return cls(300, 0)

    @classmethod
    def rapid_10m(cls) -> TimeControl:
        return cls(600, 0)

    @classmethod
    def unlimited(cls) -> TimeControl:
        """No time limit."""
        return cls(float("inf"), 0)

    @classmethod
    def from_minutes(cls, minutes: float, increment_seconds: float = 0.0) -> TimeControl:
        return cls(minutes * 60, increment_seconds)

    @property
    def is_unlimited(self) -> bool:
        return math.isinf(self.initial_seconds)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeControl):
            return NotImplemented
        return (self.initial_seconds, self.increment_seconds) == (
            other.initial_seconds,
            other.increment_seconds,
        )

    def __hash__(self) -> int:
        return hash((self.initial_seconds, self.increment_seconds))

    def __repr__(self) -> str:
        if self.is_unlimited:
            return "TimeControl(unlimited)"
        mins = self.initial_seconds / 60
        if self.increment_seconds:
            return f"TimeControl({mins:g}m+{self.increment_seconds:g}s)"
        return f"TimeControl({mins:g}m)"


def now_or_monotonic(now: float | None) -> float:
    return time.monotonic() if now is None else now


def stored_remaining(position: Position, color: Color) -> float:
    """Remaining seconds recorded on *position* (no live ticking)."""
    if color == Color.WHITE:
        return position.white_remaining
    return position.black_remaining


def remaining_time(position: Position, color: Color, now: float | None = None) -> float:
    """Seconds *color* has left, counting the turn in progress."""
    remaining = stored_remaining(position, color)
    if color != position.side_to_move:
        return remaining
    elapsed = now_or_monotonic(now) - position.turn_started_at
    return max(0.0, remaining - max(0.0, elapsed))


def is_flag_fallen(position: Position, color: Color, now: float | None = None) -> bool:
    """Has *color* run out of time?"""
    return remaining_time(position, color, now) <= 0.0
