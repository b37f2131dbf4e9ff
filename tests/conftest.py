"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from pawnstorm.core import GameConfig, Position, TimeControl, new_position

# Fixed monotonic timestamp so clocks never tick during a test.
T0 = 1_000.0


@pytest.fixture
def t0() -> float:
    return T0


@pytest.fixture
def config() -> GameConfig:
    return GameConfig(time_control=TimeControl.blitz_3m())


@pytest.fixture
def start(config: GameConfig) -> Position:
    """Standard initial position with 3-minute clocks started at ``T0``."""
    return new_position(config, now=T0)
