"""Shared engine search models and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from pawnstorm.core.config import DEFAULT_DEPTH
from pawnstorm.core.enums import Color, SearchMode

if TYPE_CHECKING:
    from pawnstorm.core.move import Move
    from pawnstorm.core.position import Position


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    mode: SearchMode = SearchMode.MINIMAX
    max_depth: int = DEFAULT_DEPTH

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"Search depth must be >= 1, got {self.max_depth!r}")
        object.__setattr__(self, "mode", SearchMode(self.mode))


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move | None
    score: int
    depth: int
    nodes: int


@dataclass(slots=True, frozen=True)
class NoLegalMove:
    """Returned instead of a move when the side to move has none.

    ``checkmate`` tells a lost game from a stalemate.
    """

    color: Color
    checkmate: bool


class IEngine(Protocol):
    """Protocol for move-selection engines."""

    def search(self, position: Position, limits: SearchLimits) -> SearchResult: ...
