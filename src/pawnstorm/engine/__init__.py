"""Chess engine package: static evaluation and move search."""

from __future__ import annotations

from pawnstorm.core.enums import SearchMode
from pawnstorm.core.move import Move
from pawnstorm.core.position import Position
from pawnstorm.core.rules import Rules
from pawnstorm.engine.evaluate import Evaluator, evaluate
from pawnstorm.engine.python_search import GreedySearchEngine, MinimaxSearchEngine
from pawnstorm.engine.search import IEngine, NoLegalMove, SearchLimits, SearchResult

_ENGINES: dict[SearchMode, type[GreedySearchEngine] | type[MinimaxSearchEngine]] = {
    SearchMode.GREEDY: GreedySearchEngine,
    SearchMode.MINIMAX: MinimaxSearchEngine,
}


def create_engine(mode: SearchMode | str) -> IEngine:
    return _ENGINES[SearchMode(mode)]()


def choose_move(
    position: Position,
    mode: SearchMode | str | None = None,
    depth: int | None = None,
) -> Move | NoLegalMove:
    """Pick a move for the side to move.

    *mode* and *depth* default to ``position.config``. A position without
    legal moves yields :class:`NoLegalMove` instead of a move.
    """
    config = position.config
    limits = SearchLimits(
        mode=config.mode if mode is None else SearchMode(mode),
        max_depth=config.depth if depth is None else depth,
    )
    result = create_engine(limits.mode).search(position, limits)
    if result.best_move is None:
        return NoLegalMove(
            position.side_to_move, checkmate=Rules.is_in_check(position)
        )
    return result.best_move


__all__ = [
    "Evaluator",
    "GreedySearchEngine",
    "IEngine",
    "MinimaxSearchEngine",
    "NoLegalMove",
    "SearchLimits",
    "SearchResult",
    "choose_move",
    "create_engine",
    "evaluate",
]
