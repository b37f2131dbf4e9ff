"""Pure-Python move selection: greedy (depth 1) and minimax + alpha-beta."""

from __future__ import annotations

import logging

from pawnstorm.core.enums import Color
from pawnstorm.core.move import Move
from pawnstorm.core.move_generator import MoveGenerator
from pawnstorm.core.position import Position, apply_move
from pawnstorm.engine.evaluate import Evaluator
from pawnstorm.engine.search import IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = 1_000_000


def _scratch(position: Position, move: Move) -> Position:
    # Hypothetical positions reuse the parent's timestamp so no clock runs.
    return apply_move(position, move, now=position.turn_started_at)


class GreedySearchEngine(IEngine):
    """Plays the move whose resulting board scores best right now.

    Ties keep the earliest move in enumeration order.
    """

    __slots__ = ("_evaluator", "_nodes")

    def __init__(self, evaluator: Evaluator | None = None) -> None:
        self._evaluator = evaluator or Evaluator()
        self._nodes = 0

    @property
    def nodes(self) -> int:
        return self._nodes

    def search(
        self,
        position: Position,
        limits: SearchLimits | None = None,
    ) -> SearchResult:
        color = position.side_to_move
        _LOGGER.info("Greedy engine (%s) is thinking", color)
        self._nodes = 0

        best_move: Move | None = None
        best_score = 0
        for move in MoveGenerator(position).generate_legal_moves():
            self._nodes += 1
            score = self._evaluator.evaluate(_scratch(position, move).board)
            if best_move is None or (
                score > best_score if color == Color.WHITE else score < best_score
            ):
                best_move = move
                best_score = score

        if best_move is None:
            _LOGGER.info("Greedy engine (%s) has no legal move", color)
            return SearchResult(
                None, self._evaluator.evaluate(position.board), 0, self._nodes
            )

        _LOGGER.info("Greedy engine chose %s with score %d", best_move, best_score)
        return SearchResult(best_move, best_score, 1, self._nodes)


class MinimaxSearchEngine(IEngine):
    """Fixed-depth minimax with alpha-beta pruning.

    White maximises, Black minimises. Nodes without legal moves (mate or
    stalemate) and depth-0 nodes are scored by the static evaluator; a
    stalemate is therefore not treated as a draw. A later move only
    replaces the current best when it is strictly better.

    Args:
        evaluator: Static scorer for leaves.
        prune: Disable to run plain minimax over the full tree.
        fallback: Engine used when the root yields no move.
    """

    __slots__ = ("_evaluator", "_prune", "_fallback", "_nodes")

    def __init__(
        self,
        evaluator: Evaluator | None = None,
        *,
        prune: bool = True,
        fallback: IEngine | None = None,
    ) -> None:
        self._evaluator = evaluator or Evaluator()
        self._prune = prune
        self._fallback = fallback or GreedySearchEngine(self._evaluator)
        self._nodes = 0

    @property
    def nodes(self) -> int:
        return self._nodes

    def search(self, position: Position, limits: SearchLimits) -> SearchResult:
        depth = limits.max_depth
        if depth <= 0:
            raise ValueError("Search depth must be >= 1")

        _LOGGER.info(
            "Minimax engine (%s) is thinking (depth: %d)", position.side_to_move, depth
        )
        self._nodes = 0
        score, move = self._minimax(position, depth, -_INF_SCORE, _INF_SCORE)
        _LOGGER.debug("Minimax visited %d nodes", self._nodes)

        if move is None:
            _LOGGER.info("Minimax has no best move, falling back to greedy")
            return self._fallback.search(position, limits)

        _LOGGER.info(
            "Minimax engine chose %s with a projected score of %d", move, score
        )
        return SearchResult(move, score, depth, self._nodes)

    def _minimax(
        self,
        position: Position,
        depth: int,
        alpha: int,
        beta: int,
    ) -> tuple[int, Move | None]:
        self._nodes += 1
        if depth == 0:
            return self._evaluator.evaluate(position.board), None

        moves = MoveGenerator(position).generate_legal_moves()
        if not moves:
            return self._evaluator.evaluate(position.board), None

        maximizing = position.side_to_move == Color.WHITE
        best_score = -_INF_SCORE if maximizing else _INF_SCORE
        best_move = moves[0]

        for move in moves:
            score, _ = self._minimax(_scratch(position, move), depth - 1, alpha, beta)
            if maximizing:
                if score > best_score:
                    best_score = score
                    best_move = move
                    alpha = max(alpha, score)
            elif score < best_score:
                best_score = score
                best_move = move
                beta = min(beta, score)
            if self._prune and beta <= alpha:
                break

        return best_score, best_move
