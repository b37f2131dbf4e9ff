"""Tests for greedy and minimax move selection."""

import logging

import pytest

from pawnstorm.core.enums import Color, SearchMode
from pawnstorm.core.move import Move
from pawnstorm.core.move_generator import MoveGenerator
from pawnstorm.core.notation import position_from_fen
from pawnstorm.core.position import Position, apply_move
from pawnstorm.core.types import D1, D4, D5, D8
from pawnstorm.engine import create_engine
from pawnstorm.engine.evaluate import evaluate
from pawnstorm.engine.python_search import GreedySearchEngine, MinimaxSearchEngine
from pawnstorm.engine.search import SearchLimits, SearchResult


def fen(text: str) -> Position:
    return position_from_fen(text, now=0.0)


def reference_minimax(pos: Position, depth: int) -> tuple[int, Move | None]:
    """Plain minimax without pruning; the first strictly better move wins."""
    if depth == 0:
        return evaluate(pos.board), None
    moves = MoveGenerator(pos).generate_legal_moves()
    if not moves:
        return evaluate(pos.board), None
    maximizing = pos.side_to_move == Color.WHITE
    best_score, best_move = None, None
    for move in moves:
        score, _ = reference_minimax(apply_move(pos, move, now=0.0), depth - 1)
        if best_score is None or (
            score > best_score if maximizing else score < best_score
        ):
            best_score, best_move = score, move
    return best_score, best_move


# White queen can grab a pawn that is defended by another pawn.
POISONED_WHITE = "4k3/8/4p3/3p4/8/8/8/3QK3 w - - 0 1"
# Same idea with colours swapped.
POISONED_BLACK = "3qk3/8/8/8/3P4/4P3/8/4K3 b - - 0 1"
STALEMATE = "7k/8/5KQ1/8/8/8/8/8 b - - 0 1"
CHECKMATED = "R5k1/5ppp/8/8/8/8/8/6K1 b - - 0 1"

SMALL_POSITIONS = [
    POISONED_WHITE,
    POISONED_BLACK,
    "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
    "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 b - - 0 1",
    "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1",
]


class TestSearchLimits:
    def test_defaults(self) -> None:
        limits = SearchLimits()
        assert limits.mode == SearchMode.MINIMAX
        assert limits.max_depth == 2

    def test_mode_from_string(self) -> None:
        assert SearchLimits(mode="greedy").mode == SearchMode.GREEDY  # type: ignore[arg-type]

    @pytest.mark.parametrize("depth", [0, -1])
    def test_depth_must_be_positive(self, depth: int) -> None:
        with pytest.raises(ValueError):
            SearchLimits(max_depth=depth)

    def test_unknown_mode(self) -> None:
        with pytest.raises(ValueError):
            SearchLimits(mode="random")  # type: ignore[arg-type]


class TestGreedy:
    def test_grabs_material(self) -> None:
        result = GreedySearchEngine().search(fen(POISONED_WHITE))
        assert result.best_move == Move(D1, D5)
        assert result.depth == 1

    def test_black_minimises(self) -> None:
        result = GreedySearchEngine().search(fen(POISONED_BLACK))
        assert result.best_move == Move(D8, D4)

    @pytest.mark.parametrize("text", SMALL_POSITIONS)
    def test_first_best_move_wins_ties(self, text: str) -> None:
        pos = fen(text)
        moves = MoveGenerator(pos).generate_legal_moves()
        scores = [evaluate(apply_move(pos, m, now=0.0).board) for m in moves]
        target = max(scores) if pos.side_to_move == Color.WHITE else min(scores)
        result = GreedySearchEngine().search(pos)
        assert result.best_move == moves[scores.index(target)]
        assert result.score == target

    def test_counts_nodes(self) -> None:
        engine = GreedySearchEngine()
        engine.search(fen(POISONED_WHITE))
        assert engine.nodes == len(
            MoveGenerator(fen(POISONED_WHITE)).generate_legal_moves()
        )

    def test_no_moves(self) -> None:
        pos = fen(STALEMATE)
        result = GreedySearchEngine().search(pos)
        assert result.best_move is None
        assert result.score == evaluate(pos.board)


class TestMinimax:
    def test_avoids_defended_pawn(self) -> None:
        result = MinimaxSearchEngine().search(fen(POISONED_WHITE), SearchLimits())
        assert result.best_move is not None
        assert result.best_move != Move(D1, D5)
        assert result.depth == 2

    def test_black_avoids_defended_pawn(self) -> None:
        result = MinimaxSearchEngine().search(fen(POISONED_BLACK), SearchLimits())
        assert result.best_move != Move(D8, D4)

    @pytest.mark.parametrize("text", SMALL_POSITIONS)
    def test_matches_plain_minimax(self, text: str) -> None:
        pos = fen(text)
        expected = reference_minimax(pos, 2)
        unpruned = MinimaxSearchEngine(prune=False).search(pos, SearchLimits(max_depth=2))
        pruned = MinimaxSearchEngine().search(pos, SearchLimits(max_depth=2))
        assert (unpruned.score, unpruned.best_move) == expected
        assert (pruned.score, pruned.best_move) == expected

    @pytest.mark.slow
    def test_matches_plain_minimax_depth_3(self) -> None:
        pos = fen(POISONED_WHITE)
        pruned = MinimaxSearchEngine().search(pos, SearchLimits(max_depth=3))
        assert (pruned.score, pruned.best_move) == reference_minimax(pos, 3)

    def test_pruning_visits_fewer_nodes(self) -> None:
        pos = fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        limits = SearchLimits(max_depth=2)
        pruned = MinimaxSearchEngine()
        plain = MinimaxSearchEngine(prune=False)
        assert pruned.search(pos, limits).nodes < plain.search(pos, limits).nodes

    @pytest.mark.parametrize("text", SMALL_POSITIONS)
    def test_depth_one_agrees_with_greedy(self, text: str) -> None:
        pos = fen(text)
        minimax = MinimaxSearchEngine().search(pos, SearchLimits(max_depth=1))
        greedy = GreedySearchEngine().search(pos)
        assert minimax.best_move == greedy.best_move
        assert minimax.score == greedy.score

    def test_deterministic(self) -> None:
        pos = fen(POISONED_WHITE)
        first = MinimaxSearchEngine().search(pos, SearchLimits())
        second = MinimaxSearchEngine().search(pos, SearchLimits())
        assert first == second

    def test_search_does_not_touch_clocks(self) -> None:
        pos = fen(POISONED_WHITE)
        MinimaxSearchEngine().search(pos, SearchLimits())
        assert pos == fen(POISONED_WHITE)

    def test_stalemate_scored_statically(self) -> None:
        pos = fen(STALEMATE)
        engine = MinimaxSearchEngine()
        assert engine._minimax(pos, 3, -10**9, 10**9) == (evaluate(pos.board), None)

    def test_checkmate_scored_statically(self) -> None:
        pos = fen(CHECKMATED)
        engine = MinimaxSearchEngine()
        assert engine._minimax(pos, 2, -10**9, 10**9) == (evaluate(pos.board), None)


class _RecordingEngine:
    def __init__(self) -> None:
        self.calls: list[Position] = []

    def search(self, position: Position, limits: SearchLimits) -> SearchResult:
        self.calls.append(position)
        return SearchResult(None, 0, 0, 0)


class TestFallback:
    def test_no_root_move_defers_to_fallback(self) -> None:
        fallback = _RecordingEngine()
        pos = fen(STALEMATE)
        result = MinimaxSearchEngine(fallback=fallback).search(pos, SearchLimits())
        assert fallback.calls == [pos]
        assert result.best_move is None

    def test_default_fallback_is_greedy(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="pawnstorm.engine.python_search")
        pos = fen(STALEMATE)
        result = MinimaxSearchEngine().search(pos, SearchLimits())
        assert result.best_move is None
        assert result.score == evaluate(pos.board)
        assert "falling back to greedy" in caplog.text

    def test_fallback_unused_when_moves_exist(self) -> None:
        fallback = _RecordingEngine()
        MinimaxSearchEngine(fallback=fallback).search(fen(POISONED_WHITE), SearchLimits())
        assert fallback.calls == []


class TestEngineFactory:
    def test_modes(self) -> None:
        assert isinstance(create_engine(SearchMode.GREEDY), GreedySearchEngine)
        assert isinstance(create_engine("minimax"), MinimaxSearchEngine)

    def test_unknown_mode(self) -> None:
        with pytest.raises(ValueError):
            create_engine("random")


def test_engine_logs_choice(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="pawnstorm.engine.python_search")
    MinimaxSearchEngine().search(fen(POISONED_WHITE), SearchLimits())
    assert "is thinking" in caplog.text
    assert "chose" in caplog.text
