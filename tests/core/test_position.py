"""Tests for Position transitions and history replay."""

import dataclasses

import pytest

from pawnstorm.core.board import Board
from pawnstorm.core.enums import CastlingRights, Color, PieceType
from pawnstorm.core.move import Move
from pawnstorm.core.notation import position_from_fen
from pawnstorm.core.piece import Piece
from pawnstorm.core.position import (
    IllegalMoveError,
    Position,
    apply_move,
    new_position,
    rebuild_from_history,
)
from pawnstorm.core.types import (
    A1, A5, A6, A7, A8, B1, B8, C1, C3, C6, C8, D1, D5, D6, D7, D8, E1, E2, E3,
    E4, E5, E6, E7, E8, F1, F8, G1, G2, G8, H1,
)

W = Color.WHITE
B = Color.BLACK


def play(pos: Position, *moves: Move, now: float = 1_000.0) -> Position:
    for move in moves:
        pos = apply_move(pos, move, now=now)
    return pos


class TestTransitions:
    def test_side_switches(self, start: Position) -> None:
        pos = apply_move(start, Move(E2, E4), now=1_000.0)
        assert pos.side_to_move == B

    def test_original_untouched(self, start: Position) -> None:
        apply_move(start, Move(E2, E4), now=1_000.0)
        assert start.board == Board.initial()
        assert start.side_to_move == W
        assert start.history == ()

    def test_frozen(self, start: Position) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            start.side_to_move = B  # type: ignore[misc]

    def test_history_appended(self, start: Position) -> None:
        pos = play(start, Move(E2, E4), Move(D7, D5))
        assert pos.history == (Move(E2, E4), Move(D7, D5))
        assert pos.ply == 2

    def test_deterministic(self, start: Position) -> None:
        a = play(start, Move(E2, E4), Move(D7, D5), Move(E4, D5))
        b = play(start, Move(E2, E4), Move(D7, D5), Move(E4, D5))
        assert a == b

    def test_apply_method(self, start: Position) -> None:
        assert start.apply(Move(E2, E4), now=1_000.0) == apply_move(
            start, Move(E2, E4), now=1_000.0
        )

    def test_empty_origin_rejected(self, start: Position) -> None:
        with pytest.raises(ValueError):
            apply_move(start, Move(E4, E5), now=1_000.0)

    def test_capture_replaces_piece(self, start: Position) -> None:
        pos = play(start, Move(E2, E4), Move(D7, D5), Move(E4, D5))
        assert pos.board[D5] == Piece(W, PieceType.PAWN)
        assert pos.board.is_empty(E4)
        assert len(pos.board.all_pieces(B)) == 15

    def test_config_carried(self, start: Position) -> None:
        pos = play(start, Move(E2, E4), Move(D7, D5))
        assert pos.config is start.config


class TestEnPassant:
    def test_target_set_after_double_push(self, start: Position) -> None:
        pos = play(start, Move(E2, E4))
        assert pos.en_passant == E3

    def test_target_replaced(self, start: Position) -> None:
        pos = play(start, Move(E2, E4), Move(D7, D5))
        assert pos.en_passant == D6

    def test_target_cleared_by_single_push(self, start: Position) -> None:
        pos = play(start, Move(E2, E4), Move(A7, A6))
        assert pos.en_passant is None

    def test_target_cleared_by_piece_move(self, start: Position) -> None:
        pos = play(start, Move(E2, E4), Move(B8, C6))
        assert pos.en_passant is None

    def test_capture_removes_passed_pawn(self, start: Position) -> None:
        pos = play(start, Move(E2, E4), Move(A7, A6), Move(E4, E5), Move(D7, D5))
        assert pos.en_passant == D6
        pos = play(pos, Move(E5, D6))
        assert pos.board[D6] == Piece(W, PieceType.PAWN)
        assert pos.board.is_empty(D5)
        assert pos.board.is_empty(E5)
        assert len(pos.board.all_pieces(B)) == 15


class TestCastling:
    FEN = "r3k2r/pppppppp/8/8/8/8/PPPPPPPP/R3K2R w KQkq - 0 1"

    def test_kingside_relocates_rook(self) -> None:
        pos = apply_move(position_from_fen(self.FEN, now=0.0), Move(E1, G1), now=0.0)
        assert pos.board[G1] == Piece(W, PieceType.KING)
        assert pos.board[F1] == Piece(W, PieceType.ROOK)
        assert pos.board.is_empty(H1)
        assert pos.board.is_empty(E1)
        assert not pos.castling & CastlingRights.WHITE_BOTH

    def test_queenside_relocates_rook(self) -> None:
        pos = apply_move(position_from_fen(self.FEN, now=0.0), Move(E1, C1), now=0.0)
        assert pos.board[C1] == Piece(W, PieceType.KING)
        assert pos.board[D1] == Piece(W, PieceType.ROOK)
        assert pos.board.is_empty(A1)

    def test_black_castles(self) -> None:
        fen = self.FEN.replace(" w ", " b ")
        pos = position_from_fen(fen, now=0.0)
        short = apply_move(pos, Move(E8, G8), now=0.0)
        assert short.board[G8] == Piece(B, PieceType.KING)
        assert short.board[F8] == Piece(B, PieceType.ROOK)
        long = apply_move(pos, Move(E8, C8), now=0.0)
        assert long.board[C8] == Piece(B, PieceType.KING)
        assert long.board[D8] == Piece(B, PieceType.ROOK)
        assert long.castling == CastlingRights.WHITE_BOTH

    def test_king_move_clears_both_rights(self) -> None:
        pos = play(position_from_fen(self.FEN, now=0.0), Move(E1, F1))
        assert not pos.white_can_castle_kingside
        assert not pos.white_can_castle_queenside
        assert pos.black_can_castle_kingside
        assert pos.black_can_castle_queenside

    def test_rights_not_restored_when_king_returns(self) -> None:
        pos = play(
            position_from_fen(self.FEN, now=0.0),
            Move(E1, F1),
            Move(A7, A6),
            Move(F1, E1),
        )
        assert pos.board[E1] == Piece(W, PieceType.KING)
        assert not pos.white_can_castle_kingside
        assert not pos.white_can_castle_queenside

    def test_rook_move_clears_one_right(self) -> None:
        pos = play(position_from_fen(self.FEN, now=0.0), Move(H1, G1))
        assert not pos.white_can_castle_kingside
        assert pos.white_can_castle_queenside

    def test_capture_on_corner_clears_victim_right(self) -> None:
        fen = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"
        pos = play(position_from_fen(fen, now=0.0), Move(A1, A8))
        assert not pos.black_can_castle_queenside
        assert pos.black_can_castle_kingside
        assert not pos.white_can_castle_queenside
        assert pos.white_can_castle_kingside


class TestPromotion:
    FEN = "4k3/P7/8/8/8/8/8/4K3 w - - 0 1"

    def test_defaults_to_queen(self) -> None:
        pos = play(position_from_fen(self.FEN, now=0.0), Move(A7, A8))
        assert pos.board[A8] == Piece(W, PieceType.QUEEN)
        assert pos.board.is_empty(A7)

    def test_explicit_underpromotion(self) -> None:
        pos = play(position_from_fen(self.FEN, now=0.0), Move(A7, A8, PieceType.KNIGHT))
        assert pos.board[A8] == Piece(W, PieceType.KNIGHT)

    def test_black_promotes_on_first_rank(self) -> None:
        pos = play(position_from_fen("4k3/8/8/8/8/8/6p1/K7 b - - 0 1", now=0.0), Move(G2, G1))
        assert pos.board[G1] == Piece(B, PieceType.QUEEN)

    def test_promotion_field_ignored_elsewhere(self, start: Position) -> None:
        pos = play(start, Move(E2, E4, PieceType.ROOK))
        assert pos.board[E4] == Piece(W, PieceType.PAWN)


class TestRebuildFromHistory:
    MOVES = (
        Move(E2, E4),
        Move(D7, D5),
        Move(E4, D5),
        Move(D8, D5),
        Move(B1, C3),
    )

    def test_matches_incremental_play(self, start: Position) -> None:
        played = play(start, *self.MOVES)
        rebuilt = rebuild_from_history(played.history, played, now=1_000.0)
        assert rebuilt == played

    def test_empty_history(self, start: Position) -> None:
        rebuilt = rebuild_from_history([], start, now=5.0)
        assert rebuilt.board == Board.initial()
        assert rebuilt.turn_started_at == 5.0
        assert rebuilt.history == ()

    def test_only_config_kept(self, start: Position) -> None:
        played = play(start, *self.MOVES, now=1_030.0)
        rebuilt = rebuild_from_history(played.history, played, now=2_000.0)
        assert rebuilt.config == played.config
        initial = played.config.time_control.initial_seconds
        assert rebuilt.white_remaining == initial
        assert rebuilt.black_remaining == initial
        assert rebuilt.turn_started_at == 2_000.0

    def test_trusting_replay_accepts_illegal_geometry(self, start: Position) -> None:
        # Rook jumps over its own pawn; nothing is checked.
        rebuilt = rebuild_from_history([Move(A1, A5)], start, now=0.0)
        assert rebuilt.board[A5] == Piece(W, PieceType.ROOK)

    def test_validated_replay_rejects_illegal_move(self, start: Position) -> None:
        with pytest.raises(IllegalMoveError) as excinfo:
            rebuild_from_history(
                [Move(E2, E4), Move(E7, E6), Move(A1, A5)],
                start,
                now=0.0,
                validate=True,
            )
        assert excinfo.value.ply == 2
        assert excinfo.value.move == Move(A1, A5)

    def test_validated_replay_accepts_legal_game(self, start: Position) -> None:
        played = play(start, *self.MOVES)
        rebuilt = rebuild_from_history(
            played.history, played, now=1_000.0, validate=True
        )
        assert rebuilt == played

    def test_replay_from_empty_square_raises(self, start: Position) -> None:
        with pytest.raises(ValueError):
            rebuild_from_history([Move(E4, E5)], start, now=0.0)


def test_new_position_defaults() -> None:
    pos = new_position(now=0.0)
    assert pos.board == Board.initial()
    assert pos.castling == CastlingRights.ALL
    assert pos.en_passant is None
    assert pos.white_remaining == pos.black_remaining == 300.0
    assert pos.history == ()

