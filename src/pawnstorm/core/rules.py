"""High-level chess rules: check, checkmate, stalemate, promotion, result."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pawnstorm.core.enums import Color, GameResult, PieceType, Termination
from pawnstorm.core.move_generator import MoveGenerator
from pawnstorm.core.position import last_rank
from pawnstorm.core.types import Square, rank_of

if TYPE_CHECKING:
    from pawnstorm.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Every *color* argument defaults to the side to move. A side that is
    not on move has no legal moves, so it is checkmated exactly when its
    king is attacked and is never stalemated.
    """

    # Product policy:
    # - Stalemate is a draw for game_result(); the engine's evaluator
    #   does not special-case it.
    # - No claim-based or automatic draws (50-move, repetition, material).

    @staticmethod
    def is_in_check(position: Position, color: Color | None = None) -> bool:
        return MoveGenerator(position).is_in_check(color)

    @staticmethod
    def is_checkmate(position: Position, color: Color | None = None) -> bool:
        return Rules.termination(position, color) == Termination.CHECKMATE

    @staticmethod
    def is_stalemate(position: Position, color: Color | None = None) -> bool:
        return Rules.termination(position, color) == Termination.STALEMATE

    @staticmethod
    def termination(position: Position, color: Color | None = None) -> Termination:
        """Distinguish checkmate from stalemate for *color*."""
        gen = MoveGenerator(position)
        if gen.has_legal_moves(color):
            return Termination.NONE
        if gen.is_in_check(color):
            return Termination.CHECKMATE
        if color is not None and color != position.side_to_move:
            return Termination.NONE
        return Termination.STALEMATE

    @staticmethod
    def is_promotion(position: Position, from_sq: Square, to_sq: Square) -> bool:
        """Would moving the piece on *from_sq* to *to_sq* promote a pawn?"""
        piece = position.board[from_sq]
        if piece is None or piece.piece_type != PieceType.PAWN:
            return False
        return rank_of(to_sq) == last_rank(piece.color)

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Determine the current game result."""
        termination = Rules.termination(position)
        if termination == Termination.CHECKMATE:
            return (
                GameResult.BLACK_WINS
                if position.side_to_move == Color.WHITE
                else GameResult.WHITE_WINS
            )
        if termination == Termination.STALEMATE:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS
