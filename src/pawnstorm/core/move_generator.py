"""Move legality, check detection and legal-move enumeration.

Legality is decided in two layers:

* the *attack* layer (:func:`attacks`, :func:`is_king_attacked`) knows piece
  geometry, occupancy and path clearance and nothing else;
* the *legal* layer (:meth:`MoveGenerator.is_legal`) adds turn order,
  castling and the rule that a move may not leave the mover's own king
  attacked, which it decides by asking the attack layer about a scratch
  board.

The attack layer never calls back into the legal layer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pawnstorm.core.board import Board
from pawnstorm.core.enums import Color, PieceType
from pawnstorm.core.move import Move
from pawnstorm.core.piece import Piece
from pawnstorm.core.position import board_after_move
from pawnstorm.core.types import SQUARE_ORDER, Square, file_of, make_square, rank_of

if TYPE_CHECKING:
    from pawnstorm.core.position import Position


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _pawn_start_rank(color: Color) -> int:
    return 1 if color == Color.WHITE else 6


def is_path_clear(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """Every square strictly between two aligned squares is empty.

    Squares that share no line have nothing between them.
    """
    df = file_of(to_sq) - file_of(from_sq)
    dr = rank_of(to_sq) - rank_of(from_sq)
    if not (df == 0 or dr == 0 or abs(df) == abs(dr)):
        return True
    step_f = _sign(df)
    step_r = _sign(dr)
    f = file_of(from_sq) + step_f
    r = rank_of(from_sq) + step_r
    for _ in range(max(abs(df), abs(dr)) - 1):
        if not board.is_empty(make_square(f, r)):
            return False
        f += step_f
        r += step_r
    return True


def _reaches(
    board: Board,
    en_passant: Square | None,
    piece: Piece,
    from_sq: Square,
    to_sq: Square,
) -> bool:
    """Per-piece geometry plus path clearance, castling excluded."""
    if from_sq == to_sq:
        return False
    df = file_of(to_sq) - file_of(from_sq)
    dr = rank_of(to_sq) - rank_of(from_sq)
    kind = piece.piece_type

    if kind == PieceType.PAWN:
        forward = piece.color.forward
        if abs(df) == 1 and dr == forward:
            return not board.is_empty(to_sq) or to_sq == en_passant
        if df == 0 and dr == forward:
            return board.is_empty(to_sq)
        if df == 0 and dr == 2 * forward:
            return (
                rank_of(from_sq) == _pawn_start_rank(piece.color)
                and board.is_empty(to_sq)
                and board.is_empty(from_sq + 8 * forward)
            )
        return False

    if kind == PieceType.KNIGHT:
        return (abs(df), abs(dr)) in ((1, 2), (2, 1))

    if kind == PieceType.KING:
        return max(abs(df), abs(dr)) == 1

    straight = (df == 0) != (dr == 0)
    diagonal = abs(df) == abs(dr)
    if kind == PieceType.ROOK:
        shaped = straight
    elif kind == PieceType.BISHOP:
        shaped = diagonal
    else:  # queen
        shaped = straight or diagonal
    return shaped and is_path_clear(board, from_sq, to_sq)


def attacks(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """Could the piece on *from_sq* land on *to_sq*, ignoring whose turn it is?

    Geometry, occupancy and path only; no castling and no self-check test.
    """
    piece = board[from_sq]
    if piece is None:
        return False
    target = board[to_sq]
    if target is not None and target.color == piece.color:
        return False
    return _reaches(board, None, piece, from_sq, to_sq)


def is_king_attacked(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked? A board without that king is not in check."""
    king_sq = board.king_square(color)
    if king_sq is None:
        return False
    enemy = color.opposite
    for sq, piece in board.items():
        if piece.color == enemy and attacks(board, sq, king_sq):
            return True
    return False


class MoveGenerator:
    """Answers legality questions about a single :class:`Position`.

    Enumeration walks own pieces and then destinations in
    :data:`~pawnstorm.core.types.SQUARE_ORDER`; that order is what the
    search engine sees.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def is_legal(self, from_sq: Square, to_sq: Square) -> bool:
        """Fully legal move for the side to move (never raises)."""
        if not self.is_pseudo_legal(from_sq, to_sq):
            return False
        piece = self._board[from_sq]
        assert piece is not None
        scratch = board_after_move(
            self._board, Move(from_sq, to_sq), self._pos.en_passant
        )
        return not is_king_attacked(scratch, piece.color)

    def is_legal_move(self, move: Move) -> bool:
        return self.is_legal(move.from_sq, move.to_sq)

    def is_pseudo_legal(self, from_sq: Square, to_sq: Square) -> bool:
        """Turn, occupancy and geometry (castling included), no self-check test."""
        if not (0 <= from_sq < 64 and 0 <= to_sq < 64):
            return False
        board = self._board
        piece = board[from_sq]
        if piece is None or piece.color != self._pos.side_to_move:
            return False
        target = board[to_sq]
        if target is not None and target.color == piece.color:
            return False
        if _reaches(board, self._pos.en_passant, piece, from_sq, to_sq):
            return True
        return piece.piece_type == PieceType.KING and self._can_castle(
            piece.color, from_sq, to_sq
        )

    def generate_legal_moves(self, color: Color | None = None) -> list[Move]:
        """All legal moves for *color* (default: side to move), brute force.

        A side that is not on move has no legal moves.
        """
        if not self._is_on_move(color):
            return []
        is_legal = self.is_legal
        moves: list[Move] = []
        for from_sq in self._board.all_pieces(self._pos.side_to_move):
            for to_sq in SQUARE_ORDER:
                if is_legal(from_sq, to_sq):
                    moves.append(Move(from_sq, to_sq))
        return moves

    def has_legal_moves(self, color: Color | None = None) -> bool:
        if not self._is_on_move(color):
            return False
        for from_sq in self._board.all_pieces(self._pos.side_to_move):
            for to_sq in SQUARE_ORDER:
                if self.is_legal(from_sq, to_sq):
                    return True
        return False

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color | None = None) -> bool:
        """Is *color*'s king (default: side to move) attacked by the opponent?"""
        if color is None:
            color = self._pos.side_to_move
        return is_king_attacked(self._board, color)

    # -- Internals ----------------------------------------------------------

    def _is_on_move(self, color: Color | None) -> bool:
        return color is None or color == self._pos.side_to_move

    def _can_castle(self, color: Color, from_sq: Square, to_sq: Square) -> bool:
        # Squares the king crosses are not tested for attacks, only its origin.
        df = file_of(to_sq) - file_of(from_sq)
        if abs(df) != 2 or rank_of(to_sq) != rank_of(from_sq):
            return False
        kingside = df > 0
        if not self._pos.can_castle(color, kingside):
            return False
        rook_sq = make_square(7 if kingside else 0, rank_of(to_sq))
        if self._board[rook_sq] != Piece(color, PieceType.ROOK):
            return False
        if not is_path_clear(self._board, from_sq, rook_sq):
            return False
        return not is_king_attacked(self._board, color)
