"""Immutable game snapshots and the transitions between them."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from pawnstorm.core.board import Board
from pawnstorm.core.clock import TimeControl, now_or_monotonic, stored_remaining
from pawnstorm.core.config import GameConfig
from pawnstorm.core.enums import CastlingRights, Color, PieceType
from pawnstorm.core.move import Move
from pawnstorm.core.piece import Piece
from pawnstorm.core.types import Square, file_of, make_square, rank_of, square_name

_LOGGER = logging.getLogger(__name__)


class IllegalMoveError(ValueError):
    """A replayed move is not legal in the position it is applied to."""

    def __init__(self, ply: int, move: Move) -> None:
        super().__init__(f"Illegal move at ply {ply}: {move}")
        self.ply = ply
        self.move = move


@dataclass(frozen=True, slots=True)
class Position:
    """Full chess position: board, side to move, castling, en passant, clocks.

    Instances are never modified. :func:`apply_move` derives the next
    snapshot and leaves this one valid, so old positions can be kept for
    undo, replay or speculative search.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    white_remaining: float = 300.0
    black_remaining: float = 300.0
    turn_started_at: float = 0.0
    history: tuple[Move, ...] = ()
    config: GameConfig = field(default_factory=GameConfig)

    # ── Castling accessors ───────────────────────────────────────────────

    def can_castle(self, color: Color, kingside: bool) -> bool:
        return bool(self.castling & CastlingRights.for_side(color, kingside))

    @property
    def white_can_castle_kingside(self) -> bool:
        return self.can_castle(Color.WHITE, kingside=True)

    @property
    def white_can_castle_queenside(self) -> bool:
        return self.can_castle(Color.WHITE, kingside=False)

    @property
    def black_can_castle_kingside(self) -> bool:
        return self.can_castle(Color.BLACK, kingside=True)

    @property
    def black_can_castle_queenside(self) -> bool:
        return self.can_castle(Color.BLACK, kingside=False)

    # ── Convenience ──────────────────────────────────────────────────────

    def apply(self, move: Move, *, now: float | None = None) -> Position:
        return apply_move(self, move, now=now)

    @property
    def ply(self) -> int:
        return len(self.history)


# ── Board-level transition ──────────────────────────────────────────────────

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    make_square(0, 0): CastlingRights.WHITE_QUEENSIDE,
    make_square(7, 0): CastlingRights.WHITE_KINGSIDE,
    make_square(0, 7): CastlingRights.BLACK_QUEENSIDE,
    make_square(7, 7): CastlingRights.BLACK_KINGSIDE,
}


def last_rank(color: Color) -> int:
    """Rank index a pawn of *color* promotes on."""
    return 7 if color == Color.WHITE else 0


def is_castling_move(piece: Piece, move: Move) -> bool:
    return (
        piece.piece_type == PieceType.KING
        and abs(file_of(move.to_sq) - file_of(move.from_sq)) == 2
    )


def is_en_passant_capture(
    board: Board, piece: Piece, move: Move, en_passant: Square | None
) -> bool:
    return (
        piece.piece_type == PieceType.PAWN
        and move.to_sq == en_passant
        and board.is_empty(move.to_sq)
    )


def board_after_move(board: Board, move: Move, en_passant: Square | None) -> Board:
    """Piece placement after *move*, including every capture and relocation.

    Shared by :func:`apply_move` and by the legality check that tests a
    move against a scratch board.
    """
    piece = board[move.from_sq]
    if piece is None:
        raise ValueError(f"No piece on {square_name(move.from_sq)}")

    changes: dict[Square, Piece | None] = {move.from_sq: None}

    # En passant: the captured pawn sits beside the origin, not on the target
    if is_en_passant_capture(board, piece, move, en_passant):
        changes[make_square(file_of(move.to_sq), rank_of(move.from_sq))] = None

    placed = piece
    if piece.piece_type == PieceType.PAWN and rank_of(move.to_sq) == last_rank(
        piece.color
    ):
        placed = Piece(piece.color, move.promotion_or_default)
    changes[move.to_sq] = placed

    # Slide the rook for castling
    if is_castling_move(piece, move):
        rank = rank_of(move.from_sq)
        kingside = file_of(move.to_sq) > file_of(move.from_sq)
        rook_from = make_square(7 if kingside else 0, rank)
        rook_to = make_square(5 if kingside else 3, rank)
        rook = board[rook_from]
        if rook is not None:
            changes[rook_from] = None
            changes[rook_to] = rook

    return board.with_changes(changes)


def _next_castling(castling: CastlingRights, piece: Piece, move: Move) -> CastlingRights:
    if piece.piece_type == PieceType.KING:
        castling &= ~CastlingRights.both(piece.color)
    for sq in (move.from_sq, move.to_sq):
        corner = _ROOK_CORNERS.get(sq)
        if corner is not None:
            castling &= ~corner
    return castling


def _next_en_passant(piece: Piece, move: Move) -> Square | None:
    if piece.piece_type != PieceType.PAWN:
        return None
    from_rank = rank_of(move.from_sq)
    to_rank = rank_of(move.to_sq)
    if abs(to_rank - from_rank) != 2:
        return None
    return make_square(file_of(move.from_sq), (from_rank + to_rank) // 2)


# ── Public transitions ──────────────────────────────────────────────────────


def new_position(
    config: GameConfig | TimeControl | None = None,
    *,
    now: float | None = None,
) -> Position:
    """Standard initial position with clocks set from *config*."""
    if config is None:
        config = GameConfig()
    elif isinstance(config, TimeControl):
        config = GameConfig(time_control=config)
    initial = config.time_control.initial_seconds
    return Position(
        board=Board.initial(),
        side_to_move=Color.WHITE,
        castling=CastlingRights.ALL,
        en_passant=None,
        white_remaining=initial,
        black_remaining=initial,
        turn_started_at=now_or_monotonic(now),
        history=(),
        config=config,
    )


def apply_move(position: Position, move: Move, *, now: float | None = None) -> Position:
    """Apply an already-validated *move* and return the resulting position.

    Legality is never re-checked here. The mover's clock is charged with
    the time elapsed since ``position.turn_started_at``.
    """
    board = position.board
    piece = board[move.from_sq]
    if piece is None:
        raise ValueError(f"No piece on {square_name(move.from_sq)}")

    timestamp = now_or_monotonic(now)
    elapsed = max(0.0, timestamp - position.turn_started_at)
    mover = position.side_to_move
    increment = position.config.time_control.increment_seconds
    remaining = max(0.0, stored_remaining(position, mover) - elapsed) + increment
    clocks = (
        {"white_remaining": remaining}
        if mover == Color.WHITE
        else {"black_remaining": remaining}
    )

    return replace(
        position,
        board=board_after_move(board, move, position.en_passant),
        side_to_move=mover.opposite,
        castling=_next_castling(position.castling, piece, move),
        en_passant=_next_en_passant(piece, move),
        turn_started_at=timestamp,
        history=position.history + (move,),
        **clocks,
    )


def rebuild_from_history(
    moves: Iterable[Move],
    template: Position,
    *,
    now: float | None = None,
    validate: bool = False,
) -> Position:
    """Replay *moves* from a fresh initial position.

    Only ``template.config`` is carried over. By default the move list is
    trusted; with ``validate=True`` every move is checked first and an
    :class:`IllegalMoveError` is raised at the first illegal one.
    """
    timestamp = now_or_monotonic(now)
    position = new_position(template.config, now=timestamp)
    for ply, move in enumerate(moves):
        if validate:
            from pawnstorm.core.move_generator import MoveGenerator

            if not MoveGenerator(position).is_legal(move.from_sq, move.to_sq):
                _LOGGER.warning("Rejected replayed move %s at ply %d", move, ply)
                raise IllegalMoveError(ply, move)
        position = apply_move(position, move, now=timestamp)
    _LOGGER.debug("Rebuilt position from %d plies", position.ply)
    return position
