"""pawnstorm: chess rules, static evaluation and move search.

The functions here are the surface a game loop, renderer or save-file
layer talks to. Everything operates on immutable :class:`Position`
values; nothing is modified in place.

Quick start::

    import pawnstorm

    pos = pawnstorm.new_position(pawnstorm.TimeControl.blitz_3m())
    move = pawnstorm.choose_move(pos, "minimax", 2)
    if isinstance(move, pawnstorm.Move):
        pos = pawnstorm.apply_move(pos, move)
"""

from __future__ import annotations

from pawnstorm.core import (
    Board,
    Color,
    GameConfig,
    IllegalMoveError,
    Move,
    MoveGenerator,
    Piece,
    PieceType,
    Position,
    Rules,
    SearchMode,
    Square,
    TimeControl,
    apply_move,
    new_position,
    rebuild_from_history,
)
from pawnstorm.engine import NoLegalMove, choose_move, evaluate


def is_legal(position: Position, from_sq: Square, to_sq: Square) -> bool:
    """Is moving the piece on *from_sq* to *to_sq* legal for the side to move?"""
    return MoveGenerator(position).is_legal(from_sq, to_sq)


def generate_legal_moves(position: Position, color: Color | None = None) -> list[Move]:
    return MoveGenerator(position).generate_legal_moves(color)


def in_check(position: Position, color: Color | None = None) -> bool:
    return Rules.is_in_check(position, color)


def is_checkmate(position: Position, color: Color | None = None) -> bool:
    return Rules.is_checkmate(position, color)


def is_stalemate(position: Position, color: Color | None = None) -> bool:
    return Rules.is_stalemate(position, color)


__all__ = [
    "Board",
    "Color",
    "GameConfig",
    "IllegalMoveError",
    "Move",
    "NoLegalMove",
    "Piece",
    "PieceType",
    "Position",
    "SearchMode",
    "TimeControl",
    "apply_move",
    "choose_move",
    "evaluate",
    "generate_legal_moves",
    "in_check",
    "is_checkmate",
    "is_legal",
    "is_stalemate",
    "new_position",
    "rebuild_from_history",
]
