"""Rules, positions and notation for pawnstorm (standard library only).

Quick start::

    from pawnstorm.core import MoveGenerator, new_position

    pos = new_position()
    for move in MoveGenerator(pos).generate_legal_moves():
        print(move)
"""

from pawnstorm.core.board import Board
from pawnstorm.core.clock import TimeControl, is_flag_fallen, remaining_time
from pawnstorm.core.config import GameConfig
from pawnstorm.core.enums import (
    CastlingRights,
    Color,
    GameResult,
    PieceType,
    SearchMode,
    Termination,
)
from pawnstorm.core.move import DEFAULT_PROMOTION, Move
from pawnstorm.core.move_generator import MoveGenerator, attacks, is_king_attacked
from pawnstorm.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from pawnstorm.core.piece import Piece
from pawnstorm.core.position import (
    IllegalMoveError,
    Position,
    apply_move,
    new_position,
    rebuild_from_history,
)
from pawnstorm.core.rules import Rules
from pawnstorm.core.types import (
    SQUARE_ORDER,
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "PieceType",
    "SearchMode",
    "Termination",
    # Types / helpers
    "SQUARE_ORDER",
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "DEFAULT_PROMOTION",
    "GameConfig",
    "IllegalMoveError",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    "TimeControl",
    # Transitions / queries
    "apply_move",
    "attacks",
    "is_flag_fallen",
    "is_king_attacked",
    "new_position",
    "rebuild_from_history",
    "remaining_time",
    # Notation
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
]
