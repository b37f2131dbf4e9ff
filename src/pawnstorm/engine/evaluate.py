"""Static evaluation: material, piece-square tables and pawn structure.

Scores are integers from White's point of view (a pawn is worth 10).
"""

from __future__ import annotations

from typing import Final

from pawnstorm.core.board import Board
from pawnstorm.core.enums import Color, PieceType
from pawnstorm.core.types import Square, file_of, make_square, rank_of

PIECE_VALUES: Final[dict[PieceType, int]] = {
    PieceType.PAWN: 10,
    PieceType.KNIGHT: 30,
    PieceType.BISHOP: 30,
    PieceType.ROOK: 50,
    PieceType.QUEEN: 90,
    PieceType.KING: 900,
}

DOUBLED_PAWN_PENALTY: Final = 3
ISOLATED_PAWN_PENALTY: Final = 2
KING_SHIELD_BONUS: Final = 2
# Indexed by relative rank 1..8 (position 0 is rank 1); a pawn on rank 8
# has already promoted, so the last entry never applies.
PASSED_PAWN_BONUS: Final[tuple[int, ...]] = (0, 1, 2, 4, 7, 12, 20, 0)

# fmt: off
# Piece-square tables from White's side: first row is rank 8, last is rank 1.
# Black reads the same tables mirrored vertically.
PAWN_TABLE: Final = (
    (0,  0,  0,  0,  0,  0,  0,  0),
    (5,  5,  5,  5,  5,  5,  5,  5),
    (1,  1,  2,  3,  3,  2,  1,  1),
    (1,  1,  1,  3,  3,  1,  1,  1),
    (0,  0,  0,  2,  2,  0,  0,  0),
    (1, -1, -1,  0,  0, -1, -1,  1),
    (1,  1,  1, -2, -2,  1,  1,  1),
    (0,  0,  0,  0,  0,  0,  0,  0),
)

KNIGHT_TABLE: Final = (
    (-5, -4, -3, -3, -3, -3, -4, -5),
    (-4, -2,  0,  0,  0,  0, -2, -4),
    (-3,  0,  1,  2,  2,  1,  0, -3),
    (-3,  1,  2,  2,  2,  2,  1, -3),
    (-3,  0,  2,  2,  2,  2,  0, -3),
    (-3,  1,  1,  2,  2,  1,  1, -3),
    (-4, -2,  0,  1,  1,  0, -2, -4),
    (-5, -4, -3, -3, -3, -3, -4, -5),
)

BISHOP_TABLE: Final = (
    (-2, -1, -1, -1, -1, -1, -1, -2),
    (-1,  0,  0,  0,  0,  0,  0, -1),
    (-1,  0,  1,  1,  1,  1,  0, -1),
    (-1,  1,  1,  1,  1,  1,  1, -1),
    (-1,  0,  1,  1,  1,  1,  0, -1),
    (-1,  1,  1,  1,  1,  1,  1, -1),
    (-1,  1,  0,  0,  0,  0,  1, -1),
    (-2, -1, -1, -1, -1, -1, -1, -2),
)

ROOK_TABLE: Final = (
    ( 0,  0,  0,  0,  0,  0,  0,  0),
    ( 1,  1,  1,  1,  1,  1,  1,  1),
    (-1,  0,  0,  0,  0,  0,  0, -1),
    (-1,  0,  0,  0,  0,  0,  0, -1),
    (-1,  0,  0,  0,  0,  0,  0, -1),
    (-1,  0,  0,  0,  0,  0,  0, -1),
    (-1,  0,  0,  0,  0,  0,  0, -1),
    ( 0,  0,  0,  1,  1,  0,  0,  0),
)

QUEEN_TABLE: Final = (
    (-2, -1, -1, -1, -1, -1, -1, -2),
    (-1,  0,  0,  0,  0,  0,  0, -1),
    (-1,  0,  1,  1,  1,  1,  0, -1),
    (-1,  0,  1,  1,  1,  1,  0, -1),
    ( 0,  0,  1,  1,  1,  1,  0, -1),
    (-1,  1,  1,  1,  1,  1,  0, -1),
    (-1,  0,  1,  0,  0,  0,  0, -1),
    (-2, -1, -1, -1, -1, -1, -1, -2),
)

# Middlegame: stay home behind the pawns.
KING_MIDDLEGAME_TABLE: Final = (
    (-3, -4, -4, -5, -5, -4, -4, -3),
    (-3, -4, -4, -5, -5, -4, -4, -3),
    (-3, -4, -4, -5, -5, -4, -4, -3),
    (-3, -4, -4, -5, -5, -4, -4, -3),
    (-2, -3, -3, -4, -4, -3, -3, -2),
    (-1, -2, -2, -2, -2, -2, -2, -1),
    ( 2,  2,  0,  0,  0,  0,  2,  2),
    ( 2,  3,  1,  0,  0,  1,  3,  2),
)

# Endgame: walk to the centre.
KING_ENDGAME_TABLE: Final = (
    (-5, -4, -3, -2, -2, -3, -4, -5),
    (-3, -2, -1,  0,  0, -1, -2, -3),
    (-3, -1,  2,  3,  3,  2, -1, -3),
    (-3, -1,  3,  4,  4,  3, -1, -3),
    (-3, -1,  3,  4,  4,  3, -1, -3),
    (-3, -1,  2,  3,  3,  2, -1, -3),
    (-3, -3,  0,  0,  0,  0, -3, -3),
    (-5, -3, -3, -3, -3, -3, -3, -5),
)
# fmt: on

_PIECE_TABLES: Final = {
    PieceType.PAWN: PAWN_TABLE,
    PieceType.KNIGHT: KNIGHT_TABLE,
    PieceType.BISHOP: BISHOP_TABLE,
    PieceType.ROOK: ROOK_TABLE,
    PieceType.QUEEN: QUEEN_TABLE,
}


def _sign(color: Color) -> int:
    return 1 if color == Color.WHITE else -1


def relative_rank(color: Color, sq: Square) -> int:
    """Rank 1..8 as seen from *color*'s side of the board."""
    rank = rank_of(sq)
    return rank + 1 if color == Color.WHITE else 8 - rank


def table_value(table: tuple[tuple[int, ...], ...], color: Color, sq: Square) -> int:
    row = 7 - rank_of(sq) if color == Color.WHITE else rank_of(sq)
    return table[row][file_of(sq)]


class Evaluator:
    """Deterministic static scorer.

    Each term is exposed separately; :meth:`evaluate` adds them up with
    White's terms positive and Black's negative.
    """

    def evaluate(self, board: Board) -> int:
        score = self.material(board) + self.positional(board)
        for color in (Color.WHITE, Color.BLACK):
            structure = self.pawn_structure(board, color) + self.king_shield(
                board, color
            )
            score += _sign(color) * structure
        return score

    # ── Game phase ───────────────────────────────────────────────────────

    @staticmethod
    def is_endgame(board: Board) -> bool:
        """Endgame once both queens are off the board."""
        return not (
            board.has_piece(Color.WHITE, PieceType.QUEEN)
            or board.has_piece(Color.BLACK, PieceType.QUEEN)
        )

    # ── Material and placement ───────────────────────────────────────────

    @staticmethod
    def material(board: Board) -> int:
        return sum(
            _sign(piece.color) * PIECE_VALUES[piece.piece_type]
            for _, piece in board.items()
        )

    def positional(self, board: Board) -> int:
        king_table = (
            KING_ENDGAME_TABLE if self.is_endgame(board) else KING_MIDDLEGAME_TABLE
        )
        score = 0
        for sq, piece in board.items():
            if piece.piece_type == PieceType.KING:
                table = king_table
            else:
                table = _PIECE_TABLES[piece.piece_type]
            score += _sign(piece.color) * table_value(table, piece.color, sq)
        return score

    # ── Pawn structure ───────────────────────────────────────────────────

    def pawn_structure(self, board: Board, color: Color) -> int:
        """Doubled/isolated penalties and passed-pawn bonuses for *color*."""
        own = board.pieces(color, PieceType.PAWN)
        enemy = board.pieces(color.opposite, PieceType.PAWN)

        per_file = [0] * 8
        for sq in own:
            per_file[file_of(sq)] += 1

        score = 0
        for file, count in enumerate(per_file):
            if count > 1:
                score -= DOUBLED_PAWN_PENALTY * (count - 1)
            if count:
                left = per_file[file - 1] if file > 0 else 0
                right = per_file[file + 1] if file < 7 else 0
                if not left and not right:
                    score -= ISOLATED_PAWN_PENALTY * count

        for sq in own:
            if self.is_passed_pawn(sq, color, enemy):
                score += PASSED_PAWN_BONUS[relative_rank(color, sq) - 1]
        return score

    @staticmethod
    def is_passed_pawn(sq: Square, color: Color, enemy_pawns: list[Square]) -> bool:
        """No enemy pawn on this or an adjacent file at or ahead of *sq*."""
        file = file_of(sq)
        rank = rank_of(sq)
        for other in enemy_pawns:
            if abs(file_of(other) - file) > 1:
                continue
            other_rank = rank_of(other)
            if color == Color.WHITE and other_rank >= rank:
                return False
            if color == Color.BLACK and other_rank <= rank:
                return False
        return True

    @staticmethod
    def king_shield(board: Board, color: Color) -> int:
        """Bonus per friendly pawn directly in front of a king still at home."""
        king_sq = board.king_square(color)
        if king_sq is None or relative_rank(color, king_sq) > 2:
            return 0
        shield_rank = rank_of(king_sq) + color.forward
        if not 0 <= shield_rank < 8:
            return 0
        file = file_of(king_sq)
        own_pawn = (color, PieceType.PAWN)
        count = 0
        for f in range(max(0, file - 1), min(7, file + 1) + 1):
            piece = board[make_square(f, shield_rank)]
            if piece is not None and (piece.color, piece.piece_type) == own_pawn:
                count += 1
        return KING_SHIELD_BONUS * count


_DEFAULT_EVALUATOR = Evaluator()


def evaluate(board: Board) -> int:
    """Static score of *board*; positive favours White."""
    return _DEFAULT_EVALUATOR.evaluate(board)
