"""FEN import and export.

Positions do not track the halfmove clock; it is read and validated but
dropped, and written back as ``0``. The fullmove number is derived from
the move history.
"""

from __future__ import annotations

from itertools import groupby

from pawnstorm.core.board import Board
from pawnstorm.core.clock import now_or_monotonic
from pawnstorm.core.config import GameConfig
from pawnstorm.core.enums import CastlingRights, Color
from pawnstorm.core.piece import Piece
from pawnstorm.core.position import Position
from pawnstorm.core.types import Square, make_square, parse_square, rank_of, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}
_SIDES: dict[str, Color] = {"w": Color.WHITE, "b": Color.BLACK}
_SIDE_CHARS: dict[Color, str] = {color: ch for ch, color in _SIDES.items()}

# Rank an en-passant target sits on, keyed by the side that may capture.
_EP_RANK: dict[Color, int] = {Color.WHITE: 5, Color.BLACK: 2}


# ── Parsing ─────────────────────────────────────────────────────────────────


def _parse_rank(text: str, rank: int, fen: str) -> dict[Square, Piece]:
    pieces: dict[Square, Piece] = {}
    file = 0
    for ch in text:
        if file >= 8:
            raise ValueError(f"FEN rank {rank + 1} is wider than 8 squares: {fen!r}")
        if ch in "12345678":
            file += int(ch)
            continue
        if ch.isdigit():
            raise ValueError(f"Bad empty-square count {ch!r} in FEN: {fen!r}")
        pieces[make_square(file, rank)] = Piece.from_char(ch)
        file += 1
    if file != 8:
        raise ValueError(f"FEN rank {rank + 1} does not cover 8 squares: {fen!r}")
    return pieces


def _parse_board(placement: str, fen: str) -> Board:
    rows = placement.split("/")
    if len(rows) != 8:
        raise ValueError(f"FEN placement needs 8 ranks, got {len(rows)}: {fen!r}")
    pieces: dict[Square, Piece] = {}
    # Rows are listed from rank 8 down to rank 1.
    for rank, text in zip(range(7, -1, -1), rows):
        pieces.update(_parse_rank(text, rank, fen))
    return Board.from_mapping(pieces)


def _parse_castling(text: str) -> CastlingRights:
    if text == "-":
        return CastlingRights.NONE
    if len(set(text)) != len(text) or not set(text) <= _CASTLING_CHARS.keys():
        raise ValueError(f"Bad FEN castling field: {text!r}")
    rights = CastlingRights.NONE
    for ch in text:
        rights |= _CASTLING_CHARS[ch]
    return rights


def _parse_en_passant(text: str, side: Color) -> Square | None:
    if text == "-":
        return None
    sq = parse_square(text)
    if rank_of(sq) != _EP_RANK[side]:
        raise ValueError(f"En-passant square {text!r} does not fit side to move")
    return sq


def _check_counter(text: str, minimum: int, label: str) -> None:
    if not text.isdigit() or int(text) < minimum:
        raise ValueError(f"Bad FEN {label}: {text!r}")


def position_from_fen(
    fen: str,
    config: GameConfig | None = None,
    *,
    now: float | None = None,
) -> Position:
    """Parse *fen* into a :class:`Position` with full clocks and no history.

    Raises:
        ValueError: Any field is malformed.
    """
    fields = fen.split()
    if len(fields) not in (4, 5, 6):
        raise ValueError(f"FEN needs 4 to 6 fields, got {len(fields)}: {fen!r}")

    board = _parse_board(fields[0], fen)
    side = _SIDES.get(fields[1])
    if side is None:
        raise ValueError(f"Bad FEN side to move: {fields[1]!r}")
    castling = _parse_castling(fields[2])
    en_passant = _parse_en_passant(fields[3], side)
    for text, minimum, label in zip(
        fields[4:], (0, 1), ("halfmove clock", "fullmove number")
    ):
        _check_counter(text, minimum, label)

    config = config or GameConfig()
    initial = config.time_control.initial_seconds
    return Position(
        board=board,
        side_to_move=side,
        castling=castling,
        en_passant=en_passant,
        white_remaining=initial,
        black_remaining=initial,
        turn_started_at=now_or_monotonic(now),
        config=config,
    )


# ── Serialisation ───────────────────────────────────────────────────────────


def _format_rank(board: Board, rank: int) -> str:
    cells = [board[make_square(file, rank)] for file in range(8)]
    parts: list[str] = []
    for is_empty, run in groupby(cells, key=lambda piece: piece is None):
        group = list(run)
        parts.append(str(len(group)) if is_empty else "".join(map(str, group)))
    return "".join(parts)


def position_to_fen(pos: Position) -> str:
    """FEN for *pos*; halfmove clock ``0``, fullmove number from the history."""
    placement = "/".join(_format_rank(pos.board, rank) for rank in range(7, -1, -1))
    castling = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if pos.castling & right
    )
    en_passant = "-" if pos.en_passant is None else square_name(pos.en_passant)
    fullmove = 1 + pos.ply // 2
    return " ".join(
        (
            placement,
            _SIDE_CHARS[pos.side_to_move],
            castling or "-",
            en_passant,
            "0",
            str(fullmove),
        )
    )
