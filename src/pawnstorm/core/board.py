"""Board - immutable piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from pawnstorm.core.enums import Color, PieceType
from pawnstorm.core.piece import Piece
from pawnstorm.core.types import SQUARE_ORDER, Square, make_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Immutable 64-square board.

    Every "change" goes through :meth:`with_changes`, which copies the
    square tuple once and leaves the original untouched, so any number of
    scratch boards can be derived from one shown to the player.
    """

    __slots__ = ("_squares", "_king_squares", "_hash")

    def __init__(self, squares: tuple[Piece | None, ...] | None = None) -> None:
        if squares is None:
            squares = (None,) * 64
        elif len(squares) != 64:
            raise ValueError(f"Board needs 64 squares, got {len(squares)}")
        self._squares = squares
        kings: list[Square | None] = [None, None]
        for sq, piece in enumerate(squares):
            if piece is not None and piece.piece_type == PieceType.KING:
                kings[int(piece.color)] = sq
        self._king_squares = (kings[0], kings[1])
        self._hash: int | None = None

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    def items(self) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares with their pieces, in enumeration order."""
        squares = self._squares
        for sq in SQUARE_ORDER:
            piece = squares[sq]
            if piece is not None:
                yield sq, piece

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        target = Piece(color, piece_type)
        return [sq for sq in SQUARE_ORDER if self._squares[sq] == target]

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*, in enumeration order."""
        squares = self._squares
        return [
            sq
            for sq in SQUARE_ORDER
            if (piece := squares[sq]) is not None and piece.color == color
        ]

    def has_piece(self, color: Color, piece_type: PieceType) -> bool:
        """Whether *color* has at least one piece of *piece_type*."""
        return Piece(color, piece_type) in self._squares

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` on a king-less board."""
        return self._king_squares[int(color)]

    # -- Deriving new boards ------------------------------------------------

    def with_changes(self, changes: Mapping[Square, Piece | None]) -> Board:
        """New board with *changes* applied (``None`` empties a square)."""
        squares = list(self._squares)
        for sq, piece in changes.items():
            squares[sq] = piece
        return Board(tuple(squares))

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        placement: dict[Square, Piece | None] = {}
        for f, pt in enumerate(_BACK_RANK):
            placement[make_square(f, 0)] = Piece(Color.WHITE, pt)
            placement[make_square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            placement[make_square(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)
            placement[make_square(f, 7)] = Piece(Color.BLACK, pt)
        return cls().with_changes(placement)

    @classmethod
    def from_mapping(cls, placement: Mapping[Square, Piece]) -> Board:
        return cls().with_changes(placement)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Board):
            return self._squares == other._squares
        return NotImplemented

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(self._squares)
        return self._hash

    def __repr__(self) -> str:
        lines = [
            f"{rank + 1} "
            + " ".join(str(self[make_square(f, rank)] or ".") for f in range(8))
            for rank in reversed(range(8))
        ]
        return "\n".join([*lines, "  a b c d e f g h"])
