"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from pawnstorm.core.enums import Color, PieceType

_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_TYPES_BY_LETTER: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}

# Index = piece_type - 1
_WHITE_GLYPHS = "♙♘♗♖♕♔"
_BLACK_GLYPHS = "♟♞♝♜♛♚"


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece."""

    color: Color
    piece_type: PieceType

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        letter = _LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        ptype = _TYPES_BY_LETTER.get(char.lower()) if len(char) == 1 else None
        if ptype is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        return cls(Color.WHITE if char.isupper() else Color.BLACK, ptype)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        glyphs = _WHITE_GLYPHS if self.color == Color.WHITE else _BLACK_GLYPHS
        return glyphs[int(self.piece_type) - 1]


def piece_letter(piece_type: PieceType) -> str:
    """Lowercase letter used for *piece_type* in FEN and UCI promotions."""
    return _LETTERS[piece_type]


def piece_type_from_letter(letter: str) -> PieceType:
    try:
        return _TYPES_BY_LETTER[letter.lower()]
    except KeyError:
        raise ValueError(f"Invalid piece letter: {letter!r}") from None
