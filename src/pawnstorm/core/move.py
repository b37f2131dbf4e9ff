"""Move value object (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from pawnstorm.core.enums import PieceType
from pawnstorm.core.piece import piece_letter, piece_type_from_letter
from pawnstorm.core.types import Square, parse_square, square_name

DEFAULT_PROMOTION: Final = PieceType.QUEEN

_PROMOTABLE: frozenset[PieceType] = frozenset(
    (PieceType.KNIGHT, PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN)
)


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    ``promotion`` only matters when a pawn lands on its last rank; when it
    is ``None`` there the pawn becomes a queen.
    """

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None

    def __post_init__(self) -> None:
        if self.promotion is not None and self.promotion not in _PROMOTABLE:
            raise ValueError(f"Invalid promotion piece: {self.promotion!r}")

    @property
    def promotion_or_default(self) -> PieceType:
        return self.promotion if self.promotion is not None else DEFAULT_PROMOTION

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += piece_letter(self.promotion)
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)

    @classmethod
    def from_uci(cls, text: str) -> Move:
        """Parse ``e2e4`` / ``e7e8n`` style text."""
        if len(text) not in (4, 5):
            raise ValueError(f"Invalid UCI move: {text!r}")
        promotion = piece_type_from_letter(text[4]) if len(text) == 5 else None
        return cls(parse_square(text[:2]), parse_square(text[2:4]), promotion)
