"""Squares and coordinate helpers.

A square is an ``int`` equal to ``rank * 8 + file``: a1 is 0, h1 is 7,
a2 is 8 and h8 is 63.

Move generation walks squares in a different order, file by file
(a1, a2, ..., a8, b1, ..., h8); see :data:`SQUARE_ORDER`.
"""

from __future__ import annotations

from typing import Final, TypeAlias

Square: TypeAlias = int

FILES: Final = "abcdefgh"
RANKS: Final = "12345678"


def file_of(sq: Square) -> int:
    return sq % 8


def rank_of(sq: Square) -> int:
    return sq // 8


def make_square(file: int, rank: int) -> Square:
    """Square from zero-based *file* and *rank*."""
    return rank * 8 + file


def square_name(sq: Square) -> str:
    """Algebraic name of *sq*, e.g. ``28`` → ``'e4'``."""
    return FILES[file_of(sq)] + RANKS[rank_of(sq)]


def parse_square(name: str) -> Square:
    """Inverse of :func:`square_name`.

    Raises:
        ValueError: *name* is not a lowercase algebraic square.
    """
    if len(name) == 2 and name[0] in FILES and name[1] in RANKS:
        return make_square(FILES.index(name[0]), RANKS.index(name[1]))
    raise ValueError(f"Not a square: {name!r}")


# Files a..h outer, ranks 1..8 inner. Search move ordering (and therefore
# tie-breaking between equally scored moves) follows this sequence.
SQUARE_ORDER: Final[tuple[Square, ...]] = tuple(
    make_square(f, r) for f in range(8) for r in range(8)
)


# ── Named squares ───────────────────────────────────────────────────────────

(A1, B1, C1, D1, E1, F1, G1, H1,
 A2, B2, C2, D2, E2, F2, G2, H2,
 A3, B3, C3, D3, E3, F3, G3, H3,
 A4, B4, C4, D4, E4, F4, G4, H4,
 A5, B5, C5, D5, E5, F5, G5, H5,
 A6, B6, C6, D6, E6, F6, G6, H6,
 A7, B7, C7, D7, E7, F7, G7, H7,
 A8, B8, C8, D8, E8, F8, G8, H8) = range(64)  # fmt: skip
