"""Square value type and coordinate helpers.

Board layout follows the printed diagram, top row first:
    rank 0 = 8th rank (a8..h8)
    rank 7 = 1st rank (a1..h1)
    file 0 = a-file, file 7 = h-file
"""

from __future__ import annotations

from dataclasses import dataclass

_FILES = "abcdefgh"
_RANKS = "87654321"


@dataclass(frozen=True, slots=True, order=True)
class Square:
    """Immutable (rank, file) coordinate; rank 0 is the 8th rank."""

    rank: int
    file: int

    @property
    def is_valid(self) -> bool:
        return 0 <= self.rank < 8 and 0 <= self.file < 8

    def offset(self, d_rank: int, d_file: int) -> Square:
        """Square shifted by the given deltas (may be off the board)."""
        return Square(self.rank + d_rank, self.file + d_file)

    # ── Notation ─────────────────────────────────────────────────────────

    @property
    def file_name(self) -> str:
        return _FILES[self.file]

    @property
    def rank_name(self) -> str:
        return _RANKS[self.rank]

    @property
    def name(self) -> str:
        """Algebraic name, e.g. ``Square(4, 4)`` → ``'e4'``."""
        return self.file_name + self.rank_name

    def __str__(self) -> str:
        return self.name


def parse_square(name: str) -> Square:
    """Parse square name, e.g. ``'e4'`` → ``Square(rank=4, file=4)``."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(_RANKS.index(name[1]), _FILES.index(name[0]))


def square_name(sq: Square) -> str:
    return sq.name


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = (Square(0, f) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(1, f) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(2, f) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(3, f) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(4, f) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(5, f) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(6, f) for f in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = (Square(7, f) for f in range(8))
