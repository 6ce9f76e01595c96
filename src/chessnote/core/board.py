"""Board - immutable piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from chessnote.core.enums import Color, PieceType
from chessnote.core.piece import Piece
from chessnote.core.types import Square

Grid = tuple[tuple[Piece | None, ...], ...]

_EMPTY_ROW: tuple[Piece | None, ...] = (None,) * 8

_BACK_RANK = (
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
    """Immutable 8x8 grid; row 0 is the 8th rank.

    Changes produce a new board via :meth:`with_pieces`.
    """

    __slots__ = ("_grid", "_king_squares")

    def __init__(self, grid: Grid | None = None) -> None:
        if grid is None:
            grid = (_EMPTY_ROW,) * 8
        if len(grid) != 8 or any(len(row) != 8 for row in grid):
            raise ValueError("Board grid must be 8x8")
        self._grid: Grid = tuple(tuple(row) for row in grid)
        # [color] -> king square cache (None if king missing).
        kings: list[Square | None] = [None, None]
        for sq, piece in self.occupied():
            if piece.kind == PieceType.KING:
                kings[int(piece.color)] = sq
        self._king_squares: tuple[Square | None, ...] = tuple(kings)

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._grid[sq.rank][sq.file]

    def piece_at(self, rank: int, file: int) -> Piece | None:
        """Piece at (*rank*, *file*), or ``None`` if empty or off the board."""
        if 0 <= rank < 8 and 0 <= file < 8:
            return self._grid[rank][file]
        return None

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    @property
    def grid(self) -> Grid:
        """Read-only 8x8 grid for renderers."""
        return self._grid

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """All (square, piece) pairs, rank-major from a8."""
        for rank, row in enumerate(self._grid):
            for file, piece in enumerate(row):
                if piece is not None:
                    yield Square(rank, file), piece

    def pieces(self, color: Color) -> list[tuple[Square, Piece]]:
        """All of *color*'s pieces with their squares."""
        return [(sq, p) for sq, p in self.occupied() if p.color == color]

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` if it is missing."""
        return self._king_squares[int(color)]

    # -- Derivation ---------------------------------------------------------

    def with_pieces(self, changes: Mapping[Square, Piece | None]) -> Board:
        """New board with *changes* applied (``None`` empties a square)."""
        rows = [list(row) for row in self._grid]
        for sq, piece in changes.items():
            rows[sq.rank][sq.file] = piece
        return Board(tuple(tuple(row) for row in rows))

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        rows: list[tuple[Piece | None, ...]] = [_EMPTY_ROW] * 8
        rows[0] = tuple(Piece(Color.BLACK, pt) for pt in _BACK_RANK)
        rows[1] = (Piece(Color.BLACK, PieceType.PAWN),) * 8
        rows[6] = (Piece(Color.WHITE, PieceType.PAWN),) * 8
        rows[7] = tuple(Piece(Color.WHITE, pt) for pt in _BACK_RANK)
        return cls(tuple(rows))

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __hash__(self) -> int:
        return hash(self._grid)

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank, row in enumerate(self._grid):
            cells = [str(p) if p else "." for p in row]
            rows.append(f"{8 - rank} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
