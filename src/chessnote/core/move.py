"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessnote.core.enums import Color, PieceType
from chessnote.core.piece import Piece
from chessnote.core.types import Square

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}

KING_START_FILE = 4
SHORT_CASTLE_KING_FILE = 6
LONG_CASTLE_KING_FILE = 2


def castling_rank(color: Color) -> int:
    """Grid rank of *color*'s back rank (7 for White, 0 for Black)."""
    return 7 if color == Color.WHITE else 0


def _require_kind(piece: Piece, kind: PieceType, action: str) -> None:
    if piece.kind != kind:
        raise AssertionError(f"Attempt to {action} with a {piece.kind.name.lower()}")


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    Equality is structural over every field; :attr:`uci` identifies a move
    uniquely within one position.
    """

    piece: Piece
    start: Square
    end: Square
    is_capture: bool = False
    is_castle_short: bool = False
    is_castle_long: bool = False
    is_en_passant: bool = False
    promotion: PieceType | None = None

    # ── Special-move factories ───────────────────────────────────────────

    @classmethod
    def castle_short(cls, piece: Piece) -> Move:
        _require_kind(piece, PieceType.KING, "castle short")
        rank = castling_rank(piece.color)
        return cls(
            piece,
            Square(rank, KING_START_FILE),
            Square(rank, SHORT_CASTLE_KING_FILE),
            is_castle_short=True,
        )

    @classmethod
    def castle_long(cls, piece: Piece) -> Move:
        _require_kind(piece, PieceType.KING, "castle long")
        rank = castling_rank(piece.color)
        return cls(
            piece,
            Square(rank, KING_START_FILE),
            Square(rank, LONG_CASTLE_KING_FILE),
            is_castle_long=True,
        )

    @classmethod
    def en_passant(cls, piece: Piece, start: Square, end: Square) -> Move:
        """*end* is where the pawn lands, not the captured pawn's square."""
        _require_kind(piece, PieceType.PAWN, "capture en passant")
        return cls(piece, start, end, is_capture=True, is_en_passant=True)

    @classmethod
    def promoting(
        cls,
        piece: Piece,
        kind: PieceType,
        start: Square,
        end: Square,
        is_capture: bool = False,
    ) -> Move:
        _require_kind(piece, PieceType.PAWN, "promote")
        if kind not in _PROMO_CHARS:
            raise AssertionError(f"Cannot promote to {kind.name.lower()}")
        return cls(piece, start, end, is_capture=is_capture, promotion=kind)

    # ── Display ──────────────────────────────────────────────────────────

    @property
    def is_castle(self) -> bool:
        return self.is_castle_short or self.is_castle_long

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation, e.g. ``e7e8q``."""
        base = f"{self.start.name}{self.end.name}"
        if self.promotion is not None:
            base += _PROMO_CHARS[self.promotion]
        return base

    def __str__(self) -> str:
        return self.uci
