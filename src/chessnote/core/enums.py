"""Core enumerations and flags for chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, StrEnum, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def letter(self) -> str:
        """Uppercase SAN letter, e.g. ``N``; empty for pawns."""
        return _PIECE_LETTERS[self]

    @classmethod
    def from_letter(cls, letter: str) -> PieceType:
        """Piece type for a SAN/UCI letter in either case (``"q"`` → QUEEN)."""
        try:
            return _LETTER_PIECES[letter.upper()]
        except KeyError:
            raise ValueError(f"Invalid piece letter: {letter!r}") from None


_PIECE_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_LETTER_PIECES: dict[str, PieceType] = {
    v: k for k, v in _PIECE_LETTERS.items() if v
} | {"P": PieceType.PAWN}


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @classmethod
    def kingside(cls, color: Color) -> CastlingRights:
        return cls.WHITE_KINGSIDE if color == Color.WHITE else cls.BLACK_KINGSIDE

    @classmethod
    def queenside(cls, color: Color) -> CastlingRights:
        return cls.WHITE_QUEENSIDE if color == Color.WHITE else cls.BLACK_QUEENSIDE

    @classmethod
    def both(cls, color: Color) -> CastlingRights:
        return cls.WHITE_BOTH if color == Color.WHITE else cls.BLACK_BOTH


class GameTermination(StrEnum):
    """Game termination marker as written at the end of PGN movetext."""

    WHITE_WIN = "1-0"
    BLACK_WIN = "0-1"
    DRAW = "1/2-1/2"
    UNKNOWN = "*"

    @classmethod
    def from_token(cls, token: str) -> GameTermination:
        """Map a PGN result token to a termination; unknown tokens map to ``*``."""
        try:
            return cls(token)
        except ValueError:
            return cls.UNKNOWN
