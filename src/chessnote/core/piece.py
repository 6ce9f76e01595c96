"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessnote.core.enums import Color, PieceType
from chessnote.core.errors import MalformedInput


@dataclass(frozen=True, slots=True)
class Piece:
    """A coloured piece; prints as its FEN letter."""

    color: Color
    kind: PieceType

    @property
    def fen_letter(self) -> str:
        """SAN letter in White's case, lowercased for Black; pawns are ``P``."""
        letter = self.kind.letter or "P"
        return letter if self.color == Color.WHITE else letter.lower()

    def __str__(self) -> str:
        return self.fen_letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Piece for a FEN letter, e.g. ``'n'`` → black knight.

        Raises:
            MalformedInput: *char* is not one of ``PNBRQKpnbrqk``.
        """
        try:
            kind = PieceType.from_letter(char)
        except ValueError:
            raise MalformedInput(f"Invalid piece character: {char!r}") from None
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, kind)
