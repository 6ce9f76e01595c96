"""Position: immutable game state (board + metadata) with move application."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from chessnote.core.board import Board
from chessnote.core.enums import CastlingRights, Color, PieceType
from chessnote.core.errors import IllegalMove
from chessnote.core.move import Move, castling_rank
from chessnote.core.piece import Piece
from chessnote.core.types import Square

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    Square(7, 0): CastlingRights.WHITE_QUEENSIDE,
    Square(7, 7): CastlingRights.WHITE_KINGSIDE,
    Square(0, 0): CastlingRights.BLACK_QUEENSIDE,
    Square(0, 7): CastlingRights.BLACK_KINGSIDE,
}


@dataclass(frozen=True, slots=True)
class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    Positions are never mutated: :meth:`apply_move` returns a new one, so a
    position can be shared freely between game-tree nodes and threads. The
    SAN → :class:`Move` table of legal moves is computed on first access and
    cached for the lifetime of the position.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1
    _legal_moves: Mapping[str, Move] | None = field(
        default=None, init=False, repr=False, compare=False
    )

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position."""
        return cls()

    # ── Legal-moves table ────────────────────────────────────────────────

    @property
    def legal_moves(self) -> Mapping[str, Move]:
        """Read-only mapping of unique SAN keys to the legal moves here."""
        table = self._legal_moves
        if table is None:
            from chessnote.core.notation.san import san_table

            table = MappingProxyType(san_table(self))
            object.__setattr__(self, "_legal_moves", table)
        return table

    def san_for(self, move: Move) -> str | None:
        """SAN key of *move*, or ``None`` if it is not legal here."""
        for san, legal in self.legal_moves.items():
            if legal == move:
                return san
        return None

    def is_in_check(self, color: Color | None = None) -> bool:
        """Is *color*'s (default: side to move) king attacked?"""
        from chessnote.core.move_generator import MoveGenerator

        return MoveGenerator(self).is_in_check(
            self.side_to_move if color is None else color
        )

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> Position:
        """Return the position after *move*.

        The move is not checked for legality; callers pick moves from
        :attr:`legal_moves` or the move generator.
        """
        piece = self.board[move.start]
        if piece is None:
            raise IllegalMove(f"No piece on {move.start}")

        captured = self.board[move.end]
        changes: dict[Square, Piece | None] = {move.start: None, move.end: piece}

        # En passant: the captured pawn sits behind the landing square
        if move.is_en_passant:
            behind = move.end.offset(1 if piece.color == Color.WHITE else -1, 0)
            captured = self.board[behind]
            changes[behind] = None

        if move.promotion is not None:
            changes[move.end] = Piece(piece.color, move.promotion)

        # Slide the rook for castling
        if move.is_castle_short or move.is_castle_long:
            rank = castling_rank(piece.color)
            rook_from, rook_to = (7, 5) if move.is_castle_short else (0, 3)
            changes[Square(rank, rook_to)] = self.board.piece_at(rank, rook_from)
            changes[Square(rank, rook_from)] = None

        # En passant target for the opponent
        next_en_passant: Square | None = None
        if piece.kind == PieceType.PAWN and abs(move.end.rank - move.start.rank) == 2:
            next_en_passant = Square(
                (move.start.rank + move.end.rank) // 2, move.start.file
            )

        # Clocks
        if piece.kind == PieceType.PAWN or captured is not None:
            halfmove_clock = 0
        else:
            halfmove_clock = self.halfmove_clock + 1

        fullmove_number = self.fullmove_number
        if self.side_to_move == Color.BLACK:
            fullmove_number += 1

        return Position(
            board=self.board.with_pieces(changes),
            side_to_move=self.side_to_move.opposite,
            castling=self._castling_after(move, piece),
            en_passant=next_en_passant,
            halfmove_clock=halfmove_clock,
            fullmove_number=fullmove_number,
        )

    # ── Castling bookkeeping ─────────────────────────────────────────────

    def _castling_after(self, move: Move, piece: Piece) -> CastlingRights:
        next_castling = self.castling
        if piece.kind == PieceType.KING:
            next_castling &= ~CastlingRights.both(piece.color)

        # Leaving a rook corner, or capturing whatever stands on one.
        for sq in (move.start, move.end):
            if sq in _ROOK_CORNERS:
                next_castling &= ~_ROOK_CORNERS[sq]
        return next_castling

    def __str__(self) -> str:
        from chessnote.core.notation.fen import position_to_fen

        return position_to_fen(self)
