"""Legal and pseudo-legal move generation + check detection."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from chessnote.core.enums import CastlingRights, Color, PieceType
from chessnote.core.move import Move, castling_rank
from chessnote.core.piece import Piece
from chessnote.core.types import Square

if TYPE_CHECKING:
    from chessnote.core.position import Position


# (d_rank, d_file) offsets
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = ROOK_DIRS + BISHOP_DIRS
KING_OFFSETS: tuple[tuple[int, int], ...] = QUEEN_DIRS

_PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
)

# Files strictly between king and rook, and the king's first step.
_SHORT_BETWEEN_FILES = (5, 6)
_LONG_BETWEEN_FILES = (1, 2, 3)
_SHORT_TRANSIT_FILE = 5
_LONG_TRANSIT_FILE = 3


def pawn_direction(color: Color) -> int:
    """Rank delta of a forward pawn step (White moves toward rank 0)."""
    return -1 if color == Color.WHITE else 1


def _home_rank(color: Color) -> int:
    return 6 if color == Color.WHITE else 1


def _last_rank(color: Color) -> int:
    return 0 if color == Color.WHITE else 7


class MoveGenerator:
    """Generates moves for a given immutable :class:`Position`.

    Legality is tested by applying each candidate to get a new position and
    looking for check there; the source position is never touched.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        mover = self._pos.side_to_move
        return [
            move
            for move in self.generate_pseudo_legal_moves()
            if not MoveGenerator(self._pos.apply_move(move)).is_in_check(mover)
        ]

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        moves: list[Move] = []
        color = self._pos.side_to_move

        for sq, piece in self._board.pieces(color):
            match piece.kind:
                case PieceType.PAWN:
                    moves.extend(self._gen_pawn(sq, piece))
                case PieceType.KNIGHT:
                    moves.extend(self._gen_steps(sq, piece, KNIGHT_OFFSETS))
                case PieceType.BISHOP:
                    moves.extend(self._gen_sliding(sq, piece, BISHOP_DIRS))
                case PieceType.ROOK:
                    moves.extend(self._gen_sliding(sq, piece, ROOK_DIRS))
                case PieceType.QUEEN:
                    moves.extend(self._gen_sliding(sq, piece, QUEEN_DIRS))
                case PieceType.KING:
                    moves.extend(self._gen_steps(sq, piece, KING_OFFSETS))
                    moves.extend(self._gen_castling(piece))
        return moves

    # -- Check detection (public) ------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?

        A missing king counts as being in check.
        """
        king_sq = self._board.king_square(color)
        if king_sq is None:
            return True
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        board = self._board

        for dirs, sliders in (
            (ROOK_DIRS, (PieceType.ROOK, PieceType.QUEEN)),
            (BISHOP_DIRS, (PieceType.BISHOP, PieceType.QUEEN)),
        ):
            for d_rank, d_file in dirs:
                target = sq.offset(d_rank, d_file)
                while target.is_valid:
                    piece = board[target]
                    if piece is not None:
                        if piece.color == by_color and piece.kind in sliders:
                            return True
                        break
                    target = target.offset(d_rank, d_file)

        if self._any_at(sq, KNIGHT_OFFSETS, Piece(by_color, PieceType.KNIGHT)):
            return True

        if self._any_at(sq, KING_OFFSETS, Piece(by_color, PieceType.KING)):
            return True

        # An attacking pawn stands one step "behind" sq from its own viewpoint.
        back = -pawn_direction(by_color)
        return self._any_at(
            sq, ((back, -1), (back, 1)), Piece(by_color, PieceType.PAWN)
        )

    def _any_at(
        self, sq: Square, offsets: tuple[tuple[int, int], ...], wanted: Piece
    ) -> bool:
        board = self._board
        for d_rank, d_file in offsets:
            target = sq.offset(d_rank, d_file)
            if target.is_valid and board[target] == wanted:
                return True
        return False

    # -- Destination filter -------------------------------------------------

    def _destination(self, sq: Square, color: Color) -> tuple[bool, bool]:
        """``(is_valid, is_capture)`` for moving a *color* piece to *sq*.

        Squares holding the enemy king are never valid destinations.
        """
        if not sq.is_valid:
            return False, False
        target = self._board[sq]
        if target is None:
            return True, False
        if target.color != color and target.kind != PieceType.KING:
            return True, True
        return False, False

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, piece: Piece) -> Iterator[Move]:
        color = piece.color
        step = pawn_direction(color)
        promotes = sq.rank + step == _last_rank(color)

        one_step = sq.offset(step, 0)
        valid, capture = self._destination(one_step, color)
        if valid and not capture:
            if promotes:
                for pt in _PROMOTION_TYPES:
                    yield Move.promoting(piece, pt, sq, one_step)
            else:
                yield Move(piece, sq, one_step)
                two_step = sq.offset(2 * step, 0)
                if sq.rank == _home_rank(color):
                    valid, capture = self._destination(two_step, color)
                    if valid and not capture:
                        yield Move(piece, sq, two_step)

        for d_file in (-1, 1):
            cap_sq = sq.offset(step, d_file)
            valid, capture = self._destination(cap_sq, color)
            if valid and capture:
                if promotes:
                    for pt in _PROMOTION_TYPES:
                        yield Move.promoting(piece, pt, sq, cap_sq, is_capture=True)
                else:
                    yield Move(piece, sq, cap_sq, is_capture=True)
            elif cap_sq == self._pos.en_passant and self._board[cap_sq] is None:
                yield Move.en_passant(piece, sq, cap_sq)

    def _gen_steps(
        self, sq: Square, piece: Piece, offsets: tuple[tuple[int, int], ...]
    ) -> Iterator[Move]:
        for d_rank, d_file in offsets:
            to_sq = sq.offset(d_rank, d_file)
            valid, capture = self._destination(to_sq, piece.color)
            if valid:
                yield Move(piece, sq, to_sq, is_capture=capture)

    def _gen_sliding(
        self, sq: Square, piece: Piece, dirs: tuple[tuple[int, int], ...]
    ) -> Iterator[Move]:
        for d_rank, d_file in dirs:
            to_sq = sq.offset(d_rank, d_file)
            while True:
                valid, capture = self._destination(to_sq, piece.color)
                if not valid:
                    break
                yield Move(piece, sq, to_sq, is_capture=capture)
                if capture:
                    break
                to_sq = to_sq.offset(d_rank, d_file)

    def _gen_castling(self, king: Piece) -> Iterator[Move]:
        color = king.color
        rank = castling_rank(color)
        king_sq = Square(rank, 4)
        if self._board[king_sq] != king or self.is_in_check(color):
            return

        rights = self._pos.castling
        if rights & CastlingRights.kingside(color) and self._can_castle_through(
            king, king_sq, 7, _SHORT_BETWEEN_FILES, _SHORT_TRANSIT_FILE
        ):
            yield Move.castle_short(king)
        if rights & CastlingRights.queenside(color) and self._can_castle_through(
            king, king_sq, 0, _LONG_BETWEEN_FILES, _LONG_TRANSIT_FILE
        ):
            yield Move.castle_long(king)

    def _can_castle_through(
        self,
        king: Piece,
        king_sq: Square,
        rook_file: int,
        between_files: tuple[int, ...],
        transit_file: int,
    ) -> bool:
        board = self._board
        if board.piece_at(king_sq.rank, rook_file) != Piece(king.color, PieceType.ROOK):
            return False
        if any(board.piece_at(king_sq.rank, f) is not None for f in between_files):
            return False
        transit = Move(king, king_sq, Square(king_sq.rank, transit_file))
        return not MoveGenerator(self._pos.apply_move(transit)).is_in_check(king.color)
