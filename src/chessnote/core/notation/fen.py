"""FEN parsing and serialization."""

from __future__ import annotations

from chessnote.core.board import Board
from chessnote.core.enums import CastlingRights, Color
from chessnote.core.errors import MalformedInput
from chessnote.core.piece import Piece
from chessnote.core.position import Position
from chessnote.core.types import Square, parse_square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    All six fields are required. Raises :class:`MalformedInput` on any
    malformed field.
    """
    parts = fen.split()
    if len(parts) != 6:
        raise MalformedInput(f"Invalid FEN (need 6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part, half_part, full_part = parts

    # 1. Piece placement, 8th rank first
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise MalformedInput(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    rows: list[tuple[Piece | None, ...]] = []
    for rank_text in ranks:
        row: list[Piece | None] = []
        for ch in rank_text:
            if ch in "0123456789":
                step = int(ch)
                if not (1 <= step <= 8):
                    raise MalformedInput(f"Invalid FEN digit {ch!r}: {fen!r}")
                row.extend([None] * step)
            else:
                row.append(Piece.from_char(ch))
            if len(row) > 8:
                raise MalformedInput(f"Invalid FEN rank width: {fen!r}")
        if len(row) != 8:
            raise MalformedInput(f"Invalid FEN rank width: {fen!r}")
        rows.append(tuple(row))

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise MalformedInput(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        for ch in castling_part:
            right = _CASTLING_CHARS.get(ch)
            if right is None:
                raise MalformedInput(f"Invalid FEN castling field: {castling_part!r}")
            castling |= right

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except ValueError:
            raise MalformedInput(
                f"Invalid FEN en-passant square: {ep_part!r}"
            ) from None

    # 5–6. Clocks
    try:
        halfmove = int(half_part)
        fullmove = int(full_part)
    except ValueError:
        raise MalformedInput(f"Invalid FEN move counters: {fen!r}") from None
    if halfmove < 0 or fullmove < 1:
        raise MalformedInput(f"Invalid FEN move counters: {fen!r}")

    return Position(Board(tuple(rows)), side, castling, ep, halfmove, fullmove)


def try_position_from_fen(fen: str) -> Position | None:
    """Like :func:`position_from_fen` but returns ``None`` for malformed input."""
    try:
        return position_from_fen(fen)
    except MalformedInput:
        return None


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    # 1. Board
    rows: list[str] = []
    for grid_row in pos.board.grid:
        empty = 0
        row = ""
        for piece in grid_row:
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if pos.side_to_move == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if pos.castling & right
    )
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = pos.en_passant.name if pos.en_passant is not None else "-"

    return f"{board_str} {side_str} {castling_str} {ep_str} {pos.halfmove_clock} {pos.fullmove_number}"
