"""SAN (Standard Algebraic Notation) generation and lookup.

SAN keys use digit-zero castling (``0-0``, ``0-0-0``) and carry the ``+``/``#``
suffix, so every legal move in a position has exactly one key.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from chessnote.core.enums import PieceType
from chessnote.core.errors import IllegalMove
from chessnote.core.move import Move
from chessnote.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chessnote.core.position import Position

SHORT_CASTLE = "0-0"
LONG_CASTLE = "0-0-0"

# Longest first, so "!!" wins over "!".
ANNOTATION_SYMBOLS: tuple[str, ...] = ("!!", "!?", "?!", "??", "!", "?")

_CHECK_SUFFIXES = "+#"


def san_for(move: Move, position: Position, legal: Sequence[Move]) -> str:
    """SAN key of *move* in *position*, disambiguated against all of *legal*."""
    san = _base_san(move, legal)

    after = position.apply_move(move)
    gen_after = MoveGenerator(after)
    if gen_after.is_in_check(after.side_to_move):
        san += "#" if not gen_after.generate_legal_moves() else "+"
    return san


def san_table(position: Position) -> dict[str, Move]:
    """Map every legal move in *position* to its SAN key."""
    legal = MoveGenerator(position).generate_legal_moves()
    return {san_for(move, position, legal): move for move in legal}


def _base_san(move: Move, legal: Sequence[Move]) -> str:
    if move.is_castle_short:
        return SHORT_CASTLE
    if move.is_castle_long:
        return LONG_CASTLE

    if move.piece.kind == PieceType.PAWN:
        san = f"{move.start.file_name}x" if move.is_capture else ""
        san += move.end.name
        if move.promotion is not None:
            san += "=" + move.promotion.letter
        return san

    san = move.piece.kind.letter
    rivals = [
        m for m in legal if m.piece.kind == move.piece.kind and m.end == move.end
    ]
    if len(rivals) > 1:
        if sum(m.start.file == move.start.file for m in rivals) == 1:
            san += move.start.file_name
        elif sum(m.start.rank == move.start.rank for m in rivals) == 1:
            san += move.start.rank_name
        else:
            san += move.start.name

    if move.is_capture:
        san += "x"
    return san + move.end.name


# ── Lookup ──────────────────────────────────────────────────────────────────


def split_annotation(text: str) -> tuple[str, str]:
    """Split a trailing annotation glyph off move text: ``"Nf3!?"`` → ``("Nf3", "!?")``."""
    for symbol in ANNOTATION_SYMBOLS:
        if text.endswith(symbol):
            return text[: -len(symbol)], symbol
    return text, ""


def normalize_castling(text: str) -> str:
    """Rewrite letter-O castling (``O-O``) to the canonical digit form."""
    core = text.rstrip(_CHECK_SUFFIXES)
    suffix = text[len(core) :]
    if core == "O-O":
        return SHORT_CASTLE + suffix
    if core == "O-O-O":
        return LONG_CASTLE + suffix
    return text


def find_san_key(position: Position, text: str) -> str | None:
    """Canonical SAN key in *position* for *text*, or ``None``.

    Tolerates letter-O castling, a trailing annotation glyph, and a missing or
    wrong check/mate suffix.
    """
    table = position.legal_moves
    clean = normalize_castling(split_annotation(text.strip())[0])
    if clean in table:
        return clean
    bare = clean.rstrip(_CHECK_SUFFIXES)
    for key in table:
        if key.rstrip(_CHECK_SUFFIXES) == bare:
            return key
    return None


def parse_san(position: Position, san: str) -> Move:
    """Parse a SAN string into a :class:`Move` given the current *position*."""
    key = find_san_key(position, san)
    if key is None:
        raise IllegalMove(f"Illegal move: {san}")
    return position.legal_moves[key]


def move_to_san(position: Position, move: Move) -> str:
    """SAN key of a legal *move* given the *position* before the move."""
    san = position.san_for(move)
    if san is None:
        raise IllegalMove(f"Illegal move: {move}")
    return san
