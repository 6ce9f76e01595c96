"""Notation package: FEN / SAN conversion and PGN event scanning."""

from chessnote.core.notation.fen import (
    STARTING_FEN,
    position_from_fen,
    position_to_fen,
    try_position_from_fen,
)
from chessnote.core.notation.models import (
    BraceComment,
    GameEnd,
    LineComment,
    MoveToken,
    NumericGlyph,
    PgnEvent,
    TagPair,
    Termination,
    VariationEnd,
    VariationStart,
)
from chessnote.core.notation.pgn import (
    PGN_RESULT_TOKENS,
    escape_tag_value,
    pgn_events,
    unescape_tag_value,
)
from chessnote.core.notation.san import (
    ANNOTATION_SYMBOLS,
    LONG_CASTLE,
    SHORT_CASTLE,
    find_san_key,
    move_to_san,
    normalize_castling,
    parse_san,
    san_for,
    san_table,
    split_annotation,
)

__all__ = [
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
    "try_position_from_fen",
    # SAN
    "ANNOTATION_SYMBOLS",
    "LONG_CASTLE",
    "SHORT_CASTLE",
    "find_san_key",
    "move_to_san",
    "normalize_castling",
    "parse_san",
    "san_for",
    "san_table",
    "split_annotation",
    # PGN events
    "PGN_RESULT_TOKENS",
    "PgnEvent",
    "BraceComment",
    "GameEnd",
    "LineComment",
    "MoveToken",
    "NumericGlyph",
    "TagPair",
    "Termination",
    "VariationEnd",
    "VariationStart",
    "escape_tag_value",
    "pgn_events",
    "unescape_tag_value",
]
