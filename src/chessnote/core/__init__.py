"""Core domain layer: pure chess logic with zero external dependencies.

Quick start::

    from chessnote.core import Position, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    for san, move in pos.legal_moves.items():
        print(san, move.uci)
"""

from chessnote.core.board import Board
from chessnote.core.enums import CastlingRights, Color, GameTermination, PieceType
from chessnote.core.errors import (
    ChessnoteError,
    IllegalMove,
    InconsistentTree,
    MalformedInput,
)
from chessnote.core.move import Move
from chessnote.core.move_generator import MoveGenerator
from chessnote.core.notation import (
    STARTING_FEN,
    move_to_san,
    parse_san,
    position_from_fen,
    position_to_fen,
    try_position_from_fen,
)
from chessnote.core.piece import Piece
from chessnote.core.position import Position
from chessnote.core.rules import Rules
from chessnote.core.types import Square, parse_square, square_name

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameTermination",
    "PieceType",
    # Errors
    "ChessnoteError",
    "IllegalMove",
    "InconsistentTree",
    "MalformedInput",
    # Types / helpers
    "Square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    # Notation
    "STARTING_FEN",
    "move_to_san",
    "parse_san",
    "position_from_fen",
    "position_to_fen",
    "try_position_from_fen",
]
