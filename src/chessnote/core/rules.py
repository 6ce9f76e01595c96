"""High-level chess rules: check, checkmate, stalemate, finished-game result."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessnote.core.enums import Color, GameTermination
from chessnote.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chessnote.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    @staticmethod
    def is_in_check(position: Position, color: Color | None = None) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move if color is None else color)

    @staticmethod
    def is_checkmate(position: Position, color: Color | None = None) -> bool:
        """*color* (default: side to move) is to move, in check, and has no moves."""
        if color is not None and color != position.side_to_move:
            return False
        if not Rules.is_in_check(position):
            return False
        gen = MoveGenerator(position)
        return len(gen.generate_legal_moves()) == 0

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        if Rules.is_in_check(position):
            return False
        gen = MoveGenerator(position)
        return len(gen.generate_legal_moves()) == 0

    @staticmethod
    def termination(position: Position) -> GameTermination | None:
        """Result if the game is over on the board, otherwise ``None``."""
        gen = MoveGenerator(position)
        if gen.generate_legal_moves():
            return None
        if gen.is_in_check(position.side_to_move):
            return (
                GameTermination.BLACK_WIN
                if position.side_to_move == Color.WHITE
                else GameTermination.WHITE_WIN
            )
        return GameTermination.DRAW  # stalemate
