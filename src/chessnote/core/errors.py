"""Exception taxonomy for the rules engine and game tree."""

from __future__ import annotations


class ChessnoteError(Exception):
    """Base class for all chessnote errors."""


class MalformedInput(ChessnoteError, ValueError):
    """FEN or PGN text that cannot be turned into a position or game."""


class IllegalMove(ChessnoteError, ValueError):
    """A move (or SAN text) that is not legal in the given position."""


class InconsistentTree(ChessnoteError):
    """A stored move cannot be replayed from its ancestors' position."""

    def __init__(self, node_id: int, move_text: str | None) -> None:
        super().__init__(
            f"Position unknown for node {node_id}: cannot replay {move_text!r}"
        )
        self.node_id = node_id
        self.move_text = move_text
