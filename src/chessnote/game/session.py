"""EditingSession: cursor over a game tree that accepts moves and edits.

A renderer drives the session: it reads the current node and position,
navigates with next/previous move and variation, and submits moves.
Listeners subscribe through simple callbacks.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum, auto

from chessnote.core.move import Move
from chessnote.core.notation.san import find_san_key
from chessnote.core.position import Position
from chessnote.game.game import Game
from chessnote.game.node import GameNode

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

NodeCallback = Callable[[GameNode], None]
TreeCallback = Callable[[Game], None]


@dataclass
class SessionEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_node_changed: list[NodeCallback] = field(default_factory=list)
    on_tree_changed: list[TreeCallback] = field(default_factory=list)


class NavigationState(IntEnum):
    AT_ROOT = auto()
    INTERIOR = auto()
    AT_LEAF = auto()


@dataclass(frozen=True, slots=True)
class SubmitResult:
    """Outcome of a move submission: the node reached, or why it was refused."""

    node: GameNode | None
    reason: str = ""

    @property
    def accepted(self) -> bool:
        return self.node is not None

    @classmethod
    def accepted_at(cls, node: GameNode) -> SubmitResult:
        return cls(node)

    @classmethod
    def rejected(cls, reason: str) -> SubmitResult:
        return cls(None, reason)


# ── Session ──────────────────────────────────────────────────────────────────


class EditingSession:
    """Owns the current node of one game and applies edits to its tree.

    Thread-safety: one session per game, driven from a single thread.
    """

    __slots__ = ("_game", "_current", "events")

    def __init__(self, game: Game | None = None) -> None:
        self._game = game if game is not None else Game()
        self._current = self._game.root
        self.events = SessionEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def game(self) -> Game:
        return self._game

    @property
    def current(self) -> GameNode:
        return self._current

    @property
    def position(self) -> Position | None:
        """Position at the current node, or ``None`` if it cannot be replayed."""
        return self._game.compute_board_for_node(self._current)

    @property
    def state(self) -> NavigationState:
        if self._current.is_root:
            return NavigationState.AT_ROOT
        if not self._current.variations:
            return NavigationState.AT_LEAF
        return NavigationState.INTERIOR

    def load_game(self, game: Game) -> None:
        self._game = game
        self._current = game.root
        self._emit_tree_changed()
        self._emit_node_changed()

    # ── Moves ────────────────────────────────────────────────────────────

    def submit_move(self, move: Move) -> SubmitResult:
        """Play *move* from the current node.

        An existing child with the same move is reused; otherwise a new
        variation is added. Either way it becomes the parent's selection.
        """
        position = self.position
        if position is None:
            return SubmitResult.rejected("position unknown")

        san = position.san_for(move)
        if san is None:
            _LOGGER.debug(
                "Rejected %s at node %d: not legal here", move.uci, self._current.id
            )
            return SubmitResult.rejected("not legal here")

        parent = self._current
        known = len(parent.variations)
        child = self._game.add_move(parent, san)
        parent.set_selected_variation(child)
        self._current = child

        if len(parent.variations) != known:
            self._emit_tree_changed()
        self._emit_node_changed()
        return SubmitResult.accepted_at(child)

    def submit_san(self, text: str) -> SubmitResult:
        position = self.position
        if position is None:
            return SubmitResult.rejected("position unknown")
        key = find_san_key(position, text)
        if key is None:
            _LOGGER.debug(
                "Rejected %r at node %d: not legal here", text, self._current.id
            )
            return SubmitResult.rejected("not legal here")
        return self.submit_move(position.legal_moves[key])

    # ── Navigation ───────────────────────────────────────────────────────

    def go_to(self, node: GameNode) -> bool:
        """Jump to *node*, which must belong to this session's game."""
        if self._game.node_by_id(node.id) is not node:
            return False
        self._set_current(node)
        return True

    def next_move(self) -> bool:
        child = self._current.selected_child
        if child is None:
            return False
        self._set_current(child)
        return True

    def previous_move(self) -> bool:
        parent = self._current.parent
        if parent is None:
            return False
        self._set_current(parent)
        return True

    def next_variation(self) -> bool:
        return self._shift_variation(1)

    def previous_variation(self) -> bool:
        return self._shift_variation(-1)

    def _shift_variation(self, offset: int) -> bool:
        parent = self._current.parent
        if parent is None:
            return False
        idx = parent.index_of(self._current)
        if idx is None:
            return False
        target = idx + offset
        if not 0 <= target < len(parent.variations):
            return False
        parent.selected_variation = target
        self._set_current(parent.variations[target])
        return True

    # ── Editing ──────────────────────────────────────────────────────────

    def delete_current_node(self) -> GameNode:
        """Delete the current node's subtree and move to its parent."""
        self._current = self._game.delete_subtree(self._current)
        self._emit_tree_changed()
        self._emit_node_changed()
        return self._current

    # ── Internal helpers ─────────────────────────────────────────────────

    def _set_current(self, node: GameNode) -> None:
        if node is self._current:
            return
        self._current = node
        self._emit_node_changed()

    def _emit_node_changed(self) -> None:
        for cb in self.events.on_node_changed:
            cb(self._current)

    def _emit_tree_changed(self) -> None:
        for cb in self.events.on_tree_changed:
            cb(self._game)
