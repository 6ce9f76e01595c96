"""GameNode: one ply in an annotated game tree."""

from __future__ import annotations

import weakref
from collections.abc import Iterator

from chessnote.core.enums import Color
from chessnote.core.position import Position

_CHECK_SUFFIXES = "+#"


class GameNode:
    """A move plus everything written about it, and its continuations.

    ``variations[0]`` is the main continuation; the rest are alternatives.
    The parent link is a weak reference: children are owned by their parent's
    ``variations`` list and by the game's node arena, never by the child.

    Nodes are created through :meth:`Game.add_variation` so that ids come
    from the game's own counter.
    """

    __slots__ = (
        "id",
        "move_number",
        "mover",
        "_move",
        "numeric_glyph",
        "brace_comment",
        "line_comment",
        "annotation",
        "is_check",
        "is_checkmate",
        "variations",
        "selected_variation",
        "_parent",
        "_position",
        "__weakref__",
    )

    def __init__(self, node_id: int, parent: GameNode | None = None) -> None:
        self.id = node_id
        if parent is None:
            self.move_number = 0
            self.mover = Color.BLACK
            self._parent: weakref.ref[GameNode] | None = None
        else:
            self.move_number = parent.next_move_number
            self.mover = parent.mover.opposite
            self._parent = weakref.ref(parent)
        self._move: str | None = None
        self.numeric_glyph = ""
        self.brace_comment = ""
        self.line_comment = ""
        self.annotation = ""
        self.is_check = False
        self.is_checkmate = False
        self.variations: list[GameNode] = []
        self.selected_variation: int | None = None
        self._position: Position | None = None

    # ── Structure ────────────────────────────────────────────────────────

    @property
    def parent(self) -> GameNode | None:
        if self._parent is None:
            return None
        return self._parent()

    @property
    def is_root(self) -> bool:
        return self._parent is None

    @property
    def next_move_number(self) -> int:
        """Move number of a child: 1 after the root, +1 after each Black ply."""
        if self.is_root:
            return 1
        if self.mover == Color.BLACK:
            return self.move_number + 1
        return self.move_number

    @property
    def main_child(self) -> GameNode | None:
        return self.variations[0] if self.variations else None

    @property
    def selected_child(self) -> GameNode | None:
        """Child that "next move" navigates to: the selected one, else the first."""
        if not self.variations:
            return None
        idx = self.selected_variation
        if idx is None or not 0 <= idx < len(self.variations):
            return self.variations[0]
        return self.variations[idx]

    def set_selected_variation(self, child: GameNode) -> None:
        """Select *child* by identity; a node that is not a child clears it."""
        self.selected_variation = self.index_of(child)

    def index_of(self, child: GameNode) -> int | None:
        for idx, candidate in enumerate(self.variations):
            if candidate is child:
                return idx
        return None

    def iter_subtree(self) -> Iterator[GameNode]:
        """This node and every descendant, depth-first, mainline first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.variations))

    def iter_mainline(self) -> Iterator[GameNode]:
        """Nodes after this one following each first variation."""
        node = self.main_child
        while node is not None:
            yield node
            node = node.main_child

    # ── Move text & memoized position ────────────────────────────────────

    @property
    def move(self) -> str | None:
        """SAN text of the move that led here (``None`` for the root)."""
        return self._move

    @move.setter
    def move(self, text: str | None) -> None:
        if text == self._move:
            return
        self._move = text
        if text is not None:
            self.is_checkmate = text.endswith("#")
            self.is_check = self.is_checkmate or text.endswith("+")
        self.invalidate_positions()

    @property
    def san_core(self) -> str:
        """Move text without its check/mate suffix."""
        return (self._move or "").rstrip(_CHECK_SUFFIXES)

    @property
    def position(self) -> Position | None:
        """Memoized position after this move, if it has been computed."""
        return self._position

    def cache_position(self, position: Position) -> None:
        self._position = position

    def invalidate_positions(self) -> None:
        """Forget memoized positions on this node and all its descendants."""
        for node in self.iter_subtree():
            node._position = None

    def __repr__(self) -> str:
        dots = "." if self.mover == Color.WHITE else "..."
        return f"GameNode(id={self.id}, {self.move_number}{dots}{self._move or ''})"
