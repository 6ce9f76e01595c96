"""Game and PgnDocument: metadata, node arena and board replay."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Iterator, Mapping

from chessnote.core.enums import GameTermination
from chessnote.core.errors import IllegalMove, InconsistentTree
from chessnote.core.notation.fen import (
    STARTING_FEN,
    position_to_fen,
    try_position_from_fen,
)
from chessnote.core.notation.san import find_san_key
from chessnote.core.position import Position
from chessnote.game.node import GameNode

_LOGGER = logging.getLogger(__name__)

# Seven Tag Roster, in roster order, with the placeholder for a missing value.
STR_DEFAULTS: tuple[tuple[str, str], ...] = (
    ("Event", "???"),
    ("Site", "???"),
    ("Date", "????.??.??"),
    ("Round", "?"),
    ("White", "White"),
    ("Black", "Black"),
    ("Result", "*"),
)

_SETUP_TAGS = frozenset({"SetUp", "FEN"})


class Game:
    """One game: tag pairs, a tree of moves and a termination marker.

    The game owns an arena of its nodes keyed by id; ids come from a counter
    local to the game, so two games never share state.
    """

    __slots__ = ("id", "metadata", "termination", "root", "_nodes", "_node_ids")

    def __init__(
        self,
        metadata: Mapping[str, str] | None = None,
        *,
        game_id: int = 0,
        termination: GameTermination = GameTermination.UNKNOWN,
    ) -> None:
        self.id = game_id
        self.metadata: dict[str, str] = dict(metadata or {})
        self.termination = termination
        self._nodes: dict[int, GameNode] = {}
        self._node_ids = itertools.count()

        start = self.starting_position
        self.root = self._new_node(None)
        self.root.mover = start.side_to_move.opposite
        self.root.cache_position(start)

    # ── Metadata ─────────────────────────────────────────────────────────

    def get_tag(self, name: str) -> str | None:
        return self.metadata.get(name)

    def set_tag(self, name: str, value: str) -> None:
        self.metadata[name] = value
        if name in _SETUP_TAGS:
            self._reset_root()

    def remove_tag(self, name: str) -> None:
        if self.metadata.pop(name, None) is not None and name in _SETUP_TAGS:
            self._reset_root()

    def complete_str_metadata(self) -> None:
        """Add any missing Seven Tag Roster field with its placeholder value."""
        for name, default in STR_DEFAULTS:
            self.metadata.setdefault(name, default)

    @property
    def white(self) -> str:
        return self.metadata.get("White", "White")

    @property
    def black(self) -> str:
        return self.metadata.get("Black", "Black")

    @property
    def title(self) -> str:
        return f"{self.white} vs. {self.black}"

    # ── Starting position ────────────────────────────────────────────────

    @property
    def starting_position(self) -> Position:
        """Position declared by ``SetUp``/``FEN`` tags, else the standard one."""
        fen = self.metadata.get("FEN")
        if self.metadata.get("SetUp") == "1" and fen is not None:
            position = try_position_from_fen(fen)
            if position is not None:
                return position
            _LOGGER.warning(
                "Game %d: malformed FEN tag %r, using the standard position",
                self.id,
                fen,
            )
        return Position.initial()

    def set_starting_position(self, position: Position | None) -> None:
        """Declare *position* as the start; ``None`` restores the standard one."""
        fen = STARTING_FEN if position is None else position_to_fen(position)
        if fen == STARTING_FEN:
            self.metadata.pop("SetUp", None)
            self.metadata.pop("FEN", None)
        else:
            self.metadata["SetUp"] = "1"
            self.metadata["FEN"] = fen
        self._reset_root()

    def _reset_root(self) -> None:
        start = self.starting_position
        root = self.root
        root.invalidate_positions()
        root.cache_position(start)
        root.mover = start.side_to_move.opposite
        for node in root.iter_subtree():
            for child in node.variations:
                child.mover = node.mover.opposite
                child.move_number = node.next_move_number

    # ── Arena ────────────────────────────────────────────────────────────

    def _new_node(self, parent: GameNode | None) -> GameNode:
        node = GameNode(next(self._node_ids), parent)
        self._nodes[node.id] = node
        return node

    def node_by_id(self, node_id: int) -> GameNode | None:
        return self._nodes.get(node_id)

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    def mainline(self) -> Iterator[GameNode]:
        return self.root.iter_mainline()

    # ── Tree editing ─────────────────────────────────────────────────────

    def add_variation(self, node: GameNode) -> GameNode:
        """Append and return an empty child of *node*."""
        child = self._new_node(node)
        node.variations.append(child)
        return child

    def add_move(self, node: GameNode, san: str) -> GameNode:
        """Play *san* after *node*, reusing an existing child with that move.

        Raises:
            IllegalMove: *san* is not legal in the position after *node*.
            InconsistentTree: the position after *node* cannot be replayed.
        """
        position = self.require_position(node)
        key = find_san_key(position, san)
        if key is None:
            raise IllegalMove(f"Illegal move {san!r} after node {node.id}")

        core = key.rstrip("+#")
        for child in node.variations:
            if child.san_core == core:
                return child

        child = self.add_variation(node)
        child.move = key
        child.cache_position(position.apply_move(position.legal_moves[key]))
        return child

    def delete_subtree(self, node: GameNode) -> GameNode:
        """Remove *node* and its descendants; return the new current node.

        The root is never removed: deleting it clears its variations.
        """
        parent = node.parent
        if parent is None:
            for child in node.variations:
                self._forget(child)
            node.variations.clear()
            node.selected_variation = None
            return node

        idx = parent.index_of(node)
        if idx is None:
            return parent
        del parent.variations[idx]

        selected = parent.selected_variation
        if not parent.variations:
            selected = None
        elif selected is not None:
            if selected > idx:
                selected -= 1
            selected = min(selected, len(parent.variations) - 1)
        parent.selected_variation = selected

        self._forget(node)
        return parent

    def _forget(self, node: GameNode) -> None:
        for gone in node.iter_subtree():
            self._nodes.pop(gone.id, None)

    # ── Board replay ─────────────────────────────────────────────────────

    def compute_board_for_node(self, node: GameNode) -> Position | None:
        """Position after *node*, replaying moves from the nearest known one.

        Returns ``None`` when a stored move is not legal where it was
        played; nothing is cached in that case.
        """
        position, failed = self._replay(node)
        if failed is not None:
            _LOGGER.warning(
                "Game %d: position unknown for node %d, cannot replay %r",
                self.id,
                failed.id,
                failed.move,
            )
        return position

    def require_position(self, node: GameNode) -> Position:
        position, failed = self._replay(node)
        if position is None:
            assert failed is not None
            raise InconsistentTree(failed.id, failed.move)
        return position

    def _replay(self, node: GameNode) -> tuple[Position | None, GameNode | None]:
        path: list[GameNode] = []
        current = node
        while current.position is None and not current.is_root:
            path.append(current)
            parent = current.parent
            if parent is None:
                return None, current
            current = parent

        position = current.position
        if position is None:
            position = self.starting_position
            current.cache_position(position)

        replayed: list[tuple[GameNode, Position]] = []
        for step in reversed(path):
            key = find_san_key(position, step.move or "")
            if key is None:
                return None, step
            position = position.apply_move(position.legal_moves[key])
            replayed.append((step, position))

        for step, after in replayed:
            step.cache_position(after)
        return position, None

    def __repr__(self) -> str:
        return f"Game(id={self.id}, {self.title!r}, nodes={self.node_count})"


class PgnDocument:
    """Ordered collection of games, as stored in one PGN file.

    A document always holds at least one game. Game ids come from a counter
    local to the document.
    """

    __slots__ = ("games", "_game_ids")

    def __init__(self, games: Iterable[Game] = ()) -> None:
        self.games: list[Game] = []
        self._game_ids = itertools.count(1)
        for game in games:
            self.add_game(game)
        if not self.games:
            self.add_game()

    def add_game(self, game: Game | None = None) -> Game:
        """Append *game* (or a new empty one) and give it a fresh id."""
        if game is None:
            game = Game()
        game.id = next(self._game_ids)
        self.games.append(game)
        return game

    def game_by_id(self, game_id: int) -> Game | None:
        for game in self.games:
            if game.id == game_id:
                return game
        return None

    def delete_game(self, game_id: int) -> bool:
        """Remove the game with *game_id*; the last game is never removed."""
        if len(self.games) <= 1:
            return False
        for idx, game in enumerate(self.games):
            if game.id == game_id:
                del self.games[idx]
                return True
        return False

    def __len__(self) -> int:
        return len(self.games)

    def __iter__(self) -> Iterator[Game]:
        return iter(self.games)
