"""Build game trees from a stream of PGN events."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable

from chessnote.core.enums import GameTermination
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
from chessnote.core.notation.pgn import pgn_events
from chessnote.core.notation.san import (
    find_san_key,
    normalize_castling,
    split_annotation,
)
from chessnote.game.game import Game, PgnDocument
from chessnote.game.node import GameNode

_LOGGER = logging.getLogger(__name__)


def _join(existing: str, text: str) -> str:
    return f"{existing} {text}" if existing else text


class GameTreeBuilder:
    """Consume events in order and collect one :class:`Game` per ``GameEnd``.

    The builder keeps a stack of open lines: the top is the latest node of
    the innermost variation. A variation opens as a new sibling of that
    node; closing it returns to the enclosing line.
    """

    __slots__ = ("games", "_tags", "_game", "_stack", "_game_ids")

    def __init__(self) -> None:
        self.games: list[Game] = []
        self._tags: dict[str, str] = {}
        self._game: Game | None = None
        self._stack: list[GameNode] = []
        self._game_ids = itertools.count(1)

    def feed(self, event: PgnEvent) -> None:
        match event:
            case TagPair(name=name, value=value):
                if self._game is None:
                    self._tags[name] = value
                else:
                    self._game.set_tag(name, value)
            case MoveToken(text=text):
                self._add_move(text)
            case NumericGlyph(text=text):
                node = self._latest()
                node.numeric_glyph = _join(node.numeric_glyph, text)
            case BraceComment(text=text):
                node = self._latest()
                node.brace_comment = _join(node.brace_comment, text)
            case LineComment(text=text):
                node = self._latest()
                node.line_comment = _join(node.line_comment, text)
            case VariationStart():
                self._open_variation()
            case VariationEnd():
                self._close_variation()
            case Termination(token=token):
                self._current_game().termination = GameTermination.from_token(token)
            case GameEnd():
                self._finish_game()

    def finish(self) -> list[Game]:
        """Close a game left open by a stream without a final ``GameEnd``."""
        if self._game is not None or self._tags:
            self._finish_game()
        return self.games

    # ── Internal helpers ─────────────────────────────────────────────────

    def _current_game(self) -> Game:
        if self._game is None:
            self._game = Game(self._tags, game_id=next(self._game_ids))
            self._tags = {}
            self._stack = [self._game.root]
        return self._game

    def _latest(self) -> GameNode:
        self._current_game()
        return self._stack[-1]

    def _add_move(self, token: str) -> None:
        game = self._current_game()
        text, annotation = split_annotation(token)
        text = normalize_castling(text)

        node = self._stack[-1]
        if node.move is None and not node.is_root:
            target = node
        else:
            target = game.add_variation(node)
            self._stack[-1] = target
        target.annotation = annotation

        # Resolve against the parent's position so the stored text is the
        # canonical key; unresolvable moves are kept as written.
        parent = target.parent
        position = None if parent is None else parent.position
        key = None if position is None else find_san_key(position, text)
        if key is None:
            target.move = text
            return
        target.move = key
        target.cache_position(position.apply_move(position.legal_moves[key]))

    def _open_variation(self) -> None:
        game = self._current_game()
        latest = self._stack[-1]
        branch_point = latest.parent or latest
        self._stack.append(game.add_variation(branch_point))

    def _close_variation(self) -> None:
        game = self._current_game()
        if len(self._stack) <= 1:
            _LOGGER.warning("Game %d: unbalanced ')' ignored", game.id)
            return
        node = self._stack.pop()
        if node.move is None:
            game.delete_subtree(node)

    def _finish_game(self) -> None:
        game = self._current_game()
        if len(self._stack) > 1:
            _LOGGER.warning(
                "Game %d: %d variation(s) left open at end of game",
                game.id,
                len(self._stack) - 1,
            )
            while len(self._stack) > 1:
                self._close_variation()
        game.complete_str_metadata()
        self.games.append(game)
        self._game = None
        self._stack = []


def build_games(events: Iterable[PgnEvent]) -> list[Game]:
    builder = GameTreeBuilder()
    for event in events:
        builder.feed(event)
    return builder.finish()


def parse_pgn_games(pgn_text: str) -> list[Game]:
    """Parse PGN text holding any number of games; empty text gives one empty game.

    Raises:
        MalformedInput: a tag-pair line cannot be read.
    """
    games = build_games(pgn_events(pgn_text))
    return games or [Game(game_id=1)]


def parse_pgn_document(pgn_text: str) -> PgnDocument:
    return PgnDocument(parse_pgn_games(pgn_text))
