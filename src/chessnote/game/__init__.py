"""Game-tree layer: annotated move trees, PGN round trips, editing sessions.

Quick start::

    from chessnote.game import EditingSession, game_to_pgn, parse_pgn_games

    game = parse_pgn_games("1. e4 e5 (1... c5) 2. Nf3 *")[0]
    session = EditingSession(game)
    session.next_move()
    print(game_to_pgn(game))
"""

from chessnote.game.builder import (
    GameTreeBuilder,
    build_games,
    parse_pgn_document,
    parse_pgn_games,
)
from chessnote.game.game import STR_DEFAULTS, Game, PgnDocument
from chessnote.game.layout import TreeLayout, layout_column, layout_game
from chessnote.game.node import GameNode
from chessnote.game.serializer import (
    document_to_pgn,
    game_to_pgn,
    movetext,
    moves_until,
    node_notation,
)
from chessnote.game.session import (
    EditingSession,
    NavigationState,
    SessionEvents,
    SubmitResult,
)

__all__ = [
    # Tree
    "STR_DEFAULTS",
    "Game",
    "GameNode",
    "PgnDocument",
    # PGN in / out
    "GameTreeBuilder",
    "build_games",
    "document_to_pgn",
    "game_to_pgn",
    "movetext",
    "moves_until",
    "node_notation",
    "parse_pgn_document",
    "parse_pgn_games",
    # Layout
    "TreeLayout",
    "layout_column",
    "layout_game",
    # Session
    "EditingSession",
    "NavigationState",
    "SessionEvents",
    "SubmitResult",
]
