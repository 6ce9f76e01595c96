"""PGN text output for game trees."""

from __future__ import annotations

from chessnote.core.enums import Color
from chessnote.core.notation.pgn import escape_tag_value
from chessnote.core.notation.san import LONG_CASTLE, SHORT_CASTLE
from chessnote.game.game import STR_DEFAULTS, Game, PgnDocument
from chessnote.game.node import GameNode
from chessnote.settings import AnnotatorSettings

_LETTER_O = {SHORT_CASTLE: "O-O", LONG_CASTLE: "O-O-O"}


def format_tag(name: str, value: str) -> str:
    return f'[{name} "{escape_tag_value(value)}"]'


def node_notation(
    node: GameNode,
    *,
    with_number: bool,
    with_comments: bool = True,
    letter_o: bool = True,
) -> str:
    """PGN text for one move, followed by a single space."""
    text = ""
    if with_number:
        dots = "." if node.mover == Color.WHITE else "..."
        text += f"{node.move_number}{dots} "

    san = node.san_core or "?"
    if letter_o:
        san = _LETTER_O.get(san, san)
    if node.is_checkmate:
        san += "#"
    elif node.is_check:
        san += "+"
    text += san + node.annotation + " "

    if node.numeric_glyph:
        text += node.numeric_glyph + " "
    if with_comments:
        text += _comments(node)
    return text


def _comments(node: GameNode) -> str:
    text = ""
    if node.brace_comment:
        comment = node.brace_comment.replace("{", "(").replace("}", ")")
        text += f"{{ {comment} }} "
    if node.line_comment:
        text += f"; {node.line_comment}\n"
    return text


def _breaks_numbering(node: GameNode) -> bool:
    """A comment after *node* means the next move needs its number again."""
    return bool(node.brace_comment or node.line_comment)


def _line_text(start: GameNode, require_number: bool, letter_o: bool) -> str:
    parts: list[str] = []
    node = start
    while node.variations:
        main = node.variations[0]
        show_number = require_number or main.mover == Color.WHITE
        parts.append(node_notation(main, with_number=show_number, letter_o=letter_o))
        require_number = _breaks_numbering(main)

        for variation in node.variations[1:]:
            parts.append("( ")
            parts.append(node_notation(variation, with_number=True, letter_o=letter_o))
            parts.append(_line_text(variation, _breaks_numbering(variation), letter_o))
            parts.append(") ")
            require_number = True
        node = main
    return "".join(parts)


def movetext(game: Game, settings: AnnotatorSettings | None = None) -> str:
    """Movetext of *game* including variations and the termination marker."""
    settings = settings or AnnotatorSettings()
    # Comments before the first move live on the root.
    body = _comments(game.root)
    body += _line_text(game.root, True, settings.castle_with_letter_o)
    return body + game.termination.value


def game_to_pgn(game: Game, settings: AnnotatorSettings | None = None) -> str:
    """Full PGN text of *game*: tag pairs, a blank line, then movetext.

    The game itself is left untouched; the roster completion and the
    ``Result`` tag are applied to the written copy of the tags only.
    """
    settings = settings or AnnotatorSettings()
    tags = dict(game.metadata)
    if settings.complete_str_tags:
        for name, default in STR_DEFAULTS:
            tags.setdefault(name, default)
    tags["Result"] = game.termination.value

    lines = [format_tag(name, value) for name, value in tags.items()]
    lines.append("")
    lines.append(movetext(game, settings))
    return "\n".join(lines) + "\n"


def document_to_pgn(
    document: PgnDocument, settings: AnnotatorSettings | None = None
) -> str:
    """All games of *document*, separated by blank lines."""
    return "\n".join(game_to_pgn(game, settings) for game in document)


def moves_until(node: GameNode, *, letter_o: bool = True) -> str:
    """Movetext from the start of the game up to and including *node*."""
    path: list[GameNode] = []
    current: GameNode | None = node
    while current is not None and not current.is_root:
        path.append(current)
        current = current.parent
    path.reverse()

    parts = [
        node_notation(
            step,
            with_number=idx == 0 or step.mover == Color.WHITE,
            with_comments=False,
            letter_o=letter_o,
        )
        for idx, step in enumerate(path)
    ]
    return "".join(parts).rstrip()
