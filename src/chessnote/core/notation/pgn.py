"""PGN text scanning into a stream of syntactic events."""

from __future__ import annotations

import re
from collections.abc import Iterator

from chessnote.core.errors import MalformedInput
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

_PGN_HEADER_RE = re.compile(r'^\[(\w+)\s+"((?:[^"\\]|\\.)*)"\]\s*$')
PGN_RESULT_TOKENS = frozenset({"1-0", "0-1", "1/2-1/2", "*"})
_MOVE_NUMBER_RE = re.compile(r"^\d+\.+")
_TOKEN_BREAKS = "{};()"

# Standalone glyph tokens ("e4 !?") map onto their standard NAG numbers.
_GLYPH_NAGS: dict[str, str] = {
    "!": "$1",
    "?": "$2",
    "!!": "$3",
    "??": "$4",
    "!?": "$5",
    "?!": "$6",
}


def unescape_tag_value(raw: str) -> str:
    return raw.replace('\\"', '"').replace("\\\\", "\\")


def escape_tag_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _movetext_events(movetext: str) -> Iterator[PgnEvent]:
    """Scan movetext into events; result tokens are passed through as-is."""
    idx = 0
    total = len(movetext)

    while idx < total:
        ch = movetext[idx]

        if ch.isspace():
            idx += 1
            continue

        if ch == "{":
            end = movetext.find("}", idx + 1)
            if end < 0:
                comment = movetext[idx + 1 :]
                idx = total
            else:
                comment = movetext[idx + 1 : end]
                idx = end + 1
            yield BraceComment(" ".join(comment.split()))
            continue

        if ch == ";":
            end = movetext.find("\n", idx + 1)
            if end < 0:
                end = total
            yield LineComment(movetext[idx + 1 : end].strip())
            idx = end
            continue

        if ch == "(":
            yield VariationStart()
            idx += 1
            continue

        if ch == ")":
            yield VariationEnd()
            idx += 1
            continue

        if ch == "}":
            idx += 1
            continue

        token_end = idx
        while (
            token_end < total
            and not movetext[token_end].isspace()
            and movetext[token_end] not in _TOKEN_BREAKS
        ):
            token_end += 1
        token = movetext[idx:token_end]
        idx = token_end

        if token in PGN_RESULT_TOKENS:
            yield Termination(token)
            continue

        if token.startswith("$") and token[1:].isdigit():
            yield NumericGlyph(token)
            continue

        if token in _GLYPH_NAGS:
            yield NumericGlyph(_GLYPH_NAGS[token])
            continue

        # "12.", "12...", or "12.e4"
        token = _MOVE_NUMBER_RE.sub("", token)
        if token:
            yield MoveToken(token)


def _split_games(pgn_text: str) -> Iterator[tuple[list[TagPair], str]]:
    """Group lines into (tag pairs, movetext) chunks, one per tag section."""
    tags: list[TagPair] = []
    move_lines: list[str] = []
    open_braces = 0

    for raw_line in pgn_text.splitlines():
        line = raw_line.strip()
        if not line or (line.startswith("%") and not open_braces):
            continue

        if line.startswith("[") and not open_braces:
            if move_lines:
                yield tags, "\n".join(move_lines)
                tags, move_lines = [], []
            match = _PGN_HEADER_RE.match(line)
            if match is None:
                raise MalformedInput(f"Invalid PGN header line: {line}")
            key, raw_value = match.groups()
            tags.append(TagPair(key, unescape_tag_value(raw_value)))
            continue

        move_lines.append(raw_line)
        open_braces = max(0, open_braces + line.count("{") - line.count("}"))

    if tags or move_lines:
        yield tags, "\n".join(move_lines)


def pgn_events(pgn_text: str) -> Iterator[PgnEvent]:
    """Scan PGN text holding one or more games into an event stream.

    Every game ends with exactly one :class:`GameEnd`. A result token closes
    the current game; tokens after it start a new one.
    """
    for tags, movetext in _split_games(pgn_text):
        yield from tags
        game_open = bool(tags)
        for event in _movetext_events(movetext):
            yield event
            if isinstance(event, Termination):
                yield GameEnd()
                game_open = False
            else:
                game_open = True
        if game_open:
            yield GameEnd()
