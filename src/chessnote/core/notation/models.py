"""Syntactic events produced while reading PGN text.

The game-tree builder consumes these in order; any producer (the bundled
scanner or an external grammar-based parser) can feed it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TagPair:
    """``[Name "value"]`` with the value already unescaped."""

    name: str
    value: str


@dataclass(frozen=True, slots=True)
class MoveToken:
    """Raw SAN token as written, possibly with ``+``/``#`` and a glyph."""

    text: str


@dataclass(frozen=True, slots=True)
class NumericGlyph:
    """Numeric annotation glyph such as ``$14``."""

    text: str


@dataclass(frozen=True, slots=True)
class BraceComment:
    text: str


@dataclass(frozen=True, slots=True)
class LineComment:
    """Rest-of-line comment introduced by ``;``."""

    text: str


@dataclass(frozen=True, slots=True)
class VariationStart:
    pass


@dataclass(frozen=True, slots=True)
class VariationEnd:
    pass


@dataclass(frozen=True, slots=True)
class Termination:
    token: str


@dataclass(frozen=True, slots=True)
class GameEnd:
    pass


PgnEvent = (
    TagPair
    | MoveToken
    | NumericGlyph
    | BraceComment
    | LineComment
    | VariationStart
    | VariationEnd
    | Termination
    | GameEnd
)
