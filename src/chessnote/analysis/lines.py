"""Conversion of engine output (UCI long algebraic) into SAN lines."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from chessnote.analysis.models import EngineLine, PrincipalVariation
from chessnote.core.enums import Color, PieceType
from chessnote.core.move import Move
from chessnote.core.position import Position
from chessnote.core.types import parse_square

_LOGGER = logging.getLogger(__name__)

MATE_SCORE_CP = 100_000


def uci_to_move(position: Position, uci: str) -> Move | None:
    """Legal move in *position* written as ``"e2e4"`` / ``"e7e8q"``, or ``None``."""
    if len(uci) not in (4, 5):
        return None
    try:
        start = parse_square(uci[:2])
        end = parse_square(uci[2:4])
        promotion = PieceType.from_letter(uci[4]) if len(uci) == 5 else None
    except ValueError:
        return None

    for move in position.legal_moves.values():
        if move.start == start and move.end == end and move.promotion == promotion:
            return move
    return None


def line_from_uci(
    position: Position,
    uci_moves: Sequence[str],
    *,
    rank: int = 1,
    depth: int = 0,
    score_cp: int = 0,
) -> EngineLine:
    """Turn an engine principal variation into a numbered SAN line.

    *score_cp* is taken from the side to move, as engines report it, and
    stored from White's point of view. Conversion stops at the first move
    that is not legal where it appears.
    """
    parts: list[str] = []
    first: Move | None = None
    current = position

    for uci in uci_moves:
        move = uci_to_move(current, uci)
        if move is None:
            _LOGGER.warning(
                "Engine line %d: %r is not legal after %r, line truncated",
                rank,
                uci,
                " ".join(parts),
            )
            break
        san = current.san_for(move) or uci
        if current.side_to_move == Color.WHITE:
            parts.append(f"{current.fullmove_number}. {san}")
        elif first is None:
            parts.append(f"{current.fullmove_number}... {san}")
        else:
            parts.append(san)
        if first is None:
            first = move
        current = current.apply_move(move)

    white_cp = -score_cp if position.side_to_move == Color.BLACK else score_cp
    return EngineLine(
        rank=rank,
        depth=depth,
        score_cp=white_cp,
        first_move=first,
        san_line=" ".join(parts),
    )


def lines_from_pvs(
    position: Position, pvs: Iterable[PrincipalVariation]
) -> list[EngineLine]:
    """Convert engine variations for *position*, best-ranked first."""
    return [
        line_from_uci(
            position, pv.moves, rank=pv.rank, depth=pv.depth, score_cp=pv.score_cp
        )
        for pv in sorted(pvs, key=lambda pv: pv.rank)
    ]


def parse_uci_info(line: str) -> PrincipalVariation | None:
    """Read a UCI ``info ... score ... pv ...`` line; other lines give ``None``.

    Example::

        info depth 19 multipv 1 score cp 36 nodes 1119774 pv d2d4 d7d5
    """
    tokens = line.split()
    if not tokens or tokens[0] != "info" or "pv" not in tokens:
        return None

    def value_after(label: str) -> str | None:
        if label not in tokens:
            return None
        idx = tokens.index(label) + 1
        return tokens[idx] if idx < len(tokens) else None

    try:
        depth = int(value_after("depth") or "")
        rank = int(value_after("multipv") or "1")
        cp = value_after("cp")
        mate = value_after("mate")
        if cp is not None:
            score = int(cp)
        elif mate is not None:
            plies = int(mate)
            if plies > 0:
                score = MATE_SCORE_CP - plies
            else:
                score = -MATE_SCORE_CP - plies
        else:
            return None
    except ValueError:
        return None

    moves = tuple(tokens[tokens.index("pv") + 1 :])
    return PrincipalVariation(rank=rank, depth=depth, score_cp=score, moves=moves)
