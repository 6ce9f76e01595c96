"""Application entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from chessnote.core.errors import MalformedInput
from chessnote.core.notation.fen import STARTING_FEN, try_position_from_fen
from chessnote.game.builder import parse_pgn_document
from chessnote.game.serializer import document_to_pgn
from chessnote.settings import AnnotatorSettings

_LOGGER = logging.getLogger(__name__)


def _run_format(args: argparse.Namespace) -> int:
    path = Path(args.file)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        _LOGGER.error("Cannot read %s: %s", path, exc)
        return 1
    try:
        document = parse_pgn_document(text)
    except MalformedInput as exc:
        _LOGGER.error("%s: %s", path, exc)
        return 1

    settings = AnnotatorSettings(castle_with_letter_o=not args.digit_castling)
    sys.stdout.write(document_to_pgn(document, settings))
    return 0


def _run_moves(args: argparse.Namespace) -> int:
    position = try_position_from_fen(args.fen)
    if position is None:
        _LOGGER.error("Malformed FEN: %s", args.fen)
        return 1
    for san in sorted(position.legal_moves):
        print(san)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chessnote",
        description="Read, normalise and inspect annotated chess games.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    fmt = subparsers.add_parser("format", help="Reprint every game of a PGN file.")
    fmt.add_argument("file", help="PGN file to read.")
    fmt.add_argument(
        "--digit-castling",
        action="store_true",
        help="Write castling as 0-0 instead of O-O.",
    )
    fmt.set_defaults(handler=_run_format)

    moves = subparsers.add_parser("moves", help="List the legal moves of a position.")
    moves.add_argument(
        "fen", nargs="?", default=STARTING_FEN, help="Position in FEN (default: start)."
    )
    moves.set_defaults(handler=_run_moves)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the chessnote command line."""
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
