"""Tests for converting engine output into SAN lines."""

import logging

import pytest

from chessnote.analysis import (
    MATE_SCORE_CP,
    PrincipalVariation,
    line_from_uci,
    lines_from_pvs,
    parse_uci_info,
    uci_to_move,
)
from chessnote.core.enums import PieceType
from chessnote.core.notation import position_from_fen
from chessnote.core.position import Position


class TestUciToMove:
    def test_legal(self) -> None:
        move = uci_to_move(Position.initial(), "e2e4")
        assert move is not None
        assert move.uci == "e2e4"

    def test_promotion(self) -> None:
        pos = position_from_fen("8/P7/8/8/8/8/8/k6K w - - 0 1")
        move = uci_to_move(pos, "a7a8n")
        assert move is not None
        assert move.promotion == PieceType.KNIGHT
        assert uci_to_move(pos, "a7a8") is None

    @pytest.mark.parametrize("uci", ["e7e5", "e2e5", "zz", "e2e9", "a7a8x", ""])
    def test_not_legal_or_malformed(self, uci: str) -> None:
        assert uci_to_move(Position.initial(), uci) is None


class TestLineFromUci:
    def test_white_to_move(self) -> None:
        line = line_from_uci(
            Position.initial(), ["e2e4", "e7e5", "g1f3"], rank=1, depth=12, score_cp=30
        )
        assert line.san_line == "1. e4 e5 2. Nf3"
        assert line.score_cp == 30
        assert line.score_pawns == pytest.approx(0.3)
        assert line.first_move is not None and line.first_move.uci == "e2e4"
        assert line.depth == 12

    def test_black_to_move_flips_score(self, play) -> None:
        line = line_from_uci(play("e4"), ["e7e5", "g1f3"], score_cp=30)
        assert line.san_line == "1... e5 2. Nf3"
        assert line.score_cp == -30

    def test_mate_suffix(self, play) -> None:
        pos = play("e4", "e5", "Bc4", "Nc6", "Qh5", "Nf6")
        assert line_from_uci(pos, ["h5f7"]).san_line == "4. Qxf7#"

    def test_truncated_at_illegal_move(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING):
            line = line_from_uci(Position.initial(), ["e2e4", "e2e4", "g1f3"])
        assert line.san_line == "1. e4"
        assert "truncated" in caplog.text

    def test_empty(self) -> None:
        line = line_from_uci(Position.initial(), [])
        assert line.san_line == ""
        assert line.first_move is None

    def test_lines_sorted_by_rank(self) -> None:
        pvs = [
            PrincipalVariation(rank=2, depth=10, score_cp=10, moves=("d2d4",)),
            PrincipalVariation(rank=1, depth=10, score_cp=25, moves=("e2e4",)),
        ]
        lines = lines_from_pvs(Position.initial(), pvs)
        assert [line.rank for line in lines] == [1, 2]
        assert [line.san_line for line in lines] == ["1. e4", "1. d4"]


class TestParseUciInfo:
    def test_centipawns(self) -> None:
        pv = parse_uci_info(
            "info depth 19 multipv 2 score cp 36 nodes 1119774 pv d2d4 d7d5"
        )
        assert pv == PrincipalVariation(
            rank=2, depth=19, score_cp=36, moves=("d2d4", "d7d5")
        )

    def test_default_rank(self) -> None:
        pv = parse_uci_info("info depth 3 score cp -12 pv e2e4")
        assert pv is not None
        assert pv.rank == 1
        assert pv.score_cp == -12

    def test_mate_scores(self) -> None:
        winning = parse_uci_info("info depth 5 score mate 3 pv h5f7")
        losing = parse_uci_info("info depth 5 score mate -2 pv e8e7")
        assert winning is not None and winning.score_cp == MATE_SCORE_CP - 3
        assert losing is not None and losing.score_cp == -MATE_SCORE_CP + 2

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "bestmove e2e4 ponder e7e5",
            "info depth 5 nodes 10",
            "info depth 3 pv e2e4",
            "info depth x score cp 1 pv e2e4",
            "info score cp 1 pv e2e4",
        ],
    )
    def test_ignored_lines(self, text: str) -> None:
        assert parse_uci_info(text) is None
