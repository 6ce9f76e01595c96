"""Tests for the command-line entry point."""

from pathlib import Path

import pytest

from chessnote.app import build_parser, main

PGN = '[Event "Club"]\n\n1. e4 e5 2. Nf3 Nc6 3. Bc4 Bc5 4. O-O 1-0\n'


class TestMoves:
    def test_starting_position(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["moves"]) == 0
        out = capsys.readouterr().out.split()
        assert len(out) == 20
        assert "e4" in out
        assert out == sorted(out)

    def test_custom_fen(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["moves", "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"]) == 0
        out = capsys.readouterr().out.split()
        assert "0-0" in out
        assert "0-0-0" in out

    def test_malformed_fen(self) -> None:
        assert main(["moves", "not a fen"]) == 1


class TestFormat:
    def test_reprints_games(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "games.pgn"
        path.write_text(PGN + "\n" + PGN, encoding="utf-8")
        assert main(["format", str(path)]) == 0
        out = capsys.readouterr().out
        assert out.count('[Event "Club"]') == 2
        assert '[Site "???"]' in out
        assert "4. O-O 1-0" in out

    def test_digit_castling(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "game.pgn"
        path.write_text(PGN, encoding="utf-8")
        assert main(["format", "--digit-castling", str(path)]) == 0
        assert "4. 0-0 1-0" in capsys.readouterr().out

    def test_missing_file(self, tmp_path: Path) -> None:
        assert main(["format", str(tmp_path / "absent.pgn")]) == 1

    def test_bad_header(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.pgn"
        path.write_text("[Event]\n\n1. e4 *\n", encoding="utf-8")
        assert main(["format", str(path)]) == 1


class TestParser:
    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_verbose_flag(self) -> None:
        args = build_parser().parse_args(["-v", "moves"])
        assert args.verbose
        assert args.command == "moves"
