"""Tests for the PGN event scanner."""

import pytest

from chessnote.core.errors import MalformedInput
from chessnote.core.notation import (
    BraceComment,
    GameEnd,
    LineComment,
    MoveToken,
    NumericGlyph,
    TagPair,
    Termination,
    VariationEnd,
    VariationStart,
    escape_tag_value,
    pgn_events,
    unescape_tag_value,
)


def _events(text: str) -> list:
    return list(pgn_events(text))


class TestTags:
    def test_tag_pairs_in_order(self) -> None:
        events = _events('[Event "Casual"]\n[White "Anna"]\n\n1. e4 *\n')
        assert events[:2] == [TagPair("Event", "Casual"), TagPair("White", "Anna")]

    def test_escaped_value(self) -> None:
        events = _events('[Event "The \\"Big\\" One"]\n\n*\n')
        assert events[0] == TagPair("Event", 'The "Big" One')

    def test_invalid_header(self) -> None:
        with pytest.raises(MalformedInput):
            _events('[Event Casual]\n\n1. e4 *\n')

    def test_escape_round_trip(self) -> None:
        raw = 'a "quoted" \\ value'
        assert unescape_tag_value(escape_tag_value(raw)) == raw
        assert escape_tag_value('"') == '\\"'


class TestMovetext:
    def test_move_numbers_stripped(self) -> None:
        events = _events("1. e4 e5 2.Nf3 2... Nc6 *")
        moves = [e.text for e in events if isinstance(e, MoveToken)]
        assert moves == ["e4", "e5", "Nf3", "Nc6"]

    def test_attached_glyph_kept_on_move(self) -> None:
        events = _events("1. e4!? *")
        assert MoveToken("e4!?") in events

    def test_standalone_glyphs_become_nags(self) -> None:
        events = _events("1. e4 !! e5 ?! $14 *")
        nags = [e.text for e in events if isinstance(e, NumericGlyph)]
        assert nags == ["$3", "$6", "$14"]

    def test_comments(self) -> None:
        events = _events("1. e4 {best   by\ntest} e5 ; solid reply\n2. Nf3 *")
        assert BraceComment("best by test") in events
        assert LineComment("solid reply") in events
        assert MoveToken("Nf3") in events

    def test_variation_markers(self) -> None:
        events = _events("1. e4 (1. d4 d5) e5 *")
        assert events == [
            MoveToken("e4"),
            VariationStart(),
            MoveToken("d4"),
            MoveToken("d5"),
            VariationEnd(),
            MoveToken("e5"),
            Termination("*"),
            GameEnd(),
        ]

    def test_unterminated_comment_runs_to_end(self) -> None:
        events = _events("1. e4 {unfinished")
        assert events[-2:] == [BraceComment("unfinished"), GameEnd()]

    def test_escape_lines_skipped(self) -> None:
        events = _events("% exported by hand\n1. e4 *")
        assert events == [MoveToken("e4"), Termination("*"), GameEnd()]

    def test_bracket_inside_comment_is_not_a_header(self) -> None:
        events = _events("1. e4 {see\n[analysis] below} e5 *")
        assert BraceComment("see [analysis] below") in events
        assert MoveToken("e5") in events


class TestGameBoundaries:
    def test_one_game_end_per_game(self) -> None:
        text = '[Event "A"]\n\n1. e4 1-0\n\n[Event "B"]\n\n1. d4 0-1\n'
        events = _events(text)
        assert events.count(GameEnd()) == 2
        assert Termination("1-0") in events
        assert Termination("0-1") in events

    def test_missing_result_still_ends_game(self) -> None:
        events = _events('[Event "A"]\n\n1. e4 e5\n')
        assert events[-1] == GameEnd()
        assert not any(isinstance(e, Termination) for e in events)

    def test_result_without_tags_splits_games(self) -> None:
        events = _events("1. e4 1-0 1. d4 1/2-1/2")
        assert events.count(GameEnd()) == 2

    def test_empty_text(self) -> None:
        assert _events("") == []
        assert _events("\n\n") == []
