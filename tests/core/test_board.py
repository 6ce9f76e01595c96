"""Tests for Square, Piece and the immutable Board."""

import pytest

from chessnote.core.board import Board
from chessnote.core.enums import Color, PieceType
from chessnote.core.errors import MalformedInput
from chessnote.core.piece import Piece
from chessnote.core.types import (
    A1, A8, D1, E1, E4, E8, H8,
    Square,
    parse_square,
    square_name,
)


class TestSquare:
    def test_named_constants(self) -> None:
        assert A8 == Square(0, 0)
        assert A1 == Square(7, 0)
        assert E4 == Square(4, 4)
        assert H8 == Square(0, 7)

    def test_parse_and_name(self) -> None:
        assert parse_square("e4") == E4
        assert square_name(E4) == "e4"
        assert str(parse_square("a1")) == "a1"

    @pytest.mark.parametrize("name", ["", "e", "i4", "e9", "e0", "e44"])
    def test_parse_invalid(self, name: str) -> None:
        with pytest.raises(ValueError):
            parse_square(name)

    def test_validity(self) -> None:
        assert Square(0, 7).is_valid
        assert not Square(-1, 0).is_valid
        assert not Square(0, 8).is_valid
        assert not A1.offset(1, 0).is_valid

    def test_offset(self) -> None:
        assert E4.offset(-1, 1) == parse_square("f5")

    def test_hashable(self) -> None:
        assert len({Square(4, 4), E4, parse_square("e4")}) == 1


class TestPiece:
    def test_fen_chars(self) -> None:
        assert str(Piece(Color.WHITE, PieceType.QUEEN)) == "Q"
        assert str(Piece(Color.BLACK, PieceType.KNIGHT)) == "n"

    def test_from_char(self) -> None:
        assert Piece.from_char("k") == Piece(Color.BLACK, PieceType.KING)
        assert Piece.from_char("P") == Piece(Color.WHITE, PieceType.PAWN)

    @pytest.mark.parametrize("char", ["x", "", "Nn", "1"])
    def test_from_char_invalid(self, char: str) -> None:
        with pytest.raises(MalformedInput):
            Piece.from_char(char)

    def test_fen_letter_follows_san_letter(self) -> None:
        for kind in PieceType:
            white = Piece(Color.WHITE, kind)
            black = Piece(Color.BLACK, kind)
            assert white.fen_letter == (kind.letter or "P")
            assert black.fen_letter == white.fen_letter.lower()
            assert Piece.from_char(white.fen_letter) == white
            assert Piece.from_char(black.fen_letter) == black

    def test_piece_letters(self) -> None:
        assert PieceType.PAWN.letter == ""
        assert PieceType.KNIGHT.letter == "N"
        assert PieceType.from_letter("q") == PieceType.QUEEN


class TestBoard:
    def test_initial_layout(self) -> None:
        board = Board.initial()
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)
        assert board[D1] == Piece(Color.WHITE, PieceType.QUEEN)
        assert board[E8] == Piece(Color.BLACK, PieceType.KING)
        assert board.is_empty(E4)
        assert len(board.pieces(Color.WHITE)) == 16
        assert len(board.pieces(Color.BLACK)) == 16

    def test_king_squares(self) -> None:
        board = Board.initial()
        assert board.king_square(Color.WHITE) == E1
        assert board.king_square(Color.BLACK) == E8

    def test_missing_king(self) -> None:
        assert Board().king_square(Color.WHITE) is None

    def test_with_pieces_returns_new_board(self) -> None:
        board = Board.initial()
        queen = Piece(Color.WHITE, PieceType.QUEEN)
        moved = board.with_pieces({D1: None, E4: queen})
        assert moved[E4] == queen
        assert moved.is_empty(D1)
        assert board[D1] == queen
        assert board.is_empty(E4)

    def test_piece_at_off_board(self) -> None:
        assert Board.initial().piece_at(8, 0) is None
        assert Board.initial().piece_at(0, -1) is None

    def test_equality_and_hash(self) -> None:
        assert Board.initial() == Board.initial()
        assert hash(Board.initial()) == hash(Board.initial())
        assert Board.initial() != Board()

    def test_bad_grid_shape(self) -> None:
        with pytest.raises(ValueError):
            Board(((None,) * 8,) * 7)
