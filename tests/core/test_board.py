"""Tests for Board and Piece."""

import pytest

from chessling.core.board import Board
from chessling.core.enums import Color, PieceType
from chessling.core.piece import Piece
from chessling.core.types import (
    A1, B1, C1, D1, E1, F1, G1, H1,
    E2, E4,
    A8, B8, C8, D8, E8, F8, G8, H8,
    Square,
)


class TestBoardInitial:
    def test_white_king_position(self) -> None:
        board = Board.initial()
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)

    def test_black_king_position(self) -> None:
        board = Board.initial()
        assert board[E8] == Piece(Color.BLACK, PieceType.KING)

    def test_white_back_rank_is_row_seven(self) -> None:
        board = Board.initial()
        expected = [
            (A1, PieceType.ROOK), (B1, PieceType.KNIGHT), (C1, PieceType.BISHOP),
            (D1, PieceType.QUEEN), (E1, PieceType.KING), (F1, PieceType.BISHOP),
            (G1, PieceType.KNIGHT), (H1, PieceType.ROOK),
        ]
        for sq, pt in expected:
            assert sq.row == 7
            assert board[sq] == Piece(Color.WHITE, pt), f"Mismatch at square {sq}"

    def test_black_back_rank_is_row_zero(self) -> None:
        board = Board.initial()
        expected = [
            (A8, PieceType.ROOK), (B8, PieceType.KNIGHT), (C8, PieceType.BISHOP),
            (D8, PieceType.QUEEN), (E8, PieceType.KING), (F8, PieceType.BISHOP),
            (G8, PieceType.KNIGHT), (H8, PieceType.ROOK),
        ]
        for sq, pt in expected:
            assert sq.row == 0
            assert board[sq] == Piece(Color.BLACK, pt), f"Mismatch at square {sq}"

    def test_pawns(self) -> None:
        board = Board.initial()
        for col in range(8):
            assert board[Square(6, col)] == Piece(Color.WHITE, PieceType.PAWN)
            assert board[Square(1, col)] == Piece(Color.BLACK, PieceType.PAWN)

    def test_empty_middle(self) -> None:
        board = Board.initial()
        for row in range(2, 6):
            for col in range(8):
                assert board[Square(row, col)] is None

    def test_nothing_has_moved(self) -> None:
        board = Board.initial()
        assert all(not piece.has_moved for _, piece in board.occupied())

    def test_sixteen_pieces_per_side(self) -> None:
        board = Board.initial()
        assert len(list(board.occupied(Color.WHITE))) == 16
        assert len(list(board.occupied(Color.BLACK))) == 16


class TestBoardOperations:
    def test_set_and_get(self) -> None:
        board = Board()
        piece = Piece(Color.WHITE, PieceType.PAWN)
        board[E4] = piece
        assert board[E4] == piece
        assert board.is_empty(E2)

    def test_copy_independence(self) -> None:
        board = Board.initial()
        copy = board.copy()
        assert board == copy
        copy[E1] = None
        assert board != copy
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)

    def test_equality_includes_moved_flag(self) -> None:
        a = Board()
        b = Board()
        a[E1] = Piece(Color.WHITE, PieceType.KING)
        b[E1] = Piece(Color.WHITE, PieceType.KING, has_moved=True)
        assert a != b

    def test_find_king(self) -> None:
        board = Board.initial()
        assert board.find_king(Color.WHITE) == E1
        assert board.find_king(Color.BLACK) == E8

    def test_find_king_missing(self) -> None:
        board = Board()
        board[E4] = Piece(Color.WHITE, PieceType.ROOK)
        assert board.find_king(Color.WHITE) is None

    def test_find_king_first_match_wins(self) -> None:
        board = Board()
        board[E1] = Piece(Color.WHITE, PieceType.KING)
        board[E4] = Piece(Color.WHITE, PieceType.KING)
        assert board.find_king(Color.WHITE) == E4

    def test_occupied_filters_by_color(self) -> None:
        board = Board.initial()
        assert all(p.color == Color.BLACK for _, p in board.occupied(Color.BLACK))

    def test_repr(self) -> None:
        text = repr(Board.initial())
        lines = text.splitlines()
        assert lines[0] == "8 r n b q k b n r"
        assert lines[7] == "1 R N B Q K B N R"
        assert lines[8] == "  a b c d e f g h"


class TestPiece:
    def test_fen_char_round_trip(self) -> None:
        for char in "PNBRQKpnbrqk":
            assert str(Piece.from_char(char)) == char

    def test_invalid_char(self) -> None:
        with pytest.raises(ValueError, match="Invalid piece character"):
            Piece.from_char("x")

    def test_symbol(self) -> None:
        assert Piece(Color.BLACK, PieceType.KNIGHT).symbol == "♞"

    def test_moved_sets_flag_without_touching_original(self) -> None:
        rook = Piece(Color.WHITE, PieceType.ROOK)
        moved = rook.moved()
        assert moved.has_moved
        assert not rook.has_moved
        assert moved.moved() is moved

    def test_promoted(self) -> None:
        pawn = Piece(Color.BLACK, PieceType.PAWN, has_moved=True)
        queen = pawn.promoted(PieceType.QUEEN)
        assert queen == Piece(Color.BLACK, PieceType.QUEEN, has_moved=True)
