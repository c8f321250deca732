"""Tests for GameSession."""

import logging

import pytest

from chessling.core.enums import Color, GameStatus, PieceType
from chessling.core.executor import IllegalMoveError
from chessling.core.notation import STARTING_FEN
from chessling.core.piece import Piece
from chessling.core.types import (
    B8, C4, C6, D1, D5, D7, D8, E1, E2, E3, E4, E5, E7, E8, F1, F2, F3, F6, F7,
    G1, G2, G4, G8, H4, H5,
)
from chessling.game.state import GameOverError, GameSession

PROMOTION_FEN = "k7/4P3/8/8/8/8/8/4K3 w - - 0 1"


def scholars_mate(game: GameSession) -> None:
    for from_sq, to_sq in (
        (E2, E4), (E7, E5),
        (F1, C4), (B8, C6),
        (D1, H5), (G8, F6),
        (H5, F7),
    ):
        game.play(from_sq, to_sq)


class TestGameSessionSetup:
    def test_default(self) -> None:
        game = GameSession()
        assert game.side_to_move == Color.WHITE
        assert game.status == GameStatus.PLAYING
        assert game.ply_count == 0
        assert game.fen() == STARTING_FEN
        assert game.captured == {Color.WHITE: [], Color.BLACK: []}

    def test_setup_custom_fen(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"
        game = GameSession()
        game.setup(fen)
        assert game.side_to_move == Color.BLACK
        assert game.start_fen == fen

    def test_setup_resets(self) -> None:
        game = GameSession()
        game.play(E2, E4)
        game.play(D7, D5)
        game.play(E4, D5)
        assert game.ply_count == 3
        game.setup()
        assert game.ply_count == 0
        assert game.side_to_move == Color.WHITE
        assert game.captured == {Color.WHITE: [], Color.BLACK: []}

    def test_setup_classifies_start_position(self) -> None:
        game = GameSession()
        game.setup("k7/P7/1K6/8/8/8/8/8 b - - 0 1")
        assert game.status == GameStatus.STALEMATE
        assert game.is_game_over
        assert game.winner is None


class TestGameSessionMoves:
    def test_play_records(self) -> None:
        game = GameSession()
        move = game.play(E2, E4)
        assert str(move) == "e2e4"
        assert game.side_to_move == Color.BLACK
        assert game.last_move is move
        assert game.fen() == (
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"
        )

    def test_earlier_boards_are_not_mutated(self) -> None:
        game = GameSession()
        before = game.board
        game.play(E2, E4)
        assert before[E2] == Piece(Color.WHITE, PieceType.PAWN)
        assert game.board is not before

    def test_fullmove_display(self) -> None:
        game = GameSession()
        assert game.fullmove_display == 1
        game.play(E2, E4)
        assert game.fullmove_display == 1  # still move 1 (black hasn't moved)
        game.play(D7, D5)
        assert game.fullmove_display == 2  # move 2 now

    def test_captures_grouped_by_captured_color(self) -> None:
        game = GameSession()
        game.play(E2, E4)
        game.play(D7, D5)
        move = game.play(E4, D5)
        assert move.is_capture
        assert game.captured[Color.BLACK] == [
            Piece(Color.BLACK, PieceType.PAWN, has_moved=True)
        ]
        game.play(D8, D5)
        assert game.captured[Color.WHITE] == [
            Piece(Color.WHITE, PieceType.PAWN, has_moved=True)
        ]

    def test_opponent_piece_rejected(self) -> None:
        game = GameSession()
        with pytest.raises(IllegalMoveError, match="No white piece on e7"):
            game.play(E7, E5)

    def test_illegal_destination_rejected(self) -> None:
        game = GameSession()
        with pytest.raises(IllegalMoveError):
            game.play(E2, E5)
        assert game.ply_count == 0
        assert game.side_to_move == Color.WHITE

    def test_legal_moves_only_for_side_to_move(self) -> None:
        game = GameSession()
        assert sorted(game.legal_moves(E2)) == [E4, E3]
        assert game.legal_moves(E7) == []
        assert game.legal_moves(E4) == []

    def test_castling_recorded(self) -> None:
        game = GameSession()
        game.setup("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        move = game.play(E1, G1)
        assert move.is_castling
        assert game.board[F1] == Piece(Color.WHITE, PieceType.ROOK, has_moved=True)
        assert game.fen().split()[2] == "kq"


class TestGameSessionPromotion:
    def test_needs_promotion(self) -> None:
        game = GameSession()
        game.setup(PROMOTION_FEN)
        assert game.needs_promotion(E7, E8)
        assert not game.needs_promotion(E1, E2)

    def test_promotion_choice_required(self) -> None:
        game = GameSession()
        game.setup(PROMOTION_FEN)
        with pytest.raises(IllegalMoveError, match="promotion"):
            game.play(E7, E8)

    def test_promote_to_queen(self) -> None:
        game = GameSession()
        game.setup(PROMOTION_FEN)
        move = game.play(E7, E8, PieceType.QUEEN)
        assert move.promotion == PieceType.QUEEN
        assert move.piece == Piece(Color.WHITE, PieceType.QUEEN, has_moved=True)
        assert move.is_check
        assert game.status == GameStatus.CHECK
        assert game.board[E8].piece_type == PieceType.QUEEN


class TestGameSessionTermination:
    def test_fools_mate_detected(self) -> None:
        game = GameSession()
        game.play(F2, F3)
        game.play(E7, E5)
        game.play(G2, G4)
        move = game.play(D8, H4)
        assert move.is_checkmate
        assert game.status == GameStatus.CHECKMATE
        assert game.is_game_over
        assert game.winner == Color.BLACK

    def test_scholars_mate_detected(self) -> None:
        game = GameSession()
        scholars_mate(game)
        assert game.status == GameStatus.CHECKMATE
        assert game.winner == Color.WHITE
        assert game.captured[Color.BLACK] == [
            Piece(Color.BLACK, PieceType.PAWN)
        ]

    def test_check_status(self) -> None:
        game = GameSession()
        for from_sq, to_sq in ((E2, E4), (E7, E5), (D1, H5), (B8, C6), (H5, F7)):
            game.play(from_sq, to_sq)
        assert game.status == GameStatus.CHECK
        assert not game.is_game_over
        game.play(E8, F7)
        assert game.status == GameStatus.PLAYING

    def test_no_moves_after_game_over(self) -> None:
        game = GameSession()
        scholars_mate(game)
        with pytest.raises(GameOverError, match="checkmate"):
            game.play(E8, F7)

    def test_game_over_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        game = GameSession()
        with caplog.at_level(logging.INFO, logger="chessling.game.state"):
            scholars_mate(game)
        assert "Game over after 7 plies: checkmate" in caplog.text
