"""High-level chess rules: check, checkmate, stalemate classification."""

from __future__ import annotations

from chessling.core.board import Board
from chessling.core.enums import Color, GameStatus
from chessling.core.move_generator import MoveGenerator


class Rules:
    """Static rule-checker that operates on a :class:`Board` and a side to move."""

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return MoveGenerator(board).is_in_check(color)

    @staticmethod
    def is_checkmate(board: Board, color: Color) -> bool:
        gen = MoveGenerator(board)
        if not gen.is_in_check(color):
            return False
        return not gen.has_legal_moves(color)

    @staticmethod
    def is_stalemate(board: Board, color: Color) -> bool:
        gen = MoveGenerator(board)
        if gen.is_in_check(color):
            return False
        return not gen.has_legal_moves(color)

    @staticmethod
    def classify(board: Board, color_to_move: Color) -> GameStatus:
        """Status of the game from *color_to_move*'s point of view.

        Only the existence of a legal move matters, so the scan stops at
        the first piece that has one.
        """
        gen = MoveGenerator(board)
        can_move = gen.has_legal_moves(color_to_move)

        if gen.is_in_check(color_to_move):
            return GameStatus.CHECK if can_move else GameStatus.CHECKMATE
        return GameStatus.PLAYING if can_move else GameStatus.STALEMATE
