"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from chessling.core import Board, Color, MoveGenerator, Rules, apply_move
    from chessling.core.types import E2, E4

    board = Board.initial()
    assert E4 in MoveGenerator(board).legal_moves(E2)
    result = apply_move(board, E2, E4)
    status = Rules.classify(result.board, Color.BLACK)
"""

from chessling.core.board import Board
from chessling.core.enums import Color, GameStatus, PieceType
from chessling.core.executor import (
    PROMOTION_TYPES,
    IllegalMoveError,
    apply_move,
    apply_move_checked,
    apply_promotion,
    needs_promotion,
)
from chessling.core.move import Move, MoveResult
from chessling.core.move_generator import MoveGenerator
from chessling.core.notation import (
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
    parse_fen,
)
from chessling.core.piece import Piece
from chessling.core.rules import Rules
from chessling.core.types import Square, is_on_board, parse_square, square_name

__all__ = [
    # Enums
    "Color",
    "GameStatus",
    "PieceType",
    # Types / helpers
    "Square",
    "is_on_board",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "MoveResult",
    "Piece",
    "Rules",
    # Move application
    "PROMOTION_TYPES",
    "IllegalMoveError",
    "apply_move",
    "apply_move_checked",
    "apply_promotion",
    "needs_promotion",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
    "parse_fen",
]
