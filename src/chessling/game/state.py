"""Game session: board, side to move, status, history and captures."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from chessling.core.board import Board
from chessling.core.enums import Color, GameStatus, PieceType
from chessling.core.executor import (
    IllegalMoveError,
    apply_move_checked,
    needs_promotion,
)
from chessling.core.move import Move
from chessling.core.move_generator import MoveGenerator
from chessling.core.notation import STARTING_FEN, board_to_fen, parse_fen
from chessling.core.piece import Piece
from chessling.core.rules import Rules
from chessling.core.types import Square, square_name

_LOGGER = logging.getLogger(__name__)


class GameOverError(RuntimeError):
    """Raised when a move is submitted after checkmate or stalemate."""


def _empty_captures() -> dict[Color, list[Piece]]:
    return {Color.WHITE: [], Color.BLACK: []}


@dataclass
class GameSession:
    """Headless two-player game on top of the rules engine.

    Each move replaces :attr:`board` with the board returned by the
    executor; earlier boards are never touched. Captured pieces are
    grouped by their own color.

    Plain data and logic, with no threading or UI.
    """

    board: Board = field(init=False)
    side_to_move: Color = field(default=Color.WHITE, init=False)
    status: GameStatus = field(default=GameStatus.PLAYING, init=False)
    move_history: list[Move] = field(default_factory=list, init=False)
    captured: dict[Color, list[Piece]] = field(
        default_factory=_empty_captures, init=False
    )
    start_fen: str = field(default=STARTING_FEN, init=False)

    def __post_init__(self) -> None:
        self.setup()

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, fen: str | None = None) -> None:
        """Initialise (or reset) the game."""
        self.start_fen = fen or STARTING_FEN
        self.board, self.side_to_move = parse_fen(self.start_fen)
        self.move_history.clear()
        self.captured = _empty_captures()
        self.status = Rules.classify(self.board, self.side_to_move)

    # ── Move application ─────────────────────────────────────────────────

    def play(
        self,
        from_sq: Square,
        to_sq: Square,
        promote_to: PieceType | None = None,
    ) -> Move:
        """Validate and apply a move for the side to move.

        Raises:
            GameOverError: the game already ended.
            IllegalMoveError: the move is not legal for the side to move,
                or *promote_to* is missing/unexpected.
        """
        if self.status.is_terminal:
            raise GameOverError(f"Game is over ({self.status})")

        piece = self.board[from_sq]
        if piece is None or piece.color != self.side_to_move:
            raise IllegalMoveError(
                f"No {self.side_to_move} piece on {square_name(from_sq)}"
            )

        result = apply_move_checked(self.board, from_sq, to_sq, promote_to)
        move = Move.from_result(result, from_sq, to_sq, promote_to)

        if result.captured is not None:
            self.captured[result.captured.color].append(result.captured)
        self.move_history.append(move)
        self.board = result.board
        self.side_to_move = self.side_to_move.opposite
        self.status = Rules.classify(self.board, self.side_to_move)

        _LOGGER.debug("Played %s, %s to move: %s", move, self.side_to_move, self.status)
        if self.status.is_terminal:
            _LOGGER.info(
                "Game over after %d plies: %s", self.ply_count, self.status
            )
        return move

    # ── Query helpers ────────────────────────────────────────────────────

    def legal_moves(self, sq: Square) -> list[Square]:
        """Legal destinations for the side to move's piece on *sq*."""
        piece = self.board[sq]
        if piece is None or piece.color != self.side_to_move:
            return []
        return MoveGenerator(self.board).legal_moves(sq)

    def needs_promotion(self, from_sq: Square, to_sq: Square) -> bool:
        """Whether playing *from_sq* → *to_sq* requires a promotion choice."""
        return needs_promotion(self.board, from_sq, to_sq)

    @property
    def is_game_over(self) -> bool:
        return self.status.is_terminal

    @property
    def winner(self) -> Color | None:
        """Color that delivered checkmate, if any."""
        if self.status == GameStatus.CHECKMATE:
            return self.side_to_move.opposite
        return None

    @property
    def last_move(self) -> Move | None:
        return self.move_history[-1] if self.move_history else None

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    @property
    def fullmove_display(self) -> int:
        """Current full-move number for display."""
        return (self.ply_count // 2) + 1

    def fen(self) -> str:
        """Current position as FEN."""
        return board_to_fen(self.board, self.side_to_move)
