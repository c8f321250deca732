"""Move record and move-application result value objects."""

from __future__ import annotations

from dataclasses import dataclass

from chessling.core.board import Board
from chessling.core.enums import PieceType
from chessling.core.piece import Piece
from chessling.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class MoveResult:
    """Outcome of applying a move to a board.

    ``is_check`` and ``is_checkmate`` describe the opponent of the piece
    that moved, evaluated on the new board.
    """

    board: Board
    captured: Piece | None = None
    is_check: bool = False
    is_checkmate: bool = False


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable record of a completed move, as kept in a game history."""

    piece: Piece  # post-move: promoted type, has_moved set
    from_sq: Square
    to_sq: Square
    captured: Piece | None = None
    promotion: PieceType | None = None
    is_check: bool = False
    is_checkmate: bool = False

    @classmethod
    def from_result(
        cls,
        result: MoveResult,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> Move:
        piece = result.board[to_sq]
        assert piece is not None
        return cls(
            piece=piece,
            from_sq=from_sq,
            to_sq=to_sq,
            captured=result.captured,
            promotion=promotion,
            is_check=result.is_check,
            is_checkmate=result.is_checkmate,
        )

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_castling(self) -> bool:
        return (
            self.piece.piece_type == PieceType.KING
            and abs(self.to_sq.col - self.from_sq.col) == 2
        )

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Long-algebraic coordinates, e.g. ``e2e4`` or ``e7e8q``."""
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base
