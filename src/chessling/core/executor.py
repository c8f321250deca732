"""Move application: plain moves, castling and promotion."""

from __future__ import annotations

import logging
from typing import NoReturn

from chessling.core.board import Board
from chessling.core.enums import Color, PieceType
from chessling.core.move import MoveResult
from chessling.core.move_generator import MoveGenerator
from chessling.core.types import Square, is_on_board, square_name

_LOGGER = logging.getLogger(__name__)

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

_PROMOTION_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}


class IllegalMoveError(ValueError):
    """Raised by the checked entry points when a move is not legal."""


def apply_move(board: Board, from_sq: Square, to_sq: Square) -> MoveResult:
    """Apply a move and return the resulting board.

    The destination is trusted: callers must pick *to_sq* from
    ``MoveGenerator(board).legal_moves(from_sq)``. An illegal destination
    still yields a well-formed board, but not one reachable by the rules.
    Use :func:`apply_move_checked` when the move comes from outside.
    """
    return _execute(board, from_sq, to_sq, None)


def apply_promotion(
    board: Board, from_sq: Square, to_sq: Square, promote_to: PieceType
) -> MoveResult:
    """Apply a pawn move that promotes to *promote_to* on arrival.

    Same trust contract as :func:`apply_move`.
    """
    if promote_to not in PROMOTION_TYPES:
        raise ValueError(f"Invalid promotion piece type: {promote_to!r}")
    return _execute(board, from_sq, to_sq, promote_to)


def apply_move_checked(
    board: Board,
    from_sq: Square,
    to_sq: Square,
    promote_to: PieceType | None = None,
) -> MoveResult:
    """Validate a move against the rules, then apply it.

    *promote_to* is required exactly when the move promotes a pawn.

    Raises:
        IllegalMoveError: origin is empty, destination is not a legal
            move, or the promotion choice does not fit the move.
    """
    piece = board[from_sq]
    if piece is None:
        _reject(from_sq, to_sq, "no piece on origin square")
    if to_sq not in MoveGenerator(board).legal_moves(from_sq):
        _reject(from_sq, to_sq, f"{piece.piece_type} cannot move there")

    promoting = needs_promotion(board, from_sq, to_sq)
    if promoting and promote_to is None:
        _reject(from_sq, to_sq, "promotion piece type required")
    if not promoting and promote_to is not None:
        _reject(from_sq, to_sq, "move does not promote")

    if promote_to is not None:
        return apply_promotion(board, from_sq, to_sq, promote_to)
    return apply_move(board, from_sq, to_sq)


def needs_promotion(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """Whether moving the piece on *from_sq* to *to_sq* lands a pawn on its last row."""
    piece = board[from_sq]
    return (
        piece is not None
        and piece.piece_type == PieceType.PAWN
        and to_sq.row == _PROMOTION_ROW[piece.color]
    )


# ── Internals ────────────────────────────────────────────────────────────────


def _execute(
    board: Board,
    from_sq: Square,
    to_sq: Square,
    promote_to: PieceType | None,
) -> MoveResult:
    piece = board[from_sq]
    if piece is None:
        return MoveResult(board.copy())

    new_board = board.copy()

    if piece.piece_type == PieceType.KING and abs(to_sq.col - from_sq.col) == 2:
        _slide_castling_rook(new_board, from_sq, to_sq)

    captured = board[to_sq]
    if promote_to is not None:
        new_board[to_sq] = piece.promoted(promote_to)
    else:
        new_board[to_sq] = piece.moved()
    new_board[from_sq] = None

    opponent = piece.color.opposite
    gen = MoveGenerator(new_board)
    is_check = gen.is_in_check(opponent)
    is_checkmate = is_check and not gen.has_legal_moves(opponent)

    return MoveResult(
        board=new_board,
        captured=captured,
        is_check=is_check,
        is_checkmate=is_checkmate,
    )


def _slide_castling_rook(board: Board, king_from: Square, king_to: Square) -> None:
    """Move the castling rook onto the square the king passed over."""
    if king_to.col > king_from.col:
        rook_from = king_from.offset(0, 3)
        rook_to = king_from.offset(0, 1)
    else:
        rook_from = king_from.offset(0, -4)
        rook_to = king_from.offset(0, -1)
    if not is_on_board(*rook_from):
        return

    rook = board[rook_from]
    board[rook_to] = rook.moved() if rook is not None else None
    board[rook_from] = None


def _reject(from_sq: Square, to_sq: Square, reason: str) -> NoReturn:
    _LOGGER.debug(
        "Rejected move %s%s: %s", square_name(from_sq), square_name(to_sq), reason
    )
    raise IllegalMoveError(
        f"Illegal move {square_name(from_sq)}{square_name(to_sq)}: {reason}"
    )
