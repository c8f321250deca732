"""Raw and legal move generation + check detection."""

from __future__ import annotations

from chessling.core.board import Board
from chessling.core.enums import Color, PieceType
from chessling.core.piece import Piece
from chessling.core.types import Square, is_on_board

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))

# (column offset of the rook from the king, column step of the king)
CASTLING_SIDES: tuple[tuple[int, int], ...] = ((3, 1), (-4, -1))

_PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}


class MoveGenerator:
    """Generates destinations for the pieces on a :class:`Board`.

    Destinations come in two flavours:

    * *raw* moves follow each piece's geometry and ignore whether the
      mover's own king is left attacked;
    * *legal* moves are raw moves that survive a simulation on a scratch
      copy of the board without leaving the mover's king in check.

    The wrapped board is only ever read.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def legal_moves(self, sq: Square) -> list[Square]:
        """Destinations for the piece on *sq* that keep its king safe."""
        piece = self._board[sq]
        if piece is None:
            return []
        return [
            to_sq
            for to_sq in self._piece_moves(sq, piece, with_castling=True)
            if not self._exposes_king(sq, to_sq, piece.color)
        ]

    def raw_moves(self, sq: Square) -> list[Square]:
        """Geometric destinations for the piece on *sq* (may leave own king in check)."""
        piece = self._board[sq]
        if piece is None:
            return []
        return self._piece_moves(sq, piece, with_castling=True)

    def all_legal_moves(self, color: Color) -> dict[Square, list[Square]]:
        """Legal destinations of every *color* piece that has at least one."""
        moves: dict[Square, list[Square]] = {}
        for sq, _ in self._board.occupied(color):
            destinations = self.legal_moves(sq)
            if destinations:
                moves[sq] = destinations
        return moves

    def has_legal_moves(self, color: Color) -> bool:
        """Whether any *color* piece has a legal move. Stops at the first hit."""
        return any(self.legal_moves(sq) for sq, _ in self._board.occupied(color))

    # -- Check detection ----------------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?

        A board without a *color* king is never in check.
        """
        king_sq = self._board.find_king(color)
        if king_sq is None:
            return False
        for sq, piece in self._board.occupied(color.opposite):
            # Castling lands on an empty square, so it can never hit the king.
            if king_sq in self._piece_moves(sq, piece, with_castling=False):
                return True
        return False

    def _exposes_king(self, from_sq: Square, to_sq: Square, color: Color) -> bool:
        """Would relocating the piece on *from_sq* to *to_sq* leave *color* in check?"""
        scratch = self._board.copy()
        scratch[to_sq] = scratch[from_sq]
        scratch[from_sq] = None
        return MoveGenerator(scratch).is_in_check(color)

    # -- Piece-specific generators (private) -------------------------------

    def _piece_moves(
        self, sq: Square, piece: Piece, *, with_castling: bool
    ) -> list[Square]:
        moves: list[Square] = []
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn(sq, piece.color, moves)
        elif ptype == PieceType.KNIGHT:
            self._gen_steps(sq, piece.color, KNIGHT_OFFSETS, moves)
        elif ptype == PieceType.BISHOP:
            self._gen_sliding(sq, piece.color, BISHOP_DIRS, moves)
        elif ptype == PieceType.ROOK:
            self._gen_sliding(sq, piece.color, ROOK_DIRS, moves)
        elif ptype == PieceType.QUEEN:
            self._gen_sliding(sq, piece.color, ROOK_DIRS, moves)
            self._gen_sliding(sq, piece.color, BISHOP_DIRS, moves)
        elif ptype == PieceType.KING:
            self._gen_steps(sq, piece.color, KING_OFFSETS, moves)
            if with_castling:
                self._gen_castling(sq, piece, moves)
        else:
            raise AssertionError(f"Unhandled piece type: {ptype!r}")
        return moves

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Square]) -> None:
        board = self._board
        row, col = sq
        direction = color.forward

        one_row = row + direction
        if is_on_board(one_row, col) and board.is_empty(Square(one_row, col)):
            moves.append(Square(one_row, col))
            two_step = Square(row + 2 * direction, col)
            if row == _PAWN_START_ROW[color] and board.is_empty(two_step):
                moves.append(two_step)

        # No en passant: the board keeps no record of the previous move.
        for d_col in (-1, 1):
            cap_col = col + d_col
            if not is_on_board(one_row, cap_col):
                continue
            target = board[Square(one_row, cap_col)]
            if target is not None and target.color != color:
                moves.append(Square(one_row, cap_col))

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        offsets: tuple[tuple[int, int], ...],
        moves: list[Square],
    ) -> None:
        board = self._board
        for d_row, d_col in offsets:
            row = sq.row + d_row
            col = sq.col + d_col
            if not is_on_board(row, col):
                continue
            to_sq = Square(row, col)
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(to_sq)

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        directions: tuple[tuple[int, int], ...],
        moves: list[Square],
    ) -> None:
        board = self._board
        for d_row, d_col in directions:
            row = sq.row + d_row
            col = sq.col + d_col
            while is_on_board(row, col):
                to_sq = Square(row, col)
                target = board[to_sq]
                if target is None:
                    moves.append(to_sq)
                    row += d_row
                    col += d_col
                    continue
                if target.color != color:
                    moves.append(to_sq)
                break

    def _gen_castling(self, king_sq: Square, king: Piece, moves: list[Square]) -> None:
        """Offer the two-square king step towards each eligible rook.

        The king may not be in check and may not pass through an attacked
        square. The landing square itself is not tested here; the legality
        filter that follows only covers the king's displacement.
        """
        if king.has_moved:
            return

        board = self._board
        row, col = king_sq
        in_check: bool | None = None

        for rook_offset, step in CASTLING_SIDES:
            rook_col = col + rook_offset
            if not 0 <= rook_col < 8:
                continue
            rook = board[Square(row, rook_col)]
            if (
                rook is None
                or rook.piece_type != PieceType.ROOK
                or rook.color != king.color
                or rook.has_moved
            ):
                continue
            between = range(min(col, rook_col) + 1, max(col, rook_col))
            if any(not board.is_empty(Square(row, c)) for c in between):
                continue

            if in_check is None:
                in_check = self.is_in_check(king.color)
            if in_check:
                return
            if self._exposes_king(king_sq, king_sq.offset(0, step), king.color):
                continue
            moves.append(king_sq.offset(0, 2 * step))
