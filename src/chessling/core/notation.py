"""FEN parsing and serialisation for setting up positions.

Only the fields the engine models are meaningful: piece placement, side
to move, and castling availability (mapped onto the has-moved flags of
kings and corner rooks). The en passant and clock fields are accepted on
input and written as ``- 0 1``.
"""

from __future__ import annotations

from chessling.core.board import Board
from chessling.core.enums import Color, PieceType
from chessling.core.piece import Piece
from chessling.core.types import A1, A8, E1, E8, H1, H8, Square, parse_square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# castling letter -> (king home, rook corner)
_CASTLING_SQUARES: dict[str, tuple[Square, Square]] = {
    "K": (E1, H1),
    "Q": (E1, A1),
    "k": (E8, H8),
    "q": (E8, A8),
}

_PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}


def parse_fen(fen: str) -> tuple[Board, Color]:
    """Parse a FEN string into a board and the side to move.

    A bare placement field is accepted; the side to move then defaults to
    white and every king and rook is treated as unmoved.
    """
    parts = fen.split()
    if not (1 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 1-6 fields): {fen!r}")

    board = _parse_placement(parts[0], fen)

    # 2. Side to move
    side = Color.WHITE
    if len(parts) > 1:
        if parts[1] == "w":
            side = Color.WHITE
        elif parts[1] == "b":
            side = Color.BLACK
        else:
            raise ValueError(f"Invalid FEN side-to-move field: {parts[1]!r}")

    # 3. Castling
    if len(parts) > 2:
        _apply_castling_field(board, parts[2])

    # 4. En passant: validated, not modelled
    if len(parts) > 3 and parts[3] != "-":
        parse_square(parts[3])

    # 5-6. Clocks: validated, not modelled
    for field_text, minimum in zip(parts[4:], (0, 1)):
        if not field_text.isdigit() or int(field_text) < minimum:
            raise ValueError(f"Invalid FEN clock field: {field_text!r}")

    return board, side


def board_from_fen(fen: str) -> Board:
    """Board part of :func:`parse_fen`."""
    return parse_fen(fen)[0]


def board_to_fen(board: Board, side_to_move: Color = Color.WHITE) -> str:
    """Serialise *board* and *side_to_move* to FEN."""
    # 1. Board
    rows: list[str] = []
    for row in range(8):
        empty = 0
        text = ""
        for col in range(8):
            piece = board[Square(row, col)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if side_to_move == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(
        letter
        for letter, (king_sq, rook_sq) in _CASTLING_SQUARES.items()
        if _unmoved(board, king_sq, letter, PieceType.KING)
        and _unmoved(board, rook_sq, letter, PieceType.ROOK)
    )
    if not castling_str:
        castling_str = "-"

    return f"{board_str} {side_str} {castling_str} - 0 1"


# ── Internals ────────────────────────────────────────────────────────────────


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")

    board = Board()
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                piece = Piece.from_char(ch)
                if piece.piece_type == PieceType.PAWN:
                    piece = Piece(
                        piece.color,
                        PieceType.PAWN,
                        has_moved=row != _PAWN_START_ROW[piece.color],
                    )
                board[Square(row, col)] = piece
                col += 1
            if col > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if col != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")
    return board


def _apply_castling_field(board: Board, castling_part: str) -> None:
    """Flag kings and rooks as moved unless a castling right keeps them fresh."""
    rights: set[str] = set()
    if castling_part != "-":
        for ch in castling_part:
            if ch not in _CASTLING_SQUARES or ch in rights:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            rights.add(ch)

    fresh: set[Square] = set()
    for letter in rights:
        king_sq, rook_sq = _CASTLING_SQUARES[letter]
        fresh.update((king_sq, rook_sq))

    for sq, piece in list(board.occupied()):
        if piece.piece_type in (PieceType.KING, PieceType.ROOK) and sq not in fresh:
            board[sq] = piece.moved()


def _unmoved(board: Board, sq: Square, letter: str, piece_type: PieceType) -> bool:
    piece = board[sq]
    color = Color.WHITE if letter.isupper() else Color.BLACK
    return (
        piece is not None
        and piece.piece_type == piece_type
        and piece.color == color
        and not piece.has_moved
    )
