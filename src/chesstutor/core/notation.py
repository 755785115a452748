"""Simplified algebraic notation for applied moves.

No disambiguation and no check / mate suffixes: ``e4``, ``exd5``, ``Nf3``,
``Nxf3``, ``O-O``, ``e8=Q``.
"""

from __future__ import annotations

from chesstutor.core.board import Board
from chesstutor.core.enums import MoveFlag, PieceType
from chesstutor.core.move import Move
from chesstutor.core.types import square_to_position

PIECE_LETTERS: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}


def _is_capture(move: Move, board: Board) -> bool:
    if move.captured_piece is not None:
        return True
    target = board[square_to_position(move.to_sq)]
    return target is not None and target.color != move.piece.color


def get_move_notation(move: Move, board: Board) -> str:
    """Render *move* against the *board* it was played on."""
    if move.flag == MoveFlag.CASTLE_KINGSIDE:
        return "O-O"
    if move.flag == MoveFlag.CASTLE_QUEENSIDE:
        return "O-O-O"

    capture = "x" if _is_capture(move, board) else ""

    if move.piece.piece_type == PieceType.PAWN:
        san = f"{move.from_sq[0]}{capture}{move.to_sq}" if capture else move.to_sq
        if move.flag == MoveFlag.PROMOTION and move.promotion is not None:
            san += "=" + PIECE_LETTERS[move.promotion]
        return san

    return f"{PIECE_LETTERS[move.piece.piece_type]}{capture}{move.to_sq}"
