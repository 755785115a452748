"""High-level chess rules: checkmate, stalemate, draw detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesstutor.core.board import Board
from chesstutor.core.enums import Color, GameResult, PieceType
from chesstutor.core.move_generator import (
    RulesContext,
    get_valid_moves,
    is_king_in_check,
)
from chesstutor.core.types import position_to_square

if TYPE_CHECKING:
    from chesstutor.core.state import GameState


def has_legal_moves(board: Board, color: Color, state: RulesContext | None = None) -> bool:
    """Whether any *color* piece has at least one legal destination."""
    return any(
        get_valid_moves(board, position_to_square(pos), state)
        for pos, _ in board.pieces(color)
    )


def is_checkmate(board: Board, color: Color, state: RulesContext | None = None) -> bool:
    if not is_king_in_check(board, color):
        return False
    return not has_legal_moves(board, color, state)


def is_stalemate(board: Board, color: Color, state: RulesContext | None = None) -> bool:
    if is_king_in_check(board, color):
        return False
    return not has_legal_moves(board, color, state)


def is_insufficient_material(board: Board) -> bool:
    """K vs K, K+B vs K, K+N vs K, K+B vs K+B (same-color bishops)."""
    others = [
        (pos, piece)
        for pos, piece in board.pieces()
        if piece.piece_type != PieceType.KING
    ]

    # K vs K
    if not others:
        return True

    # K+minor vs K
    if len(others) == 1:
        return others[0][1].piece_type in (PieceType.KNIGHT, PieceType.BISHOP)

    # K+B vs K+B with same-colour bishops
    if len(others) == 2:
        (pos_a, a), (pos_b, b) = others
        if a.piece_type == b.piece_type == PieceType.BISHOP and a.color != b.color:
            return (pos_a.row + pos_a.col) % 2 == (pos_b.row + pos_b.col) % 2

    return False


def game_result(state: GameState) -> GameResult:
    """Determine the current game result."""
    if state.checkmate:
        return GameResult.BLACK_WINS if state.turn == Color.WHITE else GameResult.WHITE_WINS
    if state.stalemate or is_insufficient_material(state.board):
        return GameResult.DRAW
    return GameResult.IN_PROGRESS
