"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from chesstutor.core import GameState, apply_move, get_valid_moves

    state = GameState.initial()
    get_valid_moves(state.board, "e2", state)   # ['e4', 'e3']
    state = apply_move(state, "e2", "e4").state
"""

from chesstutor.core.board import Board, initialize_board
from chesstutor.core.enums import CastlingRights, Color, GameResult, MoveFlag, PieceType
from chesstutor.core.errors import (
    ChessError,
    IllegalMove,
    InvalidFen,
    InvalidSquareFormat,
    NoPieceAtSquare,
    OutOfBounds,
)
from chesstutor.core.fen import STARTING_FEN, position_from_fen, position_to_fen
from chesstutor.core.move import Move
from chesstutor.core.move_generator import (
    build_move,
    get_legal_moves,
    get_valid_moves,
    is_king_in_check,
    is_square_attacked,
    is_valid_move,
    simulate_move,
)
from chesstutor.core.notation import get_move_notation
from chesstutor.core.piece import PIECE_VALUES, Piece
from chesstutor.core.rules import game_result, is_checkmate, is_stalemate
from chesstutor.core.state import GameState, MoveOutcome, MoveRecord, apply_move
from chesstutor.core.types import (
    Position,
    Square,
    position_to_square,
    square_to_position,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceType",
    # Errors
    "ChessError",
    "IllegalMove",
    "InvalidFen",
    "InvalidSquareFormat",
    "NoPieceAtSquare",
    "OutOfBounds",
    # Types / helpers
    "Position",
    "Square",
    "position_to_square",
    "square_to_position",
    # Domain objects
    "Board",
    "GameState",
    "Move",
    "MoveOutcome",
    "MoveRecord",
    "PIECE_VALUES",
    "Piece",
    "initialize_board",
    # Rules
    "apply_move",
    "build_move",
    "game_result",
    "get_legal_moves",
    "get_valid_moves",
    "is_checkmate",
    "is_king_in_check",
    "is_square_attacked",
    "is_stalemate",
    "is_valid_move",
    "simulate_move",
    # Notation
    "STARTING_FEN",
    "get_move_notation",
    "position_from_fen",
    "position_to_fen",
]
