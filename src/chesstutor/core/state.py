"""GameState: immutable rules state and move application."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from chesstutor.core.board import Board
from chesstutor.core.enums import CastlingRights, Color, GameResult, MoveFlag, PieceType
from chesstutor.core.errors import IllegalMove, NoPieceAtSquare
from chesstutor.core.move import Move
from chesstutor.core.move_generator import (
    build_move,
    get_valid_moves,
    is_king_in_check,
    simulate_move,
)
from chesstutor.core.notation import get_move_notation
from chesstutor.core.rules import game_result, has_legal_moves
from chesstutor.core.types import Position, Square, position_to_square, square_to_position

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    "a1": CastlingRights.WHITE_QUEENSIDE,
    "h1": CastlingRights.WHITE_KINGSIDE,
    "a8": CastlingRights.BLACK_QUEENSIDE,
    "h8": CastlingRights.BLACK_KINGSIDE,
}


@dataclass(frozen=True, slots=True)
class GameState:
    """Durable rules state of one game.

    Instances are never mutated: :func:`apply_move` returns a new state and
    leaves the previous one (and its board) intact.
    """

    board: Board = field(default_factory=Board.initial)
    turn: Color = Color.WHITE
    move_history: tuple[Move, ...] = ()
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    check: bool = False
    checkmate: bool = False
    stalemate: bool = False
    halfmove_clock: int = 0
    fullmove_number: int = 1

    @classmethod
    def initial(cls) -> GameState:
        return cls()

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def result(self) -> GameResult:
        return game_result(self)

    @property
    def is_game_over(self) -> bool:
        return self.result != GameResult.IN_PROGRESS

    @property
    def ply_count(self) -> int:
        return len(self.move_history)

    @property
    def last_move(self) -> Move | None:
        return self.move_history[-1] if self.move_history else None

    def valid_moves(self, square: Square) -> list[Square]:
        """Legal destinations of the piece on *square* in this state."""
        return get_valid_moves(self.board, square, self)

    def with_status(self) -> GameState:
        """Copy with ``check`` / ``checkmate`` / ``stalemate`` recomputed."""
        in_check = is_king_in_check(self.board, self.turn)
        can_move = has_legal_moves(self.board, self.turn, self)
        return replace(
            self,
            check=in_check,
            checkmate=in_check and not can_move,
            stalemate=not in_check and not can_move,
        )

    def snapshot(self) -> dict[str, Any]:
        """``{board, turn}`` as stored by a game store."""
        return {"board": self.board.to_rows(), "turn": str(self.turn)}


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """What changed with one committed move, in storable form."""

    move_number: int
    from_square: Square
    to_square: Square
    piece_type: PieceType
    captured_piece_type: PieceType | None
    notation: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "move_number": self.move_number,
            "from_square": self.from_square,
            "to_square": self.to_square,
            "piece": str(self.piece_type),
            "captured_piece": (
                str(self.captured_piece_type)
                if self.captured_piece_type is not None
                else None
            ),
            "notation": self.notation,
        }


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Result of :func:`apply_move`: the next state and the change record."""

    state: GameState
    move: Move
    record: MoveRecord


def _next_castling(castling: CastlingRights, move: Move) -> CastlingRights:
    if move.piece.piece_type == PieceType.KING:
        if move.piece.color == Color.WHITE:
            castling &= ~CastlingRights.WHITE_BOTH
        else:
            castling &= ~CastlingRights.BLACK_BOTH

    for sq in (move.from_sq, move.to_sq):
        if sq in _ROOK_CORNERS:
            castling &= ~_ROOK_CORNERS[sq]
    return castling


def _next_en_passant(move: Move) -> Square | None:
    if move.flag != MoveFlag.DOUBLE_PAWN:
        return None
    from_pos = square_to_position(move.from_sq)
    to_pos = square_to_position(move.to_sq)
    return position_to_square(Position((from_pos.row + to_pos.row) // 2, from_pos.col))


def apply_move(
    state: GameState,
    from_sq: Square,
    to_sq: Square,
    promotion: PieceType | None = None,
) -> MoveOutcome:
    """Commit ``from_sq -> to_sq`` for the side to move.

    Raises :class:`NoPieceAtSquare` for an empty origin and
    :class:`IllegalMove` for anything the rules reject.
    """
    if state.is_game_over:
        raise IllegalMove("Game is already over")

    piece = state.board[square_to_position(from_sq)]
    if piece is None:
        raise NoPieceAtSquare(from_sq)
    if piece.color != state.turn:
        raise IllegalMove(f"It is {state.turn}'s turn")

    move = build_move(state.board, from_sq, to_sq, state, promotion)
    move = move.with_notation(get_move_notation(move, state.board))

    reset_clock = piece.piece_type == PieceType.PAWN or move.is_capture
    next_state = GameState(
        board=simulate_move(state.board, move),
        turn=state.turn.opposite,
        move_history=(*state.move_history, move),
        castling=_next_castling(state.castling, move),
        en_passant=_next_en_passant(move),
        halfmove_clock=0 if reset_clock else state.halfmove_clock + 1,
        fullmove_number=state.fullmove_number + int(state.turn == Color.BLACK),
    ).with_status()

    record = MoveRecord(
        move_number=len(state.move_history) + 1,
        from_square=move.from_sq,
        to_square=move.to_sq,
        piece_type=piece.piece_type,
        captured_piece_type=(
            move.captured_piece.piece_type if move.captured_piece is not None else None
        ),
        notation=move.notation,
    )
    return MoveOutcome(state=next_state, move=move, record=record)
