"""Pseudo-legal and legal move generation + attack detection.

Geometry is checked per destination: a candidate ``from -> to`` pair is
tested against the piece's movement rule and the squares in between.
Legal moves are the pseudo-legal ones that do not leave the mover's own
king attacked on the resulting board.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from chesstutor.core.board import Board
from chesstutor.core.enums import CastlingRights, Color, MoveFlag, PieceType
from chesstutor.core.errors import IllegalMove, NoPieceAtSquare
from chesstutor.core.move import Move
from chesstutor.core.piece import Piece
from chesstutor.core.types import (
    ALL_POSITIONS,
    Position,
    Square,
    position_to_square,
    require_on_board,
    square_to_position,
)

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

# Row a pawn of each color moves away from / promotes on.
_PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
_PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
_PROMOTION_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}
# Row holding the en-passant target a pawn of each color may capture onto.
_EN_PASSANT_ROW: dict[Color, int] = {Color.WHITE: 2, Color.BLACK: 5}
_HOME_ROW: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}
_KING_COL = 4


class RulesContext(Protocol):
    """Special-move rights a move check may consult."""

    @property
    def castling(self) -> CastlingRights: ...

    @property
    def en_passant(self) -> Square | None: ...


@dataclass(frozen=True, slots=True)
class _NoRights:
    castling: CastlingRights = CastlingRights.NONE
    en_passant: Square | None = None


# Attack tests must never consult castling or en passant.
NO_RIGHTS: RulesContext = _NoRights()


# -- Geometry ---------------------------------------------------------------


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def is_path_clear(board: Board, from_pos: Position, to_pos: Position) -> bool:
    """Whether every square strictly between *from_pos* and *to_pos* is empty."""
    d_row = _sign(to_pos.row - from_pos.row)
    d_col = _sign(to_pos.col - from_pos.col)
    row, col = from_pos.row + d_row, from_pos.col + d_col
    while (row, col) != (to_pos.row, to_pos.col):
        if board[Position(row, col)] is not None:
            return False
        row += d_row
        col += d_col
    return True


def _pawn_rule(
    board: Board,
    from_pos: Position,
    to_pos: Position,
    piece: Piece,
    context: RulesContext,
) -> bool:
    direction = _PAWN_DIRECTION[piece.color]
    d_row = to_pos.row - from_pos.row
    d_col = abs(to_pos.col - from_pos.col)

    if d_col == 0:
        if d_row == direction and board.is_empty(to_pos):
            return True
        return (
            from_pos.row == _PAWN_START_ROW[piece.color]
            and d_row == 2 * direction
            and board.is_empty(to_pos)
            and board.is_empty(from_pos.offset(direction, 0))
        )

    if d_col == 1 and d_row == direction:
        target = board[to_pos]
        if target is not None:
            return target.color != piece.color
        return _is_en_passant_target(board, from_pos, to_pos, piece, context)

    return False


def _is_en_passant_target(
    board: Board,
    from_pos: Position,
    to_pos: Position,
    piece: Piece,
    context: RulesContext,
) -> bool:
    if context.en_passant is None or to_pos.row != _EN_PASSANT_ROW[piece.color]:
        return False
    if position_to_square(to_pos) != context.en_passant:
        return False
    passed = board[Position(from_pos.row, to_pos.col)]
    return passed == Piece(piece.color.opposite, PieceType.PAWN)


def _knight_rule(
    board: Board, from_pos: Position, to_pos: Position, piece: Piece, context: RulesContext
) -> bool:
    deltas = (abs(to_pos.row - from_pos.row), abs(to_pos.col - from_pos.col))
    return deltas in ((2, 1), (1, 2))


def _bishop_rule(
    board: Board, from_pos: Position, to_pos: Position, piece: Piece, context: RulesContext
) -> bool:
    d_row = abs(to_pos.row - from_pos.row)
    d_col = abs(to_pos.col - from_pos.col)
    return d_row == d_col and is_path_clear(board, from_pos, to_pos)


def _rook_rule(
    board: Board, from_pos: Position, to_pos: Position, piece: Piece, context: RulesContext
) -> bool:
    straight = (to_pos.row == from_pos.row) != (to_pos.col == from_pos.col)
    return straight and is_path_clear(board, from_pos, to_pos)


def _queen_rule(
    board: Board, from_pos: Position, to_pos: Position, piece: Piece, context: RulesContext
) -> bool:
    return _bishop_rule(board, from_pos, to_pos, piece, context) or _rook_rule(
        board, from_pos, to_pos, piece, context
    )


def _king_rule(
    board: Board, from_pos: Position, to_pos: Position, piece: Piece, context: RulesContext
) -> bool:
    # One step only; castling and king safety are handled by get_legal_moves.
    return abs(to_pos.row - from_pos.row) <= 1 and abs(to_pos.col - from_pos.col) <= 1


_Rule = Callable[[Board, Position, Position, Piece, RulesContext], bool]

_RULES: dict[PieceType, _Rule] = {
    PieceType.PAWN: _pawn_rule,
    PieceType.KNIGHT: _knight_rule,
    PieceType.BISHOP: _bishop_rule,
    PieceType.ROOK: _rook_rule,
    PieceType.QUEEN: _queen_rule,
    PieceType.KING: _king_rule,
}


def is_valid_move(
    board: Board,
    from_pos: Position,
    to_pos: Position,
    piece: Piece,
    state: RulesContext | None = None,
) -> bool:
    """Pseudo-legality of ``from_pos -> to_pos`` for *piece*.

    An off-board destination is simply not valid. An off-board origin raises
    :class:`~chesstutor.core.errors.OutOfBounds`.
    """
    from_pos = require_on_board(Position(*from_pos))
    to_pos = Position(*to_pos)
    if not to_pos.on_board or to_pos == from_pos:
        return False

    target = board[to_pos]
    if target is not None and target.color == piece.color:
        return False

    return _RULES[piece.piece_type](
        board, from_pos, to_pos, piece, state if state is not None else NO_RIGHTS
    )


# -- Attack detection -------------------------------------------------------


def find_king(board: Board, color: Color) -> Position | None:
    return board.find(Piece(color, PieceType.KING))


def is_square_attacked(board: Board, target: Position, by_color: Color) -> bool:
    """Is *target* attacked by any piece of *by_color*?"""
    for pos, piece in board.pieces(by_color):
        if piece.piece_type == PieceType.PAWN:
            # Pawns capture diagonally, which differs from how they move.
            direction = _PAWN_DIRECTION[by_color]
            if abs(target.col - pos.col) == 1 and target.row - pos.row == direction:
                return True
        elif is_valid_move(board, pos, target, piece, NO_RIGHTS):
            return True
    return False


def is_king_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked? ``False`` when the king is missing."""
    king_pos = find_king(board, color)
    if king_pos is None:
        return False
    return is_square_attacked(board, king_pos, color.opposite)


# -- Special moves ----------------------------------------------------------


def _castling_targets(
    board: Board, from_pos: Position, piece: Piece, context: RulesContext
) -> dict[Position, MoveFlag]:
    color = piece.color
    row = _HOME_ROW[color]
    if piece.piece_type != PieceType.KING or from_pos != Position(row, _KING_COL):
        return {}
    if not context.castling & (
        CastlingRights.kingside(color) | CastlingRights.queenside(color)
    ):
        return {}
    if is_king_in_check(board, color):
        return {}

    rook = Piece(color, PieceType.ROOK)
    opponent = color.opposite
    targets: dict[Position, MoveFlag] = {}

    if context.castling & CastlingRights.kingside(color) and board[Position(row, 7)] == rook:
        between = (Position(row, 5), Position(row, 6))
        if all(board.is_empty(p) for p in between) and not any(
            is_square_attacked(board, p, opponent) for p in between
        ):
            targets[Position(row, 6)] = MoveFlag.CASTLE_KINGSIDE

    if context.castling & CastlingRights.queenside(color) and board[Position(row, 0)] == rook:
        between = (Position(row, 1), Position(row, 2), Position(row, 3))
        crossed = (Position(row, 3), Position(row, 2))
        if all(board.is_empty(p) for p in between) and not any(
            is_square_attacked(board, p, opponent) for p in crossed
        ):
            targets[Position(row, 2)] = MoveFlag.CASTLE_QUEENSIDE

    return targets


def _classify(
    board: Board,
    from_pos: Position,
    to_pos: Position,
    piece: Piece,
    castle_flag: MoveFlag | None,
) -> tuple[MoveFlag, Piece | None]:
    if castle_flag is not None:
        return castle_flag, None

    captured = board[to_pos]
    if piece.piece_type != PieceType.PAWN:
        return MoveFlag.NORMAL, captured

    if to_pos.row == _PROMOTION_ROW[piece.color]:
        return MoveFlag.PROMOTION, captured
    if abs(to_pos.row - from_pos.row) == 2:
        return MoveFlag.DOUBLE_PAWN, None
    if to_pos.col != from_pos.col and captured is None:
        return MoveFlag.EN_PASSANT, board[Position(from_pos.row, to_pos.col)]
    return MoveFlag.NORMAL, captured


def simulate_move(board: Board, move: Move) -> Board:
    """Board after *move*; *board* itself is left untouched."""
    from_pos = square_to_position(move.from_sq)
    to_pos = square_to_position(move.to_sq)

    placed = move.piece
    if move.flag == MoveFlag.PROMOTION and move.promotion is not None:
        placed = Piece(move.piece.color, move.promotion)

    changes: dict[Position, Piece | None] = {from_pos: None, to_pos: placed}
    if move.flag == MoveFlag.EN_PASSANT:
        changes[Position(from_pos.row, to_pos.col)] = None
    elif move.flag == MoveFlag.CASTLE_KINGSIDE:
        changes[Position(from_pos.row, 7)] = None
        changes[Position(from_pos.row, 5)] = Piece(move.piece.color, PieceType.ROOK)
    elif move.flag == MoveFlag.CASTLE_QUEENSIDE:
        changes[Position(from_pos.row, 0)] = None
        changes[Position(from_pos.row, 3)] = Piece(move.piece.color, PieceType.ROOK)
    return board.with_changes(changes)


# -- Public API -------------------------------------------------------------


def get_legal_moves(
    board: Board, square: Square, state: RulesContext | None = None
) -> list[Move]:
    """All legal moves of the piece on *square*, in row-major destination order.

    Promotions are listed once per destination with a queen; callers pick
    another piece through :func:`build_move`.
    """
    context = state if state is not None else NO_RIGHTS
    from_pos = square_to_position(square)
    piece = board[from_pos]
    if piece is None:
        raise NoPieceAtSquare(square)

    castles = _castling_targets(board, from_pos, piece, context)
    legal: list[Move] = []
    for to_pos in ALL_POSITIONS:
        castle_flag = castles.get(to_pos)
        if castle_flag is None and not is_valid_move(
            board, from_pos, to_pos, piece, context
        ):
            continue

        flag, captured = _classify(board, from_pos, to_pos, piece, castle_flag)
        move = Move(
            from_sq=square,
            to_sq=position_to_square(to_pos),
            piece=piece,
            captured_piece=captured,
            flag=flag,
            promotion=PieceType.QUEEN if flag == MoveFlag.PROMOTION else None,
        )
        if not is_king_in_check(simulate_move(board, move), piece.color):
            legal.append(move)
    return legal


def get_valid_moves(
    board: Board, square: Square, state: RulesContext | None = None
) -> list[Square]:
    """Legal destination squares of the piece on *square*, row-major."""
    return [move.to_sq for move in get_legal_moves(board, square, state)]


def legal_move_map(
    board: Board, color: Color, state: RulesContext | None = None
) -> dict[Square, list[Square]]:
    """``square -> legal destinations`` for every *color* piece, row-major."""
    return {
        position_to_square(pos): get_valid_moves(board, position_to_square(pos), state)
        for pos, _ in board.pieces(color)
    }


def build_move(
    board: Board,
    from_sq: Square,
    to_sq: Square,
    state: RulesContext | None = None,
    promotion: PieceType | None = None,
) -> Move:
    """The legal :class:`Move` ``from_sq -> to_sq``, or raise :class:`IllegalMove`."""
    square_to_position(to_sq)
    for move in get_legal_moves(board, from_sq, state):
        if move.to_sq != to_sq:
            continue
        if move.flag != MoveFlag.PROMOTION:
            if promotion is not None:
                raise IllegalMove(f"{from_sq}{to_sq} is not a promotion")
            return move
        choice = promotion if promotion is not None else PieceType.QUEEN
        if choice not in PROMOTION_TYPES:
            raise IllegalMove(f"Cannot promote to {choice}")
        return Move(
            from_sq=move.from_sq,
            to_sq=move.to_sq,
            piece=move.piece,
            captured_piece=move.captured_piece,
            flag=move.flag,
            promotion=choice,
        )
    raise IllegalMove(f"Illegal move: {from_sq}{to_sq}")
