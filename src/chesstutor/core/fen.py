"""FEN parsing and serialization."""

from __future__ import annotations

from chesstutor.core.board import Board
from chesstutor.core.enums import CastlingRights, Color
from chesstutor.core.errors import ChessError, InvalidFen
from chesstutor.core.piece import Piece
from chesstutor.core.state import GameState
from chesstutor.core.types import Position, Square, rank_of, square_to_position

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


def board_from_fen(placement: str) -> Board:
    """Parse the piece-placement field of a FEN string."""
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise InvalidFen(f"Invalid FEN board (must contain 8 ranks): {placement!r}")

    changes: dict[Position, Piece | None] = {}
    # FEN lists rank 8 first, which is grid row 0.
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise InvalidFen(f"Invalid FEN digit {ch!r}: {placement!r}")
                col += step
            else:
                if col >= 8:
                    raise InvalidFen(f"Invalid FEN rank width: {placement!r}")
                try:
                    changes[Position(row, col)] = Piece.from_char(ch)
                except ValueError as exc:
                    raise InvalidFen(str(exc)) from None
                col += 1
            if col > 8:
                raise InvalidFen(f"Invalid FEN rank width: {placement!r}")
        if col != 8:
            raise InvalidFen(f"Invalid FEN rank width: {placement!r}")
    return Board().with_changes(changes)


def board_to_fen(board: Board) -> str:
    rows: list[str] = []
    for row in board.rows():
        empty = 0
        text = ""
        for piece in row:
            if piece is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    return "/".join(rows)


def _parse_int(text: str, minimum: int, what: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise InvalidFen(f"Invalid FEN {what}: {text!r}") from None
    if value < minimum:
        raise InvalidFen(f"Invalid FEN {what}: {text!r}")
    return value


def position_from_fen(fen: str) -> GameState:
    """Parse a FEN string into a :class:`GameState` with status flags set."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise InvalidFen(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]
    board = board_from_fen(placement)

    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise InvalidFen(f"Invalid FEN side-to-move field: {side_part!r}")

    castling = CastlingRights.NONE
    if castling_part != "-":
        rights = dict(_CASTLING_CHARS)
        seen: set[str] = set()
        for ch in castling_part:
            right = rights.get(ch)
            if right is None or ch in seen:
                raise InvalidFen(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            castling |= right

    ep: Square | None = None
    if ep_part != "-":
        try:
            square_to_position(ep_part)
        except ChessError:
            raise InvalidFen(f"Invalid FEN en-passant square: {ep_part!r}") from None
        expected_rank = 6 if side == Color.WHITE else 3
        if rank_of(ep_part) != expected_rank:
            raise InvalidFen(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )
        ep = ep_part

    halfmove = _parse_int(parts[4], 0, "halfmove clock") if len(parts) > 4 else 0
    fullmove = _parse_int(parts[5], 1, "fullmove number") if len(parts) > 5 else 1

    return GameState(
        board=board,
        turn=side,
        castling=castling,
        en_passant=ep,
        halfmove_clock=halfmove,
        fullmove_number=fullmove,
    ).with_status()


def position_to_fen(state: GameState) -> str:
    """Serialise a :class:`GameState` to FEN."""
    side_str = "w" if state.turn == Color.WHITE else "b"
    castling_str = "".join(ch for ch, right in _CASTLING_CHARS if state.castling & right)
    ep_str = state.en_passant if state.en_passant is not None else "-"
    return (
        f"{board_to_fen(state.board)} {side_str} {castling_str or '-'} {ep_str} "
        f"{state.halfmove_clock} {state.fullmove_number}"
    )
