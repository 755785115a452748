"""Board - immutable piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from chesstutor.core.enums import Color, PieceType
from chesstutor.core.piece import Piece
from chesstutor.core.types import Position, require_on_board

BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _index(pos: Position) -> int:
    row, col = require_on_board(Position(*pos))
    return row * 8 + col


class Board:
    """Immutable 8x8 grid indexed by ``Position(row, col)``.

    Every change goes through :meth:`with_changes`, which returns a new
    board, so a board handed out by a past state can never be altered.
    """

    __slots__ = ("_squares", "_hash")

    def __init__(self, squares: tuple[Piece | None, ...] | None = None) -> None:
        if squares is None:
            squares = (None,) * 64
        if len(squares) != 64:
            raise ValueError(f"Board needs 64 squares, got {len(squares)}")
        self._squares: tuple[Piece | None, ...] = tuple(squares)
        self._hash: int | None = None

    # -- Element access -----------------------------------------------------

    def __getitem__(self, pos: Position) -> Piece | None:
        return self._squares[_index(pos)]

    def is_empty(self, pos: Position) -> bool:
        return self._squares[_index(pos)] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color | None = None) -> Iterator[tuple[Position, Piece]]:
        """Occupied squares in row-major order, optionally filtered by *color*."""
        for idx, piece in enumerate(self._squares):
            if piece is None:
                continue
            if color is not None and piece.color != color:
                continue
            yield Position(idx >> 3, idx & 7), piece

    def find(self, piece: Piece) -> Position | None:
        """First square (row-major) holding *piece*."""
        for pos, occupant in self.pieces(piece.color):
            if occupant == piece:
                return pos
        return None

    def count(self) -> int:
        return sum(1 for p in self._squares if p is not None)

    def rows(self) -> tuple[tuple[Piece | None, ...], ...]:
        """Grid as ``[row][col]``."""
        return tuple(self._squares[r * 8 : r * 8 + 8] for r in range(8))

    # -- Derivation ---------------------------------------------------------

    def with_changes(self, changes: Mapping[Position, Piece | None]) -> Board:
        """New board with every ``pos -> piece`` in *changes* applied."""
        squares = list(self._squares)
        for pos, piece in changes.items():
            squares[_index(pos)] = piece
        return Board(tuple(squares))

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position (black on rows 0-1, white on rows 6-7)."""
        squares: list[Piece | None] = [None] * 64
        for col, pt in enumerate(BACK_RANK):
            squares[col] = Piece(Color.BLACK, pt)
            squares[8 + col] = Piece(Color.BLACK, PieceType.PAWN)
            squares[48 + col] = Piece(Color.WHITE, PieceType.PAWN)
            squares[56 + col] = Piece(Color.WHITE, pt)
        return cls(tuple(squares))

    # -- Serialisation ------------------------------------------------------

    def to_rows(self) -> list[list[dict[str, str] | None]]:
        """JSON-friendly ``[row][col]`` grid of ``{"type", "color"}`` or ``None``."""
        return [[p.to_dict() if p else None for p in row] for row in self.rows()]

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(self._squares)
        return self._hash

    def __repr__(self) -> str:
        lines: list[str] = []
        for row_idx, row in enumerate(self.rows()):
            cells = " ".join(str(p) if p else "." for p in row)
            lines.append(f"{8 - row_idx} {cells}")
        lines.append("  a b c d e f g h")
        return "\n".join(lines)


def initialize_board() -> Board:
    """Board with the standard starting position."""
    return Board.initial()
