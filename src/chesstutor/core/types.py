"""Square / position types and coordinate helpers.

Grid layout (row-major, top-left origin)::

    row 0:  a8 b8 c8 d8 e8 f8 g8 h8
    row 1:  a7 b7 ...
    ...
    row 7:  a1 b1 c1 d1 e1 f1 g1 h1

So ``col`` is the file index and ``row = 8 - rank``.
"""

from __future__ import annotations

from typing import NamedTuple, TypeAlias

from chesstutor.core.errors import InvalidSquareFormat, OutOfBounds

Square: TypeAlias = str  # "a1" .. "h8"

_FILES = "abcdefgh"
_RANKS = "12345678"


class Position(NamedTuple):
    """Zero-based ``(row, col)`` grid coordinate."""

    row: int
    col: int

    @property
    def on_board(self) -> bool:
        return 0 <= self.row < 8 and 0 <= self.col < 8

    def offset(self, d_row: int, d_col: int) -> Position:
        return Position(self.row + d_row, self.col + d_col)


def is_on_board(row: int, col: int) -> bool:
    return 0 <= row < 8 and 0 <= col < 8


def require_on_board(pos: Position) -> Position:
    """Return *pos* unchanged, or raise :class:`OutOfBounds`."""
    if not is_on_board(pos.row, pos.col):
        raise OutOfBounds(pos.row, pos.col)
    return pos


def square_to_position(square: Square) -> Position:
    """Parse a square label, e.g. ``'e4'`` -> ``Position(4, 4)``."""
    if (
        not isinstance(square, str)
        or len(square) != 2
        or square[0] not in _FILES
        or square[1] not in _RANKS
    ):
        raise InvalidSquareFormat(square)
    return Position(8 - int(square[1]), _FILES.index(square[0]))


def position_to_square(pos: Position) -> Square:
    """Label of a grid position, e.g. ``Position(7, 0)`` -> ``'a1'``."""
    row, col = require_on_board(Position(*pos))
    return _FILES[col] + str(8 - row)


def rank_of(square: Square) -> int:
    """Rank number 1..8 of *square*."""
    return 8 - square_to_position(square).row


# Row-major scan order; destination ordering everywhere follows it.
ALL_POSITIONS: tuple[Position, ...] = tuple(
    Position(row, col) for row in range(8) for col in range(8)
)
ALL_SQUARES: tuple[Square, ...] = tuple(position_to_square(p) for p in ALL_POSITIONS)
