"""Exception taxonomy for the rules engine.

Every error is raised per call and leaves no state behind, so callers may
recover and continue with the same game.
"""

from __future__ import annotations


class ChessError(ValueError):
    """Base class for all rules-engine failures."""


class InvalidSquareFormat(ChessError):
    """A square label is not one of ``a1`` .. ``h8``."""

    def __init__(self, label: object) -> None:
        super().__init__(f"Invalid square name: {label!r}")
        self.label = label


class OutOfBounds(ChessError):
    """A grid position lies outside the 8x8 board."""

    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"Position out of bounds: ({row}, {col})")
        self.row = row
        self.col = col


class NoPieceAtSquare(ChessError):
    """A move or hint was requested from an empty square."""

    def __init__(self, square: str) -> None:
        super().__init__(f"No piece on {square}")
        self.square = square


class IllegalMove(ChessError):
    """A move that the rules do not allow in the current state."""


class InvalidFen(ChessError):
    """Malformed FEN text."""
