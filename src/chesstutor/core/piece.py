"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chesstutor.core.enums import Color, PieceType

_LETTERS = "PNBRQK"

# FEN character -> (Color, PieceType): uppercase is white.
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    (letter if color == Color.WHITE else letter.lower()): (color, piece_type)
    for color in Color
    for letter, piece_type in zip(_LETTERS, PieceType)
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}

# Material value used to rank capture opportunities.
PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: 0,
}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece."""

    color: Color
    piece_type: PieceType

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    def to_dict(self) -> dict[str, str]:
        """``{"type": "knight", "color": "white"}`` as stored by game snapshots."""
        return {"type": str(self.piece_type), "color": str(self.color)}

    @property
    def value(self) -> int:
        return PIECE_VALUES[self.piece_type]
