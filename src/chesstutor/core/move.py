"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chesstutor.core.enums import MoveFlag, PieceType
from chesstutor.core.piece import Piece
from chesstutor.core.types import Square

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single applied or candidate move.

    ``piece`` is the piece standing on ``from_sq`` of the board the move was
    built against. ``flag`` tags the special-move variant.
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured_piece: Piece | None = None
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None
    notation: str = ""

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None

    def with_notation(self, notation: str) -> Move:
        return replace(self, notation=notation)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{self.from_sq}{self.to_sq}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base
