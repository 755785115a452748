"""User-configurable tutor settings."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from chesstutor.core.enums import PieceType
from chesstutor.core.errors import ChessError
from chesstutor.core.types import square_to_position

DIFFICULTIES: tuple[str, ...] = ("beginner", "intermediate", "advanced")
_PROMOTION_CHOICES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


@dataclass
class TutorSettings:
    """All user-configurable settings."""

    # Game
    difficulty: str = "intermediate"
    auto_promotion: PieceType = PieceType.QUEEN
    persist_moves: bool = True

    # Advisor
    enable_hints: bool = True
    center_squares: tuple[str, ...] = ("e4", "d4", "e5", "d5")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TutorSettings:
        """Build settings from plain data, e.g. a decoded JSON object.

        Missing keys keep their defaults; unknown keys or bad values raise
        ``ValueError``.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(unknown)}")

        settings = cls()
        if "difficulty" in data:
            difficulty = str(data["difficulty"]).lower()
            if difficulty not in DIFFICULTIES:
                raise ValueError(f"Unknown difficulty: {data['difficulty']!r}")
            settings.difficulty = difficulty

        if "auto_promotion" in data:
            settings.auto_promotion = _parse_promotion(data["auto_promotion"])

        for flag in ("persist_moves", "enable_hints"):
            if flag in data:
                value = data[flag]
                if not isinstance(value, bool):
                    raise ValueError(f"{flag} must be a boolean, got {value!r}")
                setattr(settings, flag, value)

        if "center_squares" in data:
            squares = tuple(data["center_squares"])
            for square in squares:
                try:
                    square_to_position(square)
                except ChessError as exc:
                    raise ValueError(f"Bad center square: {exc}") from None
            settings.center_squares = squares

        return settings


def _parse_promotion(value: Any) -> PieceType:
    if isinstance(value, PieceType):
        piece_type = value
    else:
        try:
            piece_type = PieceType[str(value).upper()]
        except KeyError:
            raise ValueError(f"Unknown piece type: {value!r}") from None
    if piece_type not in _PROMOTION_CHOICES:
        raise ValueError(f"Cannot promote to {piece_type}")
    return piece_type
