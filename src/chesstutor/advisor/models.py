"""Data models produced by the hint advisor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from chesstutor.core.types import Square


class HintKind(StrEnum):
    """Which rule of the priority ladder produced a hint."""

    CHECK_RESPONSE = "check_response"
    THREATENED_PIECE = "threatened_piece"
    CAPTURE = "capture"
    DEVELOPMENT = "development"
    CENTER_CONTROL = "center_control"
    STRATEGY = "strategy"


@dataclass(slots=True, frozen=True)
class RecommendedMove:
    """A concrete ``from -> to`` suggestion."""

    from_sq: Square
    to_sq: Square


@dataclass(slots=True, frozen=True)
class Hint:
    """Advice for the side to move."""

    kind: HintKind
    suggestion: str
    explanation: str
    recommended_move: RecommendedMove | None = None
