"""Abstract interfaces and shared values for the game layer.

The controller depends on :class:`IGameStore`, never on a concrete
backend, so persistence stays outside the rules engine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, StrEnum, auto
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from chesstutor.core.state import MoveRecord
    from chesstutor.core.types import Square


class GamePhase(IntEnum):
    """Finite-state-machine states for a tutored game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    GAME_OVER = auto()


class ClickResult(IntEnum):
    """What a board click did."""

    IGNORED = auto()
    SELECTED = auto()
    CLEARED = auto()
    MOVED = auto()


class GameStatus(StrEnum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(slots=True, frozen=True)
class Selection:
    """UI selection: the picked square and where its piece may go."""

    selected_square: Square | None = None
    valid_moves: tuple[Square, ...] = ()


class IGameStore(ABC):
    """Persistence backend for games and their moves."""

    @abstractmethod
    def create_game(self, snapshot: dict[str, Any], difficulty: str) -> str | None:
        """Store a new game and return its id (``None`` if not stored)."""

    @abstractmethod
    def record_move(self, game_id: str, record: MoveRecord) -> None:
        """Append one committed move to *game_id*."""

    @abstractmethod
    def update_game(
        self,
        game_id: str,
        snapshot: dict[str, Any],
        status: GameStatus,
        result: str | None,
    ) -> None:
        """Replace the stored snapshot, status and result of *game_id*."""
