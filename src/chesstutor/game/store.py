"""In-memory :class:`IGameStore` used offline and in tests."""

from __future__ import annotations

import copy
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from chesstutor.game.interfaces import GameStatus, IGameStore

if TYPE_CHECKING:
    from chesstutor.core.state import MoveRecord


@dataclass
class StoredGame:
    """One persisted game row plus its move rows."""

    game_state: dict[str, Any]
    difficulty: str
    status: GameStatus = GameStatus.IN_PROGRESS
    result: str | None = None
    moves: list[dict[str, Any]] = field(default_factory=list)
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class InMemoryGameStore(IGameStore):
    """Keeps games in a dict keyed by a random UUID."""

    __slots__ = ("_games",)

    def __init__(self) -> None:
        self._games: dict[str, StoredGame] = {}

    def create_game(self, snapshot: dict[str, Any], difficulty: str) -> str | None:
        game_id = str(uuid.uuid4())
        self._games[game_id] = StoredGame(
            game_state=copy.deepcopy(snapshot), difficulty=difficulty
        )
        return game_id

    def record_move(self, game_id: str, record: MoveRecord) -> None:
        self._game(game_id).moves.append(record.to_dict())

    def update_game(
        self,
        game_id: str,
        snapshot: dict[str, Any],
        status: GameStatus,
        result: str | None,
    ) -> None:
        game = self._game(game_id)
        game.game_state = copy.deepcopy(snapshot)
        game.status = status
        game.result = result
        game.updated_at = datetime.now(timezone.utc)

    def get(self, game_id: str) -> StoredGame:
        return self._game(game_id)

    def __len__(self) -> int:
        return len(self._games)

    def _game(self, game_id: str) -> StoredGame:
        try:
            return self._games[game_id]
        except KeyError:
            raise KeyError(f"Unknown game id: {game_id}") from None
