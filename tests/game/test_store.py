"""Tests for the in-memory game store."""

import pytest

from chesstutor.core.state import GameState, apply_move
from chesstutor.game.interfaces import GameStatus
from chesstutor.game.store import InMemoryGameStore


class TestInMemoryGameStore:
    def test_create_game_returns_distinct_ids(self) -> None:
        store = InMemoryGameStore()
        first = store.create_game(GameState.initial().snapshot(), "beginner")
        second = store.create_game(GameState.initial().snapshot(), "advanced")
        assert first is not None and second is not None
        assert first != second
        assert len(store) == 2

    def test_snapshot_is_copied(self) -> None:
        store = InMemoryGameStore()
        snapshot = GameState.initial().snapshot()
        game_id = store.create_game(snapshot, "intermediate")
        assert game_id is not None

        snapshot["turn"] = "black"
        snapshot["board"][0][0] = None
        stored = store.get(game_id)
        assert stored.game_state["turn"] == "white"
        assert stored.game_state["board"][0][0] == {"type": "rook", "color": "black"}

    def test_record_and_update(self) -> None:
        store = InMemoryGameStore()
        game_id = store.create_game(GameState.initial().snapshot(), "intermediate")
        assert game_id is not None
        created_at = store.get(game_id).updated_at

        outcome = apply_move(GameState.initial(), "e2", "e4")
        store.record_move(game_id, outcome.record)
        store.update_game(game_id, outcome.state.snapshot(), GameStatus.IN_PROGRESS, None)

        stored = store.get(game_id)
        assert stored.moves == [outcome.record.to_dict()]
        assert stored.game_state["turn"] == "black"
        assert stored.status == GameStatus.IN_PROGRESS
        assert stored.result is None
        assert stored.updated_at >= created_at

    def test_unknown_game(self) -> None:
        store = InMemoryGameStore()
        with pytest.raises(KeyError):
            store.get("missing")
        with pytest.raises(KeyError):
            store.update_game("missing", {}, GameStatus.COMPLETED, "draw")
