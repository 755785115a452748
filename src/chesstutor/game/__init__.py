"""Game management layer: controller, selection, persistence boundary.

Quick start::

    from chesstutor.game import GameController, InMemoryGameStore

    ctrl = GameController(store=InMemoryGameStore())
    ctrl.new_game()
    ctrl.click_square("e2")
    ctrl.click_square("e4")
"""

from chesstutor.game.controller import GameController, GameEvents
from chesstutor.game.interfaces import (
    ClickResult,
    GamePhase,
    GameStatus,
    IGameStore,
    Selection,
)
from chesstutor.game.store import InMemoryGameStore, StoredGame

__all__ = [
    # Interfaces
    "ClickResult",
    "GamePhase",
    "GameStatus",
    "IGameStore",
    "Selection",
    # Concrete
    "GameController",
    "GameEvents",
    "InMemoryGameStore",
    "StoredGame",
]
