"""GameController: the orchestrator of a tutored game.

Coordinates: GameState, selection, hint advisor, game store.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chesstutor.advisor.models import Hint
from chesstutor.advisor.service import HintAdvisor
from chesstutor.core.enums import GameResult, PieceType
from chesstutor.core.errors import ChessError
from chesstutor.core.state import GameState, MoveOutcome, apply_move
from chesstutor.core.types import Square, square_to_position
from chesstutor.game.interfaces import (
    ClickResult,
    GamePhase,
    GameStatus,
    IGameStore,
    Selection,
)
from chesstutor.settings import TutorSettings

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveOutcome], None]
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]

_RESULT_TOKENS: dict[GameResult, str] = {
    GameResult.WHITE_WINS: "white_wins",
    GameResult.BLACK_WINS: "black_wins",
    GameResult.DRAW: "draw",
}


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Owns the current :class:`GameState` and the UI selection next to it.

    The rules state is replaced, never edited, after every committed move.
    Persistence happens after the new state is in place; a failing store
    is logged and does not undo the move.
    """

    __slots__ = (
        "_settings",
        "_store",
        "_advisor",
        "_start_state",
        "_state",
        "_selection",
        "_phase",
        "_game_id",
        "_hint",
        "events",
    )

    def __init__(
        self,
        settings: TutorSettings | None = None,
        store: IGameStore | None = None,
    ) -> None:
        self._settings = settings or TutorSettings()
        self._store = store
        self._advisor = HintAdvisor(self._settings)
        self._start_state = GameState.initial()
        self._state = self._start_state
        self._selection = Selection()
        self._phase = GamePhase.NOT_STARTED
        self._game_id: str | None = None
        self._hint: Hint | None = None
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def game_id(self) -> str | None:
        return self._game_id

    @property
    def current_hint(self) -> Hint | None:
        return self._hint

    @property
    def settings(self) -> TutorSettings:
        return self._settings

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(self, start: GameState | None = None) -> None:
        """Reset to *start* (the standard opening by default)."""
        self._start_state = start if start is not None else GameState.initial()
        self._state = self._start_state
        self._selection = Selection()
        self._hint = None
        self._game_id = self._create_game()
        _LOGGER.info("New game started (id=%s)", self._game_id)
        self._set_phase(
            GamePhase.GAME_OVER if self._state.is_game_over else GamePhase.AWAITING_MOVE
        )

    def click_square(self, square: Square) -> ClickResult:
        """Handle a click on *square*: select, move, or clear."""
        if self._phase != GamePhase.AWAITING_MOVE:
            return ClickResult.IGNORED

        try:
            piece = self._state.board[square_to_position(square)]
        except ChessError as exc:
            _LOGGER.debug("Ignoring click: %s", exc)
            return ClickResult.IGNORED

        own_piece = piece is not None and piece.color == self._state.turn
        selected = self._selection.selected_square

        if selected is not None:
            if square in self._selection.valid_moves:
                if self.submit_move(selected, square):
                    return ClickResult.MOVED
                return ClickResult.IGNORED
            if own_piece:
                self._select(square)
                return ClickResult.SELECTED
            self._selection = Selection()
            return ClickResult.CLEARED

        if own_piece:
            self._select(square)
            return ClickResult.SELECTED
        return ClickResult.IGNORED

    def submit_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        """Validate and commit a move. Returns ``False`` if it was rejected."""
        if self._phase != GamePhase.AWAITING_MOVE:
            return False

        if promotion is None and self._is_promotion(from_sq, to_sq):
            promotion = self._settings.auto_promotion

        try:
            outcome = apply_move(self._state, from_sq, to_sq, promotion)
        except ChessError as exc:
            _LOGGER.debug("Rejected move %s-%s: %s", from_sq, to_sq, exc)
            return False

        self._state = outcome.state
        self._selection = Selection()
        self._hint = None

        for cb in self.events.on_move:
            cb(outcome)

        self._persist(outcome)

        if self._state.is_game_over:
            result = self._state.result
            _LOGGER.info("Game over: %s", result.name)
            self._set_phase(GamePhase.GAME_OVER)
            for game_over_cb in self.events.on_game_over:
                game_over_cb(result)
        return True

    def undo_move(self) -> bool:
        """Take back the last move by replaying the rest of the history."""
        history = self._state.move_history
        if not history:
            return False

        state = self._start_state
        for move in history[:-1]:
            state = apply_move(state, move.from_sq, move.to_sq, move.promotion).state
        self._state = state
        self._selection = Selection()
        self._hint = None
        self._set_phase(GamePhase.AWAITING_MOVE)
        return True

    def request_hint(self) -> Hint | None:
        """Advice for the side to move, or ``None`` when hints are off."""
        if not self._settings.enable_hints or self._phase != GamePhase.AWAITING_MOVE:
            return None
        self._hint = self._advisor.generate_hint(self._state)
        return self._hint

    # ── Internal helpers ─────────────────────────────────────────────────

    def _select(self, square: Square) -> None:
        self._selection = Selection(square, tuple(self._state.valid_moves(square)))

    def _is_promotion(self, from_sq: Square, to_sq: Square) -> bool:
        try:
            piece = self._state.board[square_to_position(from_sq)]
            to_row = square_to_position(to_sq).row
        except ChessError:
            return False
        return (
            piece is not None
            and piece.piece_type == PieceType.PAWN
            and to_row in (0, 7)
        )

    def _create_game(self) -> str | None:
        if self._store is None or not self._settings.persist_moves:
            return None
        try:
            game_id = self._store.create_game(
                self._state.snapshot(), self._settings.difficulty
            )
        except Exception:
            _LOGGER.exception("Error creating game")
            return None
        if game_id is None:
            _LOGGER.warning("Game store returned no id; playing unsaved")
        return game_id

    def _persist(self, outcome: MoveOutcome) -> None:
        if self._store is None or self._game_id is None:
            return
        state = outcome.state
        status = GameStatus.COMPLETED if state.is_game_over else GameStatus.IN_PROGRESS
        try:
            self._store.record_move(self._game_id, outcome.record)
            self._store.update_game(
                self._game_id,
                state.snapshot(),
                status,
                _RESULT_TOKENS.get(state.result),
            )
        except Exception:
            _LOGGER.exception("Error saving move %s", outcome.record.notation)

    def _set_phase(self, phase: GamePhase) -> None:
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)
