"""Rule-of-thumb hint advisor.

The advisor walks a fixed priority ladder and returns the first rule that
fires:

1. check response
2. an own piece that an opposing piece can legally capture
3. the most valuable capture available
4. developing a knight or bishop off the back rank
5. a move onto a center square
6. generic strategic advice

It is a pure function of the :class:`~chesstutor.core.state.GameState`;
no search and no evaluation function are involved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chesstutor.advisor.models import Hint, HintKind, RecommendedMove
from chesstutor.core.enums import Color, PieceType
from chesstutor.core.move_generator import legal_move_map
from chesstutor.core.piece import Piece
from chesstutor.core.state import GameState
from chesstutor.core.types import Position, Square, position_to_square, square_to_position
from chesstutor.settings import TutorSettings

_LOGGER = logging.getLogger(__name__)

_BACK_ROW: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}
_DEVELOPING_TYPES = (PieceType.KNIGHT, PieceType.BISHOP)


@dataclass(slots=True, frozen=True)
class _Capture:
    from_sq: Square
    to_sq: Square
    attacker: Piece
    target: Piece


class HintAdvisor:
    """Ranks advisory candidates for the side to move."""

    __slots__ = ("_settings",)

    def __init__(self, settings: TutorSettings | None = None) -> None:
        self._settings = settings or TutorSettings()

    def generate_hint(self, state: GameState) -> Hint:
        hint = self._pick(state)
        _LOGGER.debug("Hint for %s: %s", state.turn, hint.kind)
        return hint

    # ── Ladder ───────────────────────────────────────────────────────────

    def _pick(self, state: GameState) -> Hint:
        if state.check:
            return Hint(
                kind=HintKind.CHECK_RESPONSE,
                suggestion="Your king is in check!",
                explanation=(
                    "You must immediately address the threat. Move your king to "
                    "safety, block the attacking piece, or capture it."
                ),
            )

        # Each side's legal moves are generated once and shared by every rule.
        own_moves = legal_move_map(state.board, state.turn, state)
        opponent_moves = legal_move_map(state.board, state.turn.opposite, state)

        return (
            self._threatened_piece(state, own_moves, opponent_moves)
            or self._capture(state, own_moves)
            or self._development(state, own_moves)
            or self._center_control(own_moves)
            or Hint(
                kind=HintKind.STRATEGY,
                suggestion="Think strategically",
                explanation=(
                    "Look for ways to improve your piece positions, control key "
                    "squares, and create threats against your opponent."
                ),
            )
        )

    def _threatened_piece(
        self,
        state: GameState,
        own_moves: dict[Square, list[Square]],
        opponent_moves: dict[Square, list[Square]],
    ) -> Hint | None:
        attacked = {to_sq for targets in opponent_moves.values() for to_sq in targets}
        for pos, piece in state.board.pieces(state.turn):
            if piece.piece_type == PieceType.KING:
                continue
            square = position_to_square(pos)
            if square not in attacked:
                continue
            escapes = own_moves.get(square, [])
            return Hint(
                kind=HintKind.THREATENED_PIECE,
                suggestion=f"Your {piece.piece_type} on {square} is under attack!",
                explanation=(
                    "Consider moving this piece to safety or defending it with "
                    "another piece."
                ),
                recommended_move=RecommendedMove(square, escapes[0]) if escapes else None,
            )
        return None

    def _capture(
        self, state: GameState, own_moves: dict[Square, list[Square]]
    ) -> Hint | None:
        captures: list[_Capture] = []
        for from_sq, targets in own_moves.items():
            attacker = state.board[square_to_position(from_sq)]
            assert attacker is not None
            for to_sq in targets:
                target = state.board[square_to_position(to_sq)]
                if target is not None and target.color != attacker.color:
                    captures.append(_Capture(from_sq, to_sq, attacker, target))
        if not captures:
            return None

        # sorted() is stable, so equal values keep scan order.
        best = sorted(captures, key=lambda c: -c.target.value)[0]
        return Hint(
            kind=HintKind.CAPTURE,
            suggestion=f"You can capture the {best.target.piece_type}!",
            explanation=(
                f"Move your {best.attacker.piece_type} from {best.from_sq} to "
                f"{best.to_sq} to capture the opponent's piece."
            ),
            recommended_move=RecommendedMove(best.from_sq, best.to_sq),
        )

    def _development(
        self, state: GameState, own_moves: dict[Square, list[Square]]
    ) -> Hint | None:
        row = _BACK_ROW[state.turn]
        for col in range(8):
            piece = state.board[Position(row, col)]
            if piece is None or piece.color != state.turn:
                continue
            if piece.piece_type not in _DEVELOPING_TYPES:
                continue
            square = position_to_square(Position(row, col))
            targets = own_moves.get(square, [])
            if targets:
                return Hint(
                    kind=HintKind.DEVELOPMENT,
                    suggestion="Develop your pieces",
                    explanation=(
                        f"Consider developing your {piece.piece_type} to a more "
                        "active square. Control the center and prepare to castle."
                    ),
                    recommended_move=RecommendedMove(square, targets[0]),
                )
        return None

    def _center_control(self, own_moves: dict[Square, list[Square]]) -> Hint | None:
        center = self._settings.center_squares
        for from_sq, targets in own_moves.items():
            for to_sq in targets:
                if to_sq in center:
                    return Hint(
                        kind=HintKind.CENTER_CONTROL,
                        suggestion="Control the center",
                        explanation=(
                            "Moving pieces to or controlling the center squares "
                            f"({', '.join(center)}) gives you more space and options."
                        ),
                        recommended_move=RecommendedMove(from_sq, to_sq),
                    )
        return None


def generate_hint(state: GameState, settings: TutorSettings | None = None) -> Hint:
    """Advice for ``state.turn`` from the first ladder rule that applies."""
    return HintAdvisor(settings).generate_hint(state)
