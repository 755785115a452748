"""Tests for Rules: checkmate, stalemate, draw detection."""

from chesstutor.core.enums import Color, GameResult
from chesstutor.core.fen import position_from_fen
from chesstutor.core.move_generator import get_valid_moves, is_king_in_check
from chesstutor.core.rules import (
    game_result,
    has_legal_moves,
    is_checkmate,
    is_insufficient_material,
    is_stalemate,
)
from chesstutor.core.state import GameState, apply_move
from chesstutor.core.types import position_to_square

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


def _play(*moves: tuple[str, str]) -> GameState:
    state = GameState.initial()
    for from_sq, to_sq in moves:
        state = apply_move(state, from_sq, to_sq).state
    return state


class TestCheck:
    def test_starting_not_in_check(self) -> None:
        state = GameState.initial()
        assert not is_king_in_check(state.board, Color.WHITE)
        assert not state.check

    def test_fools_mate_in_check(self) -> None:
        state = position_from_fen(FOOLS_MATE)
        assert is_king_in_check(state.board, Color.WHITE)
        assert state.check


class TestCheckmate:
    def test_fools_mate_played_out(self) -> None:
        state = _play(("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4"))

        assert is_king_in_check(state.board, Color.WHITE)
        assert is_checkmate(state.board, Color.WHITE, state)
        assert state.checkmate
        assert not state.stalemate
        for pos, _ in state.board.pieces(Color.WHITE):
            assert get_valid_moves(state.board, position_to_square(pos), state) == []
        assert game_result(state) == GameResult.BLACK_WINS

    def test_fools_mate_from_fen(self) -> None:
        state = position_from_fen(FOOLS_MATE)
        assert is_checkmate(state.board, Color.WHITE, state)
        assert state.result == GameResult.BLACK_WINS

    def test_back_rank_mate(self) -> None:
        # R on a8 checks black king d8; white king d6 covers all escapes
        state = position_from_fen("R2k4/8/3K4/8/8/8/8/8 b - - 0 1")
        assert is_checkmate(state.board, Color.BLACK, state)
        assert game_result(state) == GameResult.WHITE_WINS

    def test_not_checkmate_when_can_escape(self) -> None:
        state = position_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        assert state.check
        assert not is_checkmate(state.board, Color.WHITE, state)

    def test_not_checkmate_without_check(self) -> None:
        state = GameState.initial()
        assert not is_checkmate(state.board, Color.WHITE, state)


class TestStalemate:
    def test_king_trapped(self) -> None:
        # Black king on h8, white K on f6, white Q on g6
        state = position_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        assert is_stalemate(state.board, Color.BLACK, state)
        assert state.stalemate
        assert not state.checkmate
        assert game_result(state) == GameResult.DRAW

    def test_not_stalemate_when_has_moves(self) -> None:
        state = position_from_fen("7k/8/5K2/8/8/8/8/8 b - - 0 1")
        assert not is_stalemate(state.board, Color.BLACK, state)
        assert has_legal_moves(state.board, Color.BLACK, state)


class TestInsufficientMaterial:
    def test_k_vs_k(self) -> None:
        state = position_from_fen("8/8/4k3/8/8/4K3/8/8 w - - 0 1")
        assert is_insufficient_material(state.board)
        assert game_result(state) == GameResult.DRAW

    def test_k_bishop_vs_k(self) -> None:
        state = position_from_fen("8/8/4k3/8/8/4K3/3B4/8 w - - 0 1")
        assert is_insufficient_material(state.board)

    def test_k_knight_vs_k(self) -> None:
        state = position_from_fen("8/8/4k3/8/8/4K3/3N4/8 w - - 0 1")
        assert is_insufficient_material(state.board)

    def test_same_colour_bishops(self) -> None:
        state = position_from_fen("8/8/4k3/2b5/8/4K3/3B4/8 w - - 0 1")
        assert is_insufficient_material(state.board)

    def test_opposite_colour_bishops_sufficient(self) -> None:
        state = position_from_fen("8/8/4k3/3b4/8/4K3/3B4/8 w - - 0 1")
        assert not is_insufficient_material(state.board)

    def test_k_rook_vs_k_sufficient(self) -> None:
        state = position_from_fen("8/8/4k3/8/8/4K3/3R4/8 w - - 0 1")
        assert not is_insufficient_material(state.board)

    def test_kp_vs_k_sufficient(self) -> None:
        state = position_from_fen("8/8/4k3/8/4P3/4K3/8/8 w - - 0 1")
        assert not is_insufficient_material(state.board)


class TestGameResult:
    def test_in_progress_at_start(self) -> None:
        assert game_result(GameState.initial()) == GameResult.IN_PROGRESS
        assert not GameState.initial().is_game_over
