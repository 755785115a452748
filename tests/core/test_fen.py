"""Tests for FEN parsing and serialization."""

import pytest

from chesstutor.core.board import Board
from chesstutor.core.enums import CastlingRights, Color, PieceType
from chesstutor.core.errors import ChessError, InvalidFen
from chesstutor.core.fen import (
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
    position_from_fen,
    position_to_fen,
)
from chesstutor.core.piece import Piece
from chesstutor.core.state import GameState, apply_move
from chesstutor.core.types import square_to_position


class TestParsing:
    def test_starting_position(self) -> None:
        state = position_from_fen(STARTING_FEN)
        assert state.board == Board.initial()
        assert state.turn == Color.WHITE
        assert state.castling == CastlingRights.ALL
        assert state.en_passant is None
        assert state.halfmove_clock == 0
        assert state.fullmove_number == 1
        assert state == GameState.initial()

    def test_piece_placement(self) -> None:
        board = board_from_fen("4k3/8/8/3p4/4N3/8/8/4K3")
        assert board[square_to_position("e4")] == Piece(Color.WHITE, PieceType.KNIGHT)
        assert board[square_to_position("d5")] == Piece(Color.BLACK, PieceType.PAWN)
        assert board.count() == 4

    def test_optional_clock_fields(self) -> None:
        state = position_from_fen("4k3/8/8/8/8/8/8/4K3 b - -")
        assert state.turn == Color.BLACK
        assert state.castling == CastlingRights.NONE
        assert state.halfmove_clock == 0
        assert state.fullmove_number == 1

    def test_status_flags_computed(self) -> None:
        state = position_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        assert state.check
        assert not state.checkmate

    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "8/8/8/8/8/8/8 w - - 0 1",
            "9/8/8/8/8/8/8/8 w - - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNRR w KQkq - 0 1",
            "rnbqkbnr/ppppxppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkk - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq z9 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e3 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - -1 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 0",
        ],
    )
    def test_invalid_fen(self, fen: str) -> None:
        with pytest.raises(InvalidFen):
            position_from_fen(fen)

    def test_invalid_fen_is_a_chess_error(self) -> None:
        with pytest.raises(ChessError):
            position_from_fen("not a fen")


class TestSerialization:
    def test_starting_round_trip(self) -> None:
        assert position_to_fen(position_from_fen(STARTING_FEN)) == STARTING_FEN
        assert position_to_fen(GameState.initial()) == STARTING_FEN

    def test_board_to_fen(self) -> None:
        assert board_to_fen(Board()) == "8/8/8/8/8/8/8/8"

    def test_after_double_push(self) -> None:
        state = apply_move(GameState.initial(), "e2", "e4").state
        assert position_to_fen(state) == (
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )

    def test_after_knight_reply(self) -> None:
        state = apply_move(GameState.initial(), "e2", "e4").state
        state = apply_move(state, "g8", "f6").state
        assert position_to_fen(state) == (
            "rnbqkb1r/pppppppp/5n2/8/4P3/8/PPPP1PPP/RNBQKBNR w KQkq - 1 2"
        )

    def test_no_castling_rights(self) -> None:
        fen = "4k3/8/8/8/8/8/8/4K3 w - - 12 40"
        assert position_to_fen(position_from_fen(fen)) == fen
