"""Tests for Board."""

import pytest

from chesstutor.core.board import BACK_RANK, Board, initialize_board
from chesstutor.core.enums import Color, PieceType
from chesstutor.core.errors import OutOfBounds
from chesstutor.core.piece import Piece
from chesstutor.core.types import Position, square_to_position


class TestBoardInitial:
    def test_black_back_rank_on_row_zero(self) -> None:
        board = Board.initial()
        for col, pt in enumerate(BACK_RANK):
            assert board[Position(0, col)] == Piece(Color.BLACK, pt)

    def test_white_back_rank_on_row_seven(self) -> None:
        board = Board.initial()
        for col, pt in enumerate(BACK_RANK):
            assert board[Position(7, col)] == Piece(Color.WHITE, pt)

    def test_back_rank_order(self) -> None:
        assert BACK_RANK == (
            PieceType.ROOK,
            PieceType.KNIGHT,
            PieceType.BISHOP,
            PieceType.QUEEN,
            PieceType.KING,
            PieceType.BISHOP,
            PieceType.KNIGHT,
            PieceType.ROOK,
        )

    def test_pawns(self) -> None:
        board = Board.initial()
        for col in range(8):
            assert board[Position(1, col)] == Piece(Color.BLACK, PieceType.PAWN)
            assert board[Position(6, col)] == Piece(Color.WHITE, PieceType.PAWN)

    def test_empty_middle(self) -> None:
        board = Board.initial()
        for row in range(2, 6):
            for col in range(8):
                assert board[Position(row, col)] is None

    def test_kings_on_e_file(self) -> None:
        board = initialize_board()
        assert board[square_to_position("e1")] == Piece(Color.WHITE, PieceType.KING)
        assert board[square_to_position("e8")] == Piece(Color.BLACK, PieceType.KING)
        assert board.count() == 32


class TestBoardOperations:
    def test_with_changes_returns_new_board(self) -> None:
        board = Board.initial()
        e2 = square_to_position("e2")
        e4 = square_to_position("e4")
        moved = board.with_changes({e2: None, e4: board[e2]})

        assert moved is not board
        assert moved[e4] == Piece(Color.WHITE, PieceType.PAWN)
        assert moved.is_empty(e2)
        # Original untouched
        assert board[e2] == Piece(Color.WHITE, PieceType.PAWN)
        assert board.is_empty(e4)

    def test_equality_and_hash(self) -> None:
        assert Board.initial() == Board.initial()
        assert hash(Board.initial()) == hash(Board.initial())
        assert Board.initial() != Board()

    def test_pieces_row_major(self) -> None:
        board = Board.initial()
        white = list(board.pieces(Color.WHITE))
        assert len(white) == 16
        assert white[0] == (Position(6, 0), Piece(Color.WHITE, PieceType.PAWN))
        assert white[-1] == (Position(7, 7), Piece(Color.WHITE, PieceType.ROOK))

    def test_find(self) -> None:
        board = Board.initial()
        assert board.find(Piece(Color.WHITE, PieceType.KING)) == Position(7, 4)
        assert Board().find(Piece(Color.WHITE, PieceType.KING)) is None

    def test_out_of_bounds_access(self) -> None:
        with pytest.raises(OutOfBounds):
            Board()[Position(8, 0)]

    def test_wrong_square_count(self) -> None:
        with pytest.raises(ValueError):
            Board((None,) * 10)

    def test_to_rows(self) -> None:
        rows = Board.initial().to_rows()
        assert len(rows) == 8 and all(len(r) == 8 for r in rows)
        assert rows[0][4] == {"type": "king", "color": "black"}
        assert rows[7][3] == {"type": "queen", "color": "white"}
        assert rows[4][4] is None

    def test_repr(self) -> None:
        text = repr(Board.initial())
        assert text.splitlines()[0] == "8 r n b q k b n r"
        assert text.splitlines()[-1] == "  a b c d e f g h"


class TestPiece:
    def test_from_char(self) -> None:
        assert Piece.from_char("N") == Piece(Color.WHITE, PieceType.KNIGHT)
        assert Piece.from_char("q") == Piece(Color.BLACK, PieceType.QUEEN)

    def test_invalid_char(self) -> None:
        with pytest.raises(ValueError):
            Piece.from_char("x")

    def test_values(self) -> None:
        assert Piece(Color.WHITE, PieceType.QUEEN).value == 9
        assert Piece(Color.BLACK, PieceType.KNIGHT).value == 3
        assert Piece(Color.BLACK, PieceType.KING).value == 0
