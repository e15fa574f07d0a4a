"""
Unit Tests for Board Module

Tests for the international draughts position:
    - Starting position and PDN FEN parsing/serialization
    - Move generation (mandatory capture, majority rule, flying kings)
    - Exact push/pop reversibility
    - Geometry helpers and numpy views
"""

import numpy as np
import pytest

from draughts_engine.board import (
    BLACK,
    BLACK_MAN,
    EMPTY,
    STARTING_FEN,
    WHITE,
    WHITE_KING,
    WHITE_MAN,
    DraughtsBoard,
    Move,
    PieceKind,
    board_to_array,
    board_to_planes,
    occupancy_array,
)
from draughts_engine.board.representation import (
    RAYS,
    NORTH_EAST,
    coordinates_to_square,
    square_to_coordinates,
)


def assert_push_pop_restores(board: DraughtsBoard):
    """Push and pop every legal move, checking the position comes back."""
    occupancy = board.occupancy()
    turn = board.turn
    fen = board.fen()

    for move in board.legal_moves:
        board.push(move)
        popped = board.pop()

        assert popped == move, f"pop returned {popped}, expected {move}"
        assert board.occupancy() == occupancy, f"Occupancy changed after {move}"
        assert board.turn == turn, f"Side to move changed after {move}"
        assert board.fen() == fen


class TestGeometry:
    """Tests for square numbering helpers."""

    def test_corner_squares(self):
        assert square_to_coordinates(1) == (0, 1)
        assert square_to_coordinates(5) == (0, 9)
        assert square_to_coordinates(46) == (9, 0)
        assert square_to_coordinates(50) == (9, 8)

    def test_round_trip_all_squares(self):
        for square in range(1, 51):
            row, col = square_to_coordinates(square)
            assert coordinates_to_square(row, col) == square

    def test_light_and_off_board_squares(self):
        assert coordinates_to_square(0, 0) is None, "(0, 0) is a light square"
        assert coordinates_to_square(-1, 0) is None
        assert coordinates_to_square(10, 1) is None

    def test_square_out_of_range(self):
        with pytest.raises(ValueError):
            square_to_coordinates(0)
        with pytest.raises(ValueError):
            square_to_coordinates(51)

    def test_long_diagonal(self):
        assert RAYS[46][NORTH_EAST] == (41, 37, 32, 28, 23, 19, 14, 10, 5)


class TestStartingPosition:
    """Tests for the initial position."""

    @pytest.fixture
    def board(self):
        return DraughtsBoard()

    def test_piece_counts(self, board):
        assert len(board.pieces(WHITE)) == 20
        assert len(board.pieces(BLACK)) == 20
        assert board.turn == WHITE, "White moves first"

    def test_piece_placement(self, board):
        assert board.piece_at(31) == WHITE_MAN
        assert board.piece_at(20) == BLACK_MAN
        assert board.piece_at(25) == EMPTY

    def test_relative_pieces(self, board):
        assert board.relative_piece_at(31, WHITE) == PieceKind.OWN_MAN
        assert board.relative_piece_at(31, BLACK) == PieceKind.OPPONENT_MAN
        assert board.relative_piece_at(25, WHITE) == PieceKind.EMPTY

    def test_nine_opening_moves(self, board):
        moves = board.legal_moves

        assert len(moves) == 9, f"Expected 9 opening moves, got {[str(m) for m in moves]}"
        assert all(not move.is_capture for move in moves)
        assert Move((32, 28)) in moves

    def test_fen_round_trip(self, board):
        assert board.fen() == STARTING_FEN
        assert DraughtsBoard(board.fen()) == board

    def test_fen_ranges(self, board):
        assert DraughtsBoard("W:W31-50:B1-20") == board


class TestFen:
    """Tests for PDN FEN parsing errors and edge cases."""

    @pytest.mark.parametrize("fen", [
        "X:W31:B1",
        "W:W51:B1",
        "W:W31,31:B1",
        "W:Q31:B1",
        "W:W20-10:B1",
        "W:Wabc:B1",
    ])
    def test_invalid_fen_raises(self, fen):
        with pytest.raises(ValueError):
            DraughtsBoard(fen)

    def test_kings_and_side_to_move(self):
        board = DraughtsBoard("B:WK46,31:BK5")

        assert board.turn == BLACK
        assert board.piece_at(46) == WHITE_KING
        assert board.relative_piece_at(5, BLACK) == PieceKind.OWN_KING
        assert board.fen() == "B:W31,K46:BK5"

    def test_empty_board(self):
        board = DraughtsBoard(fen=None)

        assert board.occupancy() == (EMPTY,) * 50
        assert board.is_game_over()


class TestMoveGeneration:
    """Tests for the capture rules and piece movement."""

    def test_capture_is_mandatory(self):
        board = DraughtsBoard("W:W28,46:B23")

        assert board.legal_moves == [Move((28, 19), (23,))]

    def test_majority_capture(self):
        """The double capture over 27 and 17 beats the single one over 28."""
        board = DraughtsBoard("W:W32:B17,27,28")

        moves = board.legal_moves

        assert len(moves) == 1, f"Only the longest capture is legal, got {[str(m) for m in moves]}"
        assert moves[0].steps == (32, 21, 12)
        assert moves[0].captures == (27, 17)
        assert moves[0].pdn() == "32x21x12"

    def test_man_captures_backwards(self):
        board = DraughtsBoard("W:W28:B33")

        assert board.legal_moves == [Move((28, 39), (33,))]

    def test_flying_king_moves(self):
        board = DraughtsBoard("W:WK46:B")

        moves = board.legal_moves

        assert len(moves) == 9, "King sweeps the whole long diagonal"
        assert all(move.is_king_move for move in moves)

    def test_flying_king_capture(self):
        board = DraughtsBoard("W:WK46:B28")

        destinations = sorted(move.destination for move in board.legal_moves)

        assert destinations == [5, 10, 14, 19, 23]
        assert all(move.captures == (28,) for move in board.legal_moves)

    def test_black_men_move_down(self):
        board = DraughtsBoard("B:W46:B18")

        assert sorted(move.destination for move in board.legal_moves) == [22, 23]

    def test_no_moves_is_game_over(self):
        board = DraughtsBoard("B:W28:B")

        assert board.legal_moves == []
        assert board.is_game_over()


class TestPushPop:
    """Tests for making and unmaking moves."""

    def test_push_switches_turn(self):
        board = DraughtsBoard()
        board.push_pdn("32-28")

        assert board.turn == BLACK
        assert board.piece_at(28) == WHITE_MAN
        assert board.piece_at(32) == EMPTY
        assert board.peek() == Move((32, 28))

    def test_promotion(self):
        board = DraughtsBoard("W:W6:B")
        board.push(board.legal_moves[0])

        assert board.piece_at(1) == WHITE_KING, "Man reaching row 0 becomes a king"

        board.pop()
        assert board.piece_at(6) == WHITE_MAN, "pop must restore the man"
        assert board.piece_at(1) == EMPTY

    def test_no_promotion_when_passing_through(self):
        """A capture that touches the far row and leaves it stays a man."""
        board = DraughtsBoard("W:W12:B8,9")

        moves = board.legal_moves
        assert [move.steps for move in moves] == [(12, 3, 14)]

        board.push(moves[0])
        assert board.piece_at(14) == WHITE_MAN
        assert board.piece_at(8) == EMPTY and board.piece_at(9) == EMPTY

    @pytest.mark.parametrize("fen", [
        STARTING_FEN,
        "W:W32:B17,27,28",
        "W:WK46:B28",
        "W:W6,12:B8,9",
        "B:WK10,33:BK41,18,19",
    ])
    def test_push_pop_reversible(self, fen):
        assert_push_pop_restores(DraughtsBoard(fen))

    def test_reversible_along_a_game(self):
        board = DraughtsBoard()
        for text in ["32-28", "19-23", "28x19", "14x23", "33-28"]:
            board.push_pdn(text)
            assert_push_pop_restores(board)

        for _ in range(5):
            board.pop()
        assert board == DraughtsBoard()

    def test_pop_empty_stack(self):
        with pytest.raises(IndexError):
            DraughtsBoard().pop()

    def test_copy_is_independent(self):
        board = DraughtsBoard()
        copy = board.copy()
        copy.push_pdn("32-28")

        assert board == DraughtsBoard()
        assert copy != board


class TestPdnMoves:
    """Tests for PDN move text."""

    def test_parse_quiet_move(self):
        assert DraughtsBoard().parse_pdn("32-28") == Move((32, 28))

    def test_parse_capture_by_endpoints(self):
        board = DraughtsBoard("W:W32:B17,27,28")

        assert board.parse_pdn("32x12").steps == (32, 21, 12)

    @pytest.mark.parametrize("text", ["32-29", "abc", "32", "28x19"])
    def test_illegal_or_malformed(self, text):
        with pytest.raises(ValueError):
            DraughtsBoard().parse_pdn(text)


class TestArrayViews:
    """Tests for numpy views of a position."""

    def test_occupancy_array(self):
        occupancy = occupancy_array(DraughtsBoard())

        assert occupancy.shape == (50,)
        assert occupancy.dtype == np.int8
        assert np.count_nonzero(occupancy) == 40

    def test_board_to_array(self):
        grid = board_to_array(DraughtsBoard())

        assert grid.shape == (10, 10)
        assert grid[9, 0] == WHITE_MAN, "Square 46 is the bottom-left corner"
        assert grid[0, 1] == BLACK_MAN, "Square 1 is on the top row"
        assert grid[0, 0] == EMPTY

    def test_board_to_planes(self):
        planes = board_to_planes(DraughtsBoard())

        assert planes.shape == (4, 10, 10)
        assert planes[0].sum() == 20, "White men plane"
        assert planes[1].sum() == 0, "No white kings"
        assert planes[2].sum() == 20, "Black men plane"
