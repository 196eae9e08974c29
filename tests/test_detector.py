"""
Tests for win and tie detection.
"""

import numpy as np
import pytest

from connect_four.game.board import Board
from connect_four.game.detector import (check_diagonal, check_right, check_up, evaluate,
                                        find_line)
from connect_four.utils import COLS, ROWS, Direction, GameStatus, Player
from tests.boards import TIE_PICTURE, board_from_picture


VERTICAL = """
. . . . . . .
. . . . . . .
X . . . . . .
X . . . . . .
X . . . . O .
X . . . O O .
"""

HORIZONTAL = """
. . . . . . .
. . . . . . .
. . . . . . .
X . . . . . .
X X . . . O .
X X . O O O O
"""

DIAGONAL_UP = """
. . . . . . .
. . . . . . .
. . . X . . .
. . X O . . .
. X O O . . .
X X O X O . .
"""

DIAGONAL_DOWN = """
. . . . . . .
. . . . . . .
. O . X . . .
. O O X . . .
. X X O . O .
X X O X O O X
"""


class TestEvaluateExamples:
    """One example board per axis."""

    def test_vertical(self):
        outcome = evaluate(board_from_picture(VERTICAL))
        assert outcome.status == GameStatus.WON
        assert outcome.winner == Player.ONE
        assert outcome.direction == Direction.VERTICAL
        assert outcome.line == ((0, 0), (0, 1), (0, 2), (0, 3))

    def test_horizontal(self):
        outcome = evaluate(board_from_picture(HORIZONTAL))
        assert outcome.status == GameStatus.WON
        assert outcome.winner == Player.TWO
        assert outcome.direction == Direction.HORIZONTAL
        assert outcome.line == ((3, 0), (4, 0), (5, 0), (6, 0))

    def test_diagonal_up_right(self):
        outcome = evaluate(board_from_picture(DIAGONAL_UP))
        assert outcome.winner == Player.ONE
        assert outcome.direction == Direction.DIAGONAL_UP
        assert outcome.line == ((0, 0), (1, 1), (2, 2), (3, 3))

    def test_diagonal_down_right(self):
        outcome = evaluate(board_from_picture(DIAGONAL_DOWN))
        assert outcome.winner == Player.TWO
        assert outcome.direction == Direction.DIAGONAL_DOWN
        assert outcome.line == ((1, 3), (2, 2), (3, 1), (4, 0))

    def test_accepts_plain_array(self):
        grid = board_from_picture(VERTICAL).get_state()
        assert evaluate(grid).winner == Player.ONE


class TestEvaluateStatus:
    """In-progress and tie results."""

    def test_empty_board_in_progress(self):
        outcome = evaluate(Board())
        assert outcome.status == GameStatus.IN_PROGRESS
        assert outcome.winner is None
        assert outcome.line == ()
        assert not outcome.is_game_over()

    def test_full_board_without_line_is_tie(self):
        outcome = evaluate(board_from_picture(TIE_PICTURE))
        assert outcome.status == GameStatus.TIE
        assert outcome.winner is None
        assert outcome.is_game_over()

    def test_one_empty_cell_is_not_tie(self):
        board = board_from_picture(TIE_PICTURE)
        board.grid[3, ROWS - 1] = Player.EMPTY.value
        assert evaluate(board).status == GameStatus.IN_PROGRESS

    def test_full_board_with_line_is_win_not_tie(self):
        board = board_from_picture(TIE_PICTURE)
        board.grid[0, 0:4] = Player.ONE.value
        outcome = evaluate(board)
        assert outcome.status == GameStatus.WON
        assert outcome.winner == Player.ONE

    def test_three_in_a_row_is_not_a_win(self):
        board = Board()
        for col in range(3):
            board.grid[col, 0] = Player.ONE.value
        assert evaluate(board).status == GameStatus.IN_PROGRESS

    def test_broken_line_is_not_a_win(self):
        board = Board()
        for col in (0, 1, 3, 4):
            board.grid[col, 0] = Player.TWO.value
        assert find_line(board) is None

    def test_mixed_line_is_not_a_win(self):
        board = Board()
        board.grid[0, 0:4] = [1, 1, -1, 1]
        assert evaluate(board).status == GameStatus.IN_PROGRESS

    def test_scan_order_picks_first_column_first(self):
        board = Board()
        board.grid[1, 0:4] = Player.ONE.value
        board.grid[5, 0:4] = Player.TWO.value
        assert evaluate(board).winner == Player.ONE

    def test_vertical_checked_before_horizontal_from_same_cell(self):
        board = Board()
        board.grid[0, 0:4] = Player.ONE.value
        board.grid[0:4, 0] = Player.ONE.value
        assert evaluate(board).direction == Direction.VERTICAL


class TestDirectionalChecks:
    """Bounds of the single-axis checks."""

    def test_check_up_bounds(self):
        board = Board()
        board.grid[2, 2:6] = Player.ONE.value
        assert check_up(board, 2, 2) == Player.ONE
        assert check_up(board, 2, 3) is None

    def test_check_right_bounds(self):
        board = Board()
        board.grid[3:7, 5] = Player.TWO.value
        assert check_right(board, 3, 5) == Player.TWO
        assert check_right(board, 4, 5) is None

    def test_check_diagonal_up_needs_room_above(self):
        board = Board()
        for i in range(4):
            board.grid[3 + i, 2 + i] = Player.ONE.value
        assert check_diagonal(board, 3, 2, 1) == Player.ONE
        assert check_diagonal(board, 3, 3, 1) is None

    def test_check_diagonal_down_needs_room_below(self):
        board = Board()
        for i in range(4):
            board.grid[i, 5 - i] = Player.TWO.value
        assert check_diagonal(board, 0, 5, -1) == Player.TWO
        assert check_diagonal(board, 0, 2, -1) is None

    def test_no_check_reads_outside_the_board(self):
        board = Board.from_grid(np.ones((COLS, ROWS), dtype=np.int8))
        for col in range(COLS):
            for row in range(ROWS):
                check_up(board, col, row)
                check_right(board, col, row)
                check_diagonal(board, col, row, 1)
                check_diagonal(board, col, row, -1)
