"""
Tests for the Board class: token placement, rejection and helpers.
"""

import numpy as np
import pytest

from connect_four.errors import ColumnFull, InvalidColumn
from connect_four.game.board import Board
from connect_four.utils import COLS, ROWS, Player


class TestDropToken:
    """Tokens fall to the lowest empty cell."""

    def test_first_token_lands_on_bottom_row(self):
        board = Board()
        assert board.drop_token(3, Player.ONE) == 0
        assert board.cell(3, 0) == Player.ONE

    def test_tokens_stack_upwards(self):
        board = Board()
        rows = [board.drop_token(2, player) for player in (Player.ONE, Player.TWO, Player.ONE)]
        assert rows == [0, 1, 2]
        assert [board.cell(2, r) for r in range(3)] == [Player.ONE, Player.TWO, Player.ONE]
        assert board.column_height(2) == 3

    def test_numpy_integer_column_accepted(self):
        board = Board()
        assert board.drop_token(np.int64(6), Player.TWO) == 0
        assert board.cell(6, 0) == Player.TWO

    @pytest.mark.parametrize("column", [-1, COLS, 100, "3", None, 2.0, True])
    def test_invalid_column_rejected(self, column):
        board = Board()
        with pytest.raises(InvalidColumn) as excinfo:
            board.drop_token(column, Player.ONE)
        assert excinfo.value.reason == "invalid_column"
        assert board.token_count() == 0

    def test_full_column_rejected_without_change(self):
        board = Board()
        for i in range(ROWS):
            board.drop_token(0, Player.ONE if i % 2 == 0 else Player.TWO)
        before = board.get_state()

        with pytest.raises(ColumnFull):
            board.drop_token(0, Player.ONE)

        np.testing.assert_array_equal(board.grid, before)
        assert board.column_height(0) == ROWS

    def test_column_never_exceeds_capacity(self):
        board = Board()
        for _ in range(ROWS * 3):
            try:
                board.drop_token(4, Player.ONE)
            except ColumnFull:
                pass
        assert board.column_height(4) == ROWS


class TestBoardHelpers:
    """Validity checks, copies and rendering."""

    def test_new_board_is_empty(self):
        board = Board()
        assert board.grid.shape == (COLS, ROWS)
        assert board.token_count() == 0
        assert board.has_empty_cell()
        assert board.valid_columns() == list(range(COLS))

    def test_reset_clears_cells(self):
        board = Board()
        board.drop_token(1, Player.ONE)
        board.reset()
        assert board.token_count() == 0

    def test_is_valid_move(self):
        board = Board()
        for _ in range(ROWS):
            board.drop_token(5, Player.TWO)
        assert board.is_valid_move(0) is True
        assert board.is_valid_move(5) is False
        assert board.is_valid_move(-1) is False
        assert board.is_valid_move(COLS) is False
        assert 5 not in board.valid_columns()

    def test_copy_is_independent(self):
        board = Board()
        board.drop_token(3, Player.ONE)
        clone = board.copy()
        clone.drop_token(3, Player.TWO)
        assert board.column_height(3) == 1
        assert clone.column_height(3) == 2

    def test_get_state_returns_copy(self):
        board = Board()
        state = board.get_state()
        state[0, 0] = Player.ONE.value
        assert board.cell(0, 0) == Player.EMPTY

    def test_from_grid_checks_shape(self):
        with pytest.raises(ValueError):
            Board.from_grid(np.zeros((ROWS, COLS)))

    @pytest.mark.parametrize("value", [2, -2, 5])
    def test_from_grid_rejects_non_player_values(self, value):
        grid = np.zeros((COLS, ROWS), dtype=np.int8)
        grid[3, 0] = value
        with pytest.raises(ValueError):
            Board.from_grid(grid)

    def test_is_full(self):
        grid = np.ones((COLS, ROWS), dtype=np.int8)
        assert Board.from_grid(grid).is_full()

    def test_render_puts_bottom_row_last(self):
        board = Board()
        board.drop_token(0, Player.ONE)
        board.drop_token(6, Player.TWO)
        lines = board.render().splitlines()
        assert lines[-3] == "|X           O|"
        assert lines[-1] == "|0 1 2 3 4 5 6|"
        assert str(board) == board.render()
