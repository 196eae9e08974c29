"""
board.py - Board representation for Connect Four

The Board owns the 7x6 grid of cells and nothing else: whose turn it is
and whether the game has ended are tracked by the game controller in
rules.py. Tokens fall to the lowest empty cell of a column.
"""

from typing import List

import numpy as np

from connect_four.debug import debug
from connect_four.errors import ColumnFull, InvalidColumn
from connect_four.utils import (COLS, ROWS, Player, empty_grid, is_column_index,
                                render_board_ascii)


class Board:
    """
    A Connect Four grid of COLS columns by ROWS rows.

    ``grid[col, row]`` holds a Player value, row 0 being the bottom.
    """

    def __init__(self):
        """Initialize an empty board."""
        debug.trace("Initializing new Board", "board")
        self.reset()

    def reset(self):
        """Clear every cell."""
        self.grid = empty_grid()

    @classmethod
    def from_grid(cls, grid) -> 'Board':
        """Build a board from an existing (COLS, ROWS) array of player values."""
        grid = np.asarray(grid, dtype=np.int8)
        if grid.shape != (COLS, ROWS):
            raise ValueError(f"Grid must have shape {(COLS, ROWS)}, got {grid.shape}")
        unknown = sorted(set(np.unique(grid).tolist()) - {p.value for p in Player})
        if unknown:
            raise ValueError(f"Grid holds values that are not players: {unknown}")

        board = cls()
        board.grid = grid.copy()
        return board

    def copy(self) -> 'Board':
        """Create an independent copy of this board."""
        return Board.from_grid(self.grid)

    def column_height(self, column: int) -> int:
        """Number of tokens in a column."""
        return int(np.count_nonzero(self.grid[column]))

    def is_column_full(self, column: int) -> bool:
        return self.column_height(column) >= ROWS

    def is_valid_move(self, column) -> bool:
        """
        Check if a token can be dropped in a column.

        Args:
            column: Column index (0-indexed)

        Returns:
            True if the column exists and has an empty cell
        """
        return is_column_index(column) and not self.is_column_full(column)

    def valid_columns(self) -> List[int]:
        """Columns that still have room for a token."""
        return [col for col in range(COLS) if not self.is_column_full(col)]

    def drop_token(self, column, player: Player) -> int:
        """
        Drop a token into a column.

        The token lands in the empty cell closest to the bottom.

        Args:
            column: Column index (0-indexed)
            player: Player owning the token

        Returns:
            Row index where the token landed

        Raises:
            InvalidColumn: if column is not an integer in range
            ColumnFull: if the column has no empty cell
        """
        if not is_column_index(column):
            raise InvalidColumn(column)

        column = int(column)
        for row in range(ROWS):
            if self.grid[column, row] == Player.EMPTY.value:
                self.grid[column, row] = player.value
                debug.trace(f"Placed {player.name} at ({column}, {row})", "board")
                return row

        raise ColumnFull(column)

    def cell(self, column: int, row: int) -> Player:
        return Player(int(self.grid[column, row]))

    def token_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def has_empty_cell(self) -> bool:
        return bool(np.any(self.grid == Player.EMPTY.value))

    def is_full(self) -> bool:
        return not self.has_empty_cell()

    def get_state(self) -> np.ndarray:
        """
        Get the board contents as a numpy array.

        Returns:
            A copy of the (COLS, ROWS) grid
        """
        return self.grid.copy()

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()
