"""
utils.py - Constants, enumerations and helpers for Connect Four

Boards are numpy arrays of shape (COLS, ROWS) indexed ``grid[col, row]``
with row 0 at the bottom. Cells hold a Player value: 0 for empty, 1 for
the first player and -1 for the second, so a line of four belongs to one
player exactly when the absolute value of its sum is CONNECT_N.
"""

from enum import Enum, auto
from typing import List, Tuple

import numpy as np

# Game constants
COLS = 7
ROWS = 6
CONNECT_N = 4

Cell = Tuple[int, int]  # (col, row)


class Player(Enum):
    """Players and cell states."""
    EMPTY = 0
    ONE = 1
    TWO = -1

    def other(self) -> 'Player':
        """Get the opposing player (EMPTY stays EMPTY)."""
        return Player(-self.value)

    @property
    def color(self) -> str:
        return PLAYER_COLORS[self]

    def __str__(self):
        if self == Player.ONE:
            return "X"
        elif self == Player.TWO:
            return "O"
        return " "


PLAYER_COLORS = {
    Player.ONE: "purple",
    Player.TWO: "lime",
    Player.EMPTY: "white",
}


class GameStatus(Enum):
    """Status of a game. Only IN_PROGRESS accepts moves."""
    IN_PROGRESS = auto()
    WON = auto()
    TIE = auto()

    def is_game_over(self) -> bool:
        return self != GameStatus.IN_PROGRESS


class Direction(Enum):
    """Axes scanned by the win detector, in scan order."""
    VERTICAL = auto()        # up the column
    HORIZONTAL = auto()      # right along the row
    DIAGONAL_UP = auto()     # right and up
    DIAGONAL_DOWN = auto()   # right and down


# (dcol, drow) step for each direction
DIRECTION_VECTORS = {
    Direction.VERTICAL: (0, 1),
    Direction.HORIZONTAL: (1, 0),
    Direction.DIAGONAL_UP: (1, 1),
    Direction.DIAGONAL_DOWN: (1, -1),
}


def empty_grid() -> np.ndarray:
    """Create an all-empty board array."""
    return np.zeros((COLS, ROWS), dtype=np.int8)


def is_column_index(value) -> bool:
    """True for integer values (numpy integers included, bools excluded) in [0, COLS)."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        return False
    return 0 <= value < COLS


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the board as ASCII art, top row first.

    Args:
        grid: Board array of shape (COLS, ROWS)

    Returns:
        Multi-line string with column numbers underneath
    """
    border = "|" + "-" * (COLS * 2 - 1) + "|"
    lines = [border]

    for row in range(ROWS - 1, -1, -1):
        cells = [str(Player(int(grid[col, row]))) for col in range(COLS)]
        lines.append("|" + " ".join(cells) + "|")

    lines.append(border)
    lines.append("|" + " ".join(str(col) for col in range(COLS)) + "|")
    return "\n".join(lines)


# Position strings use 0/1/2 like the CLI, 2 meaning the second player
POSITION_CODES = {0: Player.EMPTY, 1: Player.ONE, 2: Player.TWO}


def parse_position(text: str) -> np.ndarray:
    """
    Parse a comma-separated position into a board array.

    Cells are listed column by column, bottom to top: the first ROWS values
    are column 0, the next ROWS column 1, and so on.

    Raises:
        ValueError: if the string has the wrong length or an unknown code
    """
    values: List[int] = [int(part) for part in text.split(",") if part.strip()]
    if len(values) != COLS * ROWS:
        raise ValueError(f"Position string must have {COLS * ROWS} values, got {len(values)}")

    unknown = sorted(set(values) - set(POSITION_CODES))
    if unknown:
        raise ValueError(f"Unknown cell codes: {unknown}")

    grid = empty_grid()
    for index, code in enumerate(values):
        grid[index // ROWS, index % ROWS] = POSITION_CODES[code].value
    return grid
