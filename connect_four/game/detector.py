"""
detector.py - Win and tie detection for Connect Four

``evaluate`` scans the whole board: every column, every row within it,
and for each starting cell the four directions in a fixed order. The
first line of four found decides the winner. When there is no line and
no empty cell the game is a tie.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from connect_four.debug import debug
from connect_four.utils import (COLS, CONNECT_N, DIRECTION_VECTORS, ROWS, Cell,
                                Direction, GameStatus, Player)


@dataclass(frozen=True)
class Outcome:
    """Result of evaluating a board."""
    status: GameStatus
    winner: Optional[Player] = None
    line: Tuple[Cell, ...] = ()
    direction: Optional[Direction] = None

    def is_game_over(self) -> bool:
        return self.status.is_game_over()


IN_PROGRESS = Outcome(GameStatus.IN_PROGRESS)
TIE = Outcome(GameStatus.TIE)


def _grid(board) -> np.ndarray:
    return board.grid if hasattr(board, "grid") else np.asarray(board)


def _line(col: int, row: int, direction: Direction) -> Tuple[Cell, ...]:
    dcol, drow = DIRECTION_VECTORS[direction]
    return tuple((col + dcol * i, row + drow * i) for i in range(CONNECT_N))


def _line_winner(grid: np.ndarray, cells: Tuple[Cell, ...]) -> Optional[Player]:
    total = sum(int(grid[c, r]) for c, r in cells)
    if abs(total) == CONNECT_N:
        col, row = cells[0]
        return Player(int(grid[col, row]))
    return None


def check_up(board, col: int, row: int) -> Optional[Player]:
    """Four in a column starting at (col, row) and going up."""
    if row > ROWS - CONNECT_N:
        return None
    return _line_winner(_grid(board), _line(col, row, Direction.VERTICAL))


def check_right(board, col: int, row: int) -> Optional[Player]:
    """Four in a row starting at (col, row) and going right."""
    if col > COLS - CONNECT_N:
        return None
    return _line_winner(_grid(board), _line(col, row, Direction.HORIZONTAL))


def check_diagonal(board, col: int, row: int, vertical_offset: int) -> Optional[Player]:
    """
    Four on a diagonal starting at (col, row) and going right.

    Args:
        vertical_offset: 1 to climb one row per column, -1 to descend
    """
    if col > COLS - CONNECT_N:
        return None
    if vertical_offset > 0 and row > ROWS - CONNECT_N:
        return None
    if vertical_offset < 0 and row < CONNECT_N - 1:
        return None

    direction = Direction.DIAGONAL_UP if vertical_offset > 0 else Direction.DIAGONAL_DOWN
    return _line_winner(_grid(board), _line(col, row, direction))


# Checked in this order at every starting cell
DIRECTION_CHECKS = (
    (Direction.VERTICAL, check_up),
    (Direction.HORIZONTAL, check_right),
    (Direction.DIAGONAL_UP, lambda board, col, row: check_diagonal(board, col, row, 1)),
    (Direction.DIAGONAL_DOWN, lambda board, col, row: check_diagonal(board, col, row, -1)),
)


def find_line(board) -> Optional[Outcome]:
    """Return the first winning line in scan order, or None."""
    grid = _grid(board)
    for col in range(COLS):
        for row in range(ROWS):
            if grid[col, row] == Player.EMPTY.value:
                continue
            for direction, check in DIRECTION_CHECKS:
                winner = check(grid, col, row)
                if winner is not None:
                    return Outcome(GameStatus.WON, winner, _line(col, row, direction), direction)
    return None


def evaluate(board) -> Outcome:
    """
    Determine whether a board is won, tied or still in progress.

    Args:
        board: A Board or a (COLS, ROWS) array of player values

    Returns:
        Outcome with the winner and winning line when status is WON
    """
    debug.start_timer("evaluate")
    outcome = find_line(board)

    if outcome is None:
        has_empty = bool(np.any(_grid(board) == Player.EMPTY.value))
        outcome = IN_PROGRESS if has_empty else TIE

    debug.end_timer("evaluate", "detector")
    if outcome.is_game_over():
        debug.debug(f"Board evaluated as {outcome.status.name}"
                    + (f" for {outcome.winner.name} {list(outcome.line)}" if outcome.winner else ""),
                    "detector")
    return outcome
