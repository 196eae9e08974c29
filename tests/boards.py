"""Board pictures for tests: top row first, X = Player.ONE, O = Player.TWO, . = empty."""

from connect_four.game.board import Board
from connect_four.utils import COLS, ROWS, Player

SYMBOLS = {"X": Player.ONE, "O": Player.TWO, ".": Player.EMPTY}


def board_from_picture(picture: str) -> Board:
    rows = [line.split() for line in picture.strip().splitlines()]
    assert len(rows) == ROWS and all(len(r) == COLS for r in rows)

    board = Board()
    for i, symbols in enumerate(rows):
        row = ROWS - 1 - i
        for col, symbol in enumerate(symbols):
            board.grid[col, row] = SYMBOLS[symbol].value
    return board


# Full board with no four-in-a-row anywhere
TIE_PICTURE = """
X X O O X X O
O O X X O O X
X X O O X X O
O O X X O O X
X X O O X X O
O O X X O O X
"""
