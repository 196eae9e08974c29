"""
errors.py - Reasons a move can be rejected

All of these are recoverable: the game controller catches them at its
boundary, logs them and leaves the game unchanged.
"""


class MoveRejected(Exception):
    """A move that was not applied to the board."""

    reason = "rejected"

    def __init__(self, column, message: str = None):
        self.column = column
        super().__init__(message or f"move in column {column!r} rejected ({self.reason})")


class InvalidColumn(MoveRejected):
    """The column is not an integer in range."""
    reason = "invalid_column"


class ColumnFull(MoveRejected):
    """The column has no empty cell left."""
    reason = "column_full"


class GameAlreadyOver(MoveRejected):
    """The game has been won or tied."""
    reason = "game_over"
