"""
connect_four.game - Core game mechanics for Connect Four

This package contains the board representation, the win detector and
the game controller.
"""

from connect_four.game.board import Board
from connect_four.game.detector import Outcome, evaluate
from connect_four.game.rules import (ColumnSelected, ConnectFourEnv, ConnectFourGame,
                                     GameSnapshot, NewGameRequested)

__all__ = ['Board', 'Outcome', 'evaluate', 'ColumnSelected', 'NewGameRequested',
           'GameSnapshot', 'ConnectFourGame', 'ConnectFourEnv']
