"""
connect_four - Two-player Connect Four

This package provides the board, win detection and turn handling for a
hot-seat Connect Four game, plus terminal and browser front-ends that
render the game from read-only snapshots.
"""

# Version number
__version__ = '0.1.0'
