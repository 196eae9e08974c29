"""
rules.py - Game flow and Gymnasium environment for Connect Four

This module provides:
1. ConnectFourGame, the turn/state machine that owns the board, the turn
   and the game status, and notifies renderers after every update
2. Typed input events and read-only snapshots for front-ends
3. ConnectFourEnv, a gymnasium environment driving the same controller
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connect_four.debug import debug
from connect_four.errors import GameAlreadyOver, MoveRejected
from connect_four.game.board import Board
from connect_four.game.detector import IN_PROGRESS, Outcome, evaluate
from connect_four.utils import (COLS, PLAYER_COLORS, ROWS, Cell, GameStatus, Player)


@dataclass(frozen=True)
class ColumnSelected:
    """A player chose a column."""
    column: int


@dataclass(frozen=True)
class NewGameRequested:
    """Start over with an empty board."""


InputEvent = Union[ColumnSelected, NewGameRequested]


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a game handed to renderers."""
    board: Tuple[Tuple[int, ...], ...]  # board[col][row], row 0 at the bottom
    turn: Player
    status: GameStatus
    winner: Optional[Player] = None
    winning_line: Tuple[Cell, ...] = ()
    last_move: Optional[Cell] = None
    valid_columns: Tuple[int, ...] = field(default_factory=tuple)
    move_count: int = 0

    def is_game_over(self) -> bool:
        return self.status.is_game_over()

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form used by the web front-end."""
        return {
            'board': [list(column) for column in self.board],
            'cols': COLS,
            'rows': ROWS,
            'turn': self.turn.value,
            'turn_color': PLAYER_COLORS[self.turn],
            'status': self.status.name,
            'winner': self.winner.value if self.winner else None,
            'winner_color': PLAYER_COLORS[self.winner] if self.winner else None,
            'winning_line': [list(cell) for cell in self.winning_line],
            'last_move': list(self.last_move) if self.last_move else None,
            'valid_columns': list(self.valid_columns),
            'move_count': self.move_count,
            'is_game_over': self.is_game_over(),
        }


Renderer = Callable[[GameSnapshot], None]


class ConnectFourGame:
    """
    Turn and state manager for a two-player Connect Four game.

    Board, turn and outcome are only changed together: by an accepted move
    or by starting a new game. Rejected moves are logged and dropped.
    Updates and snapshots hold an internal lock, so moves from several
    threads are applied one at a time.
    """

    def __init__(self, renderers: Optional[List[Renderer]] = None):
        debug.debug("Initializing ConnectFourGame", "game")
        self.board = Board()
        self._renderers: List[Renderer] = list(renderers or [])
        self._lock = threading.RLock()
        self._reset_state()

    def _reset_state(self):
        self.board.reset()
        self.current_player = Player.ONE
        self.outcome: Outcome = IN_PROGRESS
        self.last_move: Optional[Cell] = None
        self.last_rejection: Optional[MoveRejected] = None
        self.move_count = 0

    @property
    def status(self) -> GameStatus:
        return self.outcome.status

    def subscribe(self, renderer: Renderer) -> None:
        """Call ``renderer`` with a snapshot after every update."""
        self._renderers.append(renderer)

    def unsubscribe(self, renderer: Renderer) -> None:
        self._renderers.remove(renderer)

    def _notify(self) -> None:
        if not self._renderers:
            return
        snapshot = self.snapshot()
        for renderer in list(self._renderers):
            renderer(snapshot)

    def new_game(self) -> None:
        """Reset to an empty board with the first player to move."""
        debug.info("New game started", "game")
        with self._lock:
            self._reset_state()
            self._notify()

    def _apply_move(self, column) -> int:
        if self.outcome.is_game_over():
            raise GameAlreadyOver(column)

        player = self.current_player
        row = self.board.drop_token(column, player)
        self.last_move = (int(column), row)
        self.move_count += 1

        self.outcome = evaluate(self.board)
        if self.outcome.status == GameStatus.WON:
            debug.info(f"Player {self.outcome.winner.name} wins after move at {self.last_move}", "game")
        elif self.outcome.status == GameStatus.TIE:
            debug.info("Game ends in a tie", "game")
        else:
            self.current_player = player.other()

        return row

    def make_move(self, column) -> bool:
        """
        Drop the current player's token in a column.

        Args:
            column: Column index (0-indexed)

        Returns:
            True if the move was applied, False if it was rejected
        """
        with self._lock:
            debug.debug(f"Move in column {column!r} for {self.current_player.name}", "game")
            try:
                self._apply_move(column)
            except MoveRejected as exc:
                self.last_rejection = exc
                debug.debug(f"Ignoring move: {exc}", "game")
                return False

            self.last_rejection = None
            self._notify()
            return True

    def handle(self, event: InputEvent) -> bool:
        """
        Apply an input event.

        Returns:
            True if the game changed
        """
        if isinstance(event, ColumnSelected):
            return self.make_move(event.column)
        if isinstance(event, NewGameRequested):
            self.new_game()
            return True
        raise TypeError(f"Unsupported input event: {event!r}")

    def snapshot(self) -> GameSnapshot:
        with self._lock:
            return GameSnapshot(
                board=tuple(tuple(int(v) for v in column) for column in self.board.grid),
                turn=self.current_player,
                status=self.outcome.status,
                winner=self.outcome.winner,
                winning_line=self.outcome.line,
                last_move=self.last_move,
                valid_columns=tuple(self.get_valid_moves()),
                move_count=self.move_count,
            )

    def is_game_over(self) -> bool:
        return self.outcome.is_game_over()

    def get_winner(self) -> Optional[Player]:
        """The winning player, or None while in progress or after a tie."""
        return self.outcome.winner

    def get_current_player(self) -> Player:
        return self.current_player

    def get_valid_moves(self) -> List[int]:
        if self.outcome.is_game_over():
            return []
        return self.board.valid_columns()

    def render(self) -> str:
        return self.board.render()


# RGB colours for rgb_array rendering
RGB_COLORS = {
    Player.ONE.value: (128, 0, 128),    # purple
    Player.TWO.value: (0, 255, 0),      # lime
    Player.EMPTY.value: (255, 255, 255),
}
CELL_PIXELS = 50


class ConnectFourEnv(gym.Env):
    """
    Gymnasium interface to a hot-seat Connect Four game.

    Both players' moves arrive as actions; rewards are from the point of
    view of the player who just moved.
    """

    metadata = {'render_modes': ['ascii', 'human', 'rgb_array'], 'render_fps': 4}

    reward_win = 1.0
    reward_tie = 0.0
    reward_step = 0.0
    reward_rejected = -0.5

    def __init__(self, render_mode: Optional[str] = None):
        debug.debug("Initializing ConnectFourEnv", "env")
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.action_space = spaces.Discrete(COLS)
        self.observation_space = spaces.Box(low=-1, high=1, shape=(COLS, ROWS), dtype=np.int8)
        self.game = ConnectFourGame()
        self.render_mode = render_mode

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        super().reset(seed=seed)
        self.game.new_game()

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Drop a token for the player to move.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        if not self.game.make_move(action):
            debug.warning(f"Rejected action {action!r}: {self.game.last_rejection.reason}", "env")
            info = self._get_info()
            info['rejected'] = self.game.last_rejection.reason
            return self._get_observation(), self.reward_rejected, self.game.is_game_over(), False, info

        reward = self.reward_step
        if self.game.status == GameStatus.WON:
            reward = self.reward_win
        elif self.game.status == GameStatus.TIE:
            reward = self.reward_tie

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, self.game.is_game_over(), False, self._get_info()

    def render(self) -> Optional[Union[str, np.ndarray]]:
        if self.render_mode is None:
            return None

        if self.render_mode == "ascii":
            return self.game.render()

        if self.render_mode == "human":
            print(self.game.render())
            return None

        return self._render_rgb()

    def _render_rgb(self) -> np.ndarray:
        """Draw one filled disc per cell, top row at the top of the frame."""
        frame = np.zeros((ROWS * CELL_PIXELS, COLS * CELL_PIXELS, 3), dtype=np.uint8)
        frame[:, :] = (0, 0, 128)

        radius = CELL_PIXELS * 2 // 5
        ys, xs = np.mgrid[0:CELL_PIXELS, 0:CELL_PIXELS]
        centre = CELL_PIXELS // 2
        disc = (xs - centre) ** 2 + (ys - centre) ** 2 <= radius ** 2

        grid = self.game.board.grid
        for col in range(COLS):
            for row in range(ROWS):
                top = (ROWS - 1 - row) * CELL_PIXELS
                left = col * CELL_PIXELS
                tile = frame[top:top + CELL_PIXELS, left:left + CELL_PIXELS]
                tile[disc] = RGB_COLORS[int(grid[col, row])]
        return frame

    def _get_observation(self) -> np.ndarray:
        return self.game.board.get_state()

    def _get_info(self) -> Dict:
        snapshot = self.game.snapshot()
        return {
            'valid_moves': list(snapshot.valid_columns),
            'current_player': snapshot.turn.value,
            'status': snapshot.status.name,
            'winner': snapshot.winner.value if snapshot.winner else None,
            'winning_line': list(snapshot.winning_line),
            'moves_made': snapshot.move_count,
            'last_move': snapshot.last_move,
        }

    def close(self):
        pass
