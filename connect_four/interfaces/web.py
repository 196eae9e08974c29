"""
web.py - Browser interface for Connect Four

A Flask application serving a single page and a small JSON API. Each app
owns one ConnectFourGame; a subscribed renderer keeps the latest snapshot,
which is what the API hands to the page. Requests that touch the game are
serialised so that a move and the state it returns belong together.
"""

import threading
from typing import Any, Dict, Optional

from flask import Flask, jsonify, render_template, request

from connect_four.debug import debug
from connect_four.game.rules import (ColumnSelected, ConnectFourGame, GameSnapshot,
                                     NewGameRequested)
from connect_four.utils import COLS, ROWS, PLAYER_COLORS, Player


class SnapshotStore:
    """Renderer that remembers the most recent snapshot."""

    def __init__(self, game: ConnectFourGame):
        self.latest: GameSnapshot = game.snapshot()
        game.subscribe(self)

    def __call__(self, snapshot: GameSnapshot) -> None:
        self.latest = snapshot

    def as_json(self) -> Dict[str, Any]:
        state = self.latest.to_dict()
        state['message'] = status_message(self.latest)
        return state


def status_message(snapshot: GameSnapshot) -> str:
    """Message line shown under the board."""
    if snapshot.winner is not None:
        return f"{PLAYER_COLORS[snapshot.winner].upper()} Wins!"
    if snapshot.is_game_over():
        return "It's a Tie!"
    return f"{PLAYER_COLORS[snapshot.turn].upper()}'s Turn"


def create_app(game: Optional[ConnectFourGame] = None) -> Flask:
    """Build the Flask app around a game (a new one by default)."""
    app = Flask(__name__)
    game = game or ConnectFourGame()
    store = SnapshotStore(game)
    lock = threading.Lock()
    app.config['GAME'] = game
    app.config['SNAPSHOTS'] = store

    @app.route('/')
    def index():
        """Main game page."""
        return render_template('index.html', cols=COLS, rows=ROWS,
                               colors={p.value: c for p, c in PLAYER_COLORS.items()},
                               empty=Player.EMPTY.value)

    @app.route('/api/game/state')
    def get_state():
        with lock:
            return jsonify(store.as_json())

    @app.route('/api/game/move', methods=['POST'])
    def make_move():
        """Drop a token for the player to move."""
        data = request.get_json(silent=True)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            return jsonify({'error': 'Request body must be a JSON object'}), 400
        column = data.get('column')

        if column is None:
            return jsonify({'error': 'Column not specified'}), 400
        if isinstance(column, bool) or not isinstance(column, int):
            return jsonify({'error': 'Column must be an integer'}), 400

        with lock:
            accepted = game.handle(ColumnSelected(column))
            response = store.as_json()
            response['accepted'] = accepted
            if not accepted:
                response['rejected'] = game.last_rejection.reason
                debug.debug(f"Column {column} ignored: {game.last_rejection.reason}", "web")
        return jsonify(response)

    @app.route('/api/game/new', methods=['POST'])
    def new_game():
        with lock:
            game.handle(NewGameRequested())
            return jsonify(store.as_json())

    return app
