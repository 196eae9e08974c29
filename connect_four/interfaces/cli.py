"""
cli.py - Command-line interface for Connect Four

This module provides hot-seat play in the terminal, a position checker
for the win detector, a small benchmark and a command to start the
browser interface.
"""

import argparse
import os
import random
import sys
from typing import List, Optional

from connect_four.debug import debug, DebugLevel
from connect_four.game.board import Board
from connect_four.game.detector import evaluate
from connect_four.game.rules import ColumnSelected, ConnectFourGame, NewGameRequested
from connect_four.utils import COLS, ROWS, GameStatus, parse_position

QUIT = 'q'
NEW_GAME = 'n'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Connect Four')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging (same as --debug_level debug)')
    parser.add_argument('--debug_level',
                        choices=[level.name.lower() for level in DebugLevel],
                        default=None,
                        help='Logging verbosity (default: warning, or CONNECT_FOUR_DEBUG_LEVEL)')
    parser.add_argument('--log_file', type=str, default=None,
                        help='Also write log messages to this file')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    subparsers.add_parser('play', help='Play a two-player game in the terminal')

    check_parser = subparsers.add_parser('check', help='Evaluate a board position')
    check_parser.add_argument('--position', type=str, required=True,
                              help=f'{COLS * ROWS} comma-separated cells, column by column from the '
                                   'bottom: 0 empty, 1 first player, 2 second player')

    benchmark_parser = subparsers.add_parser('benchmark', help='Time random games')
    benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                  help='Number of games to play')

    serve_parser = subparsers.add_parser('serve', help='Start the browser interface')
    serve_parser.add_argument('--host', default=os.environ.get('CONNECT_FOUR_HOST', '127.0.0.1'))
    serve_parser.add_argument('--port', type=int,
                              default=int(os.environ.get('CONNECT_FOUR_PORT', '5000')))

    return parser


def configure_logging(args) -> None:
    """Apply environment settings, then command-line flags on top."""
    debug.configure_from_env()
    if args.debug:
        debug.configure(level=DebugLevel.DEBUG)
    elif args.debug_level:
        debug.set_from_string(args.debug_level)
    if args.log_file:
        debug.configure(log_file=args.log_file)


class SimpleCLI:
    """Terminal front-end for a hot-seat game."""

    def __init__(self, game: Optional[ConnectFourGame] = None):
        self.game = game or ConnectFourGame()
        self.args = None

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        self.args = build_parser().parse_args(argv)
        configure_logging(self.args)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the command named on the command line. Returns an exit code."""
        if self.args is None:
            self.parse_args(argv)

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'check':
            return self.check_position(self.args.position)
        elif self.args.command == 'benchmark':
            self.benchmark(self.args.iterations)
        elif self.args.command == 'serve':
            self.serve(self.args.host, self.args.port)
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def play_game(self) -> None:
        """Alternate turns between two people at the same keyboard."""
        print("Starting a new Connect Four game!")
        print(f"Enter a column number (0-{COLS - 1}); '{NEW_GAME}' for a new game, '{QUIT}' to quit.")

        self.game.subscribe(self.show)
        try:
            self.game.handle(NewGameRequested())
            while True:
                command = self.read_command()
                if command == QUIT:
                    print("Quitting game.")
                    return
                if command == NEW_GAME:
                    self.game.handle(NewGameRequested())
                    continue
                if command is None:
                    continue

                if self.game.is_game_over():
                    print(f"The game is over. Enter '{NEW_GAME}' to play again or '{QUIT}' to quit.")
                elif not self.game.handle(ColumnSelected(command)):
                    print(f"Column {command} is full.")
        finally:
            self.game.unsubscribe(self.show)

    def read_command(self):
        """
        Read one line of input.

        Returns:
            Column index, QUIT, NEW_GAME, or None for unusable input
        """
        try:
            user_input = input(f"{self.game.get_current_player().color.upper()} to move: ").strip().lower()
        except EOFError:
            return QUIT

        if user_input in (QUIT, NEW_GAME):
            return user_input

        try:
            column = int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or a command.")
            return None

        if not 0 <= column < COLS:
            print(f"Column must be between 0 and {COLS - 1}.")
            return None
        return column

    def show(self, snapshot) -> None:
        """Renderer printing the board and the status line."""
        print(Board.from_grid(snapshot.board).render())
        if snapshot.status == GameStatus.WON:
            print(f"{snapshot.winner.color.upper()} wins!")
        elif snapshot.status == GameStatus.TIE:
            print("It's a tie!")

    def check_position(self, position: str) -> int:
        """Print the evaluation of a position string."""
        try:
            board = Board.from_grid(parse_position(position))
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return 1

        print("Loaded position:")
        print(board.render())

        outcome = evaluate(board)
        if outcome.status == GameStatus.WON:
            print(f"Win for {outcome.winner.name} ({outcome.direction.name.lower()}) "
                  f"at {list(outcome.line)}")
        elif outcome.status == GameStatus.TIE:
            print("Tie: the board is full")
        else:
            print(f"In progress: {COLS * ROWS - board.token_count()} empty cells, "
                  f"valid moves {board.valid_columns()}")
        return 0

    def benchmark(self, iterations: int) -> None:
        """Play random games to completion and report timings."""
        print(f"Running benchmark with {iterations} games...")

        game = ConnectFourGame()
        total_moves = 0
        results = {GameStatus.WON: 0, GameStatus.TIE: 0}

        debug.start_timer("benchmark")
        for _ in range(iterations):
            game.new_game()
            while not game.is_game_over():
                game.make_move(random.choice(game.get_valid_moves()))
                total_moves += 1
            results[game.status] += 1
        elapsed = debug.end_timer("benchmark", "cli")

        print(f"Played {iterations} games ({total_moves} moves) in {elapsed:.6f} seconds")
        if iterations and total_moves:
            print(f"  {elapsed / iterations * 1000:.6f} ms per game, "
                  f"{elapsed / total_moves * 1000:.6f} ms per move")
        print(f"  wins: {results[GameStatus.WON]}, ties: {results[GameStatus.TIE]}")

    def serve(self, host: str, port: int) -> None:
        from connect_four.interfaces.web import create_app

        debug.info(f"Serving Connect Four on http://{host}:{port}/", "cli")
        create_app(self.game).run(host=host, port=port)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    return SimpleCLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
