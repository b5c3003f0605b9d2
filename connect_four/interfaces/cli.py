"""
cli.py - Terminal interface for Connect Four

This module provides a text front end for the game: a main menu for picking
the board size and starting, saving or loading games, and a board screen
where two players take turns dropping disks.
"""

import argparse
import sys
from typing import Callable, List, Optional

from connect_four.data import data_manager
from connect_four.debug import DebugLevel, debug
from connect_four.errors import DropRejectedError, PersistenceError
from connect_four.game.rules import GameSession, SessionState
from connect_four.interfaces.menu import BoardSize, MainMenu, MenuResult
from connect_four.utils import (DEFAULT_COLS, DEFAULT_ROWS, MAX_SIZE_DIFFERENCE,
                                MIN_COLS, MIN_ROWS)

PAUSE_KEYS = ('p', 'esc', 'escape')
QUIT_KEYS = ('q', 'quit')


class SimpleCLI:
    """Command-line interface for playing Connect Four."""

    def __init__(self, session: Optional[GameSession] = None,
                 menu: Optional[MainMenu] = None,
                 input_func: Callable[[str], str] = input,
                 output: Callable[[str], None] = print):
        self.session = session or GameSession()
        self.menu = menu or MainMenu()
        self.args = None
        self._input = input_func
        self._print = output
        self._cursor: Optional[int] = None

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and apply the global settings."""
        parser = build_parser()
        self.args = parser.parse_args(argv)
        if not BoardSize.is_allowed(self.args.rows, self.args.cols):
            parser.error(f"board size {self.args.rows}x{self.args.cols} is not allowed: "
                         f"at least {MIN_ROWS}x{MIN_COLS} with rows and columns "
                         f"at most {MAX_SIZE_DIFFERENCE} apart")
        if self.args.command is None:
            self.args.command = 'play'

        configure_debug(self.args)
        self.session.save_path = self.args.save_file
        self.menu.board_size.rows = self.args.rows
        self.menu.board_size.cols = self.args.cols

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the command selected on the command line. Returns an exit code."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'show':
            return self.show_save()
        self.main_loop()
        return 0

    def main_loop(self) -> None:
        """Alternate between the menu and the board until the player exits."""
        debug.info("Starting Connect Four", "cli")
        while True:
            result = self.menu_screen()
            if result == MenuResult.EXIT:
                self._print("Goodbye!")
                return

            self.apply_game_changes()
            if self.session.state == SessionState.NO_GAME:
                continue
            if self.session.state == SessionState.WON:
                self.show_result()
                continue

            if not self.play_game():
                self._print("Goodbye!")
                return

    def apply_game_changes(self) -> bool:
        """
        Send the commands queued by the menu to the session.

        Returns:
            True if every command succeeded
        """
        outcomes = self.session.process(self.menu.commands)
        for outcome in outcomes:
            if not outcome.ok:
                self._print(f"Error: {outcome.error}")
        if any(o.ok for o in outcomes):
            self._cursor = None
        return all(o.ok for o in outcomes)

    def menu_screen(self) -> MenuResult:
        """Show the menu until the player picks something that leaves it."""
        while True:
            self._print("")
            self._print(f"=== {self.menu.title()} ===")
            self._print(f"Board size: {self.menu.board_size}")
            options = self.menu.options()
            for i, action in enumerate(options, start=1):
                self._print(f"  {i}. {action.value}")

            choice = self._read("Choose an option: ")
            if choice is None:
                return MenuResult.EXIT
            try:
                action = options[int(choice) - 1]
            except (ValueError, IndexError):
                self._print(f"Please enter a number between 1 and {len(options)}.")
                continue

            result = self.menu.select(action)
            if result != MenuResult.STAY:
                return result

    def play_game(self) -> bool:
        """
        Let the players take turns until the game is won, drawn or paused.

        Columns are entered as 1-based numbers. 'a' and 'd' move the preview
        disk, an empty line drops at the preview, 'p' returns to the menu.

        Returns:
            False if the player asked to quit the program
        """
        board = self.session.board
        if self._cursor is None or self._cursor >= board.cols:
            self._cursor = board.cols // 2

        while True:
            if self.session.is_draw():
                self.show_draw()
                return True

            self.show_board(ghost=True)
            turn = self.session.turn
            move = self._read(f"{turn} to move (1-{board.cols}, a/d, Enter, p to pause): ")

            if move is None or move in QUIT_KEYS:
                return False
            if move in PAUSE_KEYS:
                self.menu.info.paused()
                return True
            if move == 'a':
                self._cursor = max(0, self._cursor - 1)
                continue
            if move == 'd':
                self._cursor = min(board.cols - 1, self._cursor + 1)
                continue

            if move == '':
                column = self._cursor
            else:
                try:
                    column = int(move) - 1
                except ValueError:
                    self._print("Invalid input. Enter a column number or a command.")
                    continue

            try:
                result = self.session.try_drop(column)
            except DropRejectedError as e:
                self._print(f"Invalid move: {e}")
                continue

            self._cursor = column
            if result.is_win:
                self.show_result()
                return True

    def show_result(self) -> None:
        winner = self.session.winner
        self.show_board()
        self._print(f"{winner} wins!")
        self.menu.info.game_won(winner)

    def show_draw(self) -> None:
        self.show_board()
        self._print("It's a draw!")
        self.menu.info.allow_resume = False
        self.menu.info.winner = None

    def show_board(self, ghost: bool = False) -> None:
        ghost_col = self._cursor if ghost else None
        self._print(self.session.render(ghost_col=ghost_col))
        self._print(format_history(self.session.history.labels()))

    def show_save(self) -> int:
        """Print the game stored in the save file."""
        try:
            data = data_manager.load_game(self.args.save_file)
        except PersistenceError as e:
            self._print(f"Error: {e}")
            return 1

        self._print(data.board.render())
        self._print(format_history(data.history.labels()))
        win = data.board.check_for_wins()
        if win:
            self._print(f"{win[0]} has won ({win[1]} -> {win[2]})")
        else:
            self._print(f"{data.turn} to move")
        return 0

    def _read(self, prompt: str) -> Optional[str]:
        try:
            return self._input(prompt).strip().lower()
        except EOFError:
            return None


def format_history(labels) -> str:
    """Format the move strip, newest move first, e.g. 'Moves: 4B 4R'."""
    if not labels:
        return "Moves: -"
    return "Moves: " + " ".join(f"{column}{turn.to_disk().symbol}" for column, turn in labels)


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Connect Four')
    parser.add_argument('--save-file', default=data_manager.SAVE_FILE,
                        help='Save file location (default: %(default)s)')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--debug-level', default='warning',
                        choices=[level.name.lower() for level in DebugLevel],
                        help='Logging level (default: %(default)s)')
    parser.add_argument('--log-file', default=None, help='Also write logs to this file')
    parser.add_argument('--rows', type=positive_int, default=DEFAULT_ROWS,
                        help='Board rows offered by the menu (default: %(default)s)')
    parser.add_argument('--cols', type=positive_int, default=DEFAULT_COLS,
                        help='Board columns offered by the menu (default: %(default)s)')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')
    subparsers.add_parser('play', help='Play a game (default)')
    subparsers.add_parser('show', help='Print the saved game')
    return parser


def configure_debug(args) -> None:
    """Configure logging from --debug, --debug-level and --log-file."""
    if args.debug:
        debug.configure(level=DebugLevel.DEBUG)
    else:
        debug.set_from_string(args.debug_level)
    if args.log_file:
        debug.configure(log_file=args.log_file)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
