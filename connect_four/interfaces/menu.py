"""
menu.py - Main menu model for Connect Four

The menu picks the board size for the next game and turns the player's
choices into game change commands. It knows nothing about how it is drawn;
the terminal interface renders it and feeds it the selected actions.
"""

from enum import Enum
from typing import List, Optional

from connect_four.debug import debug
from connect_four.game.commands import CommandQueue, LoadGame, NewGame, SaveGame
from connect_four.utils import (DEFAULT_COLS, DEFAULT_ROWS, MAX_SIZE_DIFFERENCE,
                                MIN_COLS, MIN_ROWS, Turn)


class BoardSize:
    """
    Board size chosen in the menu.

    Rows and columns can only shrink down to the standard 6x7 board, and
    they may never differ by more than MAX_SIZE_DIFFERENCE.
    """

    def __init__(self, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS):
        self.rows = rows
        self.cols = cols

    @staticmethod
    def _allowed(rows: int, cols: int) -> bool:
        return abs(cols - rows) <= MAX_SIZE_DIFFERENCE

    @classmethod
    def is_allowed(cls, rows: int, cols: int) -> bool:
        """Check a size against the minimum board and the difference limit."""
        return rows >= MIN_ROWS and cols >= MIN_COLS and cls._allowed(rows, cols)

    def increase_rows(self) -> bool:
        if not self._allowed(self.rows + 1, self.cols):
            return False
        self.rows += 1
        return True

    def decrease_rows(self) -> bool:
        if self.rows <= MIN_ROWS or not self._allowed(self.rows - 1, self.cols):
            return False
        self.rows -= 1
        return True

    def increase_cols(self) -> bool:
        if not self._allowed(self.rows, self.cols + 1):
            return False
        self.cols += 1
        return True

    def decrease_cols(self) -> bool:
        if self.cols <= MIN_COLS or not self._allowed(self.rows, self.cols - 1):
            return False
        self.cols -= 1
        return True

    def __str__(self):
        return f"{self.rows}x{self.cols}"


class MainMenuInfo:
    """What the menu needs to know about the game behind it."""

    def __init__(self, allow_resume: bool = False, winner: Optional[Turn] = None):
        self.allow_resume = allow_resume
        self.winner = winner

    def paused(self) -> None:
        self.allow_resume = True
        self.winner = None

    def game_won(self, winner: Turn) -> None:
        self.allow_resume = False
        self.winner = winner


class MenuAction(Enum):
    RESUME = "Resume"
    NEW_GAME = "New Game"
    INCREASE_ROWS = "Rows +"
    DECREASE_ROWS = "Rows -"
    INCREASE_COLS = "Columns +"
    DECREASE_COLS = "Columns -"
    SAVE = "Save Game"
    LOAD = "Load Game"
    EXIT = "Exit"


class MenuResult(Enum):
    STAY = "stay"   # remain in the menu
    PLAY = "play"   # switch to the board
    EXIT = "exit"


class MainMenu:
    """Main menu state and button handling."""

    def __init__(self, commands: Optional[CommandQueue] = None,
                 board_size: Optional[BoardSize] = None):
        self.commands = commands if commands is not None else CommandQueue()
        self.board_size = board_size or BoardSize()
        self.info = MainMenuInfo()

    def title(self) -> str:
        if self.info.winner is not None:
            return f"{self.info.winner} wins!"
        return "Connect 4"

    def options(self) -> List[MenuAction]:
        """Actions offered right now, in display order."""
        actions = []
        if self.info.allow_resume:
            actions.append(MenuAction.RESUME)
        actions += [MenuAction.NEW_GAME,
                    MenuAction.INCREASE_ROWS, MenuAction.DECREASE_ROWS,
                    MenuAction.INCREASE_COLS, MenuAction.DECREASE_COLS]
        if self.info.allow_resume:
            actions.append(MenuAction.SAVE)
        actions += [MenuAction.LOAD, MenuAction.EXIT]
        return actions

    def select(self, action: MenuAction) -> MenuResult:
        """
        Handle a menu choice.

        Returns:
            Where the interface should go next
        """
        if action not in self.options():
            debug.warning(f"Menu action {action.value!r} is not available", "menu")
            return MenuResult.STAY

        debug.debug(f"Menu action {action.value!r}", "menu")

        if action == MenuAction.RESUME:
            return MenuResult.PLAY
        if action == MenuAction.NEW_GAME:
            self.commands.send(NewGame(self.board_size.rows, self.board_size.cols))
            return MenuResult.PLAY
        if action == MenuAction.SAVE:
            self.commands.send(SaveGame())
            return MenuResult.PLAY
        if action == MenuAction.LOAD:
            self.commands.send(LoadGame())
            return MenuResult.PLAY
        if action == MenuAction.EXIT:
            return MenuResult.EXIT

        resize = {
            MenuAction.INCREASE_ROWS: self.board_size.increase_rows,
            MenuAction.DECREASE_ROWS: self.board_size.decrease_rows,
            MenuAction.INCREASE_COLS: self.board_size.increase_cols,
            MenuAction.DECREASE_COLS: self.board_size.decrease_cols,
        }[action]
        if not resize():
            debug.debug(f"Board size stays {self.board_size}", "menu")
        return MenuResult.STAY
