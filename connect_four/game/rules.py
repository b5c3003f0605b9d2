"""
rules.py - Game session management for Connect Four

This module provides the GameSession class, which owns the board, the player
to move and the move history of one game, applies disk drops in turn order,
detects wins and carries out the game changes requested by the menu.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Tuple

from connect_four.data import data_manager
from connect_four.debug import debug
from connect_four.errors import (DropRejectedError, GameNotInProgressError,
                                 PersistenceError)
from connect_four.game.board import Board, Win
from connect_four.game.commands import (CommandQueue, GameChange, LoadGame,
                                        NewGame, SaveGame)
from connect_four.game.history import MoveHistory
from connect_four.utils import (DEFAULT_COLS, DEFAULT_ROWS, GhostDisk, Turn,
                                line_cells)


class SessionState(Enum):
    NO_GAME = auto()
    IN_PROGRESS = auto()
    WON = auto()


@dataclass(frozen=True)
class DropResult:
    """Where the last disk landed and whether it won the game."""
    row: int
    col: int
    turn: Turn
    win: Optional[Win] = None

    @property
    def is_win(self) -> bool:
        return self.win is not None


@dataclass(frozen=True)
class CommandOutcome:
    command: GameChange
    error: Optional[PersistenceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class GameSession:
    """
    One Connect Four game in progress.

    Only the session mutates its board, turn and history; interfaces read
    them through the accessors and ask for changes through drop() and the
    game change commands.
    """

    def __init__(self, save_path: Optional[str] = None):
        debug.debug("Initializing GameSession", "session")
        self.save_path = save_path or data_manager.SAVE_FILE
        self.state = SessionState.NO_GAME
        self._board = Board(DEFAULT_ROWS, DEFAULT_COLS)
        self._turn = Turn.RED
        self._history = MoveHistory()
        self._win: Optional[Win] = None
        self._last_drop: Optional[DropResult] = None

    @property
    def board(self) -> Board:
        return self._board

    @property
    def turn(self) -> Turn:
        return self._turn

    @property
    def history(self) -> MoveHistory:
        return self._history

    @property
    def win(self) -> Optional[Win]:
        return self._win

    @property
    def winner(self) -> Optional[Turn]:
        return self._win[0] if self._win else None

    @property
    def last_drop(self) -> Optional[DropResult]:
        return self._last_drop

    def winning_cells(self) -> List[Tuple[int, int]]:
        if self._win is None:
            return []
        _, start, end = self._win
        return line_cells(start, end)

    def is_draw(self) -> bool:
        return self.state == SessionState.IN_PROGRESS and self._board.is_full()

    def new_game(self, rows: int, cols: int) -> None:
        """
        Throw away the current game and start an empty one. Red moves first.

        Raises:
            InvalidDimensionsError: If rows or cols is not positive
        """
        board = Board(rows, cols)
        self._replace(board, Turn.RED, MoveHistory())
        debug.info(f"Started new {rows}x{cols} game", "session")

    def _replace(self, board: Board, turn: Turn, history: MoveHistory) -> None:
        self._board = board
        self._turn = turn
        self._history = history
        self._last_drop = None
        self._win = board.check_for_wins()
        self.state = SessionState.WON if self._win else SessionState.IN_PROGRESS

    def try_drop(self, col: int) -> DropResult:
        """
        Drop the current player's disk into a column.

        The disk is placed, the move recorded and the turn passed on, then
        the board is scanned for a win.

        Raises:
            GameNotInProgressError: If no game is running or it is already won
            InvalidColumnError: If the column is outside the board
            ColumnFullError: If the column is full
        """
        if self.state != SessionState.IN_PROGRESS:
            raise GameNotInProgressError(self.state)

        self._board.check_drop(col)
        disk = self._turn.to_disk()
        row = self._board.drop_disk(col, disk)

        mover = self._turn
        self._history.record(col, mover)
        self._turn = self._turn.next()
        debug.debug(f"{mover} dropped into column {col}, row {row}; {self._turn} to move",
                    "session")

        self._win = self._board.check_for_wins()
        if self._win is not None:
            self.state = SessionState.WON
            debug.info(f"{self._win[0]} wins with line {self._win[1]} -> {self._win[2]}",
                       "session")
        elif self._board.is_full():
            debug.info("Board is full with no winner", "session")

        self._last_drop = DropResult(row, col, mover, self._win)
        return self._last_drop

    def drop(self, col: int) -> Optional[DropResult]:
        """
        Same as try_drop, but a rejected drop returns None.

        A rejected drop changes nothing, including whose turn it is.
        """
        try:
            return self.try_drop(col)
        except DropRejectedError as e:
            debug.debug(f"Drop rejected: {e}", "session")
            return None

    def ghost_disk(self, col: int) -> Optional[Tuple[GhostDisk, int]]:
        """
        Preview the current player's next disk in a column.

        Returns:
            (ghost marker, landing row), or None when no drop is possible there
        """
        if self.state != SessionState.IN_PROGRESS:
            return None
        row = self._board.landing_row(col)
        if row is None:
            return None
        return self._turn.to_ghost_disk(), row

    def snapshot(self) -> 'data_manager.GameData':
        return data_manager.GameData(self._board.copy(), self._turn, self._history.copy())

    def save(self) -> None:
        """
        Save the game to save_path.

        Raises:
            PersistenceError: If the save fails; the previous save file is kept
        """
        data_manager.save_game(self.snapshot(), self.save_path)

    def load(self) -> None:
        """
        Replace the game with the one stored at save_path.

        Raises:
            PersistenceError: If the load fails; the current game is unchanged
        """
        data = data_manager.load_game(self.save_path)
        self._replace(data.board, data.turn, data.history)

    def apply(self, command: GameChange) -> None:
        """Carry out one game change. Persistence failures propagate."""
        debug.debug(f"Applying {command}", "session")
        if isinstance(command, NewGame):
            self.new_game(command.rows, command.cols)
        elif isinstance(command, SaveGame):
            self.save()
        elif isinstance(command, LoadGame):
            self.load()
        else:
            raise TypeError(f"Unknown game change: {command!r}")

    def process(self, queue: CommandQueue) -> List[CommandOutcome]:
        """
        Apply every pending command in the queue, oldest first.

        A failed save or load is reported in its outcome and does not stop
        the commands queued after it.
        """
        outcomes = []
        for command in queue.drain():
            try:
                self.apply(command)
            except PersistenceError as e:
                debug.error(str(e), "session")
                outcomes.append(CommandOutcome(command, e))
            else:
                outcomes.append(CommandOutcome(command))
        return outcomes

    def render(self, ghost_col: Optional[int] = None) -> str:
        ghost = None
        if ghost_col is not None and self.ghost_disk(ghost_col) is not None:
            ghost = (ghost_col, self._turn.to_disk())
        return self._board.render(highlight=self.winning_cells(), ghost=ghost)
