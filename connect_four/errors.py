"""
errors.py - Exceptions raised by the Connect Four game

Drop rejections and save/load failures are recoverable: callers catch them,
report them and carry on with the game exactly as it was.
"""


class ConnectFourError(Exception):
    """Base class for all game errors."""


class InvalidDimensionsError(ConnectFourError, ValueError):
    """A board was requested with a non-positive number of rows or columns."""

    def __init__(self, rows, cols):
        super().__init__(f"Board dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols


class DropRejectedError(ConnectFourError):
    """A disk could not be dropped."""


class InvalidColumnError(DropRejectedError):
    def __init__(self, column: int, cols: int):
        super().__init__(f"Column {column} is outside the board (0-{cols - 1})")
        self.column = column


class ColumnFullError(DropRejectedError):
    def __init__(self, column: int):
        super().__init__(f"Column {column} is full")
        self.column = column


class GameNotInProgressError(DropRejectedError):
    def __init__(self, state):
        super().__init__(f"No disk can be dropped while the game is {state.name.lower()}")
        self.state = state


class PersistenceError(ConnectFourError):
    """Saving or loading a game failed; the current game is left unchanged."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path


class SaveFileIOError(PersistenceError):
    """The save file could not be opened, created or written."""


class SerializationError(PersistenceError):
    """The game could not be encoded for saving."""


class DeserializationError(PersistenceError):
    """The save file content does not describe a valid game."""
