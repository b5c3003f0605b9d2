"""
data_manager.py - Saving and loading Connect Four games

A saved game is a single JSON file holding the board, the player to move and
the move history. Files are written to a temporary path and moved into place
under a file lock, so a save either fully replaces the old file or leaves it
alone.
"""

import json
import os
import shutil
from typing import Any, Dict

import filelock

from connect_four.debug import debug
from connect_four.errors import (DeserializationError, PersistenceError,
                                 SaveFileIOError, SerializationError)
from connect_four.game.board import Board
from connect_four.game.history import MoveHistory
from connect_four.utils import Turn

# Relative to the working directory
SAVE_FILE = "save.json"

LOCK_TIMEOUT = 5  # seconds


class GameData:
    """Snapshot of a game in progress."""

    def __init__(self, board: Board, turn: Turn, history: MoveHistory):
        self.board = board
        self.turn = turn
        self.history = history

    def to_dict(self) -> Dict[str, Any]:
        return {
            "board": self.board.to_dict(),
            "turn": self.turn.label,
            "history": self.history.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> 'GameData':
        """
        Rebuild a snapshot from decoded JSON.

        Besides the schema, the history must account for every disk on the
        board and only name columns that exist.

        Raises:
            DeserializationError: If the data does not describe a valid game
        """
        if not isinstance(data, dict):
            raise DeserializationError("Save data must be an object")

        missing = [key for key in ("board", "turn", "history") if key not in data]
        if missing:
            raise DeserializationError(f"Save data is missing {', '.join(missing)}")

        board = Board.from_dict(data["board"])
        turn = Turn.from_name(data["turn"])
        history = MoveHistory.from_dict(data["history"])

        if len(history) != board.count_disks():
            raise DeserializationError(
                f"History has {len(history)} moves but the board holds {board.count_disks()} disks")
        for column, _ in history:
            if not 0 <= column < board.cols:
                raise DeserializationError(f"History names column {column} outside the board")

        return cls(board, turn, history)

    def __eq__(self, other) -> bool:
        if not isinstance(other, GameData):
            return NotImplemented
        return (self.board == other.board and self.turn == other.turn
                and self.history == other.history)

    __hash__ = None


def save_exists(path: str = SAVE_FILE) -> bool:
    return os.path.isfile(path)


def save_game(data: GameData, path: str = SAVE_FILE) -> None:
    """
    Write a game to a save file, replacing any previous save.

    Args:
        data: Game snapshot to save
        path: Save file location

    Raises:
        SerializationError: If the snapshot cannot be encoded as JSON
        SaveFileIOError: If the file cannot be written
    """
    try:
        payload = json.dumps(data.to_dict())
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to encode game: {e}", path) from e

    temp_file = f"{path}.tmp"
    try:
        with filelock.FileLock(f"{path}.lock", timeout=LOCK_TIMEOUT):
            with open(temp_file, 'w') as f:
                f.write(payload)
            shutil.move(temp_file, path)
    except OSError as e:
        if os.path.exists(temp_file):
            os.remove(temp_file)
        raise SaveFileIOError(f"Failed to create save file {path}: {e}", path) from e

    debug.info(f"Saved game with {len(data.history)} moves to {path}", "data")


def load_game(path: str = SAVE_FILE) -> GameData:
    """
    Read a game from a save file.

    Raises:
        SaveFileIOError: If the file does not exist or cannot be read
        DeserializationError: If the content is not a valid saved game
    """
    if not os.path.exists(path):
        raise SaveFileIOError(f"Failed to open save file {path}: no such file", path)

    try:
        with filelock.FileLock(f"{path}.lock", timeout=LOCK_TIMEOUT):
            with open(path, 'r') as f:
                raw = f.read()
    except OSError as e:
        raise SaveFileIOError(f"Failed to open save file {path}: {e}", path) from e
    except UnicodeDecodeError as e:
        raise DeserializationError(f"Failed to read save file {path}: {e}", path) from e

    try:
        data = GameData.from_dict(json.loads(raw))
    except json.JSONDecodeError as e:
        raise DeserializationError(f"Failed to read save file {path}: {e}", path) from e
    except PersistenceError as e:
        e.path = path
        raise

    debug.info(f"Loaded {data.board.rows}x{data.board.cols} game with "
               f"{len(data.history)} moves from {path}", "data")
    return data
