"""
commands.py - Game change requests sent from the menu to the game

The menu never touches the game directly. It queues NewGame, SaveGame and
LoadGame commands, and the game session applies every queued command in the
order it was sent.
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Union

from connect_four.debug import debug


@dataclass(frozen=True)
class NewGame:
    rows: int
    cols: int


@dataclass(frozen=True)
class SaveGame:
    pass


@dataclass(frozen=True)
class LoadGame:
    pass


GameChange = Union[NewGame, SaveGame, LoadGame]


class CommandQueue:
    """FIFO of pending game changes."""

    def __init__(self):
        self._pending: Deque[GameChange] = deque()

    def send(self, command: GameChange) -> None:
        debug.debug(f"Queued {command}", "commands")
        self._pending.append(command)

    def drain(self) -> List[GameChange]:
        """Remove and return every pending command, oldest first."""
        commands = list(self._pending)
        self._pending.clear()
        return commands

    def __len__(self) -> int:
        return len(self._pending)

    def __bool__(self) -> bool:
        return bool(self._pending)
