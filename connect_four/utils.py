"""
utils.py - Constants, enumerations and helpers for the Connect Four game

This module holds the values shared by the board, the game session and the
interfaces: board size limits, the Turn/Disk enums, the direction table used
for win scanning and the ASCII board renderer.
"""

from enum import Enum
from typing import Iterable, List, Optional, Set, Tuple

import numpy as np

from connect_four.errors import DeserializationError

# Board size defaults and menu limits
DEFAULT_ROWS = 6
DEFAULT_COLS = 7
MIN_ROWS = 6
MIN_COLS = 7
MAX_SIZE_DIFFERENCE = 2  # |cols - rows| allowed by the size menu
CONNECT_N = 4  # Number of disks in a line to win

EMPTY = 0

RED_DISK_COLOR = (255, 0, 0)
BLUE_DISK_COLOR = (0, 0, 255)

Cell = Tuple[int, int]


class Disk(Enum):
    """A placed disk. Values are the markers stored in the board grid."""
    RED = 1
    BLUE = 2

    def to_turn(self) -> 'Turn':
        return Turn.RED if self == Disk.RED else Turn.BLUE

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def symbol(self) -> str:
        return "R" if self == Disk.RED else "B"

    @classmethod
    def from_name(cls, name) -> 'Disk':
        """Parse a saved marker such as "Red"."""
        for disk in cls:
            if disk.label == name:
                return disk
        raise DeserializationError(f"Unknown disk marker: {name!r}")

    def __str__(self):
        return self.label


class GhostDisk(Enum):
    """Preview marker showing where the current player's disk would land."""
    RED = 1
    BLUE = 2


class Turn(Enum):
    """Whose move is next."""
    RED = 1
    BLUE = 2

    def next(self) -> 'Turn':
        """Get the player that moves after this one."""
        return Turn.BLUE if self == Turn.RED else Turn.RED

    def to_disk(self) -> Disk:
        return Disk(self.value)

    def to_ghost_disk(self) -> GhostDisk:
        return GhostDisk(self.value)

    def to_color(self) -> Tuple[int, int, int]:
        return RED_DISK_COLOR if self == Turn.RED else BLUE_DISK_COLOR

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_name(cls, name) -> 'Turn':
        for turn in cls:
            if turn.label == name:
                return turn
        raise DeserializationError(f"Unknown turn marker: {name!r}")

    def __str__(self):
        return self.label


# Win scan directions as (row delta, col delta). The order is the tie-break
# when one disk starts more than one line.
WIN_DIRECTIONS: List[Tuple[int, int]] = [
    (1, 0),    # down
    (-1, 0),   # up
    (0, 1),    # right
    (0, -1),   # left
    (1, 1),    # down-right
    (-1, -1),  # up-left
    (1, -1),   # down-left
    (-1, 1),   # up-right
]


def line_cells(start: Cell, end: Cell) -> List[Cell]:
    """
    List the cells of a straight (horizontal, vertical or diagonal) line.

    Args:
        start: First endpoint (row, col)
        end: Second endpoint (row, col)

    Returns:
        Cells from start to end inclusive
    """
    (r0, c0), (r1, c1) = start, end
    steps = max(abs(r1 - r0), abs(c1 - c0))
    if steps == 0:
        return [start]
    dr = (r1 - r0) // steps
    dc = (c1 - c0) // steps
    return [(r0 + dr * i, c0 + dc * i) for i in range(steps + 1)]


def render_board_ascii(grid: np.ndarray,
                       highlight: Optional[Iterable[Cell]] = None,
                       ghost: Optional[Tuple[int, Disk]] = None) -> str:
    """
    Render a board grid as ASCII art.

    Args:
        grid: (rows, cols) array of disk values
        highlight: Cells drawn as '*' (the winning line)
        ghost: (column, disk) preview shown above the board

    Returns:
        Multi-line string with 1-based column numbers underneath
    """
    rows, cols = grid.shape
    marked: Set[Cell] = set(highlight or ())
    width = cols * 2 - 1
    lines = []

    if ghost is not None:
        col, disk = ghost
        preview = [" "] * cols
        preview[col] = disk.symbol.lower()
        lines.append(" " + " ".join(preview) + " ")

    lines.append("|" + "-" * width + "|")
    for row in range(rows):
        cells = []
        for col in range(cols):
            value = grid[row, col]
            if (row, col) in marked:
                cells.append("*")
            elif value == EMPTY:
                cells.append(".")
            else:
                cells.append(Disk(int(value)).symbol)
        lines.append("|" + " ".join(cells) + "|")
    lines.append("|" + "-" * width + "|")

    # Columns past 9 only show their last digit
    lines.append(" " + " ".join(str((col + 1) % 10) for col in range(cols)) + " ")
    return "\n".join(lines)
