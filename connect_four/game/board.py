"""
board.py - Board representation and disk mechanics for Connect Four

This module implements the Board class: a grid of any size that accepts
gravity drops into its columns and scans itself for four-in-a-row lines.
Row 0 is the top of the board, so disks stack from row rows-1 upward.
"""

from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from connect_four.debug import debug
from connect_four.errors import (ColumnFullError, DeserializationError,
                                 InvalidColumnError, InvalidDimensionsError)
from connect_four.utils import (CONNECT_N, EMPTY, WIN_DIRECTIONS, Cell, Disk,
                                Turn, render_board_ascii)

Win = Tuple[Turn, Cell, Cell]


class Board:
    """
    A Connect Four board.

    The grid is a (rows, cols) numpy array holding 0 for an empty cell and
    the Disk value of the disk occupying it otherwise.
    """

    def __init__(self, rows: int, cols: int):
        """
        Create an empty board.

        Args:
            rows: Number of rows, must be positive
            cols: Number of columns, must be positive

        Raises:
            InvalidDimensionsError: If either dimension is not a positive integer
        """
        if not _is_positive_int(rows) or not _is_positive_int(cols):
            raise InvalidDimensionsError(rows, cols)

        debug.debug(f"Creating {rows}x{cols} board", "board")
        self.rows = rows
        self.cols = cols
        self.grid = np.zeros((rows, cols), dtype=np.int8)

    def copy(self) -> 'Board':
        new_board = Board(self.rows, self.cols)
        new_board.grid = self.grid.copy()
        return new_board

    def get_disk(self, row: int, col: int) -> Optional[Disk]:
        """Get the disk at a cell, or None if it is empty."""
        value = self.grid[row, col]
        return None if value == EMPTY else Disk(int(value))

    def column(self, col: int) -> List[Optional[Disk]]:
        """Get the cells of a column from the top row down."""
        return [self.get_disk(row, col) for row in range(self.rows)]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def landing_row(self, col: int) -> Optional[int]:
        """
        Find the row the next disk dropped in a column would land on.

        Returns:
            Row index, or None if the column is full or off the board
        """
        if not 0 <= col < self.cols:
            return None

        empty_rows = np.flatnonzero(self.grid[:, col] == EMPTY)
        if empty_rows.size == 0:
            return None
        return int(empty_rows[-1])

    def check_drop(self, col: int) -> int:
        """
        Validate a drop without making it.

        Returns:
            The row the disk would land on

        Raises:
            InvalidColumnError: If the column is outside the board
            ColumnFullError: If the column has no empty cell left
        """
        if not 0 <= col < self.cols:
            raise InvalidColumnError(col, self.cols)

        row = self.landing_row(col)
        if row is None:
            raise ColumnFullError(col)
        return row

    def drop_disk(self, col: int, disk: Disk) -> Optional[int]:
        """
        Drop a disk into a column.

        Args:
            col: Column index (0-indexed)
            disk: Disk to place

        Returns:
            The row the disk landed on, or None if the column is off the
            board or full (the board is left untouched)
        """
        row = self.landing_row(col)
        if row is None:
            debug.debug(f"Rejected drop of {disk} into column {col}", "board")
            return None

        self.grid[row, col] = disk.value
        debug.trace(f"Placed {disk} at ({row}, {col})", "board")
        return row

    def check_for_win(self, row: int, col: int, disk: Disk) -> Optional[Cell]:
        """
        Look for four in a row starting at a cell.

        Each direction in WIN_DIRECTIONS is walked up to CONNECT_N - 1 steps
        and the first one made entirely of the given disk wins.

        Returns:
            The far end of the winning line, or None
        """
        for row_delta, col_delta in WIN_DIRECTIONS:
            r, c = row, col
            count = 1

            for _ in range(CONNECT_N - 1):
                r += row_delta
                c += col_delta
                if not self.in_bounds(r, c) or self.grid[r, c] != disk.value:
                    break
                count += 1

            if count >= CONNECT_N:
                return r, c

        return None

    def check_for_wins(self) -> Optional[Win]:
        """
        Scan the whole board for a winning line.

        Cells are visited row by row, and the first one that starts a line
        is reported even if the board holds several lines.

        Returns:
            (winner, start, end) or None if nobody has four in a row
        """
        with debug.timed("win_scan", "board"):
            for row in range(self.rows):
                for col in range(self.cols):
                    disk = self.get_disk(row, col)
                    if disk is None:
                        continue

                    end = self.check_for_win(row, col, disk)
                    if end is not None:
                        return disk.to_turn(), (row, col), end
        return None

    def count_disks(self) -> int:
        return int(np.count_nonzero(self.grid))

    def is_full(self) -> bool:
        return bool(np.all(self.grid != EMPTY))

    def has_floating_disks(self) -> bool:
        """Check whether any disk sits above an empty cell."""
        occupied = self.grid != EMPTY
        return bool(np.any(occupied[:-1] & ~occupied[1:]))

    def to_dict(self) -> Dict[str, Any]:
        """
        Encode the board for saving.

        Disks are listed column by column, each column indexed by row, using
        "Red"/"Blue" for disks and None for empty cells.
        """
        return {
            "rows": self.rows,
            "cols": self.cols,
            "disks": [
                [None if disk is None else disk.label for disk in self.column(col)]
                for col in range(self.cols)
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Board':
        """
        Rebuild a board saved with to_dict.

        Raises:
            DeserializationError: If the data is not a valid board
        """
        if not isinstance(data, dict):
            raise DeserializationError("Board must be an object")

        try:
            rows, cols, disks = data["rows"], data["cols"], data["disks"]
        except KeyError as e:
            raise DeserializationError(f"Board is missing {e.args[0]!r}") from e

        if not _is_positive_int(rows) or not _is_positive_int(cols):
            raise DeserializationError(f"Board dimensions must be positive, got {rows}x{cols}")

        # The grid is only allocated once the cells are known to be there
        if not isinstance(disks, list) or len(disks) != cols:
            raise DeserializationError(f"Board must list {cols} columns")
        for col, cells in enumerate(disks):
            if not isinstance(cells, list) or len(cells) != rows:
                raise DeserializationError(f"Column {col} must hold {rows} cells")

        board = cls(rows, cols)
        for col, cells in enumerate(disks):
            for row, cell in enumerate(cells):
                if cell is not None:
                    board.grid[row, col] = Disk.from_name(cell).value

        if board.has_floating_disks():
            raise DeserializationError("Board has a disk above an empty cell")

        return board

    def render(self, highlight=None, ghost=None) -> str:
        return render_board_ascii(self.grid, highlight=highlight, ghost=ghost)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.rows == other.rows and self.cols == other.cols and \
            np.array_equal(self.grid, other.grid)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Board(rows={self.rows}, cols={self.cols}, disks={self.count_disks()})"

    def __str__(self) -> str:
        return self.render()


def _is_positive_int(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool) and value > 0
