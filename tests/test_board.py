"""Tests for the Board: creation, gravity drops, win scanning and encoding.

Coordinates are (row, col) with row 0 at the top, so disks stack up from
row rows-1.
"""

import numpy as np
import pytest

from connect_four.errors import (ColumnFullError, DeserializationError,
                                 InvalidColumnError, InvalidDimensionsError)
from connect_four.game.board import Board
from connect_four.utils import Disk, Turn

from .conftest import place


class TestBoardCreation:

    @pytest.mark.parametrize("rows, cols", [(6, 7), (1, 1), (9, 11), (8, 6)])
    def test_new_board_is_empty(self, rows, cols):
        board = Board(rows, cols)

        assert board.grid.shape == (rows, cols)
        assert board.count_disks() == 0
        assert all(board.get_disk(r, c) is None for r in range(rows) for c in range(cols))

    @pytest.mark.parametrize("rows, cols", [(0, 7), (6, 0), (-1, 7), (6, -3), (True, 7), (6.0, 7)])
    def test_non_positive_or_non_integer_dimensions_rejected(self, rows, cols):
        with pytest.raises(InvalidDimensionsError):
            Board(rows, cols)

    def test_invalid_dimensions_is_a_value_error(self):
        with pytest.raises(ValueError):
            Board(0, 0)


class TestDropDisk:

    def test_first_drops_land_at_the_bottom_and_stack(self, board):
        assert board.drop_disk(3, Disk.RED) == 5
        assert board.drop_disk(3, Disk.BLUE) == 4

        assert board.column(3) == [None, None, None, None, Disk.BLUE, Disk.RED]

    def test_full_column_rejects_drop_without_changing_board(self, board):
        rows = [board.drop_disk(0, Disk.RED if i % 2 == 0 else Disk.BLUE) for i in range(6)]
        assert rows == [5, 4, 3, 2, 1, 0]

        before = board.grid.copy()
        assert board.drop_disk(0, Disk.RED) is None
        assert np.array_equal(board.grid, before)

    @pytest.mark.parametrize("col", [-1, 7, 100])
    def test_out_of_range_column_rejected(self, board, col):
        assert board.drop_disk(col, Disk.RED) is None
        assert board.count_disks() == 0

    def test_check_drop_tells_full_and_invalid_columns_apart(self, board):
        for _ in range(6):
            board.drop_disk(2, Disk.BLUE)

        with pytest.raises(ColumnFullError):
            board.check_drop(2)
        with pytest.raises(InvalidColumnError):
            board.check_drop(7)
        assert board.check_drop(3) == 5

    def test_landing_row_follows_the_stack(self, board):
        assert board.landing_row(4) == 5
        board.drop_disk(4, Disk.RED)
        assert board.landing_row(4) == 4
        assert board.landing_row(-1) is None

    def test_full_board(self):
        board = Board(2, 2)
        for col in (0, 0, 1, 1):
            board.drop_disk(col, Disk.RED)
        assert board.is_full()
        assert board.count_disks() == 4


class TestWinDetection:

    def test_horizontal_four(self, board):
        place(board, [(5, 0), (5, 1), (5, 2), (5, 3)], Disk.RED)

        assert board.check_for_wins() == (Turn.RED, (5, 0), (5, 3))

    def test_horizontal_four_in_the_middle(self, board):
        place(board, [(5, 2), (5, 3), (5, 4), (5, 5)], Disk.BLUE)

        assert board.check_for_wins() == (Turn.BLUE, (5, 2), (5, 5))

    def test_vertical_four_reported_from_the_top(self, board):
        place(board, [(2, 0), (3, 0), (4, 0), (5, 0)], Disk.RED)

        assert board.check_for_wins() == (Turn.RED, (2, 0), (5, 0))

    def test_diagonal_down_left(self, board):
        place(board, [(5, 0), (4, 1), (3, 2), (2, 3)], Disk.RED)

        assert board.check_for_wins() == (Turn.RED, (2, 3), (5, 0))

    def test_diagonal_down_right(self, board):
        place(board, [(2, 0), (3, 1), (4, 2), (5, 3)], Disk.BLUE)

        assert board.check_for_wins() == (Turn.BLUE, (2, 0), (5, 3))

    def test_three_in_a_row_is_not_a_win(self, board):
        place(board, [(5, 0), (5, 1), (5, 2)], Disk.RED)
        place(board, [(3, 6), (4, 6), (5, 6)], Disk.BLUE)

        assert board.check_for_wins() is None

    def test_mixed_colours_are_not_a_win(self, board):
        place(board, [(5, 0), (5, 1), (5, 3)], Disk.RED)
        place(board, [(5, 2)], Disk.BLUE)

        assert board.check_for_wins() is None

    def test_check_for_win_tries_directions_in_fixed_order(self, board):
        # (5, 3) starts both a rightward and a leftward line; right comes first
        place(board, [(5, c) for c in range(7)], Disk.RED)

        assert board.check_for_win(5, 3, Disk.RED) == (5, 6)
        assert board.check_for_win(5, 6, Disk.RED) == (5, 3)

    def test_check_for_win_uses_the_given_disk(self, board):
        place(board, [(5, 1), (5, 2), (5, 3)], Disk.RED)

        assert board.check_for_win(5, 0, Disk.RED) == (5, 3)
        assert board.check_for_win(5, 0, Disk.BLUE) is None

    def test_first_line_in_scan_order_wins(self, board):
        place(board, [(5, 0), (5, 1), (5, 2), (5, 3)], Disk.RED)
        place(board, [(1, 6), (2, 6), (3, 6), (4, 6)], Disk.BLUE)

        assert board.check_for_wins() == (Turn.BLUE, (1, 6), (4, 6))

    def test_line_on_a_larger_board(self):
        board = Board(8, 10)
        place(board, [(7, 9), (6, 8), (5, 7), (4, 6)], Disk.BLUE)

        assert board.check_for_wins() == (Turn.BLUE, (4, 6), (7, 9))


class TestBoardEncoding:

    def test_to_dict_lists_columns_indexed_by_row(self):
        board = Board(2, 3)
        board.drop_disk(1, Disk.RED)
        board.drop_disk(1, Disk.BLUE)

        assert board.to_dict() == {
            "rows": 2,
            "cols": 3,
            "disks": [[None, None], ["Blue", "Red"], [None, None]],
        }

    def test_from_dict_restores_board(self, board):
        for col, disk in [(3, Disk.RED), (3, Disk.BLUE), (0, Disk.RED)]:
            board.drop_disk(col, disk)

        assert Board.from_dict(board.to_dict()) == board

    @pytest.mark.parametrize("data", [
        None,
        {"rows": 2, "cols": 1},
        {"rows": 0, "cols": 1, "disks": []},
        {"rows": 10**12, "cols": 10**12, "disks": []},
        {"rows": 2, "cols": 1, "disks": [[None, None], [None, None]]},
        {"rows": 2, "cols": 1, "disks": [[None]]},
        {"rows": 2, "cols": 1, "disks": [[None, "Green"]]},
        {"rows": 2, "cols": 1, "disks": [["Red", None]]},
    ])
    def test_from_dict_rejects_invalid_boards(self, data):
        with pytest.raises(DeserializationError):
            Board.from_dict(data)

    def test_copy_is_independent(self, board):
        board.drop_disk(0, Disk.RED)
        clone = board.copy()
        clone.drop_disk(0, Disk.BLUE)

        assert board.count_disks() == 1
        assert clone.count_disks() == 2
        assert clone != board

    def test_render_marks_disks_and_highlight(self):
        board = Board(2, 3)
        board.drop_disk(0, Disk.RED)
        board.drop_disk(2, Disk.BLUE)

        lines = board.render(highlight=[(1, 2)], ghost=(1, Disk.RED)).splitlines()

        assert lines == [
            "   r   ",
            "|-----|",
            "|. . .|",
            "|R . *|",
            "|-----|",
            " 1 2 3 ",
        ]
