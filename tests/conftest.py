"""Shared fixtures for Connect Four tests."""

from typing import Iterable, List

import pytest

from connect_four.game.board import Board
from connect_four.game.rules import GameSession
from connect_four.utils import Disk


@pytest.fixture
def save_path(tmp_path) -> str:
    return str(tmp_path / "save.json")


@pytest.fixture
def session(save_path) -> GameSession:
    """A 6x7 game that has just started, saving into a temp directory."""
    game = GameSession(save_path=save_path)
    game.new_game(6, 7)
    return game


@pytest.fixture
def board() -> Board:
    return Board(6, 7)


def play(session: GameSession, columns: Iterable[int]) -> None:
    """Drop disks into the given columns, failing the test on any rejection."""
    for col in columns:
        assert session.drop(col) is not None, f"drop into column {col} was rejected"


def place(board: Board, cells: Iterable, disk: Disk) -> None:
    """Put disks straight into the grid, bypassing gravity."""
    for row, col in cells:
        board.grid[row, col] = disk.value


def scripted_input(lines: List[str]):
    """Build an input() replacement that answers with the given lines, then EOF."""
    remaining = iter(lines)

    def _input(prompt=""):
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None

    return _input
