"""Tests for save file encoding and the save/load error paths."""

import json
import os

import pytest

from connect_four.data.data_manager import (GameData, load_game, save_exists,
                                            save_game)
from connect_four.errors import (DeserializationError, PersistenceError,
                                 SaveFileIOError, SerializationError)
from connect_four.game.board import Board
from connect_four.game.history import MoveHistory
from connect_four.utils import Disk, Turn


def make_game() -> GameData:
    board = Board(6, 7)
    board.drop_disk(3, Disk.RED)
    board.drop_disk(4, Disk.BLUE)
    history = MoveHistory([(3, Turn.RED), (4, Turn.BLUE)])
    return GameData(board, Turn.RED, history)


def write_json(path, data) -> None:
    with open(path, "w") as f:
        json.dump(data, f)


class TestSaveFormat:

    def test_saved_file_layout(self, save_path):
        save_game(make_game(), save_path)

        with open(save_path) as f:
            data = json.load(f)

        assert data["turn"] == "Red"
        assert data["history"] == {"moves": [[3, "Red"], [4, "Blue"]]}
        assert data["board"]["rows"] == 6
        assert data["board"]["cols"] == 7
        assert data["board"]["disks"][3] == [None] * 5 + ["Red"]
        assert data["board"]["disks"][4] == [None] * 5 + ["Blue"]

    def test_load_returns_identical_game(self, save_path):
        game = make_game()
        save_game(game, save_path)

        assert load_game(save_path) == game

    def test_save_replaces_previous_file(self, save_path):
        save_game(make_game(), save_path)
        empty = GameData(Board(6, 7), Turn.RED, MoveHistory())
        save_game(empty, save_path)

        assert load_game(save_path) == empty
        assert not os.path.exists(f"{save_path}.tmp")

    def test_save_exists(self, save_path):
        assert not save_exists(save_path)
        save_game(make_game(), save_path)
        assert save_exists(save_path)


class TestLoadErrors:

    def test_missing_file(self, save_path):
        with pytest.raises(SaveFileIOError) as excinfo:
            load_game(save_path)
        assert excinfo.value.path == save_path

    def test_invalid_json(self, save_path):
        with open(save_path, "w") as f:
            f.write("[1, 2")

        with pytest.raises(DeserializationError):
            load_game(save_path)

    @pytest.mark.parametrize("mutate", [
        lambda d: d.pop("turn"),
        lambda d: d.update(turn="Green"),
        lambda d: d.update(history={"moves": [[3, "Red"]]}),
        lambda d: d.update(history={"moves": [[3, "Red"], [9, "Blue"]]}),
        lambda d: d.update(history={"moves": [[3, "Red"], ["4", "Blue"]]}),
        lambda d: d.update(history=[]),
        lambda d: d["board"].update(cols=8),
        lambda d: d["board"].update(rows=10**12, cols=10**12, disks=[]),
    ])
    def test_schema_violations(self, save_path, mutate):
        data = make_game().to_dict()
        mutate(data)
        write_json(save_path, data)

        with pytest.raises(DeserializationError) as excinfo:
            load_game(save_path)
        assert excinfo.value.path == save_path

    def test_binary_garbage(self, save_path):
        with open(save_path, "wb") as f:
            f.write(b"\xff\xfe\x00garbage")

        with pytest.raises(DeserializationError):
            load_game(save_path)

    def test_non_object_document(self, save_path):
        write_json(save_path, [1, 2, 3])

        with pytest.raises(DeserializationError):
            load_game(save_path)


class TestSaveErrors:

    def test_unwritable_location(self, tmp_path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("")

        with pytest.raises(SaveFileIOError):
            save_game(make_game(), str(blocker / "save.json"))

    def test_unencodable_snapshot(self, save_path, monkeypatch):
        monkeypatch.setattr(GameData, "to_dict", lambda self: {"board": object()})

        with pytest.raises(SerializationError):
            save_game(make_game(), save_path)
        assert not os.path.exists(save_path)

    def test_all_failures_share_a_base_class(self):
        assert issubclass(SaveFileIOError, PersistenceError)
        assert issubclass(SerializationError, PersistenceError)
        assert issubclass(DeserializationError, PersistenceError)
