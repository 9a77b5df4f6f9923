"""
Tests for high score persistence and configuration.
"""

import json

import pytest

from ..config import GameConfig
from ..session import FileHighScoreStore, InMemoryHighScoreStore


class TestHighScoreStore:

    def test_record_only_on_strictly_greater(self):
        store = InMemoryHighScoreStore()
        assert store.record_win(10)
        assert not store.record_win(10)
        assert not store.record_win(4)
        assert store.record_win(11)
        assert store.get() == 11

    def test_file_store_round_trip(self, tmp_path):
        path = tmp_path / "scores" / "highscore.json"
        store = FileHighScoreStore(path)

        assert store.get() == 0
        assert store.record_win(7)
        assert FileHighScoreStore(path).get() == 7
        assert json.loads(path.read_text()) == {"highscore": 7}

    def test_corrupt_file_reads_as_zero(self, tmp_path):
        path = tmp_path / "highscore.json"
        path.write_text("not json")
        assert FileHighScoreStore(path).get() == 0

        path.write_text("[1, 2]")
        assert FileHighScoreStore(path).get() == 0


class TestGameConfig:

    def test_defaults(self):
        config = GameConfig().validate()
        assert (config.width, config.height) == (7, 7)
        assert config.unstable_tiles_per_turn == 2

    @pytest.mark.parametrize("kwargs", [
        {"width": 0},
        {"height": -1},
        {"unstable_tiles_per_turn": -1},
        {"move_duration": -0.5},
        {"max_collision_passes": 0},
        {"num_bots": -2},
    ])
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ValueError):
            GameConfig(**kwargs).validate()

    def test_from_dict_ignores_unknown_and_none(self):
        config = GameConfig.from_dict({"width": 5, "height": None, "command": "simulate"})
        assert config.width == 5
        assert config.height == 7
        assert config.to_dict()["width"] == 5
