"""
Tests for scoring, levels and high score persistence.
"""

import json

import pytest

from packet_router.router_core.config_loader import load_config
from packet_router.router_core.scoring import ScoreTracker
from packet_router.router_core.high_score import (
    HighScoreStore,
    MemoryHighScoreStore,
    parse_high_score,
)


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def store():
    return MemoryHighScoreStore()


@pytest.fixture
def scorer(config, store):
    return ScoreTracker(config, store)


@pytest.fixture
def storage_path(tmp_path):
    return tmp_path / "storage.json"


class TestScoreTracker:
    """Test score and level progression."""

    def test_initial_state(self, scorer):
        assert scorer.score == 0
        assert scorer.level == 1
        assert scorer.high_score == 0

    def test_catch_adds_one(self, scorer):
        event = scorer.apply_catch()
        assert event.points == 1
        assert scorer.score == 1
        assert scorer.catches == 1

    def test_level_every_ten(self, scorer):
        """Level goes up exactly at 10, 20, 30."""
        level_ups = []
        for _ in range(35):
            event = scorer.apply_catch()
            if event.level_up:
                level_ups.append(event.score)
                assert event.levels_gained == 1
            assert scorer.level == 1 + scorer.score // 10

        assert level_ups == [10, 20, 30]
        assert scorer.level == 4

    def test_nine_catches_no_level(self, scorer):
        for _ in range(9):
            scorer.apply_catch()
        assert (scorer.score, scorer.level) == (9, 1)

        event = scorer.apply_catch()
        assert (scorer.score, scorer.level) == (10, 2)
        assert event.level_up

    def test_high_score_tracks_and_persists(self, scorer, store):
        """Beating the record updates and saves it on every catch."""
        for _ in range(3):
            event = scorer.apply_catch()
            assert event.new_record
        assert scorer.high_score == 3
        assert store.load() == 3

    def test_reset_keeps_high_score(self, scorer):
        for _ in range(12):
            scorer.apply_catch()
        scorer.reset()

        assert scorer.score == 0
        assert scorer.level == 1
        assert scorer.high_score == 12

    def test_no_record_below_high_score(self, config):
        """Scores under a loaded record do not overwrite it."""
        store = MemoryHighScoreStore("50")
        scorer = ScoreTracker(config, store)
        event = scorer.apply_catch()

        assert not event.new_record
        assert scorer.high_score == 50
        assert store.load() == 50

    def test_status_line(self, config):
        scorer = ScoreTracker(config, MemoryHighScoreStore(7))
        scorer.apply_catch()
        assert scorer.status_line() == "Score: 1 | Level: 1 | High Score: 7"

    def test_without_store(self, config):
        """A tracker without a store still keeps an in-memory record."""
        scorer = ScoreTracker(config)
        scorer.apply_catch()
        assert scorer.high_score == 1


class TestParseHighScore:
    """Test lenient parsing of stored values."""

    @pytest.mark.parametrize("raw, expected", [
        ("42", 42),
        (" 17", 17),
        ("12px", 12),
        (8, 8),
        (None, 0),
        ("", 0),
        ("abc", 0),
        ("NaN", 0),
        ("-5", 0),
        (True, 0),
        ([3], 0),
        (2.9, 2),
        (float("inf"), 0),
        (float("-inf"), 0),
        (float("nan"), 0),
    ])
    def test_values(self, raw, expected):
        assert parse_high_score(raw) == expected


class TestHighScoreStore:
    """Test the JSON-file store."""

    def test_missing_file_reads_zero(self, storage_path):
        assert HighScoreStore(storage_path, "highScore").load() == 0

    def test_round_trip(self, storage_path):
        """A saved record is read back by a fresh store."""
        HighScoreStore(storage_path, "highScore").save(23)
        assert HighScoreStore(storage_path, "highScore").load() == 23

    def test_stored_as_string(self, storage_path):
        HighScoreStore(storage_path, "highScore").save(5)
        with open(storage_path) as f:
            assert json.load(f) == {"highScore": "5"}

    def test_other_keys_preserved(self, storage_path):
        with open(storage_path, "w") as f:
            json.dump({"volume": "0.5"}, f)

        HighScoreStore(storage_path, "highScore").save(9)

        with open(storage_path) as f:
            data = json.load(f)
        assert data == {"volume": "0.5", "highScore": "9"}

    def test_corrupt_file_reads_zero(self, storage_path):
        storage_path.write_text("{not json")
        assert HighScoreStore(storage_path, "highScore").load() == 0

    def test_non_object_file_reads_zero(self, storage_path):
        storage_path.write_text("[1, 2, 3]")
        assert HighScoreStore(storage_path, "highScore").load() == 0

    def test_malformed_value_reads_zero(self, storage_path):
        storage_path.write_text(json.dumps({"highScore": "lots"}))
        assert HighScoreStore(storage_path, "highScore").load() == 0

    def test_infinite_value_reads_zero(self, storage_path):
        """JSON Infinity and overflowing numbers decode to inf and read as 0."""
        storage_path.write_text('{"highScore": Infinity}')
        assert HighScoreStore(storage_path, "highScore").load() == 0
        storage_path.write_text('{"highScore": 1e400}')
        assert HighScoreStore(storage_path, "highScore").load() == 0

    def test_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "a" / "b" / "storage.json"
        HighScoreStore(path, "highScore").save(1)
        assert path.exists()

    def test_defaults_from_config(self, config, tmp_path):
        """Path and key come from the config when not given."""
        cfg = config.with_storage_path(str(tmp_path / "cfg.json"))
        store = HighScoreStore(config=cfg)
        assert store.path == tmp_path / "cfg.json"
        assert store.key == "highScore"
