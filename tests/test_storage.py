"""Tests for persistence of settings, high score and leaderboard.

Covers:
- Defaults on absent or corrupted records
- Field-by-field settings validation
- Leaderboard ranking, truncation and tie order
- The JSON file backend
"""

import json

import pytest

from snake_arcade.config import KEY_HIGH, KEY_LEADERBOARD, KEY_SETTINGS
from snake_arcade.storage import (
    JsonFileStore, LeaderboardEntry, PersistenceStore, Settings,
)

DEFAULTS = Settings(difficulty="Normal", volume=0.7, wrap=False)


class TestSettings:
    """Loading and saving the settings record."""

    def test_absent_record_gives_defaults(self, store):
        assert store.load_settings() == DEFAULTS

    @pytest.mark.parametrize("raw", [
        "{", "", "null", "[]", "42", '"Hard"', "\x00\xff garbage",
    ])
    def test_corrupted_record_gives_defaults(self, store, backend, raw):
        backend[KEY_SETTINGS] = raw
        assert store.load_settings() == DEFAULTS

    def test_deeply_nested_record_gives_defaults(self, store, backend):
        backend[KEY_SETTINGS] = "[" * 100_000
        assert store.load_settings() == DEFAULTS

    def test_partial_record_is_merged_with_defaults(self, store, backend):
        backend[KEY_SETTINGS] = json.dumps({"wrap": True})
        assert store.load_settings() == Settings("Normal", 0.7, True)

    def test_invalid_fields_fall_back_individually(self, store, backend):
        backend[KEY_SETTINGS] = json.dumps(
            {"difficulty": "Insane", "volume": "loud", "wrap": "yes"}
        )
        assert store.load_settings() == DEFAULTS

    @pytest.mark.parametrize("difficulty", [[], {}, 3, None])
    def test_non_string_difficulty(self, store, backend, difficulty):
        backend[KEY_SETTINGS] = json.dumps({"difficulty": difficulty, "wrap": True})
        assert store.load_settings() == Settings("Normal", 0.7, True)

    def test_boolean_volume_is_rejected(self, store, backend):
        backend[KEY_SETTINGS] = json.dumps({"volume": True})
        assert store.load_settings().volume == 0.7

    def test_volume_is_clamped(self, store, backend):
        backend[KEY_SETTINGS] = json.dumps({"volume": 3})
        assert store.load_settings().volume == 1.0
        backend[KEY_SETTINGS] = json.dumps({"volume": -0.5})
        assert store.load_settings().volume == 0.0

    def test_save_then_load(self, store, backend):
        store.save_settings(Settings("Hard", 0.3, True))
        assert json.loads(backend[KEY_SETTINGS]) == {
            "difficulty": "Hard", "volume": 0.3, "wrap": True,
        }
        assert store.load_settings() == Settings("Hard", 0.3, True)


class TestHighScore:
    """The textual high-score record."""

    def test_absent_is_zero(self, store):
        assert store.load_high_score() == 0

    @pytest.mark.parametrize("raw", ["abc", "", "1.5", "-5", "{}"])
    def test_malformed_is_zero(self, store, backend, raw):
        backend[KEY_HIGH] = raw
        assert store.load_high_score() == 0

    def test_saved_as_text(self, store, backend):
        store.save_high_score(42)
        assert backend[KEY_HIGH] == "42"
        assert store.load_high_score() == 42


class TestLeaderboard:
    """Top-5 leaderboard ordering and robustness."""

    def test_absent_is_empty(self, store):
        assert store.load_leaderboard() == []

    @pytest.mark.parametrize("raw", ["[", "{}", "null", '"x"', "7"])
    def test_corrupted_is_empty(self, store, backend, raw):
        backend[KEY_LEADERBOARD] = raw
        assert store.load_leaderboard() == []

    def test_deeply_nested_is_empty(self, store, backend):
        backend[KEY_LEADERBOARD] = "[" * 100_000
        assert store.load_leaderboard() == []

    def test_submission_records_timestamp(self, store):
        entries = store.submit_score("ada", 12)
        assert entries == [LeaderboardEntry("ada", 12, "2024-03-09 14:05:30")]

    def test_keeps_top_five_sorted_descending(self, store):
        for i, score in enumerate([3, 9, 1, 7, 5, 11, 2]):
            store.submit_score(f"p{i}", score)
        scores = [e.score for e in store.load_leaderboard()]
        assert scores == [11, 9, 7, 5, 3]

    def test_ties_keep_submission_order(self, store):
        store.submit_score("first", 10)
        store.submit_score("second", 10)
        store.submit_score("third", 10)
        assert [e.name for e in store.load_leaderboard()] == ["first", "second", "third"]

    def test_new_low_score_is_dropped_when_full(self, store):
        for i in range(5):
            store.submit_score(f"p{i}", 100)
        entries = store.submit_score("late", 1)
        assert len(entries) == 5
        assert "late" not in [e.name for e in entries]

    def test_persisted_layout(self, store, backend):
        store.submit_score("bob", 4)
        assert json.loads(backend[KEY_LEADERBOARD]) == [
            {"name": "bob", "score": 4, "time": "2024-03-09 14:05:30"}
        ]

    def test_malformed_entries_are_skipped(self, store, backend):
        backend[KEY_LEADERBOARD] = json.dumps([
            {"name": "ok", "score": 3, "time": "t"},
            {"name": "no score"},
            {"name": 5, "score": 1, "time": "t"},
            {"name": "bool", "score": True, "time": "t"},
            "junk",
        ])
        assert store.load_leaderboard() == [LeaderboardEntry("ok", 3, "t")]

    def test_long_names_are_cut(self, store):
        store.submit_score("abcdefghijklmnop", 1)
        assert store.load_leaderboard()[0].name == "abcdefghijkl"


class TestJsonFileStore:
    """File-backed key-value store."""

    def test_missing_file_reads_empty(self, tmp_path):
        assert len(JsonFileStore(tmp_path / "none.json")) == 0

    def test_corrupt_file_reads_empty(self, tmp_path):
        path = tmp_path / "save.json"
        path.write_text("not json", encoding="utf-8")
        assert dict(JsonFileStore(path)) == {}

    def test_non_string_values_are_ignored(self, tmp_path):
        path = tmp_path / "save.json"
        path.write_text(json.dumps({"a": "1", "b": 2}), encoding="utf-8")
        assert dict(JsonFileStore(path)) == {"a": "1"}

    def test_writes_create_parent_and_survive_reload(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "save.json"
        store = PersistenceStore(JsonFileStore(path))
        store.save_high_score(17)
        store.save_settings(Settings("Easy", 0.5, True))
        store.submit_score("zed", 17)

        reloaded = PersistenceStore(JsonFileStore(path))
        assert reloaded.load_high_score() == 17
        assert reloaded.load_settings() == Settings("Easy", 0.5, True)
        assert [e.name for e in reloaded.load_leaderboard()] == ["zed"]

    def test_delete(self, tmp_path):
        path = tmp_path / "save.json"
        kv = JsonFileStore(path)
        kv["k"] = "v"
        del kv["k"]
        assert json.loads(path.read_text(encoding="utf-8")) == {}

    def test_undecodable_file_reads_empty(self, tmp_path):
        path = tmp_path / "save.json"
        path.write_bytes(b'{"snake_highscore_v1": "\xff\xfe"}')
        store = PersistenceStore(JsonFileStore(path))
        assert store.load_high_score() == 0
        assert store.load_settings() == DEFAULTS

    def test_deeply_nested_file_reads_empty(self, tmp_path):
        path = tmp_path / "save.json"
        path.write_text("[" * 100_000, encoding="utf-8")
        assert dict(JsonFileStore(path)) == {}
