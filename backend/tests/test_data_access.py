"""
Tests for data_access layer.

Repositories run against a throwaway SQLite file under pytest's tmp_path.
"""

import sys
import os
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import GameConfig
from data_access import (
    GameRepository,
    HighScoreTracker,
    HIGHSCORE_KEY,
    MemoryKeyValueStore,
    ScoreRepository,
    build_replay,
    get_completed_games_dir,
    load_replay,
    resolve_completed_games_dir,
    save_replay,
)
from data_access import replay_files
from database import get_database_path, init_database, get_connection
from domain.constants import BOT, HUMAN
from game_engine import end_game, new_game, tick


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "snake.db")


def insert(repo, game_id, score, ticks=10, variant="pathfinding", end_hour=12):
    repo.insert_game(
        game_id=game_id,
        mode=BOT,
        variant=variant,
        score=score,
        ticks=ticks,
        end_reason="wall",
        board_width=20,
        board_height=20,
        start_time=datetime(2026, 1, 1, 11, tzinfo=timezone.utc),
        end_time=datetime(2026, 1, 1, end_hour, tzinfo=timezone.utc),
    )


class TestDatabase:
    """Tests for database.py."""

    def test_path_from_environment(self, monkeypatch, db_path):
        monkeypatch.setenv("GRIDSNAKE_DB_PATH", db_path)
        assert get_database_path() == db_path

    def test_default_path(self, monkeypatch):
        monkeypatch.delenv("GRIDSNAKE_DB_PATH", raising=False)
        assert get_database_path().endswith("gridsnake.db")

    def test_init_is_idempotent(self, db_path):
        init_database(db_path)
        init_database(db_path)
        conn = get_connection(db_path)
        try:
            tables = {row["name"] for row in conn.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table'"
            )}
        finally:
            conn.close()
        assert {"kv_store", "games"} <= tables


class TestScoreRepository:
    """Tests for the kv_store repository."""

    def test_missing_key_returns_default(self, db_path):
        repo = ScoreRepository(db_path)
        assert repo.get_int("highscore") == 0
        assert repo.get_int("highscore", default=-1) == -1

    def test_set_and_get(self, db_path):
        repo = ScoreRepository(db_path)
        repo.set_int("highscore", 12)
        repo.set_int("highscore", 3)
        assert repo.get_int("highscore") == 3
        assert repo.get_all() == {"highscore": 3}

    def test_set_if_greater(self, db_path):
        repo = ScoreRepository(db_path)
        assert repo.set_int_if_greater("highscore", 5) is True
        assert repo.set_int_if_greater("highscore", 4) is False
        assert repo.set_int_if_greater("highscore", 5) is False
        assert repo.set_int_if_greater("highscore", 9) is True
        assert repo.get_int("highscore") == 9

    def test_value_survives_new_repository(self, db_path):
        ScoreRepository(db_path).set_int("highscore", 21)
        assert ScoreRepository(db_path).get_int("highscore") == 21


class TestGameRepository:
    """Tests for the games table repository."""

    def test_insert_and_get(self, db_path):
        repo = GameRepository(db_path)
        insert(repo, "g1", score=4)
        game = repo.get_game("g1")
        assert game["score"] == 4
        assert game["mode"] == BOT
        assert game["end_time"].startswith("2026-01-01T12:00:00")
        assert repo.get_game("missing") is None

    def test_top_and_recent(self, db_path):
        repo = GameRepository(db_path)
        insert(repo, "old-high", score=9, end_hour=12)
        insert(repo, "new-low", score=2, end_hour=14)
        insert(repo, "greedy", score=5, variant="greedy", end_hour=13)
        assert [g["id"] for g in repo.get_top_games(limit=2)] == ["old-high", "greedy"]
        assert [g["id"] for g in repo.get_top_games(variant="greedy")] == ["greedy"]
        assert [g["id"] for g in repo.get_recent_games(limit=1)] == ["new-low"]
        assert repo.count_games() == 3

    def test_duplicate_id_rolls_back(self, db_path):
        repo = GameRepository(db_path)
        insert(repo, "g1", score=1)
        with pytest.raises(Exception):
            insert(repo, "g1", score=2)
        assert repo.count_games() == 1
        assert repo.get_game("g1")["score"] == 1


class TestHighScoreTracker:
    """Tests for HighScoreTracker and the in-memory store."""

    def test_memory_store(self):
        store = MemoryKeyValueStore()
        assert store.get_int("x", 3) == 3
        assert store.set_int_if_greater("x", 2) is True
        assert store.set_int_if_greater("x", 2) is False
        store.set_int("x", 1)
        assert store.get_int("x") == 1

    def test_record_only_raises(self):
        tracker = HighScoreTracker(MemoryKeyValueStore())
        assert tracker.get() == 0
        assert tracker.record(0) is False
        assert tracker.record(3) is True
        assert tracker.record(2) is False
        assert tracker.get() == 3

    def test_sqlite_backed_tracker(self, db_path):
        tracker = HighScoreTracker(ScoreRepository(db_path))
        tracker.record(6)
        assert ScoreRepository(db_path).get_int(HIGHSCORE_KEY) == 6


class TestReplayFiles:
    """Tests for JSON replays."""

    def test_completed_games_dir_from_env(self, monkeypatch):
        monkeypatch.setenv("GRIDSNAKE_COMPLETED_GAMES_DIR", "replays")
        assert get_completed_games_dir() == "replays"
        monkeypatch.delenv("GRIDSNAKE_COMPLETED_GAMES_DIR")
        assert get_completed_games_dir() == "completed_games"

    def test_relative_dir_is_anchored_at_backend(self, monkeypatch):
        backend = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        monkeypatch.setenv("GRIDSNAKE_COMPLETED_GAMES_DIR", "replays")
        assert resolve_completed_games_dir() == Path(backend) / "replays"

    def test_absolute_dir_is_kept(self, tmp_path):
        assert resolve_completed_games_dir(str(tmp_path)) == tmp_path

    def test_default_save_ignores_cwd(self, tmp_path, monkeypatch):
        """The writer uses the same directory no matter where it runs from."""
        monkeypatch.setattr(replay_files, "BACKEND_DIR", tmp_path / "backend")
        monkeypatch.setenv("GRIDSNAKE_COMPLETED_GAMES_DIR", "replays")
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        monkeypatch.chdir(elsewhere)
        session = new_game(HUMAN, config=GameConfig(cols=5, rows=5))
        end_game(session, "wall")
        path = save_replay(session)
        assert path.parent == tmp_path / "backend" / "replays"
        assert not (elsewhere / "replays").exists()

    def test_build_replay_records_every_tick(self):
        session = new_game(HUMAN, config=GameConfig(cols=5, rows=5, initial_length=1),
                           record_history=True)
        session.food = (0, 0)
        for _ in range(3):
            tick(session)
        replay = build_replay(session)
        meta = replay["metadata"]
        assert meta["ticks"] == 3
        assert meta["end_reason"] == "wall"
        assert meta["width"] == 5
        assert meta["final_length"] == 1
        assert meta["end_time"] is not None
        assert len(replay["rounds"]) == 4
        assert replay["rounds"][0]["tick_number"] == 0
        assert replay["rounds"][-1]["alive"] is False

    def test_save_and_load(self, tmp_path):
        session = new_game(BOT, config=GameConfig(cols=6, rows=6), record_history=True)
        tick(session)
        end_game(session, "max_ticks")
        path = save_replay(session, directory=str(tmp_path))
        assert path.name == f"snake_game_{session.session_id}.json"
        data = load_replay(path)
        assert data["metadata"]["game_id"] == session.session_id
        assert data["metadata"]["variant"] == "pathfinding"
        assert data["rounds"][1]["tick_number"] == 1
