"""
Tests for the Flask API in app.py.
"""

import sys
import os

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import SessionRegistry, create_app
from config import GameConfig
from data_access import GameRepository, HighScoreTracker, MemoryKeyValueStore


@pytest.fixture
def tracker():
    return HighScoreTracker(MemoryKeyValueStore())


@pytest.fixture
def client(tmp_path, tracker):
    app = create_app(
        config=GameConfig(cols=6, rows=6, initial_length=2, seed=4),
        high_scores=tracker,
        game_repo=GameRepository(str(tmp_path / "api.db")),
    )
    app.config["TESTING"] = True
    return app.test_client()


def start(client, **body):
    response = client.post("/api/sessions", json=body)
    assert response.status_code == 201
    return response.get_json()


class TestSessions:
    """Tests for session creation, lookup and removal."""

    def test_health(self, client):
        assert client.get("/api/health").get_json() == {"status": "ok", "sessions": 0}

    def test_variants(self, client):
        keys = [v["key"] for v in client.get("/api/variants").get_json()["variants"]]
        assert keys == ["pathfinding", "greedy", "random"]

    def test_create_human_session(self, client):
        data = start(client)
        assert data["state"] == "PLAYING"
        assert data["mode"] == "HUMAN"
        assert data["variant"] is None
        assert data["snake"] == [[3, 3], [2, 3]]
        assert data["width"] == 6

    def test_create_bot_session(self, client):
        data = start(client, mode="bot", variant="greedy")
        assert data["mode"] == "BOT"
        assert data["variant"] == "greedy"

    def test_bad_mode_and_variant(self, client):
        assert client.post("/api/sessions", json={"mode": "watch"}).status_code == 400
        response = client.post("/api/sessions", json={"mode": "BOT", "variant": "oracle"})
        assert response.status_code == 400
        assert "Unknown player variant" in response.get_json()["error"]

    def test_non_string_variant_is_rejected(self, client):
        response = client.post("/api/sessions", json={"mode": "BOT", "variant": 5})
        assert response.status_code == 400
        assert "variant" in response.get_json()["error"]
        assert client.get("/api/health").get_json()["sessions"] == 0

    def test_non_object_body_is_rejected(self, client):
        """A JSON list is a client error on every endpoint that reads a body."""
        response = client.post("/api/sessions", json=["BOT"])
        assert response.status_code == 400
        assert response.get_json() == {"error": "Request body must be a JSON object"}
        game_id = start(client)["session_id"]
        for action in ("direction", "tick"):
            response = client.post(f"/api/sessions/{game_id}/{action}", json=["UP"])
            assert response.status_code == 400
        assert client.post(f"/api/sessions/{game_id}/tick", json="3").status_code == 400

    def test_get_and_delete(self, client):
        game_id = start(client)["session_id"]
        assert client.get(f"/api/sessions/{game_id}").get_json()["session_id"] == game_id
        assert client.delete(f"/api/sessions/{game_id}").status_code == 200
        assert client.get(f"/api/sessions/{game_id}").status_code == 404
        assert client.delete(f"/api/sessions/{game_id}").status_code == 404

    def test_unknown_session(self, client):
        response = client.post("/api/sessions/nope/tick", json={})
        assert response.status_code == 404
        assert "not found" in response.get_json()["error"]


class TestRegistryLimit:
    """Tests for the bounded session registry."""

    @pytest.fixture
    def small_client(self, tmp_path, tracker):
        app = create_app(
            config=GameConfig(cols=6, rows=6, initial_length=2, seed=4),
            high_scores=tracker,
            game_repo=GameRepository(str(tmp_path / "api.db")),
            max_sessions=3,
        )
        app.config["TESTING"] = True
        return app.test_client()

    def test_finished_session_is_evicted_first(self, small_client):
        ids = [start(small_client)["session_id"] for _ in range(3)]
        # The middle game hits the wall and is no longer live
        small_client.post(f"/api/sessions/{ids[1]}/tick", json={"count": 50})
        newest = start(small_client)["session_id"]
        assert small_client.get("/api/health").get_json()["sessions"] == 3
        assert small_client.get(f"/api/sessions/{ids[1]}").status_code == 404
        for game_id in (ids[0], ids[2], newest):
            assert small_client.get(f"/api/sessions/{game_id}").status_code == 200

    def test_oldest_live_session_is_evicted_when_all_are_playing(self, small_client):
        ids = [start(small_client)["session_id"] for _ in range(5)]
        assert small_client.get("/api/health").get_json()["sessions"] == 3
        assert small_client.get(f"/api/sessions/{ids[0]}").status_code == 404
        assert small_client.get(f"/api/sessions/{ids[1]}").status_code == 404
        for game_id in ids[2:]:
            assert small_client.get(f"/api/sessions/{game_id}").status_code == 200

    def test_menu_session_counts_as_finished(self, small_client):
        ids = [start(small_client)["session_id"] for _ in range(3)]
        small_client.post(f"/api/sessions/{ids[2]}/menu")
        start(small_client)
        assert small_client.get(f"/api/sessions/{ids[2]}").status_code == 404
        assert small_client.get(f"/api/sessions/{ids[0]}").status_code == 200

    def test_limit_must_be_positive(self, tracker):
        with pytest.raises(ValueError, match="max_sessions"):
            SessionRegistry(GameConfig(), tracker, max_sessions=0)


class TestGameplay:
    """Tests for direction input and ticking over HTTP."""

    def test_direction_queue(self, client):
        game_id = start(client)["session_id"]
        url = f"/api/sessions/{game_id}/direction"
        assert client.post(url, json={"input": "ArrowUp"}).get_json() == {
            "accepted": True, "pending": ["UP"],
        }
        # DOWN reverses the queued UP
        assert client.post(url, json={"input": "s"}).get_json()["accepted"] is False
        assert client.post(url, json={}).status_code == 400

    def test_tick_applies_direction(self, client):
        game_id = start(client)["session_id"]
        client.post(f"/api/sessions/{game_id}/direction", json={"input": "w"})
        data = client.post(f"/api/sessions/{game_id}/tick", json={}).get_json()
        assert len(data["results"]) == 1
        assert data["results"][0]["direction"] == "UP"
        assert data["snake"][0] == [3, 2]
        assert data["tick_number"] == 1

    def test_tick_count_stops_at_game_over(self, client):
        """Heading right from column 3 of 6 hits the wall on the third tick."""
        game_id = start(client)["session_id"]
        data = client.post(f"/api/sessions/{game_id}/tick", json={"count": 50}).get_json()
        assert data["state"] == "GAMEOVER"
        assert data["end_reason"] == "wall"
        assert len(data["results"]) == 3
        assert data["results"][-1]["alive"] is False

    def test_tick_count_validation(self, client):
        game_id = start(client)["session_id"]
        url = f"/api/sessions/{game_id}/tick"
        assert client.post(url, json={"count": 0}).status_code == 400
        assert client.post(url, json={"count": 1000}).status_code == 400
        assert client.post(url, json={"count": "many"}).status_code == 400

    def test_restart_keeps_id(self, client):
        game_id = start(client)["session_id"]
        client.post(f"/api/sessions/{game_id}/tick", json={"count": 50})
        data = client.post(f"/api/sessions/{game_id}/restart").get_json()
        assert data["session_id"] == game_id
        assert data["state"] == "PLAYING"
        assert data["tick_number"] == 0
        assert client.get(f"/api/sessions/{game_id}").get_json()["state"] == "PLAYING"

    def test_menu(self, client):
        game_id = start(client)["session_id"]
        data = client.post(f"/api/sessions/{game_id}/menu").get_json()
        assert data["state"] == "MENU"
        assert data["snake"] == []
        tick = client.post(f"/api/sessions/{game_id}/tick", json={}).get_json()
        assert tick["results"] == []


class TestScores:
    """Tests for the high score and finished-games endpoints."""

    def test_highscore(self, client, tracker):
        tracker.record(8)
        assert client.get("/api/highscore").get_json() == {"high_score": 8}

    def test_games_listing(self, tmp_path):
        repo = GameRepository(str(tmp_path / "games.db"))
        repo.insert_game("a", "BOT", "random", 1, 5, "wall", 6, 6, None, "2026-01-01T00:00:00")
        repo.insert_game("b", "BOT", "greedy", 4, 9, "self", 6, 6, None, "2026-01-02T00:00:00")
        app = create_app(
            config=GameConfig(cols=6, rows=6),
            high_scores=HighScoreTracker(MemoryKeyValueStore()),
            game_repo=repo,
        )
        client = app.test_client()
        recent = client.get("/api/games?limit=1").get_json()
        assert recent["total"] == 2
        assert [g["id"] for g in recent["games"]] == ["b"]
        top = client.get("/api/games?sort_by=score").get_json()
        assert [g["id"] for g in top["games"]] == ["b", "a"]
