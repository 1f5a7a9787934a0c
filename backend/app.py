import logging
import os
import threading
from typing import Dict, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from flask_cors import CORS

from config import GameConfig
from data_access import GameRepository, HighScoreTracker
from domain.constants import BOT, PLAYING, VALID_MODES
from game_engine import SnakeGame
from players.variant_registry import list_variants

load_dotenv()

logger = logging.getLogger(__name__)

MAX_TICKS_PER_REQUEST = 100
MAX_SESSIONS = 100


class SessionRegistry:
    """
    Thread-safe map of id -> SnakeGame for the HTTP front-end.

    Holds at most `max_sessions` games. Creating one more evicts the oldest
    game that is not PLAYING, or the oldest game if every one is still live.
    """

    def __init__(self, config: GameConfig, high_scores: HighScoreTracker,
                 max_sessions: int = MAX_SESSIONS):
        if max_sessions < 1:
            raise ValueError(f"max_sessions must be positive, got {max_sessions}")
        self.config = config
        self.high_scores = high_scores
        self.max_sessions = max_sessions
        self._games: Dict[str, SnakeGame] = {}
        self.lock = threading.RLock()

    def create(self, mode: str, variant: Optional[str] = None) -> SnakeGame:
        game = SnakeGame(self.config, high_scores=self.high_scores)
        session = game.start(mode, variant)
        with self.lock:
            while len(self._games) >= self.max_sessions:
                self._evict_one()
            self._games[session.session_id] = game
        return game

    def _evict_one(self) -> None:
        # Dict order is creation order, so the first match is the oldest
        victim = next(
            (gid for gid, g in self._games.items() if g.state != PLAYING),
            next(iter(self._games)),
        )
        del self._games[victim]
        logger.info("Evicted session %s (registry full)", victim)

    def get(self, game_id: str) -> Optional[SnakeGame]:
        with self.lock:
            return self._games.get(game_id)

    def remove(self, game_id: str) -> bool:
        with self.lock:
            return self._games.pop(game_id, None) is not None

    def __len__(self):
        return len(self._games)


def _json_object() -> Optional[dict]:
    """Request JSON as a dict; {} when absent, None when it is not an object."""
    body = request.get_json(silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None


def _bad_body():
    return jsonify({"error": "Request body must be a JSON object"}), 400


def _game_payload(game_id: str, game: SnakeGame) -> dict:
    data = game.snapshot().to_dict()
    data["session_id"] = game_id
    data["variant"] = game.variant
    return data


def create_app(
    config: Optional[GameConfig] = None,
    high_scores: Optional[HighScoreTracker] = None,
    game_repo: Optional[GameRepository] = None,
    max_sessions: int = MAX_SESSIONS,
) -> Flask:
    config = config or GameConfig.from_env()
    high_scores = high_scores or HighScoreTracker()

    app = Flask(__name__)
    registry = SessionRegistry(config, high_scores, max_sessions)
    app.config["REGISTRY"] = registry

    # Enable CORS for API routes so the browser front-end (different origin) can call Flask
    # Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
    allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
    if allowed_origins_env:
        allowed_origins = [o.strip() for o in allowed_origins_env.split(",") if o.strip()]
    else:
        # sensible defaults for local dev
        allowed_origins = [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]
    CORS(app, resources={r"/api/*": {"origins": allowed_origins}})

    def lookup(game_id: str):
        game = registry.get(game_id)
        if game is None:
            return None, (jsonify({"error": f"Session '{game_id}' not found"}), 404)
        return game, None

    @app.route("/api/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok", "sessions": len(registry)})

    @app.route("/api/variants", methods=["GET"])
    def variants():
        return jsonify({"variants": list_variants()})

    @app.route("/api/sessions", methods=["POST"])
    def create_session():
        """
        Start a new game.

        JSON body:
        - mode: 'HUMAN' or 'BOT' (default: 'HUMAN')
        - variant: bot variant key (BOT mode only)
        """
        body = _json_object()
        if body is None:
            return _bad_body()
        mode = str(body.get("mode", "HUMAN")).upper()
        if mode not in VALID_MODES:
            return jsonify({"error": f"Unknown mode '{mode}'"}), 400
        variant = body.get("variant") if mode == BOT else None
        if variant is not None and not isinstance(variant, str):
            return jsonify({"error": "'variant' must be a string"}), 400
        try:
            game = registry.create(mode, variant)
        except ValueError as error:
            return jsonify({"error": str(error)}), 400
        game_id = game.session.session_id
        return jsonify(_game_payload(game_id, game)), 201

    @app.route("/api/sessions/<game_id>", methods=["GET"])
    def get_session(game_id):
        game, error = lookup(game_id)
        if error:
            return error
        with registry.lock:
            return jsonify(_game_payload(game_id, game))

    @app.route("/api/sessions/<game_id>", methods=["DELETE"])
    def delete_session(game_id):
        if not registry.remove(game_id):
            return jsonify({"error": f"Session '{game_id}' not found"}), 404
        return jsonify({"deleted": game_id})

    @app.route("/api/sessions/<game_id>/direction", methods=["POST"])
    def submit_direction(game_id):
        """JSON body: {"input": "ArrowUp" | "w" | "UP" | "swipe_up" ...}"""
        game, error = lookup(game_id)
        if error:
            return error
        body = _json_object()
        if body is None:
            return _bad_body()
        if "input" not in body:
            return jsonify({"error": "Missing 'input'"}), 400
        with registry.lock:
            accepted = game.submit_direction(body["input"])
            pending = game.session.input_queue.pending() if game.session else []
        return jsonify({"accepted": accepted, "pending": pending})

    @app.route("/api/sessions/<game_id>/tick", methods=["POST"])
    def tick_session(game_id):
        """JSON body: {"count": n} runs up to n ticks (default 1), stopping at game over."""
        game, error = lookup(game_id)
        if error:
            return error
        body = _json_object()
        if body is None:
            return _bad_body()
        try:
            count = int(body.get("count", 1))
        except (TypeError, ValueError):
            return jsonify({"error": "'count' must be an integer"}), 400
        if count < 1 or count > MAX_TICKS_PER_REQUEST:
            return jsonify({"error": f"'count' must be between 1 and {MAX_TICKS_PER_REQUEST}"}), 400

        results = []
        with registry.lock:
            for _ in range(count):
                result = game.tick()
                if result is None:
                    break
                results.append(result.to_dict())
                if not result.alive or result.board_cleared:
                    break
            payload = _game_payload(game_id, game)
        payload["results"] = results
        return jsonify(payload)

    @app.route("/api/sessions/<game_id>/restart", methods=["POST"])
    def restart_session(game_id):
        game, error = lookup(game_id)
        if error:
            return error
        with registry.lock:
            try:
                game.restart()
            except RuntimeError as err:
                return jsonify({"error": str(err)}), 400
            game.session.session_id = game_id
            return jsonify(_game_payload(game_id, game))

    @app.route("/api/sessions/<game_id>/menu", methods=["POST"])
    def menu_session(game_id):
        game, error = lookup(game_id)
        if error:
            return error
        with registry.lock:
            game.menu()
            return jsonify(_game_payload(game_id, game))

    @app.route("/api/highscore", methods=["GET"])
    def get_highscore():
        try:
            return jsonify({"high_score": high_scores.get()})
        except Exception as error:
            logger.error("Error reading high score: %s", error)
            return jsonify({"error": "Failed to load high score"}), 500

    @app.route("/api/games", methods=["GET"])
    def get_games():
        """
        Finished games recorded by the CLI tools.

        Query parameters:
        - limit: number of games to return (default: 10)
        - sort_by: 'recent' or 'score' (default: 'recent')
        """
        repo = game_repo or GameRepository()
        try:
            limit = request.args.get("limit", default=10, type=int)
            sort_by = request.args.get("sort_by", default="recent")
            if sort_by == "score":
                games = repo.get_top_games(limit=limit)
            else:
                games = repo.get_recent_games(limit=limit)
            return jsonify({"games": games, "total": repo.count_games()})
        except Exception as error:
            logger.error("Error fetching games: %s", error)
            return jsonify({"error": "Failed to load games"}), 500

    return app


if __name__ == "__main__":
    logging.basicConfig(
        level=GameConfig.from_env().log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    port = int(os.getenv("PORT", "5000"))
    create_app().run(host="0.0.0.0", port=port)
