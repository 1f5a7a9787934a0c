"""
Local JSON replays of finished sessions.
"""

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from domain.session import Session


BACKEND_DIR = Path(__file__).resolve().parent.parent


def get_completed_games_dir() -> str:
    d = os.getenv("GRIDSNAKE_COMPLETED_GAMES_DIR", "completed_games").strip()
    return d or "completed_games"


def resolve_completed_games_dir(directory: Optional[str] = None) -> Path:
    """
    Absolute replay directory. `directory` defaults to get_completed_games_dir();
    relative paths are taken from the backend directory, not the cwd.
    """
    path = Path(directory or get_completed_games_dir()).expanduser()
    if not path.is_absolute():
        path = BACKEND_DIR / path
    return path


def _iso(ts: Optional[float]) -> Optional[str]:
    if ts is None:
        return None
    return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()


def build_replay(session: Session) -> Dict[str, Any]:
    """Convert a session and its recorded history to a JSON-serializable dict."""
    metadata = {
        "game_id": session.session_id,
        "mode": session.mode,
        "variant": session.variant,
        "start_time": _iso(session.start_time),
        "end_time": _iso(session.end_time),
        "final_score": session.score,
        "ticks": session.tick_number,
        "end_reason": session.end_reason,
        "width": session.grid.cols,
        "height": session.grid.rows,
        "final_length": len(session.snake),
    }
    return {
        "metadata": metadata,
        "rounds": list(session.history),
    }


def save_replay(session: Session, directory: Optional[str] = None,
                filename: Optional[str] = None) -> Path:
    """Write the replay to <directory>/snake_game_<id>.json and return its path."""
    directory = Path(directory) if directory else resolve_completed_games_dir()
    if filename is None:
        filename = f"snake_game_{session.session_id}.json"

    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    with path.open("w", encoding="utf-8") as f:
        json.dump(build_replay(session), f, indent=2)
    return path


def load_replay(path) -> Dict[str, Any]:
    with Path(path).open("r", encoding="utf-8") as f:
        return json.load(f)
