#!/usr/bin/env python3
"""Analyze local completed game replays.

This is a LOCAL-ONLY tool. It:
- Scans the completed games directory for snake_game_*.json.
- Extracts per-game metrics:
  - final score and snake length
  - ticks played
  - end reason (wall, self, board_cleared, max_ticks)
  - duration_seconds (end_time - start_time)
- Prints top N games by score and by ticks, and a count per end reason.

No database access is used; everything is computed from local JSON.
"""

import argparse
import json
import logging
import os
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from data_access.replay_files import resolve_completed_games_dir  # noqa: E402

logger = logging.getLogger(__name__)


@dataclass
class GameMetrics:
    game_id: str
    filename: str
    variant: str
    score: int
    length: int
    ticks: int
    end_reason: str
    duration_seconds: float


def parse_iso(ts: Optional[str]) -> Optional[datetime]:
    if not ts:
        return None
    try:
        return datetime.fromisoformat(ts)
    except ValueError:
        return None


def extract_metrics(path: Path) -> Optional[GameMetrics]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Failed to load %s: %s", path.name, exc)
        return None

    metadata = data.get("metadata", {}) or {}
    rounds = data.get("rounds", []) or []

    game_id = str(metadata.get("game_id") or path.stem.replace("snake_game_", ""))

    ticks = int(metadata.get("ticks") or 0)
    if not ticks and rounds:
        # Fallback: the first round is the starting position
        ticks = max(0, len(rounds) - 1)

    score = int(metadata.get("final_score") or 0)
    length = int(metadata.get("final_length") or 0)
    if not length and rounds:
        length = len(rounds[-1].get("snake") or [])

    started_at = parse_iso(metadata.get("start_time"))
    ended_at = parse_iso(metadata.get("end_time"))
    if started_at and ended_at:
        duration_seconds = max(0.0, (ended_at - started_at).total_seconds())
    else:
        duration_seconds = 0.0

    return GameMetrics(
        game_id=game_id,
        filename=path.name,
        variant=str(metadata.get("variant") or metadata.get("mode") or "unknown"),
        score=score,
        length=length,
        ticks=ticks,
        end_reason=str(metadata.get("end_reason") or "unknown"),
        duration_seconds=duration_seconds,
    )


def load_games(root: Path) -> List[GameMetrics]:
    games = []
    for p in sorted(root.glob("snake_game_*.json")):
        m = extract_metrics(p)
        if m is not None:
            games.append(m)
    return games


def count_end_reasons(games: List[GameMetrics]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for g in games:
        counts[g.end_reason] = counts.get(g.end_reason, 0) + 1
    return counts


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(
        description="Analyze local completed game replays",
    )
    parser.add_argument(
        "--root",
        type=str,
        default=str(resolve_completed_games_dir()),
        help="Directory containing snake_game_*.json (default: GRIDSNAKE_COMPLETED_GAMES_DIR under backend/)",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=10,
        help="How many top games to show per metric (default: 10)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
    )

    root = Path(args.root).resolve()
    if not root.exists() or not root.is_dir():
        raise SystemExit(f"Root directory does not exist or is not a directory: {root}")

    games = load_games(root)
    if not games:
        logger.info("No valid snake_game_*.json files found under %s", root)
        return

    logger.info("Analyzing %d local games under %s", len(games), root)

    top_n = max(1, args.top)

    def show(title: str, items: List[GameMetrics], key_desc: str):
        logger.info("")
        logger.info("=== %s (top %d by %s) ===", title, top_n, key_desc)
        for g in items[:top_n]:
            logger.info(
                "%s  file=%s  variant=%s  score=%d length=%d  ticks=%d  end=%s  duration=%.1fs",
                g.game_id,
                g.filename,
                g.variant,
                g.score,
                g.length,
                g.ticks,
                g.end_reason,
                g.duration_seconds,
            )

    show("Highest-scoring games", sorted(games, key=lambda g: g.score, reverse=True), "score")
    show("Longest games by ticks", sorted(games, key=lambda g: g.ticks, reverse=True), "ticks")

    logger.info("")
    logger.info("=== End reasons ===")
    for reason, count in sorted(count_end_reasons(games).items(), key=lambda kv: -kv[1]):
        logger.info("%-14s %d", reason, count)


if __name__ == "__main__":
    main()
