import argparse
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from config import GameConfig
from data_access import GameRepository, HighScoreTracker, MemoryKeyValueStore, save_replay
from domain.constants import BOT, PLAYING
from game_engine import SnakeGame, end_game
from players.variant_registry import AVAILABLE_VARIANTS
from services.game_loop import FixedStepLoop

load_dotenv()

logger = logging.getLogger(__name__)

MAX_TICKS_REASON = "max_ticks"


def _utc(ts: Optional[float]) -> Optional[datetime]:
    if ts is None:
        return None
    return datetime.fromtimestamp(ts, tz=timezone.utc)


def build_config(game_params: argparse.Namespace) -> GameConfig:
    """Overlay command-line settings on the environment configuration."""
    return GameConfig.from_env(
        cols=getattr(game_params, "width", None),
        rows=getattr(game_params, "height", None),
        initial_length=getattr(game_params, "initial_length", None),
        seed=getattr(game_params, "seed", None),
        bot_variant=getattr(game_params, "variant", None),
    )


def persist_game(session, replay_path: Optional[str], game_repo: GameRepository) -> None:
    """
    Record a finished session in the games table.

    Failures are logged and swallowed so a finished game is never lost to
    a storage problem.
    """
    try:
        game_repo.insert_game(
            game_id=session.session_id,
            mode=session.mode,
            variant=session.variant,
            score=session.score,
            ticks=session.tick_number,
            end_reason=session.end_reason,
            board_width=session.grid.cols,
            board_height=session.grid.rows,
            start_time=_utc(session.start_time),
            end_time=_utc(session.end_time),
            replay_path=replay_path,
        )
        logger.info("Persisted game %s to database", session.session_id)
    except Exception as e:
        logger.warning("Error persisting game %s to database: %s", session.session_id, e)


def run_simulation(
    game_params: argparse.Namespace,
    high_scores: Optional[HighScoreTracker] = None,
    game_repo: Optional[GameRepository] = None,
) -> Dict[str, Any]:
    """
    Runs a single headless bot game to completion.

    Args:
        game_params: An object (like argparse.Namespace) with the game
                     settings (variant, width, height, initial_length, seed,
                     max_ticks, realtime, show_board, persist, replay_dir).
        high_scores: Tracker to record the final score against.
        game_repo: Repository for the finished-games table.

    Returns:
        A dictionary summarizing the game (game_id, score, ticks, end_reason, ...).
    """
    config = build_config(game_params)
    persist = getattr(game_params, "persist", True)
    show_board = getattr(game_params, "show_board", False)
    max_ticks = getattr(game_params, "max_ticks", None)

    if high_scores is None:
        high_scores = HighScoreTracker() if persist else HighScoreTracker(MemoryKeyValueStore())

    game = SnakeGame(config, high_scores=high_scores, record_history=persist)
    session = game.start(BOT, config.bot_variant)

    def print_board(_result=None):
        print("\n" + game.snapshot().print_board() + "\n")

    if show_board:
        print_board()
        game.add_listener(print_board)

    if getattr(game_params, "realtime", False):
        loop = FixedStepLoop(game, tick_interval=config.tick_interval, max_ticks_per_frame=1)
        loop.run(until=lambda: max_ticks is not None and session.tick_number >= max_ticks)
    else:
        while game.state == PLAYING:
            if max_ticks is not None and session.tick_number >= max_ticks:
                break
            game.tick()

    if game.state == PLAYING:
        end_game(session, MAX_TICKS_REASON)

    replay_path = None
    if persist:
        try:
            replay_path = str(save_replay(session, getattr(game_params, "replay_dir", None)))
            logger.info("Saved replay to %s", replay_path)
        except OSError as e:
            logger.warning("Could not save replay for %s: %s", session.session_id, e)
        persist_game(session, replay_path, game_repo or GameRepository())

    return {
        "game_id": session.session_id,
        "variant": session.variant,
        "score": session.score,
        "ticks": session.tick_number,
        "end_reason": session.end_reason,
        "length": len(session.snake),
        "high_score": high_scores.get(),
        "replay_path": replay_path,
    }


def add_game_arguments(parser: argparse.ArgumentParser) -> None:
    """Game configuration arguments shared with run_batch.py."""
    parser.add_argument("--width", type=int, default=None,
                        help="Board width in cells (default: from GRIDSNAKE_BOARD_PX / GRIDSNAKE_CELL_PX)")
    parser.add_argument("--height", type=int, default=None,
                        help="Board height in cells")
    parser.add_argument("--initial-length", type=int, default=None,
                        help="Starting snake length (default: 3)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for reproducible games")
    parser.add_argument("--max-ticks", type=int, default=None,
                        help="Stop the game after this many ticks")
    parser.add_argument("--no-persist", dest="persist", action="store_false",
                        help="Do not write the replay, game record or high score to disk")


# -------------------------------
# Main Entry Point
# -------------------------------
def main():
    parser = argparse.ArgumentParser(
        description="Run a headless Snake game driven by a bot player."
    )
    parser.add_argument("--variant", type=str, default=None, choices=AVAILABLE_VARIANTS,
                        help="Bot variant (default: GRIDSNAKE_BOT_VARIANT or 'pathfinding')")
    parser.add_argument("--realtime", action="store_true",
                        help="Play at the configured tick rate instead of as fast as possible")
    parser.add_argument("--show-board", action="store_true",
                        help="Print the board after every tick")
    parser.add_argument("--replay-dir", type=str, default=None,
                        help="Directory for replay files (default: GRIDSNAKE_COMPLETED_GAMES_DIR)")
    add_game_arguments(parser)

    args = parser.parse_args()

    logging.basicConfig(
        level=GameConfig.from_env().log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    result = run_simulation(args)

    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
