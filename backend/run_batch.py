import argparse
import concurrent.futures
import copy
import logging
import os
import statistics
from typing import Any, Dict, List

from config import GameConfig
from data_access import HighScoreTracker, MemoryKeyValueStore
from main import add_game_arguments, run_simulation
from players.variant_registry import AVAILABLE_VARIANTS

logger = logging.getLogger(__name__)


def summarize(results: List[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """Group simulation results per variant into score / survival statistics."""
    by_variant: Dict[str, List[Dict[str, Any]]] = {}
    for result in results:
        by_variant.setdefault(result["variant"], []).append(result)

    summary = {}
    for variant, games in sorted(by_variant.items()):
        scores = [g["score"] for g in games]
        ticks = [g["ticks"] for g in games]
        end_reasons: Dict[str, int] = {}
        for g in games:
            end_reasons[g["end_reason"]] = end_reasons.get(g["end_reason"], 0) + 1
        summary[variant] = {
            "games": len(games),
            "mean_score": statistics.mean(scores),
            "max_score": max(scores),
            "mean_ticks": statistics.mean(ticks),
            "end_reasons": end_reasons,
        }
    return summary


def run_batch_simulations(argv=None) -> Dict[str, Dict[str, Any]]:
    parser = argparse.ArgumentParser(
        description="Run batch Snake game simulations to compare bot variants."
    )
    # Batch configuration arguments
    parser.add_argument("--variants", type=str, nargs="+", default=AVAILABLE_VARIANTS,
                        choices=AVAILABLE_VARIANTS,
                        help="Bot variants to evaluate (default: all)")
    parser.add_argument("--num-simulations", type=int, required=True,
                        help="Number of games to run for EACH variant.")
    parser.add_argument("--max-workers", type=int, default=os.cpu_count(),
                        help="Maximum number of parallel simulation workers (threads).")
    # Game configuration arguments (mirroring main.py)
    add_game_arguments(parser)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=GameConfig.from_env().log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    # Games in a batch share one in-memory high score unless persisting
    high_scores = HighScoreTracker() if args.persist else HighScoreTracker(MemoryKeyValueStore())

    simulation_tasks: List[argparse.Namespace] = []
    for variant in args.variants:
        for i in range(args.num_simulations):
            params = copy.copy(args)
            params.variant = variant
            if args.seed is not None:
                params.seed = args.seed + i
            simulation_tasks.append(params)

    logger.info("Generated %d total simulation tasks.", len(simulation_tasks))

    results = []
    with concurrent.futures.ThreadPoolExecutor(max_workers=args.max_workers) as executor:
        futures = [
            executor.submit(run_simulation, params, high_scores)
            for params in simulation_tasks
        ]
        for future in concurrent.futures.as_completed(futures):
            try:
                result = future.result()
                results.append(result)
                logger.info(
                    "Completed game %s (%s): score=%d ticks=%d end=%s",
                    result["game_id"], result["variant"], result["score"],
                    result["ticks"], result["end_reason"],
                )
            except Exception as exc:
                logger.error("A simulation generated an exception: %s", exc)

    summary = summarize(results)
    logger.info("All batch simulations completed.")
    for variant, stats in summary.items():
        logger.info(
            "%-12s games=%d mean_score=%.2f max_score=%d mean_ticks=%.1f end_reasons=%s",
            variant, stats["games"], stats["mean_score"], stats["max_score"],
            stats["mean_ticks"], stats["end_reasons"],
        )
    return summary


if __name__ == "__main__":
    run_batch_simulations()
