"""
Registry for bot player variants.

Maps variant keys (e.g., 'pathfinding', 'greedy') to player classes. To add
a new bot, create a module with a Player subclass, add a loader here and
an entry to PLAYER_VARIANT_LOADERS.
"""

import random
from typing import Callable, Dict, Optional, Type

from domain.constants import BOT, HUMAN
from .base import Player

DEFAULT_VARIANT = "pathfinding"


# Lazy imports keep the registry importable from the player modules themselves
def _get_pathfinding_player() -> Type[Player]:
    from .pathfinding_player import PathfindingPlayer
    return PathfindingPlayer


def _get_greedy_player() -> Type[Player]:
    from .greedy_player import GreedyPlayer
    return GreedyPlayer


def _get_random_player() -> Type[Player]:
    from .random_player import RandomPlayer
    return RandomPlayer


# Registry: maps variant key -> callable that returns the player class
PLAYER_VARIANT_LOADERS: Dict[str, Callable[[], Type[Player]]] = {
    "pathfinding": _get_pathfinding_player,
    "greedy": _get_greedy_player,
    "random": _get_random_player,
}

# Canonical list of available variant keys (for API exposure)
AVAILABLE_VARIANTS = list(PLAYER_VARIANT_LOADERS.keys())


def get_player_class(variant_key: Optional[str] = None) -> Type[Player]:
    """
    Get the player class for a given bot variant key.

    Args:
        variant_key: One of 'pathfinding', 'greedy', 'random'. If None or
            empty, returns the default variant.

    Returns:
        The player class (subclass of Player).

    Raises:
        ValueError: If variant_key is not recognized.
    """
    if not variant_key or variant_key.strip() == "":
        variant_key = DEFAULT_VARIANT

    variant_key = variant_key.strip().lower()

    if variant_key not in PLAYER_VARIANT_LOADERS:
        available = ", ".join(AVAILABLE_VARIANTS)
        raise ValueError(
            f"Unknown player variant '{variant_key}'. Available variants: {available}"
        )

    return PLAYER_VARIANT_LOADERS[variant_key]()


def create_player(mode: str, variant_key: Optional[str] = None,
                  rng: Optional[random.Random] = None) -> Player:
    """
    Build the controller for a session.

    Raises:
        ValueError: If the mode or bot variant is not recognized.
    """
    if mode == HUMAN:
        from .human_player import HumanPlayer
        return HumanPlayer()
    if mode != BOT:
        raise ValueError(f"Unknown mode '{mode}'. Expected '{HUMAN}' or '{BOT}'.")

    player_class = get_player_class(variant_key)
    if player_class.name == "random":
        return player_class(rng=rng)
    return player_class()


def list_variants() -> list:
    """
    Return metadata about all available bot variants.

    Returns:
        List of dicts with 'key' and 'description' for each variant.
    """
    return [
        {"key": "pathfinding", "description": "BFS to the food, flood-fill space ranking when no path exists"},
        {"key": "greedy", "description": "Closest safe move to the food by Manhattan distance"},
        {"key": "random", "description": "Uniformly random safe move"},
    ]
