"""
Player implementations for the grid snake engine.

This module contains the controller abstraction and the strategies
(human input and bots) that decide the snake's direction each tick.
"""

from .base import Player
from .human_player import HumanPlayer
from .greedy_player import GreedyPlayer
from .pathfinding_player import PathfindingPlayer
from .random_player import RandomPlayer
from .variant_registry import (
    get_player_class,
    create_player,
    list_variants,
    AVAILABLE_VARIANTS,
    DEFAULT_VARIANT,
)

__all__ = [
    'Player',
    'HumanPlayer',
    'GreedyPlayer',
    'PathfindingPlayer',
    'RandomPlayer',
    'get_player_class',
    'create_player',
    'list_variants',
    'AVAILABLE_VARIANTS',
    'DEFAULT_VARIANT',
]
