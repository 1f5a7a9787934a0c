"""
Domain entities for the grid snake game engine.

This module contains the core game entities that are independent of
infrastructure concerns (database, HTTP, terminal output, etc.).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, MOVE_ORDER,
    MENU, PLAYING, GAMEOVER, HUMAN, BOT,
)
from .grid import GridWorld
from .snake import Snake
from .food import FoodSpawner
from .input_queue import InputQueue
from .search import find_path, reachable_count
from .game_state import GameSnapshot, TickResult
from .session import Session

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'MOVE_ORDER',
    'MENU', 'PLAYING', 'GAMEOVER', 'HUMAN', 'BOT',
    'GridWorld',
    'Snake',
    'FoodSpawner',
    'InputQueue',
    'find_path', 'reachable_count',
    'GameSnapshot', 'TickResult',
    'Session',
]
