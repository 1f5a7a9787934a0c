"""
Data access layer for the grid snake game.

This module provides the persisted high score, the finished-games table
and local JSON replays.
"""

from .high_scores import HighScoreTracker, MemoryKeyValueStore, HIGHSCORE_KEY
from .replay_files import (
    build_replay, save_replay, load_replay, get_completed_games_dir, resolve_completed_games_dir,
)
from .repositories import GameRepository, ScoreRepository

__all__ = [
    'HighScoreTracker',
    'MemoryKeyValueStore',
    'HIGHSCORE_KEY',
    'build_replay',
    'save_replay',
    'load_replay',
    'get_completed_games_dir',
    'resolve_completed_games_dir',
    'GameRepository',
    'ScoreRepository',
]
