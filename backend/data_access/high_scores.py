"""
High-score tracking on top of a key-value store.
"""

import threading
from typing import Dict, Optional

from .repositories import ScoreRepository

HIGHSCORE_KEY = "highscore"


class MemoryKeyValueStore:
    """In-process stand-in for ScoreRepository, used without persistence."""

    def __init__(self, initial: Optional[Dict[str, int]] = None):
        self._values: Dict[str, int] = dict(initial or {})
        self._lock = threading.Lock()

    def get_int(self, key: str, default: int = 0) -> int:
        with self._lock:
            return self._values.get(key, default)

    def set_int(self, key: str, value: int) -> None:
        with self._lock:
            self._values[key] = int(value)

    def set_int_if_greater(self, key: str, value: int) -> bool:
        with self._lock:
            if key in self._values and self._values[key] >= value:
                return False
            self._values[key] = int(value)
            return True


class HighScoreTracker:
    """Reads and raises the single persisted high score."""

    def __init__(self, store=None, key: str = HIGHSCORE_KEY):
        self.store = store if store is not None else ScoreRepository()
        self.key = key

    def get(self) -> int:
        return self.store.get_int(self.key, 0)

    def record(self, score: int) -> bool:
        """Store `score` if it beats the high score. Returns True if it did."""
        if score <= 0:
            return False
        return self.store.set_int_if_greater(self.key, score)
