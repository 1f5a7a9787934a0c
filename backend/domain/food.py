"""
Food placement on cells not covered by the snake.
"""

import logging
import random
from typing import Iterable, Optional, Tuple

from .constants import MAX_SPAWN_ATTEMPTS
from .grid import GridWorld

logger = logging.getLogger(__name__)


class FoodSpawner:
    """
    Places a single food cell uniformly at random on a free cell.

    Random draws are retried at most `max_attempts` times; after that the
    free cells are enumerated and one is picked directly. A board with no
    free cell yields None instead of looping forever.
    """

    def __init__(self, grid: GridWorld, rng: Optional[random.Random] = None,
                 max_attempts: int = MAX_SPAWN_ATTEMPTS):
        self.grid = grid
        self.rng = rng or random.Random()
        self.max_attempts = max_attempts

    def spawn(self, occupied: Iterable[Tuple[int, int]]) -> Optional[Tuple[int, int]]:
        taken = set(occupied)

        for _ in range(self.max_attempts):
            x = self.rng.randint(0, self.grid.cols - 1)
            y = self.rng.randint(0, self.grid.rows - 1)
            if (x, y) not in taken:
                return (x, y)

        free = [cell for cell in self.grid.all_cells() if cell not in taken]
        if not free:
            logger.info("No free cell left on %r; board cleared.", self.grid)
            return None
        return self.rng.choice(free)
