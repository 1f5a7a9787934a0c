"""
Session - everything one game owns.
"""

import time
import uuid
from typing import Any, Dict, List, Optional, Tuple

from .constants import GAMEOVER, PLAYING
from .food import FoodSpawner
from .game_state import GameSnapshot
from .grid import GridWorld
from .input_queue import InputQueue
from .snake import Snake


class Session:
    """
    State of a single game from start to game over.

    A session is only mutated by tick() and by direction submission, and is
    replaced wholesale on restart or when returning to the menu.
    """

    def __init__(
        self,
        grid: GridWorld,
        snake: Snake,
        direction: str,
        mode: str,
        player,
        spawner: FoodSpawner,
        input_queue: Optional[InputQueue] = None,
        high_scores=None,
        variant: Optional[str] = None,
        session_id: Optional[str] = None,
        record_history: bool = False,
    ):
        self.session_id = session_id or str(uuid.uuid4())
        self.grid = grid
        self.snake = snake
        self.direction = direction
        self.mode = mode
        self.variant = variant
        self.player = player
        self.spawner = spawner
        self.input_queue = input_queue or InputQueue()
        self.high_scores = high_scores

        self.state = PLAYING
        self.score = 0
        self.tick_number = 0
        self.end_reason: Optional[str] = None
        self.start_time = time.time()
        self.end_time: Optional[float] = None

        self.food: Optional[Tuple[int, int]] = spawner.spawn(snake.positions)

        self.record_history = record_history
        self.history: List[Dict[str, Any]] = []
        if record_history:
            self.record_round()

    @property
    def game_over(self) -> bool:
        return self.state == GAMEOVER

    def high_score(self) -> int:
        if self.high_scores is None:
            return self.score
        return max(self.high_scores.get(), self.score)

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            state=self.state,
            mode=self.mode,
            snake_cells=list(self.snake.positions),
            food=self.food,
            score=self.score,
            width=self.grid.cols,
            height=self.grid.rows,
            direction=self.direction,
            tick_number=self.tick_number,
            high_score=self.high_score(),
            end_reason=self.end_reason,
            session_id=self.session_id,
        )

    def record_round(self) -> None:
        self.history.append({
            "tick_number": self.tick_number,
            "snake": [list(cell) for cell in self.snake.positions],
            "food": list(self.food) if self.food is not None else None,
            "direction": self.direction,
            "score": self.score,
            "alive": self.snake.alive,
        })

    def __repr__(self):
        return (
            f"<Session {self.session_id[:8]} mode={self.mode} state={self.state} "
            f"tick={self.tick_number} score={self.score}>"
        )
