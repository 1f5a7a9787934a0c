"""
Read-only views of a session: per-tick results and full snapshots.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class TickResult:
    """Outcome of one logic tick, consumed by render/audio/score adapters."""

    alive: bool
    ate_food: bool
    head: Tuple[int, int]
    score: int
    popped_tail: Optional[Tuple[int, int]] = None
    direction: Optional[str] = None
    death_reason: Optional[str] = None
    board_cleared: bool = False
    tick_number: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class GameSnapshot:
    """
    A snapshot of the game at a specific point in time.

    Attributes:
        state: MENU, PLAYING or GAMEOVER
        mode: HUMAN or BOT (None in the menu)
        snake_cells: list of (x, y), head first
        food: (x, y) of the food, or None
        score: current score
        high_score: best score known to the session
        direction: committed direction
        tick_number: number of ticks played
        width, height: board dimensions
        end_reason: why the session ended, if it has
    """

    def __init__(
        self,
        state: str,
        mode: Optional[str],
        snake_cells: List[Tuple[int, int]],
        food: Optional[Tuple[int, int]],
        score: int,
        width: int,
        height: int,
        direction: Optional[str] = None,
        tick_number: int = 0,
        high_score: int = 0,
        end_reason: Optional[str] = None,
        session_id: Optional[str] = None,
    ):
        self.state = state
        self.mode = mode
        self.snake_cells = snake_cells
        self.food = food
        self.score = score
        self.width = width
        self.height = height
        self.direction = direction
        self.tick_number = tick_number
        self.high_score = high_score
        self.end_reason = end_reason
        self.session_id = session_id

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        A = food
        H = snake head
        T = snake body/tail
        Row 0 is printed first; x-axis labels at the bottom.
        """
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        if self.food is not None:
            fx, fy = self.food
            board[fy][fx] = 'A'

        for pos_idx, (x, y) in enumerate(self.snake_cells):
            if not (0 <= x < self.width and 0 <= y < self.height):
                continue
            board[y][x] = 'H' if pos_idx == 0 else 'T'

        result = []
        for y in range(self.height):
            result.append(f"{y:2d} {' '.join(board[y])}")

        result.append("   " + " ".join(str(i % 10) for i in range(self.width)))

        return "\n".join(result)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "state": self.state,
            "mode": self.mode,
            "snake": [list(cell) for cell in self.snake_cells],
            "food": list(self.food) if self.food is not None else None,
            "score": self.score,
            "high_score": self.high_score,
            "direction": self.direction,
            "tick_number": self.tick_number,
            "width": self.width,
            "height": self.height,
            "end_reason": self.end_reason,
        }

    def __repr__(self):
        return (
            f"<GameSnapshot state={self.state} tick={self.tick_number}, "
            f"food={self.food}, length={len(self.snake_cells)}, score={self.score}>"
        )
