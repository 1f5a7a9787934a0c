"""
Snake entity for the game engine.
"""

from collections import deque
from typing import List, Optional, Tuple

from .constants import step


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
        alive: whether this snake is still alive
        death_reason: e.g., 'wall', 'self'
        death_tick: The tick number when the snake died
    """

    def __init__(self, positions: List[Tuple[int, int]]):
        if not positions:
            raise ValueError("A snake needs at least one segment.")
        self.positions = deque(positions)
        self.alive = True
        self.death_reason: Optional[str] = None
        self.death_tick: Optional[int] = None

    @classmethod
    def spawn(cls, head: Tuple[int, int], length: int) -> "Snake":
        """Create a horizontal snake with its head at `head`, body trailing left."""
        hx, hy = head
        return cls([(hx - i, hy) for i in range(length)])

    @property
    def head(self) -> Tuple[int, int]:
        """Return the head position (first element)."""
        return self.positions[0]

    def tail(self) -> Tuple[int, int]:
        """Return the tail position (last element)."""
        return self.positions[-1]

    def occupies(self, cell: Tuple[int, int]) -> bool:
        return cell in self.positions

    def advance(self, direction: str, grew: bool) -> Tuple[Tuple[int, int], Optional[Tuple[int, int]]]:
        """
        Move one cell in `direction`.

        The new head is prepended; unless the snake grew this tick the last
        segment is popped. Collision testing is the caller's job and must
        happen before this is called.

        Returns:
            (new_head, popped_tail) where popped_tail is None when grown.
        """
        new_head = step(self.head, direction)
        self.positions.appendleft(new_head)
        popped = None if grew else self.positions.pop()
        return new_head, popped

    def __len__(self):
        return len(self.positions)

    def __repr__(self):
        return f"<Snake len={len(self.positions)} head={self.head} alive={self.alive}>"
