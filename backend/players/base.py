"""
Base player interface for the game engine.
"""

from typing import List, Optional, Tuple

from domain.constants import MOVE_ORDER, is_reversal, step
from domain.session import Session


class Player:
    """
    Base class/interface for controller logic.

    Each player is asked once per tick for the direction the snake should
    take next, given the current session.
    """

    name = "player"

    def get_move(self, session: Session) -> Optional[str]:
        """
        Return a move direction given the current session.

        Args:
            session: Current game session

        Returns:
            One of: "UP", "DOWN", "LEFT", "RIGHT", or None to keep the
            committed direction.
        """
        raise NotImplementedError

    @staticmethod
    def safe_moves(session: Session) -> List[Tuple[str, Tuple[int, int]]]:
        """
        Candidate (direction, cell) pairs from the head in fixed order.

        A candidate must be in bounds, not on any body segment (tail
        included) and not a reversal of the committed direction.
        """
        head = session.snake.head
        candidates = []
        for move in MOVE_ORDER:
            cell = step(head, move)
            if not session.grid.in_bounds(cell):
                continue
            if session.snake.occupies(cell):
                continue
            if is_reversal(session.direction, move):
                continue
            candidates.append((move, cell))
        return candidates

    def __repr__(self):
        return f"<{self.__class__.__name__}>"
