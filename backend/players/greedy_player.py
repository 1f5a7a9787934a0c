"""
Greedy player - steps toward the food by Manhattan distance.
"""

from typing import Optional

from domain.session import Session
from .base import Player


class GreedyPlayer(Player):
    """
    Picks the safe move whose cell is closest to the food.

    Ties go to the first move in UP, DOWN, LEFT, RIGHT order. With no safe
    move the direction is left unchanged.
    """

    name = "greedy"

    def get_move(self, session: Session) -> Optional[str]:
        candidates = self.safe_moves(session)
        if not candidates:
            return None
        if session.food is None:
            return candidates[0][0]

        fx, fy = session.food
        best_move = None
        min_dist = None
        for move, (nx, ny) in candidates:
            dist = abs(nx - fx) + abs(ny - fy)
            if min_dist is None or dist < min_dist:
                min_dist = dist
                best_move = move
        return best_move
