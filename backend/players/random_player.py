"""
Random player implementation - picks random safe moves.
"""

import random
from typing import Optional

from domain.session import Session
from .base import Player


class RandomPlayer(Player):
    """
    A random AI that picks a valid direction that avoids walls and self-collisions.
    """

    name = "random"

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_move(self, session: Session) -> Optional[str]:
        valid_moves = [move for move, _ in self.safe_moves(session)]

        # If no valid moves, keep going (we'll die anyway)
        if not valid_moves:
            return None

        return self.rng.choice(valid_moves)
