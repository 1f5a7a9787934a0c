"""
Human player - replays buffered keyboard/touch input.
"""

from typing import Optional

from domain.session import Session
from .base import Player


class HumanPlayer(Player):
    """Consumes at most one queued direction per tick."""

    name = "human"

    def get_move(self, session: Session) -> Optional[str]:
        return session.input_queue.next_direction(session.direction)
