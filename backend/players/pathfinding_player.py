"""
Pathfinding player - BFS to the food with a flood-fill fallback.
"""

import logging
from typing import Optional

from domain.constants import direction_between
from domain.search import find_path, reachable_count
from domain.session import Session
from .base import Player

logger = logging.getLogger(__name__)


class PathfindingPlayer(Player):
    """
    Per tick:
      1) BFS from the head to the food (tail cell passable)
      2) If a path exists, step toward its first cell
      3) Otherwise rank the safe moves by how many cells stay reachable
         from them (whole body blocked) and take the largest, first one
         on ties
      4) With no safe move at all, leave the direction unchanged
    """

    name = "pathfinding"

    def get_move(self, session: Session) -> Optional[str]:
        head = session.snake.head
        body = list(session.snake.positions)

        if session.food is not None:
            path = find_path(session.grid, head, session.food, body)
            if path:
                return direction_between(head, path[0])

        candidates = self.safe_moves(session)
        if not candidates:
            logger.debug("Tick %d: boxed in at %s", session.tick_number, head)
            return None

        best_move = None
        best_space = -1
        for move, cell in candidates:
            space = reachable_count(session.grid, cell, body)
            if space > best_space:
                best_space = space
                best_move = move

        logger.debug(
            "Tick %d: no path to food, fallback %s with %d reachable cells",
            session.tick_number, best_move, best_space,
        )
        return best_move

    # Alias matching the controller vocabulary used by adapters
    decide = get_move
