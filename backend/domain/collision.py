"""
Collision checks, always evaluated against the pre-move body.
"""

from typing import Iterable, Optional, Tuple

from .constants import SELF, WALL
from .grid import GridWorld


def is_wall_collision(grid: GridWorld, cell: Tuple[int, int]) -> bool:
    return not grid.in_bounds(cell)


def is_self_collision(cell: Tuple[int, int], body: Iterable[Tuple[int, int]]) -> bool:
    # The tail counts too: the body has not moved yet.
    return any(cell == segment for segment in body)


def check_move(grid: GridWorld, cell: Tuple[int, int], body: Iterable[Tuple[int, int]]) -> Optional[str]:
    """Return the death reason for moving the head into `cell`, or None if safe."""
    if is_wall_collision(grid, cell):
        return WALL
    if is_self_collision(cell, body):
        return SELF
    return None
