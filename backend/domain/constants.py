"""
Game constants for the grid snake engine.
"""

from typing import Dict, Tuple

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Fixed exploration order, also the tie-break order for every search
MOVE_ORDER = (UP, DOWN, LEFT, RIGHT)

# Screen coordinates: (0, 0) is the top-left cell
DIRECTION_VECTORS: Dict[str, Tuple[int, int]] = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

OPPOSITES: Dict[str, str] = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# Game states
MENU = "MENU"
PLAYING = "PLAYING"
GAMEOVER = "GAMEOVER"

# Controller kinds
HUMAN = "HUMAN"
BOT = "BOT"
VALID_MODES = {HUMAN, BOT}

# Death / end reasons
WALL = "wall"
SELF = "self"
BOARD_CLEARED = "board_cleared"

# Game settings
BOARD_PX = 400
CELL_PX = 20
TICK_MS = 100
INITIAL_LENGTH = 3
DEFAULT_DIRECTION = RIGHT
MAX_SPAWN_ATTEMPTS = 100
MAX_PENDING_INPUTS = 3


def is_reversal(current: str, new: str) -> bool:
    """True when `new` points straight back along `current`."""
    return OPPOSITES.get(current) == new


def step(cell: Tuple[int, int], direction: str) -> Tuple[int, int]:
    """Return the cell one unit move away from `cell`."""
    dx, dy = DIRECTION_VECTORS[direction]
    return (cell[0] + dx, cell[1] + dy)


def direction_between(src: Tuple[int, int], dst: Tuple[int, int]) -> str:
    """
    Return the direction of the unit move from `src` to an adjacent `dst`.

    Raises:
        ValueError: If the two cells are not 4-neighbours.
    """
    delta = (dst[0] - src[0], dst[1] - src[1])
    for direction, vector in DIRECTION_VECTORS.items():
        if vector == delta:
            return direction
    raise ValueError(f"Cells {src} and {dst} are not adjacent.")
