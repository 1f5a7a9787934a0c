"""
GridWorld - the fixed rectangular board.
"""

from typing import Iterable, List, Tuple

from .constants import MOVE_ORDER, step

Cell = Tuple[int, int]


class GridWorld:
    """
    Board geometry of `cols` x `rows` cells.

    Cells are (x, y) tuples. Internally every cell also has a flattened
    row-major index (y * cols + x) so searches can keep membership in a
    fixed-size bytearray instead of hashing tuples.
    """

    def __init__(self, cols: int, rows: int):
        if cols < 1 or rows < 1:
            raise ValueError(f"Grid must have at least one cell, got {cols}x{rows}.")
        self.cols = cols
        self.rows = rows

    @classmethod
    def from_pixels(cls, board_px: int, cell_px: int) -> "GridWorld":
        """Build a square grid from a board size and cell size in pixels."""
        if cell_px <= 0:
            raise ValueError(f"Cell size must be positive, got {cell_px}.")
        tiles = board_px // cell_px
        return cls(tiles, tiles)

    @property
    def size(self) -> int:
        return self.cols * self.rows

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.cols and 0 <= y < self.rows

    def neighbors4(self, cell: Cell) -> List[Cell]:
        """In-bounds neighbours in UP, DOWN, LEFT, RIGHT order."""
        result = []
        for direction in MOVE_ORDER:
            nxt = step(cell, direction)
            if self.in_bounds(nxt):
                result.append(nxt)
        return result

    def index(self, cell: Cell) -> int:
        return cell[1] * self.cols + cell[0]

    def cell_at(self, index: int) -> Cell:
        return (index % self.cols, index // self.cols)

    def occupancy(self, cells: Iterable[Cell]) -> bytearray:
        """Row-major occupancy array with 1 for every in-bounds cell given."""
        grid = bytearray(self.size)
        for cell in cells:
            if self.in_bounds(cell):
                grid[self.index(cell)] = 1
        return grid

    def all_cells(self) -> List[Cell]:
        return [(x, y) for y in range(self.rows) for x in range(self.cols)]

    def __repr__(self):
        return f"<GridWorld {self.cols}x{self.rows}>"
