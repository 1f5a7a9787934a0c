"""
Grid searches used by the bots.

find_path is a plain BFS from the head to a target. The snake's current
tail is treated as passable on the assumption that it will have moved by
the time the head gets there. That is an approximation: if the snake eats
on the step where it would have vacated the tail, the path can turn out
to be invalid halfway through.

reachable_count is a flood fill that blocks every body cell, tail
included, and measures how much room a candidate move leaves. It does not
model the body vacating cells over later steps.
"""

from collections import deque
from typing import List, Sequence, Tuple

from .grid import GridWorld

Cell = Tuple[int, int]


def find_path(grid: GridWorld, start: Cell, target: Cell, body: Sequence[Cell]) -> List[Cell]:
    """
    Shortest 4-directional path from `start` to `target`, excluding `start`.

    Neighbours are explored in the grid's fixed order, so among equally
    short paths the result is deterministic. Returns [] when no path exists
    or when start == target.
    """
    if start == target or not grid.in_bounds(start) or not grid.in_bounds(target):
        return []

    blocked = grid.occupancy(body)
    if body:
        blocked[grid.index(body[-1])] = 0

    start_idx = grid.index(start)
    target_idx = grid.index(target)
    parent = [-1] * grid.size
    visited = bytearray(grid.size)
    visited[start_idx] = 1

    queue = deque([start])
    found = False
    while queue:
        cell = queue.popleft()
        cell_idx = grid.index(cell)
        if cell_idx == target_idx:
            found = True
            break
        for nxt in grid.neighbors4(cell):
            nxt_idx = grid.index(nxt)
            if visited[nxt_idx] or blocked[nxt_idx]:
                continue
            visited[nxt_idx] = 1
            parent[nxt_idx] = cell_idx
            queue.append(nxt)

    if not found:
        return []

    path = []
    idx = target_idx
    while idx != start_idx:
        path.append(grid.cell_at(idx))
        idx = parent[idx]
    path.reverse()
    return path


def reachable_count(grid: GridWorld, start: Cell, body: Sequence[Cell]) -> int:
    """Number of cells reachable from `start`, counting `start` itself."""
    if not grid.in_bounds(start):
        return 0

    blocked = grid.occupancy(body)
    start_idx = grid.index(start)
    if blocked[start_idx]:
        return 0

    visited = bytearray(grid.size)
    visited[start_idx] = 1
    queue = deque([start])
    count = 0
    while queue:
        cell = queue.popleft()
        count += 1
        for nxt in grid.neighbors4(cell):
            nxt_idx = grid.index(nxt)
            if visited[nxt_idx] or blocked[nxt_idx]:
                continue
            visited[nxt_idx] = 1
            queue.append(nxt)
    return count
