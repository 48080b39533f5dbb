from __future__ import annotations

from collections import deque
from typing import Dict, Optional, Sequence

from game_types import Cell, Path
from grid import Grid
from utils import is_adjacent


def find_shortest_path(grid: Grid, start: Cell, end: Cell) -> Path:
    """Breadth-first search for the shortest obstacle-free 4-connected path.

    Neighbours are expanded in the order +x, -x, +y, -y, so the result is
    deterministic for a given grid and endpoints.

    Args:
        grid: Occupancy grid.
        start: Source cell.
        end: Target cell.

    Returns:
        Cells from (excluding) start to (including) end. Empty if end is
        unreachable, either endpoint is off the grid or blocked, or
        start == end.
    """
    if start == end:
        return []
    for cell in (start, end):
        if not grid.in_bounds(cell) or grid.is_blocked(cell):
            return []

    came_from: Dict[Cell, Optional[Cell]] = {start: None}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        if current == end:
            return _reconstruct(came_from, end)
        for nxt in grid.neighbors(current):
            # visited is marked on enqueue so each cell enters the queue once
            if nxt in came_from:
                continue
            came_from[nxt] = current
            queue.append(nxt)
    return []


def _reconstruct(came_from: Dict[Cell, Optional[Cell]], end: Cell) -> Path:
    path: Path = []
    cur: Optional[Cell] = end
    while cur is not None and came_from[cur] is not None:
        path.append(cur)
        cur = came_from[cur]
    path.reverse()
    return path


def is_reachable(grid: Grid, start: Cell, end: Cell) -> bool:
    """True if end can be reached from start (trivially when they coincide)."""
    return start == end or len(find_shortest_path(grid, start, end)) > 0


def is_valid_path(grid: Grid, start: Cell, path: Sequence[Cell]) -> bool:
    """Check that path is a chain of in-bounds, free, orthogonal steps from start."""
    prev = start
    for cell in path:
        if not grid.in_bounds(cell) or grid.is_blocked(cell):
            return False
        if not is_adjacent(prev, cell):
            return False
        prev = cell
    return True
