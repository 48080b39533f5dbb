from __future__ import annotations

from typing import Iterable, List, Sequence

from game_types import Cell

FREE_CHAR = "."
BLOCKED_CHAR = "#"

# Canonical neighbour order: +x, -x, +y, -y
NEIGHBOR_OFFSETS = ((1, 0), (-1, 0), (0, 1), (0, -1))


class Grid:
    """Square occupancy grid of free/blocked cells indexed as (x, y)."""

    def __init__(self, size: int) -> None:
        if size < 2:
            raise ValueError(f"Grid size must be at least 2, got {size}.")
        self.size = size
        self._blocked: List[List[bool]] = [
            [False for _ in range(size)] for _ in range(size)
        ]

    @classmethod
    def from_rows(cls, lines: Sequence[str]) -> "Grid":
        """Build a grid from an ASCII map ('#' blocked, anything else free).

        Raises:
            ValueError: If the map is empty or not square.
        """
        if not lines:
            raise ValueError("Grid map is empty.")
        size = len(lines)
        if any(len(line) != size for line in lines):
            raise ValueError(f"Grid map must be {size}x{size}.")
        grid = cls(size)
        for y, line in enumerate(lines):
            for x, ch in enumerate(line):
                if ch == BLOCKED_CHAR:
                    grid.set_blocked((x, y))
        return grid

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.size and 0 <= y < self.size

    def is_blocked(self, cell: Cell) -> bool:
        x, y = cell
        return self._blocked[y][x]

    def set_blocked(self, cell: Cell, blocked: bool = True) -> None:
        x, y = cell
        self._blocked[y][x] = blocked

    def clear(self) -> None:
        for row in self._blocked:
            for x in range(self.size):
                row[x] = False

    def neighbors(self, cell: Cell) -> Iterable[Cell]:
        """Yield in-bounds free 4-neighbours in canonical order."""
        x, y = cell
        for dx, dy in NEIGHBOR_OFFSETS:
            nxt = (x + dx, y + dy)
            if self.in_bounds(nxt) and not self.is_blocked(nxt):
                yield nxt

    def blocked_cells(self) -> List[Cell]:
        return [
            (x, y)
            for y in range(self.size)
            for x in range(self.size)
            if self._blocked[y][x]
        ]

    def free_cells(self) -> List[Cell]:
        return [
            (x, y)
            for y in range(self.size)
            for x in range(self.size)
            if not self._blocked[y][x]
        ]

    def blocked_count(self) -> int:
        return sum(row.count(True) for row in self._blocked)

    def copy(self) -> "Grid":
        other = Grid(self.size)
        other._blocked = [list(row) for row in self._blocked]
        return other

    def rows(self) -> List[str]:
        return [
            "".join(BLOCKED_CHAR if b else FREE_CHAR for b in row)
            for row in self._blocked
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.size == other.size and self._blocked == other._blocked

    def __repr__(self) -> str:
        return f"Grid(size={self.size}, blocked={self.blocked_count()})"
