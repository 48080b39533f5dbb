#!/usr/bin/env python3
"""
level_generator.py

Random obstacle placement for maze levels.

Per level:
- Obstacle count grows by a fixed amount per level, capped at a fraction
  of the board (one third by default).
- Obstacles never cover the start or goal cell.
- The start must reach the goal (BFS check). A failed board is wiped and
  regenerated from scratch; after max_attempts failures GenerationExhausted
  is raised.

Run directly to print generated boards:

    python level_generator.py --level 4 --seed 7 --count 2
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import Optional

from game_types import Cell
from grid import Grid
from pathfinding import find_shortest_path

logger = logging.getLogger(__name__)

DEFAULT_OBSTACLES_PER_LEVEL = 8
DEFAULT_MAX_DENSITY_DIVISOR = 3
DEFAULT_MAX_ATTEMPTS = 1000


class GenerationExhausted(RuntimeError):
    """No solvable board was produced within the attempt ceiling."""

    def __init__(self, level: int, attempts: int) -> None:
        super().__init__(
            f"Failed to generate a reachable board for level {level} "
            f"after {attempts} attempts."
        )
        self.level = level
        self.attempts = attempts


def obstacle_count(
    level: int,
    size: int,
    per_level: int = DEFAULT_OBSTACLES_PER_LEVEL,
    density_divisor: int = DEFAULT_MAX_DENSITY_DIVISOR,
) -> int:
    """Number of obstacles for a level: min(level * per_level, ceil(size² / divisor))."""
    return min(max(1, level) * per_level, -(-(size * size) // density_divisor))


class ObstacleGenerator:
    def __init__(
        self,
        rng: random.Random,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        per_level: int = DEFAULT_OBSTACLES_PER_LEVEL,
        density_divisor: int = DEFAULT_MAX_DENSITY_DIVISOR,
    ) -> None:
        self.rng = rng
        self.max_attempts = max_attempts
        self.per_level = per_level
        self.density_divisor = density_divisor
        self.last_attempts = 0

    def target_count(self, grid: Grid, level: int, start: Cell, goal: Cell) -> int:
        count = obstacle_count(level, grid.size, self.per_level, self.density_divisor)
        candidates = grid.size * grid.size - len({start, goal})
        return min(count, candidates)

    def generate_obstacles(
        self, grid: Grid, level: int, start: Cell, goal: Cell
    ) -> Grid:
        """Fill grid with random obstacles so that goal stays reachable from start.

        The grid is cleared before every attempt and mutated in place.

        Returns:
            The same grid instance, now holding the obstacles.

        Raises:
            GenerationExhausted: If no reachable board was found in max_attempts.
        """
        target = self.target_count(grid, level, start, goal)
        attempts = 0
        while attempts < self.max_attempts:
            attempts += 1
            grid.clear()
            self._place(grid, target, start, goal)

            if find_shortest_path(grid, start, goal) or start == goal:
                self.last_attempts = attempts
                if attempts > 1:
                    logger.debug(
                        "level %s board solvable after %s attempts", level, attempts
                    )
                if attempts > 50:
                    logger.warning(
                        "level %s needed %s attempts to become solvable",
                        level,
                        attempts,
                    )
                return grid

        self.last_attempts = attempts
        grid.clear()
        raise GenerationExhausted(level, attempts)

    def _place(self, grid: Grid, target: int, start: Cell, goal: Cell) -> None:
        placed = 0
        while placed < target:
            cell = (self.rng.randrange(grid.size), self.rng.randrange(grid.size))
            if cell == start or cell == goal:
                continue
            if grid.is_blocked(cell):
                continue
            grid.set_blocked(cell)
            placed += 1

    def new_grid(self, size: int, level: int, start: Cell, goal: Cell) -> Grid:
        """Create and fill a fresh grid."""
        return self.generate_obstacles(Grid(size), level, start, goal)


# ----------------------------
# CLI
# ----------------------------


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Print randomly generated maze boards.")
    p.add_argument("--level", type=int, default=1, help="Level to generate (default: 1)")
    p.add_argument(
        "--count", type=int, default=1, help="How many consecutive levels to print."
    )
    p.add_argument("--size", type=int, default=10, help="Board side length (default: 10)")
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Optional RNG seed for reproducible generation.",
    )
    return p.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    if args.count <= 0:
        raise SystemExit("count must be > 0")
    if args.size < 2:
        raise SystemExit("size must be >= 2")
    logging.basicConfig(level=logging.INFO)
    generator = ObstacleGenerator(random.Random(args.seed))
    start, goal = (0, 0), (args.size - 1, args.size - 1)

    for level in range(max(1, args.level), max(1, args.level) + args.count):
        grid = generator.new_grid(args.size, level, start, goal)
        min_steps = len(find_shortest_path(grid, start, goal))
        print(
            f"level {level}: {grid.blocked_count()} obstacles | "
            f"shortest path {min_steps} | attempts {generator.last_attempts}"
        )
        for line in grid.rows():
            print(line)
        print()


if __name__ == "__main__":
    main()
