import pytest

from grid import Grid


class FixedLayoutGenerator:
    """Stands in for ObstacleGenerator and always returns the same board."""

    def __init__(self, rows):
        self.rows = list(rows)
        self.calls = []

    def generate_obstacles(self, grid, level, start, goal):
        self.calls.append(level)
        return Grid.from_rows(self.rows)


@pytest.fixture
def open_rows():
    return ["." * 10 for _ in range(10)]


@pytest.fixture
def layout_generator():
    return FixedLayoutGenerator
