from __future__ import annotations

from typing import Dict, List, Optional, Sequence

import pygame

from game_types import Cell, Color
from models import DisplayConfig, SessionPhase, SessionSnapshot, StatusEvent, StatusKind

STATUS_BAR_HEIGHT = 72

# 8x8 pixel sprites; 0 is transparent.
MOUSE_SPRITE = [
    [0, 1, 1, 1, 1, 1, 0, 0],
    [1, 1, 1, 1, 1, 1, 1, 0],
    [1, 2, 1, 1, 1, 2, 1, 0],
    [1, 1, 3, 1, 1, 3, 1, 0],
    [1, 1, 1, 1, 1, 1, 1, 0],
    [1, 1, 1, 4, 4, 1, 1, 0],
    [0, 1, 1, 1, 1, 1, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0],
]
MOUSE_COLORS: Dict[int, Color] = {
    1: (38, 139, 210),  # body
    2: (42, 161, 152),  # ears
    3: (7, 54, 66),  # eyes
    4: (220, 50, 47),  # nose
}

CHEESE_SPRITE = [
    [2, 2, 2, 2, 2, 2, 2, 2],
    [2, 1, 2, 2, 2, 1, 2, 2],
    [2, 2, 2, 1, 2, 2, 2, 2],
    [2, 2, 2, 2, 2, 2, 2, 2],
    [2, 2, 2, 2, 1, 2, 2, 2],
    [2, 1, 2, 2, 2, 2, 2, 2],
    [2, 2, 2, 2, 2, 2, 1, 2],
    [2, 2, 2, 2, 2, 2, 2, 2],
]
CHEESE_COLORS: Dict[int, Color] = {
    1: (253, 246, 227),  # holes
    2: (181, 137, 0),
}


def status_text(event: Optional[StatusEvent]) -> str:
    """Turn a classified status event into a line of UI text."""
    if event is None:
        return ""
    kind = event.kind
    if kind is StatusKind.LEVEL_STARTED:
        return f"Level {event.level} - go get the cheese!"
    if kind is StatusKind.UNREACHABLE:
        return "No path to the cheese!"
    if kind is StatusKind.HINT_SHOWN:
        return "Hint: the highlighted cells are the shortest route."
    if kind is StatusKind.AUTO_PLAYING:
        return "Auto-solving..."
    if kind is StatusKind.NO_PATH_FOR_AUTO:
        return "No path, auto-solve is not possible."
    if kind is StatusKind.VICTORY:
        if event.is_optimal:
            return (
                f"Level {event.level} cleared in {event.steps} steps "
                f"- the shortest possible route!"
            )
        return (
            f"Level {event.level} cleared in {event.steps} steps "
            f"(shortest route: {event.min_steps})."
        )
    return ""


def window_size(grid_size: int, cell_size: int) -> tuple[int, int]:
    side = grid_size * cell_size
    return side, side + STATUS_BAR_HEIGHT


def cell_rect(cell: Cell, cell_size: int) -> pygame.Rect:
    x, y = cell
    return pygame.Rect(x * cell_size, y * cell_size, cell_size, cell_size)


def draw_sprite(
    surf: pygame.Surface,
    sprite: Sequence[Sequence[int]],
    palette: Dict[int, Color],
    rect: pygame.Rect,
) -> None:
    """Draw a pixel sprite scaled to fill rect."""
    rows = len(sprite)
    pixel = max(1, rect.w // rows)
    for row_idx, row in enumerate(sprite):
        for col_idx, color_idx in enumerate(row):
            color = palette.get(color_idx)
            if color is None:
                continue
            surf.fill(
                color,
                pygame.Rect(
                    rect.x + col_idx * pixel, rect.y + row_idx * pixel, pixel, pixel
                ),
            )


class GameRenderer:
    """Draws a SessionSnapshot: board, hint overlay, sprites and status bar."""

    def __init__(self, display: DisplayConfig, font: pygame.font.Font) -> None:
        self.display = display
        self.font = font

    def render(self, surf: pygame.Surface, snap: SessionSnapshot, overlay: List[Cell]) -> None:
        """Render a full frame.

        Args:
            surf: Target surface.
            snap: Session state to draw.
            overlay: Cells to highlight (hint or remaining auto-play route).
        """
        surf.fill(self.display.bg)
        self._draw_board(surf, snap)
        self._draw_overlay(surf, overlay)
        cs = self.display.cell_size
        draw_sprite(surf, CHEESE_SPRITE, CHEESE_COLORS, cell_rect(snap.goal, cs))
        draw_sprite(surf, MOUSE_SPRITE, MOUSE_COLORS, cell_rect(snap.player, cs))
        self._draw_status_bar(surf, snap)

    def _draw_board(self, surf: pygame.Surface, snap: SessionSnapshot) -> None:
        cs = self.display.cell_size
        for y, row in enumerate(snap.rows):
            for x, ch in enumerate(row):
                r = cell_rect((x, y), cs)
                floor = self.display.floor_light if (x + y) % 2 == 0 else self.display.floor_dark
                surf.fill(floor, r)
                if ch == "#":
                    surf.fill(self.display.obstacle, r)

    def _draw_overlay(self, surf: pygame.Surface, cells: List[Cell]) -> None:
        if not cells:
            return
        cs = self.display.cell_size
        tint = pygame.Surface((cs, cs), pygame.SRCALPHA)
        tint.fill((*self.display.hint, 102))
        for cell in cells:
            surf.blit(tint, cell_rect(cell, cs).topleft)

    def _draw_status_bar(self, surf: pygame.Surface, snap: SessionSnapshot) -> None:
        top = snap.grid_size * self.display.cell_size
        color = self.display.text
        steps = self.font.render(f"Level {snap.level}   Steps: {snap.steps}", True, color)
        surf.blit(steps, (10, top + 8))

        message = status_text(snap.status)
        if snap.phase is SessionPhase.PLAYING and not snap.auto_playing and not message:
            message = "Arrows move, H hint, A auto, R reset"
        text = self.font.render(message, True, color)
        surf.blit(text, (10, top + 8 + steps.get_height() + 6))
