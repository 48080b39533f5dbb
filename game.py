from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import pygame

from config_parsing import parse_display_config, parse_session_config
from game_types import Cell
from models import (
    Command,
    Direction,
    Move,
    NewGame,
    RequestHint,
    Reset,
    StartAutoPlay,
    StopAutoPlay,
)
from rendering import GameRenderer, status_text, window_size
from session import GameSession

logger = logging.getLogger(__name__)

KEY_COMMANDS: Dict[int, Command] = {
    pygame.K_UP: Move(Direction.UP),
    pygame.K_DOWN: Move(Direction.DOWN),
    pygame.K_LEFT: Move(Direction.LEFT),
    pygame.K_RIGHT: Move(Direction.RIGHT),
    pygame.K_a: StartAutoPlay(),
    pygame.K_s: StopAutoPlay(),
    pygame.K_h: RequestHint(),
    pygame.K_r: Reset(),
    pygame.K_n: NewGame(),
}


def command_for_key(key: int) -> Optional[Command]:
    """Map a pygame key code to a session command (None for unbound keys)."""
    return KEY_COMMANDS.get(key)


class Game:
    """pygame front end: window, event loop and rendering around a GameSession."""

    def __init__(self, cfg: Dict[str, Any]) -> None:
        self.cfg = cfg
        self.session_cfg = parse_session_config(self.cfg)
        self.display = parse_display_config(self.cfg)
        self.session = GameSession(self.session_cfg)

        self._init_pygame()
        self.renderer = GameRenderer(self.display, self.font)
        self._last_status = None

    # ----------------------------
    # Initialization
    # ----------------------------

    def _init_pygame(self) -> None:
        """Initialize pygame and create window + clock."""
        pygame.init()
        self.window_w, self.window_h = window_size(
            self.session_cfg.grid_size, self.display.cell_size
        )
        self.screen = pygame.display.set_mode((self.window_w, self.window_h))
        pygame.display.set_caption(self.display.title)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 26)

    # ----------------------------
    # Events / loop
    # ----------------------------

    def _handle_keydown(self, key: int) -> bool:
        """Handle KEYDOWN events.

        Returns:
            False if the game should exit, True otherwise.
        """
        if key == pygame.K_ESCAPE:
            return False
        command = command_for_key(key)
        if command is not None:
            self.session.dispatch(command)
        return True

    def _handle_events(self) -> bool:
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                return False
            if e.type == pygame.KEYDOWN and not self._handle_keydown(e.key):
                return False
        return True

    def _overlay_cells(self) -> List[Cell]:
        if self.session.auto_playing:
            return self.session.remaining_auto_path()
        return list(self.session.hint_path)

    def _log_status_change(self) -> None:
        status = self.session.status
        if status is not self._last_status:
            self._last_status = status
            text = status_text(status)
            if text:
                logger.info("%s", text)

    def run(self) -> None:
        """Run the main game loop."""
        running = True
        while running:
            dt_ms = self.clock.tick(self.display.fps)
            running = self._handle_events()
            self.session.tick(dt_ms)
            self._log_status_change()

            self.renderer.render(self.screen, self.session.snapshot(), self._overlay_cells())
            pygame.display.flip()

        pygame.quit()
