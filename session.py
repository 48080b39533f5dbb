from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from game_types import Cell, Path
from grid import Grid
from level_generator import ObstacleGenerator
from models import (
    Command,
    Direction,
    Move,
    MoveOutcome,
    NewGame,
    RequestHint,
    Reset,
    SessionConfig,
    SessionPhase,
    SessionSnapshot,
    StartAutoPlay,
    StatusEvent,
    StatusKind,
    StopAutoPlay,
)
from pathfinding import find_shortest_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AutoPlayState:
    """Progress along a precomputed path; position is the last cell reached."""

    path: Tuple[Cell, ...]
    position: Cell
    index: int = 0

    @property
    def finished(self) -> bool:
        return self.index >= len(self.path)


def advance_auto_play(state: AutoPlayState) -> AutoPlayState:
    """Move one cell along the path. A finished state is returned unchanged."""
    if state.finished:
        return state
    return replace(state, position=state.path[state.index], index=state.index + 1)


class GameSession:
    """Owns one maze run: level, board, player, step counter, hint and auto-play.

    Time only passes through tick(dt_ms), which drives auto-play steps and the
    delayed level advance after a victory.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        rng: Optional[random.Random] = None,
        generator: Optional[ObstacleGenerator] = None,
    ) -> None:
        self.config = config or SessionConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.generator = generator or ObstacleGenerator(
            self.rng,
            max_attempts=self.config.max_generation_attempts,
            per_level=self.config.obstacles_per_level,
            density_divisor=self.config.max_density_divisor,
        )

        size = self.config.grid_size
        self.start: Cell = (0, 0)
        self.goal: Cell = (size - 1, size - 1)
        self.level = self.config.start_level
        self.grid = Grid(size)
        self.player: Cell = self.start
        self.steps = 0
        self.hint_path: Path = []
        self.phase = SessionPhase.PLAYING
        self.status: Optional[StatusEvent] = None
        self.auto: Optional[AutoPlayState] = None

        self._auto_elapsed_ms = 0
        self._advance_remaining_ms: Optional[int] = None
        self._victory_level: Optional[int] = None

        self._start_level()

    @property
    def auto_playing(self) -> bool:
        return self.auto is not None

    @property
    def input_frozen(self) -> bool:
        """Manual input is ignored while auto-playing or showing a victory."""
        return self.auto_playing or self.phase is SessionPhase.VICTORY

    # ----------------------------
    # Level lifecycle
    # ----------------------------

    def _start_level(self) -> None:
        """Generate a board for the current level and reset per-level state."""
        grid = Grid(self.config.grid_size)
        self.grid = self.generator.generate_obstacles(
            grid, self.level, self.start, self.goal
        )
        self.player = self.start
        self.steps = 0
        self.hint_path = []
        self.auto = None
        self.phase = SessionPhase.PLAYING
        self._auto_elapsed_ms = 0
        self._advance_remaining_ms = None
        self._victory_level = None
        self.status = StatusEvent.level_started(self.level)
        logger.info(
            "level %s started with %s obstacles", self.level, self.grid.blocked_count()
        )

    def reset_level(self) -> bool:
        """Regenerate the board for the current level.

        Cancels a running auto-play. Ignored during a victory.
        """
        if self.phase is SessionPhase.VICTORY:
            logger.debug("reset ignored during victory window")
            return False
        self._start_level()
        return True

    def advance_level(self) -> None:
        self.level += 1
        self._start_level()

    def new_game(self) -> None:
        """Start over from the configured first level."""
        self.level = self.config.start_level
        self._start_level()

    # ----------------------------
    # Moves
    # ----------------------------

    def move(self, direction: Direction) -> MoveOutcome:
        dx, dy = direction.delta
        return self.move_player(dx, dy)

    def move_player(self, dx: int, dy: int) -> MoveOutcome:
        """Apply a manual move by (dx, dy).

        Out-of-bounds and blocked targets are silently rejected; only a move to
        a different cell counts as a step.
        """
        if self.input_frozen:
            return MoveOutcome.IGNORED

        target = (self.player[0] + dx, self.player[1] + dy)
        if not self.grid.in_bounds(target):
            return MoveOutcome.OUT_OF_BOUNDS
        if self.grid.is_blocked(target):
            return MoveOutcome.BLOCKED
        if target == self.player:
            return MoveOutcome.STAYED

        self.player = target
        self.steps += 1
        self.hint_path = []
        self.check_victory()
        return MoveOutcome.MOVED

    # ----------------------------
    # Hint / auto-play
    # ----------------------------

    def request_hint(self) -> Path:
        """Store and return the shortest path from the player to the goal.

        Returns an empty list when the goal is unreachable or input is frozen.
        """
        if self.input_frozen:
            logger.debug("hint ignored (auto=%s, phase=%s)", self.auto_playing, self.phase)
            return []

        path = find_shortest_path(self.grid, self.player, self.goal)
        if not path:
            self.status = StatusEvent(StatusKind.UNREACHABLE)
            logger.info("hint requested but goal is unreachable from %s", self.player)
            return []

        self.hint_path = path
        self.status = StatusEvent(StatusKind.HINT_SHOWN)
        return list(path)

    def start_auto_play(self) -> bool:
        if self.input_frozen:
            return False

        path = find_shortest_path(self.grid, self.player, self.goal)
        if not path:
            self.status = StatusEvent(StatusKind.NO_PATH_FOR_AUTO)
            logger.info("auto-play refused: no path from %s", self.player)
            return False

        self.auto = AutoPlayState(path=tuple(path), position=self.player)
        self._auto_elapsed_ms = 0
        self.status = StatusEvent(StatusKind.AUTO_PLAYING)
        logger.debug("auto-play started, %s cells to go", len(path))
        return True

    def stop_auto_play(self) -> bool:
        if self.auto is None:
            return False
        self.auto = None
        self._auto_elapsed_ms = 0
        logger.debug("auto-play stopped at %s", self.player)
        return True

    def auto_play_tick(self) -> bool:
        """Advance auto-play by one cell. Returns True if the player moved."""
        if self.auto is None:
            return False

        nxt = advance_auto_play(self.auto)
        moved = nxt.index != self.auto.index
        if moved:
            self.player = nxt.position
            self.steps += 1
        self.auto = nxt

        if nxt.finished or self.player == self.goal:
            self.auto = None
            self.check_victory()
        return moved

    # ----------------------------
    # Victory
    # ----------------------------

    def check_victory(self) -> bool:
        """Evaluate victory; on the first hit per level schedule the advance."""
        if self.player != self.goal:
            return False
        if self._victory_level == self.level:
            return True

        min_steps = len(find_shortest_path(self.grid, self.start, self.goal))
        self.status = StatusEvent.victory(self.level, self.steps, min_steps)
        self.phase = SessionPhase.VICTORY
        self.auto = None
        self._victory_level = self.level
        self._advance_remaining_ms = self.config.victory_delay_ms
        logger.info(
            "level %s cleared in %s steps (minimum %s)", self.level, self.steps, min_steps
        )
        if self._advance_remaining_ms <= 0:
            self._complete_victory()
        return True

    def _complete_victory(self) -> None:
        expected = self._victory_level
        self._advance_remaining_ms = None
        if expected is not None and self.level == expected:
            self.advance_level()

    # ----------------------------
    # Time / commands
    # ----------------------------

    def tick(self, dt_ms: int) -> None:
        """Let dt_ms of game time pass."""
        if dt_ms <= 0:
            return

        if self._advance_remaining_ms is not None:
            self._advance_remaining_ms -= dt_ms
            if self._advance_remaining_ms <= 0:
                self._complete_victory()
            return

        if self.auto is not None:
            self._auto_elapsed_ms += dt_ms
            step = self.config.auto_step_ms
            while self.auto is not None and self._auto_elapsed_ms >= step:
                self._auto_elapsed_ms -= step
                self.auto_play_tick()

    def dispatch(self, command: Command) -> Optional[StatusEvent]:
        """Apply a user intent and return the resulting status."""
        if isinstance(command, Move):
            self.move(command.direction)
        elif isinstance(command, RequestHint):
            self.request_hint()
        elif isinstance(command, StartAutoPlay):
            self.start_auto_play()
        elif isinstance(command, StopAutoPlay):
            self.stop_auto_play()
        elif isinstance(command, Reset):
            self.reset_level()
        elif isinstance(command, NewGame):
            self.new_game()
        else:
            raise TypeError(f"Unknown command: {command!r}")
        return self.status

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            level=self.level,
            grid_size=self.grid.size,
            rows=self.grid.rows(),
            player=self.player,
            goal=self.goal,
            steps=self.steps,
            hint_path=list(self.hint_path),
            auto_playing=self.auto_playing,
            phase=self.phase,
            status=self.status,
        )

    def remaining_auto_path(self) -> List[Cell]:
        if self.auto is None:
            return []
        return list(self.auto.path[self.auto.index:])
