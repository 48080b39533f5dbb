from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from game_types import Cell, Color, Path
from utils import as_color, as_int


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value


class SessionPhase(Enum):
    PLAYING = "playing"
    VICTORY = "victory"


class MoveOutcome(Enum):
    MOVED = "moved"
    STAYED = "stayed"  # target equals current cell
    OUT_OF_BOUNDS = "out_of_bounds"
    BLOCKED = "blocked"
    IGNORED = "ignored"  # input frozen (auto-play or victory window)


class StatusKind(Enum):
    LEVEL_STARTED = "level_started"
    UNREACHABLE = "unreachable"
    HINT_SHOWN = "hint_shown"
    AUTO_PLAYING = "auto_playing"
    VICTORY = "victory"
    NO_PATH_FOR_AUTO = "no_path_for_auto"


@dataclass(frozen=True)
class StatusEvent:
    """Classified status for the presentation layer (no literal text)."""

    kind: StatusKind
    level: Optional[int] = None
    steps: Optional[int] = None
    min_steps: Optional[int] = None
    is_optimal: Optional[bool] = None

    @classmethod
    def level_started(cls, level: int) -> "StatusEvent":
        return cls(StatusKind.LEVEL_STARTED, level=level)

    @classmethod
    def victory(cls, level: int, steps: int, min_steps: int) -> "StatusEvent":
        return cls(
            StatusKind.VICTORY,
            level=level,
            steps=steps,
            min_steps=min_steps,
            is_optimal=steps == min_steps,
        )


# ----------------------------
# Commands
# ----------------------------


@dataclass(frozen=True)
class Move:
    direction: Direction


@dataclass(frozen=True)
class RequestHint:
    pass


@dataclass(frozen=True)
class StartAutoPlay:
    pass


@dataclass(frozen=True)
class StopAutoPlay:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class NewGame:
    pass


Command = Union[Move, RequestHint, StartAutoPlay, StopAutoPlay, Reset, NewGame]


@dataclass(frozen=True)
class SessionSnapshot:
    level: int
    grid_size: int
    rows: List[str]
    player: Cell
    goal: Cell
    steps: int
    hint_path: Path
    auto_playing: bool
    phase: SessionPhase
    status: Optional[StatusEvent]


# ----------------------------
# Config
# ----------------------------


@dataclass(frozen=True)
class SessionConfig:
    grid_size: int = 10
    start_level: int = 1
    obstacles_per_level: int = 8
    max_density_divisor: int = 3
    auto_step_ms: int = 200
    victory_delay_ms: int = 2000
    max_generation_attempts: int = 1000
    seed: Optional[int] = None

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "SessionConfig":
        if not isinstance(raw, dict):
            raw = {}
        seed_raw = raw.get("seed")
        try:
            seed = None if seed_raw is None else int(seed_raw)
        except (TypeError, ValueError):
            seed = None
        return SessionConfig(
            grid_size=as_int(raw.get("grid_size", 10), 10, 2, 100),
            start_level=as_int(raw.get("start_level", 1), 1, 1, 10_000),
            obstacles_per_level=as_int(raw.get("obstacles_per_level", 8), 8, 0, 10_000),
            max_density_divisor=as_int(raw.get("max_density_divisor", 3), 3, 2, 100),
            auto_step_ms=as_int(raw.get("auto_step_ms", 200), 200, 1, 60_000),
            victory_delay_ms=as_int(raw.get("victory_delay_ms", 2000), 2000, 0, 60_000),
            max_generation_attempts=as_int(
                raw.get("max_generation_attempts", 1000), 1000, 1, 1_000_000
            ),
            seed=seed,
        )


@dataclass(frozen=True)
class DisplayConfig:
    title: str
    cell_size: int
    fps: int
    bg: Color
    floor_light: Color
    floor_dark: Color
    obstacle: Color
    hint: Color
    text: Color

    @staticmethod
    def from_dict(window: Dict[str, Any], colors: Dict[str, Any]) -> "DisplayConfig":
        if not isinstance(window, dict):
            window = {}
        if not isinstance(colors, dict):
            colors = {}
        return DisplayConfig(
            title=str(window.get("title", "Cheese Maze")),
            cell_size=as_int(window.get("cell_size", 60), 60, 16, 200),
            fps=as_int(window.get("fps", 60), 60, 10, 240),
            bg=as_color(window.get("bg"), (0, 43, 54)),
            floor_light=as_color(colors.get("floor_light"), (238, 232, 213)),
            floor_dark=as_color(colors.get("floor_dark"), (253, 246, 227)),
            obstacle=as_color(colors.get("obstacle"), (133, 153, 0)),
            hint=as_color(colors.get("hint"), (181, 137, 0)),
            text=as_color(colors.get("text"), (238, 232, 213)),
        )
