from __future__ import annotations

import logging
from typing import Any, Dict

from models import DisplayConfig, SessionConfig
from utils import deep_get

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_session_config(cfg: Dict[str, Any]) -> SessionConfig:
    """Parse game rules from the "game" section of the config.

    Args:
        cfg: Full config dict.

    Returns:
        SessionConfig with defaults applied.
    """
    return SessionConfig.from_dict(deep_get(cfg, "game", {}))


def parse_display_config(cfg: Dict[str, Any]) -> DisplayConfig:
    """Parse window and color settings for the renderer."""
    return DisplayConfig.from_dict(
        deep_get(cfg, "window", {}),
        deep_get(cfg, "colors", {}),
    )


def parse_log_level(cfg: Dict[str, Any]) -> int:
    """Return the logging level named by "log_level" (defaults to INFO)."""
    raw = cfg.get("log_level", "INFO")
    name = raw.strip().upper() if isinstance(raw, str) else "INFO"
    if name not in _LOG_LEVELS:
        name = "INFO"
    return getattr(logging, name)
