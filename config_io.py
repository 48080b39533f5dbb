from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from utils import deep_merge

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "log_level": "INFO",
    "game": {"grid_size": 10, "start_level": 1},
    "window": {"title": "Cheese Maze", "cell_size": 60, "fps": 60},
    "colors": {},
}


def load_json_config(path: Path) -> Dict[str, Any]:
    """Load a JSON config file or raise a helpful error.

    Raises:
        FileNotFoundError: If the file does not exist.
        SystemExit: If JSON is invalid or its root is not an object.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SystemExit(
            f"\nERROR: Your config is not valid JSON.\n"
            f"File: {path}\n"
            f"Line {e.lineno}, Col {e.colno}\n"
            f"{e.msg}\n"
        )
    if not isinstance(data, dict):
        raise SystemExit(f"\nERROR: Config root must be a JSON object.\nFile: {path}\n")
    return data


def load_config(path: Path, required: bool = False) -> Dict[str, Any]:
    """Return DEFAULT_CONFIG with the file at path laid over it.

    A missing file yields the defaults unless required is set.
    """
    if not path.exists() and not required:
        logger.info("config %s not found, using defaults", path)
        return dict(DEFAULT_CONFIG)
    return deep_merge(DEFAULT_CONFIG, load_json_config(path))
