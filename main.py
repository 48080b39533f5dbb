from __future__ import annotations

import logging
from pathlib import Path


def main() -> None:
    """Entrypoint for running the game from the command line."""
    import sys

    explicit = len(sys.argv) >= 2
    cfg_path = Path(sys.argv[1]) if explicit else Path("config.json")

    from config_io import load_config
    from config_parsing import parse_log_level

    cfg = load_config(cfg_path, required=explicit)
    logging.basicConfig(
        level=parse_log_level(cfg),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from game import Game  # local import keeps pygame out of module load

    Game(cfg).run()


if __name__ == "__main__":
    main()
