from __future__ import annotations

from typing import List, Tuple

Color = Tuple[int, int, int]
Cell = Tuple[int, int]  # (x, y)
Path = List[Cell]
