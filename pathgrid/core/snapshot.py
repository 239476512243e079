# pathgrid/core/snapshot.py
#!/usr/bin/env python3
"""
Saved configurations: a grid as a plain JSON-ready value.

    {"rows": R, "cols": C,
     "grid": [[{"isWall": bool, "isStart": bool, "isEnd": bool, "weight": int}, ...], ...]}

A file of saved configurations maps a name to one such snapshot.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from pathgrid.core.grid import DEFAULT_WEIGHT, Grid
from pathgrid.core.types import InvalidInput

logger = logging.getLogger(__name__)

Snapshot = Dict[str, Any]


def to_snapshot(grid: Grid) -> Snapshot:
    return {
        "grid": [
            [
                {
                    "isWall": (r, c) in grid.walls,
                    "isStart": (r, c) == grid.start,
                    "isEnd": (r, c) == grid.end,
                    "weight": grid.weights.get((r, c), DEFAULT_WEIGHT),
                }
                for c in range(grid.cols)
            ]
            for r in range(grid.rows)
        ],
        "rows": grid.rows,
        "cols": grid.cols,
    }


def from_snapshot(data: Snapshot) -> Grid:
    try:
        rows = int(data["rows"])
        cols = int(data["cols"])
        cells = data["grid"]
    except (KeyError, TypeError, ValueError) as ex:
        raise InvalidInput(f"malformed snapshot: {ex}") from ex
    if not isinstance(cells, list) or len(cells) != rows \
            or any(not isinstance(row, list) or len(row) != cols for row in cells):
        raise InvalidInput("snapshot cells size mismatch")

    grid = Grid(rows, cols)
    try:
        for r, row in enumerate(cells):
            for c, cfg in enumerate(row):
                weight = cfg.get("weight", DEFAULT_WEIGHT)
                if cfg.get("isWall") and weight > DEFAULT_WEIGHT:
                    raise InvalidInput(f"cell {(r, c)} is both a wall and weighted")
                if cfg.get("isWall"):
                    grid.set_blocked((r, c))
                if cfg.get("isStart"):
                    grid.set_start((r, c))
                if cfg.get("isEnd"):
                    grid.set_end((r, c))
                if weight > DEFAULT_WEIGHT and (r, c) not in (grid.start, grid.end):
                    grid.set_weight((r, c), weight)
    except (AttributeError, TypeError) as ex:
        raise InvalidInput(f"malformed snapshot cell: {ex}") from ex
    return grid


def load_configs(path: Union[str, Path]) -> Dict[str, Snapshot]:
    path = Path(path)
    if not path.exists():
        return {}
    with open(path, "r") as f:
        data = json.load(f)
    if isinstance(data, list):
        # [[name, snapshot], ...] pairs
        data = dict(data)
    if not isinstance(data, dict):
        raise InvalidInput(f"{path}: expected an object of named configurations")
    logger.debug("loaded %d configurations from %s", len(data), path)
    return data


def save_configs(path: Union[str, Path], configs: Dict[str, Snapshot]) -> None:
    path = Path(path)
    with open(path, "w") as f:
        json.dump(configs, f)
    logger.debug("saved %d configurations to %s", len(configs), path)
