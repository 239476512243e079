# pathgrid/core/maze.py
#!/usr/bin/env python3
"""
Recursive-division maze generator.

A region is (start_row, start_col, height, width). Regions with height or
width <= 2 are left alone. Otherwise one wall line is drawn across the
region at its midpoint (floor(height/2) rows down for a horizontal wall,
floor(width/2) columns across for a vertical one) with a single random
passage, and both halves recurse with the orientation flipped.

Extra openings:
- a wall end that butts against an open cell (an older wall's passage)
  is left open, so a later wall never seals an earlier doorway
- endpoints and weighted cells are never walled
"""

import logging
import random
from typing import Optional

from pathgrid.core.grid import Grid
from pathgrid.core.types import Cell

logger = logging.getLogger(__name__)

HORIZONTAL = "horizontal"
VERTICAL = "vertical"


def generate_maze(grid: Grid, rng: Optional[random.Random] = None) -> int:
    """Clear the walls of grid and carve a fresh maze. Returns the number of walls."""
    rng = rng or random.Random()
    grid.walls.clear()
    orientation = HORIZONTAL if rng.random() < 0.5 else VERTICAL
    regions = add_walls(grid, 0, 0, grid.rows, grid.cols, orientation, rng)
    logger.debug("maze on %dx%d: %d regions split, %d walls",
                 grid.rows, grid.cols, regions, len(grid.walls))
    return len(grid.walls)


def add_walls(grid: Grid, start_row: int, start_col: int, height: int, width: int,
              orientation: str, rng: random.Random) -> int:
    """Split one region and recurse. Returns how many regions got a wall."""
    if height <= 2 or width <= 2:
        return 0

    horizontal = orientation == HORIZONTAL
    wall_row = start_row + (height // 2 if horizontal else 0)
    wall_col = start_col + (0 if horizontal else width // 2)

    if horizontal:
        passage = (wall_row, start_col + rng.randrange(width))
        line = [(wall_row, c) for c in range(start_col, start_col + width)]
        before, after = (wall_row, start_col - 1), (wall_row, start_col + width)
    else:
        passage = (start_row + rng.randrange(height), wall_col)
        line = [(r, wall_col) for r in range(start_row, start_row + height)]
        before, after = (start_row - 1, wall_col), (start_row + height, wall_col)

    for c in line:
        if c == passage or not _wallable(grid, c):
            continue
        if c == line[0] and _is_open(grid, before):
            continue
        if c == line[-1] and _is_open(grid, after):
            continue
        grid.walls.add(c)

    nxt = VERTICAL if horizontal else HORIZONTAL
    if horizontal:
        top = height // 2
        return 1 + add_walls(grid, start_row, start_col, top, width, nxt, rng) \
                 + add_walls(grid, wall_row + 1, start_col, height - top - 1, width, nxt, rng)
    left = width // 2
    return 1 + add_walls(grid, start_row, start_col, height, left, nxt, rng) \
             + add_walls(grid, start_row, wall_col + 1, height, width - left - 1, nxt, rng)


def _wallable(grid: Grid, c: Cell) -> bool:
    return c != grid.start and c != grid.end and c not in grid.weights


def _is_open(grid: Grid, c: Cell) -> bool:
    return grid.in_bounds(c) and c not in grid.walls
