# pathgrid/core/grid.py
#!/usr/bin/env python3
"""
Grid model: an R x C board of (row, col) cells with a wall set, a sparse
weight map and two endpoints.

- 4-connected, neighbors come back in (up, down, left, right) order
- weights live in [MIN_WEIGHT, MAX_WEIGHT]; absent cells cost DEFAULT_WEIGHT
- a cell is never both a wall and weighted; endpoints are never walls
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from pathgrid.core.types import Cell, CellState, InvalidInput

logger = logging.getLogger(__name__)

MIN_WEIGHT = 1
MAX_WEIGHT = 9
DEFAULT_WEIGHT = 1

# (d_row, d_col): up, down, left, right
DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass
class Grid:
    rows: int
    cols: int
    walls: Set[Cell] = field(default_factory=set)
    weights: Dict[Cell, int] = field(default_factory=dict)
    start: Optional[Cell] = None
    end: Optional[Cell] = None

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise InvalidInput(f"grid must be at least 1x1, got {self.rows}x{self.cols}")

    # -------------------- topology --------------------

    def in_bounds(self, c: Cell) -> bool:
        r, col = c
        return 0 <= r < self.rows and 0 <= col < self.cols

    def cells(self):
        for r in range(self.rows):
            for c in range(self.cols):
                yield (r, c)

    def neighbors(self, c: Cell) -> List[Cell]:
        """Axis-aligned in-bounds neighbors of c, blocked or not."""
        self._check(c)
        r, col = c
        out: List[Cell] = []
        for dr, dc in DIRECTIONS:
            n = (r + dr, col + dc)
            if self.in_bounds(n):
                out.append(n)
        return out

    # -------------------- queries --------------------

    def is_block(self, c: Cell) -> bool:
        return c in self.walls

    def cost_of(self, c: Cell) -> int:
        if c in self.walls:
            raise ValueError("Asked cost of a BLOCK cell")
        return self.weights.get(c, DEFAULT_WEIGHT)

    def state_of(self, c: Cell) -> CellState:
        self._check(c)
        if c == self.start:
            return CellState.START
        if c == self.end:
            return CellState.END
        if c in self.walls:
            return CellState.BLOCKED
        if c in self.weights:
            return CellState.WEIGHTED
        return CellState.NORMAL

    # -------------------- mutation --------------------

    def set_blocked(self, c: Cell, blocked: bool = True) -> None:
        self._check(c)
        if not blocked:
            self.walls.discard(c)
            return
        if c == self.start or c == self.end:
            raise InvalidInput(f"cannot wall endpoint {c}")
        self.weights.pop(c, None)
        self.walls.add(c)

    def toggle_wall(self, c: Cell) -> bool:
        """Flip the wall on c. Endpoints are left alone. Returns the new state."""
        self._check(c)
        if c == self.start or c == self.end:
            return False
        self.set_blocked(c, c not in self.walls)
        return c in self.walls

    def set_weight(self, c: Cell, weight: int) -> None:
        self._check(c)
        if isinstance(weight, bool) or not isinstance(weight, int):
            raise InvalidInput(f"weight must be an integer, got {weight!r}")
        if not MIN_WEIGHT <= weight <= MAX_WEIGHT:
            raise InvalidInput(f"weight must be in [{MIN_WEIGHT}, {MAX_WEIGHT}], got {weight}")
        self.walls.discard(c)
        if weight == DEFAULT_WEIGHT:
            self.weights.pop(c, None)
        else:
            self.weights[c] = weight

    def clear_weight(self, c: Cell) -> None:
        self._check(c)
        self.weights.pop(c, None)

    def set_start(self, c: Cell) -> None:
        self._place_endpoint("start", c)

    def set_end(self, c: Cell) -> None:
        self._place_endpoint("end", c)

    def move_endpoint(self, kind: str, c: Cell) -> bool:
        """Drag-move an endpoint. Walls and the other endpoint are not valid targets."""
        if kind not in ("start", "end"):
            raise InvalidInput(f"unknown endpoint kind {kind!r}")
        if not self.in_bounds(c) or c in self.walls:
            return False
        other = self.end if kind == "start" else self.start
        if c == other:
            return False
        self._place_endpoint(kind, c)
        return True

    def reset(self) -> None:
        """Drop walls, weights and endpoints; keep the dimensions."""
        self.walls.clear()
        self.weights.clear()
        self.start = None
        self.end = None

    def resize(self, rows: int, cols: int) -> None:
        if rows <= 0 or cols <= 0:
            raise InvalidInput(f"grid must be at least 1x1, got {rows}x{cols}")
        self.rows, self.cols = rows, cols
        self.reset()
        logger.debug("grid resized to %dx%d", rows, cols)

    # -------------------- validation --------------------

    def validate_endpoints(self) -> None:
        """Fail fast on anything a search must not be started with."""
        if self.start is None or self.end is None:
            raise InvalidInput("start and end must both be set")
        self._check(self.start)
        self._check(self.end)
        if self.start == self.end:
            raise InvalidInput("start and end must differ")
        if self.start in self.walls or self.end in self.walls:
            raise InvalidInput("endpoints must not be blocked")
        for c, w in self.weights.items():
            if not MIN_WEIGHT <= w <= MAX_WEIGHT:
                raise InvalidInput(f"weight of {c} out of range: {w}")

    def _place_endpoint(self, kind: str, c: Cell) -> None:
        self._check(c)
        if c in self.walls:
            raise InvalidInput(f"cannot place {kind} on a wall at {c}")
        other = self.end if kind == "start" else self.start
        if c == other:
            raise InvalidInput(f"start and end must differ, both at {c}")
        self.weights.pop(c, None)
        setattr(self, kind, c)

    def _check(self, c: Cell) -> None:
        if not self.in_bounds(c):
            raise InvalidInput(f"cell {c} outside {self.rows}x{self.cols} grid")
