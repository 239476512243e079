# pathgrid/core/base.py
#!/usr/bin/env python3
"""
Shared scaffolding for the step-wise searches.

Every algorithm follows the same API the viewer drives:
- init(grid) - reset() - step() -> StepResult

One step() is one frontier pop. A pop that finalizes a cell reports it in
StepResult.closed; a stale duplicate pop reports nothing. Once "done" or
"no_path" is reached, further step() calls keep returning that status.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pathgrid.core.grid import Grid
from pathgrid.core.path import full_route, path_cost, reconstruct
from pathgrid.core.types import Cell, StepResult

logger = logging.getLogger(__name__)


@dataclass
class SearchAlgo:
    name: str = "search"

    grid: Optional[Grid] = None
    open_set: set = field(default_factory=set)          # for overlay
    closed_set: set = field(default_factory=set)        # finalized / visited
    visit_order: List[Cell] = field(default_factory=list)
    parent: Dict[Cell, Cell] = field(default_factory=dict)
    popped_count: int = 0
    done: bool = False
    no_path: bool = False
    start_cell: Optional[Cell] = None
    goal_cell: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    total_cost: Optional[int] = None

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid) -> None:
        self.grid = grid
        self.reset()

    def reset(self) -> None:
        """Clear all state and seed the frontier with the grid's start."""
        if self.grid is None:
            return
        self.grid.validate_endpoints()
        self.open_set.clear()
        self.closed_set.clear()
        self.visit_order.clear()
        self.parent.clear()
        self.popped_count = 0
        self.done = False
        self.no_path = False
        self.path = None
        self.total_cost = None
        self.start_cell = self.grid.start
        self.goal_cell = self.grid.end
        self._seed(self.start_cell)
        self.open_set.add(self.start_cell)
        logger.debug("%s seeded: start=%s end=%s", self.name, self.start_cell, self.goal_cell)

    # -------------------- stepping --------------------

    def step(self) -> StepResult:
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            return StepResult(status="done", path=self.path,
                              metrics=self._metrics(path_len=len(self.path)))

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        return self._expand()

    @property
    def visited_count(self) -> int:
        return len(self.closed_set)

    # -------------------- hooks --------------------

    def _seed(self, start: Cell) -> None:
        raise NotImplementedError

    def _expand(self) -> StepResult:
        raise NotImplementedError

    # -------------------- helpers --------------------

    def _neighbors4(self, c: Cell) -> List[Cell]:
        """Unblocked 4-connected neighbors of c, in (up, down, left, right) order."""
        return [n for n in self.grid.neighbors(c) if not self.grid.is_block(n)]

    def _visit(self, u: Cell) -> None:
        self.open_set.discard(u)
        self.closed_set.add(u)
        self.visit_order.append(u)

    def _stale(self, u: Cell) -> StepResult:
        return StepResult(status="running", current=u, metrics=self._metrics())

    def _running(self, u: Cell, opened: List[Cell]) -> StepResult:
        return StepResult(status="running", opened=opened, closed=[u], current=u,
                          metrics=self._metrics())

    def _finish(self, u: Cell, closed: List[Cell]) -> StepResult:
        self.done = True
        result = reconstruct(self.parent, self.start_cell, u)
        self.path = result.path
        self.total_cost = path_cost(self.grid, full_route(self.start_cell, result, u))
        logger.debug("%s reached %s: visited=%d path_len=%d cost=%d",
                     self.name, u, self.visited_count, result.length, self.total_cost)
        return StepResult(status="done", closed=closed, current=u, path=self.path,
                          metrics=self._metrics(path_len=result.length))

    def _exhausted(self) -> StepResult:
        self.no_path = True
        logger.debug("%s exhausted frontier after %d visits", self.name, self.visited_count)
        return StepResult(status="no_path", metrics=self._metrics())

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.open_set),
            "closed_count": len(self.closed_set),
            "path_len": path_len,
            "total_cost": self.total_cost,
        }
