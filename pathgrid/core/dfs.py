# pathgrid/core/dfs.py
#!/usr/bin/env python3
"""
Depth-first search on an explicit stack.

Cells may sit on the stack more than once; a cell is visited only when
popped for the first time. The predecessor link is written on push, so the
last push (the one popped first) wins. The route found is valid but not
necessarily shortest.
"""

from dataclasses import dataclass, field
from typing import List

from pathgrid.core.base import SearchAlgo
from pathgrid.core.types import Cell, StepResult


@dataclass
class DFSAlgo(SearchAlgo):
    name: str = "DFS"

    stack: List[Cell] = field(default_factory=list)

    def _seed(self, start: Cell) -> None:
        self.stack.clear()
        self.stack.append(start)

    def _expand(self) -> StepResult:
        if not self.stack:
            return self._exhausted()

        u = self.stack.pop()
        self.popped_count += 1
        if u in self.closed_set:
            return self._stale(u)

        self._visit(u)
        if u == self.goal_cell:
            return self._finish(u, closed=[u])

        opened_now: List[Cell] = []
        for v in self._neighbors4(u):
            if v in self.closed_set:
                continue
            self.parent[v] = u
            self.stack.append(v)
            if v not in self.open_set:
                self.open_set.add(v)
                opened_now.append(v)

        return self._running(u, opened_now)
