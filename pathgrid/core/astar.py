# pathgrid/core/astar.py
#!/usr/bin/env python3
"""
A* with the Manhattan heuristic on the 4-connected grid.

Every step costs at least 1, so |d_row| + |d_col| never overestimates.

Frontier rules:
- one entry per cell; the lowest f = g + h wins, first-encountered on ties
- the goal test happens when the best cell is selected, BEFORE it is
  closed, so the end cell never counts as visited
- a neighbor already on the frontier is only updated on a strictly better g
"""

from dataclasses import dataclass, field
from typing import Dict, List

from pathgrid.core.base import SearchAlgo
from pathgrid.core.types import Cell, StepResult


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass
class AStarAlgo(SearchAlgo):
    name: str = "A*"

    frontier: List[Cell] = field(default_factory=list)
    g: Dict[Cell, int] = field(default_factory=dict)
    f: Dict[Cell, int] = field(default_factory=dict)

    def _h(self, c: Cell) -> int:
        return manhattan(c, self.goal_cell)

    def _seed(self, start: Cell) -> None:
        self.frontier.clear()
        self.g.clear()
        self.f.clear()
        self.g[start] = 0
        self.f[start] = self._h(start)
        self.frontier.append(start)

    def _expand(self) -> StepResult:
        if not self.frontier:
            return self._exhausted()

        i = min(range(len(self.frontier)), key=lambda k: self.f[self.frontier[k]])
        u = self.frontier.pop(i)
        self.popped_count += 1

        if u == self.goal_cell:
            self.open_set.discard(u)
            return self._finish(u, closed=[])

        self._visit(u)

        opened_now: List[Cell] = []
        for v in self._neighbors4(u):
            if v in self.closed_set:
                continue
            tentative = self.g[u] + self.grid.cost_of(v)
            if v not in self.open_set:
                self.frontier.append(v)
                self.open_set.add(v)
                opened_now.append(v)
            elif tentative >= self.g[v]:
                continue
            self.parent[v] = u
            self.g[v] = tentative
            self.f[v] = tentative + self._h(v)

        return self._running(u, opened_now)
