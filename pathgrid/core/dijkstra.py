# pathgrid/core/dijkstra.py
#!/usr/bin/env python3
"""
Dijkstra over per-cell entry costs (weight of the cell being entered).

The frontier is a plain list scanned for the minimum tentative distance.
min() keeps the first-encountered minimum, so equal distances resolve in
frontier order. Duplicate entries are allowed and dropped on pop once the
cell is finalized.
"""

from dataclasses import dataclass, field
from math import inf
from typing import Dict, List

from pathgrid.core.base import SearchAlgo
from pathgrid.core.types import Cell, StepResult


@dataclass
class DijkstraAlgo(SearchAlgo):
    name: str = "Dijkstra"

    frontier: List[Cell] = field(default_factory=list)
    g: Dict[Cell, int] = field(default_factory=dict)

    def _seed(self, start: Cell) -> None:
        self.frontier.clear()
        self.g.clear()
        self.g[start] = 0
        self.frontier.append(start)

    def _pop_min(self) -> Cell:
        i = min(range(len(self.frontier)), key=lambda k: self.g[self.frontier[k]])
        return self.frontier.pop(i)

    def _expand(self) -> StepResult:
        if not self.frontier:
            return self._exhausted()

        u = self._pop_min()
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
            alt = self.g[u] + self.grid.cost_of(v)
            if alt < self.g.get(v, inf):
                self.g[v] = alt
                self.parent[v] = u
                self.frontier.append(v)
                if v not in self.open_set:
                    self.open_set.add(v)
                    opened_now.append(v)

        return self._running(u, opened_now)
