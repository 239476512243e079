# pathgrid/core/bfs.py
#!/usr/bin/env python3
"""
Breadth-first search. Weights are ignored: the route is shortest by edge count.

A cell gets its predecessor the first time it is discovered, and is
visited (one step) when it leaves the FIFO queue. The search stops
as soon as the end cell is dequeued.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List

from pathgrid.core.base import SearchAlgo
from pathgrid.core.types import Cell, StepResult


@dataclass
class BFSAlgo(SearchAlgo):
    name: str = "BFS"

    queue: Deque[Cell] = field(default_factory=deque)
    discovered: set = field(default_factory=set)

    def _seed(self, start: Cell) -> None:
        self.queue.clear()
        self.discovered.clear()
        self.queue.append(start)
        self.discovered.add(start)

    def _expand(self) -> StepResult:
        if not self.queue:
            return self._exhausted()

        u = self.queue.popleft()
        self.popped_count += 1
        self._visit(u)

        if u == self.goal_cell:
            return self._finish(u, closed=[u])

        opened_now: List[Cell] = []
        for v in self._neighbors4(u):
            if v in self.discovered:
                continue
            self.discovered.add(v)
            self.parent[v] = u
            self.queue.append(v)
            self.open_set.add(v)
            opened_now.append(v)

        return self._running(u, opened_now)
