# pathgrid/core/path.py
#!/usr/bin/env python3
from typing import Callable, Dict, List, Optional

from pathgrid.core.grid import Grid
from pathgrid.core.types import Cell, PathResult

PathObserver = Callable[[Cell, int], None]


def reconstruct(prev: Dict[Cell, Cell], start: Cell, end: Cell,
                on_step: Optional[PathObserver] = None) -> PathResult:
    """
    Walk prev back from end until a cell has no predecessor.

    The returned path holds the intermediate cells only (neither start nor end),
    ordered start -> end. on_step(cell, count) fires once per intermediate cell
    in walk order, i.e. end -> start. Reachability is not re-checked here: the
    caller already got a SearchResult, so prev must chain back to start.
    """
    path: List[Cell] = []
    cur = end
    while cur in prev:
        cur = prev[cur]
        if cur == start:
            break
        path.append(cur)
        if on_step is not None:
            on_step(cur, len(path))
    path.reverse()
    return PathResult(path=path, length=len(path))


def full_route(start: Cell, result: PathResult, end: Cell) -> List[Cell]:
    return [start] + result.path + [end]


def path_cost(grid: Grid, route: List[Cell]) -> int:
    """Sum of entry costs along a route; the first cell is free."""
    return sum(grid.cost_of(c) for c in route[1:])
