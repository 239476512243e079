# pathgrid/core/engine.py
#!/usr/bin/env python3
"""
Engine facade: pick an algorithm by name and drive it.

- iter_steps(): lazy, finite, non-restartable stream of StepResult
- run():        drive to the end, calling on_step(cell, visited_count) once per
                visited cell; SearchResult or NotFound
- solve():      run() + reconstruct()

on_step is the only place the search yields to the caller. It is called
synchronously, in visit order, and may take as long as it likes.
"""

import logging
from typing import Callable, Dict, Iterator, Optional, Type, Union

from pathgrid.core.astar import AStarAlgo
from pathgrid.core.base import SearchAlgo
from pathgrid.core.bfs import BFSAlgo
from pathgrid.core.dfs import DFSAlgo
from pathgrid.core.dijkstra import DijkstraAlgo
from pathgrid.core.grid import Grid
from pathgrid.core.path import PathObserver, reconstruct
from pathgrid.core.types import Cell, InvalidInput, NotFound, PathResult, SearchResult, StepResult

logger = logging.getLogger(__name__)

StepObserver = Callable[[Cell, int], None]

ALGORITHMS: Dict[str, Type[SearchAlgo]] = {
    "bfs": BFSAlgo,
    "dfs": DFSAlgo,
    "dijkstra": DijkstraAlgo,
    "astar": AStarAlgo,
}

TERMINAL = ("done", "no_path")


def make_algo(name: str) -> SearchAlgo:
    try:
        return ALGORITHMS[name.lower()]()
    except (KeyError, AttributeError):
        raise InvalidInput(f"unknown algorithm {name!r}; pick one of {sorted(ALGORITHMS)}") from None


def _prepare(algorithm: Union[str, SearchAlgo], grid: Grid) -> SearchAlgo:
    algo = make_algo(algorithm) if isinstance(algorithm, str) else algorithm
    algo.init(grid)
    return algo


def iter_steps(algorithm: Union[str, SearchAlgo], grid: Grid) -> Iterator[StepResult]:
    """Yield one StepResult per frontier pop, ending with the terminal one."""
    algo = _prepare(algorithm, grid)
    while True:
        res = algo.step()
        yield res
        if res.status in TERMINAL:
            return


def run(algorithm: Union[str, SearchAlgo], grid: Grid,
        on_step: Optional[StepObserver] = None):
    """Search grid.start -> grid.end. Returns SearchResult, or NotFound."""
    algo = _prepare(algorithm, grid)
    logger.debug("run %s on %dx%d grid", algo.name, grid.rows, grid.cols)
    while True:
        res = algo.step()
        if on_step is not None:
            for c in res.closed:
                on_step(c, algo.visited_count)
        if res.status == "done":
            return SearchResult(prev=dict(algo.parent), visited=set(algo.closed_set))
        if res.status == "no_path":
            return NotFound


def solve(algorithm: Union[str, SearchAlgo], grid: Grid,
          on_step: Optional[StepObserver] = None,
          on_path_step: Optional[PathObserver] = None):
    """Search then reconstruct. Returns (SearchResult, PathResult), or NotFound."""
    result = run(algorithm, grid, on_step=on_step)
    if result is NotFound:
        return NotFound
    path: PathResult = reconstruct(result.prev, grid.start, grid.end, on_step=on_path_step)
    return result, path


