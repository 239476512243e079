# pathgrid/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Optional, Dict, Any, Set

Cell = Tuple[int, int]  # (row, col)


class InvalidInput(ValueError):
    """Caller broke the engine's contract (bad cell, weight, or endpoints)."""


class _NotFound:
    """Falsy sentinel returned when the frontier empties before the end cell."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NotFound"


NotFound = _NotFound()


class CellState(Enum):
    NORMAL = "normal"
    BLOCKED = "blocked"
    WEIGHTED = "weighted"
    START = "start"
    END = "end"


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    opened: List[Cell] = field(default_factory=list)
    closed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SearchResult:
    prev: Dict[Cell, Cell]        # cell -> cell it was reached from
    visited: Set[Cell]

    @property
    def visited_count(self) -> int:
        return len(self.visited)


@dataclass
class PathResult:
    path: List[Cell]              # intermediate cells only, start -> end order
    length: int

    @property
    def steps(self) -> int:
        """Moves from start to end."""
        return self.length + 1
