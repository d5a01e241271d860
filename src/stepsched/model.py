# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple


@dataclass(frozen=True)
class Edge:
    """`prerequisite` must finish before `dependent` may start."""
    prerequisite: Any
    dependent: Any


@dataclass
class TaskState:
    prerequisites_remaining: int = 0
    started: bool = False


@dataclass
class Worker:
    """
    One execution slot in the pool.

    busy_until is the time remaining until the worker is free (0 = idle).
    """
    busy_until: int = 0
    current_task: Optional[Any] = None

    @property
    def idle(self) -> bool:
        return self.busy_until <= 0


@dataclass(frozen=True)
class Assignment:
    """A task handed to a worker at `start`, finishing at `finish`."""
    task: Any
    worker: int
    start: int
    finish: int


@dataclass(frozen=True)
class ScheduleResult:
    """
    Outcome of one simulation run.

    `order` is the assignment order. It matches the completion order only
    when a single worker is used.
    """
    order: List[Any]
    duration: int
    assignments: Tuple[Assignment, ...] = field(default_factory=tuple)

    @property
    def order_str(self) -> str:
        return "".join(str(t) for t in self.order)
