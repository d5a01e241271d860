# runner.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Union

from .dag import DependencyGraph, ScheduleError
from .model import Assignment, ScheduleResult, Worker

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Errors
# ----------------------------------------------------------------------

@dataclass
class DeadlockError(ScheduleError):
    """
    Nothing is running, nothing is ready, yet some tasks never started.

    Caused by a dependency cycle or a prerequisite outside the task universe.
    """
    stuck: List[Any]
    clock: int

    def __str__(self) -> str:
        return (
            f"Deadlock at t={self.clock}: no task can start. "
            f"Stuck tasks: {self.stuck}"
        )


# ----------------------------------------------------------------------
# Durations
# ----------------------------------------------------------------------

def letter_increment(task: Any) -> int:
    """A -> 1, B -> 2, ... Z -> 26."""
    if not isinstance(task, str) or len(task) != 1:
        raise ValueError(f"letter_increment needs a single character, got {task!r}")
    return ord(task) - ord("A") + 1


def unit_increment(task: Any) -> int:
    """Every task takes one tick; for pure ordering with arbitrary ids."""
    return 1


def _duration(task: Any, base_duration: int, increment: Callable[[Any], int]) -> int:
    step = increment(task)
    if step < 1:
        raise ValueError(f"increment({task!r}) must be >= 1, got {step}")
    return base_duration + step


# ----------------------------------------------------------------------
# Simulation loop
# ----------------------------------------------------------------------

def run_schedule(
    graph: Union[DependencyGraph, Iterable[Any]],
    *,
    workers: int = 1,
    base_duration: int = 0,
    increment: Callable[[Any], int] = letter_increment,
) -> ScheduleResult:
    """
    Simulate a fixed pool of identical workers draining the graph.

    - Jumps the clock to the next worker completion.
    - Completed workers unlock their task's dependents (once per task).
    - Idle workers, in index order, take the smallest ready task.
    - Stops when every task has started and every worker is idle.

    `graph` may be a DependencyGraph or raw edges; a graph is consumed by
    the run and must not be reused.
    """
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    if base_duration < 0:
        raise ValueError(f"base_duration must be >= 0, got {base_duration}")
    if not isinstance(graph, DependencyGraph):
        graph = DependencyGraph.build(graph)

    pool = [Worker() for _ in range(workers)]
    clock = 0
    order: List[Any] = []
    assignments: List[Assignment] = []

    while True:
        busy = [w.busy_until for w in pool if w.busy_until > 0]
        delta = min(busy) if busy else 0
        clock += delta
        if delta:
            logger.debug("t=%d (+%d)", clock, delta)

        # ---- complete ----
        for idx, w in enumerate(pool):
            if w.busy_until - delta <= 0:
                w.busy_until = 0
                if w.current_task is not None:
                    done, w.current_task = w.current_task, None
                    logger.debug("worker %d finished %r at t=%d", idx, done, clock)
                    graph.unlock(done)
            else:
                w.busy_until -= delta

        if graph.is_complete() and all(w.idle for w in pool):
            break

        # ---- assign ----
        for idx, w in enumerate(pool):
            if not w.idle:
                continue
            ready = graph.ready_tasks()
            if not ready:
                break
            task = ready[0]
            graph.mark_started(task)
            w.current_task = task
            w.busy_until = _duration(task, base_duration, increment)
            order.append(task)
            assignments.append(
                Assignment(task=task, worker=idx, start=clock, finish=clock + w.busy_until)
            )
            logger.debug("worker %d started %r at t=%d (until t=%d)", idx, task, clock, clock + w.busy_until)

        if all(w.idle for w in pool):
            # nothing running and nothing could be assigned
            raise DeadlockError(stuck=graph.stuck_tasks(), clock=clock)

    return ScheduleResult(order=order, duration=clock, assignments=tuple(assignments))


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

def step_order(edges: Iterable[Any]) -> List[Any]:
    """Single worker, no base duration: the lexicographically smallest topological order."""
    return run_schedule(edges, workers=1, base_duration=0, increment=unit_increment).order


def completion_time(
    edges: Iterable[Any],
    *,
    workers: int,
    base_duration: int,
    increment: Callable[[Any], int] = letter_increment,
) -> int:
    return run_schedule(
        edges,
        workers=workers,
        base_duration=base_duration,
        increment=increment,
    ).duration
