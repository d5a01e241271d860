# dag.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from .model import Edge, TaskState


class ScheduleError(Exception):
    """Base class for every failure raised while building or running a schedule."""


@dataclass
class MalformedEdgeError(ScheduleError):
    """An input record that is not exactly one prerequisite and one dependent."""
    record: Any
    reason: str

    def __str__(self) -> str:
        return f"Malformed edge {self.record!r}: {self.reason}"


def _check_id(record: Any, task: Any) -> None:
    try:
        hash(task)
    except TypeError:
        raise MalformedEdgeError(record, f"identifier {task!r} is not hashable") from None
    if task is None:
        raise MalformedEdgeError(record, "identifier is missing")
    if isinstance(task, str) and (not task or any(c.isspace() for c in task)):
        raise MalformedEdgeError(record, f"identifier {task!r} is not a single token")


def as_edge(record: Any) -> Edge:
    """Accept an Edge or any 2-item (prerequisite, dependent) record."""
    if isinstance(record, Edge):
        pair = (record.prerequisite, record.dependent)
    elif isinstance(record, (str, bytes)):
        # a bare string would otherwise unpack as characters ("AB" -> A, B)
        raise MalformedEdgeError(record, "expected a (prerequisite, dependent) pair, got a string")
    else:
        try:
            pair = tuple(record)
        except TypeError:
            raise MalformedEdgeError(record, "not a sequence") from None
        if len(pair) != 2:
            raise MalformedEdgeError(record, f"expected 2 identifiers, got {len(pair)}")

    for task in pair:
        _check_id(record, task)
    return Edge(prerequisite=pair[0], dependent=pair[1])


class DependencyGraph:
    """
    Task universe, remaining-prerequisite counts and unlock lists.

    Build once with `DependencyGraph.build(...)`. A run drains the counts,
    so a graph is good for exactly one simulation.
    """

    def __init__(self) -> None:
        self._state: Dict[Any, TaskState] = {}
        self._unlocks: Dict[Any, List[Any]] = {}
        self._unlocked: set = set()

    @classmethod
    def build(
        cls,
        edges: Iterable[Any],
        all_task_ids: Optional[Iterable[Any]] = None,
    ) -> "DependencyGraph":
        """
        Build a graph from edges.

        Requires:
          - each edge: Edge or (prerequisite, dependent)
          - all_task_ids: the declared universe; defaults to every id seen in edges

        Edges that name an id outside an explicit universe still count
        against a declared dependent. Such a task is never scheduled, so the
        run ends in a DeadlockError.
        """
        parsed = [as_edge(e) for e in edges]

        graph = cls()
        if all_task_ids is None:
            universe: List[Any] = []
            for e in parsed:
                universe.extend((e.prerequisite, e.dependent))
        else:
            universe = list(all_task_ids)
            for task in universe:
                _check_id(task, task)

        for task in universe:
            graph._state.setdefault(task, TaskState())

        for e in parsed:
            graph._unlocks.setdefault(e.prerequisite, []).append(e.dependent)
            if e.dependent in graph._state:
                graph._state[e.dependent].prerequisites_remaining += 1

        # ascending id order is the tie-break, keep the mapping sorted once
        try:
            ordered = sorted(graph._state)
        except TypeError:
            raise MalformedEdgeError(
                tuple(graph._state), "identifiers must be mutually comparable"
            ) from None
        graph._state = {task: graph._state[task] for task in ordered}
        return graph

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def tasks(self) -> List[Any]:
        return list(self._state)

    def __len__(self) -> int:
        return len(self._state)

    def __contains__(self, task: Any) -> bool:
        return task in self._state

    def prerequisites_remaining(self, task: Any) -> int:
        return self._state[task].prerequisites_remaining

    def unlocks(self, task: Any) -> List[Any]:
        return list(self._unlocks.get(task, []))

    def ready_tasks(self) -> List[Any]:
        """Not-yet-started tasks with no unresolved prerequisites, smallest id first."""
        return [
            task
            for task, st in self._state.items()
            if st.prerequisites_remaining == 0 and not st.started
        ]

    def stuck_tasks(self) -> List[Any]:
        return [task for task, st in self._state.items() if not st.started]

    def is_complete(self) -> bool:
        return all(st.started for st in self._state.values())

    # ------------------------------------------------------------------
    # Mutation (scheduler only)
    # ------------------------------------------------------------------

    def mark_started(self, task: Any) -> None:
        st = self._state[task]
        if st.started:
            raise ValueError(f"Task {task!r} was already started")
        st.started = True

    def unlock(self, task: Any) -> None:
        """Release one prerequisite from every task `task` unlocks."""
        if task in self._unlocked:
            raise ValueError(f"Task {task!r} was already unlocked")
        self._unlocked.add(task)

        for nxt in self._unlocks.get(task, []):
            st = self._state.get(nxt)
            if st is not None:
                st.prerequisites_remaining -= 1
