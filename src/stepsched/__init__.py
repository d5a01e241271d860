from .dag import DependencyGraph, MalformedEdgeError, ScheduleError
from .runner import run_schedule, step_order, completion_time, letter_increment, unit_increment, DeadlockError
from .model import Edge, Assignment, ScheduleResult
from .parse import parse_line, parse_lines, load_edges
from .config import SimulationConfig

__all__ = [
    "DependencyGraph", "MalformedEdgeError", "ScheduleError",
    "run_schedule", "step_order", "completion_time", "letter_increment", "unit_increment", "DeadlockError",
    "Edge", "Assignment", "ScheduleResult",
    "parse_line", "parse_lines", "load_edges",
    "SimulationConfig",
]
