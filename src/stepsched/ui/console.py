"""Console output formatting utilities for stepsched."""

from __future__ import annotations

import sys
from typing import Iterable, Optional

from stepsched.model import Assignment, ScheduleResult


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_header(self, title: str) -> None:
        """Print a section header."""
        print(f"\n{title}")
        print("-" * len(title))

    def print_run_started(self, source: str, edge_count: int, task_count: int) -> None:
        """Print run start information."""
        print("\nRUN STARTED")
        print(f"Input: {source}")
        print(f"Edges: {edge_count}")
        print(f"Tasks: {task_count}")

    def print_order(self, result: ScheduleResult) -> None:
        """Print the assignment order of a single-worker run."""
        print(f"Step order: {result.order_str}")

    def print_duration(self, result: ScheduleResult, workers: int, base_duration: int) -> None:
        """Print the total simulated time of a timed run."""
        print(
            f"Total time with {workers} worker(s), base duration {base_duration}: "
            f"{result.duration}"
        )

    def print_timeline(self, assignments: Iterable[Assignment]) -> None:
        """
        Print one line per assignment, in assignment order.

        Args:
            assignments: Assignment records from a ScheduleResult
        """
        self.print_header("TIMELINE")
        for a in assignments:
            print(f"  t={a.start:>5}  worker {a.worker}  {a.task}  (done t={a.finish})")

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exc()
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
