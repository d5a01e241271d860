# cli.py
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Callable

import click

from stepsched.config import SimulationConfig
from stepsched.dag import DependencyGraph, MalformedEdgeError
from stepsched.model import Edge
from stepsched.parse import load_edges
from stepsched.runner import DeadlockError, letter_increment, run_schedule, unit_increment
from stepsched.ui.console import Console, set_console, get_console


def _fail(exc: Exception) -> None:
    """Exit 1 after a structured error; the traceback is shown only in debug mode."""
    console = get_console()
    if console.debug:
        console.print_exception(exc)
    sys.exit(1)


def load_input(path: str) -> list[Edge]:
    """
    Read edges from the input file, reporting failures and exiting.

    Raises:
        SystemExit: If the file is missing or a line is malformed
    """
    console = get_console()

    try:
        edges = load_edges(path)
    except FileNotFoundError as e:
        console.print_error(
            "Input file not found",
            str(e),
            suggestion="Pass the path of a file with lines like:\n  Step C must be finished before step A can begin.",
        )
        _fail(e)
    except MalformedEdgeError as e:
        console.print_error(
            "Malformed input",
            f"Could not parse {path}",
            details=[str(e)],
        )
        _fail(e)

    console.print_debug(f"Loaded {len(edges)} edge(s) from {path}")
    return edges


def resolve_config(workers: int | None, base_duration: int | None) -> SimulationConfig:
    """Command-line options win over STEPSCHED_* environment defaults."""
    console = get_console()

    try:
        env = SimulationConfig.from_env()
        return SimulationConfig(
            workers=env.workers if workers is None else workers,
            base_duration=env.base_duration if base_duration is None else base_duration,
        ).validate()
    except ValueError as e:
        console.print_error("Invalid configuration", str(e))
        _fail(e)


def simulate(
    edges: list[Edge],
    workers: int,
    base_duration: int,
    increment: Callable[[Any], int] = letter_increment,
):
    """Run one simulation on a fresh graph, reporting deadlocks and exiting."""
    console = get_console()

    try:
        return run_schedule(
            DependencyGraph.build(edges),
            workers=workers,
            base_duration=base_duration,
            increment=increment,
        )
    except DeadlockError as e:
        console.print_error(
            "Deadlock",
            str(e),
            details=[f"{len(e.stuck)} task(s) never started"],
            suggestion="Check the input for a dependency cycle.",
        )
        _fail(e)
    except (MalformedEdgeError, ValueError) as e:
        console.print_error("Invalid input", str(e))
        _fail(e)


def ordered(edges: list[Edge]):
    """Single worker; durations do not affect the order, so any step name works."""
    return simulate(edges, workers=1, base_duration=0, increment=unit_increment)


workers_option = click.option(
    "--workers", default=None, type=int, help="Number of workers (default: $STEPSCHED_WORKERS or 5)"
)
base_duration_option = click.option(
    "--base-duration",
    default=None,
    type=int,
    help="Fixed time added to every step (default: $STEPSCHED_BASE_DURATION or 60)",
)


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and simulation trace)",
)
@click.pass_context
def cli(ctx, debug):
    """stepsched — deterministic step scheduler and worker-pool simulator."""
    console = Console(debug=debug)
    set_console(console)
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@click.argument("file")
def order(file):
    """Print the single-worker step order."""
    console = get_console()

    try:
        edges = load_input(file)
        console.print_order(ordered(edges))
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)


@cli.command()
@click.argument("file")
@workers_option
@base_duration_option
@click.option("--timeline/--no-timeline", default=False, help="Print every assignment")
def time(file, workers, base_duration, timeline):
    """Print the total time for a worker pool to finish every step."""
    console = get_console()

    try:
        cfg = resolve_config(workers, base_duration)
        edges = load_input(file)

        result = simulate(edges, workers=cfg.workers, base_duration=cfg.base_duration)
        console.print_duration(result, cfg.workers, cfg.base_duration)
        if timeline:
            console.print_timeline(result.assignments)
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)


@cli.command()
@click.argument("file")
@workers_option
@base_duration_option
def run(file, workers, base_duration):
    """Print both the step order and the timed-run total."""
    console = get_console()

    try:
        cfg = resolve_config(workers, base_duration)
        edges = load_input(file)

        serial = ordered(edges)
        console.print_run_started(Path(file).name, len(edges), len(serial.order))
        console.print_order(serial)
        console.print_duration(
            simulate(edges, workers=cfg.workers, base_duration=cfg.base_duration),
            cfg.workers,
            cfg.base_duration,
        )
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)


if __name__ == "__main__":
    cli()
