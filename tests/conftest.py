"""Pytest configuration and fixtures."""

import pytest

from stepsched.model import Edge
from stepsched.ui.console import set_console, Console


SAMPLE_LINES = [
    "Step C must be finished before step A can begin.",
    "Step C must be finished before step F can begin.",
    "Step A must be finished before step B can begin.",
    "Step A must be finished before step D can begin.",
    "Step B must be finished before step E can begin.",
    "Step D must be finished before step E can begin.",
    "Step F must be finished before step E can begin.",
]


@pytest.fixture
def sample_lines():
    """The canonical six-step example as instruction lines."""
    return list(SAMPLE_LINES)


@pytest.fixture
def sample_edges():
    """The canonical six-step example as Edge records."""
    return [
        Edge("C", "A"),
        Edge("C", "F"),
        Edge("A", "B"),
        Edge("A", "D"),
        Edge("B", "E"),
        Edge("D", "E"),
        Edge("F", "E"),
    ]


@pytest.fixture
def sample_file(tmp_path):
    """The canonical example written to a text file."""
    path = tmp_path / "steps.txt"
    path.write_text("\n".join(SAMPLE_LINES) + "\n")
    return path


@pytest.fixture(autouse=True)
def reset_console():
    """Give every test a fresh non-debug console."""
    set_console(Console())
    yield
    set_console(Console())
