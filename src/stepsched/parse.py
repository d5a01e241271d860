# parse.py
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from .dag import MalformedEdgeError
from .model import Edge


PREFIX = "Step "
SUFFIX = " can begin."
SEPARATOR = " must be finished before step "


def parse_line(line: str) -> Edge:
    """
    Parse one instruction line:

        Step C must be finished before step A can begin.

    Both step names must be exactly one character.
    """
    raw = line.strip()
    body = raw
    if body.startswith(PREFIX):
        body = body[len(PREFIX):]
    if body.endswith(SUFFIX):
        body = body[: -len(SUFFIX)]

    parts = body.split(SEPARATOR, 1)
    if len(parts) != 2:
        raise MalformedEdgeError(raw, "expected 'Step X must be finished before step Y can begin.'")
    if not all(len(p) == 1 for p in parts):
        raise MalformedEdgeError(raw, "step names must be a single character")

    return Edge(prerequisite=parts[0], dependent=parts[1])


def parse_lines(lines: Iterable[str]) -> List[Edge]:
    return [parse_line(line) for line in lines if line.strip()]


def load_edges(path: str | Path) -> List[Edge]:
    """Read every edge from a text file, one instruction per line."""
    p = Path(path).expanduser()
    if not p.exists():
        raise FileNotFoundError(f"Input file not found: {p}")
    return parse_lines(p.read_text(encoding="utf-8").splitlines())
