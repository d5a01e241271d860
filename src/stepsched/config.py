# config.py
from __future__ import annotations

import os
from dataclasses import dataclass

WORKERS_ENV = "STEPSCHED_WORKERS"
BASE_DURATION_ENV = "STEPSCHED_BASE_DURATION"

DEFAULT_WORKERS = 5
DEFAULT_BASE_DURATION = 60


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class SimulationConfig:
    """Worker pool size and fixed per-task offset for a timed run."""
    workers: int = DEFAULT_WORKERS
    base_duration: int = DEFAULT_BASE_DURATION

    def validate(self) -> "SimulationConfig":
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        if self.base_duration < 0:
            raise ValueError(f"base_duration must be >= 0, got {self.base_duration}")
        return self

    @classmethod
    def from_env(cls) -> "SimulationConfig":
        return cls(
            workers=_int_env(WORKERS_ENV, DEFAULT_WORKERS),
            base_duration=_int_env(BASE_DURATION_ENV, DEFAULT_BASE_DURATION),
        ).validate()
