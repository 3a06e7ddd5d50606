from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

LOGGER = logging.getLogger("cmdbench.config")

DEFAULT_SHELL = "sh"
DEFAULT_REPETITIONS = 1
DEFAULT_CONCURRENCY = 1
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class BenchmarkTask:
    """Command line to benchmark, shared read-only by every repetition."""

    command: tuple[str, ...]
    quiet: bool = False

    def __post_init__(self) -> None:
        if not self.command:
            raise ValueError("BenchmarkTask command must not be empty")
        # Accept any sequence but always store a tuple.
        object.__setattr__(self, "command", tuple(self.command))

    @classmethod
    def from_argv(cls, argv: Sequence[str], quiet: bool = False) -> "BenchmarkTask":
        return cls(command=tuple(argv), quiet=quiet)

    def clone(self) -> "BenchmarkTask":
        return dataclasses.replace(self)

    def display(self) -> str:
        return " ".join(self.command)


@dataclass(frozen=True)
class BenchmarkOptions:
    """Validated settings for a single benchmark run."""

    task: BenchmarkTask
    repetitions: int = DEFAULT_REPETITIONS
    concurrency: int = DEFAULT_CONCURRENCY
    histogram: bool = False
    shell: str = DEFAULT_SHELL
    output_dir: Path | None = None

    def __post_init__(self) -> None:
        if self.repetitions < 1:
            raise ValueError(f"repetitions must be >= 1, got {self.repetitions}")
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {self.concurrency}")
        if not self.shell:
            raise ValueError("shell must not be empty")

    @property
    def effective_workers(self) -> int:
        """Workers that can ever be busy at once."""
        return min(self.concurrency, self.repetitions)


def env_int(name: str, default: int, env: Mapping[str, str] | None = None) -> int:
    """Read a positive integer from the environment, falling back on bad values."""
    env = os.environ if env is None else env
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
        if value < 1:
            raise ValueError("non-positive value")
    except ValueError:
        LOGGER.warning("invalid %s value %r; defaulting to %d", name, raw, default)
        return default
    return value


def env_str(name: str, default: str | None, env: Mapping[str, str] | None = None) -> str | None:
    env = os.environ if env is None else env
    return env.get(name) or default


__all__ = [
    "DEFAULT_CONCURRENCY",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_REPETITIONS",
    "DEFAULT_SHELL",
    "BenchmarkOptions",
    "BenchmarkTask",
    "env_int",
    "env_str",
]
