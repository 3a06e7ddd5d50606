from __future__ import annotations

import logging
import subprocess
import time

from .config import DEFAULT_SHELL, BenchmarkTask
from .errors import SpawnError

LOGGER = logging.getLogger("cmdbench.executor")

NANOS_PER_MILLI = 1_000_000


class CommandExecutor:
    """Run one instance of a benchmark task through a shell and time it.

    The command tokens are appended to ``<shell> -c``: the first token is the
    script, further tokens become its positional parameters. When the task is
    not quiet the child inherits our stdout/stderr, so output of concurrent
    repetitions interleaves freely.
    """

    def __init__(self, shell: str = DEFAULT_SHELL) -> None:
        self._shell = shell

    @property
    def shell(self) -> str:
        return self._shell

    def build_argv(self, task: BenchmarkTask) -> list[str]:
        return [self._shell, "-c", *task.command]

    def execute(self, task: BenchmarkTask) -> int:
        """Block until the command exits and return the elapsed milliseconds."""
        argv = self.build_argv(task)
        stream = subprocess.DEVNULL if task.quiet else None
        started = time.perf_counter_ns()
        try:
            completed = subprocess.run(argv, stdout=stream, stderr=stream, check=False)
        except OSError as exc:
            raise SpawnError(task.command, self._shell) from exc
        elapsed_ms = (time.perf_counter_ns() - started) // NANOS_PER_MILLI

        if completed.returncode != 0:
            # Exit status is informational only; latency is all we measure.
            LOGGER.debug(
                "command %r exited with status %d after %dms",
                task.display(),
                completed.returncode,
                elapsed_ms,
            )
        return elapsed_ms

    __call__ = execute


__all__ = ["CommandExecutor"]
