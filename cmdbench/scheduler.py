from __future__ import annotations

import logging
import queue
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable

from .config import BenchmarkTask
from .executor import CommandExecutor

LOGGER = logging.getLogger("cmdbench.scheduler")

Executor = Callable[[BenchmarkTask], int]
ProgressCallback = Callable[[int, int, int], None]


@dataclass(frozen=True)
class _JobFailure:
    error: BaseException


class RepetitionScheduler:
    """Fan repetitions of a task out to a fixed worker pool and collect samples.

    Every call to :meth:`run` builds its own pool of ``concurrency`` threads and
    its own result channel, and tears both down once all repetitions have
    reported. There is no timeout: a child that never exits holds its worker
    forever, and the run waits with it.
    """

    def __init__(
        self,
        concurrency: int,
        executor: Executor | None = None,
        on_sample: ProgressCallback | None = None,
    ) -> None:
        if concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {concurrency}")
        self._concurrency = concurrency
        self._executor = executor or CommandExecutor()
        self._on_sample = on_sample

    @property
    def concurrency(self) -> int:
        return self._concurrency

    @property
    def executor(self) -> Executor:
        return self._executor

    def run(self, repetitions: int, task: BenchmarkTask) -> list[int]:
        """Execute ``task`` ``repetitions`` times and return samples in arrival order."""
        if repetitions < 1:
            raise ValueError(f"repetitions must be >= 1, got {repetitions}")

        channel: queue.SimpleQueue[int | _JobFailure] = queue.SimpleQueue()

        def job(own_task: BenchmarkTask) -> None:
            try:
                sample = self._executor(own_task)
            except BaseException as exc:  # noqa: BLE001
                channel.put(_JobFailure(exc))
                return
            channel.put(sample)

        LOGGER.info(
            "Dispatching %d repetition(s) of %r across %d worker(s)",
            repetitions,
            task.display(),
            self._concurrency,
        )
        started = time.perf_counter()
        samples: list[int] = []
        # Cleared only once every repetition has reported.
        aborted = True
        pool = ThreadPoolExecutor(
            max_workers=self._concurrency, thread_name_prefix="cmdbench-worker"
        )
        try:
            for _ in range(repetitions):
                pool.submit(job, task.clone())

            for completed in range(1, repetitions + 1):
                message = channel.get()
                if isinstance(message, _JobFailure):
                    LOGGER.critical(
                        "Aborting run after %d/%d repetition(s): %s",
                        completed - 1,
                        repetitions,
                        message.error,
                    )
                    raise message.error
                samples.append(message)
                if self._on_sample is not None:
                    self._on_sample(message, completed, repetitions)
            aborted = False
        finally:
            # On abort, queued repetitions are dropped and running children
            # are left to exit on their own.
            pool.shutdown(wait=not aborted, cancel_futures=aborted)

        LOGGER.info(
            "Collected %d sample(s) in %.3fs", len(samples), time.perf_counter() - started
        )
        return samples


__all__ = ["RepetitionScheduler", "Executor", "ProgressCallback"]
