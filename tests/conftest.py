from __future__ import annotations

import threading
import time
from typing import Callable, Iterable

import pytest

from cmdbench.config import BenchmarkTask


class FakeExecutor:
    """Stands in for CommandExecutor: returns scripted samples and tracks overlap."""

    def __init__(
        self,
        samples: Iterable[int] | Callable[[int], int] = (),
        delay_s: float = 0.0,
        fail_on_call: int | None = None,
        error: BaseException | None = None,
    ) -> None:
        self._samples = samples if callable(samples) else list(samples)
        self._delay_s = delay_s
        self._fail_on_call = fail_on_call
        self._error = error or RuntimeError("boom")
        self._lock = threading.Lock()
        self.calls = 0
        self.active = 0
        self.max_active = 0
        self.tasks: list[BenchmarkTask] = []

    def __call__(self, task: BenchmarkTask) -> int:
        with self._lock:
            self.calls += 1
            call_number = self.calls
            self.active += 1
            self.max_active = max(self.max_active, self.active)
            self.tasks.append(task)
        try:
            if self._fail_on_call is not None and call_number == self._fail_on_call:
                raise self._error
            if self._delay_s:
                time.sleep(self._delay_s)
            if callable(self._samples):
                return self._samples(call_number)
            return self._samples[(call_number - 1) % len(self._samples)]
        finally:
            with self._lock:
                self.active -= 1


@pytest.fixture
def task() -> BenchmarkTask:
    return BenchmarkTask(command=("true",), quiet=True)


@pytest.fixture
def fake_executor_factory() -> Callable[..., FakeExecutor]:
    return FakeExecutor
