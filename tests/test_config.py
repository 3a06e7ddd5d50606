"""Tests for benchmark configuration objects."""

import dataclasses
from pathlib import Path

import pytest

from cmdbench.config import BenchmarkOptions, BenchmarkTask, env_int, env_str


class TestBenchmarkTask:
    """Tests for BenchmarkTask."""

    def test_from_argv_stores_tuple(self):
        task = BenchmarkTask.from_argv(["sleep 1", "x"], quiet=True)

        assert task.command == ("sleep 1", "x")
        assert task.quiet is True
        assert task.display() == "sleep 1 x"

    def test_list_command_is_normalised(self):
        task = BenchmarkTask(command=["true"])  # type: ignore[arg-type]

        assert task.command == ("true",)

    def test_empty_command_rejected(self):
        with pytest.raises(ValueError, match="empty"):
            BenchmarkTask(command=())

    def test_clone_is_equal_but_independent(self):
        task = BenchmarkTask(command=("true",))

        clone = task.clone()

        assert clone == task
        assert clone is not task

    def test_task_is_immutable(self):
        task = BenchmarkTask(command=("true",))

        with pytest.raises(dataclasses.FrozenInstanceError):
            task.quiet = True  # type: ignore[misc]


class TestBenchmarkOptions:
    """Tests for BenchmarkOptions validation."""

    def test_defaults(self):
        options = BenchmarkOptions(task=BenchmarkTask(command=("true",)))

        assert options.repetitions == 1
        assert options.concurrency == 1
        assert options.histogram is False
        assert options.shell == "sh"
        assert options.output_dir is None

    @pytest.mark.parametrize(
        "field,value",
        [("repetitions", 0), ("repetitions", -3), ("concurrency", 0), ("shell", "")],
    )  # fmt: skip
    def test_invalid_values_rejected(self, field, value):
        with pytest.raises(ValueError):
            BenchmarkOptions(task=BenchmarkTask(command=("true",)), **{field: value})

    @pytest.mark.parametrize(
        "repetitions,concurrency,expected",
        [(10, 4, 4), (2, 8, 2), (1, 1, 1)],
    )  # fmt: skip
    def test_effective_workers(self, repetitions, concurrency, expected):
        options = BenchmarkOptions(
            task=BenchmarkTask(command=("true",)),
            repetitions=repetitions,
            concurrency=concurrency,
            output_dir=Path("out"),
        )

        assert options.effective_workers == expected


class TestEnvironmentDefaults:
    """Tests for environment variable helpers."""

    def test_env_int_reads_value(self):
        assert env_int("CMDBENCH_X", 1, env={"CMDBENCH_X": "12"}) == 12

    def test_env_int_missing_uses_default(self):
        assert env_int("CMDBENCH_X", 3, env={}) == 3

    @pytest.mark.parametrize("raw", ["abc", "0", "-2", "1.5"])
    def test_env_int_invalid_falls_back(self, raw, caplog):
        with caplog.at_level("WARNING", logger="cmdbench.config"):
            assert env_int("CMDBENCH_X", 5, env={"CMDBENCH_X": raw}) == 5

        assert "invalid CMDBENCH_X value" in caplog.text

    def test_env_str_prefers_environment(self):
        assert env_str("CMDBENCH_SHELL", "sh", env={"CMDBENCH_SHELL": "bash"}) == "bash"
        assert env_str("CMDBENCH_SHELL", "sh", env={"CMDBENCH_SHELL": ""}) == "sh"
