from __future__ import annotations


class CmdbenchError(Exception):
    """Base class for errors raised by the benchmark harness."""


class SpawnError(CmdbenchError):
    """Raised when the benchmarked command cannot be started at all."""

    def __init__(self, command: tuple[str, ...], shell: str) -> None:
        super().__init__(f"failed to start {shell!r} for command {' '.join(command)!r}")
        self.command = command
        self.shell = shell


class EmptySampleSetError(CmdbenchError, ValueError):
    """Raised when statistics are requested for a run with no samples."""


__all__ = ["CmdbenchError", "SpawnError", "EmptySampleSetError"]
