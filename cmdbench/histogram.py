from __future__ import annotations

import collections
from dataclasses import dataclass
from typing import Sequence

from .errors import EmptySampleSetError

BAR_WIDTH = 40

# (inclusive upper bound of the minimum sample in ms, rounding quotient)
QUOTIENT_DECADES: tuple[tuple[int, int], ...] = (
    (1_000, 1),
    (10_000, 10),
    (100_000, 100),
    (1_000_000, 1_000),
)
MAX_QUOTIENT = 10_000


@dataclass(frozen=True)
class HistogramBin:
    key: int
    time_ms: int
    count: int
    bar_length: int

    @property
    def bar(self) -> str:
        return "#" * self.bar_length


def rounding_quotient(minimum: int) -> int:
    """Bin width in ms, scaled to the decimal decade of the fastest sample."""
    for upper_bound, quotient in QUOTIENT_DECADES:
        if minimum <= upper_bound:
            return quotient
    return MAX_QUOTIENT


def build_histogram(samples: Sequence[int], minimum: int | None = None) -> tuple[HistogramBin, ...]:
    """Bucket samples into fixed-width bins ordered by time.

    ``minimum`` defaults to the smallest sample. The most populous bin gets a
    bar of ``BAR_WIDTH`` characters and every other bin scales against it.
    """
    if not samples:
        raise EmptySampleSetError("cannot build a histogram from zero samples")
    if minimum is None:
        minimum = min(samples)

    quotient = rounding_quotient(minimum)
    frequencies = collections.Counter(sample // quotient for sample in samples)
    max_count = max(frequencies.values())

    return tuple(
        HistogramBin(
            key=key,
            time_ms=key * quotient,
            count=count,
            bar_length=count * BAR_WIDTH // max_count,
        )
        for key, count in sorted(frequencies.items())
    )


__all__ = ["BAR_WIDTH", "HistogramBin", "build_histogram", "rounding_quotient"]
