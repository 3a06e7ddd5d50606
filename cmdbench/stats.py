"""Summary statistics over a completed set of latency samples.

Everything here is integer arithmetic on milliseconds, matching what the
report prints: the mean truncates, percentiles are either a sample or the
truncated average of two neighbouring samples. The only float is the
standard deviation, taken as the square root of the integer variance at the
very end; treat it as advisory.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Iterable, Sequence

from .errors import EmptySampleSetError
from .histogram import HistogramBin, build_histogram


@dataclass(frozen=True)
class LatencyReport:
    total: int
    count: int
    min: int
    max: int
    mean: int
    stddev: float
    p95: int
    p99: int
    histogram: tuple[HistogramBin, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if data["histogram"] is not None:
            data["histogram"] = list(data["histogram"])
        return data


def percentile(sorted_samples: Sequence[int], percent: int) -> int:
    """Return the ``percent``-th percentile of ascending ``sorted_samples``.

    The rank is ``percent / 100 * n - 1``. A whole rank averages that sample
    with the next one (the next one is clamped to the last sample); a
    fractional rank rounds up to the following sample. The rank is evaluated
    in hundredths so no float rounding can move it across an integer.
    """
    n = len(sorted_samples)
    if n == 0:
        raise EmptySampleSetError("cannot take a percentile of zero samples")
    if not 0 < percent <= 100:
        raise ValueError(f"percent must be in (0, 100], got {percent}")

    rank_hundredths = percent * n - 100
    if rank_hundredths % 100 == 0:
        index = rank_hundredths // 100
        upper = min(index + 1, n - 1)
        return (sorted_samples[index] + sorted_samples[upper]) // 2

    index = -(-rank_hundredths // 100)
    index = max(0, min(index, n - 1))
    return sorted_samples[index]


def aggregate(samples: Iterable[int], histogram: bool = False) -> LatencyReport:
    """Build a report from samples in any order.

    The input is copied and sorted; the caller's collection is left as is.
    """
    ordered = sorted(samples)
    n = len(ordered)
    if n == 0:
        raise EmptySampleSetError("cannot aggregate zero samples; repetitions must be >= 1")
    if ordered[0] < 0:
        raise ValueError(f"latency samples must be non-negative, got {ordered[0]}")

    total = sum(ordered)
    sum_squares = sum(sample * sample for sample in ordered)
    mean = total // n
    variance = sum_squares // n - mean * mean
    stddev = math.sqrt(float(variance))

    return LatencyReport(
        total=total,
        count=n,
        min=ordered[0],
        max=ordered[-1],
        mean=mean,
        stddev=stddev,
        p95=percentile(ordered, 95),
        p99=percentile(ordered, 99),
        histogram=build_histogram(ordered, ordered[0]) if histogram else None,
    )


__all__ = ["LatencyReport", "aggregate", "percentile"]
