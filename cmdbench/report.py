from __future__ import annotations

from .stats import LatencyReport


def format_report(report: LatencyReport) -> str:
    lines = [
        f"Total time: {report.total}ms",
        f"Repetitions: {report.count}",
        f"Average time: {report.mean}ms",
        f"Min: {report.min}ms",
        f"Max: {report.max}ms",
        f"Standard deviation: {report.stddev}",
        f"p95: {report.p95}ms",
        f"p99: {report.p99}ms",
    ]
    if report.histogram is not None:
        lines.append("Histogram:")
        lines.append("time:\tcount\tnormalized bar")
        lines.extend(
            f"{bin_.time_ms}ms\t{bin_.count}\t{bin_.bar}" for bin_ in report.histogram
        )
    return "\n".join(lines)


__all__ = ["format_report"]
