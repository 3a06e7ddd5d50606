"""
Command latency benchmarking harness.

This package runs a shell command repeatedly across a fixed pool of worker
threads, then summarises the collected wall-clock latencies as totals,
mean, standard deviation, p95/p99 and an optional fixed-width histogram.
"""

from .main import main

__all__ = ["main"]
