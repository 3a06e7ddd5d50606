from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Sequence

import pandas as pd

from .charts import render_latency_histogram
from .config import BenchmarkOptions
from .stats import LatencyReport

LOGGER = logging.getLogger("cmdbench.export")

SAMPLE_COLUMNS = ["sequence", "latency_ms"]
SAMPLES_FILENAME = "samples.csv"
SUMMARY_FILENAME = "summary.json"
CHART_FILENAME = "latency_histogram.png"


def build_samples_dataframe(samples: Sequence[int]) -> pd.DataFrame:
    """One row per sample, numbered in the order the workers reported them."""
    if not samples:
        return pd.DataFrame(columns=SAMPLE_COLUMNS)
    return pd.DataFrame(
        {
            "sequence": range(1, len(samples) + 1),
            "latency_ms": list(samples),
        },
        columns=SAMPLE_COLUMNS,
    )


def build_summary(options: BenchmarkOptions, report: LatencyReport) -> dict:
    return {
        "command": list(options.task.command),
        "quiet": options.task.quiet,
        "repetitions": options.repetitions,
        "concurrency": options.concurrency,
        "shell": options.shell,
        "report": report.to_dict(),
    }


def write_artefacts(
    options: BenchmarkOptions,
    samples: Sequence[int],
    report: LatencyReport,
    output_dir: Path,
) -> dict[str, Path]:
    """Write the samples CSV, the JSON summary and the histogram chart."""
    output_dir.mkdir(parents=True, exist_ok=True)

    samples_path = output_dir / SAMPLES_FILENAME
    df = build_samples_dataframe(samples)
    df.to_csv(samples_path, index=False)
    LOGGER.info("Saved %d sample(s) to %s", len(df), samples_path)

    summary_path = output_dir / SUMMARY_FILENAME
    with open(summary_path, "w", encoding="utf-8") as f:
        json.dump(build_summary(options, report), f, indent=2)
    LOGGER.info("Summary written to %s", summary_path)

    chart_path = render_latency_histogram(report, samples, output_dir / CHART_FILENAME)

    return {"samples": samples_path, "summary": summary_path, "chart": chart_path}


__all__ = [
    "CHART_FILENAME",
    "SAMPLES_FILENAME",
    "SUMMARY_FILENAME",
    "build_samples_dataframe",
    "build_summary",
    "write_artefacts",
]
