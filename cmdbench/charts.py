from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from .histogram import build_histogram, rounding_quotient
from .stats import LatencyReport

LOGGER = logging.getLogger("cmdbench.charts")

sns.set_style("whitegrid")
plt.rcParams["figure.dpi"] = 100
plt.rcParams["savefig.dpi"] = 300
plt.rcParams["font.size"] = 10
plt.rcParams["axes.labelsize"] = 11
plt.rcParams["axes.titlesize"] = 13
plt.rcParams["legend.fontsize"] = 9

BAR_COLOR = "#2E86AB"
PERCENTILE_COLORS = {
    "p95": "#F18F01",
    "p99": "#C73E1D",
}


def render_latency_histogram(
    report: LatencyReport,
    samples: Sequence[int],
    chart_path: Path,
) -> Path:
    """Render the report's histogram bins as a bar chart with percentile markers."""
    bins = report.histogram
    if bins is None:
        bins = build_histogram(sorted(samples), report.min)

    width = rounding_quotient(report.min)
    times = np.array([bin_.time_ms for bin_ in bins])
    counts = np.array([bin_.count for bin_ in bins])

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.bar(
        times,
        counts,
        width=width * 0.9,
        align="edge",
        color=BAR_COLOR,
        alpha=0.8,
        edgecolor="white",
        linewidth=1,
    )

    for label in ("p95", "p99"):
        value = getattr(report, label)
        ax.axvline(
            value,
            color=PERCENTILE_COLORS[label],
            linestyle="--",
            linewidth=1.5,
            label=f"{label} ({value}ms)",
        )

    ax.set_xlabel("Latency (ms)", fontweight="semibold")
    ax.set_ylabel("Repetitions", fontweight="semibold")
    ax.set_title(
        f"Latency Distribution ({report.count} runs, mean {report.mean}ms)",
        fontweight="bold",
        pad=15,
    )
    ax.set_ylim(bottom=0)
    ax.legend(loc="upper right", frameon=True)
    ax.grid(True, alpha=0.3, axis="y", linestyle="--")

    plt.tight_layout()
    fig.savefig(chart_path, bbox_inches="tight", facecolor="white")
    plt.close(fig)

    LOGGER.info("Rendering chart %s", chart_path)
    return chart_path


__all__ = ["render_latency_histogram"]
