"""Typed result shapes and statistics helpers for the benchmark harness.

Defines ``TypedDict`` structures for benchmark outputs and provides utilities
to compute aggregate statistics across repeated pipeline runs.
"""
from __future__ import annotations

import statistics
from typing import Dict, List, Optional, TypedDict


class StatsSummary(TypedDict, total=False):
    count: int
    mean: Optional[float]
    median: Optional[float]
    std: Optional[float]
    min: Optional[float]
    max: Optional[float]
    q25: Optional[float]
    q75: Optional[float]
    range: Optional[float]


class RunRecord(TypedDict):
    n: int
    workers: int
    reporters: int
    solutions: int
    expected: int
    expanded: int
    discarded: int
    time: float
    success: bool
    timeout: bool


class BTEntry(TypedDict):
    solutions: int
    nodes: int
    time: float


class ConfigSummary(TypedDict, total=False):
    total_runs: int
    successes: int
    timeouts: int
    success_rate: float
    timeout_rate: float
    all_time: StatsSummary
    success_time: StatsSummary
    expanded: StatsSummary
    discarded: StatsSummary
    speedup: Optional[float]
    raw_runs: List[RunRecord]


class SizeResults(TypedDict):
    pipeline: Dict[int, ConfigSummary]
    BT: BTEntry


BenchmarkResults = Dict[int, SizeResults]


class ProgressPrinter:
    """Minimal, stdout-only progress reporter for long-running loops.

    Parameters
    ----------
    total : int
        Total number of steps/items expected. Values <= 0 are coerced to 1 to
        avoid division by zero when reporting percentages.
    label : str
        Short label printed in front of the progress counters.
    """

    def __init__(self, total: int, label: str):
        self.total = max(1, total)
        self.label = label

    def update(self, index: int, detail: str = "") -> None:
        """Print a single-line progress update to stdout."""
        percent = (index / self.total) * 100
        suffix = f" - {detail}" if detail else ""
        print(f"[{self.label}] {index}/{self.total} ({percent:.0f}%)" + suffix)


def compute_detailed_statistics(values: List[float]) -> StatsSummary:
    """Compute summary statistics for a numeric sequence.

    Returns count, mean, median, population std, min, max, 25th and 75th
    percentiles (q25, q75) and range. When ``values`` is empty, all numeric
    fields are ``None`` and ``count`` is 0 to keep CSV/plot generation
    consistent.
    """
    if not values:
        return {
            "count": 0,
            "mean": None,
            "median": None,
            "std": None,
            "min": None,
            "max": None,
            "q25": None,
            "q75": None,
            "range": None,
        }

    sorted_vals = sorted(values)
    n = len(values)

    mean_val = statistics.mean(values)
    median_val = statistics.median(values)
    min_val = min(values)
    max_val = max(values)
    std_val = statistics.pstdev(values) if n > 1 else 0

    q25 = sorted_vals[n // 4] if n >= 4 else min_val
    q75 = sorted_vals[3 * n // 4] if n >= 4 else max_val

    return {
        "count": n,
        "mean": mean_val,
        "median": median_val,
        "std": std_val,
        "min": min_val,
        "max": max_val,
        "q25": q25,
        "q75": q75,
        "range": max_val - min_val,
    }


def summarize_runs(runs: List[RunRecord]) -> ConfigSummary:
    """Aggregate repeated runs of one (N, workers) configuration.

    A run is a success when it terminated on its own (no timeout) having
    reported exactly the expected number of solutions.
    """
    successes = [r for r in runs if r["success"]]
    timeouts = [r for r in runs if r["timeout"]]
    total = len(runs)
    return {
        "total_runs": total,
        "successes": len(successes),
        "timeouts": len(timeouts),
        "success_rate": len(successes) / total if total else 0,
        "timeout_rate": len(timeouts) / total if total else 0,
        "all_time": compute_detailed_statistics([r["time"] for r in runs]),
        "success_time": compute_detailed_statistics([r["time"] for r in successes]),
        "expanded": compute_detailed_statistics([float(r["expanded"]) for r in runs]),
        "discarded": compute_detailed_statistics([float(r["discarded"]) for r in runs]),
        "speedup": None,
        "raw_runs": list(runs),
    }


def attach_speedups(per_workers: Dict[int, ConfigSummary]) -> None:
    """Fill ``speedup`` relative to the smallest worker count, in place.

    Speedup is ``mean_time(baseline) / mean_time(workers)`` over successful
    runs; it stays None when either mean is missing or zero.
    """
    if not per_workers:
        return
    baseline_workers = min(per_workers)
    baseline = per_workers[baseline_workers].get("success_time", {}).get("mean")
    for summary in per_workers.values():
        mean = summary.get("success_time", {}).get("mean")
        if baseline and mean:
            summary["speedup"] = baseline / mean
        else:
            summary["speedup"] = None
