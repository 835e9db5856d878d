"""CSV export utilities for benchmark outputs (aggregates and raw runs).

These helpers materialize concise per-(N, workers) CSV summaries as well as
full per-run raw data for downstream analysis or spreadsheet inspection.
"""
from __future__ import annotations

import csv
import os
from typing import Any, List, Optional

import pandas as pd

from . import settings
from .stats import BenchmarkResults


def build_suffix() -> str:
    """Filename suffix from ``RUN_TAG`` and the datestamp policy (or empty)."""
    parts: List[str] = []
    if settings.RUN_TAG:
        parts.append(str(settings.RUN_TAG))
    if settings.DATE_IN_FILENAMES and settings.RUN_ID:
        parts.append(str(settings.RUN_ID))
    return ("_" + "_".join(parts)) if parts else ""


def _fmt(value: Optional[float]) -> Any:
    return "" if value is None else value


def save_results_to_csv(results: BenchmarkResults, out_dir: str) -> str:
    """Write one row per (N, workers) with timing and work aggregates.

    Column names follow lowercase snake_case; ``bt_*`` columns repeat the
    sequential backtracking baseline for the same N.
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"results_pipeline{build_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "n",
            "workers",
            "total_runs",
            "successes",
            "timeouts",
            "success_rate",
            "time_mean",
            "time_median",
            "time_std",
            "time_min",
            "time_max",
            "expanded_mean",
            "discarded_mean",
            "speedup",
            "bt_solutions",
            "bt_nodes",
            "bt_time_seconds",
        ])
        for N in sorted(results):
            entry = results[N]
            bt = entry["BT"]
            for workers, summary in sorted(entry["pipeline"].items()):
                t = summary.get("success_time", {})
                writer.writerow([
                    N,
                    workers,
                    summary.get("total_runs", 0),
                    summary.get("successes", 0),
                    summary.get("timeouts", 0),
                    summary.get("success_rate", 0.0),
                    _fmt(t.get("mean")),
                    _fmt(t.get("median")),
                    _fmt(t.get("std")),
                    _fmt(t.get("min")),
                    _fmt(t.get("max")),
                    _fmt(summary.get("expanded", {}).get("mean")),
                    _fmt(summary.get("discarded", {}).get("mean")),
                    _fmt(summary.get("speedup")),
                    bt["solutions"],
                    bt["nodes"],
                    bt["time"],
                ])

    print(f"Saved aggregate results: {filename}")
    return filename


def results_to_frame(results: BenchmarkResults) -> pd.DataFrame:
    """Flatten every raw run into a tidy DataFrame (one row per run)."""
    rows = []
    for N in sorted(results):
        for workers, summary in sorted(results[N]["pipeline"].items()):
            for index, run in enumerate(summary.get("raw_runs", [])):
                row = dict(run)
                row["run"] = index
                rows.append(row)
    columns = [
        "n", "workers", "reporters", "run", "solutions", "expected",
        "expanded", "discarded", "time", "success", "timeout",
    ]
    return pd.DataFrame(rows, columns=columns)


def save_raw_data_to_csv(results: BenchmarkResults, out_dir: str) -> str:
    """Write every individual run to ``raw_runs_pipeline*.csv``."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"raw_runs_pipeline{build_suffix()}.csv")
    results_to_frame(results).to_csv(filename, index=False)
    print(f"Saved raw run data: {filename}")
    return filename
