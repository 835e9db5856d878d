"""Visualization utilities for benchmark outputs.

Chart map (filenames -> content)
--------------------------------
- 01_time_vs_N_log_scale.png: mean wall-clock time of successful pipeline
    runs per worker count, plus the sequential backtracking baseline.
    X: N (board size). Y: time [s] on a log scale.
- 02_speedup_vs_workers.png: speedup relative to the smallest worker count,
    one line per N, with the ideal linear speedup for reference.
- 03_work_vs_N.png: boards expanded and candidates discarded per run vs N
    (log scale) with a log-linear trend fitted on the expanded counts.
- 04_time_distribution.png: boxplot of raw run times per worker count,
    grouped by N.

All functions write PNG files into ``out_dir`` (created if missing), print the
saved path, and return the filename.
"""
from __future__ import annotations

import os
from typing import List

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from .reporting import build_suffix, results_to_frame
from .stats import BenchmarkResults


def _worker_counts(results: BenchmarkResults) -> List[int]:
    counts = set()
    for entry in results.values():
        counts.update(entry["pipeline"].keys())
    return sorted(counts)


def plot_time_vs_N(results: BenchmarkResults, out_dir: str) -> str:
    os.makedirs(out_dir, exist_ok=True)
    N_values = sorted(results)

    plt.figure(figsize=(12, 8))
    markers = ["o", "s", "^", "D", "v", "P"]
    for i, workers in enumerate(_worker_counts(results)):
        times = []
        for N in N_values:
            summary = results[N]["pipeline"].get(workers, {})
            mean = summary.get("success_time", {}).get("mean") if summary else None
            times.append(max(mean, 1e-6) if mean else np.nan)
        plt.semilogy(N_values, times, marker=markers[i % len(markers)], linewidth=2, markersize=8,
                     label=f"Pipeline ({workers} workers)")

    bt_times = [max(results[N]["BT"]["time"], 1e-6) for N in N_values]
    plt.semilogy(N_values, bt_times, marker="x", linestyle="--", linewidth=2, markersize=8,
                 color="black", label="Backtracking (sequential)")

    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Average time [s] (log scale)", fontsize=12)
    plt.title("Execution Time vs Problem Size\n(Successful pipeline runs only)", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    plt.xticks(N_values)

    fname = os.path.join(out_dir, f"01_time_vs_N_log_scale{build_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    print(f"Saved execution-time chart (log scale): {fname}")
    return fname


def plot_speedup_vs_workers(results: BenchmarkResults, out_dir: str) -> str:
    os.makedirs(out_dir, exist_ok=True)
    worker_counts = _worker_counts(results)

    plt.figure(figsize=(12, 8))
    for N in sorted(results):
        per_workers = results[N]["pipeline"]
        xs = [w for w in worker_counts if per_workers.get(w, {}).get("speedup")]
        ys = [per_workers[w]["speedup"] for w in xs]
        if xs:
            plt.plot(xs, ys, marker="o", linewidth=2, markersize=7, label=f"N={N}")

    if worker_counts:
        base = worker_counts[0]
        plt.plot(worker_counts, [w / base for w in worker_counts], linestyle=":", color="gray", label="Ideal")
    plt.xlabel("Expansion workers", fontsize=12)
    plt.ylabel("Speedup", fontsize=12)
    plt.title("Speedup vs Expansion Workers", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    plt.xticks(worker_counts)

    fname = os.path.join(out_dir, f"02_speedup_vs_workers{build_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    print(f"Saved speedup chart: {fname}")
    return fname


def plot_work_vs_N(results: BenchmarkResults, out_dir: str) -> str:
    os.makedirs(out_dir, exist_ok=True)
    N_values = sorted(results)
    expanded = []
    discarded = []
    for N in N_values:
        summaries = list(results[N]["pipeline"].values())
        expanded.append(np.mean([s.get("expanded", {}).get("mean") or 0 for s in summaries]) if summaries else 0)
        discarded.append(np.mean([s.get("discarded", {}).get("mean") or 0 for s in summaries]) if summaries else 0)

    plt.figure(figsize=(12, 8))
    plt.semilogy(N_values, [max(e, 1) for e in expanded], marker="o", linewidth=2, label="Boards expanded")
    plt.semilogy(N_values, [max(d, 1) for d in discarded], marker="s", linewidth=2, label="Unsafe candidates discarded")

    positive = [(n, e) for n, e in zip(N_values, expanded) if e > 0]
    if len(positive) >= 2:
        xs = np.array([n for n, _ in positive], dtype=float)
        z = np.polyfit(xs, np.log(np.array([e for _, e in positive])), 1)
        x_trend = np.linspace(xs.min(), xs.max(), 100)
        plt.semilogy(x_trend, np.exp(np.poly1d(z)(x_trend)), "r--", alpha=0.8,
                     label=f"Trend: x{np.exp(z[0]):.2f} per extra row")

    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Count per run (log scale)", fontsize=12)
    plt.title("Pipeline Work vs Problem Size", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    plt.xticks(N_values)

    fname = os.path.join(out_dir, f"03_work_vs_N{build_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    print(f"Saved work chart: {fname}")
    return fname


def plot_time_distribution(results: BenchmarkResults, out_dir: str) -> str:
    os.makedirs(out_dir, exist_ok=True)
    frame = results_to_frame(results)
    frame["size"] = frame["n"].map(lambda n: f"N={n}")

    plt.figure(figsize=(14, 8))
    sns.boxplot(data=frame, x="workers", y="time", hue="size",
                hue_order=[f"N={n}" for n in sorted(results)])
    plt.yscale("log")
    plt.xlabel("Expansion workers", fontsize=12)
    plt.ylabel("Execution time [s]", fontsize=12)
    plt.title("Execution Time Distribution\n(Boxplot shows median, quartiles, outliers)", fontsize=14)
    plt.grid(True, alpha=0.3)

    fname = os.path.join(out_dir, f"04_time_distribution{build_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    print(f"Saved time distribution chart: {fname}")
    return fname


def plot_all(results: BenchmarkResults, out_dir: str) -> List[str]:
    """Generate every chart in the chart map."""
    return [
        plot_time_vs_N(results, out_dir),
        plot_speedup_vs_workers(results, out_dir),
        plot_work_vs_N(results, out_dir),
        plot_time_distribution(results, out_dir),
    ]
