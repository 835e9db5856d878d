"""Benchmark runners for the streaming pipeline (sequential and parallel).

These routines execute repeatable batches of pipeline runs over a grid of
board sizes and expansion worker counts, plus one sequential backtracking
baseline per size.

Outputs are structured dictionaries suitable for CSV export and plotting.
Validation hooks optionally check solution correctness, uniqueness and count.
"""
from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
from typing import Dict, List, Optional, Tuple

from . import settings
from .stats import (
    BenchmarkResults,
    BTEntry,
    ConfigSummary,
    ProgressPrinter,
    RunRecord,
    attach_speedups,
    summarize_runs,
)
from streaming_nqueens.backtracking import bt_all_solutions
from streaming_nqueens.pipeline import PipelineResult, run_pipeline
from streaming_nqueens.rendering import null_sink
from streaming_nqueens.solutions import expected_solutions
from streaming_nqueens.utils import is_valid_solution

# (N, workers, reporters, poll_interval, time_limit, validate)
ExperimentParams = Tuple[int, int, int, float, Optional[float], bool]


# Reusable workers -----------------------------------------------------------

def validate_pipeline_result(result: PipelineResult) -> None:
    """Raise ``AssertionError`` if a finished run is inconsistent."""
    N = result.size
    for board in result.solutions:
        if not is_valid_solution(board, N):
            raise AssertionError(f"Invalid solution emitted for N={N}: {board}")
    if len(result.solution_set) != len(result.solutions):
        raise AssertionError(f"Duplicate solutions emitted for N={N}")
    if not result.timed_out and result.reported != result.expected:
        raise AssertionError(
            f"Pipeline for N={N} reported {result.reported} solutions, expected {result.expected}"
        )
    if result.failures:
        raise AssertionError(f"{len(result.failures)} solutions failed to report for N={N}")


def run_single_pipeline_experiment(params: ExperimentParams) -> RunRecord:
    """Worker wrapper to invoke a single silent pipeline run (for parallel mapping)."""
    N, workers, reporters, poll_interval, time_limit, validate = params
    result = run_pipeline(
        N,
        workers=workers,
        reporters=reporters,
        emit=null_sink,
        poll_interval=poll_interval,
        time_limit=time_limit,
    )
    if validate:
        validate_pipeline_result(result)
    return {
        "n": N,
        "workers": workers,
        "reporters": reporters,
        "solutions": len(result.solutions),
        "expected": result.expected,
        "expanded": result.expanded,
        "discarded": result.discarded,
        "time": result.elapsed,
        "success": not result.timed_out and result.reported == result.expected,
        "timeout": result.timed_out,
    }


def run_bt_baseline(N: int, time_limit: Optional[float] = None, expected: Optional[int] = None) -> BTEntry:
    """Sequential backtracking reference for one board size."""
    solutions, nodes, elapsed = bt_all_solutions(N, time_limit=time_limit)
    count = len(solutions) if solutions is not None else -1
    if expected is not None and solutions is not None and count != expected:
        raise AssertionError(f"Backtracking found {count} solutions for N={N}, expected {expected}")
    return {"solutions": count, "nodes": nodes, "time": elapsed}


def _build_params(N: int, workers: int, validate: bool) -> ExperimentParams:
    reporters = settings.NUM_REPORTERS or workers
    return (N, workers, reporters, settings.POLL_INTERVAL, settings.RUN_TIMEOUT, validate)


def _collect(
    results: BenchmarkResults,
    N: int,
    runs_by_workers: Dict[int, List[RunRecord]],
    bt_entry: BTEntry,
) -> None:
    per_workers: Dict[int, ConfigSummary] = {
        workers: summarize_runs(runs) for workers, runs in sorted(runs_by_workers.items())
    }
    attach_speedups(per_workers)
    results[N] = {"pipeline": per_workers, "BT": bt_entry}


# Sequential runner ----------------------------------------------------------

def run_benchmark(
    N_values: List[int],
    worker_counts: List[int],
    runs: int,
    validate: bool = False,
    progress_label: str = "Benchmark",
) -> BenchmarkResults:
    """Run every (N, workers) combination ``runs`` times, one run at a time.

    Sequential execution keeps wall-clock timings free of interference from
    other runs; prefer it when the timings themselves are the object of study.
    """
    results: BenchmarkResults = {}
    total = len(N_values) * len(worker_counts) * runs
    progress = ProgressPrinter(total, progress_label)
    done = 0

    for N in N_values:
        print(f"\nBoard size N = {N}")
        bt_entry = run_bt_baseline(N, time_limit=settings.RUN_TIMEOUT,
                                   expected=expected_solutions(N) if validate else None)
        print(f"  [BT] {bt_entry['solutions']} solutions, nodes={bt_entry['nodes']}, time={bt_entry['time']:.4f}s")

        runs_by_workers: Dict[int, List[RunRecord]] = {}
        for workers in worker_counts:
            records: List[RunRecord] = []
            for _ in range(runs):
                record = run_single_pipeline_experiment(_build_params(N, workers, validate))
                records.append(record)
                done += 1
                progress.update(done, f"N={N}, workers={workers}, time={record['time']:.4f}s")
            runs_by_workers[workers] = records
        _collect(results, N, runs_by_workers, bt_entry)

    return results


# Parallel runner ------------------------------------------------------------

def run_benchmark_parallel(
    N_values: List[int],
    worker_counts: List[int],
    runs: int,
    validate: bool = False,
) -> BenchmarkResults:
    """Fan the runs of each N out over a process pool.

    Each run still uses its own thread pool inside the worker process, so
    timings are noisier than in ``run_benchmark``; throughput is higher.
    """
    results: BenchmarkResults = {}
    for N in N_values:
        print(f"\nBoard size N = {N}")
        bt_entry = run_bt_baseline(N, time_limit=settings.RUN_TIMEOUT,
                                   expected=expected_solutions(N) if validate else None)
        print(f"  [BT] {bt_entry['solutions']} solutions, nodes={bt_entry['nodes']}, time={bt_entry['time']:.4f}s")

        params = [_build_params(N, workers, validate) for workers in worker_counts for _ in range(runs)]
        print(f"  Running {len(params)} pipeline runs in parallel...")
        with ProcessPoolExecutor(max_workers=settings.NUM_PROCESSES) as executor:
            records = list(executor.map(run_single_pipeline_experiment, params))

        runs_by_workers: Dict[int, List[RunRecord]] = {}
        for record in records:
            runs_by_workers.setdefault(record["workers"], []).append(record)
        _collect(results, N, runs_by_workers, bt_entry)

    return results
