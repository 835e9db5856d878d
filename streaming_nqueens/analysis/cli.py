"""Command-line interface and high-level pipelines for streaming N-Queens.

This module wires together configuration loading, a single pipeline run
(``solve``), the benchmark grid (``benchmark``) and the quick regression
check. It isolates I/O, argument parsing and progress reporting from the core
pipeline modules so that the rest of the codebase remains easy to test
programmatically.
"""
from __future__ import annotations

import argparse
import os
import tempfile
from pathlib import Path
from time import perf_counter
from typing import List, Optional

from . import settings
from .experiments import (
    run_benchmark,
    run_benchmark_parallel,
    validate_pipeline_result,
)
from .plots import plot_all
from .reporting import save_raw_data_to_csv, save_results_to_csv
from .stats import BenchmarkResults
from config_manager import ConfigManager, default_config_path
from streaming_nqueens.backtracking import bt_all_solutions
from streaming_nqueens.pipeline import PipelineAborted, PipelineResult, run_pipeline
from streaming_nqueens.rendering import null_sink, print_sink
from streaming_nqueens.solutions import expected_solutions


# ------------- Utils --------------------------------------------------------

def parse_int_list(values: Optional[List[str]]) -> Optional[List[int]]:
    """Normalize repeated/comma-separated integer flags into a sorted list.

    Accepts repeated flags (e.g., ``-n 4 -n 8``) and comma-separated lists
    (e.g., ``-n 4,6,8``). Returns ``None`` when no value is provided so that
    callers can fall back to the configured defaults.
    """
    if not values:
        return None
    selected: List[int] = []
    for entry in values:
        for token in entry.split(","):
            token = token.strip()
            if token:
                try:
                    selected.append(int(token))
                except ValueError:
                    raise ValueError(f"Expected an integer, got '{token}'") from None
    unique = sorted(set(selected))
    return unique or None


def apply_configuration(config_path: Optional[str]) -> Optional[ConfigManager]:
    """Load configuration and copy its values into ``settings``.

    With an explicit ``config_path`` a missing file is an error. Without one,
    the default path is used only when the file exists; otherwise built-in
    settings apply and None is returned.
    """
    if config_path is None:
        config_path = default_config_path()
        if not Path(config_path).exists():
            return None
    config_mgr = ConfigManager(config_path)

    pipeline_settings = config_mgr.get_pipeline_settings()
    if pipeline_settings:
        settings.BOARD_SIZE = config_mgr.get_board_size(settings.BOARD_SIZE)
        workers = pipeline_settings.get("workers")
        reporters = pipeline_settings.get("reporters")
        settings.set_parallelism(
            workers=int(workers) if workers else None,
            reporters=int(reporters) if reporters else None,
            poll_interval=float(pipeline_settings.get("poll_interval", settings.POLL_INTERVAL)),
        )

    experiment_settings = config_mgr.get_experiment_settings()
    if experiment_settings:
        settings.N_VALUES = [int(n) for n in experiment_settings.get("N_values", settings.N_VALUES)]
        settings.WORKER_COUNTS = [int(w) for w in experiment_settings.get("worker_counts", settings.WORKER_COUNTS)]
        settings.RUNS_PER_CONFIG = int(experiment_settings.get("runs_per_config", settings.RUNS_PER_CONFIG))
        timeout = experiment_settings.get("run_timeout", settings.RUN_TIMEOUT)
        settings.RUN_TIMEOUT = float(timeout) if timeout is not None else None
        settings.OUT_DIR = experiment_settings.get("output_dir", settings.OUT_DIR)

    return config_mgr


def validate_against_backtracking(result: PipelineResult) -> None:
    """Check a finished run and compare its solution set with backtracking."""
    validate_pipeline_result(result)
    reference, _, _ = bt_all_solutions(result.size)
    assert reference is not None
    expected_set = frozenset(tuple(board.columns) for board in reference)
    if result.solution_set != expected_set:
        missing = len(expected_set - result.solution_set)
        extra = len(result.solution_set - expected_set)
        raise AssertionError(
            f"Pipeline solutions for N={result.size} differ from backtracking: "
            f"{missing} missing, {extra} unexpected"
        )


# ------------- Pipeline: solve ---------------------------------------------

def main_solve(size: int, quiet: bool = False, validate: bool = False) -> PipelineResult:
    """Run the pipeline once for ``size``, printing every solution."""
    expected = expected_solutions(size)
    reporters = settings.effective_reporters()
    print(f"\nSolving N = {size} ({expected} known solutions)")
    print(f"Expansion workers: {settings.NUM_WORKERS} - Reporters: {reporters}")

    result = run_pipeline(
        size,
        workers=settings.NUM_WORKERS,
        reporters=reporters,
        emit=null_sink if quiet else print_sink,
        poll_interval=settings.POLL_INTERVAL,
    )

    print(f"\nReported {result.reported}/{result.expected} solutions in {result.elapsed:.3f}s")
    print(f"Boards expanded: {result.expanded} - Unsafe candidates discarded: {result.discarded}")
    if result.failures:
        print(f"{len(result.failures)} solutions could not be reported.")
    if validate:
        validate_against_backtracking(result)
        print("Validation passed: solution set matches backtracking.")
    return result


# ------------- Pipeline: benchmark -----------------------------------------

def main_benchmark(
    mode: str,
    N_values: List[int],
    worker_counts: List[int],
    runs: int,
    validate: bool = False,
    plots: bool = True,
) -> BenchmarkResults:
    """Run the benchmark grid, then write CSV reports and charts."""
    start = perf_counter()
    print("\n" + "=" * 60)
    print(f"BENCHMARK ({mode.upper()})")
    print("=" * 60)
    print(f"N values: {N_values}")
    print(f"Worker counts: {worker_counts}")
    print(f"Runs per configuration: {runs}")
    print(f"Per-run timeout: {settings.RUN_TIMEOUT}s" if settings.RUN_TIMEOUT else "Per-run timeout: unlimited")
    for N in N_values:
        expected_solutions(N)

    if mode == "sequential":
        results = run_benchmark(N_values, worker_counts, runs, validate=validate)
    else:
        print(f"Worker processes: {settings.NUM_PROCESSES} (available CPU cores: {os.cpu_count()})")
        results = run_benchmark_parallel(N_values, worker_counts, runs, validate=validate)

    print("\nGenerating CSV reports...")
    save_results_to_csv(results, settings.OUT_DIR)
    save_raw_data_to_csv(results, settings.OUT_DIR)
    if plots:
        print("Generating charts...")
        plot_all(results, settings.OUT_DIR)

    total_time = perf_counter() - start
    print("\nBenchmark completed!")
    print(f"Total time: {total_time:.1f}s ({total_time/60:.1f} minutes)")
    return results


# ------------- Quick regression --------------------------------------------

def run_quick_regression_tests() -> None:
    """Execute a fast end-to-end check of the pipeline and the reporting path.

    Verifies that:
    - N=4 and N=6 produce exactly the backtracking solution sets with one
      and with several expansion workers.
    - N=3 (no solutions) terminates without emitting anything.
    - The benchmark pipeline produces a non-empty CSV in a temporary folder.
    """
    print("Running quick regression tests...")

    for N in (4, 6):
        for workers in (1, 4):
            result = run_pipeline(N, workers=workers, emit=null_sink, poll_interval=0.05, time_limit=30.0)
            if result.timed_out:
                raise AssertionError(f"Pipeline timed out for N={N} with {workers} workers.")
            validate_against_backtracking(result)
            print(f"  N={N}, workers={workers}: {len(result.solutions)} solutions, time={result.elapsed:.4f}s")

    empty = run_pipeline(3, workers=2, emit=null_sink, poll_interval=0.05, time_limit=5.0)
    if empty.timed_out or empty.solutions:
        raise AssertionError("Pipeline for N=3 should terminate immediately with no solutions.")
    print("  N=3: terminated with no solutions")

    results = run_benchmark([4], [1, 2], runs=2, validate=True, progress_label="Quick regression benchmark")
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(save_results_to_csv(results, tmpdir))
        if not csv_path.exists() or csv_path.stat().st_size == 0:
            raise AssertionError("Results CSV was not generated successfully during quick tests.")

    print("Quick regression tests passed.")


# ------------- CLI wiring --------------------------------------------------

def build_arg_parser():
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(description="Enumerate N-Queens solutions with a concurrent queue pipeline.")
    parser.add_argument(
        "command",
        nargs="?",
        choices=["solve", "benchmark"],
        default="solve",
        help="solve: run the pipeline once and print every solution (default); benchmark: run the timing grid.",
    )
    parser.add_argument("--size", "-n", type=int, help="Board size for 'solve' (default: from config, else 8).")
    parser.add_argument("--workers", "-w", type=int, help="Expansion threads (default: number of CPUs).")
    parser.add_argument("--reporters", "-r", type=int, help="Reporting threads (default: same as --workers).")
    parser.add_argument("--poll-interval", type=float, help="Termination monitor poll interval in seconds.")
    parser.add_argument("--quiet", "-q", action="store_true", help="Do not print solutions, only the summary.")
    parser.add_argument(
        "--mode",
        choices=["sequential", "parallel"],
        default="sequential",
        help="Benchmark execution: one run at a time (default) or runs spread over worker processes.",
    )
    parser.add_argument("--sizes", action="append", help="Benchmark board sizes (comma-separated or multiple flags).")
    parser.add_argument("--workers-list", action="append", help="Benchmark worker counts (comma-separated or multiple flags).")
    parser.add_argument("--runs", type=int, help="Benchmark runs per configuration.")
    parser.add_argument("--no-plots", action="store_true", help="Skip chart generation in benchmarks.")
    parser.add_argument("--config", default=None, help="Path to configuration file (default: config.json when present).")
    parser.add_argument("--quick-test", action="store_true", help="Run quick regression tests and exit.")
    parser.add_argument("--validate", action="store_true", help="Validate solutions against the backtracking reference.")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: parse arguments and dispatch to the chosen pipeline."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.quick_test:
        run_quick_regression_tests()
        return

    try:
        apply_configuration(args.config)
        if args.workers is not None or args.reporters is not None or args.poll_interval is not None:
            settings.set_parallelism(
                workers=args.workers,
                reporters=args.reporters if args.reporters is not None else settings.NUM_REPORTERS,
                poll_interval=args.poll_interval,
            )
        sizes = parse_int_list(args.sizes)
        worker_counts = parse_int_list(args.workers_list)
    except FileNotFoundError as exc:
        print(f"Configuration file not found: {exc}")
        raise SystemExit(1) from exc
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        raise SystemExit(1) from exc

    try:
        if args.command == "solve":
            size = args.size if args.size is not None else settings.BOARD_SIZE
            result = main_solve(size, quiet=args.quiet, validate=args.validate)
            if result.failures:
                raise SystemExit(1)
        else:
            main_benchmark(
                args.mode,
                sizes or settings.N_VALUES,
                worker_counts or settings.WORKER_COUNTS,
                args.runs if args.runs is not None else settings.RUNS_PER_CONFIG,
                validate=args.validate,
                plots=not args.no_plots,
            )
    except KeyboardInterrupt:
        print("\nExecution interrupted by user. Cleaning up workers...")
        raise SystemExit(130) from None
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        raise SystemExit(1) from exc
    except (PipelineAborted, AssertionError) as exc:
        print(f"Execution error: {exc}")
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
