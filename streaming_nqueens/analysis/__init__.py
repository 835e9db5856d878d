"""
Benchmark and orchestration package for the streaming N-Queens pipeline.

This package contains:
- settings: global knobs (board size, parallelism, benchmark grid)
- stats: typed summaries and aggregation helpers
- experiments: benchmark runners (sequential and process-parallel)
- reporting: CSV exports and raw-data writers
- plots: visualization utilities
- cli: top-level entry points and argument parser
"""

from . import settings as settings  # re-export for convenience
from .stats import (
    StatsSummary,
    RunRecord,
    BTEntry,
    ConfigSummary,
    BenchmarkResults,
    compute_detailed_statistics,
    summarize_runs,
    attach_speedups,
    ProgressPrinter,
)

__all__ = [
    # types
    "StatsSummary",
    "RunRecord",
    "BTEntry",
    "ConfigSummary",
    "BenchmarkResults",
    # utils
    "compute_detailed_statistics",
    "summarize_runs",
    "attach_speedups",
    "ProgressPrinter",
    # settings module
    "settings",
]
