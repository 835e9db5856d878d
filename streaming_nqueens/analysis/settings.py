"""Global settings for the streaming N-Queens pipeline and its benchmarks.

This module centralizes tunable constants used across the orchestration code.
Values can be overridden at runtime via the configuration loader in
`streaming_nqueens.analysis.cli.apply_configuration` and by CLI flags.
"""
from __future__ import annotations

import multiprocessing
from typing import List, Optional
from datetime import datetime

# Board size solved by the `solve` command
BOARD_SIZE: int = 8

# Expansion threads per pipeline run (one per hardware thread)
NUM_WORKERS: int = max(1, multiprocessing.cpu_count())

# Reporting threads per pipeline run (None = same as NUM_WORKERS)
NUM_REPORTERS: Optional[int] = None

# Maximum sleep of the termination monitor between two checks, in seconds
POLL_INTERVAL: float = 0.2

# Board sizes to benchmark (ascending)
N_VALUES: List[int] = [4, 5, 6, 7, 8, 9]

# Expansion worker counts compared in benchmarks
WORKER_COUNTS: List[int] = [1, 2, 4]

# Independent runs per (N, workers) combination
RUNS_PER_CONFIG: int = 5

# Wall-clock limit per pipeline run in seconds (None = no limit)
RUN_TIMEOUT: Optional[float] = 120.0

# Output directory for CSV and charts
OUT_DIR: str = "results_streaming_nqueens"

# Number of worker processes used by the parallel benchmark mode
NUM_PROCESSES: int = max(1, multiprocessing.cpu_count() - 1)

# Output naming policy --------------------------------------------------------

# When True, results and plots include a datestamp suffix (e.g., _20251113-142530)
DATE_IN_FILENAMES: bool = True

# Unique run identifier used for filename stamping; set once at import time.
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")

# Optional run label appended to filenames to avoid overwriting outputs
RUN_TAG: Optional[str] = None


def set_parallelism(
        workers: Optional[int] = None,
        reporters: Optional[int] = None,
        poll_interval: Optional[float] = None,
) -> None:
        """Configure pipeline parallelism and the monitor poll interval.

        Parameters
        - workers: expansion threads per run (None keeps the current value).
        - reporters: reporting threads per run (None means "same as workers").
        - poll_interval: monitor sleep cap in seconds (None keeps the current value).

        Side effects
        - Updates module-level globals and prints a concise summary to stdout to
            make the active values explicit at run start.
        """
        global NUM_WORKERS, NUM_REPORTERS, POLL_INTERVAL
        if workers is not None:
                if workers < 1:
                        raise ValueError(f"workers must be >= 1, got {workers}")
                NUM_WORKERS = workers
        NUM_REPORTERS = reporters
        if poll_interval is not None:
                if poll_interval <= 0:
                        raise ValueError(f"poll_interval must be positive, got {poll_interval}")
                POLL_INTERVAL = poll_interval

        print("Pipeline settings configured:")
        print(f"   - Expansion workers: {NUM_WORKERS}")
        print(f"   - Reporters: {NUM_REPORTERS if NUM_REPORTERS else NUM_WORKERS}")
        print(f"   - Poll interval: {POLL_INTERVAL}s")


def effective_reporters() -> int:
        return NUM_REPORTERS if NUM_REPORTERS else NUM_WORKERS
