"""Queue-mediated pipeline enumerating every N-Queens solution.

The pipeline runs in three activities:

1. Bootstrap: the two-row seed boards are enqueued on the work queue once,
   synchronously, before any worker starts.
2. Expansion: ``workers`` threads take boards from the work queue, expand
   them by one row, drop every unsafe candidate and partition the survivors:
   incomplete boards go back onto the work queue, complete boards onto the
   solution queue.
3. Reporting: ``reporters`` threads take solutions, render them, emit them
   through the output sink (one solution at a time) and count down the
   remaining-solution counter.

Both stages loop forever over unbounded queues; they never observe "no more
work" on their own. The ``TerminationMonitor`` ends the run once the counter
reaches zero, after which the orchestrator sets the stop event, wakes every
blocked consumer with a sentinel and joins all threads before returning.

Known race: solutions still sitting in the solution queue when the monitor
reaches ``DONE`` are not drained. With a correct solution count none remain.

Contract (public API)
---------------------
- ``run_pipeline(size, ...) -> PipelineResult``
- Configuration errors (unsupported size, bad worker counts) raise
  ``ValueError`` subclasses before anything is started.
- An exception inside an expansion worker is an invariant violation: the run
  is aborted and ``PipelineAborted`` is raised, chained to the cause.
- Render/emit failures are recorded in ``PipelineResult.failures``; the
  solution still counts as consumed and the other workers keep running.
"""

from __future__ import annotations

import os
import queue
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from time import perf_counter
from typing import Callable, FrozenSet, List, Optional, Tuple

from .board import Board
from .generator import expand, seed_boards
from .rendering import print_sink, render
from .solutions import expected_solutions
from .termination import RemainingCounter, TerminationMonitor
from .utils import is_safe

RenderFn = Callable[[Board], str]
EmitFn = Callable[[str], None]
ExpandFn = Callable[[Board, int], List[Board]]

# Wakes a blocked consumer during shutdown.
_STOP = object()


class PipelineAborted(RuntimeError):
    """Raised when a worker fails and the run cannot complete."""


class BoardQueue:
    """Unbounded multi-producer/multi-consumer FIFO of boards."""

    def __init__(self, name: str):
        self.name = name
        self._queue: "queue.Queue[object]" = queue.Queue()

    def __repr__(self) -> str:
        return f"BoardQueue({self.name!r}, size={self.qsize()})"

    def put(self, board: Board) -> None:
        self._queue.put(board)

    def get(self) -> object:
        """Block until a board (or the stop sentinel) is available."""
        return self._queue.get()

    def close(self, consumers: int) -> None:
        """Wake up to ``consumers`` blocked readers with the stop sentinel."""
        for _ in range(consumers):
            self._queue.put(_STOP)

    def qsize(self) -> int:
        return self._queue.qsize()


@dataclass(frozen=True)
class ReportingFailure:
    """A solution whose rendering or emission raised."""

    board: Board
    error: BaseException


@dataclass
class PipelineResult:
    size: int
    expected: int
    workers: int
    reporters: int
    solutions: List[Board] = field(default_factory=list)
    countdown: List[int] = field(default_factory=list)
    failures: List[ReportingFailure] = field(default_factory=list)
    expanded: int = 0
    discarded: int = 0
    elapsed: float = 0.0
    timed_out: bool = False

    @property
    def solution_set(self) -> FrozenSet[Tuple[int, ...]]:
        return frozenset(tuple(board.columns) for board in self.solutions)

    @property
    def reported(self) -> int:
        return len(self.solutions) + len(self.failures)


class _ReportLedger:
    """Collects what the reporters consumed, serialising emission."""

    def __init__(self, emit: EmitFn):
        self._emit = emit
        self._lock = threading.Lock()
        self.solutions: List[Board] = []
        self.countdown: List[int] = []
        self.failures: List[ReportingFailure] = []

    def emit(self, board: Board, text: str) -> None:
        with self._lock:
            self._emit(text)
            self.solutions.append(board)

    def fail(self, board: Board, error: BaseException) -> None:
        with self._lock:
            self.failures.append(ReportingFailure(board, error))
            print(f"Warning: failed to report solution {board}: {error!r}")

    def count(self, previous: int) -> None:
        with self._lock:
            self.countdown.append(previous)


def expansion_worker(
    size: int,
    work: BoardQueue,
    solutions: BoardQueue,
    stop: threading.Event,
    expand_fn: ExpandFn = expand,
) -> Tuple[int, int]:
    """Expand, filter and partition boards until the pipeline stops.

    Returns
    -------
    (expanded, discarded)
        Boards taken from the work queue and unsafe candidates dropped.
    """
    expanded = 0
    discarded = 0
    while True:
        item = work.get()
        if item is _STOP or stop.is_set():
            return expanded, discarded
        expanded += 1
        for candidate in expand_fn(item, size):  # type: ignore[arg-type]
            if not is_safe(candidate):
                discarded += 1
                continue
            if len(candidate) < size:
                work.put(candidate)
            else:
                solutions.put(candidate)


def reporting_worker(
    solutions: BoardQueue,
    counter: RemainingCounter,
    ledger: _ReportLedger,
    stop: threading.Event,
    render_fn: RenderFn = render,
) -> int:
    """Render, emit and count down solutions until the pipeline stops.

    Returns the number of solutions this worker consumed.
    """
    consumed = 0
    while True:
        item = solutions.get()
        if item is _STOP or stop.is_set():
            return consumed
        board: Board = item  # type: ignore[assignment]
        try:
            text = render_fn(board)
            ledger.emit(board, text)
        except Exception as exc:
            ledger.fail(board, exc)
        # The solution is recorded before the decrement so the monitor never sees zero early.
        ledger.count(counter.decrement())
        consumed += 1


def _default_parallelism() -> int:
    return max(1, os.cpu_count() or 1)


def bootstrap(size: int, work: BoardQueue, solutions: BoardQueue) -> int:
    """Enqueue the seed boards; return how many were enqueued."""
    seeds = seed_boards(size)
    for board in seeds:
        if len(board) < size:
            work.put(board)
        elif is_safe(board):
            solutions.put(board)
    return len(seeds)


def run_pipeline(
    size: int,
    workers: Optional[int] = None,
    reporters: Optional[int] = None,
    render_fn: RenderFn = render,
    emit: EmitFn = print_sink,
    poll_interval: float = 0.2,
    time_limit: Optional[float] = None,
    expand_fn: ExpandFn = expand,
) -> PipelineResult:
    """Enumerate and report every solution for a ``size`` x ``size`` board.

    Parameters
    ----------
    size : int
        Board dimension N; must have a known solution count.
    workers : int | None
        Expansion threads (defaults to the number of available CPUs). A
        single worker yields the same set of solutions, only slower.
    reporters : int | None
        Reporting threads (defaults to ``workers``).
    render_fn, emit : callable
        Rendering function and output sink applied to each solution.
    poll_interval : float
        Maximum sleep of the termination monitor between checks.
    time_limit : float | None
        Optional wall-clock limit in seconds. When exceeded the run is
        stopped and the result has ``timed_out=True``.
    expand_fn : callable
        Candidate generator; ``expand`` unless overridden.

    Returns
    -------
    PipelineResult
        Solutions in report order plus run statistics.
    """
    expected = expected_solutions(size)
    workers = _default_parallelism() if workers is None else workers
    reporters = workers if reporters is None else reporters
    if workers < 1 or reporters < 1:
        raise ValueError(f"Worker counts must be >= 1 (workers={workers}, reporters={reporters})")

    counter = RemainingCounter(expected)
    monitor = TerminationMonitor(counter, poll_interval=poll_interval)
    stop = threading.Event()
    work = BoardQueue("work")
    solutions = BoardQueue("solutions")
    ledger = _ReportLedger(emit)
    result = PipelineResult(size=size, expected=expected, workers=workers, reporters=reporters)

    start = perf_counter()
    bootstrap(size, work, solutions)

    def _abort_on_failure(future: Future) -> None:
        if not future.cancelled() and future.exception() is not None:
            stop.set()
            counter.wake()

    with ThreadPoolExecutor(max_workers=workers + reporters, thread_name_prefix="nqueens") as executor:
        expanders = [
            executor.submit(expansion_worker, size, work, solutions, stop, expand_fn)
            for _ in range(workers)
        ]
        reporting = [
            executor.submit(reporting_worker, solutions, counter, ledger, stop, render_fn)
            for _ in range(reporters)
        ]
        for future in expanders + reporting:
            future.add_done_callback(_abort_on_failure)
        try:
            finished = monitor.wait(abort=stop, timeout=time_limit)
        finally:
            stop.set()
            work.close(workers)
            solutions.close(reporters)

    result.elapsed = perf_counter() - start
    result.solutions = ledger.solutions
    result.countdown = ledger.countdown
    result.failures = ledger.failures

    for future in expanders + reporting:
        error = future.exception()
        if error is not None:
            raise PipelineAborted(
                f"Pipeline for N={size} aborted after {len(ledger.solutions)} solutions: {error!r}"
            ) from error

    for future in expanders:
        expanded, discarded = future.result()
        result.expanded += expanded
        result.discarded += discarded
    result.timed_out = not finished
    return result
