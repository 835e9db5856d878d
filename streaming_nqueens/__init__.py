"""Streaming N-Queens: concurrent, queue-mediated enumeration of solutions."""

from .backtracking import bt_all_solutions, bt_count_solutions
from .board import Board, BoardInvariantError
from .generator import expand, initial_frontier, seed_boards
from .pipeline import PipelineAborted, PipelineResult, run_pipeline
from .rendering import render
from .solutions import KNOWN_SOLUTION_COUNTS, UnsupportedBoardSize, expected_solutions
from .termination import RemainingCounter, TerminationMonitor
from .utils import conflicts, conflicts_on2, is_safe, is_valid_solution

__all__ = [
    "Board",
    "BoardInvariantError",
    "expand",
    "initial_frontier",
    "seed_boards",
    "is_safe",
    "conflicts",
    "conflicts_on2",
    "is_valid_solution",
    "render",
    "KNOWN_SOLUTION_COUNTS",
    "UnsupportedBoardSize",
    "expected_solutions",
    "RemainingCounter",
    "TerminationMonitor",
    "PipelineAborted",
    "PipelineResult",
    "run_pipeline",
    "bt_all_solutions",
    "bt_count_solutions",
]
