"""Sequential backtracking enumeration, used as the reference baseline.

The pipeline discovers solutions breadth-first across many threads; this
module walks the same search space depth-first on a single thread. Its
solution set is the ground truth for ``--validate`` runs and tests, and its
timings are the sequential baseline in benchmarks.

Implementation overview
-----------------------
- State representation: ``positions[r] = c`` means a queen on row r, column c
  (0-based internally); ``-1`` means the row is still unassigned.
- Constraint tracking: three boolean arrays give O(1) checks for column and
  diagonal availability: ``col_used[c]``, ``diag1_used[r-c+offset]``,
  ``diag2_used[r+c]``, where ``offset = size - 1`` maps negative indices to
  [0..].
- Search strategy: iterative depth-first search, no Python recursion.
  Reaching the last row records a solution and then backtracks as if it had
  failed, so the whole tree is visited.

Contract (public API)
---------------------
- ``bt_all_solutions(size, time_limit=None) -> (solutions, nodes, elapsed)``
  where ``solutions`` is a list of 1-indexed ``Board`` values in
  lexicographic column order, or ``None`` on timeout.
- ``bt_count_solutions(size) -> int``.
- Nodes explored: incremented every time a candidate column is evaluated for
  a row, even when rejected immediately.
"""

from __future__ import annotations

from time import perf_counter
from typing import List, Optional, Tuple

from .board import Board


def bt_all_solutions(size: int, time_limit: Optional[float] = None) -> Tuple[Optional[List[Board]], int, float]:
    """Enumerate every solution via iterative backtracking.

    Parameters
    ----------
    size : int
        Board dimension N (N >= 0). N = 0 has exactly one (empty) solution.
    time_limit : float | None
        Optional wall-clock time limit in seconds.

    Returns
    -------
    (solutions, nodes_explored, elapsed_seconds)
        ``solutions`` is None if the time limit was exceeded.
    """
    start = perf_counter()
    if size == 0:
        return [Board()], 0, perf_counter() - start

    positions = [-1] * size
    col_used = [False] * size
    diag1_used = [False] * (2 * size - 1)
    diag2_used = [False] * (2 * size - 1)
    offset = size - 1

    found: List[Board] = []
    row = 0
    column = 0
    explored = 0

    while row >= 0:
        if time_limit is not None and (perf_counter() - start) > time_limit:
            return None, explored, perf_counter() - start

        placed = False
        while column < size and not placed:
            explored += 1
            d1 = row - column + offset
            d2 = row + column
            if not col_used[column] and not diag1_used[d1] and not diag2_used[d2]:
                positions[row] = column
                col_used[column] = True
                diag1_used[d1] = True
                diag2_used[d2] = True
                placed = True
            else:
                column += 1

        if placed and row == size - 1:
            found.append(Board.from_columns(c + 1 for c in positions))
            # Undo the last placement and keep scanning the same row.
            col_used[column] = False
            diag1_used[row - column + offset] = False
            diag2_used[row + column] = False
            positions[row] = -1
            column += 1
            continue

        if placed:
            row += 1
            column = 0
            continue

        # Exhausted this row; undo the previous decision.
        row -= 1
        if row >= 0:
            previous = positions[row]
            positions[row] = -1
            col_used[previous] = False
            diag1_used[row - previous + offset] = False
            diag2_used[row + previous] = False
            column = previous + 1

    return found, explored, perf_counter() - start


def bt_count_solutions(size: int) -> int:
    """Return the number of solutions for ``size`` (no time limit)."""
    solutions, _, _ = bt_all_solutions(size)
    assert solutions is not None
    return len(solutions)
