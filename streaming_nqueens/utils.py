"""Utility helpers for the streaming N-Queens pipeline.

This module provides the low-level checks every stage depends upon: the
safety predicate used by the expansion stage to filter candidates, and two
implementations counting the number of attacking queen pairs, used as
reference checks for validation and tests.

Representation
--------------
Boards are ``streaming_nqueens.board.Board`` values, i.e. ordered sequences of
1-indexed ``(row, column)`` placements. The helpers only iterate over the
placements, so any sequence of pairs is accepted as well.
"""

from __future__ import annotations

from collections import Counter
from typing import Sequence, Tuple

Pairs = Sequence[Tuple[int, int]]


def is_safe(board: Pairs) -> bool:
    """Return True if no two placements share a row, a column or a diagonal.

    Every placement is compared against every placement following it and the
    check fails fast on the first violation. Boards of length 0 or 1 are
    always safe.

    Complexity: O(L^2) for a board of length L.
    """
    placements = list(board)
    n = len(placements)
    for i in range(n):
        row_i, col_i = placements[i]
        for j in range(i + 1, n):
            row_j, col_j = placements[j]
            if row_i == row_j or col_i == col_j:
                return False
            if abs(row_i - row_j) == abs(col_i - col_j):
                return False
    return True


def extends_safely(board: Pairs) -> bool:
    """Check only the newest placement against the earlier ones.

    Assumes the prefix (every placement but the last) was already validated,
    which holds for boards grown one row at a time from safe parents.
    """
    placements = list(board)
    if len(placements) < 2:
        return True
    row, column = placements[-1]
    for other_row, other_column in placements[:-1]:
        if other_row == row or other_column == column or abs(other_row - row) == abs(other_column - column):
            return False
    return True


def conflicts(board: Pairs) -> int:
    """Compute the number of attacking queen pairs in O(L).

    Uses hash maps to count occurrences per row, column and diagonal instead
    of comparing every pair.
    """
    row_count: Counter[int] = Counter()
    col_count: Counter[int] = Counter()
    diag1: Counter[int] = Counter()
    diag2: Counter[int] = Counter()

    for row, column in board:
        row_count[row] += 1
        col_count[column] += 1
        diag1[row - column] += 1
        diag2[row + column] += 1

    def _pairs(counter: Counter[int]) -> int:
        total = 0
        for count in counter.values():
            if count > 1:
                total += count * (count - 1) // 2
        return total

    return _pairs(row_count) + _pairs(col_count) + _pairs(diag1) + _pairs(diag2)


def conflicts_on2(board: Pairs) -> int:
    """Compute the number of attacking queen pairs in O(L^2).

    Reference implementation for validation and tests. A pair sharing a row
    and a diagonal at once (impossible for distinct squares) is counted once.
    """
    placements = list(board)
    n = len(placements)
    conflicts_count = 0
    for i in range(n):
        for j in range(i + 1, n):
            (r1, c1), (r2, c2) = placements[i], placements[j]
            if r1 == r2 or c1 == c2 or abs(r1 - r2) == abs(c1 - c2):
                conflicts_count += 1
    return conflicts_count


def is_valid_solution(board: Pairs, size: int) -> bool:
    """Return True if ``board`` is a complete, in-range solution for ``size``.

    Contract
    - Input: sequence of ``(row, column)`` pairs, 1-indexed.
    - Valid if: exactly ``size`` placements, all coordinates in ``1..size``
      and no pair of queens attacks each other.
    """
    placements = list(board)
    if len(placements) != size:
        return False
    for row, column in placements:
        if not isinstance(row, int) or not isinstance(column, int):
            return False
        if not (1 <= row <= size and 1 <= column <= size):
            return False
    return conflicts(placements) == 0
