"""Candidate generation and bootstrap for the expansion pipeline.

``expand`` grows a partial board by one row. It applies only a cheap prune
(the column of the previous row and its two neighbours are skipped), so the
candidates it yields must still pass ``is_safe`` before they are accepted.
``initial_frontier`` seeds the work queue with every two-row candidate.
"""

from __future__ import annotations

from typing import List

from .board import Board, BoardInvariantError


def expand(board: Board, size: int) -> List[Board]:
    """Return every one-row extension of ``board`` that survives the prune.

    Parameters
    ----------
    board : Board
        Partial board of length L < size. The empty board has no previous
        column, so every column is a candidate.
    size : int
        Board dimension N. When ``size < 1`` the result is empty.

    Returns
    -------
    list[Board]
        Fresh boards of length L + 1, in ascending column order. The input is
        left untouched.

    Raises
    ------
    BoardInvariantError
        If ``board`` already holds ``size`` or more placements.
    """
    if size < 1:
        return []
    if len(board) >= size:
        raise BoardInvariantError(
            f"Cannot expand a board of length {len(board)} for size {size}"
        )
    last = board.last
    if last is None:
        return [board.append(column) for column in range(1, size + 1)]
    previous = last[1]
    return [
        board.append(column)
        for column in range(1, size + 1)
        if column not in (previous - 1, previous, previous + 1)
    ]


def initial_frontier(size: int) -> List[Board]:
    """Build the two-row seed: ``[(1, c)]`` for each column, expanded once."""
    if size < 2:
        return []
    frontier: List[Board] = []
    for column in range(1, size + 1):
        frontier.extend(expand(Board(((1, column),)), size))
    return frontier


def seed_boards(size: int) -> List[Board]:
    """Return the boards the orchestrator enqueues before the stages start.

    For ``size >= 2`` this is ``initial_frontier(size)``. Sizes 0 and 1 are
    already solved by the empty board and ``[(1, 1)]`` respectively; the
    two-row frontier would contain nothing for them.
    """
    if size == 0:
        return [Board()]
    if size == 1:
        return [Board(((1, 1),))]
    return initial_frontier(size)
