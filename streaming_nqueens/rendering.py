"""Console rendering of solutions.

Layout for N=4 and the board ``[2,4,1,3]``::

    [2,4,1,3]
    ._._._._.
    |_|x|_|_|
    |_|_|_|x|
    |x|_|_|_|
    |_|_|x|_|
"""

from __future__ import annotations

from typing import Optional

from .board import Board


def render(board: Board, size: Optional[int] = None) -> str:
    """Return the text block for ``board``, terminated by a newline.

    ``size`` defaults to the board length, which is the board dimension for
    every complete solution.
    """
    n = len(board) if size is None else size
    header = "[" + ",".join(str(column) for column in board.columns) + "]"
    top_edge = "." + ".".join("_" for _ in range(n)) + "."
    rows = []
    for _, column in board:
        cells = ["x" if c == column else "_" for c in range(1, n + 1)]
        rows.append("|" + "|".join(cells) + "|")
    return f"{header}\n{top_edge}\n" + "\n".join(rows) + "\n"


def print_sink(text: str) -> None:
    """Default output sink: write one rendered solution to stdout."""
    print(f"Solution:\n{text}", end="", flush=True)


def null_sink(text: str) -> None:
    """Sink discarding its input (benchmarks and quiet runs)."""
