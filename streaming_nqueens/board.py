"""Immutable board model shared by every pipeline stage.

Representation
--------------
A board is an ordered tuple of ``(row, column)`` placements, 1-indexed, with
rows strictly increasing by construction. New boards are produced by
appending one placement to a copy of an existing board; boards are never
mutated, so they can be handed between worker threads without locking.

Duplicate columns are *not* rejected here: detecting them is the job of the
safety predicate (``streaming_nqueens.utils.is_safe``), which must also work
on boards imported from outside the pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

Placement = Tuple[int, int]


class BoardInvariantError(ValueError):
    """Raised when a board violates its structural invariants."""


def _check_placements(placements: Tuple[Placement, ...]) -> None:
    previous_row = 0
    for entry in placements:
        if not isinstance(entry, tuple) or len(entry) != 2:
            raise BoardInvariantError(f"Placement must be a (row, column) pair, got {entry!r}")
        row, column = entry
        if not isinstance(row, int) or not isinstance(column, int):
            raise BoardInvariantError(f"Placement coordinates must be integers, got {entry!r}")
        if row < 1 or column < 1:
            raise BoardInvariantError(f"Placement coordinates are 1-indexed, got {entry!r}")
        if row <= previous_row:
            raise BoardInvariantError(
                f"Rows must be strictly increasing: row {row} follows row {previous_row}"
            )
        previous_row = row


@dataclass(frozen=True)
class Board:
    """Ordered sequence of queen placements (partial or complete)."""

    placements: Tuple[Placement, ...] = ()

    def __post_init__(self) -> None:
        placements = tuple(tuple(p) if isinstance(p, list) else p for p in self.placements)
        _check_placements(placements)
        object.__setattr__(self, "placements", placements)

    @classmethod
    def from_columns(cls, columns: Iterable[int]) -> "Board":
        """Build ``[(1, c1), (2, c2), ...]`` from a column sequence."""
        return cls(tuple((row, column) for row, column in enumerate(columns, start=1)))

    def __len__(self) -> int:
        return len(self.placements)

    def __iter__(self) -> Iterator[Placement]:
        return iter(self.placements)

    def __getitem__(self, index: int) -> Placement:
        return self.placements[index]

    @property
    def columns(self) -> List[int]:
        return [column for _, column in self.placements]

    @property
    def last(self) -> Optional[Placement]:
        return self.placements[-1] if self.placements else None

    def append(self, column: int) -> "Board":
        """Return a new board with a queen on the next row at ``column``."""
        next_row = self.placements[-1][0] + 1 if self.placements else 1
        return Board(self.placements + ((next_row, column),))

    def is_complete(self, size: int) -> bool:
        return len(self.placements) == size

    def __str__(self) -> str:
        return "[" + ",".join(str(c) for c in self.columns) + "]"
