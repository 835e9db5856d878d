"""Known total solution counts, used to initialise the remaining counter."""

from __future__ import annotations

from typing import Dict

# OEIS A000170, N = 0..15
KNOWN_SOLUTION_COUNTS: Dict[int, int] = {
    0: 1,
    1: 1,
    2: 0,
    3: 0,
    4: 2,
    5: 10,
    6: 4,
    7: 40,
    8: 92,
    9: 352,
    10: 724,
    11: 2680,
    12: 14200,
    13: 73712,
    14: 365596,
    15: 2279184,
}


class UnsupportedBoardSize(ValueError):
    """Raised for board sizes without a known solution count."""


def expected_solutions(size: int) -> int:
    """Return the number of solutions for ``size``.

    Raises
    ------
    UnsupportedBoardSize
        If ``size`` is not an integer in the supported table.
    """
    if isinstance(size, bool) or not isinstance(size, int) or size not in KNOWN_SOLUTION_COUNTS:
        supported = f"{min(KNOWN_SOLUTION_COUNTS)}..{max(KNOWN_SOLUTION_COUNTS)}"
        raise UnsupportedBoardSize(
            f"No known solution count for board size {size!r} (supported: {supported})"
        )
    return KNOWN_SOLUTION_COUNTS[size]
