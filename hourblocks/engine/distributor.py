"""Even distribution of a total across the days of a block."""

from datetime import date
from typing import Dict, List, Sequence


def distribute(total: int, count: int) -> List[int]:
    """Split ``total`` into ``count`` integers that differ by at most one.

    The remainder is front-loaded onto the earliest positions, so the same
    inputs always produce the same split.

    Args:
        total: Whole hours to split (>= 0)
        count: Number of days (>= 1)

    Returns:
        List of ``count`` integers summing to ``total``
    """
    if isinstance(total, bool) or not isinstance(total, int) or total < 0:
        raise ValueError(f"total must be a non-negative integer, got {total!r}")
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise ValueError(f"count must be a positive integer, got {count!r}")

    base = total // count
    remainder = total - base * count
    return [base + 1 if i < remainder else base for i in range(count)]


def distribute_over(total: int, dates: Sequence[date]) -> Dict[date, int]:
    """Apply ``distribute`` to ``dates`` in order."""
    return dict(zip(dates, distribute(total, len(dates))))
