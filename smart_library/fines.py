"""
fines.py

Overdue fine policy.
"""

from __future__ import annotations
from datetime import datetime, timedelta

from .config import DEFAULT_LOAN_DAYS, FINE_PER_DAY

ONE_DAY = timedelta(days=1)


def elapsed_days(start: datetime, end: datetime) -> int:
    """
    Whole days elapsed between two instants.

    Works on the absolute difference of the two timestamps, so calendar fields,
    DST changes and timezones never shift the count. Negative spans count as 0.
    """
    delta = end - start
    if delta < timedelta(0):
        return 0
    return delta // ONE_DAY


def calculate_fine(issued_at: datetime, returned_at: datetime,
                   loan_days: int = DEFAULT_LOAN_DAYS,
                   fine_per_day: float = FINE_PER_DAY) -> float:
    """
    Fine owed for a loan that ran from `issued_at` to `returned_at`.

    Nothing is owed up to and including `loan_days` whole days; each further
    day costs `fine_per_day`.
    """
    days = elapsed_days(issued_at, returned_at)
    if days > loan_days:
        return (days - loan_days) * fine_per_day
    return 0.0
