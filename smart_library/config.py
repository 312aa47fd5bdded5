"""
config.py

Default circulation settings for the lending engine.
"""

from __future__ import annotations
from dataclasses import dataclass

# Configuration
DEFAULT_LOAN_DAYS = 14
FINE_PER_DAY = 2.0
DEFAULT_MAX_LOANS = 3
DEFAULT_RECENT_COUNT = 5
TRANSACTION_ID_PREFIX = "T"
TRANSACTION_ID_START = 1000


@dataclass(frozen=True)
class LibrarySettings:
    """
    Settings consumed by LibrarySystem.

    Attributes:
        loan_days: number of whole days a loan may run before a fine accrues.
        fine_per_day: amount charged for each day beyond `loan_days`.
        default_max_loans: concurrent-loan limit for borrowers that do not set one.
        recent_count: default number of entries returned by recent_activity().
        transaction_id_prefix: prefix for generated transaction identifiers.
        transaction_id_start: counter value before the first identifier; the first
            transaction is numbered `transaction_id_start + 1`.
    """

    loan_days: int = DEFAULT_LOAN_DAYS
    fine_per_day: float = FINE_PER_DAY
    default_max_loans: int = DEFAULT_MAX_LOANS
    recent_count: int = DEFAULT_RECENT_COUNT
    transaction_id_prefix: str = TRANSACTION_ID_PREFIX
    transaction_id_start: int = TRANSACTION_ID_START
