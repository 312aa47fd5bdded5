"""
activity.py

Most-recent-first view of issue and return activity.
"""

from __future__ import annotations
from typing import List, Tuple

from .domain import TransactionView


class RecentActivity:
    """
    Stack of transaction snapshots, one pushed per issue and per return.

    A transaction that is issued and later returned appears twice: the older
    entry shows it open, the newer one shows it returned. Entries are frozen
    views, never references into the ledger.
    """

    def __init__(self) -> None:
        self._stack: List[TransactionView] = []

    def record(self, transaction: TransactionView) -> None:
        self._stack.append(transaction)

    def recent(self, count: int) -> Tuple[TransactionView, ...]:
        if count <= 0:
            return ()
        return tuple(reversed(self._stack[-count:]))

    def __len__(self) -> int:
        return len(self._stack)
