"""
ledger.py

Append-only transaction history and transaction identifier generation.
"""

from __future__ import annotations
import itertools
import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

from .config import TRANSACTION_ID_PREFIX, TRANSACTION_ID_START
from .domain import Transaction
from .errors import NoOpenTransaction
from .fines import calculate_fine

logger = logging.getLogger("LibrarySystem.ledger")

Clock = Callable[[], datetime]
FinePolicy = Callable[[datetime, datetime], float]


class TransactionIdGenerator:
    """Monotonic identifiers: T1001, T1002, ... for the default settings."""

    def __init__(self, prefix: str = TRANSACTION_ID_PREFIX, start: int = TRANSACTION_ID_START):
        self.prefix = prefix
        self._counter = itertools.count(start + 1)

    def next_id(self) -> str:
        return f"{self.prefix}{next(self._counter)}"


class TransactionLedger:
    """
    Permanent record of every loan.

    Transactions are appended on issue and mutated once on return; nothing is
    ever removed. At most one open transaction exists per item, which the
    ledger tracks in `_open_by_item` for direct lookup.
    """

    def __init__(self, clock: Clock, fine_policy: FinePolicy = calculate_fine):
        self._clock = clock
        self._fine_policy = fine_policy
        self._transactions: List[Transaction] = []
        self._open_by_item: Dict[str, Transaction] = {}

    def open(self, transaction_id: str, borrower_id: str, item_id: str) -> Transaction:
        transaction = Transaction(
            transaction_id=transaction_id,
            borrower_id=borrower_id,
            item_id=item_id,
            issued_at=self._clock(),
        )
        self._transactions.append(transaction)
        self._open_by_item[item_id] = transaction
        logger.debug("Opened %s: %s -> %s", transaction_id, item_id, borrower_id)
        return transaction

    def find_open(self, borrower_id: str, item_id: str) -> Optional[Transaction]:
        transaction = self._open_by_item.get(item_id)
        if transaction is None or transaction.borrower_id != borrower_id:
            return None
        return transaction

    def open_for_item(self, item_id: str) -> Optional[Transaction]:
        return self._open_by_item.get(item_id)

    def close(self, borrower_id: str, item_id: str) -> Transaction:
        """
        Close the open transaction for (borrower_id, item_id) and compute its fine.

        Raises NoOpenTransaction if the borrower does not currently hold the item.
        """
        transaction = self.find_open(borrower_id, item_id)
        if transaction is None:
            raise NoOpenTransaction(borrower_id, item_id)
        returned_at = self._clock()
        transaction.mark_returned(returned_at, self._fine_policy(transaction.issued_at, returned_at))
        del self._open_by_item[item_id]
        logger.debug("Closed %s with fine %.2f", transaction.transaction_id, transaction.fine)
        return transaction

    def all(self) -> Tuple[Transaction, ...]:
        return tuple(self._transactions)

    def open_transactions(self) -> Tuple[Transaction, ...]:
        return tuple(t for t in self._transactions if t.is_open)

    def __len__(self) -> int:
        return len(self._transactions)
