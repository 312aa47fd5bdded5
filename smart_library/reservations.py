"""
reservations.py

FIFO queue of deferred issue requests.
"""

from __future__ import annotations
import logging
from collections import deque
from typing import Deque, Optional, Tuple

from .domain import Reservation

logger = logging.getLogger("LibrarySystem.reservations")


class ReservationQueue:
    """
    Pending (borrower, item) requests in arrival order.

    Only the head entry is ever compared against a returned item. A reservation
    for an item waiting behind a reservation for a different item is not
    serviced until everything ahead of it has been dequeued.
    """

    def __init__(self) -> None:
        self._queue: Deque[Reservation] = deque()

    def enqueue(self, reservation: Reservation) -> None:
        self._queue.append(reservation)
        logger.debug("Queued reservation %s (queue length %d)", reservation, len(self._queue))

    def peek(self) -> Optional[Reservation]:
        return self._queue[0] if self._queue else None

    def peek_matches_item(self, item_id: str) -> bool:
        head = self.peek()
        return head is not None and head.item_id == item_id

    def dequeue(self) -> Reservation:
        """Remove and return the head entry. Raises IndexError when empty."""
        return self._queue.popleft()

    def is_empty(self) -> bool:
        return not self._queue

    def snapshot(self) -> Tuple[Reservation, ...]:
        return tuple(self._queue)

    def __len__(self) -> int:
        return len(self._queue)
