"""
engine.py

Issue/return orchestration for the lending catalog.
"""

from __future__ import annotations
import dataclasses
import datetime
import logging
import threading
from typing import Any, Callable, List, Optional, Tuple

from .activity import RecentActivity
from .config import LibrarySettings
from .domain import (
    Borrower,
    BorrowerView,
    IssueResult,
    IssueStatus,
    Item,
    ItemView,
    OverdueEntry,
    Reservation,
    ReturnResult,
    StaffMember,
    StatusReport,
    TransactionView,
)
from .errors import IssueLimitExceeded, LibraryError, UnknownBorrower, UnknownItem
from .fines import calculate_fine, elapsed_days
from .ledger import Clock, TransactionIdGenerator, TransactionLedger
from .records import RecordIndex
from .reservations import ReservationQueue

logger = logging.getLogger("LibrarySystem")


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class LibrarySystem:
    """
    LibrarySystem owns the catalog, the borrowers and the transaction ledger.

    It is the only component that changes item availability or a borrower's held
    items. Issue and return report their outcome as IssueResult / ReturnResult
    objects; recoverable errors are attached to the result rather than raised.
    All public methods run under one re-entrant lock, so a return and the
    reservation issue it triggers are a single atomic step.
    """

    def __init__(self, settings: Optional[LibrarySettings] = None, clock: Optional[Clock] = None):
        """
        Initialize an empty LibrarySystem.

        Args:
            settings: circulation settings; defaults to LibrarySettings().
            clock: callable returning the current aware datetime. Tests pass a
                controllable clock here.
        """
        self.settings = settings or LibrarySettings()
        self._clock = clock or utc_now
        self._lock = threading.RLock()

        self._items: RecordIndex[Item] = RecordIndex(key=lambda item: item.item_id)
        self._borrowers: RecordIndex[Borrower] = RecordIndex(key=lambda borrower: borrower.borrower_id)
        self._staff: List[StaffMember] = []

        self._ids = TransactionIdGenerator(self.settings.transaction_id_prefix,
                                           self.settings.transaction_id_start)
        self._ledger = TransactionLedger(self._clock, fine_policy=self._fine)
        self._reservations = ReservationQueue()
        self._activity = RecentActivity()

    def _fine(self, issued_at: datetime.datetime, returned_at: datetime.datetime) -> float:
        return calculate_fine(issued_at, returned_at,
                              loan_days=self.settings.loan_days,
                              fine_per_day=self.settings.fine_per_day)

    # ---------------- Catalog loading ----------------
    def add_item(self, item: Item) -> ItemView:
        """
        Add a catalog item. The engine keeps its own copy, placed on the shelf.

        Raises DuplicateIdentifier if the item ID is already in the catalog.
        """
        with self._lock:
            owned = dataclasses.replace(item, available=True)
            self._items.add(owned)
            logger.info("Added item %s", owned.item_id)
            return owned.view()

    def add_borrower(self, borrower: Borrower) -> BorrowerView:
        """
        Register a borrower. The engine keeps its own copy.

        Raises DuplicateIdentifier if the member ID is already registered, and
        ValueError if the record claims to already hold items or has a
        non-positive loan limit.
        """
        if borrower.held_items:
            raise ValueError(f"Member {borrower.borrower_id} must be registered with no held items")
        if borrower.max_loans < 1:
            raise ValueError(f"Member {borrower.borrower_id} needs a loan limit of at least 1")
        with self._lock:
            owned = dataclasses.replace(borrower, held_items=[])
            self._borrowers.add(owned)
            logger.info("Registered member %s", owned.borrower_id)
            return owned.view()

    def register_borrower(self, borrower_id: str, name: str, contact_info: str = "",
                          max_loans: Optional[int] = None) -> BorrowerView:
        """Register a borrower, using the configured default loan limit when none is given."""
        limit = self.settings.default_max_loans if max_loans is None else max_loans
        return self.add_borrower(Borrower(borrower_id, name, contact_info, max_loans=limit))

    def add_staff(self, staff: StaffMember) -> None:
        with self._lock:
            self._staff.append(staff)

    def list_staff(self) -> List[StaffMember]:
        with self._lock:
            return [dataclasses.replace(s) for s in self._staff]

    # -------------- Internal helpers ----------------
    def _require_borrower(self, borrower_id: str) -> Borrower:
        borrower = self._borrowers.find(borrower_id)
        if borrower is None:
            raise UnknownBorrower(borrower_id)
        return borrower

    def _require_item(self, item_id: str) -> Item:
        item = self._items.find(item_id)
        if item is None:
            raise UnknownItem(item_id)
        return item

    def _issue(self, borrower_id: str, item_id: str) -> IssueResult:
        borrower = self._require_borrower(borrower_id)
        item = self._require_item(item_id)

        if not item.available:
            self._reservations.enqueue(Reservation(borrower_id, item_id))
            logger.info("Book %s is not available. Added %s to reservation queue.", item_id, borrower_id)
            return IssueResult(IssueStatus.QUEUED, borrower_id, item_id)

        if not borrower.can_borrow():
            raise IssueLimitExceeded(borrower_id, borrower.max_loans)

        borrower.held_items.append(item_id)
        item.available = False
        transaction = self._ledger.open(self._ids.next_id(), borrower_id, item_id)
        view = transaction.view()
        self._activity.record(view)
        logger.info("Issued %s to %s (%s)", item_id, borrower_id, transaction.transaction_id)
        return IssueResult(IssueStatus.ISSUED, borrower_id, item_id, transaction=view)

    def _fulfil_reservation(self, item_id: str) -> Optional[IssueResult]:
        # only the head of the queue is considered
        if not self._reservations.peek_matches_item(item_id):
            return None
        reservation = self._reservations.dequeue()
        logger.info("Book %s has a reservation for %s. Processing...", item_id, reservation.borrower_id)
        result = self.issue(reservation.borrower_id, reservation.item_id)
        if not result.ok:
            logger.warning("Could not process reservation: %s", result.message)
        return result

    # ---------------- Core operations ----------------
    def issue(self, borrower_id: str, item_id: str) -> IssueResult:
        """
        Issue an item to a borrower.

        Returns an IssueResult that is ISSUED with the new transaction, QUEUED if
        the item is on loan (the request joins the reservation queue), or FAILED
        with UnknownBorrower, UnknownItem or IssueLimitExceeded.
        """
        with self._lock:
            try:
                return self._issue(borrower_id, item_id)
            except LibraryError as e:
                logger.warning("Issue of %s to %s failed: %s", item_id, borrower_id, e.message)
                return IssueResult(IssueStatus.FAILED, borrower_id, item_id, error=e)

    def return_item(self, borrower_id: str, item_id: str) -> ReturnResult:
        """
        Process the return of an item by a borrower.

        Closes the open transaction (computing its fine), puts the item back on
        the shelf and then, if the head of the reservation queue is waiting for
        this item, issues it to that borrower. The outcome of that follow-on
        issue is attached as `reservation`; its failure does not undo the return.

        Fails with UnknownBorrower, UnknownItem or NoOpenTransaction.
        """
        with self._lock:
            try:
                borrower = self._require_borrower(borrower_id)
                item = self._require_item(item_id)
                transaction = self._ledger.close(borrower_id, item_id)
            except LibraryError as e:
                logger.warning("Return of %s by %s failed: %s", item_id, borrower_id, e.message)
                return ReturnResult(borrower_id, item_id, error=e)

            borrower.held_items.remove(item_id)
            item.available = True
            view = transaction.view()
            self._activity.record(view)
            logger.info("Book %s returned by %s (%s, fine %.2f)",
                        item_id, borrower_id, transaction.transaction_id, transaction.fine)

            reservation = self._fulfil_reservation(item_id)
            return ReturnResult(borrower_id, item_id, transaction=view, reservation=reservation)

    # ---------------- Reports / Queries ----------------
    def find_item(self, item_id: str) -> Optional[ItemView]:
        with self._lock:
            item = self._items.find(item_id)
            return item.view() if item else None

    def find_borrower(self, borrower_id: str) -> Optional[BorrowerView]:
        with self._lock:
            borrower = self._borrowers.find(borrower_id)
            return borrower.view() if borrower else None

    def list_items(self) -> List[ItemView]:
        with self._lock:
            return [item.view() for item in self._items]

    def list_borrowers(self) -> List[BorrowerView]:
        with self._lock:
            return [borrower.view() for borrower in self._borrowers]

    def sort_items_by_identifier(self) -> None:
        with self._lock:
            self._items.sort_by_identifier()
            logger.info("Books sorted by ID.")

    def sort_items_by(self, key: Callable[[ItemView], Any], reverse: bool = False) -> None:
        """Reorder the catalog listing by an arbitrary key computed from each item's view."""
        with self._lock:
            self._items.sort_by(lambda item: key(item.view()), reverse=reverse)

    def recent_activity(self, count: Optional[int] = None) -> Tuple[TransactionView, ...]:
        """Up to `count` (default settings.recent_count) snapshots, most recent first."""
        if count is None:
            count = self.settings.recent_count
        with self._lock:
            return self._activity.recent(count)

    def transactions(self) -> List[TransactionView]:
        with self._lock:
            return [t.view() for t in self._ledger.all()]

    def open_transaction_for(self, item_id: str) -> Optional[TransactionView]:
        with self._lock:
            transaction = self._ledger.open_for_item(item_id)
            return transaction.view() if transaction else None

    def pending_reservations(self) -> Tuple[Reservation, ...]:
        with self._lock:
            return self._reservations.snapshot()

    def status_report(self) -> StatusReport:
        with self._lock:
            total = len(self._items)
            available = sum(1 for item in self._items if item.available)
            return StatusReport(total=total, available=available, issued=total - available)

    def overdue_report(self, now: Optional[datetime.datetime] = None) -> List[OverdueEntry]:
        """
        Open transactions that have run past the fine-free loan period.

        Returns entries with days out, days overdue and the fine that a return
        at `now` would incur, most overdue first. `now` must be timezone-aware;
        a naive datetime raises ValueError.
        """
        if now is not None and (now.tzinfo is None or now.utcoffset() is None):
            raise ValueError("overdue_report() needs a timezone-aware `now`")
        with self._lock:
            now = now or self._clock()
            entries: List[OverdueEntry] = []
            for transaction in self._ledger.open_transactions():
                days = elapsed_days(transaction.issued_at, now)
                if days <= self.settings.loan_days:
                    continue
                entries.append(OverdueEntry(
                    transaction=transaction.view(),
                    days_out=days,
                    days_overdue=days - self.settings.loan_days,
                    fine_due=self._fine(transaction.issued_at, now),
                ))
            entries.sort(key=lambda e: e.days_overdue, reverse=True)
            return entries
