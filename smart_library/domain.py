"""
domain.py

Entities, read-only views and result types shared by the lending engine.

Items, borrowers and transactions are mutable records owned by LibrarySystem.
Everything handed to callers is a frozen view built from them, so display code
never holds a reference it could mutate.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, NamedTuple, Optional

from .config import DEFAULT_MAX_LOANS
from .errors import LibraryError


class ItemKind(Enum):
    BOOK = "Book"
    EBOOK = "EBook"
    JOURNAL = "Journal"


@dataclass
class Item:
    """
    A circulating catalog entry.

    `kind` selects which of the optional fields are meaningful: EBOOK items carry
    `file_format` and `file_size_mb`, JOURNAL items carry `volume`, `issue` and
    `publish_date`. The engine itself only reads `item_id` and `available`.
    """

    item_id: str
    title: str
    author: str = ""
    category: str = ""
    kind: ItemKind = ItemKind.BOOK
    available: bool = True
    file_format: Optional[str] = None
    file_size_mb: Optional[int] = None
    volume: Optional[int] = None
    issue: Optional[int] = None
    publish_date: Optional[str] = None

    def details(self) -> str:
        """Kind-specific description used by the presentation layer."""
        if self.kind is ItemKind.EBOOK:
            return f"Format: {self.file_format}, File Size: {self.file_size_mb} MB"
        if self.kind is ItemKind.JOURNAL:
            return f"Volume: {self.volume}, Issue: {self.issue}, Publish Date: {self.publish_date}"
        return ""

    def view(self) -> "ItemView":
        return ItemView(
            item_id=self.item_id,
            title=self.title,
            author=self.author,
            category=self.category,
            kind=self.kind,
            available=self.available,
            details=self.details(),
        )


@dataclass
class Borrower:
    borrower_id: str
    name: str
    contact_info: str = ""
    max_loans: int = DEFAULT_MAX_LOANS
    held_items: List[str] = field(default_factory=list)

    def can_borrow(self) -> bool:
        return len(self.held_items) < self.max_loans

    def view(self) -> "BorrowerView":
        return BorrowerView(
            borrower_id=self.borrower_id,
            name=self.name,
            contact_info=self.contact_info,
            max_loans=self.max_loans,
            held_items=tuple(self.held_items),
        )


@dataclass
class StaffMember:
    staff_id: str
    name: str
    position: str = ""


@dataclass
class Transaction:
    transaction_id: str
    borrower_id: str
    item_id: str
    issued_at: datetime
    returned_at: Optional[datetime] = None
    fine: float = 0.0
    returned: bool = False

    @property
    def is_open(self) -> bool:
        return not self.returned

    def mark_returned(self, when: datetime, fine: float) -> None:
        self.returned_at = when
        self.fine = fine
        self.returned = True

    def view(self) -> "TransactionView":
        return TransactionView(
            transaction_id=self.transaction_id,
            borrower_id=self.borrower_id,
            item_id=self.item_id,
            issued_at=self.issued_at,
            returned_at=self.returned_at,
            fine=self.fine,
            returned=self.returned,
        )


class Reservation(NamedTuple):
    borrower_id: str
    item_id: str


# ---------------- Read-only views ----------------
@dataclass(frozen=True)
class ItemView:
    item_id: str
    title: str
    author: str
    category: str
    kind: ItemKind
    available: bool
    details: str = ""


@dataclass(frozen=True)
class BorrowerView:
    borrower_id: str
    name: str
    contact_info: str
    max_loans: int
    held_items: tuple = ()

    @property
    def held_count(self) -> int:
        return len(self.held_items)


@dataclass(frozen=True)
class TransactionView:
    transaction_id: str
    borrower_id: str
    item_id: str
    issued_at: datetime
    returned_at: Optional[datetime]
    fine: float
    returned: bool


class StatusReport(NamedTuple):
    total: int
    available: int
    issued: int


class OverdueEntry(NamedTuple):
    transaction: TransactionView
    days_out: int
    days_overdue: int
    fine_due: float


# ---------------- Operation results ----------------
class IssueStatus(Enum):
    ISSUED = "issued"
    QUEUED = "queued"
    FAILED = "failed"


@dataclass(frozen=True)
class IssueResult:
    """
    Outcome of LibrarySystem.issue().

    QUEUED is a successful outcome: the item was on loan and the request joined
    the reservation queue. Only FAILED carries an error.
    """

    status: IssueStatus
    borrower_id: str
    item_id: str
    transaction: Optional[TransactionView] = None
    error: Optional[LibraryError] = None

    @property
    def ok(self) -> bool:
        return self.status is not IssueStatus.FAILED

    @property
    def issued(self) -> bool:
        return self.status is IssueStatus.ISSUED

    @property
    def queued(self) -> bool:
        return self.status is IssueStatus.QUEUED

    @property
    def message(self) -> str:
        if self.status is IssueStatus.ISSUED:
            return f"Book {self.item_id} issued to {self.borrower_id} ({self.transaction.transaction_id})."
        if self.status is IssueStatus.QUEUED:
            return f"Book {self.item_id} is not available. {self.borrower_id} added to reservation queue."
        return self.error.message

    def raise_for_error(self) -> "IssueResult":
        if self.error is not None:
            raise self.error
        return self


@dataclass(frozen=True)
class ReturnResult:
    """
    Outcome of LibrarySystem.return_item().

    `reservation` holds the follow-on issue attempted for the head of the
    reservation queue, if any. A failed follow-on does not make the return fail.
    """

    borrower_id: str
    item_id: str
    transaction: Optional[TransactionView] = None
    error: Optional[LibraryError] = None
    reservation: Optional[IssueResult] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        if self.error is not None:
            return self.error.message
        msg = f"Book {self.item_id} returned by {self.borrower_id}. Fine: {self.transaction.fine:.2f}"
        if self.reservation is not None:
            msg += f"\nReservation: {self.reservation.message}"
        return msg

    def raise_for_error(self) -> "ReturnResult":
        if self.error is not None:
            raise self.error
        return self
