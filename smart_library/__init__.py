"""
Smart Library lending engine.

Exports key modules for convenient imports.
"""

from .config import LibrarySettings

from .errors import (
    LibraryError,
    UnknownBorrower,
    UnknownItem,
    IssueLimitExceeded,
    NoOpenTransaction,
    DuplicateIdentifier,
)

from .domain import (
    ItemKind,
    Item,
    Borrower,
    StaffMember,
    Transaction,
    Reservation,
    ItemView,
    BorrowerView,
    TransactionView,
    StatusReport,
    OverdueEntry,
    IssueStatus,
    IssueResult,
    ReturnResult,
)

from .fines import calculate_fine, elapsed_days
from .records import RecordIndex
from .ledger import TransactionIdGenerator, TransactionLedger
from .reservations import ReservationQueue
from .activity import RecentActivity
from .engine import LibrarySystem
from .catalog import load_catalog
from .seed import seed_demo_data

__all__ = [
    # config
    "LibrarySettings",
    # errors
    "LibraryError",
    "UnknownBorrower",
    "UnknownItem",
    "IssueLimitExceeded",
    "NoOpenTransaction",
    "DuplicateIdentifier",
    # domain
    "ItemKind",
    "Item",
    "Borrower",
    "StaffMember",
    "Transaction",
    "Reservation",
    "ItemView",
    "BorrowerView",
    "TransactionView",
    "StatusReport",
    "OverdueEntry",
    "IssueStatus",
    "IssueResult",
    "ReturnResult",
    # components
    "calculate_fine",
    "elapsed_days",
    "RecordIndex",
    "TransactionIdGenerator",
    "TransactionLedger",
    "ReservationQueue",
    "RecentActivity",
    # engine
    "LibrarySystem",
    # loading
    "load_catalog",
    "seed_demo_data",
]
