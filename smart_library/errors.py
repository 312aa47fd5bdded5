"""
errors.py

Recoverable errors raised by the lending engine components.
"""

from __future__ import annotations


class LibraryError(Exception):
    """Base class for every recoverable circulation error."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownBorrower(LibraryError):
    def __init__(self, borrower_id: str):
        super().__init__(f"Member with ID {borrower_id} is not registered.")
        self.borrower_id = borrower_id


class UnknownItem(LibraryError):
    def __init__(self, item_id: str):
        super().__init__(f"Book with ID {item_id} not found in the library.")
        self.item_id = item_id


class IssueLimitExceeded(LibraryError):
    def __init__(self, borrower_id: str, limit: int):
        super().__init__(f"Member with ID {borrower_id} has reached maximum book issue limit.")
        self.borrower_id = borrower_id
        self.limit = limit


class NoOpenTransaction(LibraryError):
    def __init__(self, borrower_id: str, item_id: str):
        super().__init__("No active transaction found for this book and member.")
        self.borrower_id = borrower_id
        self.item_id = item_id


class DuplicateIdentifier(LibraryError):
    def __init__(self, record_id: str):
        super().__init__(f"A record with ID {record_id} already exists.")
        self.record_id = record_id
