"""
records.py

Insertion-ordered record storage keyed by a caller-supplied identifier function.
"""

from __future__ import annotations
import logging
from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, TypeVar

from .errors import DuplicateIdentifier

logger = logging.getLogger("LibrarySystem.records")

T = TypeVar("T")


class RecordIndex(Generic[T]):
    """
    Maps identifiers to records while keeping a listing order.

    The identifier is read through `key`, so the same index serves items and
    borrowers alike. Listing order is insertion order until one of the sort
    methods reorders it in place.
    """

    def __init__(self, key: Callable[[T], str]):
        self._key = key
        self._order: List[T] = []
        self._by_id: Dict[str, T] = {}

    def add(self, record: T) -> None:
        record_id = self._key(record)
        if record_id in self._by_id:
            logger.debug("Attempt to add existing record: %s", record_id)
            raise DuplicateIdentifier(record_id)
        self._by_id[record_id] = record
        self._order.append(record)

    def find(self, record_id: str) -> Optional[T]:
        return self._by_id.get(record_id)

    def list(self) -> List[T]:
        return list(self._order)

    def sort_by(self, key: Callable[[T], Any], reverse: bool = False) -> None:
        """Reorder in place. Records with equal keys keep their relative order."""
        self._order.sort(key=key, reverse=reverse)

    def sort_by_identifier(self) -> None:
        self.sort_by(self._key)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._by_id

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._order))

    def __len__(self) -> int:
        return len(self._order)
