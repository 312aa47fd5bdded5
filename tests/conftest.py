import sys
import pathlib
import datetime
from collections import Counter

import pytest

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parent.parent))
from smart_library import Item, LibrarySystem


class FakeClock:
    """Callable clock that only moves when a test advances it."""

    def __init__(self, start=None):
        self.now = start or datetime.datetime(2024, 3, 1, 9, 0, tzinfo=datetime.timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += datetime.timedelta(**kwargs)


def assert_consistent(lib):
    """Availability is False iff exactly one open transaction references the item."""
    open_by_item = Counter(t.item_id for t in lib.transactions() if not t.returned)
    for item in lib.list_items():
        assert open_by_item[item.item_id] <= 1
        assert (not item.available) == (open_by_item[item.item_id] == 1)
    for borrower in lib.list_borrowers():
        assert borrower.held_count <= borrower.max_loans


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def lib(clock):
    system = LibrarySystem(clock=clock)
    for item_id in ("I1", "I2", "I3"):
        system.add_item(Item(item_id, f"Title {item_id}", "Author", "Category"))
    system.register_borrower("M1", "Member One", "m1@example.com", max_loans=1)
    system.register_borrower("M2", "Member Two", "m2@example.com")
    system.register_borrower("M3", "Member Three", "m3@example.com")
    return system
