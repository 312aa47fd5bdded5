import pytest

from smart_library import DuplicateIdentifier, Item, ItemKind, LibrarySystem, load_catalog, seed_demo_data
from smart_library.catalog import load_items, load_members, parse_kind

ITEMS_CSV = """Item ID,Kind,Title,Author,Category,Format,File Size MB,Volume,Issue,Publish Date
B001,Book,Design Patterns,Erich Gamma et al.,Software Engineering,,,,,
EB001,ebook,Clean Code,Robert C. Martin,Programming,PDF,15,,,
J001,Journal,IEEE Software,IEEE,Software Engineering,,,38,2,March 2023
"""

MEMBERS_CSV = """Member ID,Name,Contact Info,Max Loans
M001,John Doe,john@example.com,
M002,Jane Smith,jane@example.com,1
"""


@pytest.fixture
def csv_paths(tmp_path):
    items = tmp_path / "items.csv"
    members = tmp_path / "members.csv"
    items.write_text(ITEMS_CSV, encoding="utf-8")
    members.write_text(MEMBERS_CSV, encoding="utf-8")
    return items, members


def test_load_catalog(csv_paths):
    items_csv, members_csv = csv_paths
    lib = LibrarySystem()
    assert load_catalog(lib, items_csv, members_csv) == (3, 2)

    assert [i.item_id for i in lib.list_items()] == ["B001", "EB001", "J001"]
    assert all(i.available for i in lib.list_items())
    ebook = lib.find_item("EB001")
    assert ebook.kind is ItemKind.EBOOK
    assert ebook.details == "Format: PDF, File Size: 15 MB"
    journal = lib.find_item("J001")
    assert journal.details == "Volume: 38, Issue: 2, Publish Date: March 2023"
    assert lib.find_item("B001").details == ""

    assert lib.find_borrower("M001").max_loans == 3
    assert lib.find_borrower("M002").max_loans == 1
    assert lib.find_borrower("M002").contact_info == "jane@example.com"


def test_missing_files_load_nothing(tmp_path):
    lib = LibrarySystem()
    assert load_catalog(lib, tmp_path / "nope.csv", tmp_path / "nope2.csv") == (0, 0)
    assert load_catalog(lib) == (0, 0)
    assert lib.list_items() == []


def test_optional_columns_may_be_absent(tmp_path):
    path = tmp_path / "members.csv"
    path.write_text("Member ID,Name\nM010,Solo Reader\n", encoding="utf-8")
    lib = LibrarySystem()
    assert load_members(lib, path) == 1
    member = lib.find_borrower("M010")
    assert member.contact_info == ""
    assert member.max_loans == 3


def test_duplicate_item_in_csv(tmp_path):
    path = tmp_path / "items.csv"
    path.write_text("Item ID,Kind,Title\nB001,Book,One\nB001,Book,Two\n", encoding="utf-8")
    with pytest.raises(DuplicateIdentifier):
        load_items(LibrarySystem(), path)


def test_unknown_kind(tmp_path):
    path = tmp_path / "items.csv"
    path.write_text("Item ID,Kind,Title\nX1,Scroll,Old\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_items(LibrarySystem(), path)


def test_parse_kind():
    assert parse_kind("") is ItemKind.BOOK
    assert parse_kind("JOURNAL") is ItemKind.JOURNAL
    assert parse_kind(" EBook ") is ItemKind.EBOOK


def test_seed_demo_data():
    lib = LibrarySystem()
    seed_demo_data(lib)
    assert [i.item_id for i in lib.list_items()] == ["B001", "B002", "B003", "EB001", "J001"]
    assert [b.borrower_id for b in lib.list_borrowers()] == ["M001", "M002"]
    assert lib.list_staff()[0].position == "Head Librarian"
    assert lib.status_report().available == 5


@pytest.mark.parametrize("cell", ["three", "2.7", "0"])
def test_bad_max_loans_rejected(tmp_path, cell):
    path = tmp_path / "members.csv"
    path.write_text(f"Member ID,Name,Contact Info,Max Loans\nM1,A,,2\nM2,B,,{cell}\n", encoding="utf-8")
    lib = LibrarySystem()
    with pytest.raises(ValueError) as exc:
        load_members(lib, path)
    assert "M2" in str(exc.value) and cell in str(exc.value)
    assert lib.list_borrowers() == []


def test_whole_number_written_as_float_is_accepted(tmp_path):
    path = tmp_path / "members.csv"
    path.write_text("Member ID,Name,Contact Info,Max Loans\nM1,A,,2.0\n", encoding="utf-8")
    lib = LibrarySystem()
    assert load_members(lib, path) == 1
    assert lib.find_borrower("M1").max_loans == 2


def test_bad_item_number_rejected(tmp_path):
    path = tmp_path / "items.csv"
    path.write_text("Item ID,Kind,Title,Volume\nJ1,Journal,Mag,vol 3\n", encoding="utf-8")
    with pytest.raises(ValueError) as exc:
        load_items(LibrarySystem(), path)
    assert "J1" in str(exc.value)


def test_failed_load_adds_nothing(tmp_path):
    path = tmp_path / "items.csv"
    path.write_text("Item ID,Kind,Title\nB1,Book,One\nB2,Book,Two\nB1,Book,Again\n", encoding="utf-8")
    lib = LibrarySystem()
    with pytest.raises(DuplicateIdentifier):
        load_items(lib, path)
    assert lib.list_items() == []

    path.write_text("Item ID,Kind,Title\nB1,Book,One\nX1,Scroll,Old\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_items(lib, path)
    assert lib.list_items() == []


def test_id_already_in_catalog_rejects_whole_file(tmp_path):
    path = tmp_path / "items.csv"
    path.write_text("Item ID,Kind,Title\nB9,Book,New\nB1,Book,Clash\n", encoding="utf-8")
    lib = LibrarySystem()
    lib.add_item(Item("B1", "Existing"))
    with pytest.raises(DuplicateIdentifier):
        load_items(lib, path)
    assert [i.item_id for i in lib.list_items()] == ["B1"]


def test_bad_members_file_keeps_items_out(csv_paths, tmp_path):
    items_csv, _ = csv_paths
    members = tmp_path / "bad_members.csv"
    members.write_text("Member ID,Name,Contact Info,Max Loans\nM1,A,,many\n", encoding="utf-8")
    lib = LibrarySystem()
    with pytest.raises(ValueError):
        load_catalog(lib, items_csv, members)
    assert lib.list_items() == []
