"""
catalog.py

Load catalog items and members from CSV files into a LibrarySystem.

Items CSV columns: Item ID, Kind, Title, Author, Category, and optionally
Format, File Size MB (ebooks), Volume, Issue, Publish Date (journals).
Members CSV columns: Member ID, Name, Contact Info, and optionally Max Loans.
"""

from __future__ import annotations
import logging
import pathlib
from typing import Callable, List, Optional, Tuple, Union

import pandas as pd

from .config import DEFAULT_MAX_LOANS
from .domain import Borrower, Item, ItemKind
from .engine import LibrarySystem
from .errors import DuplicateIdentifier

logger = logging.getLogger("LibrarySystem.catalog")

PathLike = Union[str, pathlib.Path]

ITEM_COLUMNS = ["Item ID", "Kind", "Title", "Author", "Category",
                "Format", "File Size MB", "Volume", "Issue", "Publish Date"]
MEMBER_COLUMNS = ["Member ID", "Name", "Contact Info", "Max Loans"]
NUMERIC_ITEM_COLUMNS = ["File Size MB", "Volume", "Issue"]


def parse_kind(raw: str) -> ItemKind:
    """
    Map a Kind cell to an ItemKind, matching value or name case-insensitively.

    A blank cell means a physical book. Raises ValueError for anything else.
    """
    text = (raw or "").strip().lower()
    if text == "":
        return ItemKind.BOOK
    for kind in ItemKind:
        if text in (kind.value.lower(), kind.name.lower()):
            return kind
    raise ValueError(f"Unknown item kind: {raw!r}")


def _optional_int(value) -> Optional[int]:
    if pd.isna(value):
        return None
    return int(value)


def _optional_str(value) -> Optional[str]:
    text = str(value).strip()
    return text or None


def _read_csv(path: pathlib.Path, columns) -> pd.DataFrame:
    df = pd.read_csv(path, dtype=str).fillna("")
    # Ensure consistent columns
    for col in columns:
        if col not in df.columns:
            df[col] = ""
    return df


def _whole_numbers(df: pd.DataFrame, col: str, id_col: str) -> None:
    """
    Convert `col` to numbers in place. Blank cells become NaN.

    Raises ValueError naming the record and the cell for any non-blank value
    that is not a whole number.
    """
    raw = df[col].astype(str).str.strip()
    numbers = pd.to_numeric(raw, errors="coerce")
    bad = (raw != "") & (numbers.isna() | (numbers % 1 != 0))
    if bad.any():
        row = df.loc[bad].iloc[0]
        raise ValueError(f"{col} for {str(row[id_col]).strip()} must be a whole number, got {row[col]!r}")
    df[col] = numbers


def _check_new_ids(ids: List[str], exists: Callable[[str], bool]) -> None:
    seen = set()
    for record_id in ids:
        if record_id in seen or exists(record_id):
            raise DuplicateIdentifier(record_id)
        seen.add(record_id)


def read_items(items_csv: PathLike) -> List[Item]:
    """
    Parse the items CSV into Item records without touching any LibrarySystem.

    Returns an empty list with a warning if the file is missing. Raises
    ValueError on an unknown Kind or a non-whole numeric cell.
    """
    path = pathlib.Path(items_csv)
    if not path.exists():
        logger.warning("Items CSV not found: %s (starting empty)", path)
        return []
    df = _read_csv(path, ITEM_COLUMNS)
    for col in NUMERIC_ITEM_COLUMNS:
        _whole_numbers(df, col, "Item ID")

    items: List[Item] = []
    for _, row in df.iterrows():
        item_id = str(row["Item ID"]).strip()
        if not item_id:
            continue
        kind = parse_kind(row["Kind"])
        item = Item(
            item_id=item_id,
            title=str(row["Title"]).strip(),
            author=str(row["Author"]).strip(),
            category=str(row["Category"]).strip(),
            kind=kind,
        )
        if kind is ItemKind.EBOOK:
            item.file_format = _optional_str(row["Format"])
            item.file_size_mb = _optional_int(row["File Size MB"])
        elif kind is ItemKind.JOURNAL:
            item.volume = _optional_int(row["Volume"])
            item.issue = _optional_int(row["Issue"])
            item.publish_date = _optional_str(row["Publish Date"])
        items.append(item)
    return items


def read_members(members_csv: PathLike, default_max_loans: int = DEFAULT_MAX_LOANS) -> List[Borrower]:
    """
    Parse the members CSV into Borrower records.

    A blank Max Loans cell means `default_max_loans`. Any other value must be
    a whole number of at least 1, otherwise ValueError is raised.
    """
    path = pathlib.Path(members_csv)
    if not path.exists():
        logger.warning("Members CSV not found: %s (starting empty)", path)
        return []
    df = _read_csv(path, MEMBER_COLUMNS)
    _whole_numbers(df, "Max Loans", "Member ID")

    members: List[Borrower] = []
    for _, row in df.iterrows():
        member_id = str(row["Member ID"]).strip()
        if not member_id:
            continue
        limit = _optional_int(row["Max Loans"])
        if limit is None:
            limit = default_max_loans
        elif limit < 1:
            raise ValueError(f"Max Loans for {member_id} must be at least 1, got {limit}")
        members.append(Borrower(
            member_id,
            str(row["Name"]).strip(),
            str(row["Contact Info"]).strip(),
            max_loans=limit,
        ))
    return members


def _add_all(system: LibrarySystem, items: List[Item], members: List[Borrower]) -> None:
    _check_new_ids([i.item_id for i in items], lambda i: system.find_item(i) is not None)
    _check_new_ids([m.borrower_id for m in members], lambda m: system.find_borrower(m) is not None)
    for item in items:
        system.add_item(item)
    for member in members:
        system.add_borrower(member)


def load_items(system: LibrarySystem, items_csv: PathLike) -> int:
    """
    Add every row of the items CSV to `system`.

    The whole file is validated before anything is added, so a failed load
    leaves the catalog untouched. Raises DuplicateIdentifier on a repeated or
    already-known Item ID and ValueError on a malformed row.
    """
    items = read_items(items_csv)
    _add_all(system, items, [])
    logger.info("Loaded %d items", len(items))
    return len(items)


def load_members(system: LibrarySystem, members_csv: PathLike) -> int:
    """
    Register every row of the members CSV with `system`, all or nothing.

    A blank Max Loans cell falls back to the system's default loan limit.
    Returns the number of members loaded; 0 with a warning if the file is missing.
    """
    members = read_members(members_csv, system.settings.default_max_loans)
    _add_all(system, [], members)
    logger.info("Loaded %d members", len(members))
    return len(members)


def load_catalog(system: LibrarySystem, items_csv: Optional[PathLike] = None,
                 members_csv: Optional[PathLike] = None) -> Tuple[int, int]:
    """
    Load items and members; either path may be omitted. Returns (items, members) loaded.

    Both files are parsed and checked before either is added to `system`.
    """
    items = read_items(items_csv) if items_csv else []
    members = read_members(members_csv, system.settings.default_max_loans) if members_csv else []
    _add_all(system, items, members)
    logger.info("Loaded %d items and %d members", len(items), len(members))
    return len(items), len(members)
