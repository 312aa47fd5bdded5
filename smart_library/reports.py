"""
reports.py

DataFrame projections of the engine's read-only views, used by the console.
"""

from __future__ import annotations
import datetime
from typing import Iterable, Optional

import pandas as pd

from .domain import BorrowerView, ItemView, OverdueEntry, StaffMember, StatusReport, TransactionView

ITEM_REPORT_COLUMNS = ["Book ID", "Title", "Author", "Category", "Type", "Details", "Status"]
MEMBER_REPORT_COLUMNS = ["Member ID", "Name", "Contact Info", "Books Issued", "Issued Items"]
STAFF_REPORT_COLUMNS = ["Staff ID", "Name", "Position"]
TRANSACTION_REPORT_COLUMNS = ["Transaction ID", "Member ID", "Book ID", "Issue Date", "Return Date", "Fine"]
OVERDUE_REPORT_COLUMNS = ["Transaction ID", "Member ID", "Book ID", "Issue Date",
                          "Days Out", "Days Overdue", "Fine Due"]

DATE_FORMAT = "%a %b %d %H:%M:%S %Y"


def format_timestamp(ts: Optional[datetime.datetime]) -> str:
    return ts.strftime(DATE_FORMAT) if ts is not None else ""


def availability_label(available: bool) -> str:
    return "Available" if available else "Issued"


def items_frame(items: Iterable[ItemView]) -> pd.DataFrame:
    rows = [{
        "Book ID": i.item_id,
        "Title": i.title,
        "Author": i.author,
        "Category": i.category,
        "Type": i.kind.value,
        "Details": i.details,
        "Status": availability_label(i.available),
    } for i in items]
    return pd.DataFrame(rows, columns=ITEM_REPORT_COLUMNS)


def borrowers_frame(borrowers: Iterable[BorrowerView]) -> pd.DataFrame:
    rows = [{
        "Member ID": b.borrower_id,
        "Name": b.name,
        "Contact Info": b.contact_info,
        "Books Issued": f"{b.held_count}/{b.max_loans}",
        "Issued Items": ",".join(b.held_items),
    } for b in borrowers]
    return pd.DataFrame(rows, columns=MEMBER_REPORT_COLUMNS)


def transactions_frame(transactions: Iterable[TransactionView]) -> pd.DataFrame:
    """
    Build a transaction table.

    Unreturned transactions show "Not returned yet" as the return date and
    "N/A" as the fine.
    """
    rows = []
    for t in transactions:
        rows.append({
            "Transaction ID": t.transaction_id,
            "Member ID": t.borrower_id,
            "Book ID": t.item_id,
            "Issue Date": format_timestamp(t.issued_at),
            "Return Date": format_timestamp(t.returned_at) if t.returned else "Not returned yet",
            "Fine": f"Rs. {t.fine:.2f}" if t.returned else "N/A",
        })
    return pd.DataFrame(rows, columns=TRANSACTION_REPORT_COLUMNS)


def overdue_frame(entries: Iterable[OverdueEntry]) -> pd.DataFrame:
    rows = [{
        "Transaction ID": e.transaction.transaction_id,
        "Member ID": e.transaction.borrower_id,
        "Book ID": e.transaction.item_id,
        "Issue Date": format_timestamp(e.transaction.issued_at),
        "Days Out": e.days_out,
        "Days Overdue": e.days_overdue,
        "Fine Due": e.fine_due,
    } for e in entries]
    return pd.DataFrame(rows, columns=OVERDUE_REPORT_COLUMNS)


def status_frame(report: StatusReport) -> pd.DataFrame:
    return pd.DataFrame([{"Total Books": report.total, "Available": report.available, "Issued": report.issued}])


def staff_frame(staff: Iterable[StaffMember]) -> pd.DataFrame:
    rows = [{"Staff ID": s.staff_id, "Name": s.name, "Position": s.position} for s in staff]
    return pd.DataFrame(rows, columns=STAFF_REPORT_COLUMNS)
