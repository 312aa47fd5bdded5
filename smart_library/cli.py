#!/usr/bin/env python3
"""
cli.py

Menu-driven console for the Smart Library lending engine.

Typical usage:
    python -m smart_library
    python -m smart_library --items-csv items.csv --members-csv members.csv --log-level DEBUG

Without CSV paths the demo catalog is loaded.
"""

from __future__ import annotations
import argparse
import logging
from typing import List, Optional

import pandas as pd

from . import reports
from .catalog import load_catalog
from .engine import LibrarySystem
from .errors import LibraryError
from .seed import seed_demo_data

logger = logging.getLogger("LibrarySystem.cli")

RULE = "=" * 105

# Show all columns without trimming
pd.set_option("display.max_columns", None)
pd.set_option("display.expand_frame_repr", False)


def input_prompt(prompt: str) -> str:
    """
    Wrapper around built-in input() that returns a stripped string and handles interrupts.

    Returns an empty string on EOF/KeyboardInterrupt.
    """
    try:
        return input(prompt).strip()
    except (EOFError, KeyboardInterrupt):
        print()
        return ""


def print_table(title: str, df: pd.DataFrame, empty_message: str = "Nothing to show.") -> None:
    print(f"\n{RULE}\n{title}\n{RULE}")
    if df.empty:
        print(empty_message)
    else:
        print(df.to_string(index=False))
    print(RULE)


def print_menu():
    """
    Print the interactive CLI menu to stdout.

    This function only prints available options and does not return a value.
    """
    print(f"\n{RULE}")
    print("SMART LIBRARY MANAGEMENT SYSTEM")
    print(RULE)
    print("1. Display All Books")
    print("2. Display All Members and Staff")
    print("3. Issue Book")
    print("4. Return Book")
    print("5. Generate Overdue Report")
    print("6. Display Recent Transactions")
    print("7. Generate Book Status Report")
    print("8. Sort Books by ID")
    print("0. Exit")


def cli_loop(lib: LibrarySystem):
    """
    Interactive command-loop for the library system.

    Presents a text menu, accepts user input and invokes `LibrarySystem` methods.
    """
    while True:
        print_menu()
        choice = input_prompt("Enter your choice: ")
        if choice == "0":
            break
        elif choice == "1":
            items = lib.list_items()
            print_table(f"LIBRARY BOOKS ({len(items)})", reports.items_frame(items))
        elif choice == "2":
            members = lib.list_borrowers()
            print_table(f"LIBRARY MEMBERS ({len(members)})", reports.borrowers_frame(members))
            staff = lib.list_staff()
            if staff:
                print_table(f"LIBRARY STAFF ({len(staff)})", reports.staff_frame(staff))
        elif choice == "3":
            mid = input_prompt("Enter Member ID: ")
            bid = input_prompt("Enter Book ID: ")
            result = lib.issue(mid, bid)
            if result.issued:
                print("Book issued successfully!")
                print(reports.transactions_frame([result.transaction]).to_string(index=False))
            elif result.queued:
                print("Book is not available. Adding to reservation queue.")
            else:
                print(f"Error: {result.message}")
        elif choice == "4":
            mid = input_prompt("Enter Member ID: ")
            bid = input_prompt("Enter Book ID: ")
            result = lib.return_item(mid, bid)
            if not result.ok:
                print(f"Error: {result.message}")
                continue
            print("Book returned successfully!")
            print(reports.transactions_frame([result.transaction]).to_string(index=False))
            if result.reservation is not None:
                print("This book has a reservation. Processing...")
                if result.reservation.issued:
                    print(f"Reserved book issued to {result.reservation.borrower_id}.")
                else:
                    print(f"Could not process reservation: {result.reservation.message}")
        elif choice == "5":
            print_table("OVERDUE BOOKS REPORT", reports.overdue_frame(lib.overdue_report()),
                        empty_message="No overdue books.")
        elif choice == "6":
            print_table("RECENT TRANSACTIONS", reports.transactions_frame(lib.recent_activity()),
                        empty_message="No recent transactions.")
        elif choice == "7":
            items = lib.list_items()
            print_table("BOOK STATUS REPORT", reports.items_frame(items)[["Book ID", "Title", "Status"]])
            print(reports.status_frame(lib.status_report()).to_string(index=False))
        elif choice == "8":
            lib.sort_items_by_identifier()
            print("Books sorted by ID.")
        else:
            print("Invalid choice. Please try again.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Smart Library Management System")
    parser.add_argument("--items-csv", default=None, help="CSV of catalog items (Item ID, Kind, Title, ...)")
    parser.add_argument("--members-csv", default=None, help="CSV of members (Member ID, Name, Contact Info, Max Loans)")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse arguments, load the catalog and run the interactive session.

    Loads the CSV catalog when a path is given, otherwise the demo catalog.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s: %(message)s")

    lib = LibrarySystem()
    if args.items_csv or args.members_csv:
        try:
            items, members = load_catalog(lib, args.items_csv, args.members_csv)
        except (LibraryError, ValueError) as e:
            logger.error("Could not load catalog: %s", e)
            return 1
        logger.info("Catalog ready: %d items, %d members", items, members)
    else:
        seed_demo_data(lib)
        logger.info("Loaded demo catalog")

    cli_loop(lib)
    print("Thank you for using the Smart Library Management System!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
