from __future__ import annotations

from .domain import Item, ItemKind, StaffMember
from .engine import LibrarySystem


def seed_demo_data(system: LibrarySystem) -> None:
    # books
    system.add_item(Item("B001", "The C++ Programming Language", "Bjarne Stroustrup", "Programming"))
    system.add_item(Item("B002", "Data Structures Using C++", "D.S. Malik", "Programming"))
    system.add_item(Item("B003", "Design Patterns", "Erich Gamma et al.", "Software Engineering"))
    system.add_item(Item("EB001", "Clean Code", "Robert C. Martin", "Programming",
                         kind=ItemKind.EBOOK, file_format="PDF", file_size_mb=15))
    system.add_item(Item("J001", "IEEE Software", "IEEE", "Software Engineering",
                         kind=ItemKind.JOURNAL, volume=38, issue=2, publish_date="March 2023"))

    # members
    system.register_borrower("M001", "John Doe", "john@example.com")
    system.register_borrower("M002", "Jane Smith", "jane@example.com")

    # staff
    system.add_staff(StaffMember("L001", "Alice Brown", "Head Librarian"))
