"""
Store capabilities consumed by the workload workers.

The store service itself (catalog storage, concurrency control, persistence) is
a collaborator: workers only rely on the two protocols below. Any operation may
raise `BookStoreError` when it breaks a business rule; workers treat that as an
unsuccessful interaction.
"""

from __future__ import annotations

from typing import Iterable, List, Protocol, Set, runtime_checkable

from bookstore_workload.domain.models import BookCopy, StockBook


@runtime_checkable
class BookStore(Protocol):
    """
    Customer-facing side of the store.
    """

    def get_editor_picks(self, num_books: int) -> List[StockBook]:
        """Return at most `num_books` books currently recommended by editors."""
        ...

    def get_books(self, isbns: Iterable[int]) -> List[StockBook]:
        """Return the books matching `isbns`; unknown isbns are rejected."""
        ...

    def buy_books(self, book_copies: Set[BookCopy]) -> None:
        """
        Buy every requested copy or none of them.

        Raises
        ------
        BookStoreError
            If any isbn is unknown or any book lacks stock.
        """
        ...


@runtime_checkable
class StockManager(Protocol):
    """
    Inventory side of the store.
    """

    def get_books(self) -> List[StockBook]:
        """Return the full current catalog."""
        ...

    def add_books(self, books: Set[StockBook]) -> None:
        """Add new books; fails if any isbn already exists."""
        ...

    def add_copies(self, book_copies: Set[BookCopy]) -> None:
        """Add stock to existing books; fails on unknown isbn."""
        ...

    def remove_all_books(self) -> None:
        """Clear the catalog. Always succeeds."""
        ...


__all__ = ["BookStore", "StockManager"]
