"""
In-process store that implements both `BookStore` and `StockManager`.

Lets the harness run a "local" sweep without any server, and gives the tests a
store with the same business rules a remote one enforces. Every public method
holds a single re-entrant lock for its whole body, so each call is atomic with
respect to other threads; multi-call sequences made by a worker are not.
"""

from __future__ import annotations

import random
import threading
from typing import Dict, Iterable, List, Optional, Set

from bookstore_workload.domain.models import BookCopy, StockBook
from bookstore_workload.exceptions import BookStoreError


class InMemoryBookStore:
    """
    Dictionary-backed catalog keyed by isbn.

    Books are stored as immutable `StockBook` values and replaced on update.
    Validation happens for the whole batch before any mutation, so a rejected
    call leaves stock levels untouched. A refused purchase still bumps the
    sale-miss counter of each book that ran short.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._books: Dict[int, StockBook] = {}
        self._lock = threading.RLock()
        self._rng = random.Random(seed)

    def __len__(self) -> int:
        with self._lock:
            return len(self._books)

    # StockManager

    def add_books(self, books: Set[StockBook]) -> None:
        if books is None:
            raise BookStoreError("book set is null")
        with self._lock:
            seen: Set[int] = set()
            for book in books:
                if book.isbn in self._books or book.isbn in seen:
                    raise BookStoreError(f"ISBN {book.isbn} is duplicated")
                seen.add(book.isbn)
            for book in books:
                self._books[book.isbn] = book

    def add_copies(self, book_copies: Set[BookCopy]) -> None:
        if book_copies is None:
            raise BookStoreError("book copy set is null")
        with self._lock:
            for copy in book_copies:
                self._require_known(copy.isbn)
                if copy.num_copies < 1:
                    raise BookStoreError(
                        f"Invalid number of copies {copy.num_copies} for ISBN {copy.isbn}"
                    )
            for copy in book_copies:
                book = self._books[copy.isbn]
                self._books[copy.isbn] = book.model_copy(
                    update={"num_copies": book.num_copies + copy.num_copies}
                )

    def remove_all_books(self) -> None:
        with self._lock:
            self._books.clear()

    # Shared: no argument lists the catalog (StockManager), isbns select books (BookStore)

    def get_books(self, isbns: Optional[Iterable[int]] = None) -> List[StockBook]:
        with self._lock:
            if isbns is None:
                return list(self._books.values())
            wanted = list(isbns)
            for isbn in wanted:
                self._require_known(isbn)
            return [self._books[isbn] for isbn in wanted]

    # BookStore

    def get_editor_picks(self, num_books: int) -> List[StockBook]:
        if num_books < 0:
            raise BookStoreError(f"numBooks = {num_books}, but it must be positive")
        with self._lock:
            picks = [book for book in self._books.values() if book.editor_pick]
            if len(picks) <= num_books:
                return picks
            return self._rng.sample(picks, num_books)

    def buy_books(self, book_copies: Set[BookCopy]) -> None:
        if book_copies is None:
            raise BookStoreError("book copy set is null")
        with self._lock:
            for copy in book_copies:
                self._require_known(copy.isbn)
                if copy.num_copies < 1:
                    raise BookStoreError(
                        f"Invalid number of copies {copy.num_copies} for ISBN {copy.isbn}"
                    )

            missing = [
                copy for copy in book_copies if self._books[copy.isbn].num_copies < copy.num_copies
            ]
            if missing:
                for copy in missing:
                    book = self._books[copy.isbn]
                    self._books[copy.isbn] = book.model_copy(
                        update={"num_sale_misses": book.num_sale_misses + copy.num_copies}
                    )
                raise BookStoreError(
                    "Books not available: " + ", ".join(str(copy.isbn) for copy in missing)
                )

            for copy in book_copies:
                book = self._books[copy.isbn]
                self._books[copy.isbn] = book.model_copy(
                    update={"num_copies": book.num_copies - copy.num_copies}
                )

    def _require_known(self, isbn: int) -> None:
        if isbn < 1:
            raise BookStoreError(f"ISBN {isbn} is invalid")
        if isbn not in self._books:
            raise BookStoreError(f"ISBN {isbn} is not available")


__all__ = ["InMemoryBookStore"]
