"""
Synthetic catalog records for the workload.

`BookSetGenerator` owns the isbn high-water mark. One instance is shared by all
workers of a sweep, and the counter only moves under its lock, so no two calls
ever hand out the same isbn even when workers generate books concurrently.
Random titles, authors and shuffles use a separate lock, so drawing names
never blocks another worker reserving isbns.
"""

from __future__ import annotations

import random
import string
import threading
from typing import AbstractSet, Optional, Set

from bookstore_workload.domain.models import StockBook

DEFAULT_INITIAL_COPIES = 10
DEFAULT_TITLE_LENGTH = 5
DEFAULT_AUTHOR_LENGTH = 5
DEFAULT_PRICE = 10.0

_ALPHABET = string.ascii_lowercase


class BookSetGenerator:
    """
    Generates stock books with fresh isbns and samples isbn sets.
    """

    def __init__(
        self,
        latest_isbn: int,
        initial_copies: int = DEFAULT_INITIAL_COPIES,
        title_length: int = DEFAULT_TITLE_LENGTH,
        author_length: int = DEFAULT_AUTHOR_LENGTH,
        seed: Optional[int] = None,
    ) -> None:
        if latest_isbn < 0:
            raise ValueError(f"latest_isbn must be >= 0, got {latest_isbn}")
        self._latest_isbn = latest_isbn
        self.initial_copies = initial_copies
        self.title_length = title_length
        self.author_length = author_length
        self._isbn_lock = threading.Lock()
        self._rng_lock = threading.Lock()
        self._rng = random.Random(seed)

    @property
    def latest_isbn(self) -> int:
        with self._isbn_lock:
            return self._latest_isbn

    def _reserve_isbns(self, count: int) -> range:
        with self._isbn_lock:
            first = self._latest_isbn + 1
            self._latest_isbn += count
            return range(first, first + count)

    def _random_string(self, length: int) -> str:
        with self._rng_lock:
            return "".join(self._rng.choice(_ALPHABET) for _ in range(length))

    def next_set_of_stock_books(self, count: int) -> Set[StockBook]:
        """
        Return exactly `count` new stock books.

        Isbns are reserved as one contiguous block, strictly above every isbn
        this generator handed out before.
        """
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        return {
            StockBook(
                isbn=isbn,
                title=self._random_string(self.title_length),
                author=self._random_string(self.author_length),
                price=DEFAULT_PRICE,
                num_copies=self.initial_copies,
                editor_pick=True,
            )
            for isbn in self._reserve_isbns(count)
        }

    def sample_from_set_of_isbns(self, isbns: AbstractSet[int], num: int) -> AbstractSet[int]:
        """
        Return `num` isbns picked uniformly at random from `isbns`.

        When `isbns` has at most `num` elements it is returned as is. The input
        is never mutated.
        """
        if num < 0:
            raise ValueError(f"num must be >= 0, got {num}")
        if len(isbns) <= num:
            return isbns
        candidates = list(isbns)
        with self._rng_lock:
            self._rng.shuffle(candidates)
        return set(candidates[:num])


__all__ = ["BookSetGenerator"]
