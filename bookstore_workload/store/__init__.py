"""
Store package for the bookstore workload harness.

`abstract` declares the capabilities workers consume; `memory` provides an
in-process implementation of both for local sweeps and tests.
"""

from bookstore_workload.store.abstract import BookStore, StockManager
from bookstore_workload.store.memory import InMemoryBookStore

__all__ = [
    "BookStore",
    "InMemoryBookStore",
    "StockManager",
]
