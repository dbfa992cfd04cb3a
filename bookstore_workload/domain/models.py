"""
Domain models for the bookstore workload harness.

Catalog records (`StockBook`, `BookCopy`) travel between workers and the store
collaborators; `WorkerRunResult` is the one immutable record each worker hands
back to the trial driver. `Trial` and `Sweep` are the transient groupings the
driver and the metrics aggregator work with.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from pydantic import BaseModel, Field

from bookstore_workload.utils.profiler import ProfileStats

NANOS_PER_SECOND = 1_000_000_000


class StockBook(BaseModel):
    """
    A book as the stock manager sees it: bibliographic data plus inventory counters.
    """

    isbn: int = Field(..., gt=0, description="Catalog identifier, unique within a store.")
    title: str = Field(..., description="Book title.")
    author: str = Field(..., description="Book author.")
    price: float = Field(..., ge=0, description="Unit price.")
    num_copies: int = Field(..., ge=0, description="Copies currently in stock.")
    num_sale_misses: int = Field(0, ge=0, description="Purchases refused for lack of stock.")
    num_times_rated: int = Field(0, ge=0, description="Number of ratings received.")
    total_rating: int = Field(0, ge=0, description="Sum of all ratings received.")
    editor_pick: bool = Field(False, description="Whether editors recommend the book.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
    }

    @property
    def average_rating(self) -> float:
        if self.num_times_rated == 0:
            return -1.0
        return self.total_rating / self.num_times_rated


class BookCopy(BaseModel):
    """
    A quantity of copies of one book, used both for purchases and replenishment.
    """

    isbn: int = Field(..., gt=0)
    num_copies: int = Field(...)

    model_config = {"frozen": True}


class WorkerRunResult(BaseModel):
    """
    Outcome of one worker's measurement phase.

    `elapsed_nanos` covers the measurement iterations only; warm-up is excluded.
    The two `*_frequent_bookstore_interactions` counters track the customer
    purchase interaction separately from the stock manager interactions.
    """

    successful_interactions: int = Field(..., ge=0)
    elapsed_nanos: int = Field(..., ge=0)
    total_runs: int = Field(..., ge=0)
    successful_frequent_bookstore_interactions: int = Field(..., ge=0)
    total_frequent_bookstore_interactions: int = Field(..., ge=0)

    model_config = {"frozen": True}

    @property
    def elapsed_seconds(self) -> float:
        return self.elapsed_nanos / NANOS_PER_SECOND

    @property
    def throughput(self) -> float:
        """Successful interactions per second for this worker alone."""
        if self.elapsed_nanos == 0:
            return 0.0
        return self.successful_interactions * NANOS_PER_SECOND / self.elapsed_nanos

    @property
    def success_ratio(self) -> float:
        if self.total_runs == 0:
            return 0.0
        return self.successful_interactions / self.total_runs


@dataclass(frozen=True)
class Trial:
    """Result records of all workers run concurrently at one concurrency level."""

    level: int
    results: Tuple[WorkerRunResult, ...]
    profile: Optional[ProfileStats] = None


@dataclass(frozen=True)
class Sweep:
    """Trials ordered by increasing concurrency level, 1..max_concurrency."""

    label: str
    trials: Tuple[Trial, ...]

    @property
    def max_concurrency(self) -> int:
        return len(self.trials)


__all__ = [
    "NANOS_PER_SECOND",
    "BookCopy",
    "StockBook",
    "Sweep",
    "Trial",
    "WorkerRunResult",
]
