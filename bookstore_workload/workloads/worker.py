"""
Workload worker: one simulated client of the bookstore.

A worker runs three phases in a fixed order:

1. warm-up: `warm_up_runs` iterations whose outcomes are thrown away;
2. measurement: `actual_runs` iterations timed as one contiguous interval;
3. finalize: the counters are frozen into a `WorkerRunResult`.

Every iteration draws `x` uniformly from [0, 100) and dispatches on it:

- `x < pRare`                  -> new stock acquisition (stock manager)
- `x < pRare + pFrequent`      -> stock replenishment (stock manager)
- otherwise                    -> customer purchase (bookstore)

A `BookStoreError` raised by a collaborator makes the iteration unsuccessful and
nothing more. Any other exception escapes `run()` and fails the worker's task.
"""

from __future__ import annotations

import enum
import random
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from bookstore_workload.domain.models import BookCopy, StockBook, WorkerRunResult
from bookstore_workload.exceptions import BookStoreError
from bookstore_workload.utils.logging import get_logger
from bookstore_workload.workloads.configuration import CopiesOrdering, WorkloadConfiguration

log = get_logger(__name__)


class InteractionKind(str, enum.Enum):
    RARE_STOCK_MANAGER = "rare_stock_manager"
    FREQUENT_STOCK_MANAGER = "frequent_stock_manager"
    FREQUENT_BOOKSTORE = "frequent_bookstore"


@dataclass(frozen=True)
class InteractionOutcome:
    """Result of one selection-and-dispatch step."""

    kind: InteractionKind
    succeeded: bool
    error: Optional[str] = None


def _copies_sort_key(ordering: CopiesOrdering) -> Callable[[StockBook], object]:
    if ordering == "numeric":
        return lambda book: book.num_copies
    # Ranks by the decimal string, so "10" sorts before "9".
    return lambda book: str(book.num_copies)


class Worker:
    """
    Runs the interaction mix described by a `WorkloadConfiguration`.

    A worker is single-threaded: its interactions never overlap each other, so
    no lock guards them. Workers do not coordinate with one another; the store
    is the only shared state.
    """

    def __init__(
        self,
        configuration: WorkloadConfiguration,
        rng: Optional[random.Random] = None,
        name: str = "worker",
    ) -> None:
        self.configuration = configuration
        self.name = name
        self._rng = rng or random.Random()
        self._num_successful_frequent_bookstore_interactions = 0
        self._num_total_frequent_bookstore_interactions = 0
        self._interactions: Dict[InteractionKind, Callable[[], None]] = {
            InteractionKind.RARE_STOCK_MANAGER: self.run_rare_stock_manager_interaction,
            InteractionKind.FREQUENT_STOCK_MANAGER: self.run_frequent_stock_manager_interaction,
            InteractionKind.FREQUENT_BOOKSTORE: self.run_frequent_bookstore_interaction,
        }

    def choose_interaction(self, choice: float) -> InteractionKind:
        params = self.configuration.parameters
        p_rare = params.percent_rare_stock_manager_interaction
        p_frequent = params.percent_frequent_stock_manager_interaction
        if choice < p_rare:
            return InteractionKind.RARE_STOCK_MANAGER
        if choice < p_rare + p_frequent:
            return InteractionKind.FREQUENT_STOCK_MANAGER
        return InteractionKind.FREQUENT_BOOKSTORE

    def dispatch(self, choice: float) -> InteractionOutcome:
        """
        Run the interaction selected by `choice` (a value in [0, 100)).

        Customer purchases also move the attempted/succeeded counters reported
        in the result record.
        """
        kind = self.choose_interaction(choice)
        is_customer = kind is InteractionKind.FREQUENT_BOOKSTORE
        if is_customer:
            self._num_total_frequent_bookstore_interactions += 1
        try:
            self._interactions[kind]()
        except BookStoreError as exc:
            return InteractionOutcome(kind=kind, succeeded=False, error=str(exc))
        if is_customer:
            self._num_successful_frequent_bookstore_interactions += 1
        return InteractionOutcome(kind=kind, succeeded=True)

    def _next_choice(self) -> float:
        return self._rng.random() * 100.0

    def run(self) -> WorkerRunResult:
        """Run warm-up, then the timed measurement phase, and return the result."""
        params = self.configuration.parameters

        for _ in range(params.warm_up_runs):
            self.dispatch(self._next_choice())

        self._num_successful_frequent_bookstore_interactions = 0
        self._num_total_frequent_bookstore_interactions = 0
        successful_interactions = 0

        start_ns = time.perf_counter_ns()
        for _ in range(params.actual_runs):
            if self.dispatch(self._next_choice()).succeeded:
                successful_interactions += 1
        elapsed_ns = time.perf_counter_ns() - start_ns

        result = WorkerRunResult(
            successful_interactions=successful_interactions,
            elapsed_nanos=elapsed_ns,
            total_runs=params.actual_runs,
            successful_frequent_bookstore_interactions=(
                self._num_successful_frequent_bookstore_interactions
            ),
            total_frequent_bookstore_interactions=self._num_total_frequent_bookstore_interactions,
        )
        log.debug(
            f"[WORKER DONE] {self.name}",
            extra={
                "worker": self.name,
                "successful": result.successful_interactions,
                "runs": result.total_runs,
                "elapsed_ns": result.elapsed_nanos,
            },
        )
        return result

    __call__ = run

    def run_rare_stock_manager_interaction(self) -> None:
        """
        New stock acquisition: add freshly generated books the store lacks.
        """
        config = self.configuration
        existing = {book.isbn for book in config.stock_manager.get_books()}
        generated = config.generator.next_set_of_stock_books(config.parameters.num_books_to_add)
        to_add = {book for book in generated if book.isbn not in existing}
        config.stock_manager.add_books(to_add)

    def run_frequent_stock_manager_interaction(self) -> None:
        """
        Stock replenishment: add copies to the k books with the fewest copies.
        """
        config = self.configuration
        params = config.parameters
        books: List[StockBook] = sorted(
            config.stock_manager.get_books(), key=_copies_sort_key(params.copies_ordering)
        )
        least_stocked = books[: params.num_books_with_least_copies]
        config.stock_manager.add_copies(
            {
                BookCopy(isbn=book.isbn, num_copies=params.num_book_copies_to_buy)
                for book in least_stocked
            }
        )

    def run_frequent_bookstore_interaction(self) -> None:
        """
        Customer purchase: buy copies of a random subset of the editor picks.
        """
        config = self.configuration
        params = config.parameters
        num_to_pick = self._rng.randint(1, params.num_editor_picks_to_get)
        editor_picks = config.bookstore.get_editor_picks(params.num_editor_picks_to_get)
        isbns = {book.isbn for book in editor_picks}
        sampled = config.generator.sample_from_set_of_isbns(isbns, num_to_pick)
        books = config.bookstore.get_books(sampled)
        config.bookstore.buy_books(
            {BookCopy(isbn=book.isbn, num_copies=params.num_book_copies_to_buy) for book in books}
        )


__all__ = ["InteractionKind", "InteractionOutcome", "Worker"]
