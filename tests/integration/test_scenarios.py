"""
End-to-end scenarios against the in-memory store.

These run real workers on real threads; they are fast enough to run in every
test session.
"""

from __future__ import annotations

from bookstore_workload.metrics import summarize_sweep
from bookstore_workload.orchestrator import INITIAL_ISBN, run_sweep, run_worker
from bookstore_workload.store.memory import InMemoryBookStore

REPLENISH_RUNS = 50
COPIES_PER_REPLENISH = 5
ACQUISITION_RUNS = 20
BOOKS_PER_ACQUISITION = 3
SWEEP_LEVELS = 3


def test_replenishment_only_workload_always_succeeds(seeded_store, make_parameters) -> None:
    params = make_parameters(
        percent_rare_stock_manager_interaction=0.0,
        percent_frequent_stock_manager_interaction=100.0,
        warm_up_runs=0,
        actual_runs=REPLENISH_RUNS,
        num_books_with_least_copies=1,
        num_book_copies_to_buy=COPIES_PER_REPLENISH,
    )

    result = run_worker(seeded_store, seeded_store, params)

    assert result.successful_interactions == REPLENISH_RUNS
    assert result.total_frequent_bookstore_interactions == 0
    (book,) = seeded_store.get_books()
    assert book.isbn == INITIAL_ISBN
    assert book.num_copies > 0
    assert book.num_copies % COPIES_PER_REPLENISH == 0
    assert book.num_copies == REPLENISH_RUNS * COPIES_PER_REPLENISH


def test_acquisition_only_workload_grows_catalog_by_every_generated_book(
    seeded_store, make_parameters
) -> None:
    before = len(seeded_store.get_books())
    params = make_parameters(
        percent_rare_stock_manager_interaction=100.0,
        percent_frequent_stock_manager_interaction=0.0,
        warm_up_runs=0,
        actual_runs=ACQUISITION_RUNS,
        num_books_to_add=BOOKS_PER_ACQUISITION,
    )

    result = run_worker(seeded_store, seeded_store, params)

    after = len(seeded_store.get_books())
    assert after - before == ACQUISITION_RUNS * BOOKS_PER_ACQUISITION
    assert result.successful_interactions == ACQUISITION_RUNS


def test_mixed_workload_sweep_produces_consistent_series(make_parameters) -> None:
    store = InMemoryBookStore(seed=5)
    params = make_parameters(
        percent_rare_stock_manager_interaction=20.0,
        percent_frequent_stock_manager_interaction=30.0,
        warm_up_runs=5,
        actual_runs=30,
    )

    sweep = run_sweep(store, store, SWEEP_LEVELS, params)
    series = summarize_sweep(sweep)

    assert [level for level, _ in series.throughput] == [1, 2, 3]
    assert [level for level, _ in series.latency] == [1, 2, 3]
    for trial in sweep.trials:
        assert len(trial.results) == trial.level
        for result in trial.results:
            assert result.successful_interactions <= params.actual_runs
            assert result.total_frequent_bookstore_interactions <= params.actual_runs
    assert all(value >= 0 for _, value in series.throughput)
    assert all(value > 0 for _, value in series.latency)


def test_concurrent_acquisitions_never_collide(make_parameters) -> None:
    store = InMemoryBookStore(seed=9)
    params = make_parameters(
        percent_rare_stock_manager_interaction=100.0,
        percent_frequent_stock_manager_interaction=0.0,
        warm_up_runs=0,
        actual_runs=10,
        num_books_to_add=2,
    )

    sweep = run_sweep(store, store, SWEEP_LEVELS, params, profile=False)

    last = sweep.trials[-1]
    assert all(result.successful_interactions == 10 for result in last.results)
    # baseline book + every generated book from the last level
    assert len(store.get_books()) == 1 + SWEEP_LEVELS * 10 * 2
