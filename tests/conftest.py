"""
Pytest configuration for the bookstore workload harness.

Provides fixtures for:
- A seeded in-memory store
- A generator starting above the baseline book
- Parameter factories for deterministic interaction mixes
- Settings isolation (no `.env` or cached settings leaking between tests)
- Root logger restoration after tests that call `configure_logging`
"""

from __future__ import annotations

import logging
from typing import Callable

import pytest

from bookstore_workload.config import get_settings
from bookstore_workload.orchestrator import INITIAL_ISBN, initialize_bookstore_data
from bookstore_workload.store.memory import InMemoryBookStore
from bookstore_workload.utils.logging import WORKER_LOGGER
from bookstore_workload.workloads.configuration import WorkloadConfiguration, WorkloadParameters
from bookstore_workload.workloads.generator import BookSetGenerator

DEFAULT_SEED = 42


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """
    Run every test from an empty directory with a fresh settings cache.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    workers = logging.getLogger(WORKER_LOGGER)
    handlers = root.handlers[:]
    level = root.level
    worker_level = workers.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    workers.setLevel(worker_level)


@pytest.fixture
def store() -> InMemoryBookStore:
    return InMemoryBookStore(seed=DEFAULT_SEED)


@pytest.fixture
def seeded_store(store: InMemoryBookStore) -> InMemoryBookStore:
    """Store holding only the baseline book (0 copies)."""
    initialize_bookstore_data(store)
    return store


@pytest.fixture
def generator() -> BookSetGenerator:
    return BookSetGenerator(INITIAL_ISBN, seed=DEFAULT_SEED)


@pytest.fixture
def make_parameters() -> Callable[..., WorkloadParameters]:
    """
    Factory for parameters with no warm-up and a short measurement phase.
    """

    def _make(**overrides) -> WorkloadParameters:
        values = {
            "percent_rare_stock_manager_interaction": 10.0,
            "percent_frequent_stock_manager_interaction": 30.0,
            "warm_up_runs": 0,
            "actual_runs": 20,
            "num_books_to_add": 3,
            "num_books_with_least_copies": 2,
            "num_book_copies_to_buy": 1,
            "num_editor_picks_to_get": 5,
            "seed": DEFAULT_SEED,
        }
        values.update(overrides)
        return WorkloadParameters(**values)

    return _make


@pytest.fixture
def make_configuration(generator: BookSetGenerator) -> Callable[..., WorkloadConfiguration]:
    def _make(parameters: WorkloadParameters, bookstore, stock_manager=None) -> WorkloadConfiguration:
        return WorkloadConfiguration(
            parameters=parameters,
            generator=generator,
            bookstore=bookstore,
            stock_manager=stock_manager if stock_manager is not None else bookstore,
        )

    return _make
