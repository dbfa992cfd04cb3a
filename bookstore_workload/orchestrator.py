"""
Trial driver: runs the workload at increasing concurrency levels.

For each level `k` in 1..max_concurrency the driver resets the store to a
single baseline book, starts `k` workers concurrently on a thread pool sized
for the largest level, and joins all of them before moving on. Levels never
overlap, so every trial starts from the same catalog.

Usage:
    from bookstore_workload.orchestrator import run_sweep
    from bookstore_workload.store import InMemoryBookStore

    store = InMemoryBookStore()
    sweep = run_sweep(store, store, max_concurrency=4)
"""

from __future__ import annotations

import contextlib
import random
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Mapping, Optional, Tuple

from bookstore_workload.config import get_settings
from bookstore_workload.domain.models import StockBook, Sweep, Trial, WorkerRunResult
from bookstore_workload.exceptions import TrialFailedError
from bookstore_workload.store.abstract import BookStore, StockManager
from bookstore_workload.utils.logging import get_logger
from bookstore_workload.utils.profiler import profile_block
from bookstore_workload.workloads.configuration import WorkloadConfiguration, WorkloadParameters
from bookstore_workload.workloads.generator import BookSetGenerator
from bookstore_workload.workloads.worker import Worker

log = get_logger(__name__)

INITIAL_ISBN = 3044561
SEED_BOOK = StockBook(
    isbn=INITIAL_ISBN,
    title="Harry Potter and JUnit",
    author="JK Unit",
    price=10.0,
    num_copies=0,
    editor_pick=False,
)


def initialize_bookstore_data(stock_manager: StockManager) -> None:
    """Seed the catalog with the baseline book every trial starts from."""
    stock_manager.add_books({SEED_BOOK})


def _worker_rng(seed: Optional[int], level: int, index: int) -> random.Random:
    if seed is None:
        return random.Random()
    return random.Random(seed + level * 1000 + index)


def _resolve_parameters(parameters: Optional[WorkloadParameters]) -> WorkloadParameters:
    if parameters is not None:
        return parameters
    return get_settings().workload_parameters()


def run_worker(
    bookstore: BookStore,
    stock_manager: StockManager,
    parameters: Optional[WorkloadParameters] = None,
    generator: Optional[BookSetGenerator] = None,
) -> WorkerRunResult:
    """
    Run a single worker in the calling thread against the store as it is.
    """
    params = _resolve_parameters(parameters)
    configuration = WorkloadConfiguration(
        parameters=params,
        generator=generator or BookSetGenerator(INITIAL_ISBN, seed=params.seed),
        bookstore=bookstore,
        stock_manager=stock_manager,
    )
    return Worker(configuration, rng=_worker_rng(params.seed, 1, 0)).run()


def _run_trial(
    executor: ThreadPoolExecutor,
    level: int,
    bookstore: BookStore,
    stock_manager: StockManager,
    parameters: WorkloadParameters,
    generator: BookSetGenerator,
    label: str,
    profile: bool,
) -> Trial:
    stock_manager.remove_all_books()
    initialize_bookstore_data(stock_manager)

    block = profile_block(f"{label}-trial-{level}") if profile else contextlib.nullcontext()
    with block as stats:
        futures: List[Future[WorkerRunResult]] = []
        for index in range(level):
            configuration = WorkloadConfiguration(
                parameters=parameters,
                generator=generator,
                bookstore=bookstore,
                stock_manager=stock_manager,
            )
            worker = Worker(
                configuration,
                rng=_worker_rng(parameters.seed, level, index),
                name=f"{label}-L{level}-W{index}",
            )
            futures.append(executor.submit(worker.run))

        results: List[WorkerRunResult] = []
        for index, future in enumerate(futures):
            try:
                results.append(future.result())
            except Exception as exc:
                log.exception(
                    f"[TRIAL FAILED] level={level} worker={index}",
                    extra={"sweep": label, "concurrency": level, "worker": index},
                )
                raise TrialFailedError(level, index, f"{type(exc).__name__}: {exc}") from exc

    return Trial(level=level, results=tuple(results), profile=stats)


def run_sweep(
    bookstore: BookStore,
    stock_manager: StockManager,
    max_concurrency: int,
    parameters: Optional[WorkloadParameters] = None,
    *,
    label: str = "local",
    generator: Optional[BookSetGenerator] = None,
    profile: bool = True,
) -> Sweep:
    """
    Run one trial per concurrency level from 1 to `max_concurrency`.

    Parameters
    ----------
    bookstore, stock_manager : BookStore, StockManager
        Store collaborators shared by every worker. Often the same object.
    max_concurrency : int
        Highest number of concurrent workers; also the thread pool size.
    parameters : WorkloadParameters | None
        Interaction mix and sizing. Defaults to values from settings.
    label : str
        Name of the sweep in logs and reports (e.g. "local", "rpc").
    generator : BookSetGenerator | None
        Isbn source shared by all workers of the sweep. A fresh one starting
        above the baseline book is created when omitted.
    profile : bool
        Whether to record process RSS/CPU for each trial.

    Returns
    -------
    Sweep
        Exactly `max_concurrency` trials; trial `i` holds `i` results.

    Raises
    ------
    TrialFailedError
        If any worker task terminates abnormally. No partial sweep is returned.
    """
    if max_concurrency < 1:
        raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")
    params = _resolve_parameters(parameters)
    generator = generator or BookSetGenerator(INITIAL_ISBN, seed=params.seed)

    log.info(
        f"[SWEEP START] {label}",
        extra={
            "sweep": label,
            "max_concurrency": max_concurrency,
            "actual_runs": params.actual_runs,
        },
    )
    trials: List[Trial] = []
    executor = ThreadPoolExecutor(
        max_workers=max_concurrency, thread_name_prefix=f"{label}-worker"
    )
    try:
        for level in range(1, max_concurrency + 1):
            log.info(
                f"[TRIAL {level}/{max_concurrency}] Starting {level} worker(s)",
                extra={"sweep": label, "concurrency": level},
            )
            trial = _run_trial(
                executor, level, bookstore, stock_manager, params, generator, label, profile
            )
            trials.append(trial)
            log.info(
                f"[TRIAL {level}/{max_concurrency}] Completed",
                extra={
                    "sweep": label,
                    "concurrency": level,
                    "successful": sum(r.successful_interactions for r in trial.results),
                    "duration": trial.profile.duration_seconds if trial.profile else None,
                },
            )
    finally:
        executor.shutdown(wait=True, cancel_futures=True)

    log.info(f"[SWEEP COMPLETE] {label}", extra={"sweep": label, "trials": len(trials)})
    return Sweep(label=label, trials=tuple(trials))


def run_sweeps(
    targets: Mapping[str, Tuple[BookStore, StockManager]],
    max_concurrency: int,
    parameters: Optional[WorkloadParameters] = None,
    profile: bool = True,
) -> List[Sweep]:
    """
    Run the same sweep against several store targets, one after the other.

    `targets` maps a label (e.g. "local", "rpc") to its store collaborators.
    """
    params = _resolve_parameters(parameters)
    return [
        run_sweep(bookstore, stock_manager, max_concurrency, params, label=label, profile=profile)
        for label, (bookstore, stock_manager) in targets.items()
    ]


__all__ = [
    "INITIAL_ISBN",
    "SEED_BOOK",
    "initialize_bookstore_data",
    "run_sweep",
    "run_sweeps",
    "run_worker",
]
