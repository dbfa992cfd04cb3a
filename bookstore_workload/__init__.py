"""
Bookstore Workload - concurrency-scaling benchmark harness for a bookstore service.

Drives a growing population of simulated clients against a transactional store
and measures aggregate throughput and latency at each concurrency level:

- Workers pick one of three weighted interactions per iteration
  (new stock acquisition, stock replenishment, customer purchase)
- Each worker warms up, then times its measurement phase as one interval
- The trial driver repeats the experiment for 1..N concurrent workers
- The metrics aggregator turns each sweep into throughput/latency series
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from bookstore_workload.config import Settings, get_settings
from bookstore_workload.domain.models import (
    BookCopy,
    StockBook,
    Sweep,
    Trial,
    WorkerRunResult,
)
from bookstore_workload.exceptions import BookStoreError, TrialFailedError
from bookstore_workload.metrics import (
    SweepSeries,
    TrialMetrics,
    aggregate_latency,
    aggregate_throughput,
    summarize_sweep,
)
from bookstore_workload.orchestrator import run_sweep, run_sweeps, run_worker
from bookstore_workload.store import BookStore, InMemoryBookStore, StockManager
from bookstore_workload.utils.logging import configure_logging, get_logger
from bookstore_workload.workloads import (
    BookSetGenerator,
    InteractionKind,
    InteractionOutcome,
    Worker,
    WorkloadConfiguration,
    WorkloadParameters,
)

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "BookCopy",
    "StockBook",
    "Sweep",
    "Trial",
    "WorkerRunResult",
    # Errors
    "BookStoreError",
    "TrialFailedError",
    # Store capabilities
    "BookStore",
    "InMemoryBookStore",
    "StockManager",
    # Workloads
    "BookSetGenerator",
    "InteractionKind",
    "InteractionOutcome",
    "Worker",
    "WorkloadConfiguration",
    "WorkloadParameters",
    # Orchestration
    "run_sweep",
    "run_sweeps",
    "run_worker",
    # Metrics
    "SweepSeries",
    "TrialMetrics",
    "aggregate_latency",
    "aggregate_throughput",
    "summarize_sweep",
    # Logging
    "configure_logging",
    "get_logger",
]
