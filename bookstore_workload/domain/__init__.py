"""
Domain package for the bookstore workload harness.

Exports the catalog records, the per-worker result record and the trial/sweep
groupings used by the driver and the metrics aggregator.
"""

from bookstore_workload.domain.models import (
    NANOS_PER_SECOND,
    BookCopy,
    StockBook,
    Sweep,
    Trial,
    WorkerRunResult,
)

__all__ = [
    "NANOS_PER_SECOND",
    "BookCopy",
    "StockBook",
    "Sweep",
    "Trial",
    "WorkerRunResult",
]
