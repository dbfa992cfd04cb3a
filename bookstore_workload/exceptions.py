"""
Error taxonomy for the bookstore workload harness.

- `BookStoreError`: a store collaborator rejected an operation (duplicate isbn,
  insufficient stock, unknown isbn). Workers count these as unsuccessful
  interactions and keep going.
- `TrialFailedError`: a worker task died for any other reason. The trial driver
  raises it and the sweep is aborted; a trial is never reported half-complete.
"""

from __future__ import annotations


class BookStoreError(Exception):
    """Raised by a store collaborator when an operation breaks a business rule."""


class TrialFailedError(RuntimeError):
    """Raised when a worker task terminates abnormally during a trial."""

    def __init__(self, level: int, worker_index: int, reason: str) -> None:
        self.level = level
        self.worker_index = worker_index
        self.reason = reason
        super().__init__(
            f"Trial at concurrency level {level} failed: worker {worker_index} "
            f"did not complete ({reason})"
        )


__all__ = ["BookStoreError", "TrialFailedError"]
