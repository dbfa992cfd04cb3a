"""
Workloads package: the synthetic record generator, the per-worker
configuration and the worker itself.
"""

from bookstore_workload.workloads.configuration import (
    WorkloadConfiguration,
    WorkloadParameters,
)
from bookstore_workload.workloads.generator import BookSetGenerator
from bookstore_workload.workloads.worker import InteractionKind, InteractionOutcome, Worker

__all__ = [
    "BookSetGenerator",
    "InteractionKind",
    "InteractionOutcome",
    "Worker",
    "WorkloadConfiguration",
    "WorkloadParameters",
]
