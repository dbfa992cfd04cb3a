"""
Utilities package for the bookstore workload harness.

Exports shared helpers for logging and profiling. Keep this package free of
workload-specific logic.
"""

from bookstore_workload.utils.logging import configure_logging, get_logger
from bookstore_workload.utils.profiler import ProfileStats, profile_block

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
]
