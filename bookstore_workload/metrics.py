"""
Reduction of worker results into reportable metrics.

A trial reduces to two headline numbers:

- aggregate throughput: the sum of each worker's own rate
  (successful interactions / elapsed seconds), not one store-wide rate;
- mean latency: total measured time over all workers / worker count, in seconds.

A sweep reduces to one `(level, value)` series for each, in increasing level
order, which is what a renderer consumes.
"""

from __future__ import annotations

import statistics
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from bookstore_workload.domain.models import NANOS_PER_SECOND, Sweep, Trial, WorkerRunResult

SeriesPoint = Tuple[int, float]


def _round_float(value: float, decimals: int = 2) -> float:
    """Round a float to specified decimal places for human-readable output."""
    return round(value, decimals)


def _round_stats(stats: dict, decimals: int = 2) -> dict:
    """Round all float values in a stats dictionary."""
    return {k: _round_float(v, decimals) if isinstance(v, float) else v for k, v in stats.items()}


def aggregate_throughput(results: Iterable[WorkerRunResult]) -> float:
    """Sum of per-worker successful interactions per second."""
    return sum(result.throughput for result in results)


def aggregate_latency(results: Sequence[WorkerRunResult]) -> float:
    """Mean measured time per worker, in seconds."""
    if not results:
        return 0.0
    total_nanos = sum(result.elapsed_nanos for result in results)
    return total_nanos / (len(results) * NANOS_PER_SECOND)


def _distribution(values: List[float]) -> Dict[str, float]:
    if not values:
        return {"median": 0.0, "mean": 0.0, "stddev": 0.0, "min": 0.0, "max": 0.0}
    return _round_stats(
        {
            "median": float(statistics.median(values)),
            "mean": float(statistics.mean(values)),
            "stddev": statistics.stdev(values) if len(values) > 1 else 0.0,
            "min": float(min(values)),
            "max": float(max(values)),
        }
    )


@dataclass(frozen=True)
class TrialMetrics:
    """Aggregates of one trial, plus the spread across its workers."""

    level: int
    workers: int
    aggregate_throughput: float
    mean_latency_seconds: float
    worker_throughput: Dict[str, float]
    successful_interactions: int
    total_runs: int
    successful_customer_interactions: int
    total_customer_interactions: int
    peak_rss_bytes: Optional[int] = None
    cpu_percent: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SweepSeries:
    """Throughput and latency series of one sweep, ready for rendering."""

    label: str
    throughput: List[SeriesPoint] = field(default_factory=list)
    latency: List[SeriesPoint] = field(default_factory=list)
    trials: List[TrialMetrics] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "throughput": [list(point) for point in self.throughput],
            "latency": [list(point) for point in self.latency],
            "trials": [trial.to_dict() for trial in self.trials],
        }


def summarize_trial(trial: Trial) -> TrialMetrics:
    results = trial.results
    profile = trial.profile
    return TrialMetrics(
        level=trial.level,
        workers=len(results),
        aggregate_throughput=aggregate_throughput(results),
        mean_latency_seconds=aggregate_latency(results),
        worker_throughput=_distribution([result.throughput for result in results]),
        successful_interactions=sum(r.successful_interactions for r in results),
        total_runs=sum(r.total_runs for r in results),
        successful_customer_interactions=sum(
            r.successful_frequent_bookstore_interactions for r in results
        ),
        total_customer_interactions=sum(r.total_frequent_bookstore_interactions for r in results),
        peak_rss_bytes=profile.peak_rss_bytes if profile else None,
        cpu_percent=_round_float(profile.cpu_percent, 1)
        if profile and profile.cpu_percent is not None
        else None,
    )


def summarize_sweep(sweep: Sweep) -> SweepSeries:
    """Reduce a sweep into its throughput and latency series."""
    trials = sorted(sweep.trials, key=lambda trial: trial.level)
    metrics = [summarize_trial(trial) for trial in trials]
    return SweepSeries(
        label=sweep.label,
        throughput=[(m.level, m.aggregate_throughput) for m in metrics],
        latency=[(m.level, m.mean_latency_seconds) for m in metrics],
        trials=metrics,
    )


def build_report(series: Iterable[SweepSeries]) -> Dict[str, Any]:
    """JSON-serialisable payload of one or more summarized sweeps."""
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "sweeps": [s.to_dict() for s in series],
    }


__all__ = [
    "SeriesPoint",
    "SweepSeries",
    "TrialMetrics",
    "aggregate_latency",
    "aggregate_throughput",
    "build_report",
    "summarize_sweep",
    "summarize_trial",
]
