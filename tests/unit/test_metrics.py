from __future__ import annotations

import json

import pytest

from bookstore_workload.domain.models import Sweep, Trial, WorkerRunResult
from bookstore_workload.metrics import (
    aggregate_latency,
    aggregate_throughput,
    build_report,
    summarize_sweep,
    summarize_trial,
)
from bookstore_workload.utils.profiler import ProfileStats

ONE_SECOND_NS = 1_000_000_000


def _result(successful: int, elapsed_ns: int, runs: int = 100) -> WorkerRunResult:
    return WorkerRunResult(
        successful_interactions=successful,
        elapsed_nanos=elapsed_ns,
        total_runs=runs,
        successful_frequent_bookstore_interactions=successful // 2,
        total_frequent_bookstore_interactions=runs // 2,
    )


def test_aggregate_throughput_sums_per_worker_rates() -> None:
    results = [_result(100, ONE_SECOND_NS), _result(50, 2 * ONE_SECOND_NS)]

    # 100/1s + 50/2s, not 150/3s
    assert aggregate_throughput(results) == pytest.approx(125.0)


def test_aggregate_latency_is_mean_elapsed_seconds() -> None:
    results = [_result(1, ONE_SECOND_NS), _result(1, 3 * ONE_SECOND_NS)]

    assert aggregate_latency(results) == pytest.approx(2.0)


def test_empty_trial_aggregates_to_zero() -> None:
    assert aggregate_throughput([]) == 0.0
    assert aggregate_latency([]) == 0.0


def test_zero_elapsed_result_contributes_no_throughput() -> None:
    assert aggregate_throughput([_result(0, 0, runs=0), _result(10, ONE_SECOND_NS)]) == 10.0


def test_summarize_trial_reports_totals_and_spread() -> None:
    profile = ProfileStats(label="t", duration_seconds=1.0, peak_rss_bytes=2048, cpu_percent=12.34)
    trial = Trial(
        level=2,
        results=(_result(100, ONE_SECOND_NS), _result(50, ONE_SECOND_NS)),
        profile=profile,
    )

    metrics = summarize_trial(trial)

    assert metrics.level == 2
    assert metrics.workers == 2
    assert metrics.aggregate_throughput == pytest.approx(150.0)
    assert metrics.mean_latency_seconds == pytest.approx(1.0)
    assert metrics.successful_interactions == 150
    assert metrics.total_runs == 200
    assert metrics.successful_customer_interactions == 75
    assert metrics.total_customer_interactions == 100
    assert metrics.worker_throughput["median"] == 75.0
    assert metrics.worker_throughput["min"] == 50.0
    assert metrics.worker_throughput["max"] == 100.0
    assert metrics.peak_rss_bytes == 2048
    assert metrics.cpu_percent == 12.3


def test_summarize_sweep_orders_series_by_level() -> None:
    sweep = Sweep(
        label="local",
        trials=(
            Trial(level=2, results=(_result(20, ONE_SECOND_NS), _result(20, ONE_SECOND_NS))),
            Trial(level=1, results=(_result(10, ONE_SECOND_NS),)),
        ),
    )

    series = summarize_sweep(sweep)

    assert series.label == "local"
    assert series.throughput == [(1, 10.0), (2, 40.0)]
    assert series.latency == [(1, 1.0), (2, 1.0)]
    assert [trial.level for trial in series.trials] == [1, 2]


def test_build_report_is_json_serialisable() -> None:
    sweep = Sweep(label="local", trials=(Trial(level=1, results=(_result(5, ONE_SECOND_NS),)),))

    payload = json.loads(json.dumps(build_report([summarize_sweep(sweep)])))

    assert payload["sweeps"][0]["label"] == "local"
    assert payload["sweeps"][0]["throughput"] == [[1, 5.0]]
    assert "timestamp" in payload
