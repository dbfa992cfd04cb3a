from __future__ import annotations

import json
import sys
from typing import Optional

import typer

from bookstore_workload.config import get_settings
from bookstore_workload.metrics import build_report, summarize_sweep
from bookstore_workload.orchestrator import initialize_bookstore_data, run_sweep, run_worker
from bookstore_workload.reporter import print_report, print_worker_result
from bookstore_workload.store.memory import InMemoryBookStore
from bookstore_workload.utils.logging import configure_logging

app = typer.Typer(help="Bookstore workload concurrency-scaling benchmark CLI.")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    params = settings.workload_parameters()
    typer.echo(
        f"env={settings.app_env} max_concurrency={settings.max_concurrency} | "
        f"mix rare={params.percent_rare_stock_manager_interaction}% "
        f"frequent={params.percent_frequent_stock_manager_interaction}% "
        f"customer={params.percent_frequent_bookstore_interaction}% | "
        f"warmup={params.warm_up_runs} runs={params.actual_runs} "
        f"ordering={params.copies_ordering}"
    )


@app.command()
def run(
    actual_runs: Optional[int] = typer.Option(
        None, "--actual-runs", "-n", help="Measured iterations (default from settings)."
    ),
    warm_up_runs: Optional[int] = typer.Option(
        None, "--warmup-runs", "-w", help="Warm-up iterations (default from settings)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result record as JSON."),
) -> None:
    """
    Run a single worker against a freshly seeded in-memory store.
    """
    settings = get_settings()
    configure_logging(
        level=settings.log_level,
        json_logs=settings.log_json,
        worker_level=settings.log_worker_level,
    )
    params = settings.workload_parameters(actual_runs=actual_runs, warm_up_runs=warm_up_runs)

    store = InMemoryBookStore(seed=params.seed)
    initialize_bookstore_data(store)
    result = run_worker(store, store, params)

    if as_json:
        typer.echo(json.dumps(result.model_dump(), indent=2))
    else:
        print_worker_result(result)


@app.command()
def sweep(
    max_concurrency: Optional[int] = typer.Option(
        None,
        "--max-concurrency",
        "-c",
        min=1,
        help="Highest number of concurrent workers (default from settings).",
    ),
    actual_runs: Optional[int] = typer.Option(
        None, "--actual-runs", "-n", help="Measured iterations per worker."
    ),
    warm_up_runs: Optional[int] = typer.Option(
        None, "--warmup-runs", "-w", help="Warm-up iterations per worker."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the report payload as JSON."),
) -> None:
    """
    Run the concurrency sweep against an in-memory store and report the series.
    """
    settings = get_settings()
    configure_logging(
        level=settings.log_level,
        json_logs=settings.log_json,
        worker_level=settings.log_worker_level,
    )
    params = settings.workload_parameters(actual_runs=actual_runs, warm_up_runs=warm_up_runs)
    levels = settings.max_concurrency if max_concurrency is None else max_concurrency

    store = InMemoryBookStore(seed=params.seed)
    series = [summarize_sweep(run_sweep(store, store, levels, params, label="local"))]

    if as_json:
        typer.echo(json.dumps(build_report(series), indent=2))
    else:
        print_report(series)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
