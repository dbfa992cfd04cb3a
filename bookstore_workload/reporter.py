from __future__ import annotations

from typing import Iterable, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from bookstore_workload.domain.models import WorkerRunResult
from bookstore_workload.metrics import SweepSeries


def _format_mb(value: Optional[int]) -> str:
    if not value:
        return "N/A"
    return f"{value / (1024 * 1024):.2f}"


def print_report(series_list: Iterable[SweepSeries], console: Optional[Console] = None) -> None:
    """
    Render each summarized sweep as a rich table, one row per concurrency level.

    Rendering is a pure consumer of the series; nothing here feeds back into
    the measurements.
    """
    console = console or Console()
    series_list = list(series_list)

    if not series_list:
        console.print("[yellow]No sweeps to display.[/yellow]")
        return

    for series in series_list:
        table = Table(
            title=f"Bookstore Workload Sweep [cyan]{series.label}[/cyan]",
            box=box.ROUNDED,
            caption="Throughput in successful interactions/s, latency in seconds",
        )
        table.add_column("Clients", justify="right", style="cyan", no_wrap=True)
        table.add_column("Aggregate Throughput", justify="right", style="bold green")
        table.add_column("Mean Latency (s)", justify="right", style="green")
        table.add_column(
            "Worker Throughput\n[dim](Median ± StdDev)[/dim]", justify="right", style="blue"
        )
        table.add_column("Successful / Runs", justify="right", style="magenta")
        table.add_column("Customer Purchases\n[dim](ok / tried)[/dim]", justify="right")
        table.add_column("Peak Memory (MB)", justify="right", style="yellow")
        table.add_column("CPU %", justify="right", style="red")

        for trial in series.trials:
            spread = trial.worker_throughput
            cpu = f"{trial.cpu_percent:.1f}" if trial.cpu_percent is not None else "N/A"
            table.add_row(
                str(trial.level),
                f"{trial.aggregate_throughput:,.2f}",
                f"{trial.mean_latency_seconds:.4f}",
                f"{spread['median']:,.1f} ± {spread['stddev']:,.1f}",
                f"{trial.successful_interactions:,} / {trial.total_runs:,}",
                f"{trial.successful_customer_interactions:,} / {trial.total_customer_interactions:,}",
                _format_mb(trial.peak_rss_bytes),
                cpu,
            )

        console.print(table)


def print_worker_result(result: WorkerRunResult, console: Optional[Console] = None) -> None:
    """Render a single worker's result record."""
    console = console or Console()
    table = Table(title="Worker Result", box=box.ROUNDED, show_header=False)
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right", style="bold green")
    table.add_row("Successful interactions", f"{result.successful_interactions:,}")
    table.add_row("Total runs", f"{result.total_runs:,}")
    table.add_row("Elapsed (s)", f"{result.elapsed_seconds:.4f}")
    table.add_row("Throughput (interactions/s)", f"{result.throughput:,.2f}")
    table.add_row(
        "Customer purchases (ok / tried)",
        f"{result.successful_frequent_bookstore_interactions:,} / "
        f"{result.total_frequent_bookstore_interactions:,}",
    )
    console.print(table)


__all__ = ["print_report", "print_worker_result"]
