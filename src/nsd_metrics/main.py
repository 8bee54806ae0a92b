"""CLI entrypoint for nsd-metrics."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

import typer
from rich import print

from nsd_metrics.cli import build_sink
from nsd_metrics.config import settings
from nsd_metrics.reported_metrics import NetworkNsdReportedMetrics
from nsd_metrics.sinks import JsonlStatsWriter
from nsd_metrics.telemetry import configure_logging

app = typer.Typer(help="Report NSD operation outcomes to the stats pipeline")


class ReportOutcome(str, Enum):
    REGISTERED = "registered"
    REGISTRATION_FAILED = "registration-failed"
    UNREGISTERED = "unregistered"


@app.callback()
def main(log_level: str = typer.Option(None, help="Override NSD_METRICS_LOG_LEVEL")) -> None:
    try:
        configure_logging(log_level or settings.log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc


@app.command()
def start() -> None:
    """Show effective stats configuration."""
    print(
        {
            "app_name": settings.app_name,
            "log_level": settings.log_level,
            "stats_writer": settings.stats_writer,
            "stats_log_path": settings.stats_log_path,
        }
    )


@app.command()
def report(
    outcome: ReportOutcome = typer.Argument(..., help="Registration outcome to report"),
    client_id: int = typer.Option(..., help="Client id stamped on the record"),
    transaction_id: int = typer.Option(..., help="Transaction id of the registration"),
    duration_ms: int = typer.Option(..., help="Duration of the operation in milliseconds"),
    legacy: bool = typer.Option(False, help="Client uses the legacy backend"),
    stats_file: str = typer.Option(None, help="Write to this JSONL stats log instead of the configured writer"),
) -> None:
    """Emit one NetworkNsdReported record."""
    if duration_ms < 0:
        raise typer.BadParameter("--duration-ms must not be negative")

    sink = build_sink(settings, stats_file=stats_file)
    metrics = NetworkNsdReportedMetrics(is_legacy=legacy, client_id=client_id, sink=sink)
    reporters = {
        ReportOutcome.REGISTERED: metrics.report_service_registration_succeeded,
        ReportOutcome.REGISTRATION_FAILED: metrics.report_service_registration_failed,
        ReportOutcome.UNREGISTERED: metrics.report_service_unregistration,
    }
    reporters[outcome](transaction_id, duration_ms)
    print({"reported": outcome.value, "client_id": client_id, "transaction_id": transaction_id})


@app.command()
def tail(
    stats_file: str = typer.Option(None, help="Path to a JSONL stats log"),
    limit: int = typer.Option(20, help="How many of the newest records to show"),
) -> None:
    """Show the newest records of a JSONL stats log."""
    path = stats_file or (settings.stats_log_path if settings.stats_writer == "jsonl" else None)
    if not path:
        print({"error": "Provide --stats-file or set NSD_METRICS_STATS_WRITER=jsonl"})
        raise typer.Exit(code=1)

    writer = JsonlStatsWriter(Path(path))
    for record in writer.read_records(limit=limit):
        print(
            {
                "client_id": record.client_id,
                "transaction_id": record.transaction_id,
                "type": record.type.name,
                "query_result": record.query_result.name,
                "duration_ms": record.event_duration_millisec,
                "is_legacy": record.is_legacy,
            }
        )


if __name__ == "__main__":
    app()
