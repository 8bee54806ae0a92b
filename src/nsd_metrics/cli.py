"""CLI-side factories wiring settings to stats writers and sinks."""

from __future__ import annotations

from pathlib import Path

from nsd_metrics.config import Settings
from nsd_metrics.sinks import JsonlStatsWriter, LoggingStatsWriter, PlatformStatsSink, StatsLogWriter


def build_stats_writer(config: Settings, stats_file: str | Path | None = None) -> StatsLogWriter:
    if stats_file is not None or config.stats_writer == "jsonl":
        return JsonlStatsWriter(stats_file or config.stats_log_path)
    return LoggingStatsWriter()


def build_sink(config: Settings, stats_file: str | Path | None = None) -> PlatformStatsSink:
    return PlatformStatsSink(build_stats_writer(config, stats_file=stats_file))
