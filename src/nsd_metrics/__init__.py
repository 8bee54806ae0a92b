"""Reporting of network service discovery outcomes to the stats pipeline."""

from .models import NETWORK_NSD_REPORTED, MdnsQueryResult, NetworkNsdReported, NsdEventType
from .reported_metrics import NetworkNsdReportedMetrics
from .sinks import (
    InMemoryStatsSink,
    JsonlStatsWriter,
    LoggingStatsWriter,
    PlatformStatsSink,
    StatsLogWriter,
    StatsSink,
)

__all__ = [
    "InMemoryStatsSink",
    "JsonlStatsWriter",
    "LoggingStatsWriter",
    "MdnsQueryResult",
    "NETWORK_NSD_REPORTED",
    "NetworkNsdReported",
    "NetworkNsdReportedMetrics",
    "NsdEventType",
    "PlatformStatsSink",
    "StatsLogWriter",
    "StatsSink",
]
