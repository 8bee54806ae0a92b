"""Destinations for NetworkNsdReported records.

The emitter only knows about ``StatsSink``. The platform sink flattens each
record into the positional field list the stats pipeline expects and hands it
to a ``StatsLogWriter``; tests substitute ``InMemoryStatsSink`` instead.
"""

from __future__ import annotations

import json
import logging
import threading
from collections import deque
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from nsd_metrics.models import NETWORK_NSD_REPORTED, NetworkNsdReported


class StatsSink(Protocol):
    """Receives fully assembled records."""

    def submit(self, record: NetworkNsdReported) -> None:
        """Hand off one record. Delivery is fire-and-forget."""


class StatsLogWriter(Protocol):
    """Positional record-logging entry point of the stats platform."""

    def write(self, atom_id: int, *fields: bool | int) -> None:
        """Write one atom with its fields in declared order."""


class LoggingStatsWriter:
    """Writes atoms as structured log records."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("nsd_metrics.stats")

    def write(self, atom_id: int, *fields: bool | int) -> None:
        self._logger.info("stats_write", extra={"atom_id": atom_id, "fields": list(fields)})


class JsonlStatsWriter:
    """Append-only JSONL stats log."""

    def __init__(self, file_path: str | Path, *, logger: logging.Logger | None = None) -> None:
        self._path = Path(file_path)
        self._lock = threading.Lock()
        self._logger = logger or logging.getLogger("nsd_metrics.sinks")

    @property
    def path(self) -> Path:
        return self._path

    def write(self, atom_id: int, *fields: bool | int) -> None:
        payload = {
            "atom_id": atom_id,
            "fields": list(fields),
            "written_at": datetime.now(timezone.utc).isoformat(),
        }
        with self._lock:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as handle:
                handle.write(json.dumps(payload) + "\n")

    def read_records(self, limit: int = 20) -> list[NetworkNsdReported]:
        """Return up to ``limit`` newest NetworkNsdReported records."""
        if not self._path.exists():
            return []

        records: list[NetworkNsdReported] = []
        with self._path.open("r", encoding="utf-8") as handle:
            for line_number, line in enumerate(handle, start=1):
                if not line.strip():
                    continue
                try:
                    payload = json.loads(line)
                    if payload.get("atom_id") != NETWORK_NSD_REPORTED:
                        continue
                    records.append(NetworkNsdReported.from_stats_fields(payload["fields"]))
                except (ValueError, KeyError, TypeError, AttributeError):
                    self._logger.warning(
                        "stats_log_line_invalid",
                        extra={"path": str(self._path), "line_number": line_number},
                    )

        records.reverse()
        return records[:limit]


class PlatformStatsSink:
    """Sink backed by the platform stats writer.

    Writer failures are logged and dropped so that losing a metric never
    affects the operation being reported.
    """

    def __init__(
        self,
        writer: StatsLogWriter | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._writer = writer if writer is not None else LoggingStatsWriter()
        self._logger = logger or logging.getLogger("nsd_metrics.sinks")

    def submit(self, record: NetworkNsdReported) -> None:
        fields = record.to_stats_fields()
        try:
            self._writer.write(NETWORK_NSD_REPORTED, *fields)
        except Exception:  # noqa: BLE001 - telemetry must not break the caller.
            self._logger.exception(
                "stats_write_failed",
                extra={"atom_id": NETWORK_NSD_REPORTED, "client_id": record.client_id},
            )


class InMemoryStatsSink:
    """Bounded in-memory sink that keeps submitted records for inspection."""

    def __init__(self, max_records: int = 1_000) -> None:
        self._records: deque[NetworkNsdReported] = deque(maxlen=max_records)
        self._lock = threading.Lock()

    def submit(self, record: NetworkNsdReported) -> None:
        with self._lock:
            self._records.append(record)

    @property
    def records(self) -> list[NetworkNsdReported]:
        with self._lock:
            return list(self._records)

    def list_recent(self, limit: int) -> list[NetworkNsdReported]:
        with self._lock:
            return list(reversed(self._records))[:limit]

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
