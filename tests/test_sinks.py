from __future__ import annotations

import json
from pathlib import Path

import pytest

from nsd_metrics.models import NETWORK_NSD_REPORTED, MdnsQueryResult, NetworkNsdReported, NsdEventType
from nsd_metrics.reported_metrics import NetworkNsdReportedMetrics
from nsd_metrics.sinks import InMemoryStatsSink, JsonlStatsWriter, PlatformStatsSink


class FailingWriter:
    def __init__(self) -> None:
        self.calls = 0

    def write(self, atom_id: int, *fields) -> None:
        self.calls += 1
        raise RuntimeError("statsd unavailable")


def test_enum_numbers_match_wire_encoding() -> None:
    assert NsdEventType.NET_REGISTER.number == 1
    assert NsdEventType.NET_SERVICE_INFO_CALLBACK.number == 4
    assert MdnsQueryResult.MQR_SERVICE_REGISTERED.number == 1
    assert MdnsQueryResult.MQR_SERVICE_UNREGISTERED.number == 2
    assert MdnsQueryResult.MQR_SERVICE_REGISTRATION_FAILED.number == 3
    assert MdnsQueryResult.MQR_SERVICE_INFO_CALLBACK_UNREGISTERED.number == 12


def test_default_record_flattens_to_zeros() -> None:
    assert NetworkNsdReported().to_stats_fields() == (False, 0, 0, False, 0, 0, 0, 0, 0, 0, 0)


def test_flattened_fields_use_plain_ints_for_enums() -> None:
    record = NetworkNsdReported(
        type=NsdEventType.NET_RESOLVE,
        query_result=MdnsQueryResult.MQR_SERVICE_RESOLVED,
        event_duration_millisec=2**40,
    )

    fields = record.to_stats_fields()

    assert fields[4] == 3 and type(fields[4]) is int
    assert fields[5] == 2**40
    assert fields[6] == 7 and type(fields[6]) is int


def test_from_stats_fields_rejects_bad_input() -> None:
    with pytest.raises(ValueError):
        NetworkNsdReported.from_stats_fields([False, 1, 2])
    with pytest.raises(ValueError):
        NetworkNsdReported.from_stats_fields([False, 1, 2, False, 99, 0, 0, 0, 0, 0, 0])


def test_platform_sink_swallows_writer_failure(caplog: pytest.LogCaptureFixture) -> None:
    writer = FailingWriter()
    metrics = NetworkNsdReportedMetrics(is_legacy=False, client_id=5, sink=PlatformStatsSink(writer))

    with caplog.at_level("ERROR", logger="nsd_metrics.sinks"):
        metrics.report_service_registration_succeeded(1, 10)
        metrics.report_service_unregistration(1, 500)

    assert writer.calls == 2
    failures = [r for r in caplog.records if r.getMessage() == "stats_write_failed"]
    assert len(failures) == 2
    assert failures[0].atom_id == NETWORK_NSD_REPORTED
    assert failures[0].exc_info is not None


def test_in_memory_sink_is_bounded_and_lists_newest_first() -> None:
    sink = InMemoryStatsSink(max_records=3)
    for transaction_id in range(5):
        sink.submit(NetworkNsdReported(transaction_id=transaction_id))

    assert [r.transaction_id for r in sink.records] == [2, 3, 4]
    assert [r.transaction_id for r in sink.list_recent(2)] == [4, 3]

    sink.clear()
    assert sink.records == []


def test_jsonl_writer_roundtrip_through_platform_sink(tmp_path: Path) -> None:
    writer = JsonlStatsWriter(tmp_path / "stats" / "nsd.jsonl")
    metrics = NetworkNsdReportedMetrics(is_legacy=True, client_id=21, sink=PlatformStatsSink(writer))

    metrics.report_service_registration_succeeded(5, 100)
    metrics.report_service_registration_failed(7, 50)

    lines = writer.path.read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[0])["fields"] == [True, 21, 5, False, 1, 100, 1, 0, 0, 0, 0]

    recent = writer.read_records(limit=5)
    assert [r.transaction_id for r in recent] == [7, 5]
    assert recent[0].query_result is MdnsQueryResult.MQR_SERVICE_REGISTRATION_FAILED
    assert recent[1].is_legacy is True


def test_jsonl_writer_skips_other_atoms_and_missing_file(tmp_path: Path) -> None:
    writer = JsonlStatsWriter(tmp_path / "nsd.jsonl")
    assert writer.read_records() == []

    writer.write(1, 1, 2, 3)
    with writer.path.open("a", encoding="utf-8") as handle:
        handle.write("\n")
    writer.write(NETWORK_NSD_REPORTED, *NetworkNsdReported(client_id=8).to_stats_fields())

    (record,) = writer.read_records()
    assert record.client_id == 8


def test_jsonl_write_failure_is_not_raised_to_caller(tmp_path: Path) -> None:
    target = tmp_path / "stats.jsonl"
    writer = JsonlStatsWriter(target)
    target.mkdir()
    metrics = NetworkNsdReportedMetrics(is_legacy=False, client_id=1, sink=PlatformStatsSink(writer))

    metrics.report_service_registration_succeeded(1, 1)


def test_jsonl_reader_skips_invalid_lines(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    writer = JsonlStatsWriter(tmp_path / "nsd.jsonl")
    writer.write(NETWORK_NSD_REPORTED, *NetworkNsdReported(client_id=1).to_stats_fields())
    with writer.path.open("a", encoding="utf-8") as handle:
        handle.write('{"atom_id": 653, "fields": [true, 2\n')
        handle.write('{"atom_id": 653, "fields": [false, 3, 0, false, 99, 0, 0, 0, 0, 0, 0]}\n')
    writer.write(NETWORK_NSD_REPORTED, *NetworkNsdReported(client_id=4).to_stats_fields())

    with caplog.at_level("WARNING", logger="nsd_metrics.sinks"):
        records = writer.read_records()

    assert [r.client_id for r in records] == [4, 1]
    invalid = [r for r in caplog.records if r.getMessage() == "stats_log_line_invalid"]
    assert [r.line_number for r in invalid] == [2, 3]


def test_jsonl_writer_creates_directories_only_on_write(tmp_path: Path) -> None:
    target = tmp_path / "missing" / "dir" / "nsd.jsonl"
    writer = JsonlStatsWriter(target)

    assert writer.read_records() == []
    assert not target.parent.exists()

    writer.write(NETWORK_NSD_REPORTED, *NetworkNsdReported().to_stats_fields())
    assert target.exists()
