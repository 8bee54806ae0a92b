"""Per-client reporting of NSD operation outcomes."""

from __future__ import annotations

from typing import Any

from nsd_metrics.models import MdnsQueryResult, NetworkNsdReported, NsdEventType
from nsd_metrics.sinks import PlatformStatsSink, StatsSink


class NetworkNsdReportedMetrics:
    """Builds NetworkNsdReported records for one client and submits them to a sink.

    Each client session creates its own instance; the legacy-backend flag and
    client id are fixed for its lifetime and stamped on every record.
    """

    def __init__(self, is_legacy: bool, client_id: int, sink: StatsSink | None = None) -> None:
        self._is_legacy = is_legacy
        self._client_id = client_id
        self._sink = sink if sink is not None else PlatformStatsSink()

    @property
    def is_legacy(self) -> bool:
        return self._is_legacy

    @property
    def client_id(self) -> int:
        return self._client_id

    def _make_reported(self, **fields: Any) -> NetworkNsdReported:
        return NetworkNsdReported(is_legacy=self._is_legacy, client_id=self._client_id, **fields)

    def report_service_registration_succeeded(self, transaction_id: int, duration_ms: int) -> None:
        """Report a successful service registration.

        :param transaction_id: The transaction id of the registration.
        :param duration_ms: How long the registration took to succeed.
        """
        record = self._make_reported(
            transaction_id=transaction_id,
            type=NsdEventType.NET_REGISTER,
            query_result=MdnsQueryResult.MQR_SERVICE_REGISTERED,
            event_duration_millisec=duration_ms,
        )
        self._sink.submit(record)

    def report_service_registration_failed(self, transaction_id: int, duration_ms: int) -> None:
        """Report a failed service registration.

        :param transaction_id: The transaction id of the registration.
        :param duration_ms: How long the registration took to fail.
        """
        record = self._make_reported(
            transaction_id=transaction_id,
            type=NsdEventType.NET_REGISTER,
            query_result=MdnsQueryResult.MQR_SERVICE_REGISTRATION_FAILED,
            event_duration_millisec=duration_ms,
        )
        self._sink.submit(record)

    def report_service_unregistration(self, transaction_id: int, duration_ms: int) -> None:
        """Report that a registered service was unregistered.

        :param transaction_id: The transaction id of the registration.
        :param duration_ms: How long the service stayed registered.
        """
        # TODO: populate replied_requests_count once the advertiser exposes reply counts.
        record = self._make_reported(
            transaction_id=transaction_id,
            type=NsdEventType.NET_REGISTER,
            query_result=MdnsQueryResult.MQR_SERVICE_UNREGISTERED,
            event_duration_millisec=duration_ms,
        )
        self._sink.submit(record)
