"""Record and enum definitions for the NetworkNsdReported stats atom."""

from __future__ import annotations

from dataclasses import astuple, dataclass
from enum import Enum
from typing import Sequence

NETWORK_NSD_REPORTED = 653


class NsdEventType(int, Enum):
    """Kind of NSD operation being reported."""

    NET_UNKNOWN = 0
    NET_REGISTER = 1
    NET_DISCOVER = 2
    NET_RESOLVE = 3
    NET_SERVICE_INFO_CALLBACK = 4

    @property
    def number(self) -> int:
        return int(self.value)


class MdnsQueryResult(int, Enum):
    """Outcome of an NSD operation."""

    MQR_UNKNOWN = 0
    MQR_SERVICE_REGISTERED = 1
    MQR_SERVICE_UNREGISTERED = 2
    MQR_SERVICE_REGISTRATION_FAILED = 3
    MQR_SERVICE_DISCOVERY_STARTED = 4
    MQR_SERVICE_DISCOVERY_FAILED = 5
    MQR_SERVICE_DISCOVERY_STOP = 6
    MQR_SERVICE_RESOLVED = 7
    MQR_SERVICE_RESOLUTION_FAILED = 8
    MQR_SERVICE_RESOLUTION_STOP = 9
    MQR_SERVICE_INFO_CALLBACK_REGISTERED = 10
    MQR_SERVICE_INFO_CALLBACK_REGISTRATION_FAILED = 11
    MQR_SERVICE_INFO_CALLBACK_UNREGISTERED = 12

    @property
    def number(self) -> int:
        return int(self.value)


@dataclass(frozen=True, slots=True)
class NetworkNsdReported:
    """One NSD outcome as written to the stats pipeline.

    Field order matches the positional order of the platform write call, so
    ``to_stats_fields`` is a straight flatten with enums replaced by numbers.
    """

    is_legacy: bool = False
    client_id: int = 0
    transaction_id: int = 0
    is_known_service: bool = False
    type: NsdEventType = NsdEventType.NET_UNKNOWN
    event_duration_millisec: int = 0
    query_result: MdnsQueryResult = MdnsQueryResult.MQR_UNKNOWN
    found_service_count: int = 0
    found_callback_count: int = 0
    lost_callback_count: int = 0
    replied_requests_count: int = 0

    def to_stats_fields(self) -> tuple[bool | int, ...]:
        """Return the positional field list expected by the platform writer."""
        return tuple(value.number if isinstance(value, Enum) else value for value in astuple(self))

    @classmethod
    def from_stats_fields(cls, fields: Sequence[bool | int]) -> NetworkNsdReported:
        """Rebuild a record from a positional field list.

        Raises ``ValueError`` when the field count is wrong or an enum number is unknown.
        """
        if len(fields) != 11:
            raise ValueError(f"Expected 11 stats fields, got {len(fields)}")

        return cls(
            is_legacy=bool(fields[0]),
            client_id=int(fields[1]),
            transaction_id=int(fields[2]),
            is_known_service=bool(fields[3]),
            type=NsdEventType(int(fields[4])),
            event_duration_millisec=int(fields[5]),
            query_result=MdnsQueryResult(int(fields[6])),
            found_service_count=int(fields[7]),
            found_callback_count=int(fields[8]),
            lost_callback_count=int(fields[9]),
            replied_requests_count=int(fields[10]),
        )
