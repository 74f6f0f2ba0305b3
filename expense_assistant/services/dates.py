"""Timestamp helpers.

All timestamps handled by the service are naive datetimes in UTC. Aware
values (e.g. ISO strings ending in ``Z``) are converted on parse so stored
rows, request payloads and "now" compare without tz mismatches.
"""

from __future__ import annotations
from datetime import datetime, timezone

from dateutil import parser as date_parser


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def normalize(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 date or datetime string into a naive UTC datetime.

    Raises ValueError when the string is not a recognisable ISO timestamp.
    """
    return normalize(date_parser.isoparse(value.strip()))


def to_iso(value: datetime) -> str:
    return normalize(value).isoformat(timespec="milliseconds")
