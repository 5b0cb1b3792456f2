# app/core/clock.py

from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """
    format_timestamp(datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc))  ->  '2025-03-01T09:30:00.000Z'

    Naive values (SQLite drops tzinfo) are taken to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def timestamp_now() -> str:
    return format_timestamp(utcnow())
