"""Time helpers."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC datetime."""
    return datetime.now(tz=timezone.utc)


def iso_timestamp(value: datetime | None = None) -> str:
    """Return an ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    moment = (value or utc_now()).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
