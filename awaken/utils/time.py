"""Clock helpers and local day boundaries."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; stored timestamps are always UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def local_now(now: datetime | None = None) -> datetime:
    """Return ``now`` (or the current time) expressed in the local timezone.

    Naive values are read as local wall-clock time, aware values are converted.
    """
    return (now or datetime.now()).astimezone()


def local_day_start(year: int, month: int, day: int) -> datetime:
    """Return local midnight of a calendar date with that date's own UTC offset."""
    return datetime(year, month, day).astimezone()


def local_midnight(now: datetime) -> datetime:
    """Return midnight of the local calendar day containing ``now``."""
    current = local_now(now)
    return local_day_start(current.year, current.month, current.day)


def parse_iso_datetime(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp, accepting a trailing ``Z``."""
    text_value = value.strip()
    if text_value.endswith("Z"):
        text_value = text_value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text_value)
    except ValueError:
        return None
