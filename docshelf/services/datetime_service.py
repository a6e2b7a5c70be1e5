"""Datetime parsing: lax front matter input -> timezone-aware datetimes."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pendulum

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def parse_datetime(value: str | date | datetime, default_tz: str = "UTC") -> datetime:
    """Parse a lax front matter date into a timezone-aware datetime.

    Accepts various formats:
    - 2025-02-01 10:30:00 +0100
    - 2025-02-01 10:30
    - 2025-02-01
    - ISO 8601 variants with T separator
    - ``date``/``datetime`` objects already produced by the YAML loader

    Missing timezone defaults to default_tz.
    Missing time components default to zeros.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            tz = pendulum.timezone(default_tz)
            value = value.replace(tzinfo=tz)  # type: ignore[arg-type]
        return value
    if isinstance(value, date):
        return pendulum.datetime(value.year, value.month, value.day, tz=default_tz)

    value_str = value.strip()
    if not value_str:
        raise ValueError("Empty date value")

    parsed = pendulum.parse(value_str, tz=default_tz, strict=False)
    if not isinstance(parsed, pendulum.DateTime):
        # pendulum.parse returns Date for date-only strings
        parsed = pendulum.datetime(
            parsed.year, parsed.month, parsed.day, tz=default_tz  # type: ignore[union-attr]
        )
    return parsed  # type: ignore[return-value]


def now_utc() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_aware(dt: datetime) -> datetime:
    """Attach UTC to a naive datetime; aware values are returned unchanged."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def to_timezone(dt: datetime, tz: str) -> datetime:
    """Convert *dt* to the named timezone (naive values are taken as UTC)."""
    return pendulum.instance(ensure_aware(dt)).in_timezone(tz)


def month_key(dt: datetime, tz: str = "UTC") -> tuple[int, int]:
    """Return the ``(year, month)`` of *dt* as seen in timezone *tz*."""
    local = to_timezone(dt, tz)
    return local.year, local.month


def month_label(year: int, month: int) -> str:
    """Format a month key as ``"<FullMonthName> <Year>"``."""
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    return f"{MONTH_NAMES[month - 1]} {year}"


def format_iso(dt: datetime) -> str:
    """Format datetime as ISO 8601 for JSON serialization."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()
