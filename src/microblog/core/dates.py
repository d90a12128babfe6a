"""Calendar-date helpers pinned to the publication reference zone."""

from __future__ import annotations

from datetime import date, datetime, timezone


__all__ = [
    "REFERENCE_ZONE",
    "format_date",
    "normalize_date",
    "parse_date",
    "today",
]

# Matches the zone SQLite uses for CURRENT_DATE.
REFERENCE_ZONE = timezone.utc


def today() -> date:
    """Return the current calendar date in the reference zone."""
    return datetime.now(REFERENCE_ZONE).date()


def normalize_date(value: date | datetime) -> date:
    """Drop the time-of-day component, converting aware datetimes first."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(REFERENCE_ZONE)
        return value.date()
    return value


def parse_date(raw: str | date) -> date:
    """Parse a stored ``YYYY-MM-DD`` value, tolerating a trailing time component."""
    if isinstance(raw, date):
        return normalize_date(raw)
    text = raw.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError as exc:
        raise ValueError(f"Invalid publication date '{raw}'.") from exc


def format_date(value: date) -> str:
    """Render a publication date as ``YYYY-MM-DD``."""
    return value.isoformat()
