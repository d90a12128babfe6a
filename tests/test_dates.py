from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from microblog.core.dates import format_date, normalize_date, parse_date


def test_normalize_naive_datetime_keeps_calendar_day() -> None:
    assert normalize_date(datetime(2024, 2, 29, 23, 59)) == date(2024, 2, 29)


def test_normalize_aware_datetime_uses_utc() -> None:
    tokyo_morning = datetime(2024, 3, 1, 8, 0, tzinfo=timezone(timedelta(hours=9)))

    assert normalize_date(tokyo_morning) == date(2024, 2, 29)


def test_parse_date_accepts_stored_forms() -> None:
    assert parse_date("2024-01-01") == date(2024, 1, 1)
    assert parse_date("2024-01-01 10:20:30") == date(2024, 1, 1)
    assert parse_date(date(2024, 1, 1)) == date(2024, 1, 1)


def test_parse_date_rejects_garbage() -> None:
    with pytest.raises(ValueError, match="Invalid publication date"):
        parse_date("soon")


def test_format_date_is_iso() -> None:
    assert format_date(date(2024, 1, 5)) == "2024-01-05"
