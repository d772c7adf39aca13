"""Tests for UTC datetime helpers."""

from datetime import UTC, datetime, timedelta, timezone

from adms.shared.utils.datetime import (
    age_in_days,
    business_days_between,
    ensure_utc,
    in_hour_window,
    is_top_of_hour,
    is_unset,
    is_weekend,
)


def test_ensure_utc_attaches_and_converts() -> None:
    assert ensure_utc(None) is None
    assert ensure_utc(datetime(2026, 1, 1, 8)).tzinfo is UTC
    shifted = ensure_utc(datetime(2026, 1, 1, 8, tzinfo=timezone(timedelta(hours=3))))
    assert shifted == datetime(2026, 1, 1, 5, tzinfo=UTC)


def test_is_unset() -> None:
    assert is_unset(None)
    assert is_unset(datetime.min)
    assert is_unset(datetime.min.replace(tzinfo=UTC))
    assert not is_unset(datetime(2026, 1, 1))


def test_age_in_days() -> None:
    now = datetime(2026, 1, 11, tzinfo=UTC)
    assert age_in_days(datetime(2026, 1, 1, tzinfo=UTC), now) == 10
    assert age_in_days(now + timedelta(days=1), now) == -1


def test_business_days_between_skips_weekends() -> None:
    monday = datetime(2026, 3, 2, tzinfo=UTC)
    assert business_days_between(monday, monday) == 1
    assert business_days_between(monday, monday + timedelta(days=6)) == 5
    assert business_days_between(monday, monday + timedelta(days=13)) == 10
    assert business_days_between(monday + timedelta(days=5), monday + timedelta(days=6)) == 0
    assert business_days_between(monday + timedelta(days=1), monday) == 0


def test_is_top_of_hour() -> None:
    assert is_top_of_hour(datetime(2026, 1, 1, 9, 0, 0))
    assert not is_top_of_hour(datetime(2026, 1, 1, 9, 0, 1))
    assert not is_top_of_hour(datetime(2026, 1, 1, 9, 0, 0, 500))


def test_is_top_of_hour_uses_utc() -> None:
    india = timezone(timedelta(hours=5, minutes=30))
    assert is_top_of_hour(datetime(2026, 1, 1, 9, 30, tzinfo=india))
    assert not is_top_of_hour(datetime(2026, 1, 1, 10, 0, tzinfo=india))


def test_is_weekend() -> None:
    assert is_weekend(datetime(2026, 3, 7, 12, tzinfo=UTC))
    assert is_weekend(datetime(2026, 3, 8, 23, 59))
    assert not is_weekend(datetime(2026, 3, 9, 0, 1, tzinfo=UTC))
    assert not is_weekend(datetime(2026, 3, 8, 23, 30, tzinfo=timezone(timedelta(hours=-2))))


def test_in_hour_window() -> None:
    assert in_hour_window(datetime(2026, 1, 1, 2, 30), 2, 4)
    assert not in_hour_window(datetime(2026, 1, 1, 4, 0), 2, 4)
    assert in_hour_window(datetime(2026, 1, 1, 23, 15), 22, 1)
    assert in_hour_window(datetime(2026, 1, 1, 0, 15), 22, 1)
    assert not in_hour_window(datetime(2026, 1, 1, 3, 0), 3, 3)
