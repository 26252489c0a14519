"""Tests for UTC timestamp helpers."""

from datetime import UTC, datetime, timedelta, timezone

from esg_risk_radar.core.timeutil import (
    add_one_year,
    as_utc,
    month_periods,
    parse_timestamp,
    resolve_now,
    to_iso,
)


def test_as_utc_reads_naive_values_as_utc() -> None:
    assert as_utc(datetime(2026, 3, 15, 12, 0)) == datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


def test_as_utc_converts_other_offsets() -> None:
    paris = timezone(timedelta(hours=1))
    converted = as_utc(datetime(2026, 3, 15, 13, 0, tzinfo=paris))
    assert converted.tzinfo is UTC
    assert converted.hour == 12


def test_to_iso_does_not_apply_local_time_to_naive_values() -> None:
    assert to_iso(datetime(2026, 3, 15, 12, 0)) == "2026-03-15T12:00:00+00:00"


def test_resolve_now_normalises_caller_time() -> None:
    resolved = resolve_now(datetime(2026, 3, 15, 12, 0))
    assert resolved == datetime(2026, 3, 15, 12, 0, tzinfo=UTC)
    assert resolve_now().tzinfo is UTC


def test_parse_timestamp_accepts_dates_and_naive_datetimes() -> None:
    assert parse_timestamp("2024-12-30") == datetime(2024, 12, 30, tzinfo=UTC)
    assert parse_timestamp("2026-03-15T11:00:00") == datetime(2026, 3, 15, 11, 0, tzinfo=UTC)


def test_add_one_year_rolls_leap_day_to_march() -> None:
    assert add_one_year(datetime(2028, 2, 29, tzinfo=UTC)) == datetime(2029, 3, 1, tzinfo=UTC)


def test_month_periods_cross_year_boundary() -> None:
    assert month_periods(datetime(2026, 2, 1, tzinfo=UTC), 3) == ["2025-12", "2026-01", "2026-02"]
