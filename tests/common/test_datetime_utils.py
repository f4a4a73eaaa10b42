from __future__ import annotations

from datetime import datetime

from src.campus_events.campus_events.common.datetime_utils import now_utc, parse_iso_datetime


def test_now_utc_is_naive_whole_seconds():
    now = now_utc()

    assert now.tzinfo is None
    assert now.microsecond == 0


def test_parse_iso_datetime_drops_fractional_seconds():
    assert parse_iso_datetime("2026-04-01T10:00:00.750Z") == datetime(2026, 4, 1, 10, 0, 0)
    assert parse_iso_datetime("2026-04-01T15:30:00+05:30") == datetime(2026, 4, 1, 10, 0, 0)
