"""Unit tests for timestamp utilities."""

from datetime import datetime, timedelta, timezone

from hostel_picker.utils.timestamps import format_timestamp_for_log, utc_now


class TestUtcNow:
    """Tests for utc_now function."""

    def test_utc_now_returns_utc_datetime(self):
        now = utc_now()
        assert now.tzinfo == timezone.utc

    def test_utc_now_is_recent(self):
        before = datetime.now(timezone.utc)
        now = utc_now()
        after = datetime.now(timezone.utc)

        assert before <= now <= after


class TestFormatTimestampForLog:
    """Tests for format_timestamp_for_log function."""

    def test_millisecond_precision(self):
        dt = datetime(2025, 11, 4, 10, 30, 0, 123456, tzinfo=timezone.utc)
        assert format_timestamp_for_log(dt) == "2025-11-04T10:30:00.123Z"

    def test_naive_datetime_treated_as_utc(self):
        dt = datetime(2025, 11, 4, 10, 30, 0)
        assert format_timestamp_for_log(dt) == "2025-11-04T10:30:00.000Z"

    def test_converts_other_timezones(self):
        plus_two = timezone(timedelta(hours=2))
        dt = datetime(2025, 11, 4, 12, 30, 0, tzinfo=plus_two)
        assert format_timestamp_for_log(dt) == "2025-11-04T10:30:00.000Z"
