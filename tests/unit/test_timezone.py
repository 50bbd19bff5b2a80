"""
Unit tests for Eastern timezone helpers.
"""

from datetime import date, datetime, time

import pytz

from brokerage.core.timezone import (
    EASTERN_TZ,
    end_of_day_eastern,
    parse_date,
    to_eastern,
    to_storage,
)


class TestTimezoneHelpers:
    """Tests for timezone conversion helpers."""

    def test_naive_datetime_assumed_eastern(self):
        """
        GIVEN a naive datetime
        WHEN I convert it to Eastern
        THEN the wall-clock time is kept
        """
        result = to_eastern(datetime(2024, 6, 14, 10, 0))

        assert result.hour == 10
        assert result.tzinfo is not None

    def test_to_storage_is_naive_eastern(self):
        """
        GIVEN a UTC datetime
        WHEN I convert it for storage
        THEN it becomes a naive Eastern wall-clock time
        """
        utc = pytz.utc.localize(datetime(2024, 6, 14, 14, 0))

        stored = to_storage(utc)

        assert stored.tzinfo is None
        assert stored == datetime(2024, 6, 14, 10, 0)

    def test_end_of_day(self):
        """
        GIVEN a market date
        WHEN I ask for its end of day
        THEN the last microsecond of that Eastern day is returned
        """
        eod = end_of_day_eastern(date(2024, 6, 14))

        assert eod.date() == date(2024, 6, 14)
        assert eod.time() == time.max
        assert eod.tzinfo.zone == EASTERN_TZ.zone

    def test_parse_date_formats(self):
        """
        GIVEN dates in ISO and US formats
        WHEN I parse them
        THEN both resolve to the same date
        """
        assert parse_date("2024-06-14") == date(2024, 6, 14)
        assert parse_date("06/14/2024") == date(2024, 6, 14)
