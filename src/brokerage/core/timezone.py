"""Timezone utilities for US/Eastern market time."""

from datetime import date, datetime, time

import pytz
from dateutil import parser as date_parser

EASTERN_TZ = pytz.timezone("US/Eastern")


def now_eastern() -> datetime:
    """Return current time in US/Eastern timezone."""
    return datetime.now(EASTERN_TZ)


def today_eastern() -> date:
    """Return the current market date."""
    return now_eastern().date()


def to_eastern(dt: datetime) -> datetime:
    """Convert a datetime to US/Eastern timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already Eastern
        return EASTERN_TZ.localize(dt)
    return dt.astimezone(EASTERN_TZ)


def end_of_day_eastern(day: date) -> datetime:
    """Return the last instant of a market date in US/Eastern."""
    return EASTERN_TZ.localize(datetime.combine(day, time.max))


def parse_date(value: str) -> date:
    """Parse a date string (any format dateutil understands)."""
    return date_parser.parse(value).date()


def to_storage(dt: datetime) -> datetime:
    """Naive Eastern datetime for columns that cannot hold a timezone."""
    return to_eastern(dt).replace(tzinfo=None)
