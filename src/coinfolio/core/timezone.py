"""Timezone utilities. All portfolio timestamps are kept in UTC."""

from datetime import datetime

import pytz
from dateutil import parser as date_parser

UTC = pytz.utc


def now_utc() -> datetime:
    """Return current time in UTC."""
    return datetime.now(UTC)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC."""
    if dt.tzinfo is None:
        # Assume naive datetime is already UTC
        return UTC.localize(dt)
    return dt.astimezone(UTC)


def parse_datetime_utc(value: str) -> datetime:
    """
    Parse a datetime string and return it in UTC.

    If no timezone is provided in the string, assumes UTC.
    """
    return to_utc(date_parser.parse(value))
