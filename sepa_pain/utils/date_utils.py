"""Date manipulation utilities"""

from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[date, datetime, str]


def parse_date(value: DateLike) -> date:
    """Resolve a date, datetime or ISO-8601 string to a calendar date"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        # Accepts both "2014-02-01" and "2014-02-01T08:00:00"
        return datetime.fromisoformat(value).date()
    raise TypeError(f"Cannot interpret {value!r} as a date")


def to_iso_date(value: DateLike) -> str:
    """Format as YYYY-MM-DD"""
    return parse_date(value).isoformat()


def to_iso_datetime(value: datetime) -> str:
    """Format as ISO-8601 date-time with second precision"""
    return value.isoformat(timespec="seconds")


def to_iso_date_or_none(value: DateLike) -> Optional[str]:
    """Format as YYYY-MM-DD, or None when the value is missing or not a date"""
    try:
        return to_iso_date(value)
    except (TypeError, ValueError):
        return None
