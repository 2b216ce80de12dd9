"""Date manipulation utilities"""

from datetime import date, datetime, timedelta, timezone
from typing import Union

SATURDAY = 5
SUNDAY = 6


def utc_date(value: Union[date, datetime]) -> date:
    """
    Calendar date of a timestamp in UTC.

    Aware datetimes are converted to UTC first. Naive datetimes are taken
    to already be UTC, which is how the database stores them.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def is_business_day(value: Union[date, datetime]) -> bool:
    """Monday through Friday (no holiday calendar)"""
    return utc_date(value).weekday() < SATURDAY


def next_business_day(value: Union[date, datetime]) -> date:
    """
    Push weekend dates forward to the following Monday.

    Saturday -> +2 days, Sunday -> +1 day, weekdays unchanged.
    """
    day = utc_date(value)
    if is_business_day(day):
        return day
    if day.weekday() == SATURDAY:
        return day + timedelta(days=2)
    return day + timedelta(days=1)


def closing_deadline(created_at: Union[date, datetime], age_days: int = 7) -> date:
    """First calendar date on which an auction opened at created_at may be closed"""
    return utc_date(created_at) + timedelta(days=age_days)
