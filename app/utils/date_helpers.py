# app/utils/date_helpers.py
from datetime import date, datetime, timedelta, timezone


def to_utc(value: date | datetime) -> datetime:
    """
    Normalize a date or datetime to an aware UTC datetime.
    Plain dates are anchored at UTC midnight; naive datetimes are assumed to be UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def to_utc_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return to_utc(value).date()
    return value


def count_nights(start: date | datetime, end: date | datetime) -> int:
    """Whole days between start and end, rounded up. Any partial day counts as a night."""
    delta = to_utc(end) - to_utc(start)
    nights = delta.days
    if delta.seconds or delta.microseconds:
        nights += 1
    return nights


def night_dates(start: date | datetime, nights: int) -> list[date]:
    first = to_utc(start).date()
    return [first + timedelta(days=i) for i in range(nights)]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
